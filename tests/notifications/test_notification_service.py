from __future__ import annotations

import pytest

from src.evaluation_system.evaluation_system.core.enums import NotificationType
from src.evaluation_system.evaluation_system.core.exceptions import NotFoundError, ValidationError


def test_duplicates_are_collapsed(container, fixed_now):
    service = container.notification_service
    first = service.create(message="Review due", roles=["hr", "admin"], now=fixed_now)
    second = service.create(message="Review due", roles=["admin", "hr"], now=fixed_now)
    assert first.id == second.id
    assert len(service.list_for_role("hr")) == 1


def test_role_all_reaches_everyone(container, fixed_now):
    service = container.notification_service
    service.create(message="Maintenance tonight", roles=["all"], type="warning", now=fixed_now)
    service.create(message="HR only", roles=["hr"], now=fixed_now)

    assert [n.message for n in service.list_for_role("employee")] == ["Maintenance tonight"]
    assert len(service.list_for_role("hr")) == 2
    assert service.list_for_role("employee")[0].type == NotificationType.WARNING


def test_read_state(container, fixed_now):
    service = container.notification_service
    a = service.create(message="one", roles=["hr"], now=fixed_now)
    service.create(message="two", roles=["hr"], now=fixed_now)
    service.create(message="three", roles=["evaluator"], now=fixed_now)

    assert service.unread_count("hr") == 2
    assert service.mark_read(a.id).is_read
    assert service.unread_count("hr") == 1
    assert service.mark_all_read("hr") == 1
    assert service.unread_count("hr") == 0
    assert service.unread_count("evaluator") == 1


def test_delete_and_errors(container, fixed_now):
    service = container.notification_service
    n = service.create(message="bye", roles=["hr"], now=fixed_now)
    assert service.delete(n.id) is True
    assert service.delete(n.id) is False
    with pytest.raises(NotFoundError):
        service.mark_read(n.id)
    with pytest.raises(ValidationError):
        service.create(message="", roles=["hr"])
    with pytest.raises(ValidationError):
        service.create(message="x", roles=[])
    with pytest.raises(ValidationError):
        service.create(message="x", roles=["hr"], type="loud")
