from __future__ import annotations

from typing import Optional, Sequence

from ..core.constants import StorageKeys
from ..storage.base import LocalStorage
from ..storage.collection import JsonCollection, JsonIdSet
from .model import PendingRegistration
from .repository import RegistrationRepository


class StorageRegistrationRepository(RegistrationRepository):
    """pending_registrations plus the approved/rejected id lists."""

    def __init__(self, storage: LocalStorage):
        self._rows = JsonCollection(storage, StorageKeys.PENDING_REGISTRATIONS)
        self._approved = JsonIdSet(storage, StorageKeys.APPROVED_REGISTRATIONS)
        self._rejected = JsonIdSet(storage, StorageKeys.REJECTED_REGISTRATIONS)

    def get(self, registration_id: int) -> Optional[PendingRegistration]:
        row = self._rows.get(registration_id)
        return PendingRegistration.from_dict(row) if row else None

    def list(self) -> Sequence[PendingRegistration]:
        return [PendingRegistration.from_dict(r) for r in self._rows.identified()]

    def put(self, registration: PendingRegistration) -> PendingRegistration:
        self._rows.put(registration.to_dict())
        return registration

    def delete(self, registration_id: int) -> bool:
        return self._rows.delete(registration_id)

    def record_approved(self, registration_id: int) -> None:
        self._approved.add(registration_id)

    def record_rejected(self, registration_id: int) -> None:
        self._rejected.add(registration_id)

    def approved_ids(self) -> Sequence[int]:
        return self._approved.all()

    def rejected_ids(self) -> Sequence[int]:
        return self._rejected.all()
