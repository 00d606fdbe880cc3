from __future__ import annotations

import re
from dataclasses import fields
from enum import Enum
from typing import Any, Mapping, Type, TypeVar

T = TypeVar("T")


def _storage_name(field_name: str) -> str:
    head, *rest = field_name.split("_")
    return head + "".join(part.title() for part in rest)


def record_from_row(cls: Type[T], row: Mapping[str, Any], **overrides: Any) -> T:
    """Build a dataclass from a camelCase storage row.

    Keys the dataclass does not declare are kept in its `extra` dict so they
    survive a read/modify/write cycle.
    """
    known = {f.name: _storage_name(f.name) for f in fields(cls) if f.name != "extra"}
    kwargs: dict[str, Any] = {}
    for attr, key in known.items():
        if key in row:
            kwargs[attr] = row[key]
    kwargs.update(overrides)
    extra = {k: v for k, v in row.items() if k not in known.values()}
    return cls(**kwargs, extra=extra)


def record_to_row(record: Any) -> dict:
    row = dict(getattr(record, "extra", None) or {})
    for f in fields(record):
        if f.name == "extra":
            continue
        value = getattr(record, f.name)
        if isinstance(value, Enum):
            value = value.value
        row[_storage_name(f.name)] = value
    return row


def attribute_name(storage_key: str) -> str:
    """camelCase storage key -> snake_case attribute name."""
    return re.sub(r"(?<!^)(?=[A-Z])", "_", storage_key).lower()


def attribute_updates(row: Mapping[str, Any]) -> dict[str, Any]:
    return {attribute_name(k): v for k, v in row.items()}
