from __future__ import annotations

import logging

from ..core.constants import StorageKeys
from ..core.enums import Role
from ..storage.base import LocalStorage, read_json, write_json
from .loader import FixtureLoader

logger = logging.getLogger(__name__)

_EMPLOYEE_FIELDS = (
    "name",
    "email",
    "position",
    "department",
    "branch",
    "role",
    "hireDate",
    "avatar",
    "bio",
    "contact",
    "updatedAt",
    "isActive",
    "signature",
    "username",
)


def employee_from_account(account: dict) -> dict:
    row = {"id": account.get("employeeId") or account.get("id")}
    for field in _EMPLOYEE_FIELDS:
        row[field] = account.get(field)
    return row


def seed_storage(storage: LocalStorage, loader: FixtureLoader, *, force: bool = False) -> list[str]:
    """Initialise storage keys from fixtures when they are absent or empty.

    Returns the keys that were written.
    """
    accounts = loader.accounts()
    initial = {
        StorageKeys.EMPLOYEES: [employee_from_account(a) for a in accounts if a.get("role") != Role.ADMIN.value],
        StorageKeys.SUBMISSIONS: loader.submissions(),
        StorageKeys.PENDING_REGISTRATIONS: loader.pending_registrations(),
        StorageKeys.PROFILES: [],
        StorageKeys.ACCOUNTS: accounts,
        StorageKeys.NOTIFICATIONS: [],
    }

    written: list[str] = []
    for key, data in initial.items():
        if not force and read_json(storage, key, []):
            continue
        write_json(storage, key, data)
        written.append(key)

    if written:
        logger.info("Seeded storage keys from fixtures: %s", ", ".join(written))
    return written


def reset_all_data(storage: LocalStorage, loader: FixtureLoader) -> None:
    for key in StorageKeys.seeded():
        storage.remove_item(key)
    seed_storage(storage, loader)


def force_reinitialize_accounts(storage: LocalStorage, loader: FixtureLoader) -> None:
    storage.remove_item(StorageKeys.ACCOUNTS)
    write_json(storage, StorageKeys.ACCOUNTS, loader.accounts())
