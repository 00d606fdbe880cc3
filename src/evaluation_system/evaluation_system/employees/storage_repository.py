from __future__ import annotations

from typing import Optional, Sequence

from ..core.constants import StorageKeys
from ..storage.base import LocalStorage
from ..storage.collection import JsonCollection, JsonIdSet, same_id
from .model import Account, Employee
from .repository import AccountRepository, EmployeeRepository


class StorageEmployeeRepository(EmployeeRepository):
    def __init__(self, storage: LocalStorage):
        self._rows = JsonCollection(storage, StorageKeys.EMPLOYEES)
        self._deleted = JsonIdSet(storage, StorageKeys.DELETED_EMPLOYEES)

    def get(self, employee_id: int) -> Optional[Employee]:
        row = self._rows.get(employee_id)
        return Employee.from_dict(row) if row else None

    def list(self) -> Sequence[Employee]:
        return [Employee.from_dict(r) for r in self._rows.identified()]

    def put(self, employee: Employee) -> Employee:
        self._rows.put(employee.to_dict())
        return employee

    def delete(self, employee_id: int) -> bool:
        return self._rows.delete(employee_id)

    def deleted_ids(self) -> Sequence[int]:
        return self._deleted.all()

    def mark_deleted(self, employee_id: int) -> bool:
        return self._deleted.add(int(employee_id))


class StorageAccountRepository(AccountRepository):
    def __init__(self, storage: LocalStorage):
        self._rows = JsonCollection(storage, StorageKeys.ACCOUNTS)

    def get(self, account_id: int) -> Optional[Account]:
        row = self._rows.get(account_id)
        return Account.from_dict(row) if row else None

    def get_by_email(self, email: str) -> Optional[Account]:
        needle = (email or "").strip().lower()
        if not needle:
            return None
        row = self._rows.find(
            lambda r: str(r.get("email") or "").lower() == needle or str(r.get("username") or "").lower() == needle
        )
        return Account.from_dict(row) if row else None

    def get_for_employee(self, employee_id: int) -> Optional[Account]:
        row = self._rows.find(lambda r: same_id(r.get("employeeId"), employee_id))
        if not row:
            row = self._rows.find(lambda r: not r.get("employeeId") and same_id(r.get("id"), employee_id))
        return Account.from_dict(row) if row else None

    def list(self) -> Sequence[Account]:
        return [Account.from_dict(r) for r in self._rows.identified()]

    def put(self, account: Account) -> Account:
        self._rows.put(account.to_dict())
        return account

    def delete(self, account_id: int) -> bool:
        return self._rows.delete(account_id)
