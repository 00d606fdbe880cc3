from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Account, Employee


class EmployeeRepository(Protocol):
    """Repository interface for Employee.

    Note (DIP): services depend on this interface, not on a concrete storage.
    """

    def get(self, employee_id: int) -> Optional[Employee]:
        raise NotImplementedError

    def list(self) -> Sequence[Employee]:
        raise NotImplementedError

    def put(self, employee: Employee) -> Employee:
        raise NotImplementedError

    def delete(self, employee_id: int) -> bool:
        raise NotImplementedError

    # Soft delete markers (the deletedEmployees id list)
    def deleted_ids(self) -> Sequence[int]:
        raise NotImplementedError

    def mark_deleted(self, employee_id: int) -> bool:
        raise NotImplementedError


class AccountRepository(Protocol):
    def get(self, account_id: int) -> Optional[Account]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[Account]:
        raise NotImplementedError

    def get_for_employee(self, employee_id: int) -> Optional[Account]:
        raise NotImplementedError

    def list(self) -> Sequence[Account]:
        raise NotImplementedError

    def put(self, account: Account) -> Account:
        raise NotImplementedError

    def delete(self, account_id: int) -> bool:
        raise NotImplementedError
