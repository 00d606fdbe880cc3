from __future__ import annotations

from typing import Optional


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class NotFoundError(DomainError):
    """Raised when a referenced record does not exist."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class PasswordConfirmationError(DomainError):
    """Raised when a destructive action is not re-confirmed with the right password."""


class AccountSuspendedError(AuthenticationError):
    """Raised on login for an account that is currently suspended."""

    def __init__(self, *, reason: str, suspended_at: str, suspended_by: str, account_name: Optional[str]):
        super().__init__("Account suspended")
        self.reason = reason
        self.suspended_at = suspended_at
        self.suspended_by = suspended_by
        self.account_name = account_name

    def to_dict(self) -> dict:
        return {
            "reason": self.reason,
            "suspendedAt": self.suspended_at,
            "suspendedBy": self.suspended_by,
            "accountName": self.account_name,
        }
