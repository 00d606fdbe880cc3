from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import PendingRegistration


class RegistrationRepository(Protocol):
    def get(self, registration_id: int) -> Optional[PendingRegistration]:
        raise NotImplementedError

    def list(self) -> Sequence[PendingRegistration]:
        raise NotImplementedError

    def put(self, registration: PendingRegistration) -> PendingRegistration:
        raise NotImplementedError

    def delete(self, registration_id: int) -> bool:
        raise NotImplementedError

    def record_approved(self, registration_id: int) -> None:
        raise NotImplementedError

    def record_rejected(self, registration_id: int) -> None:
        raise NotImplementedError

    def approved_ids(self) -> Sequence[int]:
        raise NotImplementedError

    def rejected_ids(self) -> Sequence[int]:
        raise NotImplementedError
