from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Submission


class SubmissionRepository(Protocol):
    def get(self, submission_id: int) -> Optional[Submission]:
        raise NotImplementedError

    def list(self) -> Sequence[Submission]:
        raise NotImplementedError

    def put(self, submission: Submission) -> Submission:
        raise NotImplementedError

    def delete(self, submission_id: int) -> bool:
        raise NotImplementedError


class SeenSubmissionRepository(Protocol):
    def all(self) -> set[str]:
        raise NotImplementedError

    def add(self, submission_id: int) -> bool:
        raise NotImplementedError


class ApprovalDataRepository(Protocol):
    """Employee acknowledgements keyed by employee email, then submission id."""

    def get(self, email: str, submission_id: int) -> Optional[dict]:
        raise NotImplementedError

    def find(self, submission_id: int) -> Optional[dict]:
        raise NotImplementedError

    def put(self, email: str, submission_id: int, data: dict) -> None:
        raise NotImplementedError
