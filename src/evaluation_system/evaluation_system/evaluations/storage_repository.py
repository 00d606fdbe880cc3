from __future__ import annotations

from typing import Optional, Sequence

from ..core.constants import StorageKeys
from ..storage.base import LocalStorage, read_json, write_json
from ..storage.collection import JsonCollection, JsonIdSet
from .model import Submission
from .repository import ApprovalDataRepository, SeenSubmissionRepository, SubmissionRepository


class StorageSubmissionRepository(SubmissionRepository):
    def __init__(self, storage: LocalStorage):
        self._rows = JsonCollection(storage, StorageKeys.SUBMISSIONS)

    def get(self, submission_id: int) -> Optional[Submission]:
        row = self._rows.get(submission_id)
        return Submission.from_dict(row) if row else None

    def list(self) -> Sequence[Submission]:
        return [Submission.from_dict(r) for r in self._rows.identified()]

    def put(self, submission: Submission) -> Submission:
        self._rows.put(submission.to_dict())
        return submission

    def delete(self, submission_id: int) -> bool:
        return self._rows.delete(submission_id)


class StorageSeenSubmissionRepository(SeenSubmissionRepository):
    def __init__(self, storage: LocalStorage):
        self._ids = JsonIdSet(storage, StorageKeys.SEEN_SUBMISSIONS)

    def all(self) -> set[str]:
        return {str(i) for i in self._ids.all()}

    def add(self, submission_id: int) -> bool:
        return self._ids.add(submission_id)


class StorageApprovalDataRepository(ApprovalDataRepository):
    """One `approvalData_<email>` object per employee."""

    def __init__(self, storage: LocalStorage):
        self._storage = storage

    def _load(self, key: str) -> dict:
        return read_json(self._storage, key, {})

    def get(self, email: str, submission_id: int) -> Optional[dict]:
        if not email:
            return None
        return self._load(StorageKeys.approval_data(email)).get(str(submission_id))

    def find(self, submission_id: int) -> Optional[dict]:
        for key in self._storage.keys():
            if key.startswith(StorageKeys.APPROVAL_DATA_PREFIX):
                found = self._load(key).get(str(submission_id))
                if found:
                    return found
        return None

    def put(self, email: str, submission_id: int, data: dict) -> None:
        key = StorageKeys.approval_data(email)
        approvals = self._load(key)
        approvals[str(submission_id)] = data
        write_json(self._storage, key, approvals)
