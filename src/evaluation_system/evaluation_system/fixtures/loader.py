from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Optional

logger = logging.getLogger(__name__)

DEFAULT_FIXTURES_DIR = Path(__file__).resolve().parent / "data"


class FixtureLoader:
    """Read-only JSON fixtures (accounts, departments, branch codes, ...).

    Missing or malformed files degrade to empty lists.
    """

    def __init__(self, base_dir: Optional[str | Path] = None):
        self._base_dir = Path(base_dir) if base_dir else DEFAULT_FIXTURES_DIR
        self._cache: dict[str, Any] = {}

    @property
    def base_dir(self) -> Path:
        return self._base_dir

    def _load(self, filename: str) -> Any:
        if filename in self._cache:
            return self._cache[filename]

        path = self._base_dir / filename
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            logger.warning("Fixture %s not found", path)
            data = None
        except ValueError:
            logger.exception("Fixture %s is not valid JSON", path)
            data = None

        self._cache[filename] = data
        return data

    def _load_list(self, filename: str) -> list:
        data = self._load(filename)
        if not isinstance(data, list):
            return []
        return [dict(item) if isinstance(item, dict) else item for item in data]

    def accounts(self) -> list[dict]:
        data = self._load("accounts.json")
        if isinstance(data, dict):
            data = data.get("accounts")
        if not isinstance(data, list):
            return []
        return [dict(a) for a in data if isinstance(a, dict)]

    def departments(self) -> list[dict]:
        return [
            {"id": str(d.get("id")), "name": d.get("name")}
            for d in self._load_list("departments.json")
            if isinstance(d, dict)
        ]

    def positions(self) -> list[dict]:
        return [{"id": p, "name": p} for p in self._load_list("positions.json") if isinstance(p, str)]

    def branch_codes(self) -> list[dict]:
        return [{"id": c, "name": c} for c in self._load_list("branch-code.json") if isinstance(c, str)]

    def branches(self) -> list[dict]:
        return [
            {"id": str(b.get("id")), "name": b.get("name")}
            for b in self._load_list("branches.json")
            if isinstance(b, dict)
        ]

    def submissions(self) -> list[dict]:
        return [s for s in self._load_list("submissions.json") if isinstance(s, dict)]

    def pending_registrations(self) -> list[dict]:
        return [r for r in self._load_list("pending-registrations.json") if isinstance(r, dict)]
