"""Fill the configured storage backend from the JSON fixtures.

Usage: python scripts/seed_db.py [--force] [--reset]
  --force  overwrite keys that already hold data
  --reset  remove every seeded key first (same as resetAllData)
"""

from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.evaluation_system.evaluation_system.container import build_storage
from src.evaluation_system.evaluation_system.fixtures.loader import FixtureLoader
from src.evaluation_system.evaluation_system.fixtures.seed import reset_all_data, seed_storage


def main(argv: list[str]) -> None:
    settings = importlib.import_module(get_settings_module())
    backend = getattr(settings, "STORAGE_BACKEND", "memory")
    if backend == "memory":
        raise SystemExit("STORAGE_BACKEND=memory does not persist; use json or mysql.")

    storage = build_storage(
        backend=backend,
        path=getattr(settings, "STORAGE_PATH", None),
        db_config=dict(getattr(settings, "DB_CONFIG", {})),
    )
    loader = FixtureLoader(getattr(settings, "FIXTURES_DIR", None))

    if "--reset" in argv:
        reset_all_data(storage, loader)
        print(f"OK: Reset storage ({backend}) from fixtures")
        return

    written = seed_storage(storage, loader, force="--force" in argv)
    print(f"OK: Seeded storage ({backend}) keys: {', '.join(written) or 'none (already populated)'}")


if __name__ == "__main__":
    main(sys.argv[1:])
