"""Expire open shift swaps whose expiry has passed.

Meant to run from cron, e.g. every 15 minutes.
"""
from __future__ import annotations

import importlib
import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.salon_suite.salon_suite.common.datetime_utils import now_local
from src.salon_suite.salon_suite.container import build_container


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    logging.basicConfig(level=getattr(settings, "LOG_LEVEL", "INFO"), format="%(levelname)s %(name)s: %(message)s")

    container = build_container(db_config=dict(settings.DB_CONFIG))
    count = container.swap_service.expire_stale(now_local())
    print(f"OK: Expired {count} swap(s)")


if __name__ == "__main__":
    main()
