from __future__ import annotations

"""Seed demo data into the configured database.

Usage:
  python seed_demo.py
  python seed_demo.py --today 2025-03-01
"""

import argparse
from datetime import date

from lawoffice.api.deps import get_db
from lawoffice.core.logging import configure_logging
from lawoffice.db.init_db import init_db
from lawoffice.tools.seed_demo_data import seed_demo_data


def main() -> None:
    p = argparse.ArgumentParser()
    p.add_argument("--today", type=date.fromisoformat, default=None, help="reference date (YYYY-MM-DD)")
    p.add_argument("--log-level", default=None)
    args = p.parse_args()

    configure_logging(args.log_level)
    init_db()
    db = next(get_db())
    try:
        res = seed_demo_data(db, today=args.today)
        print(f"Seeded clients={len(res.clients)} cases={len(res.cases)} sessions={res.sessions} events={res.events}")
    finally:
        db.close()


if __name__ == "__main__":
    main()
