from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy import inspect, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from .base import Base

# Ensure ORM models are imported so Base.metadata is populated before create_all().
from . import models  # noqa: F401

logger = logging.getLogger(__name__)

DEFAULT_COURTS = [
    {"name": "ابتدائية", "court_type": "primary"},
    {"name": "تجارية", "court_type": "commercial"},
    {"name": "استئناف", "court_type": "appeal"},
    {"name": "عليا", "court_type": "supreme"},
]

# Columns added after the first release; older databases get them on startup.
# table -> [(column, DDL type + default)]
_LATE_COLUMNS: dict[str, list[tuple[str, str]]] = {
    "cases": [
        ("priority", "VARCHAR DEFAULT 'medium'"),
        ("fee_type", "VARCHAR"),
        ("next_session_date", "DATE"),
    ],
    "court_sessions": [
        ("session_time", "VARCHAR"),
        ("session_type", "VARCHAR DEFAULT 'regular'"),
    ],
    "invoices": [
        ("pdf_path", "VARCHAR"),
    ],
}


def _add_missing_columns(engine: Engine) -> None:
    insp = inspect(engine)
    existing_tables = set(insp.get_table_names())
    with engine.begin() as conn:
        for table, columns in _LATE_COLUMNS.items():
            if table not in existing_tables:
                continue
            present = {c["name"] for c in insp.get_columns(table)}
            for name, ddl in columns:
                if name in present:
                    continue
                logger.info("Adding missing column %s.%s", table, name)
                conn.execute(text(f"ALTER TABLE {table} ADD COLUMN {name} {ddl}"))


def seed_courts(db: Session, courts: Optional[list[dict]] = None) -> int:
    """Insert the default courts that are not present yet. Returns the number inserted."""
    existing = {name for (name,) in db.query(models.Court.name).all()}
    inserted = 0
    for c in courts or DEFAULT_COURTS:
        if c["name"] in existing:
            continue
        db.add(models.Court(name=c["name"], court_type=c.get("court_type"), location=c.get("location")))
        inserted += 1
    if inserted:
        db.commit()
        logger.info("Seeded %d court(s)", inserted)
    return inserted


def init_db(engine: Optional[Engine] = None) -> None:
    if engine is None:
        from lawoffice.core.database import engine as default_engine

        engine = default_engine

    Base.metadata.create_all(bind=engine)
    _add_missing_columns(engine)

    with Session(engine) as db:
        seed_courts(db)
