from __future__ import annotations

from typing import List

from sqlalchemy.orm import Session

from lawoffice.db.models import Court


def list_courts(db: Session) -> List[Court]:
    return db.query(Court).order_by(Court.name.asc()).all()
