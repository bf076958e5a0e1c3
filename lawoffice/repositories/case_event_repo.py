from __future__ import annotations

from datetime import date
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from lawoffice.db.models import CaseEvent


def list_case_events(db: Session, case_id: str) -> List[CaseEvent]:
    return (
        db.query(CaseEvent)
        .filter(CaseEvent.case_id == case_id)
        .order_by(CaseEvent.event_date.desc(), CaseEvent.created_at.desc())
        .all()
    )


def list_events_between(db: Session, start: date, end: date) -> List[CaseEvent]:
    return (
        db.query(CaseEvent)
        .filter(CaseEvent.event_date >= start, CaseEvent.event_date < end)
        .order_by(CaseEvent.event_date.asc())
        .all()
    )


def get_event(db: Session, event_id: str) -> Optional[CaseEvent]:
    return db.query(CaseEvent).filter(CaseEvent.id == event_id).first()


def create_event(db: Session, fields: Dict[str, Any]) -> CaseEvent:
    e = CaseEvent(**fields)
    db.add(e)
    db.flush()
    return e


def update_event(db: Session, event: CaseEvent, fields: Dict[str, Any]) -> CaseEvent:
    for key, value in fields.items():
        setattr(event, key, value)
    db.flush()
    return event


def delete_event(db: Session, event: CaseEvent) -> None:
    db.delete(event)
    db.flush()
