from __future__ import annotations

from datetime import date, timedelta
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session, joinedload

from lawoffice.db.models import Case, CourtSession


def get_session(db: Session, session_id: str) -> Optional[CourtSession]:
    return db.query(CourtSession).filter(CourtSession.id == session_id).first()


def list_case_sessions(db: Session, case_id: str) -> List[CourtSession]:
    return (
        db.query(CourtSession)
        .filter(CourtSession.case_id == case_id)
        .order_by(CourtSession.session_date.asc(), CourtSession.session_time.asc())
        .all()
    )


def earliest_session_from(db: Session, case_id: str, start: date) -> Optional[CourtSession]:
    return (
        db.query(CourtSession)
        .filter(CourtSession.case_id == case_id, CourtSession.session_date >= start)
        .order_by(CourtSession.session_date.asc())
        .first()
    )


def list_sessions_between(db: Session, start: date, end: date, limit: Optional[int] = None) -> List[CourtSession]:
    """Sessions with start <= session_date < end, with their case loaded."""
    q = (
        db.query(CourtSession)
        .options(joinedload(CourtSession.case).joinedload(Case.court))
        .filter(CourtSession.session_date >= start, CourtSession.session_date < end)
        .order_by(CourtSession.session_date.asc(), CourtSession.session_time.asc())
    )
    if limit:
        q = q.limit(limit)
    return q.all()


def list_upcoming_sessions(db: Session, today: date, limit: int = 5) -> List[CourtSession]:
    return list_sessions_between(db, today, date.max, limit=limit)


def list_sessions_on(db: Session, day: date) -> List[CourtSession]:
    return list_sessions_between(db, day, day + timedelta(days=1))


def create_session(db: Session, fields: Dict[str, Any]) -> CourtSession:
    s = CourtSession(**fields)
    db.add(s)
    db.flush()
    return s


def update_session(db: Session, session: CourtSession, fields: Dict[str, Any]) -> CourtSession:
    for key, value in fields.items():
        setattr(session, key, value)
    db.flush()
    return session


def delete_session(db: Session, session: CourtSession) -> None:
    db.delete(session)
    db.flush()
