from __future__ import annotations

from datetime import date, timedelta
from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from lawoffice.db.models import Case
from lawoffice.repositories import case_event_repo, client_repo, court_session_repo

from .activity_service import get_recent_activities
from .case_service import CASE_STATUSES


def get_overview_metrics(db: Session, today: Optional[date] = None) -> dict:
    """Office KPIs for the home page."""
    today = today or date.today()

    by_status = {status: 0 for status in CASE_STATUSES}
    rows = db.query(Case.status, func.count(Case.id)).group_by(Case.status).all()
    for status, n in rows:
        by_status[status or "active"] = by_status.get(status or "active", 0) + int(n)

    return {
        "total_cases": sum(by_status.values()),
        "cases_by_status": by_status,
        "total_clients": client_repo.count_clients(db),
        "upcoming_sessions": court_session_repo.list_upcoming_sessions(db, today, limit=5),
        "today_sessions": court_session_repo.list_sessions_on(db, today),
        "recent_activities": get_recent_activities(db, limit=5),
    }


def get_calendar_entries(db: Session, start: date, end: date) -> list[dict]:
    """Sessions and case events dated in ``[start, end)``, in date order."""
    entries: list[dict] = []
    for s in court_session_repo.list_sessions_between(db, start, end):
        entries.append(
            {
                "kind": "session",
                "id": s.id,
                "case_id": s.case_id,
                "date": s.session_date.isoformat(),
                "time": s.session_time,
                "title": s.case.title if s.case is not None else "",
                "location": s.location,
            }
        )
    for e in case_event_repo.list_events_between(db, start, end):
        entries.append(
            {
                "kind": "decision" if e.is_decision else "event",
                "id": e.id,
                "case_id": e.case_id,
                "date": e.event_date.isoformat(),
                "time": None,
                "title": e.title,
                "location": None,
            }
        )
    entries.sort(key=lambda x: (x["date"], x["time"] or ""))
    return entries


def month_bounds(year: int, month: int) -> tuple[date, date]:
    start = date(year, month, 1)
    end = (start + timedelta(days=32)).replace(day=1)
    return start, end
