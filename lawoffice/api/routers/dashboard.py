from __future__ import annotations

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from lawoffice.api.deps import get_db
from lawoffice.schemas.activity import ActivityOut
from lawoffice.schemas.court_session import CourtSessionOut
from lawoffice.services.dashboard_service import get_calendar_entries, get_overview_metrics, month_bounds

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("")
def get_dashboard(db: Session = Depends(get_db)):
    m = get_overview_metrics(db)
    return {
        "total_cases": m["total_cases"],
        "cases_by_status": m["cases_by_status"],
        "total_clients": m["total_clients"],
        "upcoming_sessions": [CourtSessionOut.model_validate(s).model_dump(mode="json") for s in m["upcoming_sessions"]],
        "today_sessions": [CourtSessionOut.model_validate(s).model_dump(mode="json") for s in m["today_sessions"]],
        "recent_activities": [ActivityOut.model_validate(a).model_dump(mode="json") for a in m["recent_activities"]],
    }


@router.get("/calendar")
def get_calendar(year: Optional[int] = None, month: Optional[int] = None, db: Session = Depends(get_db)):
    today = date.today()
    start, end = month_bounds(year or today.year, month or today.month)
    return {"start": start.isoformat(), "end": end.isoformat(), "entries": get_calendar_entries(db, start, end)}
