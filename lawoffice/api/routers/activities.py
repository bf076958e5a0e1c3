from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from lawoffice.api.deps import get_db
from lawoffice.schemas.activity import ActivityOut
from lawoffice.services.activity_service import get_activities_page, get_recent_activities

router = APIRouter(prefix="/activities", tags=["activities"])


@router.get("", response_model=list[ActivityOut])
def api_list_activities(
    user_id: Optional[str] = None,
    action: Optional[str] = None,
    entity_type: Optional[str] = None,
    entity_id: Optional[str] = None,
    db: Session = Depends(get_db),
):
    qp = {"user_id": user_id, "action": action, "entity_type": entity_type, "entity_id": entity_id}
    return get_activities_page(db, qp)["rows"]


@router.get("/recent", response_model=list[ActivityOut])
def api_recent_activities(limit: int = 5, db: Session = Depends(get_db)):
    return get_recent_activities(db, limit=min(limit, 100))
