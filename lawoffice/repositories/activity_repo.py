from __future__ import annotations

from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from lawoffice.db.models import Activity


def create_activity(
    db: Session,
    *,
    user_id: str,
    action: str,
    description: str,
    entity_type: Optional[str] = None,
    entity_id: Optional[str] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> Activity:
    ev = Activity(
        user_id=user_id,
        action_type=action,
        entity_type=entity_type,
        entity_id=str(entity_id) if entity_id is not None else None,
        description=description,
        details=metadata or {},
    )
    db.add(ev)
    db.flush()
    return ev


def list_recent_activities(db: Session, limit: int = 5) -> List[Activity]:
    return db.query(Activity).order_by(Activity.created_at.desc(), Activity.id.desc()).limit(limit).all()


def list_activities(
    db: Session,
    *,
    user_id: Optional[str] = None,
    action: Optional[str] = None,
    entity_type: Optional[str] = None,
    entity_id: Optional[str] = None,
    limit: int = 500,
) -> List[Activity]:
    q = db.query(Activity)
    if user_id:
        q = q.filter(Activity.user_id.ilike(f"%{user_id}%"))
    if action:
        q = q.filter(Activity.action_type == action)
    if entity_type:
        q = q.filter(Activity.entity_type == entity_type)
    if entity_id:
        q = q.filter(Activity.entity_id == entity_id)
    return q.order_by(Activity.created_at.desc(), Activity.id.desc()).limit(min(limit, 1000)).all()
