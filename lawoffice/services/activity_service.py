from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional

from sqlalchemy.orm import Session

from lawoffice.db.models import Activity
from lawoffice.repositories.activity_repo import create_activity, list_activities, list_recent_activities

logger = logging.getLogger(__name__)

ACTIONS = ("create", "update", "delete")


def log_activity(
    db: Session,
    *,
    user_id: str,
    action: str,
    entity_type: str,
    entity_id: Optional[Any],
    description: str,
    metadata: Optional[Dict[str, Any]] = None,
) -> Optional[Activity]:
    """Append one row to the activity log.

    Best-effort side effect: it runs after the primary mutation has been
    committed, in its own commit. Any failure is logged and swallowed and
    the caller gets None; the mutation it describes stands regardless.
    """
    try:
        ev = create_activity(
            db,
            user_id=user_id,
            action=action,
            entity_type=entity_type,
            entity_id=entity_id,
            description=description,
            metadata=metadata,
        )
        db.commit()
        return ev
    except Exception:
        db.rollback()
        logger.warning(
            "Activity log write failed (%s %s %s)", action, entity_type, entity_id, exc_info=True
        )
        return None


def get_recent_activities(db: Session, limit: int = 5) -> List[Activity]:
    try:
        return list_recent_activities(db, limit=limit)
    except Exception:
        db.rollback()
        logger.exception("Error fetching recent activities")
        return []


def get_activities_page(db: Session, qp: Mapping[str, Any]) -> dict[str, Any]:
    user_id = (qp.get("user_id") or "").strip()
    action = (qp.get("action") or "").strip()
    entity_type = (qp.get("entity_type") or "").strip()
    entity_id = (qp.get("entity_id") or "").strip()

    rows = list_activities(
        db,
        user_id=user_id or None,
        action=action or None,
        entity_type=entity_type or None,
        entity_id=entity_id or None,
    )

    return {
        "rows": rows,
        "filters": {"user_id": user_id, "action": action, "entity_type": entity_type, "entity_id": entity_id},
    }
