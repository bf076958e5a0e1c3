from __future__ import annotations

from typing import Any, List, Mapping, Optional

from sqlalchemy.orm import Session

from lawoffice.core.auth import CurrentUser
from lawoffice.core.messages import msg
from lawoffice.db.models import CaseEvent
from lawoffice.repositories import case_event_repo, case_repo
from lawoffice.schemas.case_event import CaseEventForm, CaseEventOut
from lawoffice.schemas.result import ActionResult

from .actions import action, dump, invalid, require
from .activity_service import log_activity


def get_case_events(db: Session, case_id: str) -> List[CaseEvent]:
    """Timeline of a case, newest first."""
    return case_event_repo.list_case_events(db, case_id)


def get_case_event(db: Session, event_id: str) -> Optional[CaseEvent]:
    return case_event_repo.get_event(db, event_id)


@action("auth.case.update")
def add_case_event(db: Session, user: CurrentUser, form: Mapping[str, Any]) -> ActionResult:
    data, errors = CaseEventForm.parse(form)
    if errors:
        raise invalid(errors)
    require(case_repo.get_case(db, data.case_id), "case.not_found")

    e = case_event_repo.create_event(db, {"case_id": data.case_id, **data.to_fields()})
    db.commit()
    payload = dump(CaseEventOut, e)

    log_activity(
        db,
        user_id=user.id,
        action="create",
        entity_type="case_event",
        entity_id=payload["id"],
        description=msg("event.created", title=e.title),
        metadata={"case_id": e.case_id, "event_type": e.event_type, "is_decision": e.is_decision},
    )
    return ActionResult.ok(
        id=payload["id"],
        data=payload,
        message=msg("event.created", title=e.title),
        revalidate=[f"/cases/{e.case_id}"],
    )


@action("auth.case.update")
def update_case_event(db: Session, user: CurrentUser, event_id: str, form: Mapping[str, Any]) -> ActionResult:
    if not event_id:
        raise invalid({"event_id": [msg("event.id_required")]})
    data, errors = CaseEventForm.parse(form)
    if errors:
        raise invalid(errors)

    e = require(case_event_repo.get_event(db, event_id), "event.not_found")
    case_event_repo.update_event(db, e, data.to_fields())
    db.commit()
    payload = dump(CaseEventOut, e)

    log_activity(
        db,
        user_id=user.id,
        action="update",
        entity_type="case_event",
        entity_id=event_id,
        description=msg("event.updated", title=e.title),
        metadata={"case_id": e.case_id},
    )
    return ActionResult.ok(
        id=event_id, data=payload, message=msg("event.updated", title=e.title), revalidate=[f"/cases/{e.case_id}"]
    )


@action("auth.case.update")
def delete_case_event(db: Session, user: CurrentUser, event_id: str) -> ActionResult:
    if not event_id:
        raise invalid({"event_id": [msg("event.id_required")]})

    e = require(case_event_repo.get_event(db, event_id), "event.not_found")
    title, case_id = e.title, e.case_id
    case_event_repo.delete_event(db, e)
    db.commit()

    log_activity(
        db,
        user_id=user.id,
        action="delete",
        entity_type="case_event",
        entity_id=event_id,
        description=msg("event.deleted", title=title),
        metadata={"case_id": case_id},
    )
    return ActionResult.ok(id=event_id, message=msg("event.deleted", title=title), revalidate=[f"/cases/{case_id}"])
