from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Any, List, Mapping, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from lawoffice.core.auth import CurrentUser
from lawoffice.core.messages import msg
from lawoffice.db.models import CourtSession
from lawoffice.repositories import case_repo, court_session_repo
from lawoffice.schemas.court_session import CourtSessionForm, CourtSessionOut, validate_session_form
from lawoffice.schemas.result import ActionResult

from .actions import ActionError, action, dump, invalid, require
from .activity_service import log_activity

logger = logging.getLogger(__name__)


def _paths(case_id: str) -> list[str]:
    return [f"/cases/{case_id}", f"/cases/{case_id}/sessions", "/cases", "/"]


def update_next_session_date(db: Session, case_id: str, today: Optional[date] = None) -> Optional[date]:
    """Recompute ``Case.next_session_date`` from scratch.

    Takes the earliest session of the case dated today or later, or None
    when there is none. Errors are logged and leave the cached value as it
    was; the next session write recomputes it again.
    """
    start = today or date.today()
    try:
        c = case_repo.get_case(db, case_id)
        if c is None:
            return None
        first = court_session_repo.earliest_session_from(db, case_id, start)
        next_date = first.session_date if first is not None else None
        c.next_session_date = next_date
        c.updated_at = datetime.utcnow()
        db.commit()
        return next_date
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Error updating next session date for case %s", case_id)
        return None


def list_case_sessions(db: Session, case_id: str) -> List[CourtSession]:
    return court_session_repo.list_case_sessions(db, case_id)


def get_session(db: Session, session_id: str) -> Optional[CourtSession]:
    return court_session_repo.get_session(db, session_id)


def get_upcoming_sessions(db: Session, limit: int = 5, today: Optional[date] = None) -> List[CourtSession]:
    return court_session_repo.list_upcoming_sessions(db, today or date.today(), limit=limit)


def get_today_sessions(db: Session, today: Optional[date] = None) -> List[CourtSession]:
    return court_session_repo.list_sessions_on(db, today or date.today())


def _check_form(form: Mapping[str, Any], is_update: bool) -> CourtSessionForm:
    checked = validate_session_form(form, is_update=is_update)
    if not checked.success:
        raise ActionError(checked)
    data, errors = CourtSessionForm.parse(form)
    if errors:
        raise invalid(errors)
    return data


def _log_metadata(s: CourtSession) -> dict:
    return {
        "session_date": s.session_date.isoformat(),
        "session_time": s.session_time,
        "location": s.location,
    }


@action("auth.session.create", store_message="session.create_failed")
def add_court_session(
    db: Session, user: CurrentUser, form: Mapping[str, Any], today: Optional[date] = None
) -> ActionResult:
    data = _check_form(form, is_update=False)
    case_id = data.case_id
    require(case_repo.get_case(db, case_id), "case.not_found")

    s = court_session_repo.create_session(db, {"case_id": case_id, **data.to_fields()})
    db.commit()
    payload = dump(CourtSessionOut, s)

    update_next_session_date(db, case_id, today=today)

    log_activity(
        db,
        user_id=user.id,
        action="create",
        entity_type="court_session",
        entity_id=payload["id"],
        description=msg("session.created.log", case_id=case_id),
        metadata=_log_metadata(s),
    )
    return ActionResult.ok(
        id=payload["id"], data=payload, message=msg("session.created"), revalidate=_paths(case_id)
    )


@action("auth.session.update", store_message="session.update_failed")
def update_court_session(
    db: Session, user: CurrentUser, session_id: str, form: Mapping[str, Any], today: Optional[date] = None
) -> ActionResult:
    if not session_id:
        raise invalid({"session_id": [msg("session.id_required")]})
    data = _check_form(form, is_update=True)

    s = require(court_session_repo.get_session(db, session_id), "session.not_found")
    previous_case_id = s.case_id
    fields = data.to_fields()
    if data.case_id and data.case_id != previous_case_id:
        require(case_repo.get_case(db, data.case_id), "case.not_found")
        fields["case_id"] = data.case_id

    court_session_repo.update_session(db, s, fields)
    db.commit()
    payload = dump(CourtSessionOut, s)
    case_id = payload["case_id"]

    update_next_session_date(db, case_id, today=today)
    paths = _paths(case_id)
    if previous_case_id != case_id:
        update_next_session_date(db, previous_case_id, today=today)
        paths += [p for p in _paths(previous_case_id) if p not in paths]

    log_activity(
        db,
        user_id=user.id,
        action="update",
        entity_type="court_session",
        entity_id=session_id,
        description=msg("session.updated.log", case_id=case_id),
        metadata={k: payload[k] for k in ("session_date", "session_time", "location")},
    )
    return ActionResult.ok(id=session_id, data=payload, message=msg("session.updated"), revalidate=paths)


@action("auth.session.delete", store_message="session.delete_failed")
def delete_court_session(
    db: Session, user: CurrentUser, session_id: str, today: Optional[date] = None
) -> ActionResult:
    if not session_id:
        raise invalid({"session_id": [msg("session.id_required")]})

    s = require(court_session_repo.get_session(db, session_id), "session.not_found")
    case_id = s.case_id
    court_session_repo.delete_session(db, s)
    db.commit()

    update_next_session_date(db, case_id, today=today)

    log_activity(
        db,
        user_id=user.id,
        action="delete",
        entity_type="court_session",
        entity_id=session_id,
        description=msg("session.deleted.log", case_id=case_id),
        metadata={"case_id": case_id},
    )
    return ActionResult.ok(id=session_id, message=msg("session.deleted"), revalidate=_paths(case_id))
