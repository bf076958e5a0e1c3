from __future__ import annotations

import json
import logging
import random
from datetime import date
from typing import Any, List, Mapping, Optional

from sqlalchemy.orm import Session

from lawoffice.core.auth import CurrentUser
from lawoffice.core.messages import msg
from lawoffice.db.models import Case
from lawoffice.repositories import case_document_repo, case_party_repo, case_repo
from lawoffice.schemas.case import CaseForm, CaseOut, DocumentIn, PartyIn
from lawoffice.schemas.result import ActionResult

from .actions import action, dump, invalid, require
from .activity_service import log_activity
from .case_document_service import BUCKET as DOCUMENT_BUCKET
from .storage_service import ObjectStore, delete_file_quietly

logger = logging.getLogger(__name__)

CASE_STATUSES = ("active", "pending", "closed", "archived")
CASE_PRIORITIES = ("low", "medium", "high", "urgent")


def _paths(case_id: str) -> list[str]:
    return ["/cases", f"/cases/{case_id}", f"/cases/{case_id}/sessions", "/bills", "/"]


def generate_case_number(today: Optional[date] = None) -> str:
    year = (today or date.today()).year
    return f"{year}/{random.randint(100, 999)}"


def list_cases(
    db: Session,
    search: str = "",
    status: Optional[str] = None,
    client_id: Optional[str] = None,
    limit: Optional[int] = None,
) -> List[Case]:
    return case_repo.list_cases(db, search=search.strip(), status=status or None, client_id=client_id, limit=limit)


def get_case(db: Session, case_id: str) -> Optional[Case]:
    return case_repo.get_case(db, case_id)


def count_cases(db: Session, status: Optional[str] = None) -> int:
    return case_repo.count_cases(db, status=status)


def _load_json_list(raw: Optional[str], what: str) -> list:
    if not raw:
        return []
    try:
        items = json.loads(raw)
    except json.JSONDecodeError:
        logger.error("Could not decode %s payload, skipping", what)
        return []
    if not isinstance(items, list):
        logger.error("%s payload is not a list, skipping", what)
        return []
    return items


def _insert_parties(db: Session, case_id: str, raw: Optional[str]) -> int:
    """Each party is its own insert; a failing one is logged and skipped."""
    inserted = 0
    for item in _load_json_list(raw, "parties"):
        try:
            party = PartyIn.model_validate(item)
            case_party_repo.create_party(db, {"case_id": case_id, **party.model_dump()})
            db.commit()
            inserted += 1
        except Exception:
            db.rollback()
            logger.exception("Error inserting party for case %s", case_id)
    return inserted


def _insert_documents(db: Session, case_id: str, raw: Optional[str]) -> int:
    inserted = 0
    for item in _load_json_list(raw, "documents"):
        try:
            doc = DocumentIn.model_validate(item)
            case_document_repo.create_document(db, {"case_id": case_id, **doc.model_dump()})
            db.commit()
            inserted += 1
        except Exception:
            db.rollback()
            logger.exception("Error inserting document for case %s", case_id)
    return inserted


@action("auth.case.create")
def create_case(db: Session, user: CurrentUser, form: Mapping[str, Any]) -> ActionResult:
    data, errors = CaseForm.parse(form)
    if errors:
        raise invalid(errors)

    fields = data.to_fields()
    fields["case_number"] = fields["case_number"] or generate_case_number()

    c = case_repo.create_case(db, fields)
    db.commit()
    case_id = c.id
    logger.info("Case %s created by %s", case_id, user.id)

    # Not atomic: the case stays even if some child rows fail.
    parties = _insert_parties(db, case_id, data.parties)
    documents = _insert_documents(db, case_id, data.documents)

    c = case_repo.get_case(db, case_id)
    payload = dump(CaseOut, c)
    log_activity(
        db,
        user_id=user.id,
        action="create",
        entity_type="case",
        entity_id=case_id,
        description=msg("case.created", title=payload["title"]),
        metadata={"parties": parties, "documents": documents},
    )
    return ActionResult.ok(id=case_id, data=payload, revalidate=_paths(case_id))


@action("auth.case.update")
def update_case(db: Session, user: CurrentUser, case_id: str, form: Mapping[str, Any]) -> ActionResult:
    if not case_id:
        raise invalid({"case_id": [msg("case.id_required")]})
    data, errors = CaseForm.parse(form)
    if errors:
        raise invalid(errors)

    c = require(case_repo.get_case(db, case_id), "case.not_found")
    fields = data.to_fields()
    if not fields["case_number"]:
        # keep the number already assigned
        fields.pop("case_number")
    case_repo.update_case(db, c, fields)
    db.commit()

    payload = dump(CaseOut, c)
    log_activity(
        db,
        user_id=user.id,
        action="update",
        entity_type="case",
        entity_id=case_id,
        description=msg("case.updated", title=payload["title"]),
    )
    return ActionResult.ok(id=case_id, data=payload, revalidate=_paths(case_id))


@action("auth.case.delete")
def delete_case(db: Session, user: CurrentUser, case_id: str, store: Optional[ObjectStore] = None) -> ActionResult:
    if not case_id:
        raise invalid({"case_id": [msg("case.id_required")]})

    c = require(case_repo.get_case(db, case_id), "case.not_found")
    title = c.title
    file_paths = [d.file_path for d in c.documents if d.file_path]
    case_repo.delete_case(db, c)
    db.commit()

    if store is not None:
        for path in file_paths:
            delete_file_quietly(store, DOCUMENT_BUCKET, path)

    log_activity(
        db,
        user_id=user.id,
        action="delete",
        entity_type="case",
        entity_id=case_id,
        description=msg("case.deleted", title=title or case_id),
    )
    return ActionResult.ok(id=case_id, revalidate=_paths(case_id))
