from __future__ import annotations

from typing import Any, List, Mapping

from sqlalchemy.orm import Session

from lawoffice.core.auth import CurrentUser
from lawoffice.core.messages import msg
from lawoffice.db.models import CaseParty
from lawoffice.repositories import case_party_repo, case_repo
from lawoffice.schemas.case_party import CasePartyForm, CasePartyOut
from lawoffice.schemas.result import ActionResult

from .actions import action, dump, invalid, require
from .activity_service import log_activity


def list_case_parties(db: Session, case_id: str) -> List[CaseParty]:
    return case_party_repo.list_case_parties(db, case_id)


@action("auth.case.update")
def add_case_party(db: Session, user: CurrentUser, form: Mapping[str, Any]) -> ActionResult:
    data, errors = CasePartyForm.parse(form)
    if errors:
        raise invalid(errors, message=msg("party.required"))
    if not data.case_id:
        raise invalid({"case_id": [msg("party.required")]})
    require(case_repo.get_case(db, data.case_id), "case.not_found")

    p = case_party_repo.create_party(db, {"case_id": data.case_id, **data.to_fields()})
    db.commit()
    payload = dump(CasePartyOut, p)

    text = msg("party.created", name=p.name, case_id=p.case_id)
    log_activity(
        db,
        user_id=user.id,
        action="create",
        entity_type="case_party",
        entity_id=payload["id"],
        description=text,
        metadata={"case_id": p.case_id, "role": p.role},
    )
    return ActionResult.ok(id=payload["id"], data=payload, message=text, revalidate=[f"/cases/{p.case_id}"])


@action("auth.case.update")
def update_case_party(db: Session, user: CurrentUser, party_id: str, form: Mapping[str, Any]) -> ActionResult:
    if not party_id:
        raise invalid({"party_id": [msg("party.id_required")]})
    data, errors = CasePartyForm.parse(form)
    if errors:
        raise invalid(errors)

    p = require(case_party_repo.get_party(db, party_id), "party.not_found")
    case_party_repo.update_party(db, p, data.to_fields())
    db.commit()
    payload = dump(CasePartyOut, p)

    text = msg("party.updated", name=p.name)
    log_activity(
        db,
        user_id=user.id,
        action="update",
        entity_type="case_party",
        entity_id=party_id,
        description=text,
        metadata={"case_id": p.case_id},
    )
    return ActionResult.ok(id=party_id, data=payload, message=text, revalidate=[f"/cases/{p.case_id}"])


@action("auth.case.update")
def delete_case_party(db: Session, user: CurrentUser, party_id: str) -> ActionResult:
    if not party_id:
        raise invalid({"party_id": [msg("party.id_required")]})

    p = require(case_party_repo.get_party(db, party_id), "party.not_found")
    name, case_id = p.name, p.case_id
    case_party_repo.delete_party(db, p)
    db.commit()

    text = msg("party.deleted", name=name, case_id=case_id)
    log_activity(
        db,
        user_id=user.id,
        action="delete",
        entity_type="case_party",
        entity_id=party_id,
        description=text,
        metadata={"case_id": case_id},
    )
    return ActionResult.ok(id=party_id, message=text, revalidate=[f"/cases/{case_id}"])
