from __future__ import annotations

from typing import Any, List, Mapping, Optional

from sqlalchemy.orm import Session

from lawoffice.core.auth import CurrentUser
from lawoffice.core.messages import msg
from lawoffice.db.models import Bill
from lawoffice.repositories import finance_repo
from lawoffice.schemas.finance import BillForm, BillOut, BillUpdateForm
from lawoffice.schemas.forms import changed_fields
from lawoffice.schemas.result import ActionResult

from .actions import action, dump, invalid, require
from .activity_service import log_activity
from .storage_service import ObjectStore, delete_file_quietly

BUCKET = "bills"


def _paths(bill_id: str) -> list[str]:
    return ["/bills", f"/bills/{bill_id}"]


def list_bills(db: Session, case_id: Optional[str] = None) -> List[Bill]:
    return finance_repo.list_bills(db, case_id=case_id)


def get_bill(db: Session, bill_id: str) -> Optional[Bill]:
    return finance_repo.get_bill(db, bill_id)


@action("auth.bill.create")
def create_bill(db: Session, user: CurrentUser, form: Mapping[str, Any]) -> ActionResult:
    data, errors = BillForm.parse(form)
    if errors:
        raise invalid(errors, message=msg("bill.required"))

    b = finance_repo.create_bill(db, {**data.model_dump(), "created_by": user.id})
    db.commit()
    payload = dump(BillOut, b)

    text = msg("bill.created", bill_type=b.bill_type, amount=b.amount)
    log_activity(
        db,
        user_id=user.id,
        action="create",
        entity_type="bill",
        entity_id=payload["id"],
        description=text,
        metadata={"amount": b.amount, "bill_type": b.bill_type, "case_id": b.case_id},
    )
    return ActionResult.ok(id=payload["id"], data=payload, message=text, revalidate=_paths(payload["id"]))


@action("auth.bill.update")
def update_bill(db: Session, user: CurrentUser, bill_id: str, form: Mapping[str, Any]) -> ActionResult:
    """Partial update: only the fields present and non-blank in ``form`` change."""
    data, errors = BillUpdateForm.parse(form)
    if errors:
        raise invalid(errors)

    b = require(finance_repo.get_bill(db, bill_id), "bill.not_found")
    fields = {k: v for k, v in changed_fields(data).items() if v is not None}
    finance_repo.apply_fields(db, b, fields)
    db.commit()
    payload = dump(BillOut, b)

    text = msg("bill.updated", bill_type=b.bill_type, amount=b.amount)
    log_activity(
        db,
        user_id=user.id,
        action="update",
        entity_type="bill",
        entity_id=bill_id,
        description=text,
        metadata={"fields": sorted(fields)},
    )
    return ActionResult.ok(id=bill_id, data=payload, message=text, revalidate=_paths(bill_id))


@action("auth.bill.delete")
def delete_bill(db: Session, user: CurrentUser, bill_id: str, store: Optional[ObjectStore] = None) -> ActionResult:
    b = require(finance_repo.get_bill(db, bill_id), "bill.not_found")
    file_path = b.file_path
    finance_repo.delete_row(db, b)
    db.commit()

    if store is not None:
        delete_file_quietly(store, BUCKET, file_path)

    log_activity(
        db,
        user_id=user.id,
        action="delete",
        entity_type="bill",
        entity_id=bill_id,
        description=msg("bill.deleted"),
    )
    return ActionResult.ok(id=bill_id, message=msg("bill.deleted"), revalidate=_paths(bill_id))
