from __future__ import annotations

from typing import Any, List, Mapping, Optional

from sqlalchemy.orm import Session

from lawoffice.core.auth import CurrentUser
from lawoffice.core.messages import msg
from lawoffice.db.models import Receipt
from lawoffice.repositories import finance_repo
from lawoffice.schemas.finance import ReceiptForm, ReceiptOut
from lawoffice.schemas.result import ActionResult

from .actions import action, dump, invalid, require
from .activity_service import log_activity
from .storage_service import ObjectStore, delete_file_quietly

BUCKET = "receipts"


def _paths(receipt_id: str, case_id: Optional[str]) -> list[str]:
    paths = ["/receipts", f"/receipts/{receipt_id}"]
    if case_id:
        paths.append(f"/cases/{case_id}")
    return paths


def list_receipts(db: Session, case_id: Optional[str] = None, status: Optional[str] = None) -> List[Receipt]:
    return finance_repo.list_receipts(db, case_id=case_id, status=status)


def get_receipt(db: Session, receipt_id: str) -> Optional[Receipt]:
    return finance_repo.get_receipt(db, receipt_id)


@action("auth.receipt.create")
def create_receipt(db: Session, user: CurrentUser, form: Mapping[str, Any]) -> ActionResult:
    data, errors = ReceiptForm.parse(form)
    if errors:
        raise invalid(errors, message=msg("receipt.required"))

    r = finance_repo.create_receipt(db, {**data.model_dump(), "created_by": user.id, "updated_by": user.id})
    db.commit()
    payload = dump(ReceiptOut, r)

    text = msg("receipt.created", title=r.title)
    log_activity(
        db,
        user_id=user.id,
        action="create",
        entity_type="receipt",
        entity_id=payload["id"],
        description=text,
        metadata={"amount": r.amount, "category": r.category, "status": r.status},
    )
    return ActionResult.ok(
        id=payload["id"], data=payload, message=text, revalidate=_paths(payload["id"], r.case_id)
    )


@action("auth.receipt.update")
def update_receipt_status(db: Session, user: CurrentUser, receipt_id: str, status: str) -> ActionResult:
    status = (status or "").strip()
    if not status:
        raise invalid({"status": [msg("field.required")]})

    r = require(finance_repo.get_receipt(db, receipt_id), "receipt.not_found")
    previous = r.status
    finance_repo.apply_fields(db, r, {"status": status, "updated_by": user.id})
    db.commit()
    payload = dump(ReceiptOut, r)

    text = msg("receipt.status_updated", status=status)
    log_activity(
        db,
        user_id=user.id,
        action="update",
        entity_type="receipt",
        entity_id=receipt_id,
        description=text,
        metadata={"previous_status": previous, "status": status},
    )
    return ActionResult.ok(id=receipt_id, data=payload, message=text, revalidate=_paths(receipt_id, r.case_id))


@action("auth.receipt.delete")
def delete_receipt(
    db: Session, user: CurrentUser, receipt_id: str, store: Optional[ObjectStore] = None
) -> ActionResult:
    r = require(finance_repo.get_receipt(db, receipt_id), "receipt.not_found")
    case_id, file_path, title = r.case_id, r.file_path, r.title
    finance_repo.delete_row(db, r)
    db.commit()

    if store is not None:
        delete_file_quietly(store, BUCKET, file_path)

    log_activity(
        db,
        user_id=user.id,
        action="delete",
        entity_type="receipt",
        entity_id=receipt_id,
        description=msg("receipt.deleted"),
        metadata={"title": title},
    )
    return ActionResult.ok(id=receipt_id, message=msg("receipt.deleted"), revalidate=_paths(receipt_id, case_id))
