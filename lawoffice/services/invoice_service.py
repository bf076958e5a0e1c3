from __future__ import annotations

import logging
from typing import Any, List, Mapping, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from lawoffice.core.auth import CurrentUser
from lawoffice.core.config import settings
from lawoffice.core.messages import msg
from lawoffice.db.models import Invoice
from lawoffice.repositories import client_repo, finance_repo
from lawoffice.schemas.finance import InvoiceForm, InvoiceOut, InvoiceStatusForm
from lawoffice.schemas.result import ActionResult, ErrorKind

from .actions import ActionError, action, dump, invalid, require
from .activity_service import log_activity
from .invoice_pdf import invoice_filename, render_invoice_pdf
from .storage_service import ObjectStore, delete_file_quietly

logger = logging.getLogger(__name__)

BUCKET = "invoice-documents"


def _paths(invoice_id: str, client_id: str) -> list[str]:
    return ["/invoices", f"/invoices/{invoice_id}", f"/clients/{client_id}"]


def list_invoices(db: Session, client_id: Optional[str] = None, status: Optional[str] = None) -> List[Invoice]:
    return finance_repo.list_invoices(db, client_id=client_id, status=status)


def get_invoice(db: Session, invoice_id: str) -> Optional[Invoice]:
    return finance_repo.get_invoice(db, invoice_id)


@action("auth.invoice.create")
def save_invoice(db: Session, user: CurrentUser, form: Mapping[str, Any]) -> ActionResult:
    """Create an invoice, or update it when ``invoice_id`` is given, with its items.

    Items are written after the invoice row; if that fails for a new
    invoice the invoice is removed again.
    """
    data, errors = InvoiceForm.parse(form)
    if errors:
        raise invalid(errors, message=msg("invoice.required"))
    try:
        items = data.parse_items()
    except ValueError:
        raise invalid({"items": [msg("invoice.items_invalid")]}) from None
    if not items:
        raise invalid({"items": [msg("invoice.items_required")]})
    require(client_repo.get_client(db, data.client_id), "client.not_found")

    fields = {
        "client_id": data.client_id,
        "invoice_number": data.invoice_number,
        "issue_date": data.issue_date,
        "due_date": data.due_date,
        "notes": data.notes,
        **data.totals(items),
        "updated_by": user.id,
    }
    is_new = not data.invoice_id
    if is_new:
        inv = finance_repo.create_invoice(db, {**fields, "status": "draft", "created_by": user.id})
    else:
        inv = require(finance_repo.get_invoice(db, data.invoice_id), "invoice.not_found")
        finance_repo.apply_fields(db, inv, fields)
    db.commit()
    invoice_id = inv.id

    rows = [
        {"description": i.description, "quantity": i.quantity, "unit_price": i.unit_price, "amount": i.amount}
        for i in items
    ]
    try:
        finance_repo.replace_items(db, inv, rows)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Could not store items of invoice %s", invoice_id)
        if is_new:
            orphan = finance_repo.get_invoice(db, invoice_id)
            if orphan is not None:
                finance_repo.delete_row(db, orphan)
                db.commit()
        raise ActionError(ActionResult.fail(ErrorKind.STORE, msg("invoice.items_failed"))) from None

    payload = dump(InvoiceOut, inv)
    key = "invoice.created" if is_new else "invoice.updated"
    text = msg(key, number=inv.invoice_number)
    log_activity(
        db,
        user_id=user.id,
        action="create" if is_new else "update",
        entity_type="invoice",
        entity_id=invoice_id,
        description=text,
        metadata={"invoice_number": inv.invoice_number, "total_amount": inv.total_amount, "items": len(rows)},
    )
    return ActionResult.ok(id=invoice_id, data=payload, message=text, revalidate=_paths(invoice_id, inv.client_id))


@action("auth.invoice.update")
def update_invoice_status(db: Session, user: CurrentUser, invoice_id: str, form: Mapping[str, Any]) -> ActionResult:
    data, errors = InvoiceStatusForm.parse(form)
    if errors:
        raise invalid(errors, message=msg("invoice.status_invalid"))

    inv = require(finance_repo.get_invoice(db, invoice_id), "invoice.not_found")
    previous = inv.status
    finance_repo.apply_fields(db, inv, {"status": data.status, "updated_by": user.id})
    db.commit()
    payload = dump(InvoiceOut, inv)

    text = msg("invoice.status_updated", status=data.status)
    log_activity(
        db,
        user_id=user.id,
        action="update",
        entity_type="invoice",
        entity_id=invoice_id,
        description=text,
        metadata={"previous_status": previous, "status": data.status},
    )
    return ActionResult.ok(id=invoice_id, data=payload, message=text, revalidate=_paths(invoice_id, inv.client_id))


@action("auth.invoice.update")
def generate_invoice_pdf(db: Session, user: CurrentUser, invoice_id: str, store: ObjectStore) -> ActionResult:
    """Render the invoice, store it in ``invoice-documents`` and record its path."""
    inv = require(finance_repo.get_invoice(db, invoice_id), "invoice.not_found")
    content = render_invoice_pdf(inv, office_name=settings.office_name)

    previous = inv.pdf_path
    path = store.upload(BUCKET, invoice_filename(inv), content, folder=inv.client_id)
    finance_repo.apply_fields(db, inv, {"pdf_path": path, "updated_by": user.id})
    db.commit()
    if previous and previous != path:
        delete_file_quietly(store, BUCKET, previous)

    text = msg("invoice.pdf_generated", number=inv.invoice_number)
    log_activity(
        db,
        user_id=user.id,
        action="update",
        entity_type="invoice",
        entity_id=invoice_id,
        description=text,
        metadata={"pdf_path": path},
    )
    return ActionResult.ok(
        id=invoice_id,
        data={"pdf_path": path, "url": store.get_url(BUCKET, path)},
        message=text,
        revalidate=_paths(invoice_id, inv.client_id),
    )
