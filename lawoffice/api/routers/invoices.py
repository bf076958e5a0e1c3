from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from lawoffice.api.deps import action_response, form_payload, get_db, get_store, get_user
from lawoffice.core.auth import CurrentUser
from lawoffice.schemas.finance import InvoiceOut
from lawoffice.services import invoice_service
from lawoffice.services.storage_service import ObjectStore

router = APIRouter(prefix="/invoices", tags=["invoices"])


@router.get("", response_model=list[InvoiceOut])
def api_list_invoices(
    client_id: Optional[str] = None, status: Optional[str] = None, db: Session = Depends(get_db)
):
    return invoice_service.list_invoices(db, client_id=client_id, status=status)


@router.get("/{invoice_id}", response_model=InvoiceOut)
def api_get_invoice(invoice_id: str, db: Session = Depends(get_db)):
    inv = invoice_service.get_invoice(db, invoice_id)
    if not inv:
        raise HTTPException(status_code=404, detail="Invoice not found")
    return inv


@router.post("")
def api_save_invoice(
    request: Request,
    form: dict = Depends(form_payload),
    db: Session = Depends(get_db),
    user: Optional[CurrentUser] = Depends(get_user),
):
    return action_response(request, invoice_service.save_invoice(db, user, form))


@router.put("/{invoice_id}/status")
def api_update_invoice_status(
    invoice_id: str,
    request: Request,
    form: dict = Depends(form_payload),
    db: Session = Depends(get_db),
    user: Optional[CurrentUser] = Depends(get_user),
):
    return action_response(request, invoice_service.update_invoice_status(db, user, invoice_id, form))


@router.post("/{invoice_id}/pdf")
def api_generate_invoice_pdf(
    invoice_id: str,
    request: Request,
    db: Session = Depends(get_db),
    store: ObjectStore = Depends(get_store),
    user: Optional[CurrentUser] = Depends(get_user),
):
    return action_response(request, invoice_service.generate_invoice_pdf(db, user, invoice_id, store))
