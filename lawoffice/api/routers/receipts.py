from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from lawoffice.api.deps import action_response, form_payload, get_db, get_store, get_user
from lawoffice.core.auth import CurrentUser
from lawoffice.schemas.finance import ReceiptOut
from lawoffice.services import receipt_service
from lawoffice.services.storage_service import ObjectStore

router = APIRouter(prefix="/receipts", tags=["receipts"])


@router.get("", response_model=list[ReceiptOut])
def api_list_receipts(
    case_id: Optional[str] = None, status: Optional[str] = None, db: Session = Depends(get_db)
):
    return receipt_service.list_receipts(db, case_id=case_id, status=status)


@router.get("/{receipt_id}", response_model=ReceiptOut)
def api_get_receipt(receipt_id: str, db: Session = Depends(get_db)):
    r = receipt_service.get_receipt(db, receipt_id)
    if not r:
        raise HTTPException(status_code=404, detail="Receipt not found")
    return r


@router.post("")
def api_create_receipt(
    request: Request,
    form: dict = Depends(form_payload),
    db: Session = Depends(get_db),
    user: Optional[CurrentUser] = Depends(get_user),
):
    return action_response(request, receipt_service.create_receipt(db, user, form))


@router.put("/{receipt_id}/status")
def api_update_receipt_status(
    receipt_id: str,
    request: Request,
    form: dict = Depends(form_payload),
    db: Session = Depends(get_db),
    user: Optional[CurrentUser] = Depends(get_user),
):
    result = receipt_service.update_receipt_status(db, user, receipt_id, form.get("status") or "")
    return action_response(request, result)


@router.delete("/{receipt_id}")
def api_delete_receipt(
    receipt_id: str,
    request: Request,
    db: Session = Depends(get_db),
    store: ObjectStore = Depends(get_store),
    user: Optional[CurrentUser] = Depends(get_user),
):
    return action_response(request, receipt_service.delete_receipt(db, user, receipt_id, store=store))
