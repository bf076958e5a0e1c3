from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from lawoffice.api.deps import action_response, form_payload, get_db, get_store, get_user
from lawoffice.core.auth import CurrentUser
from lawoffice.schemas.finance import BillOut
from lawoffice.services import bill_service
from lawoffice.services.storage_service import ObjectStore

router = APIRouter(prefix="/bills", tags=["bills"])


@router.get("", response_model=list[BillOut])
def api_list_bills(case_id: Optional[str] = None, db: Session = Depends(get_db)):
    return bill_service.list_bills(db, case_id=case_id)


@router.get("/{bill_id}", response_model=BillOut)
def api_get_bill(bill_id: str, db: Session = Depends(get_db)):
    b = bill_service.get_bill(db, bill_id)
    if not b:
        raise HTTPException(status_code=404, detail="Bill not found")
    return b


@router.post("")
def api_create_bill(
    request: Request,
    form: dict = Depends(form_payload),
    db: Session = Depends(get_db),
    user: Optional[CurrentUser] = Depends(get_user),
):
    return action_response(request, bill_service.create_bill(db, user, form))


@router.patch("/{bill_id}")
def api_update_bill(
    bill_id: str,
    request: Request,
    form: dict = Depends(form_payload),
    db: Session = Depends(get_db),
    user: Optional[CurrentUser] = Depends(get_user),
):
    return action_response(request, bill_service.update_bill(db, user, bill_id, form))


@router.delete("/{bill_id}")
def api_delete_bill(
    bill_id: str,
    request: Request,
    db: Session = Depends(get_db),
    store: ObjectStore = Depends(get_store),
    user: Optional[CurrentUser] = Depends(get_user),
):
    return action_response(request, bill_service.delete_bill(db, user, bill_id, store=store))
