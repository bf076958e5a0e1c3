from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from lawoffice.api.deps import action_response, form_payload, get_db, get_user
from lawoffice.core.auth import CurrentUser
from lawoffice.schemas.client import ClientOut
from lawoffice.services import client_service

router = APIRouter(prefix="/clients", tags=["clients"])


@router.get("", response_model=list[ClientOut])
def api_list_clients(search: str = "", limit: Optional[int] = None, db: Session = Depends(get_db)):
    return client_service.list_clients(db, search=search, limit=limit)


@router.get("/{client_id}", response_model=ClientOut)
def api_get_client(client_id: str, db: Session = Depends(get_db)):
    c = client_service.get_client(db, client_id)
    if not c:
        raise HTTPException(status_code=404, detail="Client not found")
    return c


@router.post("")
def api_add_client(
    request: Request,
    form: dict = Depends(form_payload),
    db: Session = Depends(get_db),
    user: Optional[CurrentUser] = Depends(get_user),
):
    return action_response(request, client_service.add_client(db, user, form))


@router.put("/{client_id}")
def api_update_client(
    client_id: str,
    request: Request,
    form: dict = Depends(form_payload),
    db: Session = Depends(get_db),
    user: Optional[CurrentUser] = Depends(get_user),
):
    return action_response(request, client_service.update_client(db, user, client_id, form))


@router.delete("/{client_id}")
def api_delete_client(
    client_id: str,
    request: Request,
    db: Session = Depends(get_db),
    user: Optional[CurrentUser] = Depends(get_user),
):
    return action_response(request, client_service.delete_client(db, user, client_id))
