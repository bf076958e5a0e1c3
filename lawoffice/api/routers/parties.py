from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from lawoffice.api.deps import action_response, form_payload, get_db, get_user
from lawoffice.core.auth import CurrentUser
from lawoffice.services import case_party_service

router = APIRouter(prefix="/parties", tags=["case-parties"])


@router.post("")
def api_add_party(
    request: Request,
    form: dict = Depends(form_payload),
    db: Session = Depends(get_db),
    user: Optional[CurrentUser] = Depends(get_user),
):
    return action_response(request, case_party_service.add_case_party(db, user, form))


@router.put("/{party_id}")
def api_update_party(
    party_id: str,
    request: Request,
    form: dict = Depends(form_payload),
    db: Session = Depends(get_db),
    user: Optional[CurrentUser] = Depends(get_user),
):
    return action_response(request, case_party_service.update_case_party(db, user, party_id, form))


@router.delete("/{party_id}")
def api_delete_party(
    party_id: str,
    request: Request,
    db: Session = Depends(get_db),
    user: Optional[CurrentUser] = Depends(get_user),
):
    return action_response(request, case_party_service.delete_case_party(db, user, party_id))
