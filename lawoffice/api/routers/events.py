from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from lawoffice.api.deps import action_response, form_payload, get_db, get_user
from lawoffice.core.auth import CurrentUser
from lawoffice.schemas.case_event import CaseEventOut
from lawoffice.services import case_event_service

router = APIRouter(prefix="/events", tags=["case-events"])


@router.get("/{event_id}", response_model=CaseEventOut)
def api_get_event(event_id: str, db: Session = Depends(get_db)):
    e = case_event_service.get_case_event(db, event_id)
    if not e:
        raise HTTPException(status_code=404, detail="Event not found")
    return e


@router.post("")
def api_add_event(
    request: Request,
    form: dict = Depends(form_payload),
    db: Session = Depends(get_db),
    user: Optional[CurrentUser] = Depends(get_user),
):
    return action_response(request, case_event_service.add_case_event(db, user, form))


@router.put("/{event_id}")
def api_update_event(
    event_id: str,
    request: Request,
    form: dict = Depends(form_payload),
    db: Session = Depends(get_db),
    user: Optional[CurrentUser] = Depends(get_user),
):
    return action_response(request, case_event_service.update_case_event(db, user, event_id, form))


@router.delete("/{event_id}")
def api_delete_event(
    event_id: str,
    request: Request,
    db: Session = Depends(get_db),
    user: Optional[CurrentUser] = Depends(get_user),
):
    return action_response(request, case_event_service.delete_case_event(db, user, event_id))
