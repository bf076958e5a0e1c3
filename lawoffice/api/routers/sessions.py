from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from lawoffice.api.deps import action_response, form_payload, get_db, get_user
from lawoffice.core.auth import CurrentUser
from lawoffice.schemas.court_session import CourtSessionOut
from lawoffice.services import court_session_service

router = APIRouter(prefix="/sessions", tags=["court-sessions"])


@router.get("/upcoming", response_model=list[CourtSessionOut])
def api_upcoming_sessions(limit: int = 5, db: Session = Depends(get_db)):
    return court_session_service.get_upcoming_sessions(db, limit=limit)


@router.get("/today", response_model=list[CourtSessionOut])
def api_today_sessions(db: Session = Depends(get_db)):
    return court_session_service.get_today_sessions(db)


@router.get("/{session_id}", response_model=CourtSessionOut)
def api_get_session(session_id: str, db: Session = Depends(get_db)):
    s = court_session_service.get_session(db, session_id)
    if not s:
        raise HTTPException(status_code=404, detail="Court session not found")
    return s


@router.post("")
def api_add_session(
    request: Request,
    form: dict = Depends(form_payload),
    db: Session = Depends(get_db),
    user: Optional[CurrentUser] = Depends(get_user),
):
    return action_response(request, court_session_service.add_court_session(db, user, form))


@router.put("/{session_id}")
def api_update_session(
    session_id: str,
    request: Request,
    form: dict = Depends(form_payload),
    db: Session = Depends(get_db),
    user: Optional[CurrentUser] = Depends(get_user),
):
    return action_response(request, court_session_service.update_court_session(db, user, session_id, form))


@router.delete("/{session_id}")
def api_delete_session(
    session_id: str,
    request: Request,
    db: Session = Depends(get_db),
    user: Optional[CurrentUser] = Depends(get_user),
):
    return action_response(request, court_session_service.delete_court_session(db, user, session_id))
