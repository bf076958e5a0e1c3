from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from lawoffice.api.deps import action_response, form_payload, get_db, get_store, get_user
from lawoffice.core.auth import CurrentUser
from lawoffice.schemas.case import CaseOut
from lawoffice.schemas.case_document import CaseDocumentOut
from lawoffice.schemas.case_event import CaseEventOut
from lawoffice.schemas.case_party import CasePartyOut
from lawoffice.schemas.court_session import CourtSessionOut
from lawoffice.services import (
    case_document_service,
    case_event_service,
    case_party_service,
    case_service,
    court_session_service,
)
from lawoffice.services.storage_service import ObjectStore

router = APIRouter(prefix="/cases", tags=["cases"])


@router.get("", response_model=list[CaseOut])
def api_list_cases(
    search: str = "",
    status: Optional[str] = None,
    client_id: Optional[str] = None,
    limit: Optional[int] = None,
    db: Session = Depends(get_db),
):
    return case_service.list_cases(db, search=search, status=status, client_id=client_id, limit=limit)


@router.get("/count")
def api_count_cases(status: Optional[str] = None, db: Session = Depends(get_db)):
    return {"count": case_service.count_cases(db, status=status)}


@router.get("/{case_id}", response_model=CaseOut)
def api_get_case(case_id: str, db: Session = Depends(get_db)):
    c = case_service.get_case(db, case_id)
    if not c:
        raise HTTPException(status_code=404, detail="Case not found")
    return c


@router.get("/{case_id}/sessions", response_model=list[CourtSessionOut])
def api_case_sessions(case_id: str, db: Session = Depends(get_db)):
    return court_session_service.list_case_sessions(db, case_id)


@router.get("/{case_id}/parties", response_model=list[CasePartyOut])
def api_case_parties(case_id: str, db: Session = Depends(get_db)):
    return case_party_service.list_case_parties(db, case_id)


@router.get("/{case_id}/documents", response_model=list[CaseDocumentOut])
def api_case_documents(case_id: str, db: Session = Depends(get_db)):
    return case_document_service.list_case_documents(db, case_id)


@router.get("/{case_id}/events", response_model=list[CaseEventOut])
def api_case_events(case_id: str, db: Session = Depends(get_db)):
    return case_event_service.get_case_events(db, case_id)


@router.post("")
def api_create_case(
    request: Request,
    form: dict = Depends(form_payload),
    db: Session = Depends(get_db),
    user: Optional[CurrentUser] = Depends(get_user),
):
    return action_response(request, case_service.create_case(db, user, form))


@router.put("/{case_id}")
def api_update_case(
    case_id: str,
    request: Request,
    form: dict = Depends(form_payload),
    db: Session = Depends(get_db),
    user: Optional[CurrentUser] = Depends(get_user),
):
    return action_response(request, case_service.update_case(db, user, case_id, form))


@router.delete("/{case_id}")
def api_delete_case(
    case_id: str,
    request: Request,
    db: Session = Depends(get_db),
    store: ObjectStore = Depends(get_store),
    user: Optional[CurrentUser] = Depends(get_user),
):
    return action_response(request, case_service.delete_case(db, user, case_id, store=store))
