from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, File, HTTPException, Request, UploadFile
from sqlalchemy.orm import Session

from lawoffice.api.deps import action_response, form_payload, get_db, get_store, get_user
from lawoffice.core.auth import CurrentUser
from lawoffice.schemas.case_document import CaseDocumentOut
from lawoffice.services import case_document_service
from lawoffice.services.storage_service import ObjectStore

router = APIRouter(prefix="/documents", tags=["case-documents"])


@router.get("", response_model=list[CaseDocumentOut])
def api_list_documents(case_id: Optional[str] = None, db: Session = Depends(get_db)):
    return case_document_service.list_case_documents(db, case_id=case_id)


@router.get("/{document_id}", response_model=CaseDocumentOut)
def api_get_document(document_id: str, db: Session = Depends(get_db)):
    d = case_document_service.get_case_document(db, document_id)
    if not d:
        raise HTTPException(status_code=404, detail="Document not found")
    return d


@router.post("")
def api_add_document(
    request: Request,
    file: Optional[UploadFile] = File(default=None),
    form: dict = Depends(form_payload),
    db: Session = Depends(get_db),
    store: ObjectStore = Depends(get_store),
    user: Optional[CurrentUser] = Depends(get_user),
):
    result = case_document_service.add_case_document(db, user, form, store=store, upload=file)
    return action_response(request, result)


@router.put("/{document_id}")
def api_update_document(
    document_id: str,
    request: Request,
    form: dict = Depends(form_payload),
    db: Session = Depends(get_db),
    user: Optional[CurrentUser] = Depends(get_user),
):
    return action_response(request, case_document_service.update_case_document(db, user, document_id, form))


@router.delete("/{document_id}")
def api_delete_document(
    document_id: str,
    request: Request,
    db: Session = Depends(get_db),
    store: ObjectStore = Depends(get_store),
    user: Optional[CurrentUser] = Depends(get_user),
):
    result = case_document_service.delete_case_document(db, user, document_id, store=store)
    return action_response(request, result)
