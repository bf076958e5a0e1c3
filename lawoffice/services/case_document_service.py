from __future__ import annotations

from typing import Any, BinaryIO, List, Mapping, Optional, Protocol

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from lawoffice.core.auth import CurrentUser
from lawoffice.core.messages import msg
from lawoffice.db.models import CaseDocument
from lawoffice.repositories import case_document_repo, case_repo
from lawoffice.schemas.case_document import CaseDocumentForm, CaseDocumentOut
from lawoffice.schemas.result import ActionResult

from .actions import action, dump, invalid, require
from .activity_service import log_activity
from .storage_service import ObjectStore, delete_file_quietly

BUCKET = "case-documents"


class Upload(Protocol):
    """What we need from an uploaded file (starlette's ``UploadFile`` fits)."""

    filename: Optional[str]
    file: BinaryIO
    content_type: Optional[str]


def list_case_documents(db: Session, case_id: Optional[str] = None) -> List[CaseDocument]:
    return case_document_repo.list_case_documents(db, case_id=case_id)


def get_case_document(db: Session, document_id: str) -> Optional[CaseDocument]:
    return case_document_repo.get_document(db, document_id)


def _store_upload(store: ObjectStore, case_id: str, upload: Upload) -> dict:
    path = store.upload(BUCKET, upload.filename or "", upload.file, folder=case_id)
    return {
        "file_path": path,
        "file_name": upload.filename,
        "file_type": upload.content_type,
        "file_size": store.resolve(BUCKET, path).stat().st_size,
    }


@action("auth.case.update")
def add_case_document(
    db: Session,
    user: CurrentUser,
    form: Mapping[str, Any],
    store: Optional[ObjectStore] = None,
    upload: Optional[Upload] = None,
) -> ActionResult:
    data, errors = CaseDocumentForm.parse(form)
    if errors:
        raise invalid(errors, message=msg("document.required"))
    if not data.case_id:
        raise invalid({"case_id": [msg("document.required")]})
    require(case_repo.get_case(db, data.case_id), "case.not_found")

    fields = data.to_fields()
    if store is not None and upload is not None and upload.filename:
        fields.update(_store_upload(store, data.case_id, upload))

    try:
        d = case_document_repo.create_document(db, {"case_id": data.case_id, **fields})
        db.commit()
    except SQLAlchemyError:
        if store is not None and upload is not None:
            delete_file_quietly(store, BUCKET, fields.get("file_path"))
        raise
    payload = dump(CaseDocumentOut, d)

    text = msg("document.created", name=d.name, case_id=d.case_id)
    log_activity(
        db,
        user_id=user.id,
        action="create",
        entity_type="case_document",
        entity_id=payload["id"],
        description=text,
        metadata={"case_id": d.case_id, "file_name": d.file_name},
    )
    return ActionResult.ok(id=payload["id"], data=payload, message=text, revalidate=[f"/cases/{d.case_id}"])


@action("auth.case.update")
def update_case_document(
    db: Session, user: CurrentUser, document_id: str, form: Mapping[str, Any]
) -> ActionResult:
    if not document_id:
        raise invalid({"document_id": [msg("document.id_required")]})
    data, errors = CaseDocumentForm.parse(form)
    if errors:
        raise invalid(errors)

    d = require(case_document_repo.get_document(db, document_id), "document.not_found")
    # the stored file is only replaced through a new upload
    fields = {k: v for k, v in data.to_fields().items() if not (k.startswith("file_") and v is None)}
    case_document_repo.update_document(db, d, fields)
    db.commit()
    payload = dump(CaseDocumentOut, d)

    text = msg("document.updated", name=d.name)
    log_activity(
        db,
        user_id=user.id,
        action="update",
        entity_type="case_document",
        entity_id=document_id,
        description=text,
        metadata={"case_id": d.case_id},
    )
    return ActionResult.ok(id=document_id, data=payload, message=text, revalidate=[f"/cases/{d.case_id}"])


@action("auth.case.update")
def delete_case_document(
    db: Session, user: CurrentUser, document_id: str, store: Optional[ObjectStore] = None
) -> ActionResult:
    if not document_id:
        raise invalid({"document_id": [msg("document.id_required")]})

    d = require(case_document_repo.get_document(db, document_id), "document.not_found")
    name, case_id, file_path = d.name, d.case_id, d.file_path
    case_document_repo.delete_document(db, d)
    db.commit()

    if store is not None:
        delete_file_quietly(store, BUCKET, file_path)

    text = msg("document.deleted", name=name, case_id=case_id)
    log_activity(
        db,
        user_id=user.id,
        action="delete",
        entity_type="case_document",
        entity_id=document_id,
        description=text,
        metadata={"case_id": case_id, "file_path": file_path},
    )
    return ActionResult.ok(id=document_id, message=text, revalidate=[f"/cases/{case_id}"])
