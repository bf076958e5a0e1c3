from __future__ import annotations

from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from lawoffice.db.models import CaseDocument


def list_case_documents(db: Session, case_id: Optional[str] = None) -> List[CaseDocument]:
    q = db.query(CaseDocument)
    if case_id:
        q = q.filter(CaseDocument.case_id == case_id)
    return q.order_by(CaseDocument.created_at.desc()).all()


def get_document(db: Session, document_id: str) -> Optional[CaseDocument]:
    return db.query(CaseDocument).filter(CaseDocument.id == document_id).first()


def create_document(db: Session, fields: Dict[str, Any]) -> CaseDocument:
    d = CaseDocument(**fields)
    db.add(d)
    db.flush()
    return d


def update_document(db: Session, document: CaseDocument, fields: Dict[str, Any]) -> CaseDocument:
    for key, value in fields.items():
        setattr(document, key, value)
    db.flush()
    return document


def delete_document(db: Session, document: CaseDocument) -> None:
    db.delete(document)
    db.flush()
