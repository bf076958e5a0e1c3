from __future__ import annotations

from typing import Any, Dict, List, Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session, joinedload

from lawoffice.db.models import Case


def list_cases(
    db: Session,
    search: str = "",
    status: Optional[str] = None,
    client_id: Optional[str] = None,
    limit: Optional[int] = None,
) -> List[Case]:
    q = db.query(Case).options(joinedload(Case.client), joinedload(Case.court))
    if search:
        like = f"%{search}%"
        q = q.filter(or_(Case.title.ilike(like), Case.case_number.ilike(like), Case.description.ilike(like)))
    if status:
        q = q.filter(Case.status == status)
    if client_id:
        q = q.filter(Case.client_id == client_id)
    q = q.order_by(Case.created_at.desc())
    if limit:
        q = q.limit(limit)
    return q.all()


def get_case(db: Session, case_id: str) -> Optional[Case]:
    return db.query(Case).filter(Case.id == case_id).first()


def count_cases(db: Session, status: Optional[str] = None) -> int:
    q = db.query(Case)
    if status:
        q = q.filter(Case.status == status)
    return q.count()


def create_case(db: Session, fields: Dict[str, Any]) -> Case:
    c = Case(**fields)
    db.add(c)
    db.flush()
    return c


def update_case(db: Session, case: Case, fields: Dict[str, Any]) -> Case:
    for key, value in fields.items():
        setattr(case, key, value)
    db.flush()
    return case


def delete_case(db: Session, case: Case) -> None:
    db.delete(case)
    db.flush()
