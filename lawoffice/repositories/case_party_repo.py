from __future__ import annotations

from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from lawoffice.db.models import CaseParty


def list_case_parties(db: Session, case_id: str) -> List[CaseParty]:
    return db.query(CaseParty).filter(CaseParty.case_id == case_id).order_by(CaseParty.created_at.asc()).all()


def get_party(db: Session, party_id: str) -> Optional[CaseParty]:
    return db.query(CaseParty).filter(CaseParty.id == party_id).first()


def create_party(db: Session, fields: Dict[str, Any]) -> CaseParty:
    p = CaseParty(**fields)
    db.add(p)
    db.flush()
    return p


def update_party(db: Session, party: CaseParty, fields: Dict[str, Any]) -> CaseParty:
    for key, value in fields.items():
        setattr(party, key, value)
    db.flush()
    return party


def delete_party(db: Session, party: CaseParty) -> None:
    db.delete(party)
    db.flush()
