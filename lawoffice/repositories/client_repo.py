from __future__ import annotations

from typing import Any, Dict, List, Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session

from lawoffice.db.models import Client


def list_clients(db: Session, search: str = "", limit: Optional[int] = None) -> List[Client]:
    q = db.query(Client)
    if search:
        like = f"%{search}%"
        q = q.filter(
            or_(
                Client.first_name.ilike(like),
                Client.last_name.ilike(like),
                Client.company_name.ilike(like),
                Client.email.ilike(like),
                Client.phone.ilike(like),
            )
        )
    q = q.order_by(Client.created_at.desc())
    if limit:
        q = q.limit(limit)
    return q.all()


def get_client(db: Session, client_id: str) -> Optional[Client]:
    return db.query(Client).filter(Client.id == client_id).first()


def create_client(db: Session, fields: Dict[str, Any]) -> Client:
    c = Client(**fields)
    db.add(c)
    db.flush()
    return c


def update_client(db: Session, client: Client, fields: Dict[str, Any]) -> Client:
    for key, value in fields.items():
        setattr(client, key, value)
    db.flush()
    return client


def delete_client(db: Session, client: Client) -> None:
    db.delete(client)
    db.flush()


def count_clients(db: Session) -> int:
    return db.query(Client).count()
