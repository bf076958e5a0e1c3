from __future__ import annotations

import logging
from typing import Any, List, Mapping, Optional

from sqlalchemy.orm import Session

from lawoffice.core.auth import CurrentUser
from lawoffice.core.messages import msg
from lawoffice.db.models import Client
from lawoffice.repositories import client_repo, finance_repo
from lawoffice.schemas.client import ClientForm, ClientOut
from lawoffice.schemas.result import ActionResult

from .actions import action, dump, invalid, require
from .activity_service import log_activity

logger = logging.getLogger(__name__)


def _paths(client_id: str) -> list[str]:
    return ["/clients", f"/clients/{client_id}", "/"]


def _shown_on(db: Session, c: Client) -> list[str]:
    """Case and invoice pages that print this client's name."""
    paths = ["/cases", "/invoices"]
    paths += [f"/cases/{case.id}" for case in c.cases]
    paths += [f"/invoices/{inv.id}" for inv in finance_repo.list_invoices(db, client_id=c.id)]
    return paths


def list_clients(db: Session, search: str = "", limit: Optional[int] = None) -> List[Client]:
    return client_repo.list_clients(db, search=search.strip(), limit=limit)


def get_client(db: Session, client_id: str) -> Optional[Client]:
    return client_repo.get_client(db, client_id)


@action("auth.client.create")
def add_client(db: Session, user: CurrentUser, form: Mapping[str, Any]) -> ActionResult:
    data, errors = ClientForm.parse(form)
    if errors:
        raise invalid(errors)

    c = client_repo.create_client(db, data.to_fields())
    db.commit()
    logger.info("Client %s created by %s", c.id, user.id)

    name = f"{c.first_name} {c.last_name}"
    payload = dump(ClientOut, c)
    log_activity(
        db,
        user_id=user.id,
        action="create",
        entity_type="client",
        entity_id=c.id,
        description=msg("client.created", name=name),
    )
    return ActionResult.ok(id=payload["id"], data=payload, revalidate=_paths(payload["id"]))


@action("auth.client.update")
def update_client(db: Session, user: CurrentUser, client_id: str, form: Mapping[str, Any]) -> ActionResult:
    if not client_id:
        raise invalid({"client_id": [msg("client.id_required")]})
    data, errors = ClientForm.parse(form)
    if errors:
        raise invalid(errors)

    c = require(client_repo.get_client(db, client_id), "client.not_found")
    shown_on = _shown_on(db, c)
    client_repo.update_client(db, c, data.to_fields())
    db.commit()

    payload = dump(ClientOut, c)
    log_activity(
        db,
        user_id=user.id,
        action="update",
        entity_type="client",
        entity_id=client_id,
        description=msg("client.updated", name=f"{payload['first_name']} {payload['last_name']}"),
    )
    return ActionResult.ok(id=client_id, data=payload, revalidate=_paths(client_id) + shown_on)


@action("auth.client.delete")
def delete_client(db: Session, user: CurrentUser, client_id: str) -> ActionResult:
    if not client_id:
        raise invalid({"client_id": [msg("client.id_required")]})

    c = require(client_repo.get_client(db, client_id), "client.not_found")
    shown_on = _shown_on(db, c)
    name = f"{c.first_name} {c.last_name}"
    client_repo.delete_client(db, c)
    db.commit()

    log_activity(
        db,
        user_id=user.id,
        action="delete",
        entity_type="client",
        entity_id=client_id,
        description=msg("client.deleted", name=name),
    )
    return ActionResult.ok(id=client_id, revalidate=_paths(client_id) + shown_on)
