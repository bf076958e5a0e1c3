from __future__ import annotations

import json
from typing import Any, Dict, Generator, Optional

from fastapi import Request
from fastapi.responses import JSONResponse

from lawoffice.core.auth import CurrentUser, get_current_user
from lawoffice.core.database import SessionLocal
from lawoffice.core.paths import storage_root
from lawoffice.schemas.result import ActionResult
from lawoffice.services.storage_service import ObjectStore


def get_db() -> Generator:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_store() -> ObjectStore:
    return ObjectStore(storage_root())


def get_user(request: Request) -> Optional[CurrentUser]:
    return get_current_user(request)


async def form_payload(request: Request) -> Dict[str, Any]:
    """Submitted fields as a flat ``name -> str`` mapping.

    HTML forms and multipart posts are read as-is (file parts are left to the
    route); a JSON object body is accepted too, nested values re-encoded as
    JSON strings the way the pages send them.
    """
    if request.headers.get("content-type", "").startswith("application/json"):
        body = await request.json()
        if not isinstance(body, dict):
            return {}
        return {
            k: json.dumps(v, ensure_ascii=False) if isinstance(v, (list, dict)) else v
            for k, v in body.items()
        }
    form = await request.form()
    return {k: v for k, v in form.multi_items() if isinstance(v, str)}


def action_response(request: Request, result: ActionResult) -> JSONResponse:
    if result.success:
        cache = getattr(request.app.state, "page_cache", None)
        if cache is not None:
            cache.invalidate_many(result.revalidate)
    return JSONResponse(result.model_dump(mode="json"), status_code=result.status_code)
