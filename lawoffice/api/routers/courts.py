from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from lawoffice.api.deps import get_db, get_user
from lawoffice.core.auth import CurrentUser
from lawoffice.core.messages import msg
from lawoffice.db.init_db import seed_courts
from lawoffice.repositories.court_repo import list_courts
from lawoffice.schemas.case import CourtOut

router = APIRouter(prefix="/courts", tags=["courts"])


@router.get("", response_model=list[CourtOut])
def api_list_courts(db: Session = Depends(get_db)):
    return list_courts(db)


@router.post("/seed")
def api_seed_courts(db: Session = Depends(get_db), user: Optional[CurrentUser] = Depends(get_user)):
    if user is None:
        raise HTTPException(status_code=401, detail=msg("auth.required"))
    return {"inserted": seed_courts(db)}
