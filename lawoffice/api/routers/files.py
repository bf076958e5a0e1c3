from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile
from fastapi.responses import FileResponse

from lawoffice.api.deps import get_store, get_user
from lawoffice.core.auth import CurrentUser
from lawoffice.core.messages import msg
from lawoffice.services.storage_service import ObjectStore, StorageError

router = APIRouter(prefix="/files", tags=["files"])


@router.get("/{bucket}/{path:path}")
def download(bucket: str, path: str, store: ObjectStore = Depends(get_store)):
    try:
        p = store.resolve(bucket, path)
    except StorageError:
        raise HTTPException(status_code=403, detail="Forbidden path")
    if not p.is_file():
        raise HTTPException(status_code=404, detail="File not found")
    return FileResponse(str(p))


@router.post("/{bucket}")
def upload(
    bucket: str,
    file: UploadFile = File(...),
    folder: str = Form(default=""),
    store: ObjectStore = Depends(get_store),
    user: Optional[CurrentUser] = Depends(get_user),
):
    if user is None:
        raise HTTPException(status_code=401, detail=msg("auth.required"))
    try:
        path = store.upload(bucket, file.filename or "", file.file, folder=folder)
    except StorageError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"bucket": bucket, "path": path, "url": store.get_url(bucket, path), "file_name": file.filename}
