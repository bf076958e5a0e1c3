from __future__ import annotations

import logging
import shutil
import uuid
from pathlib import Path, PurePosixPath
from typing import BinaryIO, Union

from lawoffice.core.paths import BUCKETS

logger = logging.getLogger(__name__)


class StorageError(Exception):
    pass


class ObjectStore:
    """Bucket/path file store.

    Records keep the opaque path returned by :meth:`upload`; the bytes live
    under ``<root>/<bucket>/<path>``.
    """

    def __init__(self, root: Union[str, Path], buckets: tuple[str, ...] = BUCKETS) -> None:
        self.root = Path(root)
        self.buckets = buckets

    def _bucket_root(self, bucket: str) -> Path:
        if bucket not in self.buckets:
            raise StorageError(f"Unknown bucket: {bucket}")
        return self.root / bucket

    def resolve(self, bucket: str, path: str) -> Path:
        root = self._bucket_root(bucket).resolve()
        p = (root / path).resolve()
        try:
            p.relative_to(root)
        except ValueError:
            raise StorageError(f"Path escapes bucket: {path}") from None
        return p

    def upload(self, bucket: str, filename: str, data: Union[bytes, BinaryIO], folder: str = "") -> str:
        """Store ``data`` under a fresh unique name and return its path."""
        ext = PurePosixPath(filename or "").suffix.lower()
        name = f"{uuid.uuid4()}{ext}"
        path = f"{folder.strip('/')}/{name}" if folder.strip("/") else name

        dest = self.resolve(bucket, path)
        dest.parent.mkdir(parents=True, exist_ok=True)
        with dest.open("wb") as f:
            if isinstance(data, (bytes, bytearray)):
                f.write(data)
            else:
                shutil.copyfileobj(data, f)
        logger.info("Stored %s/%s (%s)", bucket, path, filename)
        return path

    def get_url(self, bucket: str, path: str) -> str:
        self.resolve(bucket, path)
        return f"/api/files/{bucket}/{path}"

    def exists(self, bucket: str, path: str) -> bool:
        try:
            return self.resolve(bucket, path).is_file()
        except StorageError:
            return False

    def open(self, bucket: str, path: str) -> BinaryIO:
        p = self.resolve(bucket, path)
        if not p.is_file():
            raise StorageError(f"File not found: {bucket}/{path}")
        return p.open("rb")

    def delete(self, bucket: str, path: str) -> bool:
        p = self.resolve(bucket, path)
        if not p.is_file():
            return False
        p.unlink()
        logger.info("Deleted %s/%s", bucket, path)
        return True


def delete_file_quietly(store: ObjectStore, bucket: str, path: str | None) -> None:
    """Remove a stored file after its record is gone; failures only get logged."""
    if not path:
        return
    try:
        store.delete(bucket, path)
    except Exception:
        logger.warning("Could not delete %s/%s", bucket, path, exc_info=True)
