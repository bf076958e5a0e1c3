from __future__ import annotations

from pathlib import Path

from .config import settings

BUCKETS = ("case-documents", "receipts", "invoice-documents", "bills")


def repo_root() -> Path:
    # assumes lawoffice/ is at repo root/lawoffice
    return Path(__file__).resolve().parents[2]


def package_root() -> Path:
    return Path(__file__).resolve().parents[1]


def templates_dir() -> Path:
    return package_root() / "templates"


def storage_root() -> Path:
    p = Path(settings.storage_dir)
    if not p.is_absolute():
        p = repo_root() / p
    return p


def bucket_dir(bucket: str) -> Path:
    return storage_root() / bucket


def sqlite_file(database_url: str) -> Path | None:
    """Filesystem path of a file-backed sqlite URL, None for anything else."""
    prefix = "sqlite:///"
    if not database_url.startswith(prefix):
        return None
    raw = database_url[len(prefix):]
    if not raw or raw == ":memory:":
        return None
    return Path(raw)
