from __future__ import annotations

from .config import settings
from .paths import BUCKETS, bucket_dir, sqlite_file


def bootstrap_filesystem() -> None:
    for bucket in BUCKETS:
        bucket_dir(bucket).mkdir(parents=True, exist_ok=True)
    db_file = sqlite_file(settings.database_url)
    if db_file is not None:
        db_file.parent.mkdir(parents=True, exist_ok=True)
