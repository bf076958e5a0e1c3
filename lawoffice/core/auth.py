"""Identity lookup.

Credentials are never handled here: the auth provider in front of the
service authenticates the user and forwards the identity in a trusted
header (or cookie). This module only turns that into a ``CurrentUser``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from fastapi import Request

from .config import settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CurrentUser:
    id: str
    email: Optional[str] = None


def get_current_user(request: Request) -> Optional[CurrentUser]:
    user_id = (request.headers.get(settings.auth_user_header) or "").strip()
    if not user_id:
        user_id = (request.cookies.get(settings.auth_cookie_name) or "").strip()
    if not user_id and settings.dev_user_id:
        user_id = settings.dev_user_id
    if not user_id:
        logger.debug("No identity on request %s", request.url.path)
        return None
    email = (request.headers.get(settings.auth_email_header) or "").strip() or None
    return CurrentUser(id=user_id, email=email)
