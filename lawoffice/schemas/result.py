from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class ErrorKind(str, Enum):
    AUTH = "auth"
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    STORE = "store"
    UNEXPECTED = "unexpected"


_STATUS = {
    ErrorKind.AUTH: 401,
    ErrorKind.VALIDATION: 422,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.STORE: 400,
    ErrorKind.UNEXPECTED: 500,
}


class ActionResult(BaseModel):
    """Outcome of a mutating action: either ``success`` or ``error``."""

    success: bool = False
    message: Optional[str] = None
    id: Optional[str] = None
    data: Optional[Dict[str, Any]] = None

    error: Optional[str] = None
    errors: Optional[Dict[str, List[str]]] = None
    kind: Optional[ErrorKind] = None

    # page paths whose cached rendering is now stale
    revalidate: List[str] = Field(default_factory=list)

    @classmethod
    def ok(
        cls,
        *,
        id: Optional[Any] = None,
        data: Optional[Dict[str, Any]] = None,
        message: Optional[str] = None,
        revalidate: Optional[List[str]] = None,
    ) -> "ActionResult":
        return cls(
            success=True,
            id=str(id) if id is not None else None,
            data=data,
            message=message,
            revalidate=list(revalidate or []),
        )

    @classmethod
    def fail(
        cls,
        kind: ErrorKind,
        error: str,
        errors: Optional[Dict[str, List[str]]] = None,
    ) -> "ActionResult":
        return cls(success=False, kind=kind, error=error, errors=errors)

    @property
    def status_code(self) -> int:
        if self.success:
            return 200
        return _STATUS.get(self.kind or ErrorKind.UNEXPECTED, 500)
