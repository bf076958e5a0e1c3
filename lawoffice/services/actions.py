"""Shared contract of the entity action modules.

Every action takes the database session and the current user explicitly,
checks authentication first and never raises: expected failures and
unexpected exceptions alike come back as an :class:`ActionResult`.
"""

from __future__ import annotations

import logging
from functools import wraps
from typing import Any, Callable, Dict, List, Optional, TypeVar

from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from lawoffice.core.auth import CurrentUser
from lawoffice.core.messages import msg
from lawoffice.schemas.forms import first_error
from lawoffice.schemas.result import ActionResult, ErrorKind

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ActionError(Exception):
    """Raised inside an action to stop with an expected failure result."""

    def __init__(self, result: ActionResult) -> None:
        super().__init__(result.error)
        self.result = result


def not_found(key: str = "error.not_found") -> ActionError:
    return ActionError(ActionResult.fail(ErrorKind.NOT_FOUND, msg(key)))


def invalid(errors: Dict[str, List[str]], message: Optional[str] = None) -> ActionError:
    return ActionError(ActionResult.fail(ErrorKind.VALIDATION, message or first_error(errors), errors=errors))


def require(obj: Optional[T], key: str = "error.not_found") -> T:
    if obj is None:
        raise not_found(key)
    return obj


def dump(schema: type[BaseModel], obj: Any) -> Dict[str, Any]:
    return schema.model_validate(obj).model_dump(mode="json")


def _store_detail(exc: SQLAlchemyError) -> str:
    orig = getattr(exc, "orig", None)
    return str(orig if orig is not None else exc)


def action(auth_message: str = "auth.required", store_message: str = "error.store") -> Callable:
    """Wrap an action ``fn(db, user, ...)`` with the auth check and the catch-all."""

    def decorator(fn: Callable[..., ActionResult]) -> Callable[..., ActionResult]:
        @wraps(fn)
        def wrapper(db: Session, user: Optional[CurrentUser], *args, **kwargs) -> ActionResult:
            if user is None:
                return ActionResult.fail(ErrorKind.AUTH, msg(auth_message))
            try:
                return fn(db, user, *args, **kwargs)
            except ActionError as e:
                db.rollback()
                return e.result
            except SQLAlchemyError as e:
                db.rollback()
                logger.exception("Store error in %s", fn.__name__)
                return ActionResult.fail(ErrorKind.STORE, msg(store_message, detail=_store_detail(e)))
            except Exception:
                db.rollback()
                logger.exception("Unexpected error in %s", fn.__name__)
                return ActionResult.fail(ErrorKind.UNEXPECTED, msg("error.unexpected"))

        return wrapper

    return decorator
