from __future__ import annotations

from datetime import date, datetime
from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field

from lawoffice.core.messages import msg

from .forms import FormSchema, normalize_form
from .result import ActionResult, ErrorKind

_REQUIRED = (
    ("session_date", "session.date_required"),
    ("session_time", "session.time_required"),
    ("location", "session.location_required"),
)


def validate_session_form(form: Mapping[str, Any], is_update: bool = False) -> ActionResult:
    """Check a submitted court-session form.

    Only presence is checked here; the case reference is required when
    creating but not when updating. No cross-field rules: a session may be
    dated in the past.
    """
    data = normalize_form(form)
    errors: dict[str, list[str]] = {}

    if not is_update and not data.get("case_id"):
        errors["case_id"] = [msg("session.case_required")]
    for field, key in _REQUIRED:
        if not data.get(field):
            errors[field] = [msg(key)]

    if errors:
        return ActionResult.fail(ErrorKind.VALIDATION, msg("error.validation"), errors=errors)
    return ActionResult(success=True)


class CourtSessionForm(FormSchema):
    required_messages = {
        "case_id": "session.case_required",
        "session_date": "session.date_required",
        "session_time": "session.time_required",
        "location": "session.location_required",
    }

    case_id: Optional[str] = None
    session_date: date
    session_time: str = Field(pattern=r"^\d{1,2}:\d{2}(:\d{2})?$")
    location: str
    session_type: str = "regular"
    notes: Optional[str] = None

    def to_fields(self) -> dict:
        return {
            "session_date": self.session_date,
            "session_time": self.session_time,
            "session_type": self.session_type or "regular",
            "location": self.location,
            "notes": self.notes or "",
        }


class CourtSessionOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    case_id: str
    session_date: date
    session_time: Optional[str] = None
    session_type: str
    location: Optional[str] = None
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
