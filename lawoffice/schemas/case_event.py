from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator

from .forms import FormSchema

_TRUTHY = {"1", "true", "on", "yes"}


class CaseEventForm(FormSchema):
    required_messages = {
        "case_id": "event.case_required",
        "event_date": "event.date_required",
        "title": "event.title_required",
        "event_type": "event.type_required",
    }

    case_id: str
    event_date: date
    title: str
    event_type: str
    description: Optional[str] = None
    is_decision: bool = False

    @field_validator("is_decision", mode="before")
    @classmethod
    def _checkbox(cls, v):
        # unchecked boxes are simply absent from the form
        if v is None:
            return False
        if isinstance(v, str):
            return v.lower() in _TRUTHY
        return v

    def to_fields(self) -> dict:
        return self.model_dump(exclude={"case_id"})


class CaseEventOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    case_id: str
    event_date: date
    event_type: str
    title: str
    description: Optional[str] = None
    is_decision: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
