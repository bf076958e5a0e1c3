from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict

from .forms import FormSchema


class CasePartyForm(FormSchema):
    required_messages = {"name": "party.name_required", "case_id": "party.required"}

    case_id: Optional[str] = None
    name: str
    role: Optional[str] = None
    type: Optional[str] = None
    contact: Optional[str] = None

    def to_fields(self) -> dict:
        return self.model_dump(exclude={"case_id"})


class CasePartyOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    case_id: str
    name: str
    role: Optional[str] = None
    type: Optional[str] = None
    contact: Optional[str] = None
