from __future__ import annotations

from datetime import date, datetime
from typing import List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from .forms import FormSchema


class CaseForm(FormSchema):
    required_messages = {"title": "case.title_required"}

    title: str
    case_number: Optional[str] = None
    case_type: Optional[str] = None
    status: str = "active"
    priority: str = "medium"
    description: Optional[str] = None
    court_id: Optional[str] = None
    client_id: Optional[str] = None
    # the case form calls the monetary value "fee amount"
    fee_amount: Optional[float] = Field(default=None, ge=0)
    fee_type: Optional[str] = None
    # JSON arrays submitted by the "new case" wizard
    parties: Optional[str] = None
    documents: Optional[str] = None

    def to_fields(self) -> dict:
        return {
            "title": self.title,
            "case_number": self.case_number,
            "case_type": self.case_type,
            "status": self.status or "active",
            "priority": self.priority or "medium",
            "description": self.description,
            "court_id": self.court_id,
            "client_id": self.client_id,
            "case_value": self.fee_amount,
            "fee_type": self.fee_type,
        }


class PartyIn(BaseModel):
    name: str = Field(min_length=1)
    role: Optional[str] = None
    type: Optional[str] = None
    contact: Optional[str] = None


class DocumentIn(BaseModel):
    name: str = Field(min_length=1)
    description: Optional[str] = None
    document_date: Optional[date] = Field(default=None, validation_alias=AliasChoices("date", "document_date"))
    file_path: Optional[str] = None
    file_name: Optional[str] = None
    file_type: Optional[str] = None
    file_size: Optional[int] = None


class CaseOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    case_number: str
    case_type: Optional[str] = None
    status: str
    priority: str
    description: Optional[str] = None
    court_id: Optional[str] = None
    client_id: Optional[str] = None
    case_value: Optional[float] = None
    fee_type: Optional[str] = None
    next_session_date: Optional[date] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class CourtOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    court_type: Optional[str] = None
    location: Optional[str] = None
