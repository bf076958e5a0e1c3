from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from .forms import FormSchema


class CaseDocumentForm(FormSchema):
    required_messages = {"name": "document.name_required", "case_id": "document.required"}

    case_id: Optional[str] = None
    name: str
    description: Optional[str] = None
    document_date: Optional[date] = None
    file_path: Optional[str] = None
    file_name: Optional[str] = None
    file_type: Optional[str] = None
    file_size: Optional[int] = Field(default=None, ge=0)

    def to_fields(self) -> dict:
        return self.model_dump(exclude={"case_id"})


class CaseDocumentOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    case_id: str
    name: str
    description: Optional[str] = None
    document_date: Optional[date] = None
    file_path: Optional[str] = None
    file_name: Optional[str] = None
    file_type: Optional[str] = None
    file_size: Optional[int] = None
    created_at: Optional[datetime] = None
