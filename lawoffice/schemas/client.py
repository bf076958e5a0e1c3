from __future__ import annotations

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict

from .forms import FormSchema


class ClientForm(FormSchema):
    required_messages = {
        "first_name": "client.name_required",
        "last_name": "client.name_required",
        "client_type": "client.type_required",
    }

    first_name: str
    last_name: str
    client_type: Literal["individual", "company"]
    company_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    national_id: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    postal_code: Optional[str] = None
    notes: Optional[str] = None

    def to_fields(self) -> dict:
        fields = self.model_dump()
        # company name only means something for organisations
        if self.client_type != "company":
            fields["company_name"] = None
        return fields


class ClientOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    client_type: str
    first_name: str
    last_name: str
    company_name: Optional[str] = None
    display_name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    national_id: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    postal_code: Optional[str] = None
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
