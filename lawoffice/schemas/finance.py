from __future__ import annotations

import json
from datetime import date, datetime
from typing import List, Literal, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError

from .forms import FormSchema

INVOICE_STATUSES = ("draft", "sent", "paid", "overdue")


# ---- bills -----------------------------------------------------------------

class BillForm(FormSchema):
    required_messages = {
        "bill_date": "bill.required",
        "amount": "bill.required",
        "bill_type": "bill.required",
        "file_path": "bill.required",
    }

    bill_date: date
    amount: float
    bill_type: str
    file_path: str
    file_name: Optional[str] = None
    description: Optional[str] = None
    vendor: Optional[str] = None
    expense_category: Optional[str] = None
    case_id: Optional[str] = None


class BillUpdateForm(FormSchema):
    """Partial update: blank or absent fields keep their stored value."""

    bill_date: Optional[date] = None
    amount: Optional[float] = None
    bill_type: Optional[str] = None
    file_path: Optional[str] = None
    file_name: Optional[str] = None
    description: Optional[str] = None
    vendor: Optional[str] = None
    expense_category: Optional[str] = None
    case_id: Optional[str] = None


class BillOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    bill_date: date
    amount: float
    description: Optional[str] = None
    bill_type: str
    vendor: Optional[str] = None
    expense_category: Optional[str] = None
    case_id: Optional[str] = None
    file_path: str
    file_name: Optional[str] = None
    created_by: Optional[str] = None
    created_at: Optional[datetime] = None


# ---- receipts --------------------------------------------------------------

class ReceiptForm(FormSchema):
    required_messages = {
        k: "receipt.required"
        for k in ("title", "amount", "category", "date", "receipt_date", "payment_method", "status", "file_path")
    }

    title: str
    amount: float
    category: str
    receipt_date: date = Field(validation_alias=AliasChoices("date", "receipt_date"))
    payment_method: str
    status: str
    file_path: str
    reference_number: Optional[str] = None
    case_id: Optional[str] = None
    vendor: Optional[str] = None
    notes: Optional[str] = None


class ReceiptOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    amount: float
    category: str
    receipt_date: date
    payment_method: str
    status: str
    reference_number: Optional[str] = None
    case_id: Optional[str] = None
    vendor: Optional[str] = None
    notes: Optional[str] = None
    file_path: str
    created_by: Optional[str] = None
    updated_by: Optional[str] = None


# ---- invoices --------------------------------------------------------------

class InvoiceItemIn(BaseModel):
    description: str = Field(min_length=1)
    quantity: float = Field(default=1.0, gt=0)
    unit_price: float = Field(default=0.0, ge=0)
    total: Optional[float] = None

    @property
    def amount(self) -> float:
        if self.total is not None:
            return round(self.total, 2)
        return round(self.quantity * self.unit_price, 2)


class InvoiceForm(FormSchema):
    required_messages = {
        k: "invoice.required" for k in ("client_id", "invoice_number", "issue_date", "due_date")
    }

    invoice_id: Optional[str] = None
    client_id: str
    invoice_number: str
    issue_date: date
    due_date: date
    notes: Optional[str] = None
    tax_rate: float = Field(default=0.0, ge=0)
    subtotal: Optional[float] = None
    tax_amount: Optional[float] = None
    total: Optional[float] = None
    items: Optional[str] = None

    def parse_items(self) -> List[InvoiceItemIn]:
        """Decode the JSON ``items`` field. Raises ValueError on malformed input."""
        try:
            raw = json.loads(self.items or "[]")
        except json.JSONDecodeError as e:
            raise ValueError(str(e)) from e
        if not isinstance(raw, list):
            raise ValueError("items must be a list")
        try:
            return [InvoiceItemIn.model_validate(it) for it in raw]
        except ValidationError as e:
            raise ValueError(str(e)) from e

    def totals(self, items: List[InvoiceItemIn]) -> dict:
        subtotal = self.subtotal if self.subtotal is not None else round(sum(i.amount for i in items), 2)
        tax_amount = self.tax_amount if self.tax_amount is not None else round(subtotal * self.tax_rate / 100.0, 2)
        total = self.total if self.total is not None else round(subtotal + tax_amount, 2)
        return {"amount": subtotal, "tax_rate": self.tax_rate, "tax_amount": tax_amount, "total_amount": total}


class InvoiceStatusForm(FormSchema):
    status: Literal["draft", "sent", "paid", "overdue"]


class InvoiceItemOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    description: str
    quantity: float
    unit_price: float
    amount: float


class InvoiceOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    client_id: str
    invoice_number: str
    issue_date: date
    due_date: date
    amount: float
    tax_rate: float
    tax_amount: float
    total_amount: float
    status: str
    notes: Optional[str] = None
    pdf_path: Optional[str] = None
    items: List[InvoiceItemOut] = []
