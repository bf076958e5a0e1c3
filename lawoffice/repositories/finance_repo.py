from __future__ import annotations

from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session, joinedload

from lawoffice.db.models import Bill, Invoice, InvoiceItem, Receipt


# ---- bills -----------------------------------------------------------------

def list_bills(db: Session, case_id: Optional[str] = None) -> List[Bill]:
    q = db.query(Bill)
    if case_id:
        q = q.filter(Bill.case_id == case_id)
    return q.order_by(Bill.bill_date.desc(), Bill.created_at.desc()).all()


def get_bill(db: Session, bill_id: str) -> Optional[Bill]:
    return db.query(Bill).filter(Bill.id == bill_id).first()


def create_bill(db: Session, fields: Dict[str, Any]) -> Bill:
    b = Bill(**fields)
    db.add(b)
    db.flush()
    return b


# ---- receipts --------------------------------------------------------------

def list_receipts(db: Session, case_id: Optional[str] = None, status: Optional[str] = None) -> List[Receipt]:
    q = db.query(Receipt)
    if case_id:
        q = q.filter(Receipt.case_id == case_id)
    if status:
        q = q.filter(Receipt.status == status)
    return q.order_by(Receipt.receipt_date.desc(), Receipt.created_at.desc()).all()


def get_receipt(db: Session, receipt_id: str) -> Optional[Receipt]:
    return db.query(Receipt).options(joinedload(Receipt.case)).filter(Receipt.id == receipt_id).first()


def create_receipt(db: Session, fields: Dict[str, Any]) -> Receipt:
    r = Receipt(**fields)
    db.add(r)
    db.flush()
    return r


# ---- invoices --------------------------------------------------------------

def list_invoices(db: Session, client_id: Optional[str] = None, status: Optional[str] = None) -> List[Invoice]:
    q = db.query(Invoice).options(joinedload(Invoice.client))
    if client_id:
        q = q.filter(Invoice.client_id == client_id)
    if status:
        q = q.filter(Invoice.status == status)
    return q.order_by(Invoice.issue_date.desc(), Invoice.created_at.desc()).all()


def get_invoice(db: Session, invoice_id: str) -> Optional[Invoice]:
    return (
        db.query(Invoice)
        .options(joinedload(Invoice.client), joinedload(Invoice.items))
        .filter(Invoice.id == invoice_id)
        .first()
    )


def create_invoice(db: Session, fields: Dict[str, Any]) -> Invoice:
    inv = Invoice(**fields)
    db.add(inv)
    db.flush()
    return inv


def replace_items(db: Session, invoice: Invoice, items: List[Dict[str, Any]]) -> List[InvoiceItem]:
    # delete-orphan cascade removes the previous rows
    invoice.items.clear()
    db.flush()
    for pos, it in enumerate(items):
        invoice.items.append(
            InvoiceItem(
                position=pos,
                description=it["description"],
                quantity=it["quantity"],
                unit_price=it["unit_price"],
                amount=it["amount"],
            )
        )
    db.flush()
    return list(invoice.items)


# ---- shared ----------------------------------------------------------------

def apply_fields(db: Session, obj: Any, fields: Dict[str, Any]) -> Any:
    for key, value in fields.items():
        setattr(obj, key, value)
    db.flush()
    return obj


def delete_row(db: Session, obj: Any) -> None:
    db.delete(obj)
    db.flush()
