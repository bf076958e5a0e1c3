from __future__ import annotations

import io
import json
from types import SimpleNamespace

import pytest

from lawoffice.db.models import Activity, InvoiceItem
from lawoffice.schemas.result import ErrorKind
from lawoffice.services import bill_service, case_service, invoice_service, receipt_service
from lawoffice.services.case_document_service import add_case_document, delete_case_document
from lawoffice.services.client_service import add_client


@pytest.fixture
def client_id(db, user):
    res = add_client(db, user, {"client_type": "company", "first_name": "Nadia", "last_name": "Karam", "company_name": "Karam Trading"})
    return res.id


def _invoice_form(client_id, items, **extra):
    form = {
        "client_id": client_id,
        "invoice_number": "INV-2025-001",
        "issue_date": "2025-01-10",
        "due_date": "2025-02-10",
        "tax_rate": "15",
        "items": json.dumps(items),
    }
    form.update(extra)
    return form


ITEMS = [
    {"description": "Consultation", "quantity": 2, "unit_price": 300},
    {"description": "Court filing", "quantity": 1, "unit_price": 150},
]


# ---- bills -----------------------------------------------------------------

def test_bill_requires_file(db, user):
    res = bill_service.create_bill(db, user, {"bill_date": "2025-01-01", "amount": "10", "bill_type": "fee"})
    assert res.kind == ErrorKind.VALIDATION
    assert "file_path" in res.errors


def test_bill_partial_update_changes_only_given_fields(db, user):
    res = bill_service.create_bill(
        db, user, {"bill_date": "2025-01-01", "amount": "10", "bill_type": "fee", "file_path": "x.pdf", "vendor": "V"}
    )
    assert res.data["created_by"] == user.id
    upd = bill_service.update_bill(db, user, res.id, {"amount": "25.5", "vendor": ""})
    assert upd.success
    assert upd.data["amount"] == 25.5
    assert upd.data["vendor"] == "V"
    assert upd.data["bill_type"] == "fee"


def test_bill_delete_removes_stored_file(db, user, store):
    path = store.upload("bills", "b.pdf", b"%PDF")
    res = bill_service.create_bill(
        db, user, {"bill_date": "2025-01-01", "amount": "10", "bill_type": "fee", "file_path": path}
    )
    assert bill_service.delete_bill(db, user, res.id, store=store).success
    assert not store.exists("bills", path)
    assert bill_service.get_bill(db, res.id) is None


# ---- receipts --------------------------------------------------------------

def _receipt_form(**extra):
    form = {
        "title": "Court fee",
        "amount": "120",
        "category": "fees",
        "date": "2025-03-01",
        "payment_method": "cash",
        "status": "pending",
        "file_path": "r.pdf",
    }
    form.update(extra)
    return form


def test_receipt_amount_must_be_numeric(db, user):
    res = receipt_service.create_receipt(db, user, _receipt_form(amount="abc"))
    assert res.kind == ErrorKind.VALIDATION
    assert "amount" in res.errors


def test_receipt_status_update_and_paths(db, user, make_case):
    case_id = make_case()
    res = receipt_service.create_receipt(db, user, _receipt_form(case_id=case_id))
    assert res.success
    assert res.data["receipt_date"] == "2025-03-01"
    assert f"/cases/{case_id}" in res.revalidate

    upd = receipt_service.update_receipt_status(db, user, res.id, "approved")
    assert upd.data["status"] == "approved"
    assert upd.data["updated_by"] == user.id


def test_receipt_delete_removes_file_best_effort(db, user, store):
    path = store.upload("receipts", "r.pdf", b"data")
    res = receipt_service.create_receipt(db, user, _receipt_form(file_path=path))
    assert receipt_service.delete_receipt(db, user, res.id, store=store).success
    assert not store.exists("receipts", path)

    # a record whose file is already gone still deletes
    res = receipt_service.create_receipt(db, user, _receipt_form(file_path="missing.pdf"))
    assert receipt_service.delete_receipt(db, user, res.id, store=store).success


# ---- invoices --------------------------------------------------------------

def test_new_invoice_is_draft_with_totals(db, user, client_id):
    res = invoice_service.save_invoice(db, user, _invoice_form(client_id, ITEMS))
    assert res.success
    data = res.data
    assert data["status"] == "draft"
    assert data["amount"] == 750.0
    assert data["tax_amount"] == 112.5
    assert data["total_amount"] == 862.5
    assert [i["description"] for i in data["items"]] == ["Consultation", "Court filing"]
    assert f"/clients/{client_id}" in res.revalidate


def test_invoice_update_replaces_items(db, user, client_id):
    res = invoice_service.save_invoice(db, user, _invoice_form(client_id, ITEMS))
    upd = invoice_service.save_invoice(
        db,
        user,
        _invoice_form(client_id, [{"description": "Appeal", "quantity": 1, "unit_price": 1000}], invoice_id=res.id),
    )
    assert upd.success
    assert upd.id == res.id
    assert db.query(InvoiceItem).count() == 1
    assert upd.data["total_amount"] == 1150.0
    actions = [a.action_type for a in db.query(Activity).filter(Activity.entity_type == "invoice").order_by(Activity.id)]
    assert actions == ["create", "update"]


def test_invoice_needs_items(db, user, client_id):
    res = invoice_service.save_invoice(db, user, _invoice_form(client_id, []))
    assert res.kind == ErrorKind.VALIDATION
    assert "items" in res.errors

    form = _invoice_form(client_id, ITEMS)
    form["items"] = "{broken"
    res = invoice_service.save_invoice(db, user, form)
    assert res.kind == ErrorKind.VALIDATION
    assert "items" in res.errors


def test_invoice_status_must_be_known(db, user, client_id):
    res = invoice_service.save_invoice(db, user, _invoice_form(client_id, ITEMS))
    bad = invoice_service.update_invoice_status(db, user, res.id, {"status": "lost"})
    assert bad.kind == ErrorKind.VALIDATION
    ok = invoice_service.update_invoice_status(db, user, res.id, {"status": "sent"})
    assert ok.data["status"] == "sent"


def test_generate_invoice_pdf_stores_file(db, user, client_id, store):
    res = invoice_service.save_invoice(db, user, _invoice_form(client_id, ITEMS, notes="Thank you"))
    pdf = invoice_service.generate_invoice_pdf(db, user, res.id, store)
    assert pdf.success
    path = pdf.data["pdf_path"]
    assert invoice_service.get_invoice(db, res.id).pdf_path == path
    with store.open("invoice-documents", path) as f:
        assert f.read(4) == b"%PDF"

    again = invoice_service.generate_invoice_pdf(db, user, res.id, store)
    assert not store.exists("invoice-documents", path)
    assert store.exists("invoice-documents", again.data["pdf_path"])


# ---- case documents --------------------------------------------------------

def test_document_upload_and_delete(db, user, store, make_case):
    case_id = make_case()
    upload = SimpleNamespace(filename="contract.pdf", file=io.BytesIO(b"0123456789"), content_type="application/pdf")
    res = add_case_document(db, user, {"case_id": case_id, "name": "العقد"}, store=store, upload=upload)
    assert res.success
    assert res.data["file_size"] == 10
    assert res.data["file_name"] == "contract.pdf"
    path = res.data["file_path"]
    assert path.startswith(f"{case_id}/")
    assert store.exists("case-documents", path)

    assert delete_case_document(db, user, res.id, store=store).success
    assert not store.exists("case-documents", path)


def test_case_delete_removes_document_files(db, user, store, make_case):
    case_id = make_case()
    paths = []
    for name in ("a.pdf", "b.pdf"):
        upload = SimpleNamespace(filename=name, file=io.BytesIO(b"x"), content_type="application/pdf")
        res = add_case_document(db, user, {"case_id": case_id, "name": name}, store=store, upload=upload)
        paths.append(res.data["file_path"])

    assert case_service.delete_case(db, user, case_id, store=store).success
    assert not any(store.exists("case-documents", p) for p in paths)
