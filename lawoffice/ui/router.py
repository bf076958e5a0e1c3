from __future__ import annotations

import urllib.parse
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, File, Request, UploadFile
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates
from sqlalchemy.orm import Session

from lawoffice.api.deps import form_payload, get_db, get_store, get_user
from lawoffice.core.auth import CurrentUser
from lawoffice.core.config import settings
from lawoffice.core.messages import msg
from lawoffice.core.paths import templates_dir
from lawoffice.repositories.court_repo import list_courts
from lawoffice.schemas.finance import INVOICE_STATUSES
from lawoffice.schemas.result import ActionResult
from lawoffice.services import (
    bill_service,
    case_document_service,
    case_event_service,
    case_party_service,
    case_service,
    client_service,
    court_session_service,
    invoice_service,
    receipt_service,
)
from lawoffice.services.activity_service import get_activities_page
from lawoffice.services.dashboard_service import get_calendar_entries, get_overview_metrics, month_bounds
from lawoffice.services.storage_service import ObjectStore
from lawoffice.tools.seed_demo_data import seed_demo_data

templates = Jinja2Templates(directory=str(templates_dir()))
templates.env.filters["urlencode"] = lambda s: urllib.parse.quote(str(s), safe="")
templates.env.globals["office_name"] = settings.office_name

ui_router = APIRouter(tags=["ui"], include_in_schema=False)


def _page(request: Request, name: str, ctx: dict, status_code: int = 200) -> HTMLResponse:
    """Render ``name``; plain GETs (no query string) go through the page cache."""
    cache = request.app.state.page_cache
    cacheable = request.method == "GET" and not request.url.query and status_code == 200
    if cacheable:
        html = cache.get(request.url.path)
        if html is not None:
            return HTMLResponse(html)
    resp = templates.TemplateResponse(request, name, ctx, status_code=status_code)
    if cacheable:
        cache.put(request.url.path, resp.body.decode("utf-8"))
    return resp


def _done(request: Request, result: ActionResult, success_url: str, failure_url: str) -> RedirectResponse:
    if result.success:
        request.app.state.page_cache.invalidate_many(result.revalidate)
        sep = "&" if "?" in success_url else "?"
        url = f"{success_url}{sep}ok={urllib.parse.quote(result.message or '')}" if result.message else success_url
        return RedirectResponse(url=url, status_code=303)
    return RedirectResponse(url=f"{failure_url}?error={urllib.parse.quote(result.error or '')}", status_code=303)


# ---- dashboard ---------------------------------------------------------------

@ui_router.get("/", response_class=HTMLResponse)
def overview(request: Request, db: Session = Depends(get_db)):
    today = date.today()
    start, end = month_bounds(today.year, today.month)
    return templates.TemplateResponse(
        request,
        "dashboard.html",
        {
            "metrics": get_overview_metrics(db, today=today),
            "calendar": get_calendar_entries(db, start, end),
            "today": today,
        },
    )


@ui_router.post("/ui/seed_demo")
def seed_demo(
    request: Request,
    db: Session = Depends(get_db),
    user: Optional[CurrentUser] = Depends(get_user),
):
    """Fill an empty install with demo clients, cases and sessions."""
    if user is None:
        return templates.TemplateResponse(request, "not_found.html", {"title": "غير مصرح", "message": msg("auth.required")}, status_code=401)
    seed_demo_data(db, user=user)
    request.app.state.page_cache.clear()
    return RedirectResponse(url="/", status_code=303)


# ---- clients -----------------------------------------------------------------

@ui_router.get("/clients", response_class=HTMLResponse)
def clients_page(request: Request, search: str = "", db: Session = Depends(get_db)):
    return _page(request, "clients.html", {"clients": client_service.list_clients(db, search=search), "search": search})


@ui_router.get("/clients/new", response_class=HTMLResponse)
def client_new_form(request: Request):
    return templates.TemplateResponse(request, "client_form.html", {"client": None, "form": {}, "errors": {}})


@ui_router.post("/clients/new")
def client_create(
    request: Request,
    form: dict = Depends(form_payload),
    db: Session = Depends(get_db),
    user: Optional[CurrentUser] = Depends(get_user),
):
    result = client_service.add_client(db, user, form)
    if not result.success:
        return templates.TemplateResponse(
            request,
            "client_form.html",
            {"client": None, "form": form, "errors": result.errors or {}, "error": result.error},
            status_code=result.status_code,
        )
    return _done(request, result, f"/clients/{result.id}", "/clients/new")


@ui_router.get("/clients/{client_id}", response_class=HTMLResponse)
def client_detail(request: Request, client_id: str, db: Session = Depends(get_db)):
    c = client_service.get_client(db, client_id)
    if c is None:
        return templates.TemplateResponse(request, "not_found.html", {"message": "العميل غير موجود"}, status_code=404)
    return templates.TemplateResponse(
        request,
        "client_detail.html",
        {
            "client": c,
            "cases": case_service.list_cases(db, client_id=client_id),
            "invoices": invoice_service.list_invoices(db, client_id=client_id),
        },
    )


@ui_router.get("/clients/{client_id}/edit", response_class=HTMLResponse)
def client_edit_form(request: Request, client_id: str, db: Session = Depends(get_db)):
    c = client_service.get_client(db, client_id)
    return templates.TemplateResponse(request, "client_form.html", {"client": c, "form": {}, "errors": {}})


@ui_router.post("/clients/{client_id}/edit")
def client_update(
    client_id: str,
    request: Request,
    form: dict = Depends(form_payload),
    db: Session = Depends(get_db),
    user: Optional[CurrentUser] = Depends(get_user),
):
    result = client_service.update_client(db, user, client_id, form)
    return _done(request, result, f"/clients/{client_id}", f"/clients/{client_id}/edit")


@ui_router.post("/clients/{client_id}/delete")
def client_delete(
    client_id: str,
    request: Request,
    db: Session = Depends(get_db),
    user: Optional[CurrentUser] = Depends(get_user),
):
    result = client_service.delete_client(db, user, client_id)
    return _done(request, result, "/clients", f"/clients/{client_id}")


# ---- cases -------------------------------------------------------------------

@ui_router.get("/cases", response_class=HTMLResponse)
def cases_page(request: Request, search: str = "", status: str = "", db: Session = Depends(get_db)):
    cases = case_service.list_cases(db, search=search, status=status or None)
    return _page(
        request,
        "cases.html",
        {"cases": cases, "search": search, "status": status, "statuses": case_service.CASE_STATUSES},
    )


def _case_form_ctx(db: Session, case=None, form=None, errors=None, error=None) -> dict:
    return {
        "case": case,
        "form": form or {},
        "errors": errors or {},
        "error": error,
        "courts": list_courts(db),
        "clients": client_service.list_clients(db),
        "statuses": case_service.CASE_STATUSES,
        "priorities": case_service.CASE_PRIORITIES,
    }


@ui_router.get("/cases/new", response_class=HTMLResponse)
def case_new_form(request: Request, db: Session = Depends(get_db)):
    return templates.TemplateResponse(request, "case_form.html", _case_form_ctx(db))


@ui_router.post("/cases/new")
def case_create(
    request: Request,
    form: dict = Depends(form_payload),
    db: Session = Depends(get_db),
    user: Optional[CurrentUser] = Depends(get_user),
):
    result = case_service.create_case(db, user, form)
    if not result.success:
        return templates.TemplateResponse(
            request,
            "case_form.html",
            _case_form_ctx(db, form=form, errors=result.errors, error=result.error),
            status_code=result.status_code,
        )
    return _done(request, result, f"/cases/{result.id}", "/cases/new")


@ui_router.get("/cases/{case_id}", response_class=HTMLResponse)
def case_detail(request: Request, case_id: str, db: Session = Depends(get_db)):
    c = case_service.get_case(db, case_id)
    if c is None:
        return templates.TemplateResponse(request, "not_found.html", {"message": "القضية غير موجودة"}, status_code=404)
    return _page(
        request,
        "case_detail.html",
        {
            "case": c,
            "sessions": court_session_service.list_case_sessions(db, case_id),
            "parties": case_party_service.list_case_parties(db, case_id),
            "documents": case_document_service.list_case_documents(db, case_id),
            "events": case_event_service.get_case_events(db, case_id),
            "receipts": receipt_service.list_receipts(db, case_id=case_id),
        },
    )


@ui_router.get("/cases/{case_id}/edit", response_class=HTMLResponse)
def case_edit_form(request: Request, case_id: str, db: Session = Depends(get_db)):
    return templates.TemplateResponse(request, "case_form.html", _case_form_ctx(db, case=case_service.get_case(db, case_id)))


@ui_router.post("/cases/{case_id}/edit")
def case_update(
    case_id: str,
    request: Request,
    form: dict = Depends(form_payload),
    db: Session = Depends(get_db),
    user: Optional[CurrentUser] = Depends(get_user),
):
    result = case_service.update_case(db, user, case_id, form)
    return _done(request, result, f"/cases/{case_id}", f"/cases/{case_id}/edit")


@ui_router.post("/cases/{case_id}/delete")
def case_delete(
    case_id: str,
    request: Request,
    db: Session = Depends(get_db),
    store: ObjectStore = Depends(get_store),
    user: Optional[CurrentUser] = Depends(get_user),
):
    result = case_service.delete_case(db, user, case_id, store=store)
    return _done(request, result, "/cases", f"/cases/{case_id}")


# ---- case children -----------------------------------------------------------

@ui_router.get("/cases/{case_id}/sessions", response_class=HTMLResponse)
def case_sessions_page(request: Request, case_id: str, db: Session = Depends(get_db)):
    c = case_service.get_case(db, case_id)
    if c is None:
        return templates.TemplateResponse(request, "not_found.html", {"message": "القضية غير موجودة"}, status_code=404)
    # uncached: past sessions are greyed out relative to today
    return templates.TemplateResponse(
        request,
        "sessions.html",
        {"case": c, "sessions": court_session_service.list_case_sessions(db, case_id), "today": date.today()},
    )


@ui_router.post("/cases/{case_id}/sessions")
def session_create(
    case_id: str,
    request: Request,
    form: dict = Depends(form_payload),
    db: Session = Depends(get_db),
    user: Optional[CurrentUser] = Depends(get_user),
):
    result = court_session_service.add_court_session(db, user, {**form, "case_id": case_id})
    return _done(request, result, f"/cases/{case_id}/sessions", f"/cases/{case_id}/sessions")


@ui_router.post("/sessions/{session_id}/edit")
def session_update(
    session_id: str,
    request: Request,
    form: dict = Depends(form_payload),
    db: Session = Depends(get_db),
    user: Optional[CurrentUser] = Depends(get_user),
):
    s = court_session_service.get_session(db, session_id)
    back = f"/cases/{s.case_id}/sessions" if s is not None else "/cases"
    result = court_session_service.update_court_session(db, user, session_id, form)
    return _done(request, result, back, back)


@ui_router.post("/sessions/{session_id}/delete")
def session_delete(
    session_id: str,
    request: Request,
    db: Session = Depends(get_db),
    user: Optional[CurrentUser] = Depends(get_user),
):
    s = court_session_service.get_session(db, session_id)
    back = f"/cases/{s.case_id}/sessions" if s is not None else "/cases"
    result = court_session_service.delete_court_session(db, user, session_id)
    return _done(request, result, back, back)


@ui_router.post("/cases/{case_id}/parties")
def party_create(
    case_id: str,
    request: Request,
    form: dict = Depends(form_payload),
    db: Session = Depends(get_db),
    user: Optional[CurrentUser] = Depends(get_user),
):
    result = case_party_service.add_case_party(db, user, {**form, "case_id": case_id})
    return _done(request, result, f"/cases/{case_id}", f"/cases/{case_id}")


@ui_router.post("/parties/{party_id}/delete")
def party_delete(
    party_id: str,
    request: Request,
    case_id: str = "",
    db: Session = Depends(get_db),
    user: Optional[CurrentUser] = Depends(get_user),
):
    result = case_party_service.delete_case_party(db, user, party_id)
    return _done(request, result, f"/cases/{case_id}", f"/cases/{case_id}")


@ui_router.post("/cases/{case_id}/documents")
def document_create(
    case_id: str,
    request: Request,
    file: Optional[UploadFile] = File(default=None),
    form: dict = Depends(form_payload),
    db: Session = Depends(get_db),
    store: ObjectStore = Depends(get_store),
    user: Optional[CurrentUser] = Depends(get_user),
):
    result = case_document_service.add_case_document(db, user, {**form, "case_id": case_id}, store=store, upload=file)
    return _done(request, result, f"/cases/{case_id}", f"/cases/{case_id}")


@ui_router.post("/documents/{document_id}/delete")
def document_delete(
    document_id: str,
    request: Request,
    case_id: str = "",
    db: Session = Depends(get_db),
    store: ObjectStore = Depends(get_store),
    user: Optional[CurrentUser] = Depends(get_user),
):
    result = case_document_service.delete_case_document(db, user, document_id, store=store)
    return _done(request, result, f"/cases/{case_id}", f"/cases/{case_id}")


@ui_router.post("/cases/{case_id}/events")
def event_create(
    case_id: str,
    request: Request,
    form: dict = Depends(form_payload),
    db: Session = Depends(get_db),
    user: Optional[CurrentUser] = Depends(get_user),
):
    result = case_event_service.add_case_event(db, user, {**form, "case_id": case_id})
    return _done(request, result, f"/cases/{case_id}", f"/cases/{case_id}")


@ui_router.post("/events/{event_id}/delete")
def event_delete(
    event_id: str,
    request: Request,
    case_id: str = "",
    db: Session = Depends(get_db),
    user: Optional[CurrentUser] = Depends(get_user),
):
    result = case_event_service.delete_case_event(db, user, event_id)
    return _done(request, result, f"/cases/{case_id}", f"/cases/{case_id}")


# ---- finance -----------------------------------------------------------------

@ui_router.get("/bills", response_class=HTMLResponse)
def bills_page(request: Request, db: Session = Depends(get_db)):
    return _page(request, "bills.html", {"bills": bill_service.list_bills(db)})


@ui_router.get("/receipts", response_class=HTMLResponse)
def receipts_page(request: Request, status: str = "", db: Session = Depends(get_db)):
    return _page(request, "receipts.html", {"receipts": receipt_service.list_receipts(db, status=status or None)})


@ui_router.post("/receipts/{receipt_id}/status")
def receipt_status(
    receipt_id: str,
    request: Request,
    form: dict = Depends(form_payload),
    db: Session = Depends(get_db),
    user: Optional[CurrentUser] = Depends(get_user),
):
    result = receipt_service.update_receipt_status(db, user, receipt_id, form.get("status") or "")
    return _done(request, result, "/receipts", "/receipts")


@ui_router.get("/invoices", response_class=HTMLResponse)
def invoices_page(request: Request, status: str = "", db: Session = Depends(get_db)):
    return _page(request, "invoices.html", {"invoices": invoice_service.list_invoices(db, status=status or None)})


@ui_router.get("/invoices/{invoice_id}", response_class=HTMLResponse)
def invoice_detail(request: Request, invoice_id: str, db: Session = Depends(get_db), store: ObjectStore = Depends(get_store)):
    inv = invoice_service.get_invoice(db, invoice_id)
    if inv is None:
        return templates.TemplateResponse(request, "not_found.html", {"message": "الفاتورة غير موجودة"}, status_code=404)
    pdf_url = store.get_url(invoice_service.BUCKET, inv.pdf_path) if inv.pdf_path else None
    return _page(request, "invoice_detail.html", {"invoice": inv, "pdf_url": pdf_url, "statuses": INVOICE_STATUSES})


@ui_router.post("/invoices/{invoice_id}/status")
def invoice_status(
    invoice_id: str,
    request: Request,
    form: dict = Depends(form_payload),
    db: Session = Depends(get_db),
    user: Optional[CurrentUser] = Depends(get_user),
):
    result = invoice_service.update_invoice_status(db, user, invoice_id, form)
    return _done(request, result, f"/invoices/{invoice_id}", f"/invoices/{invoice_id}")


@ui_router.post("/invoices/{invoice_id}/pdf")
def invoice_pdf(
    invoice_id: str,
    request: Request,
    db: Session = Depends(get_db),
    store: ObjectStore = Depends(get_store),
    user: Optional[CurrentUser] = Depends(get_user),
):
    result = invoice_service.generate_invoice_pdf(db, user, invoice_id, store)
    return _done(request, result, f"/invoices/{invoice_id}", f"/invoices/{invoice_id}")


# ---- activities --------------------------------------------------------------

@ui_router.get("/activities", response_class=HTMLResponse)
def activities_page(request: Request, db: Session = Depends(get_db)):
    page = get_activities_page(db, request.query_params)
    return templates.TemplateResponse(request, "activities.html", page)
