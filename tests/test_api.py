from __future__ import annotations

from datetime import date, timedelta

AUTH = {"X-User-Id": "lawyer-1", "X-User-Email": "lawyer@example.com"}


def _new_case(http, title="قضية API"):
    r = http.post("/api/cases", data={"title": title}, headers=AUTH)
    assert r.status_code == 200, r.text
    return r.json()["id"]


def test_mutation_without_identity_is_401(http):
    r = http.post("/api/clients", data={"client-type": "individual", "first-name": "a", "last-name": "b"})
    assert r.status_code == 401
    body = r.json()
    assert body["success"] is False
    assert body["kind"] == "auth"
    assert http.get("/api/clients").json() == []


def test_identity_cookie_is_accepted(http):
    http.cookies.set("user_id", "cookie-user")
    r = http.post("/api/clients", data={"client-type": "individual", "first-name": "a", "last-name": "b"})
    assert r.status_code == 200
    acts = http.get("/api/activities", params={"entity_type": "client"}).json()
    assert acts[0]["user_id"] == "cookie-user"


def test_client_crud_over_http(http):
    r = http.post("/api/clients", data={"client-type": "individual", "first-name": "هند", "last-name": "سالم"}, headers=AUTH)
    assert r.status_code == 200
    client_id = r.json()["id"]

    assert http.get(f"/api/clients/{client_id}").json()["display_name"] == "هند سالم"

    r = http.put(f"/api/clients/{client_id}", data={"client-type": "individual", "first-name": "هند", "last-name": ""}, headers=AUTH)
    assert r.status_code == 422
    assert "last_name" in r.json()["errors"]

    assert http.delete(f"/api/clients/{client_id}", headers=AUTH).status_code == 200
    assert http.get(f"/api/clients/{client_id}").status_code == 404
    assert http.delete(f"/api/clients/{client_id}", headers=AUTH).status_code == 404


def test_session_flow_updates_next_session_date(http):
    case_id = _new_case(http)
    tomorrow = (date.today() + timedelta(days=1)).isoformat()

    r = http.post(
        "/api/sessions",
        data={"case-id": case_id, "session-date": tomorrow, "session-time": "09:30"},
        headers=AUTH,
    )
    assert r.status_code == 422
    assert "location" in r.json()["errors"]

    r = http.post(
        "/api/sessions",
        data={"case-id": case_id, "session-date": tomorrow, "session-time": "09:30", "location": "القاعة 1"},
        headers=AUTH,
    )
    assert r.status_code == 200
    session_id = r.json()["id"]
    assert http.get(f"/api/cases/{case_id}").json()["next_session_date"] == tomorrow
    assert [s["id"] for s in http.get("/api/sessions/upcoming").json()] == [session_id]

    assert http.delete(f"/api/sessions/{session_id}", headers=AUTH).status_code == 200
    assert http.get(f"/api/cases/{case_id}").json()["next_session_date"] is None


def test_json_body_is_accepted(http):
    r = http.post(
        "/api/cases",
        json={"title": "JSON", "parties": [{"name": "طرف"}]},
        headers=AUTH,
    )
    assert r.status_code == 200
    case_id = r.json()["id"]
    assert [p["name"] for p in http.get(f"/api/cases/{case_id}/parties").json()] == ["طرف"]


def test_actions_evict_cached_pages(http):
    cache = http.app.state.page_cache
    assert http.get("/cases").status_code == 200
    assert "/cases" in cache

    case_id = _new_case(http)
    assert "/cases" not in cache

    assert http.get(f"/cases/{case_id}").status_code == 200
    assert f"/cases/{case_id}" in cache
    r = http.post("/api/parties", data={"case_id": case_id, "name": "شاهد"}, headers=AUTH)
    assert r.status_code == 200
    assert f"/cases/{case_id}" not in cache
    assert "شاهد" in http.get(f"/cases/{case_id}").text


def test_files_upload_and_download(http):
    r = http.post("/api/files/receipts", files={"file": ("r.txt", b"hello", "text/plain")}, headers=AUTH)
    assert r.status_code == 200
    url = r.json()["url"]
    got = http.get(url)
    assert got.status_code == 200
    assert got.content == b"hello"

    assert http.post("/api/files/receipts", files={"file": ("r.txt", b"x", "text/plain")}).status_code == 401
    assert http.post("/api/files/nope", files={"file": ("r.txt", b"x", "text/plain")}, headers=AUTH).status_code == 400
    assert http.get("/api/files/receipts/missing.txt").status_code == 404


def test_courts_are_seeded(http):
    names = {c["name"] for c in http.get("/api/courts").json()}
    assert {"ابتدائية", "تجارية", "استئناف", "عليا"} <= names


def test_dashboard_and_ui_pages_render(http):
    case_id = _new_case(http, "قضية الواجهة")
    d = http.get("/api/dashboard").json()
    assert d["total_cases"] == 1
    assert d["cases_by_status"]["active"] == 1

    for path in ("/", "/cases", "/clients", "/bills", "/receipts", "/invoices", "/activities", f"/cases/{case_id}/sessions"):
        assert http.get(path).status_code == 200, path
    assert http.get("/cases/unknown").status_code == 404


def test_ui_form_post_redirects(http):
    r = http.post(
        "/clients/new",
        data={"client-type": "individual", "first-name": "رامي", "last-name": "يوسف"},
        headers=AUTH,
        follow_redirects=False,
    )
    assert r.status_code == 303
    assert r.headers["location"].startswith("/clients/")

    r = http.post("/clients/new", data={"client-type": "individual", "first-name": "", "last-name": "x"}, headers=AUTH)
    assert r.status_code == 422


def test_client_rename_refreshes_case_and_invoice_pages(http):
    r = http.post("/api/clients", data={"client-type": "individual", "first-name": "OldName", "last-name": "Haddad"}, headers=AUTH)
    client_id = r.json()["id"]
    r = http.post("/api/cases", data={"title": "قضية العميل", "client_id": client_id}, headers=AUTH)
    case_id = r.json()["id"]
    r = http.post(
        "/api/invoices",
        json={
            "client_id": client_id,
            "invoice_number": "INV-9",
            "issue_date": "2025-01-10",
            "due_date": "2025-02-10",
            "items": [{"description": "Consultation", "quantity": 1, "unit_price": 100}],
        },
        headers=AUTH,
    )
    assert r.status_code == 200, r.text
    invoice_id = r.json()["id"]

    pages = ["/cases", f"/cases/{case_id}", "/invoices", f"/invoices/{invoice_id}"]
    for path in pages:
        assert "OldName" in http.get(path).text, path

    r = http.put(f"/api/clients/{client_id}", data={"client-type": "individual", "first-name": "NewName", "last-name": "Haddad"}, headers=AUTH)
    assert r.status_code == 200
    assert set(pages) <= set(r.json()["revalidate"])
    for path in pages:
        text = http.get(path).text
        assert "NewName" in text and "OldName" not in text, path


def test_case_rename_refreshes_sessions_page(http):
    case_id = _new_case(http, "OldTitle")
    assert "OldTitle" in http.get(f"/cases/{case_id}/sessions").text

    r = http.put(f"/api/cases/{case_id}", data={"title": "NewTitle"}, headers=AUTH)
    assert r.status_code == 200
    assert f"/cases/{case_id}/sessions" in r.json()["revalidate"]
    text = http.get(f"/cases/{case_id}/sessions").text
    assert "NewTitle" in text and "OldTitle" not in text


def test_sessions_page_is_not_cached(http):
    case_id = _new_case(http)
    assert http.get(f"/cases/{case_id}/sessions").status_code == 200
    assert f"/cases/{case_id}/sessions" not in http.app.state.page_cache


def test_seed_demo_needs_identity(http):
    assert http.get("/ui/seed_demo").status_code == 405
    assert http.post("/ui/seed_demo", follow_redirects=False).status_code == 401
    assert http.get("/api/clients").json() == []

    r = http.post("/ui/seed_demo", headers=AUTH, follow_redirects=False)
    assert r.status_code == 303
    assert len(http.get("/api/clients").json()) == 2
    acts = http.get("/api/activities", params={"entity_type": "client"}).json()
    assert {a["user_id"] for a in acts} == {"lawyer-1"}
