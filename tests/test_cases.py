from __future__ import annotations

import json
import re
from datetime import date

from lawoffice.db.models import Activity, Bill, CaseParty, CourtSession
from lawoffice.schemas.result import ErrorKind
from lawoffice.services import bill_service, case_service
from lawoffice.services.case_event_service import add_case_event, get_case_events
from lawoffice.services.case_party_service import add_case_party, delete_case_party, list_case_parties
from lawoffice.services.court_session_service import add_court_session


def test_create_case_generates_number(db, user):
    res = case_service.create_case(db, user, {"title": "دعوى مطالبة"})
    assert res.success
    assert re.fullmatch(r"\d{4}/\d{3}", res.data["case_number"])
    assert res.data["status"] == "active"
    assert res.data["priority"] == "medium"
    assert {"/cases", f"/cases/{res.id}", f"/cases/{res.id}/sessions", "/"} <= set(res.revalidate)


def test_create_case_keeps_given_number_and_fee(db, user):
    res = case_service.create_case(
        db, user, {"title": "x", "case-number": "2024/777", "fee-amount": "1500.5", "fee-type": "fixed"}
    )
    assert res.data["case_number"] == "2024/777"
    assert res.data["case_value"] == 1500.5


def test_case_title_required(db, user):
    res = case_service.create_case(db, user, {"title": ""})
    assert res.kind == ErrorKind.VALIDATION
    assert "title" in res.errors
    assert case_service.count_cases(db) == 0


def test_bad_child_rows_are_skipped_and_case_stays(db, user):
    parties = [{"name": "طرف أول", "role": "مدعي"}, {"role": "بلا اسم"}]
    documents = [{"name": "عقد", "date": "2024-02-01"}]
    res = case_service.create_case(
        db,
        user,
        {"title": "قضية جزئية", "parties": json.dumps(parties), "documents": json.dumps(documents)},
    )
    assert res.success
    assert [p.name for p in list_case_parties(db, res.id)] == ["طرف أول"]

    act = db.query(Activity).filter(Activity.entity_type == "case").one()
    assert act.details == {"parties": 1, "documents": 1}


def test_malformed_parties_json_is_ignored(db, user):
    res = case_service.create_case(db, user, {"title": "y", "parties": "[not json"})
    assert res.success
    assert db.query(CaseParty).count() == 0


def test_update_keeps_existing_number_when_blank(db, user):
    res = case_service.create_case(db, user, {"title": "قبل", "case-number": "2023/101"})
    upd = case_service.update_case(db, user, res.id, {"title": "بعد", "case-number": ""})
    assert upd.success
    assert upd.data["case_number"] == "2023/101"
    assert upd.data["title"] == "بعد"


def test_delete_case_removes_children_but_keeps_bills(db, user, make_case):
    case_id = make_case()
    add_court_session(
        db,
        user,
        {"case_id": case_id, "session_date": "2030-01-01", "session_time": "09:00", "location": "x"},
    )
    add_case_party(db, user, {"case_id": case_id, "name": "شاهد"})
    bill = bill_service.create_bill(
        db,
        user,
        {"bill_date": "2024-05-01", "amount": "90", "bill_type": "court_fee", "file_path": "a.pdf", "case_id": case_id},
    )

    res = case_service.delete_case(db, user, case_id)
    assert res.success
    assert case_service.get_case(db, case_id) is None
    assert db.query(CourtSession).count() == 0
    assert db.query(CaseParty).count() == 0
    assert db.get(Bill, bill.id).case_id is None


def test_list_and_count_by_status(db, user):
    case_service.create_case(db, user, {"title": "مفتوحة"})
    case_service.create_case(db, user, {"title": "مغلقة", "status": "closed"})
    assert case_service.count_cases(db) == 2
    assert case_service.count_cases(db, status="closed") == 1
    assert [c.title for c in case_service.list_cases(db, status="closed")] == ["مغلقة"]
    assert [c.title for c in case_service.list_cases(db, search="مفتو")] == ["مفتوحة"]


def test_party_requires_case(db, user):
    res = add_case_party(db, user, {"name": "بدون قضية"})
    assert res.kind == ErrorKind.VALIDATION
    assert "case_id" in res.errors


def test_party_delete_revalidates_case_page(db, user, make_case):
    case_id = make_case()
    p = add_case_party(db, user, {"case_id": case_id, "name": "خبير"})
    res = delete_case_party(db, user, p.id)
    assert res.success
    assert res.revalidate == [f"/cases/{case_id}"]


def test_events_newest_first(db, user, make_case):
    case_id = make_case()
    for day, title in ((date(2024, 1, 5), "أول"), (date(2024, 3, 1), "ثالث"), (date(2024, 2, 1), "ثاني")):
        res = add_case_event(
            db, user, {"case_id": case_id, "event_date": day.isoformat(), "event_type": "hearing", "title": title}
        )
        assert res.success
    assert [e.title for e in get_case_events(db, case_id)] == ["ثالث", "ثاني", "أول"]


def test_event_decision_checkbox(db, user, make_case):
    case_id = make_case()
    res = add_case_event(
        db,
        user,
        {"case-id": case_id, "event-date": "2024-01-01", "event-type": "ruling", "title": "حكم", "is-decision": "on"},
    )
    assert res.data["is_decision"] is True
