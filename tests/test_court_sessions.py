from __future__ import annotations

from datetime import date, timedelta

from lawoffice.db.models import Activity, CourtSession
from lawoffice.repositories.case_repo import get_case
from lawoffice.schemas.court_session import validate_session_form
from lawoffice.schemas.result import ErrorKind
from lawoffice.services.court_session_service import (
    add_court_session,
    delete_court_session,
    get_today_sessions,
    get_upcoming_sessions,
    update_court_session,
    update_next_session_date,
)

TODAY = date(2025, 6, 10)


def _form(case_id, day, **extra):
    form = {"case-id": case_id, "session-date": day.isoformat(), "session-time": "10:00", "location": "القاعة 2"}
    form.update(extra)
    return form


def _next(db, case_id):
    return get_case(db, case_id).next_session_date


def test_past_then_future_then_delete_recomputes_next_session(db, user, make_case):
    case_id = make_case()

    res = add_court_session(db, user, _form(case_id, TODAY - timedelta(days=1)), today=TODAY)
    assert res.success
    assert _next(db, case_id) is None

    res = add_court_session(db, user, _form(case_id, TODAY + timedelta(days=1)), today=TODAY)
    assert res.success
    assert _next(db, case_id) == TODAY + timedelta(days=1)

    res = delete_court_session(db, user, res.id, today=TODAY)
    assert res.success
    assert _next(db, case_id) is None


def test_next_session_is_earliest_future_date_including_today(db, user, make_case):
    case_id = make_case()
    for offset in (9, 0, 4):
        assert add_court_session(db, user, _form(case_id, TODAY + timedelta(days=offset)), today=TODAY).success
    assert _next(db, case_id) == TODAY


def test_update_moving_session_recomputes_both_cases(db, user, make_case):
    a = make_case("أ")
    b = make_case("ب")
    res = add_court_session(db, user, _form(a, TODAY + timedelta(days=2)), today=TODAY)
    assert _next(db, a) == TODAY + timedelta(days=2)

    moved = update_court_session(db, user, res.id, _form(b, TODAY + timedelta(days=5)), today=TODAY)
    assert moved.success
    assert _next(db, a) is None
    assert _next(db, b) == TODAY + timedelta(days=5)
    assert f"/cases/{a}" in moved.revalidate and f"/cases/{b}" in moved.revalidate


def test_update_without_case_keeps_case(db, user, make_case):
    case_id = make_case()
    res = add_court_session(db, user, _form(case_id, TODAY + timedelta(days=3)), today=TODAY)
    form = _form(None, TODAY + timedelta(days=1))
    form.pop("case-id")
    upd = update_court_session(db, user, res.id, form, today=TODAY)
    assert upd.success
    assert upd.data["case_id"] == case_id
    assert _next(db, case_id) == TODAY + timedelta(days=1)


def test_missing_location_is_rejected_without_insert(db, user, make_case):
    case_id = make_case()
    form = _form(case_id, TODAY)
    form["location"] = "  "
    res = add_court_session(db, user, form, today=TODAY)
    assert not res.success
    assert res.kind == ErrorKind.VALIDATION
    assert "location" in res.errors
    assert db.query(CourtSession).count() == 0


def test_unauthenticated_add_does_nothing(db, make_case):
    case_id = make_case()
    res = add_court_session(db, None, _form(case_id, TODAY), today=TODAY)
    assert res.kind == ErrorKind.AUTH
    assert res.status_code == 401
    assert db.query(CourtSession).count() == 0


def test_malformed_time_reported_on_field(db, user, make_case):
    case_id = make_case()
    res = add_court_session(db, user, _form(case_id, TODAY, **{"session-time": "soon"}), today=TODAY)
    assert res.kind == ErrorKind.VALIDATION
    assert list(res.errors) == ["session_time"]


def test_unknown_case_is_not_found(db, user):
    res = add_court_session(db, user, _form("missing", TODAY), today=TODAY)
    assert res.kind == ErrorKind.NOT_FOUND


def test_each_session_mutation_logs_one_activity(db, user, make_case):
    case_id = make_case()
    before = db.query(Activity).count()
    res = add_court_session(db, user, _form(case_id, TODAY), today=TODAY)
    update_court_session(db, user, res.id, _form(case_id, TODAY, location="القاعة 5"), today=TODAY)
    delete_court_session(db, user, res.id, today=TODAY)

    rows = (
        db.query(Activity)
        .filter(Activity.entity_type == "court_session")
        .order_by(Activity.id.asc())
        .all()
    )
    assert db.query(Activity).count() == before + 3
    assert [r.action_type for r in rows] == ["create", "update", "delete"]
    assert {r.entity_id for r in rows} == {res.id}
    assert rows[0].details["location"] == "القاعة 2"


def test_upcoming_and_today_listings(db, user, make_case):
    case_id = make_case()
    for offset in (-3, 0, 1, 2):
        add_court_session(db, user, _form(case_id, TODAY + timedelta(days=offset)), today=TODAY)

    upcoming = get_upcoming_sessions(db, limit=2, today=TODAY)
    assert [s.session_date for s in upcoming] == [TODAY, TODAY + timedelta(days=1)]
    assert [s.session_date for s in get_today_sessions(db, today=TODAY)] == [TODAY]


def test_recompute_for_unknown_case_returns_none(db):
    assert update_next_session_date(db, "nope", today=TODAY) is None


def test_validate_session_form_requires_case_only_on_create():
    empty = {"session-date": "", "session-time": "", "location": ""}
    res = validate_session_form(empty)
    assert not res.success
    assert set(res.errors) == {"case_id", "session_date", "session_time", "location"}

    res = validate_session_form(empty, is_update=True)
    assert set(res.errors) == {"session_date", "session_time", "location"}

    ok = validate_session_form({"case_id": "c1", "session_date": "2020-01-01", "session_time": "09:00", "location": "x"})
    assert ok.success
