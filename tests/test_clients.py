from __future__ import annotations

from lawoffice.db.models import Activity, Client
from lawoffice.schemas.result import ErrorKind
from lawoffice.services.client_service import add_client, delete_client, get_client, list_clients, update_client


def _form(**extra):
    form = {"client-type": "individual", "first-name": "ليلى", "last-name": "حداد", "phone": "0790000000"}
    form.update(extra)
    return form


def test_add_client_creates_row_and_one_activity(db, user):
    res = add_client(db, user, _form())
    assert res.success
    assert res.data["display_name"] == "ليلى حداد"
    assert "/clients" in res.revalidate and f"/clients/{res.id}" in res.revalidate

    acts = db.query(Activity).filter(Activity.entity_id == res.id).all()
    assert len(acts) == 1
    assert (acts[0].action_type, acts[0].entity_type, acts[0].user_id) == ("create", "client", user.id)


def test_empty_first_name_is_rejected(db, user):
    res = add_client(db, user, _form(**{"first-name": ""}))
    assert not res.success
    assert res.kind == ErrorKind.VALIDATION
    assert "first_name" in res.errors
    assert db.query(Client).count() == 0
    assert db.query(Activity).count() == 0


def test_unknown_client_type_is_invalid(db, user):
    res = add_client(db, user, _form(**{"client-type": "robot"}))
    assert res.kind == ErrorKind.VALIDATION
    assert "client_type" in res.errors


def test_company_name_only_kept_for_companies(db, user):
    person = add_client(db, user, _form(**{"company-name": "Ignored"}))
    company = add_client(db, user, _form(**{"client-type": "company", "company-name": "شركة الأفق"}))
    assert person.data["company_name"] is None
    assert company.data["display_name"] == "شركة الأفق"


def test_update_and_delete_client(db, user):
    res = add_client(db, user, _form())
    upd = update_client(db, user, res.id, _form(**{"last-name": "منصور"}))
    assert upd.success
    assert get_client(db, res.id).last_name == "منصور"

    gone = delete_client(db, user, res.id)
    assert gone.success
    assert get_client(db, res.id) is None
    actions = [a.action_type for a in db.query(Activity).order_by(Activity.id).all()]
    assert actions == ["create", "update", "delete"]


def test_update_missing_client_is_not_found(db, user):
    res = update_client(db, user, "does-not-exist", _form())
    assert res.kind == ErrorKind.NOT_FOUND
    assert res.status_code == 404


def test_search_matches_name_and_phone(db, user):
    add_client(db, user, _form())
    add_client(db, user, _form(**{"first-name": "Omar", "last-name": "Saleh", "phone": "0611111111"}))
    assert [c.first_name for c in list_clients(db, search="Omar")] == ["Omar"]
    assert len(list_clients(db, search="06111")) == 1
    assert len(list_clients(db)) == 2


def test_auth_required_for_every_mutation(db, user):
    res = add_client(db, user, _form())
    for result in (
        add_client(db, None, _form()),
        update_client(db, None, res.id, _form()),
        delete_client(db, None, res.id),
    ):
        assert result.kind == ErrorKind.AUTH
    assert db.query(Client).count() == 1
