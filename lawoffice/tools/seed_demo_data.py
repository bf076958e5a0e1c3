from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Optional

from sqlalchemy.orm import Session

from lawoffice.core.auth import CurrentUser
from lawoffice.db.init_db import seed_courts
from lawoffice.repositories.court_repo import list_courts
from lawoffice.schemas.result import ActionResult
from lawoffice.services import case_event_service, case_service, client_service, court_session_service

logger = logging.getLogger(__name__)

SEED_USER = CurrentUser(id="seed-demo", email=None)


@dataclass
class SeedResult:
    clients: list[str] = field(default_factory=list)
    cases: list[str] = field(default_factory=list)
    sessions: int = 0
    events: int = 0


def _ok(result: ActionResult, what: str) -> str:
    if not result.success:
        raise RuntimeError(f"Could not seed {what}: {result.error}")
    return result.id


def seed_demo_data(db: Session, *, today: Optional[date] = None, user: CurrentUser = SEED_USER) -> SeedResult:
    """Create a small demo office: two clients, two cases with sessions, parties and a decision.

    Goes through the regular actions so activities and next-session dates
    are filled in the same way as for real data.
    """
    today = today or date.today()
    seed_courts(db)
    courts = list_courts(db)
    res = SeedResult()

    individual = _ok(
        client_service.add_client(
            db,
            user,
            {
                "client-type": "individual",
                "first-name": "أحمد",
                "last-name": "الخطيب",
                "phone": "0550000001",
                "city": "الرياض",
            },
        ),
        "client",
    )
    company = _ok(
        client_service.add_client(
            db,
            user,
            {
                "client-type": "company",
                "first-name": "سارة",
                "last-name": "العلي",
                "company-name": "شركة النور للتجارة",
                "email": "legal@alnoor.example",
            },
        ),
        "client",
    )
    res.clients += [individual, company]

    case_forms = [
        {
            "title": "نزاع عقد إيجار",
            "case-type": "civil",
            "client-id": individual,
            "court-id": courts[0].id if courts else None,
            "priority": "high",
            "fee-amount": "15000",
            "fee-type": "fixed",
            "parties": json.dumps(
                [{"name": "أحمد الخطيب", "role": "مدعي"}, {"name": "مؤسسة السكن", "role": "مدعى عليه"}],
                ensure_ascii=False,
            ),
        },
        {
            "title": "مطالبة تجارية بمستحقات",
            "case-type": "commercial",
            "client-id": company,
            "court-id": courts[1].id if len(courts) > 1 else None,
            "fee-amount": "40000",
            "fee-type": "percentage",
        },
    ]
    for form in case_forms:
        res.cases.append(_ok(case_service.create_case(db, user, form), "case"))

    sessions = [
        (res.cases[0], today - timedelta(days=10), "09:00", "القاعة 3"),
        (res.cases[0], today + timedelta(days=3), "10:30", "القاعة 3"),
        (res.cases[1], today, "12:00", "المحكمة التجارية - القاعة 1"),
        (res.cases[1], today + timedelta(days=14), "11:00", "المحكمة التجارية - القاعة 1"),
    ]
    for case_id, day, at, location in sessions:
        form = {"case-id": case_id, "session-date": day.isoformat(), "session-time": at, "location": location}
        _ok(court_session_service.add_court_session(db, user, form, today=today), "court session")
        res.sessions += 1

    _ok(
        case_event_service.add_case_event(
            db,
            user,
            {
                "case-id": res.cases[0],
                "event-date": (today - timedelta(days=10)).isoformat(),
                "event-type": "hearing",
                "title": "تأجيل الجلسة لتقديم المستندات",
                "is-decision": "on",
            },
        ),
        "case event",
    )
    res.events += 1

    logger.info("Seeded %d clients, %d cases, %d sessions", len(res.clients), len(res.cases), res.sessions)
    return res
