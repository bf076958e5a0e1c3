from __future__ import annotations

from fastapi import APIRouter

from lawoffice.api.routers.activities import router as activities
from lawoffice.api.routers.bills import router as bills
from lawoffice.api.routers.cases import router as cases
from lawoffice.api.routers.clients import router as clients
from lawoffice.api.routers.courts import router as courts
from lawoffice.api.routers.dashboard import router as dashboard
from lawoffice.api.routers.documents import router as documents
from lawoffice.api.routers.events import router as events
from lawoffice.api.routers.files import router as files
from lawoffice.api.routers.invoices import router as invoices
from lawoffice.api.routers.parties import router as parties
from lawoffice.api.routers.receipts import router as receipts
from lawoffice.api.routers.sessions import router as sessions

api_router = APIRouter(prefix="/api")
api_router.include_router(clients)
api_router.include_router(cases)
api_router.include_router(sessions)
api_router.include_router(parties)
api_router.include_router(documents)
api_router.include_router(events)
api_router.include_router(bills)
api_router.include_router(receipts)
api_router.include_router(invoices)
api_router.include_router(courts)
api_router.include_router(activities)
api_router.include_router(files)
api_router.include_router(dashboard)
