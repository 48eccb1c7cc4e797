from fastapi import APIRouter
from app.api.v1.endpoints import auth, users, catalog, bookings, ledger, reports

api_router = APIRouter()

api_router.include_router(auth.router, prefix="/auth", tags=["authentication"])
api_router.include_router(users.router, prefix="/users", tags=["users"])
api_router.include_router(catalog.router, prefix="/catalog", tags=["catalog"])
api_router.include_router(bookings.router, prefix="/bookings", tags=["bookings"])
api_router.include_router(ledger.router, tags=["ledger"])
api_router.include_router(reports.router, prefix="/reports", tags=["reports"])
