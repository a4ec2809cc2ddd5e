from fastapi import APIRouter

from app.api.endpoints import auth, readings

api_router = APIRouter()

# Registration, login and profile
api_router.include_router(auth.router, tags=["authentication"])

# Energy readings
api_router.include_router(readings.router, prefix="/readings", tags=["readings"])
