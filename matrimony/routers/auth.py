"""
Auth Router - Login, logout and session status.
"""
import logging

from fastapi import APIRouter, HTTPException

from matrimony.models import LoginRequest
from matrimony.services import api_client, session_store

router = APIRouter(prefix="/api/auth", tags=["auth"])
logger = logging.getLogger(__name__)


@router.post("/login")
async def login(request: LoginRequest):
    """
    Log in against the backend and store the session on success.
    """
    if not request.profile_id.strip() or not request.password:
        raise HTTPException(status_code=400, detail="Please fill in all fields")

    result = await api_client.login(request.profile_id.strip(), request.password)
    if not result.get("status"):
        raise HTTPException(status_code=401, detail=result.get("message") or "Login failed")

    user = result.get("data")
    if not isinstance(user, dict) or not await session_store.set_session(user):
        raise HTTPException(status_code=502, detail="Login response missing user data")

    return {"status": True, "data": user}


@router.post("/logout")
async def logout():
    """Clear the stored session."""
    await session_store.clear_session()
    return {"status": True, "message": "Logged out"}


@router.get("/session")
async def get_session():
    """Current login flag and stored user data."""
    return {
        "logged_in": await session_store.is_logged_in(),
        "user": await session_store.get_user_data(),
    }
