"""
Profiles Router - Selected, viewed and single profile retrieval.
"""
import logging

from fastapi import APIRouter, HTTPException

from matrimony.models import CanonicalProfile, ProfileListResponse
from matrimony.services import api_client, session_store, resolve_client_id
from matrimony.services.normalizer_service import (
    normalize_list,
    normalize_record,
    unwrap_profile_payload,
    merge_profile_detail,
)

router = APIRouter(prefix="/api/profiles", tags=["profiles"])
logger = logging.getLogger(__name__)


@router.get("/selected", response_model=ProfileListResponse)
async def get_selected_profiles():
    """Shortlisted profiles of the logged-in user."""
    user = await session_store.get_user_data()
    if user is None:
        raise HTTPException(status_code=401, detail="Please login to view selected profiles")

    client_id = resolve_client_id(user)
    if not client_id:
        raise HTTPException(status_code=400, detail="User ID not found")

    result = await api_client.get_selected_profiles(client_id)
    items = normalize_list(result.get("data")) if result.get("status") else []
    return ProfileListResponse(total=len(items), items=items)


@router.get("/viewed", response_model=ProfileListResponse)
async def get_viewed_profiles():
    """Profiles viewed on this device, oldest first."""
    viewed = await session_store.get_viewed_profiles()
    items = normalize_list(viewed, max_results=len(viewed))
    return ProfileListResponse(total=len(items), items=items)


@router.get("/{profile_id}", response_model=CanonicalProfile)
async def get_profile(profile_id: str):
    """
    Fetch full profile details and record the view.
    """
    result = await api_client.get_profile(profile_id)
    if not result.get("status") or not result.get("data"):
        raise HTTPException(
            status_code=404,
            detail=result.get("message") or "Profile not found",
        )

    full = unwrap_profile_payload(result["data"])
    merged = merge_profile_detail({"id": profile_id, "profile_id": profile_id}, full)
    await session_store.record_viewed_profile(merged)

    return normalize_record(merged)
