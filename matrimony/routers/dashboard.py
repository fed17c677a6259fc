"""
Dashboard Router - Summary of the logged-in member's account.
"""
import logging

from fastapi import APIRouter, HTTPException

from matrimony.models import DashboardSummary
from matrimony.services import api_client, session_store
from matrimony.services.normalizer_service import merge_dashboard_data, normalize_dashboard

router = APIRouter(prefix="/api/dashboard", tags=["dashboard"])
logger = logging.getLogger(__name__)


@router.get("", response_model=DashboardSummary)
async def get_dashboard():
    """
    Refresh the stored user data from the live profile and stats, then
    summarize it. Refresh failures fall back to the stored data.
    """
    user = await session_store.get_user_data()
    if user is None:
        raise HTTPException(status_code=401, detail="Please login to view the dashboard")

    member_id = user.get("m_id")
    if member_id:
        profile_result = await api_client.get_profile(str(member_id))
        data = profile_result.get("data") if profile_result.get("status") else None
        live_profile = data.get("main_profile") if isinstance(data, dict) else None

        if live_profile:
            stats_result = await api_client.get_dashboard_stats(str(member_id))
            stats = stats_result.get("data") if stats_result.get("status") else None
            if not isinstance(stats, dict):
                logger.warning(f"Dashboard stats unavailable for member {member_id}")
                stats = {}

            user = merge_dashboard_data(user, live_profile, stats)
            await session_store.update_user_data(user)
        else:
            logger.warning(f"Live profile refresh failed for member {member_id}")

    return normalize_dashboard(user)
