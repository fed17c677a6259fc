"""
Search Router - Quick and advanced profile search.
"""
import logging

from fastapi import APIRouter, HTTPException
from pydantic import ValidationError

from matrimony.models import (
    SearchRequest,
    SearchResponse,
    SearchMode,
    QuickFilters,
    AdvancedFilters,
)
from matrimony.services import api_client, session_store
from matrimony.services.filter_service import build_payload
from matrimony.services.normalizer_service import normalize_list, sort_by_age

router = APIRouter(prefix="/api/search", tags=["search"])
logger = logging.getLogger(__name__)

SEARCH_FAILED_MESSAGE = "Search failed"

FORM_MODELS = {
    SearchMode.NORMAL: QuickFilters,
    SearchMode.ADVANCED: AdvancedFilters,
}


@router.post("", response_model=SearchResponse)
async def search_profiles(request: SearchRequest):
    """
    Search profiles with quick or advanced filters.

    Filters are read into the mode's form model, so fields the client
    omits take the form defaults. Advanced search requires a logged-in
    session. A backend failure is reported through 'status' and 'message'
    with zero results.
    """
    if request.mode == SearchMode.ADVANCED and not await session_store.is_logged_in():
        raise HTTPException(status_code=403, detail="Login required for advanced search")

    try:
        form = FORM_MODELS[request.mode].model_validate(request.filters)
    except ValidationError as e:
        logger.warning(f"Invalid {request.mode.value} search filters: {e.error_count()} error(s)")
        raise HTTPException(status_code=422, detail="Invalid search filters")

    payload = build_payload(request.mode, form)
    logger.info(f"Searching ({request.mode.value}) with {payload}")

    result = await api_client.search_profiles(payload)
    if not result.get("status"):
        return SearchResponse(
            status=False,
            message=result.get("message") or SEARCH_FAILED_MESSAGE,
            payload=payload,
        )

    profiles = normalize_list(result.get("data"))
    if request.sort == "age":
        profiles = sort_by_age(profiles)

    return SearchResponse(
        status=True,
        message=result.get("message"),
        total=len(profiles),
        payload=payload,
        profiles=profiles,
    )
