"""Models package."""
from .profile import (
    FilterValue,
    SearchMode,
    LookingFor,
    Seeking,
    QuickFilters,
    AdvancedFilters,
    SearchRequest,
    SearchResponse,
    CanonicalProfile,
    ProfileListResponse,
    LoginRequest,
    DashboardSummary,
)

__all__ = [
    "FilterValue",
    "SearchMode",
    "LookingFor",
    "Seeking",
    "QuickFilters",
    "AdvancedFilters",
    "SearchRequest",
    "SearchResponse",
    "CanonicalProfile",
    "ProfileListResponse",
    "LoginRequest",
    "DashboardSummary",
]
