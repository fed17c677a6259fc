"""
Profile and search models - Pydantic schemas for the client API.
Follows Single Responsibility Principle.
"""
from pydantic import BaseModel, Field
from typing import Optional, List, Union, Dict, Any
from enum import Enum


FilterValue = Optional[Union[str, int, float]]


class SearchMode(str, Enum):
    NORMAL = "normal"
    ADVANCED = "advanced"


class LookingFor(str, Enum):
    BRIDE = "BRIDE"
    GROOM = "GROOM"


class Seeking(str, Enum):
    WOMAN = "WOMAN"
    MAN = "MAN"


class QuickFilters(BaseModel):
    """Quick (normal) search form state."""
    looking_for: FilterValue = Field(LookingFor.BRIDE.value, alias="lookingFor")
    age: FilterValue = "18"
    religion: FilterValue = "SELECT_RELIGION"
    caste: FilterValue = "NADAR"

    class Config:
        populate_by_name = True


class AdvancedFilters(BaseModel):
    """Advanced search form state."""
    search_id: FilterValue = Field("", alias="searchId")
    seeking: FilterValue = Seeking.WOMAN.value
    age_from: FilterValue = Field("18", alias="ageFrom")
    age_to: FilterValue = Field("30", alias="ageTo")
    district: FilterValue = "SELECT_DISTRICT"
    city: FilterValue = "SELECT_CITY"
    religion: FilterValue = "SELECT_RELIGION"
    caste: FilterValue = "SELECT_CASTE"
    native_direction: FilterValue = Field("SELECT_DIRECTION", alias="nativeDirection")
    qualification: FilterValue = "SELECT_QUALIFICATION"
    work: FilterValue = "SELECT_WORK"
    raasi: FilterValue = "SELECT_RAASI"
    star: FilterValue = "SELECT_STAR"
    color: FilterValue = "SELECT_COLOR"
    jewel: FilterValue = "SELECT_JEWEL"

    class Config:
        populate_by_name = True


class SearchRequest(BaseModel):
    """Search submission from the search screen."""
    mode: SearchMode = SearchMode.NORMAL
    filters: Dict[str, Any] = Field(default_factory=dict)
    sort: Optional[str] = None  # "age" for ascending age


class CanonicalProfile(BaseModel):
    """Normalized, UI-ready profile record."""
    id: str = ""
    profile_id: str = ""
    name: str = "Unknown"
    age: str = "-"
    height: str = "-"
    religion: str = "-"
    caste: str = "Nadar"
    education: str = "-"
    occupation: str = "Not Specified"
    location: str = "Unknown"
    profile_image: Optional[str] = None
    verified: bool = False
    last_active: str = Field("Recent", alias="lastActive")

    class Config:
        populate_by_name = True


class SearchResponse(BaseModel):
    """Response for a profile search."""
    status: bool
    message: Optional[str] = None
    total: int = 0
    payload: Dict[str, str] = Field(default_factory=dict)
    profiles: List[CanonicalProfile] = Field(default_factory=list)


class ProfileListResponse(BaseModel):
    """Response for selected/viewed profile listings."""
    total: int
    items: List[CanonicalProfile]


class LoginRequest(BaseModel):
    """Login form submission."""
    profile_id: str = ""
    password: str = ""


class DashboardSummary(BaseModel):
    """Dashboard header and stats grid values."""
    display_name: str = "User"
    client_id: str = "..."
    profile_image: Optional[str] = None
    user_points: str = "0"
    viewed_profiles: str = "0"
    views_limit: str = "50"
    selected_profiles: str = "0"
    connect_requests: str = "0"
    profile_completeness: str = "0"
    plan: str = "Premium"
    membership_end_date: Optional[str] = None
    registration_date: Optional[str] = None
    profile_visitors: str = "0"
