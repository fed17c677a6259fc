"""
Normalizer Service - Converts raw backend profile records into canonical records.
Every field resolves through one ordered precedence chain with a fixed fallback,
so a malformed record degrades to fallback values instead of raising.
"""
import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional

from matrimony.config import settings
from matrimony.models import CanonicalProfile, DashboardSummary
from matrimony.services.lookup_tables import (
    RELIGION_MAP,
    CASTE_MAP,
    EDUCATION_MAP,
    OCCUPATION_MAP,
    LOCATION_MAP,
    get_label,
)

logger = logging.getLogger(__name__)

ID_FIELDS = ("profile_id", "id", "tamil_profile_id")
NAME_FIELDS = ("name", "user_name", "profile_name")
OCCUPATION_FIELDS = ("occupation", "profession")
IMAGE_FIELDS = ("user_photo", "photo_data1")

UNKNOWN = "Unknown"
NOT_SPECIFIED = "Not Specified"
MISSING = "-"
DEFAULT_CASTE = "Nadar"
DEFAULT_LAST_ACTIVE = "Recent"


def _is_present(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    return True


def _as_text(value: Any) -> str:
    return value if isinstance(value, str) else str(value)


def first_present(record: Mapping[str, Any], fields: Iterable[str], default: Any = None) -> Any:
    """Return the first non-empty value among fields, in order."""
    for field in fields:
        value = record.get(field)
        if _is_present(value):
            return value
    return default


# ==================== Precedence chains ====================

def resolve_identifier(record: Mapping[str, Any]) -> str:
    value = first_present(record, ID_FIELDS)
    return _as_text(value) if value is not None else ""


def resolve_name(record: Mapping[str, Any]) -> str:
    value = first_present(record, NAME_FIELDS)
    return _as_text(value) if value is not None else UNKNOWN


def resolve_occupation(record: Mapping[str, Any]) -> str:
    """Occupation label, falling back to 'Not Specified'."""
    raw = first_present(record, OCCUPATION_FIELDS)
    if raw is None:
        return NOT_SPECIFIED
    return get_label(OCCUPATION_MAP, raw, NOT_SPECIFIED)


def resolve_education_code(record: Mapping[str, Any]) -> Any:
    """Raw education value: first list element, scalar, or the 'padippu' alias."""
    education = record.get("education")
    if isinstance(education, (list, tuple)):
        education = education[0] if education else None
    if _is_present(education):
        return education
    padippu = record.get("padippu")
    return padippu if _is_present(padippu) else None


def resolve_education(record: Mapping[str, Any]) -> str:
    raw = resolve_education_code(record)
    if raw is None:
        return MISSING
    return get_label(EDUCATION_MAP, raw, MISSING)


def resolve_location(record: Mapping[str, Any]) -> str:
    """
    Location display string.

    The backend's own 'location' wins unless it is 'Unknown'; otherwise
    the city and district labels are joined, skipping empty, '0' and
    'Unknown' parts.
    """
    location = record.get("location")
    if _is_present(location) and location != UNKNOWN:
        return _as_text(location)

    parts = [
        get_label(LOCATION_MAP, record.get("city")),
        get_label(LOCATION_MAP, record.get("district")),
    ]
    parts = [p for p in parts if p and p.strip() not in ("0", UNKNOWN)]
    return ", ".join(parts) if parts else UNKNOWN


def resolve_religion(record: Mapping[str, Any]) -> str:
    return get_label(RELIGION_MAP, record.get("religion"), MISSING)


def resolve_caste(record: Mapping[str, Any]) -> str:
    caste = record.get("caste")
    if not _is_present(caste):
        return DEFAULT_CASTE
    return get_label(CASTE_MAP, caste)


def build_image_url(record: Mapping[str, Any], upload_host: Optional[str] = None) -> Optional[str]:
    """
    Absolute profile image URL, or None when the record has no photo.

    Args:
        record: Raw backend record
        upload_host: Host serving /uploads, defaults to settings.UPLOAD_HOST
    """
    profile_image = record.get("profile_image")
    if _is_present(profile_image):
        return _as_text(profile_image)

    photo = first_present(record, IMAGE_FIELDS)
    if photo is None:
        return None
    host = upload_host or settings.UPLOAD_HOST
    return f"https://{host}/uploads/{_as_text(photo).strip()}"


def normalize_height(record: Mapping[str, Any]) -> str:
    """Height display string: centimetres, raw text, feet/inches, or '-'."""
    height = record.get("height")
    if _is_present(height):
        text = _as_text(height).strip()
        try:
            if float(text) > 100:
                return f"{text} cm"
        except ValueError:
            pass
        return text

    feet = record.get("height_feet")
    inches = record.get("height_inches")
    if _is_present(feet) and _is_present(inches):
        return f"{feet}ft {inches}in"
    return MISSING


def is_verified(record: Mapping[str, Any]) -> bool:
    ver_flag = record.get("ver_flag")
    return (
        (type(ver_flag) is int and ver_flag == 1)
        or record.get("profile_status") == "1"
        or record.get("viewed") is True
    )


# ==================== Records and lists ====================

def normalize_record(raw: Any) -> CanonicalProfile:
    """
    Normalize one raw backend record. The input is never mutated.

    Args:
        raw: Backend profile object (anything that is not a mapping is
            treated as an empty record)

    Returns:
        CanonicalProfile with every field resolved
    """
    record: Mapping[str, Any] = raw if isinstance(raw, Mapping) else {}

    identifier = resolve_identifier(record)
    age = record.get("age")
    last_active = record.get("lastActive")

    return CanonicalProfile(
        id=identifier,
        profile_id=identifier,
        name=resolve_name(record),
        age=_as_text(age) if _is_present(age) else MISSING,
        height=normalize_height(record),
        religion=resolve_religion(record),
        caste=resolve_caste(record),
        education=resolve_education(record),
        occupation=resolve_occupation(record),
        location=resolve_location(record),
        profile_image=build_image_url(record),
        verified=is_verified(record),
        last_active=_as_text(last_active) if _is_present(last_active) else DEFAULT_LAST_ACTIVE,
    )


def normalize_list(raw_list: Any, max_results: Optional[int] = None) -> List[CanonicalProfile]:
    """
    Normalize a backend result list, keeping input order.

    Args:
        raw_list: The backend 'data' payload
        max_results: Cap on returned records, defaults to the search limit

    Returns:
        Canonical records; empty when raw_list is not a list
    """
    if max_results is None:
        max_results = settings.SEARCH_RESULT_LIMIT
    if not isinstance(raw_list, (list, tuple)):
        if raw_list is not None:
            logger.warning(f"Expected a profile list, got {type(raw_list).__name__}")
        return []
    return [normalize_record(item) for item in raw_list[:max_results]]


def _age_sort_key(profile: CanonicalProfile):
    try:
        return (0, int(profile.age))
    except ValueError:
        return (1, 0)


def sort_by_age(profiles: List[CanonicalProfile]) -> List[CanonicalProfile]:
    """Stable ascending-age sort; profiles without a numeric age go last."""
    return sorted(profiles, key=_age_sort_key)


# ==================== Detail and dashboard ====================

def unwrap_profile_payload(data: Any) -> Dict[str, Any]:
    """Pick the profile object out of a profile-fetch 'data' payload."""
    if not isinstance(data, Mapping):
        return {}
    for key in ("tamil_profile", "main_profile"):
        inner = data.get(key)
        if isinstance(inner, Mapping) and inner:
            return dict(inner)
    return dict(data)


def merge_profile_detail(previous: Mapping[str, Any], full: Mapping[str, Any]) -> Dict[str, Any]:
    """Overlay freshly fetched details on a listing record, keeping a stable id."""
    merged = {**previous, **full}
    merged["id"] = first_present(full, ("profile_id", "id")) or previous.get("id")
    merged["profile_id"] = first_present(full, ("profile_id", "id")) or previous.get("profile_id")
    return merged


def merge_dashboard_data(
    stored: Mapping[str, Any],
    live_profile: Optional[Mapping[str, Any]],
    stats: Optional[Mapping[str, Any]],
) -> Dict[str, Any]:
    """Stored user blob, overlaid by the live profile, then by dashboard stats."""
    live_profile = live_profile or {}
    merged = {**stored, **live_profile, **(stats or {})}
    merged["user_name"] = live_profile.get("user_name") or stored.get("user_name")
    return merged


def _count(data: Mapping[str, Any], key: str, default: Optional[str] = "0") -> Optional[str]:
    value = data.get(key)
    return _as_text(value) if _is_present(value) else default


def normalize_dashboard(data: Any) -> DashboardSummary:
    """Build the dashboard summary from the merged user data."""
    record: Mapping[str, Any] = data if isinstance(data, Mapping) else {}

    if record.get("mem_plan") == "0":
        plan = "Free"
    else:
        plan = _count(record, "plan_name", "Premium")

    return DashboardSummary(
        display_name=_as_text(first_present(record, ("user_name", "name", "username"), "User")),
        client_id=_count(record, "client_id", "..."),
        profile_image=build_image_url({k: record.get(k) for k in IMAGE_FIELDS}),
        user_points=_count(record, "user_points"),
        viewed_profiles=_count(record, "viewed_profiles"),
        views_limit=_count(record, "views_limit", str(settings.DEFAULT_VIEWS_LIMIT)),
        selected_profiles=_count(record, "no_sel_profiles"),
        connect_requests=_count(record, "connect_requests"),
        profile_completeness=_count(record, "profile_completeness"),
        plan=plan,
        membership_end_date=_count(record, "mem_end_date", None),
        registration_date=_count(record, "reg_date", None),
        profile_visitors=_count(record, "profile_visitors"),
    )
