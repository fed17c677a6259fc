"""
Session Service - JSON-file key-value store for the login session.
Follows Single Responsibility and Interface Segregation principles.
Thread-safe with an in-memory cache of the file contents.
"""
import json
import logging
import threading
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

from matrimony.config import settings

logger = logging.getLogger(__name__)

# Session keys
USER_SESSION = "userSession"
USER_DATA = "userData"
CLIENT_ID = "client_id"
TAMIL_CLIENT_ID = "tamil_client_id"
USERNAME = "username"
VIEWED_PROFILES_LIST = "viewed_profiles_list"

SESSION_KEYS = (USER_SESSION, USER_DATA, CLIENT_ID, TAMIL_CLIENT_ID, USERNAME, VIEWED_PROFILES_LIST)

CLIENT_ID_FIELDS = ("tamil_client_id", "client_id", "profileid", "id")


def resolve_client_id(user: Optional[Dict[str, Any]]) -> Optional[str]:
    """First non-empty client identifier in the stored user blob."""
    if not user:
        return None
    for field in CLIENT_ID_FIELDS:
        value = user.get(field)
        if value not in (None, ""):
            return str(value)
    return None


class SessionStore:
    """
    Key-value session store persisted as a single JSON object.
    Values are strings; the user blob is stored JSON-serialized.
    """

    def __init__(self, store_path: Optional[Path] = None):
        self.store_path = store_path or (settings.SESSION_DIR / "session.json")
        self._lock = threading.Lock()
        self._cache: Optional[Dict[str, str]] = None
        self._ensure_store_exists()

    def _ensure_store_exists(self):
        """Create store file if it doesn't exist."""
        self.store_path.parent.mkdir(parents=True, exist_ok=True)
        if not self.store_path.exists():
            self._write_data({})

    @contextmanager
    def _file_lock(self, timeout=2.0):
        """Thread-safe file access context manager."""
        acquired = self._lock.acquire(timeout=timeout)
        if not acquired:
            raise TimeoutError("Session store lock could not be acquired.")
        try:
            yield
        finally:
            self._lock.release()

    def _read_data(self) -> Dict[str, str]:
        """Read all pairs from the JSON file with caching."""
        if self._cache is not None:
            return self._cache
        try:
            with open(self.store_path, "r", encoding="utf-8") as f:
                data = json.load(f)
            self._cache = data if isinstance(data, dict) else {}
        except (json.JSONDecodeError, FileNotFoundError):
            self._cache = {}
        return self._cache

    def _write_data(self, data: Dict[str, str]):
        """Write pairs to the JSON file and update cache."""
        with open(self.store_path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
        self._cache = data

    # ==================== Raw key-value access ====================

    async def get_item(self, key: str) -> Optional[str]:
        with self._file_lock():
            return self._read_data().get(key)

    async def set_items(self, pairs: Dict[str, str]):
        with self._file_lock():
            data = dict(self._read_data())
            data.update(pairs)
            self._write_data(data)

    async def remove_items(self, keys) -> None:
        with self._file_lock():
            data = {k: v for k, v in self._read_data().items() if k not in keys}
            self._write_data(data)

    # ==================== Session operations ====================

    async def set_session(self, data: Optional[Dict[str, Any]]) -> bool:
        """
        Initialize the session from a login response 'data' object.

        Args:
            data: User object returned by the login endpoint

        Returns:
            True if the session was stored
        """
        if not data:
            return False

        pairs = {
            USER_SESSION: "true",
            USER_DATA: json.dumps(data, ensure_ascii=False, default=str),
        }
        if data.get("client_id"):
            pairs[CLIENT_ID] = str(data["client_id"])
        if data.get("tamil_client_id"):
            pairs[TAMIL_CLIENT_ID] = str(data["tamil_client_id"])
        if data.get("username"):
            pairs[USERNAME] = str(data["username"])

        await self.set_items(pairs)
        logger.info(f"Session initialized for client {resolve_client_id(data)}")
        return True

    async def get(self, key: str) -> Any:
        """Get a session value; the user blob and viewed list come back parsed."""
        value = await self.get_item(key)
        if value and key in (USER_DATA, VIEWED_PROFILES_LIST):
            try:
                return json.loads(value)
            except json.JSONDecodeError:
                logger.warning(f"Discarding unreadable session value for {key}")
                return None
        return value

    async def get_user_data(self) -> Optional[Dict[str, Any]]:
        user = await self.get(USER_DATA)
        return user if isinstance(user, dict) else None

    async def update_user_data(self, data: Dict[str, Any]):
        await self.set_items({USER_DATA: json.dumps(data, ensure_ascii=False, default=str)})

    async def clear_session(self) -> bool:
        await self.remove_items(SESSION_KEYS)
        logger.info("Session cleared")
        return True

    async def is_logged_in(self) -> bool:
        return await self.get_item(USER_SESSION) == "true"

    # ==================== Viewed profiles ====================

    async def get_viewed_profiles(self) -> List[Dict[str, Any]]:
        viewed = await self.get(VIEWED_PROFILES_LIST)
        return viewed if isinstance(viewed, list) else []

    async def record_viewed_profile(self, profile: Dict[str, Any]) -> bool:
        """
        Upsert a profile into the locally viewed list.

        A first view also increments the user's 'viewed_profiles' counter.

        Args:
            profile: Raw (merged) profile record

        Returns:
            True if this was a new entry
        """
        profile_id = profile.get("id") or profile.get("profile_id")
        if not profile_id:
            return False

        viewed = await self.get_viewed_profiles()
        entry = {**profile, "viewedAt": datetime.utcnow().isoformat()}

        existing_index = next(
            (
                i for i, p in enumerate(viewed)
                if isinstance(p, dict)
                and (str(p.get("id")) == str(profile_id) or str(p.get("profile_id")) == str(profile_id))
            ),
            None,
        )

        is_new = existing_index is None
        if is_new:
            viewed.append(entry)
            user = await self.get_user_data()
            if user is not None:
                try:
                    count = int(user.get("viewed_profiles") or 0)
                except (TypeError, ValueError):
                    count = 0
                user["viewed_profiles"] = count + 1
                await self.update_user_data(user)
        else:
            viewed[existing_index] = entry

        await self.set_items({VIEWED_PROFILES_LIST: json.dumps(viewed, ensure_ascii=False, default=str)})
        return is_new


# Singleton session store
session_store = SessionStore()
