"""
API Client - Form-encoded POST calls to the remote matrimony backend.
Transient failures are retried with exponential backoff; exhausted retries
become the backend's own failure envelope instead of an exception.
"""
import asyncio
import logging
from typing import Any, Dict, Optional

import httpx

from matrimony.config import settings

logger = logging.getLogger(__name__)

NETWORK_ERROR_MESSAGE = "Network error or server unavailable"
FORM_HEADERS = {"Content-Type": "application/x-www-form-urlencoded"}


def failure_envelope(message: str = NETWORK_ERROR_MESSAGE) -> Dict[str, Any]:
    return {"status": False, "message": message}


class MatrimonyApiClient:
    """
    Client for the remote matrimony backend.
    Every call returns a JSON envelope dict with a 'status' flag.
    """

    def __init__(
        self,
        endpoints: Optional[Dict[str, str]] = None,
        timeout: Optional[float] = None,
        max_retries: Optional[int] = None,
        retry_base_delay: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.endpoints = endpoints or settings.endpoints
        self.timeout = timeout if timeout is not None else settings.HTTP_TIMEOUT
        self.max_retries = max_retries if max_retries is not None else settings.MAX_RETRIES
        self.retry_base_delay = (
            retry_base_delay if retry_base_delay is not None else settings.RETRY_BASE_DELAY
        )
        self._transport = transport

    def _retry_delay(self, attempt: int) -> float:
        return min(self.retry_base_delay * (2 ** attempt), settings.RETRY_MAX_DELAY)

    async def _post(self, endpoint: str, params: Dict[str, Any]) -> Dict[str, Any]:
        """
        POST form data to a backend endpoint.

        Args:
            endpoint: Key into the endpoint table
            params: Form fields

        Returns:
            Parsed JSON envelope, or a failure envelope
        """
        url = self.endpoints[endpoint]
        data = {key: "" if value is None else str(value) for key, value in params.items()}

        for attempt in range(self.max_retries + 1):
            try:
                async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                    response = await client.post(url, data=data, headers=FORM_HEADERS)
                    response.raise_for_status()
                    result = response.json()
            except httpx.HTTPStatusError as e:
                # 4xx responses are final
                if e.response.status_code < 500 or attempt >= self.max_retries:
                    logger.error(f"API error ({url}): {e}")
                    return failure_envelope()
            except httpx.HTTPError as e:
                if attempt >= self.max_retries:
                    logger.error(f"API error ({url}): {e}")
                    return failure_envelope()
            except ValueError as e:
                logger.error(f"Invalid JSON from {url}: {e}")
                return failure_envelope()
            else:
                if not isinstance(result, dict):
                    logger.error(f"Unexpected response shape from {url}: {type(result).__name__}")
                    return failure_envelope("Unexpected response from server")
                return result

            delay = self._retry_delay(attempt)
            logger.warning(f"Retrying {url} in {delay:.1f}s (attempt {attempt + 1}/{self.max_retries})")
            await asyncio.sleep(delay)

        return failure_envelope()

    async def login(self, email: str, password: str) -> Dict[str, Any]:
        """Authenticate with profile id / email and password."""
        return await self._post("login", {"email": email, "password": password})

    async def search_profiles(self, payload: Dict[str, str]) -> Dict[str, Any]:
        """Run a profile search with a payload from the filter service."""
        return await self._post("search_profiles", payload)

    async def get_profile(self, client_id: str) -> Dict[str, Any]:
        return await self._post("get_profile", {"tamil_client_id": client_id})

    async def get_selected_profiles(self, client_id: str) -> Dict[str, Any]:
        return await self._post("selected_profiles", {"tamil_client_id": client_id})

    async def get_dashboard_stats(self, client_id: str) -> Dict[str, Any]:
        return await self._post("dashboard_stats", {"tamil_client_id": client_id})


# Singleton instance
api_client = MatrimonyApiClient()
