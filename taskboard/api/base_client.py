"""
Base API client with common functionality
"""

import asyncio
from abc import ABC
from typing import Optional, Dict, Any
import httpx
from taskboard.utils.logger import logger
from taskboard.utils.error_handler import StoreError
from taskboard.config.constants import MAX_RETRIES, RETRY_DELAY


class BaseAPIClient(ABC):
    """Async JSON client with retries for server and connection errors"""

    def __init__(
        self,
        base_url: str,
        timeout: int = 30,
        max_retries: int = MAX_RETRIES,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize base API client

        Args:
            base_url: API root; endpoints are joined onto it
            timeout: Request timeout in seconds
            max_retries: Attempts per request
            transport: Optional httpx transport (mock transports in tests)
        """
        self.base_url = base_url.rstrip("/")
        self.max_retries = max(1, max_retries)
        self.client = httpx.AsyncClient(timeout=timeout, transport=transport)
        self.logger = logger

    def _url(self, endpoint: str) -> str:
        return f"{self.base_url}/{endpoint.lstrip('/')}"

    @staticmethod
    def _decode(response: httpx.Response) -> Any:
        # DELETE answers with 204 or an empty body
        if response.status_code == 204 or not response.text.strip():
            return {}
        return response.json()

    @staticmethod
    def _is_retryable(error: httpx.HTTPError) -> bool:
        if isinstance(error, httpx.HTTPStatusError):
            return error.response.status_code >= 500
        return isinstance(error, httpx.RequestError)

    async def _request(
        self,
        method: str,
        endpoint: str,
        params: Optional[Dict[str, Any]] = None,
        json_data: Optional[Any] = None,
    ) -> Any:
        """
        Make HTTP request with retry logic

        Args:
            method: HTTP method (GET, POST, PUT, DELETE)
            endpoint: Path below the API root
            params: Query parameters
            json_data: JSON body

        Returns:
            Decoded JSON body, or an empty dict for empty responses

        Raises:
            StoreError: On a client error, or once every attempt has failed
        """
        url = self._url(endpoint)
        last_error: Optional[httpx.HTTPError] = None

        for attempt in range(1, self.max_retries + 1):
            self.logger.debug(f"{method} {url} (attempt {attempt}/{self.max_retries})")
            try:
                response = await self.client.request(method, url, params=params, json=json_data)
                if response.status_code >= 400:
                    self.logger.warning(f"{method} {url} -> {response.status_code}: {response.text[:500]}")
                response.raise_for_status()
                return self._decode(response)
            except httpx.HTTPError as e:
                last_error = e
                if not self._is_retryable(e) or attempt == self.max_retries:
                    break
                delay = RETRY_DELAY * attempt
                self.logger.warning(f"{method} {url} failed ({e}), retrying in {delay}s")
                await asyncio.sleep(delay)

        self.logger.error(f"{method} {url} gave up after {attempt} attempt(s): {last_error}")
        if isinstance(last_error, httpx.HTTPStatusError):
            status_code = last_error.response.status_code
            raise StoreError(f"{method} {url} returned {status_code}", status_code) from last_error
        raise StoreError(f"{method} {url} failed: {last_error}") from last_error

    async def get(self, endpoint: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """Make GET request"""
        return await self._request("GET", endpoint, params=params)

    async def post(self, endpoint: str, json_data: Optional[Any] = None) -> Any:
        """Make POST request"""
        return await self._request("POST", endpoint, json_data=json_data)

    async def put(self, endpoint: str, json_data: Optional[Any] = None) -> Any:
        """Make PUT request"""
        return await self._request("PUT", endpoint, json_data=json_data)

    async def delete(self, endpoint: str) -> Any:
        """Make DELETE request"""
        return await self._request("DELETE", endpoint)

    async def close(self):
        """Close HTTP client"""
        await self.client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
