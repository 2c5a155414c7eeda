"""Shared async JSON-over-HTTP client for the geocoding and weather connectors.

Owns an aiohttp session (or borrows an injected one), bounds every request
with a total timeout and retries 5xx / connection errors with exponential
backoff. Failures surface as NetworkError / MalformedResponseError.
"""

from __future__ import annotations

import asyncio
from typing import Any

import aiohttp

from weatherdash.core.errors import MalformedResponseError, NetworkError
from weatherdash.utils.logger import get_logger

logger = get_logger("http")

DEFAULT_USER_AGENT = "weatherdash/1.0"


class JsonHttpClient:
    """Base class for connectors that GET a URL and decode a JSON body.

    Args:
        session: Optional shared session. Injected sessions are not closed by ``close()``.
        timeout_s: Total timeout per attempt.
        max_retries: Retries after the first attempt on 5xx / connection errors.
        retry_base_delay_s: Backoff base; attempt n waits base * 2**n.
        user_agent: Sent on every request.
    """

    service_name = "http"

    def __init__(
        self,
        session: aiohttp.ClientSession | None = None,
        timeout_s: float = 10.0,
        max_retries: int = 2,
        retry_base_delay_s: float = 0.5,
        user_agent: str = DEFAULT_USER_AGENT,
    ) -> None:
        self._session = session
        self._owns_session = session is None
        self._timeout_s = timeout_s
        self._max_retries = max(0, max_retries)
        self._retry_base_delay_s = retry_base_delay_s
        self._user_agent = user_agent

    async def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                headers={"User-Agent": self._user_agent, "Accept": "application/json"},
                timeout=aiohttp.ClientTimeout(total=self._timeout_s),
            )
            self._owns_session = True
        return self._session

    async def close(self) -> None:
        if self._owns_session and self._session and not self._session.closed:
            await self._session.close()

    async def __aenter__(self) -> JsonHttpClient:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.close()

    async def _get_json(self, url: str, params: dict[str, str]) -> Any:
        """GET ``url`` and decode JSON, retrying transient failures."""
        session = await self._get_session()
        last_error: NetworkError | None = None
        attempts = self._max_retries + 1

        for attempt in range(attempts):
            try:
                async with session.get(
                    url,
                    params=params,
                    timeout=aiohttp.ClientTimeout(total=self._timeout_s),
                ) as resp:
                    if resp.status == 200:
                        try:
                            return await resp.json(content_type=None)
                        except ValueError as e:
                            raise MalformedResponseError(
                                f"{self.service_name} returned invalid JSON"
                            ) from e
                    body = await resp.text()
                    if resp.status < 500:
                        logger.warning(
                            "http_client_error",
                            service=self.service_name,
                            status=resp.status,
                            body=body[:200],
                        )
                        raise NetworkError(f"{self.service_name} request failed ({resp.status})")
                    last_error = NetworkError(f"{self.service_name} server error ({resp.status})")
                    logger.warning(
                        "http_server_error",
                        service=self.service_name,
                        status=resp.status,
                        attempt=attempt + 1,
                    )
            except asyncio.TimeoutError:
                last_error = NetworkError(f"{self.service_name} request timed out")
                logger.warning("http_timeout", service=self.service_name, attempt=attempt + 1)
            except aiohttp.ClientError as e:
                last_error = NetworkError(f"{self.service_name} connection error")
                logger.warning(
                    "http_connection_error",
                    service=self.service_name,
                    error=str(e),
                    attempt=attempt + 1,
                )

            if attempt + 1 < attempts:
                await asyncio.sleep(self._retry_base_delay_s * (2**attempt))

        raise last_error or NetworkError(f"{self.service_name} request failed")
