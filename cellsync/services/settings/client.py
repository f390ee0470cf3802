"""
Remote Config Client

Fetches and persists the agent settings through GET/PUT /config.

Every failure (non-200 status, transport error) comes back as a
RemoteResult carrying a RemoteError instead of an exception, so the
caller decides how to branch.
"""

import asyncio
import json
from dataclasses import dataclass
from typing import Any, Mapping

import httpx

from ...common.config import ClientSettings, build_url, get_client_settings
from ...common.exceptions import RemoteError
from ...common.logging_setup import get_service_logger

logger = get_service_logger("settings.client")

HEADERS = {
    "Content-Type": "application/json",
    "Accept": "application/json",
}


@dataclass(frozen=True)
class RemoteResult:
    """Outcome of one round-trip: a parsed body or a RemoteError"""
    body: Any = None
    error: RemoteError | None = None

    @classmethod
    def success(cls, body: Any) -> "RemoteResult":
        return cls(body=body)

    @classmethod
    def failure(cls, error: RemoteError) -> "RemoteResult":
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> Any:
        """Return the body, or raise the carried RemoteError"""
        if self.error is not None:
            raise self.error
        return self.body


class RemoteConfigClient:
    """
    Stateless client for the agent configuration resource.

    The underlying httpx client is created lazily and reused within one
    event loop. A call from a different loop gets a fresh httpx client,
    since pooled connections belong to the loop that opened them. No
    credentials are forwarded: the cookie jar is cleared before each
    request and no auth is configured.
    """

    def __init__(
        self,
        settings: ClientSettings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.settings = settings or get_client_settings()
        self._transport = transport
        self._client: httpx.AsyncClient | None = None
        self._loop: asyncio.AbstractEventLoop | None = None
        self._log = logger.bind(resource=self.settings.config_path)

    @property
    def url(self) -> str:
        return build_url(self.settings.config_path, self.settings)

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create reusable HTTP client"""
        loop = asyncio.get_running_loop()
        if self._client is None or self._client.is_closed or self._loop is not loop:
            # A client left over from a finished loop is dropped, not closed
            self._client = httpx.AsyncClient(
                timeout=self.settings.timeout_s,
                transport=self._transport,
                follow_redirects=False,
            )
            self._loop = loop
        return self._client

    async def close(self) -> None:
        """Close HTTP client"""
        if self._client and not self._client.is_closed:
            if self._loop is asyncio.get_running_loop():
                await self._client.aclose()
        self._client = None
        self._loop = None

    async def __aenter__(self) -> "RemoteConfigClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def fetch_configuration(self) -> RemoteResult:
        """GET the current configuration"""
        return await self._round_trip("GET", "fetch")

    async def persist_configuration(self, value: Mapping[str, Any]) -> RemoteResult:
        """PUT `value`; the server answers with the stored (possibly normalized) value"""
        return await self._round_trip("PUT", "persist", value)

    async def _round_trip(
        self,
        method: str,
        operation: str,
        value: Mapping[str, Any] | None = None,
    ) -> RemoteResult:
        client = await self._get_client()
        client.cookies.clear()
        content = json.dumps(value) if value is not None else None

        try:
            response = await client.request(
                method,
                self.url,
                headers=HEADERS,
                content=content,
            )
        except httpx.HTTPError as e:
            description = str(e) or type(e).__name__
            self._log.warning(
                f"{method} {self.url} failed: {description}",
                extra={"operation": operation},
            )
            return RemoteResult.failure(
                RemoteError(f"Transport error: {description}", operation=operation)
            )

        if response.status_code != 200:
            error = self._error_from_response(response, operation)
            self._log.warning(
                f"{method} {self.url} returned {response.status_code}: {error.message}",
                extra={"operation": operation, "status_code": response.status_code},
            )
            return RemoteResult.failure(error)

        self._log.debug(f"{method} {self.url} returned 200", extra={"operation": operation})

        # Invalid JSON on a 200 is not a RemoteError; let it propagate
        return RemoteResult.success(response.json())

    @staticmethod
    def _error_from_response(response: httpx.Response, operation: str) -> RemoteError:
        """Build a RemoteError from an agent error payload ({"error": ..., "stack": ...})"""
        try:
            data = response.json()
        except ValueError:
            data = None

        if isinstance(data, dict) and data.get("error"):
            return RemoteError(
                str(data["error"]),
                status_code=response.status_code,
                stack=data.get("stack"),
                operation=operation,
            )

        return RemoteError(
            f"Server responded with status {response.status_code}",
            status_code=response.status_code,
            operation=operation,
        )
