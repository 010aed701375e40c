"""
HTTP client utilities for talking to the Inworld API.
"""

import asyncio
from collections.abc import AsyncIterator
from typing import Any

import aiohttp


class HTTPStatusError(Exception):
    """Raised when the server answers with a non-success status."""

    def __init__(self, status: int, body: str):
        super().__init__(f"HTTP {status}: {body}")
        self.status = status
        self.body = body


class AsyncHTTPClient:
    """Async HTTP client owning a single aiohttp session per context."""

    def __init__(self, timeout: float | None = None) -> None:
        """Initialize HTTP client. ``timeout`` of None keeps aiohttp without a total limit."""
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self.session: aiohttp.ClientSession | None = None

    async def __aenter__(self) -> "AsyncHTTPClient":
        """Enter async context manager."""
        self.session = aiohttp.ClientSession(timeout=self.timeout)
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Exit async context manager."""
        if self.session:
            await self.session.close()
            self.session = None

    @staticmethod
    async def _prepare_request(coro_or_ctx: Any) -> Any:
        """Normalize aiohttp request result to an async context manager."""
        if asyncio.iscoroutine(coro_or_ctx):
            return await coro_or_ctx
        return coro_or_ctx

    @staticmethod
    async def _ensure_response_ok(response: Any) -> None:
        """Raise HTTPStatusError with the raw body for any non-2xx status."""
        if not 200 <= response.status < 300:
            body = await response.text()
            raise HTTPStatusError(response.status, body)

    def _require_session(self) -> aiohttp.ClientSession:
        if not self.session:
            raise RuntimeError("HTTP client not initialized. Use async context manager.")
        return self.session

    async def post(
        self,
        url: str,
        data: dict[str, Any] | None = None,
        headers: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Perform POST request with a JSON body and return the decoded JSON response."""
        session = self._require_session()

        request_ctx = await self._prepare_request(
            session.post(url, json=data, headers=headers)
        )
        async with request_ctx as response:
            await self._ensure_response_ok(response)
            return await response.json(content_type=None)

    async def stream(
        self,
        url: str,
        data: dict[str, Any] | None = None,
        headers: dict[str, Any] | None = None,
        chunk_size: int = 8192,
    ) -> AsyncIterator[bytes]:
        """Perform POST request and yield the response body in arrival order."""
        session = self._require_session()

        request_ctx = await self._prepare_request(
            session.post(url, json=data, headers=headers)
        )
        async with request_ctx as response:
            await self._ensure_response_ok(response)
            async for chunk in response.content.iter_chunked(chunk_size):
                if chunk:
                    yield chunk
