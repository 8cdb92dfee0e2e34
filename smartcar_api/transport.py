"""HTTP transport for the Smartcar API built on aiohttp.

Maps raw HTTP replies to parsed bodies on success and to the library's
exception hierarchy on failure.
"""

from __future__ import annotations

import asyncio
import json
import logging
import ssl
from collections.abc import Mapping
from typing import Any, Protocol

import aiohttp

from .exceptions import (
    ApiError,
    AuthenticationError,
    AuthorizationError,
    ConnectionError,
    SmartcarError,
    TimeoutError,
    VehicleNotFoundError,
)

_logger = logging.getLogger(__name__)

_ERROR_CLASSES: dict[int, type[ApiError]] = {
    401: AuthenticationError,
    403: AuthorizationError,
    404: VehicleNotFoundError,
}

_DEFAULT_MESSAGES = {
    401: "Authentication failed",
    403: "Access denied",
    404: "Not found",
}


class Transport(Protocol):
    """Structural transport interface used by the vehicle and account clients.

    Any object with a compatible ``request`` coroutine can stand in for
    :class:`AiohttpTransport`, which keeps test doubles simple.
    """

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: Mapping[str, Any] | None = None,
        json: Any = None,
        data: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> Any:
        ...

    async def close(self) -> None:
        ...


class AiohttpTransport:
    """HTTP transport using aiohttp.

    Uses an optionally provided ``aiohttp.ClientSession`` or creates one
    lazily. Sessions created here are closed by :meth:`close`; external
    sessions are left to their owner.

    Args:
        base_url: Base URL every request path is joined onto.
        session: Optional existing aiohttp session to use.
        timeout: Total request timeout in seconds.
        ssl_context: Optional SSL context for custom certificates.
    """

    def __init__(
        self,
        base_url: str,
        session: aiohttp.ClientSession | None = None,
        timeout: float = 30.0,
        ssl_context: ssl.SSLContext | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._session = session
        self._owns_session = session is None
        self._timeout = aiohttp.ClientTimeout(total=timeout)
        self._ssl_context = ssl_context
        self._closed = False

    @property
    def closed(self) -> bool:
        """Return True once the transport has been closed."""
        return self._closed

    async def _get_session(self) -> aiohttp.ClientSession:
        if self._closed:
            raise ConnectionError("Transport is closed")

        if self._session is None or self._session.closed:
            if self._ssl_context is not None:
                connector = aiohttp.TCPConnector(ssl=self._ssl_context)
            else:
                connector = aiohttp.TCPConnector()
            self._session = aiohttp.ClientSession(
                timeout=self._timeout, connector=connector
            )
            self._owns_session = True
        return self._session

    def _build_url(self, path: str) -> str:
        if not path:
            return self.base_url
        return f"{self.base_url}/{path.lstrip('/')}"

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: Mapping[str, Any] | None = None,
        json: Any = None,
        data: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> Any:
        """Send a request and return the parsed response body.

        Args:
            method: HTTP method.
            path: Path relative to ``base_url``.
            params: Optional query parameters.
            json: Optional JSON body.
            data: Optional form-encoded body.
            headers: Optional request headers.

        Returns:
            The decoded JSON body, the text body for non-JSON replies, or
            an empty dict when the reply has no content.

        Raises:
            ApiError: If the API answers with a non-2xx status.
            TimeoutError: If the request times out.
            ConnectionError: If the request could not be sent.
        """
        session = await self._get_session()
        url = self._build_url(path)

        _logger.debug("%s %s", method, url)

        try:
            async with session.request(
                method,
                url,
                params=dict(params) if params else None,
                json=json,
                data=data,
                headers=dict(headers) if headers else None,
            ) as resp:
                return await self._handle_response(resp)
        except SmartcarError:
            raise
        except asyncio.TimeoutError as e:
            _logger.warning("%s %s timed out", method, url)
            raise TimeoutError(f"Request to {url} timed out") from e
        except aiohttp.ClientConnectorError as e:
            _logger.warning("Failed to connect to %s: %s", self.base_url, e)
            raise ConnectionError(f"Failed to connect to {self.base_url}: {e}") from e
        except aiohttp.ClientError as e:
            _logger.warning("%s %s failed: %s", method, url, e)
            raise ConnectionError(f"Request failed: {e}") from e

    async def _handle_response(self, resp: aiohttp.ClientResponse) -> Any:
        if not 200 <= resp.status < 300:
            body = await self._safe_read_body(resp)
            _logger.debug("HTTP %s: %s", resp.status, body[:200])
            raise self._map_http_error(resp.status, resp.reason or "", body)

        if resp.status == 204:
            return {}

        content_type = resp.headers.get("Content-Type", "")
        try:
            if "application/json" in content_type:
                try:
                    return await resp.json()
                except ValueError:
                    return await resp.text()

            text = await resp.text()
        except UnicodeDecodeError as e:
            raise ApiError(
                "Undecodable response body",
                status_code=resp.status,
                description=str(e),
            ) from e
        return text if text else {}

    async def _safe_read_body(self, resp: aiohttp.ClientResponse) -> str:
        try:
            return await resp.text()
        except Exception:
            return ""

    def _map_http_error(
        self, status: int, message: str, body: str | None = None
    ) -> ApiError:
        """Build the exception for a non-2xx reply.

        Upstream ``message``/``error``, ``description``/``error_description``
        and ``code`` fields are lifted from a JSON body when present.
        """
        description: str | None = None
        code: str | None = None
        if body:
            try:
                payload = json.loads(body)
            except ValueError:
                payload = None
            if isinstance(payload, dict):
                upstream = payload.get("message") or payload.get("error")
                if upstream:
                    message = str(upstream)
                upstream_description = payload.get("description") or payload.get(
                    "error_description"
                )
                if upstream_description:
                    description = str(upstream_description)
                if payload.get("code"):
                    code = str(payload["code"])

        if not message:
            message = _DEFAULT_MESSAGES.get(status, "")

        error_cls = _ERROR_CLASSES.get(status, ApiError)
        return error_cls(
            message,
            status_code=status,
            response_body=body,
            description=description,
            code=code,
        )

    async def close(self) -> None:
        """Close the transport, closing the session if we created it."""
        self._closed = True
        if self._owns_session and self._session is not None and not self._session.closed:
            await self._session.close()
        self._session = None
