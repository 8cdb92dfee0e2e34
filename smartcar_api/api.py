"""High-level Smartcar API client.

This module provides the account-level entry point: listing the vehicles
an access token can reach, looking up the user, and handing out
:class:`~smartcar_api.vehicle.Vehicle` handles that share one transport.
"""

from __future__ import annotations

import logging
from typing import Any

import aiohttp

from .config import SmartcarConfig
from .endpoints import auth_headers
from .models import UnitSystem
from .transport import AiohttpTransport, Transport
from .vehicle import Vehicle

_logger = logging.getLogger(__name__)


class SmartcarClient:
    """Async client for account-level Smartcar endpoints.

    Example usage with context manager (recommended):
        async with SmartcarClient() as client:
            result = await client.get_vehicle_ids(access_token)
            for vehicle_id in result["vehicles"]:
                vehicle = client.vehicle(vehicle_id, access_token)
                print(await vehicle.info())

    Example usage with manual lifecycle:
        client = SmartcarClient()
        try:
            user = await client.get_user_id(access_token)
        finally:
            await client.close()

    Args:
        config: Client configuration (defaults to ``SmartcarConfig()``).
        session: Optional existing aiohttp session to use.
        transport: Optional transport; overrides ``config`` and ``session``.
    """

    def __init__(
        self,
        config: SmartcarConfig | None = None,
        session: aiohttp.ClientSession | None = None,
        transport: Transport | None = None,
    ) -> None:
        self._config = config or SmartcarConfig()
        if transport is None:
            transport = AiohttpTransport(
                self._config.api_url,
                session=session,
                timeout=self._config.timeout,
                ssl_context=self._config.ssl_context,
            )
        self._transport = transport
        self._closed = False

    async def __aenter__(self) -> SmartcarClient:
        """Enter async context manager."""
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Exit async context manager and clean up resources."""
        await self.close()

    @property
    def config(self) -> SmartcarConfig:
        return self._config

    async def get_vehicle_ids(
        self,
        access_token: str,
        *,
        limit: int | None = None,
        offset: int | None = None,
    ) -> dict[str, Any]:
        """List the IDs of the vehicles the token grants access to.

        Args:
            access_token: Bearer access token.
            limit: Maximum number of IDs to return.
            offset: Number of IDs to skip.

        Returns:
            ``{"vehicles": [...], "paging": {...}}`` as sent by the API.
        """
        params: dict[str, Any] = {}
        if limit is not None:
            params["limit"] = limit
        if offset is not None:
            params["offset"] = offset

        return await self._transport.request(
            "GET",
            "/vehicles",
            params=params or None,
            headers=auth_headers(access_token),
        )

    async def get_user_id(self, access_token: str) -> str | None:
        """Return the ID of the user who granted the token.

        Returns:
            The user ID, or None if the reply carries none.
        """
        data = await self._transport.request(
            "GET", "/user", headers=auth_headers(access_token)
        )
        if isinstance(data, dict):
            return data.get("id")
        return None

    def vehicle(
        self,
        vehicle_id: str,
        access_token: str,
        unit_system: UnitSystem | str = UnitSystem.METRIC,
    ) -> Vehicle:
        """Return a handle for one vehicle sharing this client's transport.

        Raises:
            ValidationError: If ``unit_system`` is not metric or imperial.
        """
        return Vehicle(
            vehicle_id,
            access_token,
            unit_system,
            transport=self._transport,
        )

    async def close(self) -> None:
        """Close the client and release resources."""
        if self._closed:
            return

        self._closed = True
        _logger.debug("Closing Smartcar client")
        await self._transport.close()
