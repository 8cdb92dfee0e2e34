"""Per-vehicle handle with one async method per vehicle endpoint.

A handle holds the vehicle ID, the access token and the unit system the
API should use for distance-like measurements. Results are the parsed JSON
bodies, returned unchanged.
"""

from __future__ import annotations

import logging
from typing import Any

from .config import SmartcarConfig
from .endpoints import Operation, build_request
from .exceptions import ValidationError
from .models import UnitSystem
from .transport import AiohttpTransport, Transport

_logger = logging.getLogger(__name__)


class Vehicle:
    """Handle for a single connected vehicle.

    Example usage:
        async with Vehicle(vehicle_id, access_token, "imperial") as vehicle:
            reading = await vehicle.odometer()
            print(reading["distance"])

    Args:
        vehicle_id: The vehicle ID.
        access_token: Bearer access token for the vehicle owner.
        unit_system: Unit system for unit-bearing reads (default: metric).
        transport: Optional transport to share; it is not closed by the
            handle. When omitted the handle creates and owns one.
        config: Configuration used when creating the transport. Only valid
            without ``transport``.

    Raises:
        ValidationError: If ``unit_system`` is not metric or imperial, or
            if both ``transport`` and ``config`` are given.
    """

    def __init__(
        self,
        vehicle_id: str,
        access_token: str,
        unit_system: UnitSystem | str = UnitSystem.METRIC,
        *,
        transport: Transport | None = None,
        config: SmartcarConfig | None = None,
    ) -> None:
        self._unit_system = UnitSystem.parse(unit_system)
        if transport is not None and config is not None:
            raise ValidationError(
                "config", config, "config applies only when no transport is given"
            )
        self._id = vehicle_id
        self._access_token = access_token

        if transport is None:
            config = config or SmartcarConfig()
            transport = AiohttpTransport(
                config.api_url,
                timeout=config.timeout,
                ssl_context=config.ssl_context,
            )
            self._owns_transport = True
        else:
            self._owns_transport = False
        self._transport = transport

    @property
    def id(self) -> str:
        """Return the vehicle ID."""
        return self._id

    @property
    def access_token(self) -> str:
        """Return the access token."""
        return self._access_token

    @property
    def unit_system(self) -> UnitSystem:
        """Return the unit system used for unit-bearing reads."""
        return self._unit_system

    def set_unit_system(self, unit_system: UnitSystem | str) -> None:
        """Switch the unit system for subsequent requests.

        Raises:
            ValidationError: If ``unit_system`` is not metric or imperial.
        """
        self._unit_system = UnitSystem.parse(unit_system)

    async def __aenter__(self) -> Vehicle:
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the transport if this handle created it."""
        if self._owns_transport:
            await self._transport.close()

    async def _call(
        self,
        operation: Operation,
        *,
        params: dict[str, Any] | None = None,
        body: dict[str, Any] | None = None,
    ) -> Any:
        request = build_request(
            operation,
            self._id,
            self._access_token,
            self._unit_system,
            params=params,
            body=body,
        )
        _logger.debug("Vehicle %s: %s", self._id, operation.value)
        return await self._transport.request(
            request.method.value,
            request.path,
            params=request.params,
            json=request.json,
            headers=request.headers,
        )

    # Reads

    async def info(self) -> dict[str, Any]:
        """Return the vehicle's id, make, model and year."""
        return await self._call(Operation.INFO)

    async def vin(self) -> dict[str, Any]:
        """Return the vehicle's VIN."""
        return await self._call(Operation.VIN)

    async def permissions(
        self,
        *,
        limit: int | None = None,
        offset: int | None = None,
    ) -> dict[str, Any]:
        """Return the permissions granted for this vehicle.

        Args:
            limit: Maximum number of permissions to return.
            offset: Number of permissions to skip.

        Returns:
            ``{"permissions": [...]}``.
        """
        return await self._call(
            Operation.PERMISSIONS, params={"limit": limit, "offset": offset}
        )

    async def odometer(self) -> dict[str, Any]:
        """Return the odometer reading in the handle's unit system."""
        return await self._call(Operation.ODOMETER)

    async def location(self) -> dict[str, Any]:
        """Return the vehicle's latitude and longitude."""
        return await self._call(Operation.LOCATION)

    async def fuel(self) -> dict[str, Any]:
        """Return the fuel tank level and range."""
        return await self._call(Operation.FUEL)

    async def battery(self) -> dict[str, Any]:
        """Return the traction battery level and range."""
        return await self._call(Operation.BATTERY)

    async def charge(self) -> dict[str, Any]:
        """Return the charging state."""
        return await self._call(Operation.CHARGE)

    # Commands

    async def disconnect(self) -> dict[str, Any]:
        """Revoke this application's access to the vehicle."""
        return await self._call(Operation.DISCONNECT)

    async def start_panic(self) -> dict[str, Any]:
        return await self._call(Operation.START_PANIC)

    async def stop_panic(self) -> dict[str, Any]:
        return await self._call(Operation.STOP_PANIC)

    async def open_sunroof(self, percent_open: float | None = None) -> dict[str, Any]:
        """Open the sunroof.

        Args:
            percent_open: How far to open it, from 0 to 1. The vehicle's
                default applies when omitted.
        """
        return await self._call(
            Operation.OPEN_SUNROOF, body={"percentOpen": percent_open}
        )

    async def close_sunroof(self) -> dict[str, Any]:
        return await self._call(Operation.CLOSE_SUNROOF)

    async def flash_headlights(self) -> dict[str, Any]:
        return await self._call(Operation.FLASH_HEADLIGHTS)

    async def honk_horn(self) -> dict[str, Any]:
        return await self._call(Operation.HONK_HORN)

    async def lock(self) -> dict[str, Any]:
        return await self._call(Operation.LOCK)

    async def unlock(self) -> dict[str, Any]:
        return await self._call(Operation.UNLOCK)

    async def start_charge(self) -> dict[str, Any]:
        return await self._call(Operation.START_CHARGE)

    async def stop_charge(self) -> dict[str, Any]:
        return await self._call(Operation.STOP_CHARGE)

    def __repr__(self) -> str:
        return f"Vehicle(id={self._id!r}, unit_system={self._unit_system.value!r})"
