"""Vehicle endpoint table and request builder.

Every vehicle operation is one of three request kinds:

- ``READ``: GET with no body, optionally tagged with the unit system.
- ``COMMAND``: POST with an ``{"action": "<NAME>", ...}`` body.
- ``DELETE``: DELETE with no body.
"""

from __future__ import annotations

import enum
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from .config import USER_AGENT
from .exceptions import ValidationError
from .models import ApiRequest, HttpMethod, UnitSystem

UNIT_SYSTEM_HEADER = "sc-unit-system"


class RequestKind(enum.Enum):
    READ = "read"
    COMMAND = "command"
    DELETE = "delete"


class Operation(enum.Enum):
    """Vehicle operations supported by the client."""

    INFO = "info"
    VIN = "vin"
    PERMISSIONS = "permissions"
    ODOMETER = "odometer"
    LOCATION = "location"
    FUEL = "fuel"
    BATTERY = "battery"
    CHARGE = "charge"
    DISCONNECT = "disconnect"
    START_PANIC = "start_panic"
    STOP_PANIC = "stop_panic"
    OPEN_SUNROOF = "open_sunroof"
    CLOSE_SUNROOF = "close_sunroof"
    FLASH_HEADLIGHTS = "flash_headlights"
    HONK_HORN = "honk_horn"
    LOCK = "lock"
    UNLOCK = "unlock"
    START_CHARGE = "start_charge"
    STOP_CHARGE = "stop_charge"


@dataclass(frozen=True)
class Endpoint:
    kind: RequestKind
    resource: str
    action: str | None = None
    unit_bearing: bool = False

    @property
    def method(self) -> HttpMethod:
        if self.kind is RequestKind.COMMAND:
            return HttpMethod.POST
        if self.kind is RequestKind.DELETE:
            return HttpMethod.DELETE
        return HttpMethod.GET


def _read(resource: str, *, unit_bearing: bool = False) -> Endpoint:
    return Endpoint(RequestKind.READ, resource, unit_bearing=unit_bearing)


def _command(resource: str, action: str) -> Endpoint:
    return Endpoint(RequestKind.COMMAND, resource, action=action)


ENDPOINTS: dict[Operation, Endpoint] = {
    Operation.INFO: _read(""),
    Operation.VIN: _read("/vin"),
    Operation.PERMISSIONS: _read("/permissions"),
    Operation.ODOMETER: _read("/odometer", unit_bearing=True),
    Operation.LOCATION: _read("/location"),
    Operation.FUEL: _read("/fuel", unit_bearing=True),
    Operation.BATTERY: _read("/battery", unit_bearing=True),
    Operation.CHARGE: _read("/charge"),
    Operation.DISCONNECT: Endpoint(RequestKind.DELETE, "/application"),
    Operation.START_PANIC: _command("/panic", "START"),
    Operation.STOP_PANIC: _command("/panic", "STOP"),
    Operation.OPEN_SUNROOF: _command("/sunroof", "OPEN"),
    Operation.CLOSE_SUNROOF: _command("/sunroof", "CLOSE"),
    Operation.FLASH_HEADLIGHTS: _command("/lights/headlights", "FLASH"),
    Operation.HONK_HORN: _command("/horn", "HONK"),
    Operation.LOCK: _command("/security", "LOCK"),
    Operation.UNLOCK: _command("/security", "UNLOCK"),
    Operation.START_CHARGE: _command("/charge", "START"),
    Operation.STOP_CHARGE: _command("/charge", "STOP"),
}


def auth_headers(access_token: str, user_agent: str = USER_AGENT) -> dict[str, str]:
    """Return the headers every authenticated API request carries."""
    return {
        "Authorization": f"Bearer {access_token}",
        "User-Agent": user_agent,
    }


def _drop_none(values: Mapping[str, Any] | None) -> dict[str, Any]:
    if not values:
        return {}
    return {k: v for k, v in values.items() if v is not None}


def build_request(
    operation: Operation,
    vehicle_id: str,
    access_token: str,
    unit_system: UnitSystem | str = UnitSystem.METRIC,
    *,
    user_agent: str = USER_AGENT,
    params: Mapping[str, Any] | None = None,
    body: Mapping[str, Any] | None = None,
) -> ApiRequest:
    """Build the request for ``operation`` on one vehicle.

    Args:
        operation: The vehicle operation.
        vehicle_id: The vehicle ID.
        access_token: Bearer access token.
        unit_system: Unit system requested for unit-bearing reads.
        user_agent: User-Agent header value.
        params: Query parameters (reads only); ``None`` values are dropped.
        body: Extra command fields merged next to ``action``; ``None``
            values are dropped.

    Returns:
        The ApiRequest to send.

    Raises:
        ValidationError: If parameters are given to an operation that does
            not take them, or the unit system is invalid.
    """
    endpoint = ENDPOINTS[operation]
    headers = auth_headers(access_token, user_agent)
    path = f"/vehicles/{vehicle_id}{endpoint.resource}"

    query = _drop_none(params)
    extra = _drop_none(body)

    if query and endpoint.kind is not RequestKind.READ:
        raise ValidationError("params", params, f"{operation.value} takes no query")
    if extra and endpoint.kind is not RequestKind.COMMAND:
        raise ValidationError("body", body, f"{operation.value} takes no body")

    if endpoint.kind is RequestKind.COMMAND:
        payload: dict[str, Any] = {"action": endpoint.action}
        payload.update(extra)
        return ApiRequest(endpoint.method, path, headers=headers, json=payload)

    if endpoint.unit_bearing:
        headers[UNIT_SYSTEM_HEADER] = UnitSystem.parse(unit_system).value

    return ApiRequest(endpoint.method, path, headers=headers, params=query or None)
