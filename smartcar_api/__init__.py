"""Smartcar API - An async Python library for the Smartcar vehicle API.

This library provides a clean, async interface for reading vehicle data
and sending commands to connected vehicles.

Example usage:
    from smartcar_api import Vehicle

    async with Vehicle(vehicle_id, access_token, unit_system="imperial") as vehicle:
        odometer = await vehicle.odometer()
        print(f"Odometer: {odometer['distance']} miles")
        await vehicle.flash_headlights()
"""

from ._version import __version__
from .api import SmartcarClient
from .auth import Access, AuthClient
from .config import SmartcarConfig
from .endpoints import Operation, build_request
from .exceptions import (
    ApiError,
    AuthenticationError,
    AuthorizationError,
    ConnectionError,
    SmartcarError,
    TimeoutError,
    TransportError,
    ValidationError,
    VehicleNotFoundError,
)
from .models import ApiRequest, UnitSystem
from .transport import AiohttpTransport, Transport
from .vehicle import Vehicle

__all__ = [
    "__version__",
    # Main client
    "SmartcarClient",
    # Vehicle handle
    "Vehicle",
    "UnitSystem",
    # Requests
    "Operation",
    "ApiRequest",
    "build_request",
    # Auth
    "Access",
    "AuthClient",
    # Config
    "SmartcarConfig",
    # Transport
    "Transport",
    "AiohttpTransport",
    # Exceptions
    "SmartcarError",
    "ValidationError",
    "ApiError",
    "AuthenticationError",
    "AuthorizationError",
    "VehicleNotFoundError",
    "TransportError",
    "ConnectionError",
    "TimeoutError",
]
