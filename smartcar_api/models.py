"""Value types shared across the client."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any

from .exceptions import ValidationError


class UnitSystem(str, enum.Enum):
    """Measurement convention requested for distance-like fields."""

    METRIC = "metric"
    IMPERIAL = "imperial"

    @classmethod
    def parse(cls, value: Any) -> UnitSystem:
        """Return the member matching ``value``.

        Accepts a member or its string value.

        Raises:
            ValidationError: If ``value`` is not a known unit system.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value)
            except ValueError:
                pass
        allowed = ", ".join(repr(m.value) for m in cls)
        raise ValidationError(
            "unit_system", value, f"unit system must be one of {allowed}"
        )


class HttpMethod(str, enum.Enum):
    GET = "GET"
    POST = "POST"
    DELETE = "DELETE"


@dataclass(frozen=True)
class ApiRequest:
    """A fully specified outbound request, relative to the API base URL."""

    method: HttpMethod
    path: str
    headers: dict[str, str] = field(default_factory=dict)
    json: dict[str, Any] | None = None
    params: dict[str, Any] | None = None
