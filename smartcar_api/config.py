"""Client configuration for smartcar_api."""

from __future__ import annotations

import dataclasses
import os
import ssl
from typing import Any

from ._version import __version__

# Default Smartcar endpoints
API_URL = "https://api.smartcar.com/v1.0"
AUTH_URL = "https://auth.smartcar.com/oauth/token"
CONNECT_URL = "https://connect.smartcar.com/oauth/authorize"

DEFAULT_TIMEOUT = 30.0

USER_AGENT = f"smartcar-python-sdk:{__version__}"


@dataclasses.dataclass(frozen=True)
class SmartcarConfig:
    """Client configuration.

    Attributes:
        api_url: Base URL of the vehicle API, including the version segment.
        auth_url: OAuth token endpoint.
        connect_url: OAuth authorization (Connect) endpoint.
        timeout: Total request timeout in seconds.
        ssl_context: Optional SSL context for custom certificates.
    """

    api_url: str = API_URL
    auth_url: str = AUTH_URL
    connect_url: str = CONNECT_URL
    timeout: float = DEFAULT_TIMEOUT
    ssl_context: ssl.SSLContext | None = None

    @classmethod
    def from_env(cls, **overrides: Any) -> SmartcarConfig:
        """Create configuration from ``SMARTCAR_*`` environment variables.

        Explicit keyword arguments take precedence over the environment.
        """
        env = os.environ

        _ENV_CONFIG_MAP = {
            "SMARTCAR_API_URL": "api_url",
            "SMARTCAR_AUTH_URL": "auth_url",
            "SMARTCAR_CONNECT_URL": "connect_url",
        }
        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_CONFIG_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        # timeout is numeric, handle separately
        timeout_env = env.get("SMARTCAR_TIMEOUT")
        if timeout_env is not None and "timeout" not in overrides:
            config_kwargs["timeout"] = float(timeout_env)

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
