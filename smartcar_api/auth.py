"""OAuth helper for obtaining Smartcar access tokens.

Builds the Connect authorization URL and exchanges authorization codes
and refresh tokens for access grants. Grants can be exported to a plain
dict and restored later, so an integration can persist them without
keeping the client secret around the stored data.
"""

from __future__ import annotations

import base64
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import TYPE_CHECKING, Any
from urllib.parse import urlencode

from .config import USER_AGENT, SmartcarConfig
from .exceptions import ApiError, AuthenticationError, ValidationError
from .transport import AiohttpTransport

if TYPE_CHECKING:
    from .transport import Transport

_logger = logging.getLogger(__name__)

# Smartcar refresh tokens are valid for 60 days
REFRESH_TOKEN_LIFETIME = timedelta(days=60)


def _basic_auth(client_id: str, client_secret: str) -> str:
    credentials = f"{client_id}:{client_secret}".encode("latin1")
    return "Basic " + base64.b64encode(credentials).decode("ascii")


def _parse_datetime(value: Any) -> datetime | None:
    """Parse a stored timestamp; naive values are taken as UTC."""
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return None
    if not isinstance(value, datetime):
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value


@dataclass
class Access:
    """An OAuth access grant."""

    access_token: str
    refresh_token: str | None = None
    expires_at: datetime | None = None
    refresh_expires_at: datetime | None = None
    token_type: str = "Bearer"

    @property
    def is_expired(self) -> bool:
        """Return True if the access token has expired."""
        if self.expires_at is None:
            return False
        return datetime.now(timezone.utc) >= self.expires_at

    @property
    def is_refresh_expired(self) -> bool:
        """Return True if the refresh token has expired or is missing."""
        if not self.refresh_token:
            return True
        if self.refresh_expires_at is None:
            return False
        return datetime.now(timezone.utc) >= self.refresh_expires_at

    def to_dict(self) -> dict[str, Any]:
        """Convert to a dictionary for JSON serialization."""
        data: dict[str, Any] = {
            "access_token": self.access_token,
            "token_type": self.token_type,
        }
        if self.refresh_token:
            data["refresh_token"] = self.refresh_token
        if self.expires_at:
            data["expires_at"] = self.expires_at.isoformat()
        if self.refresh_expires_at:
            data["refresh_expires_at"] = self.refresh_expires_at.isoformat()
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Access:
        """Create from a dictionary (e.g., loaded from JSON)."""
        return cls(
            access_token=data["access_token"],
            refresh_token=data.get("refresh_token"),
            expires_at=_parse_datetime(data.get("expires_at")),
            refresh_expires_at=_parse_datetime(data.get("refresh_expires_at")),
            token_type=data.get("token_type") or "Bearer",
        )

    @classmethod
    def from_token_response(cls, data: dict[str, Any]) -> Access:
        """Create from an OAuth token endpoint reply."""
        token_value = data.get("access_token")
        if not token_value:
            error = data.get("error_description") or data.get("error") or "No token in response"
            raise AuthenticationError(f"Token exchange failed: {error}")

        now = datetime.now(timezone.utc)
        expires_at = None
        expires_in = data.get("expires_in")
        if expires_in is not None:
            try:
                expires_at = now + timedelta(seconds=int(expires_in))
            except (ValueError, TypeError):
                expires_at = None

        refresh_expires_at = None
        if data.get("refresh_token"):
            refresh_expires_at = now + REFRESH_TOKEN_LIFETIME

        return cls(
            access_token=str(token_value),
            refresh_token=data.get("refresh_token"),
            expires_at=expires_at,
            refresh_expires_at=refresh_expires_at,
            token_type=data.get("token_type") or "Bearer",
        )


class AuthClient:
    """OAuth client for the Smartcar authorization flow.

    Args:
        client_id: Application client ID.
        client_secret: Application client secret.
        redirect_uri: Redirect URI registered for the application.
        scope: Permissions to request; the application default applies
            when omitted.
        test_mode: Launch Connect in test mode (simulated vehicles).
        transport: Optional transport for the token endpoint.
        config: Configuration for URLs and timeouts.
    """

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        redirect_uri: str,
        scope: list[str] | None = None,
        *,
        test_mode: bool = False,
        transport: Transport | None = None,
        config: SmartcarConfig | None = None,
    ) -> None:
        self._config = config or SmartcarConfig()
        self.client_id = client_id
        self._client_secret = client_secret
        self.redirect_uri = redirect_uri
        self.scope = list(scope) if scope else None
        self.test_mode = test_mode

        if transport is None:
            transport = AiohttpTransport(
                self._config.auth_url,
                timeout=self._config.timeout,
                ssl_context=self._config.ssl_context,
            )
            self._owns_transport = True
        else:
            self._owns_transport = False
        self._transport = transport

    async def __aenter__(self) -> AuthClient:
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()

    def get_auth_url(self, state: str | None = None, force_prompt: bool = False) -> str:
        """Return the Connect URL the user should be sent to.

        Args:
            state: Opaque value echoed back to the redirect URI.
            force_prompt: Always show the approval screen, even if the
                user already granted access.
        """
        query: dict[str, str] = {
            "response_type": "code",
            "client_id": self.client_id,
            "redirect_uri": self.redirect_uri,
            "approval_prompt": "force" if force_prompt else "auto",
        }
        if self.scope:
            query["scope"] = " ".join(self.scope)
        if state:
            query["state"] = state
        if self.test_mode:
            query["mode"] = "test"
        return f"{self._config.connect_url}?{urlencode(query)}"

    def _token_headers(self) -> dict[str, str]:
        return {
            "Authorization": _basic_auth(self.client_id, self._client_secret),
            "User-Agent": USER_AGENT,
        }

    async def _request_token(self, form: dict[str, str]) -> Access:
        try:
            data = await self._transport.request(
                "POST", "", data=form, headers=self._token_headers()
            )
        except AuthenticationError:
            raise
        except ApiError as e:
            reason = e.description or e.message
            raise AuthenticationError(
                f"Token exchange failed: {reason}",
                status_code=e.status_code,
                response_body=e.response_body,
                description=e.description,
                code=e.code,
            ) from e
        if not isinstance(data, dict):
            raise AuthenticationError("Invalid token response")
        return Access.from_token_response(data)

    async def exchange_code(self, code: str) -> Access:
        """Exchange an authorization code for an access grant.

        Raises:
            ValidationError: If ``code`` is empty.
            AuthenticationError: If the exchange is rejected.
        """
        if not code:
            raise ValidationError("code", code, "authorization code is required")

        _logger.debug("Exchanging authorization code")
        return await self._request_token(
            {
                "grant_type": "authorization_code",
                "code": code,
                "redirect_uri": self.redirect_uri,
            }
        )

    async def exchange_refresh_token(self, refresh_token: str) -> Access:
        """Exchange a refresh token for a new access grant.

        Raises:
            ValidationError: If ``refresh_token`` is empty.
            AuthenticationError: If the refresh is rejected.
        """
        if not refresh_token:
            raise ValidationError("refresh_token", refresh_token, "refresh token is required")

        _logger.debug("Refreshing access token")
        return await self._request_token(
            {
                "grant_type": "refresh_token",
                "refresh_token": refresh_token,
            }
        )

    async def close(self) -> None:
        """Close the transport if this client created it."""
        if self._owns_transport:
            await self._transport.close()
