"""Authentication providers producing HTTP Authorization header values."""

from __future__ import annotations

import base64
import threading
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass

import requests


class AuthError(Exception):
    """Raised when an auth provider cannot be built or cannot produce a header."""


@dataclass
class AuthConfig:
    """Authentication settings as read from the configuration file."""

    type: str = ""
    username: str = ""
    password: str = ""
    token: str = ""
    client_id: str = ""
    client_secret: str = ""
    token_url: str = ""
    refresh_token: str = ""


class AuthProvider(ABC):
    """Something that yields the value of an Authorization header."""

    @abstractmethod
    def auth_header(self) -> str:
        """Return the Authorization header value."""


@dataclass
class BasicAuth(AuthProvider):
    username: str
    password: str

    def auth_header(self) -> str:
        raw = f"{self.username}:{self.password}".encode()
        return "Basic " + base64.b64encode(raw).decode("ascii")


@dataclass
class BearerAuth(AuthProvider):
    token: str

    def auth_header(self) -> str:
        return "Bearer " + self.token


class OAuth2Auth(AuthProvider):
    """OAuth2 refresh-token flow with a cached access token."""

    def __init__(self, client_id: str, client_secret: str, token_url: str,
                 refresh_token: str, timeout: float = 30.0) -> None:
        self.client_id = client_id
        self.client_secret = client_secret
        self.token_url = token_url
        self.refresh_token = refresh_token
        self.timeout = timeout
        self._access_token = ""
        self._expires_at = 0.0
        self._lock = threading.Lock()

    def auth_header(self) -> str:
        with self._lock:
            if self._access_token and time.monotonic() < self._expires_at:
                return "Bearer " + self._access_token
            return self._refresh()

    def _refresh(self) -> str:
        form = {
            "grant_type": "refresh_token",
            "refresh_token": self.refresh_token,
            "client_id": self.client_id,
            "client_secret": self.client_secret,
        }
        try:
            resp = requests.post(self.token_url, data=form, timeout=self.timeout)
        except requests.RequestException as exc:
            raise AuthError(f"token request failed: {exc}") from exc
        if resp.status_code != 200:
            raise AuthError(f"token error: {resp.text}")
        try:
            payload = resp.json()
            access_token = str(payload.get("access_token", ""))
            expires_in = int(payload.get("expires_in", 0))
        except (ValueError, TypeError, AttributeError) as exc:
            raise AuthError(f"token parse error: {exc}") from exc
        self._access_token = access_token
        self._expires_at = time.monotonic() + (expires_in - 10)
        return "Bearer " + access_token


def build_auth_provider(cfg: AuthConfig) -> AuthProvider | None:
    """Build the provider named by ``cfg.type``; ``none`` yields ``None``."""
    kind = cfg.type.lower()
    if kind == "basic":
        return BasicAuth(cfg.username, cfg.password)
    if kind == "bearer":
        return BearerAuth(cfg.token)
    if kind == "oauth2":
        return OAuth2Auth(cfg.client_id, cfg.client_secret, cfg.token_url, cfg.refresh_token)
    if kind == "none":
        return None
    raise AuthError("unbekannter Auth-Typ: " + cfg.type)