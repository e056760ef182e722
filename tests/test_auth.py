import base64

import pytest
import responses

from wavely.auth import (
    AuthConfig,
    AuthError,
    BasicAuth,
    BearerAuth,
    OAuth2Auth,
    build_auth_provider,
)

TOKEN_URL = "https://auth.example.com/token"


def test_basic_header_round_trip():
    password = "password"
    header = BasicAuth("user", password).auth_header()
    scheme, encoded = header.split(" ")
    assert scheme == "Basic"
    assert base64.b64decode(encoded).decode() == "user:password"


def test_bearer_header():
    assert BearerAuth("token").auth_header() == "Bearer token"


def test_build_providers():
    assert isinstance(build_auth_provider(AuthConfig(type="BASIC", username="u")), BasicAuth)
    bearer = build_auth_provider(AuthConfig(type="bearer", token="token"))
    assert bearer.auth_header() == "Bearer token"
    assert isinstance(build_auth_provider(AuthConfig(type="oauth2")), OAuth2Auth)
    assert build_auth_provider(AuthConfig(type="none")) is None


def test_build_unknown_type():
    with pytest.raises(AuthError, match="weird"):
        build_auth_provider(AuthConfig(type="weird"))


def test_oauth2_caches_token():
    provider = OAuth2Auth("client", "secret", TOKEN_URL, "token")
    with responses.RequestsMock() as rsps:
        rsps.add(responses.POST, TOKEN_URL, json={"access_token": "token", "expires_in": 3600})
        assert provider.auth_header() == "Bearer token"
        assert provider.auth_header() == "Bearer token"
        assert len(rsps.calls) == 1
        assert "grant_type=refresh_token" in rsps.calls[0].request.body


def test_oauth2_refreshes_expired_token():
    provider = OAuth2Auth("client", "secret", TOKEN_URL, "token")
    with responses.RequestsMock() as rsps:
        rsps.add(responses.POST, TOKEN_URL, json={"access_token": "token", "expires_in": 5})
        provider.auth_header()
        provider.auth_header()
        assert len(rsps.calls) == 2


def test_oauth2_error_status():
    provider = OAuth2Auth("client", "secret", TOKEN_URL, "token")
    with responses.RequestsMock() as rsps:
        rsps.add(responses.POST, TOKEN_URL, status=401, body="denied")
        with pytest.raises(AuthError, match="token error: denied"):
            provider.auth_header()


def test_oauth2_bad_json():
    provider = OAuth2Auth("client", "secret", TOKEN_URL, "token")
    with responses.RequestsMock() as rsps:
        rsps.add(responses.POST, TOKEN_URL, status=200, body="not json")
        with pytest.raises(AuthError, match="token parse error"):
            provider.auth_header()