"""Tests for httpx request decoration."""

from datetime import timedelta

import httpx
import pytest

from oauth2_credentials_core.auth import (
    AccessToken,
    CredentialsAuth,
    InvalidArgumentError,
    OAuth2Credentials,
    ProxyTokenCredentials,
    TokenKind,
    TokenResponse,
)
from oauth2_credentials_core.auth.http import should_refresh_for_response


class SequenceCredentials(OAuth2Credentials):
    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.refresh_count = 0

    def refresh_access_token(self):
        self.refresh_count += 1
        return AccessToken(f"tok-{self.refresh_count}", self.now() + timedelta(hours=1))

    def get_quota_project_id(self):
        return "proj-123"


class IdTokenCredentials(ProxyTokenCredentials):
    def fetch_tokens(self):
        return TokenResponse(AccessToken("at-xyz", self.now() + timedelta(hours=1)), id_token="jwt-abc")


def make_client(credentials, handler):
    return httpx.Client(auth=CredentialsAuth(credentials), transport=httpx.MockTransport(handler))


class TestCredentialsAuth:
    """Test header application and refresh-on-reject."""

    def test_requires_credentials(self):
        with pytest.raises(InvalidArgumentError):
            CredentialsAuth(None)

    def test_headers_applied(self, clock):
        seen = []

        def handler(request):
            seen.append(dict(request.headers))
            return httpx.Response(200)

        with make_client(SequenceCredentials(clock=clock), handler) as client:
            response = client.get("https://example.com/v1/resource")

        assert response.status_code == 200
        assert seen[0]["authorization"] == "Bearer tok-1"
        assert seen[0]["x-goog-user-project"] == "proj-123"

    def test_proxy_credentials_send_identity_token(self, clock):
        seen = []

        def handler(request):
            seen.append(request.headers["authorization"])
            return httpx.Response(200)

        with make_client(IdTokenCredentials(TokenKind.ID_TOKEN, clock=clock), handler) as client:
            client.get("https://example.com/")

        assert seen == ["Bearer jwt-abc"]

    def test_refreshes_and_retries_on_401(self, clock):
        credentials = SequenceCredentials(clock=clock)
        seen = []

        def handler(request):
            seen.append(request.headers["authorization"])
            if request.headers["authorization"] == "Bearer tok-1":
                return httpx.Response(401)
            return httpx.Response(200)

        with make_client(credentials, handler) as client:
            response = client.get("https://example.com/")

        assert response.status_code == 200
        assert seen == ["Bearer tok-1", "Bearer tok-2"]

    def test_retries_only_once(self, clock):
        credentials = SequenceCredentials(clock=clock)

        with make_client(credentials, lambda request: httpx.Response(401)) as client:
            response = client.get("https://example.com/")

        assert response.status_code == 401
        assert credentials.refresh_count == 2

    def test_refresh_failure_returns_original_response(self, clock):
        credentials = OAuth2Credentials(AccessToken("static"), clock=clock)

        with make_client(credentials, lambda request: httpx.Response(401)) as client:
            response = client.get("https://example.com/")

        assert response.status_code == 401
        assert credentials.access_token == AccessToken("static")

    def test_no_refresh_on_success_with_challenge(self, clock):
        credentials = SequenceCredentials(clock=clock)

        def handler(request):
            return httpx.Response(200, headers={"WWW-Authenticate": 'Bearer error="invalid_token"'})

        with make_client(credentials, handler) as client:
            response = client.get("https://example.com/")

        assert response.status_code == 200
        assert credentials.refresh_count == 1

    def test_no_refresh_on_forbidden(self, clock):
        credentials = SequenceCredentials(clock=clock)

        with make_client(credentials, lambda request: httpx.Response(403)) as client:
            client.get("https://example.com/")

        assert credentials.refresh_count == 1


class TestShouldRefreshForResponse:
    """Test challenge parsing."""

    def test_plain_401(self):
        assert should_refresh_for_response(httpx.Response(401))

    def test_bearer_invalid_token(self):
        response = httpx.Response(
            403, headers={"WWW-Authenticate": 'Bearer realm="example", error="invalid_token"'}
        )
        assert should_refresh_for_response(response)

    def test_bearer_other_error_on_401(self):
        response = httpx.Response(401, headers={"WWW-Authenticate": 'Bearer error="insufficient_scope"'})
        assert not should_refresh_for_response(response)

    def test_non_bearer_challenge_on_401(self):
        response = httpx.Response(401, headers={"WWW-Authenticate": 'Basic realm="example"'})
        assert should_refresh_for_response(response)

    def test_success(self):
        assert not should_refresh_for_response(httpx.Response(200))
