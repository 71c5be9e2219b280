"""Credentials that present either an access token or an identity token.

Some proxies in front of APIs (Extensible Service Proxy and similar) accept
only identity tokens (JWTs) and reject opaque OAuth2 access tokens. Token
endpoints used by such credentials return both; `ProxyTokenCredentials`
decides, once at construction, which of the two callers receive as "the"
token.

The access-token state lives in an embedded `OAuth2Credentials`; the identity
token is stored next to it. Both are replaced together under the embedded
credential's lock.

Example:
    ```python
    from oauth2_credentials_core.auth import ProxyTokenCredentials, TokenKind, TokenResponse


    class ImpersonatedProxyCredentials(ProxyTokenCredentials):
        def fetch_tokens(self) -> TokenResponse:
            payload = call_token_endpoint()
            return TokenResponse(
                access_token=AccessToken.from_expires_in(payload["access_token"], payload["expires_in"], self.now()),
                id_token=payload.get("id_token"),
            )


    credentials = ImpersonatedProxyCredentials(TokenKind.ID_TOKEN)
    credentials.refresh()
    credentials.token  # the identity token
    ```
"""

import logging
from dataclasses import dataclass
from datetime import datetime

from oauth2_credentials_core.auth.exceptions import RefreshError
from oauth2_credentials_core.auth.oauth2 import Clock, OAuth2Credentials, bearer_metadata
from oauth2_credentials_core.auth.quota import quota_project_id_of
from oauth2_credentials_core.auth.tokens import AccessToken, TokenKind

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TokenResponse:
    """Tokens obtained by one refresh."""

    access_token: AccessToken
    id_token: str | None = None


class ProxyTokenCredentials:
    """Credential whose exposed token is selected by a fixed `TokenKind`.

    Args:
        token_kind: Which token to present. Accepts a `TokenKind` or its string
            value (``"access_token"`` / ``"id_token"``). Required.
        access_token: Initial access token, if one is already known.
        clock: Callable returning the current time as an aware datetime.

    Raises:
        InvalidArgumentError: If `token_kind` is None or unknown.
    """

    def __init__(
        self,
        token_kind: TokenKind | str | None,
        access_token: AccessToken | None = None,
        *,
        clock: Clock | None = None,
    ):
        self._token_kind = TokenKind.parse(token_kind)
        self._base = OAuth2Credentials(access_token, clock=clock)
        self._id_token: str | None = None

    @property
    def token_kind(self) -> TokenKind:
        return self._token_kind

    @property
    def base(self) -> OAuth2Credentials:
        """The embedded credential holding the access-token state."""
        return self._base

    @property
    def access_token(self) -> AccessToken | None:
        return self._base.access_token

    @property
    def id_token(self) -> str | None:
        return self._id_token

    @property
    def token(self) -> str | None:
        """The bearer string presented to callers for the configured kind."""
        if self._token_kind is TokenKind.ID_TOKEN:
            return self._id_token
        access_token = self._base.access_token
        return access_token.token_value if access_token is not None else None

    def now(self) -> datetime:
        return self._base.now()

    def fetch_tokens(self) -> TokenResponse:
        """Obtain fresh tokens from the origin. Subclasses must override this."""
        raise RefreshError(f"{type(self).__name__} does not support refreshing tokens.")

    def refresh(self) -> None:
        """Fetch new tokens and publish them as one snapshot.

        Raises:
            RefreshError: If the credential presents identity tokens and the
                origin did not return one.
        """
        with self._base.lock:
            response = self.fetch_tokens()
            if self._token_kind is TokenKind.ID_TOKEN and not response.id_token:
                raise RefreshError(
                    f"{type(self).__name__} is configured to present identity tokens "
                    "but the token response did not include one."
                )
            if response.access_token is None:
                raise RefreshError(f"{type(self).__name__}.fetch_tokens() returned no access token")
            self._id_token = response.id_token
            self._base.use_access_token(response.access_token)
            logger.debug(f"{type(self).__name__} refreshed, presenting {self._token_kind.value}")

    def should_refresh(self) -> bool:
        if self._token_kind is TokenKind.ID_TOKEN and self._id_token is None:
            return True
        return self._base.should_refresh()

    def get_request_metadata(self) -> dict[str, list[str]]:
        """Return headers carrying the selected token, refreshing first if needed."""
        with self._base.lock:
            if self.should_refresh():
                self.refresh()
            token = self.token
        return bearer_metadata(token, quota_project_id_of(self))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ProxyTokenCredentials):
            return NotImplemented
        return (
            type(self) is type(other)
            and self._base == other._base
            and self._token_kind is other._token_kind
        )

    def __hash__(self) -> int:
        return hash((self._base, self._token_kind))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(token_kind={self._token_kind.value}, access_token={self._base.access_token!r})"
