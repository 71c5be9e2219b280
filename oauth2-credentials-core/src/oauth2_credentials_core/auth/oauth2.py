"""Base OAuth2 credential holding the current access token snapshot.

`OAuth2Credentials` owns the mutable "current token" of a live credential.
The token itself is an immutable `AccessToken`; refreshing swaps in a new,
fully constructed snapshot while holding the credential's lock, so readers
never observe a partially updated state.

Subclasses obtain new tokens by overriding `refresh_access_token()`.

Example:
    ```python
    from oauth2_credentials_core.auth import AccessToken, OAuth2Credentials


    class MetadataServerCredentials(OAuth2Credentials):
        def refresh_access_token(self) -> AccessToken:
            payload = fetch_token_from_metadata_server()
            return AccessToken.from_expires_in(payload["access_token"], payload["expires_in"], self.now())


    credentials = MetadataServerCredentials()
    headers = credentials.get_request_metadata()
    # {"Authorization": ["Bearer ..."]}
    ```
"""

import logging
from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from threading import RLock

from oauth2_credentials_core.auth.exceptions import RefreshError
from oauth2_credentials_core.auth.quota import QUOTA_PROJECT_HEADER, quota_project_id_of
from oauth2_credentials_core.auth.tokens import AccessToken

logger = logging.getLogger(__name__)

AUTHORIZATION_HEADER = "Authorization"
BEARER_PREFIX = "Bearer "

# Tokens closer than this to expiry are refreshed before use
MINIMUM_TOKEN_LIFETIME = timedelta(minutes=5)

Clock = Callable[[], datetime]
ChangeListener = Callable[["OAuth2Credentials"], None]


def _system_clock() -> datetime:
    return datetime.now(UTC)


def bearer_metadata(token_value: str, quota_project_id: str | None = None) -> dict[str, list[str]]:
    """Build request metadata for a bearer token and optional quota project."""
    metadata = {AUTHORIZATION_HEADER: [BEARER_PREFIX + token_value]}
    if quota_project_id:
        metadata[QUOTA_PROJECT_HEADER] = [quota_project_id]
    return metadata


class OAuth2Credentials:
    """Credential that presents an OAuth2 bearer access token.

    Args:
        access_token: Initial token, if one is already known.
        clock: Callable returning the current time as an aware datetime.
            Defaults to the system clock.
    """

    authentication_type = "OAuth2"

    def __init__(self, access_token: AccessToken | None = None, *, clock: Clock | None = None):
        self._lock = RLock()
        self._access_token = access_token
        self._change_listeners: list[ChangeListener] = []
        self.clock: Clock = clock or _system_clock

    @property
    def access_token(self) -> AccessToken | None:
        return self._access_token

    @property
    def lock(self) -> RLock:
        """Lock serializing refreshes; shared with wrappers that embed this credential."""
        return self._lock

    def now(self) -> datetime:
        return self.clock()

    def refresh_access_token(self) -> AccessToken:
        """Obtain a new access token. Subclasses that support refreshing override this.

        Raises:
            RefreshError: Always, for the base class.
        """
        raise RefreshError(
            f"{type(self).__name__} does not support refreshing the access token. "
            "Use an instance with a new access token, or a subclass that supports refreshing."
        )

    def refresh(self) -> None:
        """Replace the current token with a freshly obtained one and notify listeners."""
        with self._lock:
            token = self.refresh_access_token()
            if token is None:
                raise RefreshError(f"{type(self).__name__}.refresh_access_token() returned no token")
            self.use_access_token(token)
            for listener in list(self._change_listeners):
                listener(self)

    def use_access_token(self, token: AccessToken) -> None:
        with self._lock:
            self._access_token = token
            logger.debug(f"{type(self).__name__} now using token expiring at {token.expiration_time}")

    def add_change_listener(self, listener: ChangeListener) -> None:
        with self._lock:
            self._change_listeners.append(listener)

    def remove_change_listener(self, listener: ChangeListener) -> None:
        with self._lock:
            self._change_listeners.remove(listener)

    def should_refresh(self) -> bool:
        """True when there is no token or it expires within `MINIMUM_TOKEN_LIFETIME`."""
        token = self._access_token
        if token is None:
            return True
        expires_in = token.expires_in(self.now())
        return expires_in is not None and expires_in <= MINIMUM_TOKEN_LIFETIME

    def get_request_metadata(self) -> dict[str, list[str]]:
        """Return headers authorizing a request, refreshing the token first if needed."""
        with self._lock:
            if self.should_refresh():
                logger.debug(f"Refreshing {type(self).__name__} before use")
                self.refresh()
            token = self._access_token
        return bearer_metadata(token.token_value, quota_project_id_of(self))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, OAuth2Credentials):
            return NotImplemented
        return type(self) is type(other) and self._access_token == other._access_token

    def __hash__(self) -> int:
        return hash((type(self), self._access_token))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(access_token={self._access_token!r})"
