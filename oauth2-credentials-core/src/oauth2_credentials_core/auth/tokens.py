"""Immutable token values and the token kinds a credential can present.

`AccessToken` stores its expiration as integer milliseconds since the epoch,
computed once at construction. Every read of `expiration_time` builds a new
timezone-aware UTC datetime from that integer, so the value handed back is
always millisecond-precise and never shares state with the caller's input.

Example:
    ```python
    from datetime import UTC, datetime, timedelta

    from oauth2_credentials_core.auth import AccessToken

    token = AccessToken("ya29.a0Af...", datetime.now(UTC) + timedelta(hours=1))
    headers = {"Authorization": f"Bearer {token.token_value}"}
    ```
"""

from datetime import UTC, datetime, timedelta
from enum import Enum

from oauth2_credentials_core.auth.exceptions import InvalidArgumentError

EPOCH = datetime(1970, 1, 1, tzinfo=UTC)
_ONE_MILLISECOND = timedelta(milliseconds=1)


def to_epoch_millis(instant: datetime) -> int:
    """Convert a datetime to whole milliseconds since the epoch.

    Naive datetimes are interpreted as UTC. Sub-millisecond precision is
    truncated towards the past.
    """
    if instant.tzinfo is None:
        instant = instant.replace(tzinfo=UTC)
    return (instant - EPOCH) // _ONE_MILLISECOND


def from_epoch_millis(millis: int) -> datetime:
    return EPOCH + timedelta(milliseconds=millis)


class TokenKind(str, Enum):
    """Which token string a credential presents as its bearer value."""

    ACCESS_TOKEN = "access_token"
    ID_TOKEN = "id_token"

    @classmethod
    def parse(cls, value: "TokenKind | str | None") -> "TokenKind":
        """Coerce a configuration value into a `TokenKind`.

        Raises:
            InvalidArgumentError: If the value is None or not a known kind.
        """
        if value is None:
            raise InvalidArgumentError("token_kind must not be None", argument="token_kind")
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            valid = ", ".join(kind.value for kind in cls)
            raise InvalidArgumentError(
                f"Invalid token kind: {value!r} (expected one of: {valid})", argument="token_kind"
            ) from None


class AccessToken:
    """A bearer token string with an optional expiration instant.

    The token value is stored verbatim; an empty string is accepted; checking
    for a usable value is left to the credential that produced it.

    Args:
        token_value: The raw bearer token.
        expiration_time: When the token expires. None means no known expiration.
    """

    __slots__ = ("_token_value", "_expiration_time_millis")

    def __init__(self, token_value: str, expiration_time: datetime | None = None):
        self._token_value = token_value
        self._expiration_time_millis = None if expiration_time is None else to_epoch_millis(expiration_time)

    @classmethod
    def from_expires_in(cls, token_value: str, expires_in: float | None, now: datetime) -> "AccessToken":
        """Build a token from a relative lifetime in seconds, as token endpoints report it."""
        if expires_in is None:
            return cls(token_value)
        return cls(token_value, now + timedelta(seconds=expires_in))

    @property
    def token_value(self) -> str:
        return self._token_value

    @property
    def expiration_time(self) -> datetime | None:
        if self._expiration_time_millis is None:
            return None
        return from_epoch_millis(self._expiration_time_millis)

    @property
    def expiration_time_millis(self) -> int | None:
        return self._expiration_time_millis

    def expires_in(self, now: datetime) -> timedelta | None:
        """Time left until expiration relative to `now` (negative once expired)."""
        if self._expiration_time_millis is None:
            return None
        return timedelta(milliseconds=self._expiration_time_millis - to_epoch_millis(now))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AccessToken):
            return NotImplemented
        return (
            self._token_value == other._token_value
            and self._expiration_time_millis == other._expiration_time_millis
        )

    def __hash__(self) -> int:
        return hash((self._token_value, self._expiration_time_millis))

    def __repr__(self) -> str:
        return f"AccessToken(token_value='***', expiration_time_millis={self._expiration_time_millis})"
