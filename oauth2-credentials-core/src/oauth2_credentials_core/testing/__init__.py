"""Testing utilities for code built on oauth2-credentials-core.

Example:
    ```python
    from oauth2_credentials_core.testing import FakeClock


    def test_token_refreshes_near_expiry():
        clock = FakeClock()
        credentials = MyCredentials(clock=clock)
        credentials.get_request_metadata()
        clock.advance(seconds=3500)
        assert credentials.should_refresh()
    ```
"""

from datetime import UTC, datetime, timedelta

__all__ = ["FakeClock"]


class FakeClock:
    """Manually advanced clock, usable wherever a credential accepts ``clock=``."""

    def __init__(self, start: datetime | None = None):
        self._now = start or datetime(2024, 1, 1, tzinfo=UTC)

    def __call__(self) -> datetime:
        return self._now

    def advance(self, *, seconds: float = 0, milliseconds: float = 0) -> None:
        self._now += timedelta(seconds=seconds, milliseconds=milliseconds)
