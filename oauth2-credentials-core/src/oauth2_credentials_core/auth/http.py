"""httpx integration: attach credential headers to outgoing requests.

`CredentialsAuth` works with anything exposing ``get_request_metadata()`` and
``refresh()``, i.e. `OAuth2Credentials` and `ProxyTokenCredentials`.

When the server rejects the token it refreshes once and resends:
- a ``WWW-Authenticate: Bearer`` challenge containing ``error="invalid_token"``
- a 401 response without any Bearer challenge

Example:
    ```python
    import httpx

    from oauth2_credentials_core.auth import CredentialsAuth

    with httpx.Client(auth=CredentialsAuth(credentials)) as client:
        response = client.get("https://storage.googleapis.com/storage/v1/b")
    ```

Note:
    Refreshing is synchronous. With ``httpx.AsyncClient`` the refresh runs
    inline in the event loop, the same as httpx's own sync-only auth flows.
"""

import logging
import re
from collections.abc import Generator
from typing import Protocol

import httpx

from oauth2_credentials_core.auth._validation import check_not_none
from oauth2_credentials_core.auth.exceptions import CredentialError

logger = logging.getLogger(__name__)

_INVALID_TOKEN_ERROR = re.compile(r'\s*error\s*=\s*"?invalid_token"?')


class RequestMetadataProvider(Protocol):
    def get_request_metadata(self) -> dict[str, list[str]]: ...

    def refresh(self) -> None: ...


def should_refresh_for_response(response: httpx.Response) -> bool:
    """Decide whether a response means the presented token must be replaced."""
    for challenge in response.headers.get_list("www-authenticate"):
        if challenge.startswith("Bearer"):
            return _INVALID_TOKEN_ERROR.search(challenge) is not None
    return response.status_code == httpx.codes.UNAUTHORIZED


class CredentialsAuth(httpx.Auth):
    """httpx auth flow that decorates requests with credential metadata.

    Args:
        credentials: The credential supplying request headers.
    """

    def __init__(self, credentials: RequestMetadataProvider):
        self.credentials = check_not_none(credentials, "credentials")

    def apply(self, request: httpx.Request) -> None:
        for name, values in self.credentials.get_request_metadata().items():
            request.headers[name] = ", ".join(values)

    def auth_flow(self, request: httpx.Request) -> Generator[httpx.Request, httpx.Response, None]:
        self.apply(request)
        response = yield request

        if response.is_success or not should_refresh_for_response(response):
            return

        logger.debug(f"{request.method} {request.url} rejected the token ({response.status_code}), refreshing")
        try:
            self.credentials.refresh()
        except CredentialError as e:
            logger.warning(f"Unable to refresh token after {response.status_code}: {e}")
            return

        self.apply(request)
        yield request
