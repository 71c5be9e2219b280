"""Token and credential contracts for OAuth2 clients.

This package provides:
- Immutable access tokens with millisecond expiration semantics
- Credential source variants (file, URL, AWS, executable) as validated configuration
- A base OAuth2 credential and a proxy-friendly credential presenting access or identity tokens
- The quota project capability and httpx request decoration

Example:
    ```python
    import httpx

    from oauth2_credentials_core.auth import AccessToken, CredentialsAuth, OAuth2Credentials

    credentials = OAuth2Credentials(AccessToken("ya29.a0Af..."))
    client = httpx.Client(auth=CredentialsAuth(credentials))
    ```
"""

from oauth2_credentials_core.auth.credential_sources import (
    AwsCredentialSource,
    CredentialFormatType,
    CredentialSource,
    ExecutableCredentialSource,
    IdentityPoolCredentialSource,
    IdentityPoolSourceType,
    build_credential_source,
)
from oauth2_credentials_core.auth.exceptions import (
    CredentialError,
    CredentialNotFoundError,
    InvalidArgumentError,
    RefreshError,
)
from oauth2_credentials_core.auth.http import CredentialsAuth
from oauth2_credentials_core.auth.oauth2 import OAuth2Credentials
from oauth2_credentials_core.auth.proxy_token import ProxyTokenCredentials, TokenResponse
from oauth2_credentials_core.auth.quota import QuotaProjectIdProvider, quota_project_id_of
from oauth2_credentials_core.auth.settings import SettingsResolver
from oauth2_credentials_core.auth.tokens import AccessToken, TokenKind

__all__ = [
    "AccessToken",
    "AwsCredentialSource",
    "CredentialError",
    "CredentialFormatType",
    "CredentialNotFoundError",
    "CredentialSource",
    "CredentialsAuth",
    "ExecutableCredentialSource",
    "IdentityPoolCredentialSource",
    "IdentityPoolSourceType",
    "InvalidArgumentError",
    "OAuth2Credentials",
    "ProxyTokenCredentials",
    "QuotaProjectIdProvider",
    "RefreshError",
    "SettingsResolver",
    "TokenKind",
    "TokenResponse",
    "build_credential_source",
    "quota_project_id_of",
]
