"""OAuth2 Credentials Core - token and credential contracts for cloud API clients.

This library provides the pieces every concrete credential builds on:
- Immutable access tokens with expiration semantics
- Validated credential source configuration for external identities
- Access-token or identity-token presentation for proxy layers
- Quota project attribution and httpx request decoration

Example:
    ```python
    from oauth2_credentials_core.auth import ProxyTokenCredentials, TokenKind

    credentials = MyProxyCredentials(TokenKind.ID_TOKEN)
    headers = credentials.get_request_metadata()
    ```
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
