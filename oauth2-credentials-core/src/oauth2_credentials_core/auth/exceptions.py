"""Exceptions raised by credentials, credential sources and settings.

Construction-time problems surface as `InvalidArgumentError`, which is also a
`ValueError` so callers that only know the standard library can still catch it.
Failures that happen while obtaining a new token surface as `RefreshError`.

Example:
    ```python
    from oauth2_credentials_core.auth.exceptions import InvalidArgumentError

    try:
        source = build_credential_source(config["credential_source"])
    except InvalidArgumentError as e:
        print(f"Bad credential_source ({e.argument}): {e}")
    ```
"""


class CredentialError(Exception):
    """Base exception for credential-related errors.

    All credential-specific exceptions inherit from this class,
    making it easy to catch any credential-related error.
    """

    pass


class InvalidArgumentError(CredentialError, ValueError):
    """Raised when a required argument or configuration key is missing or malformed.

    Attributes:
        argument: Name of the offending argument or configuration key (if known).
    """

    def __init__(self, message: str, argument: str | None = None):
        super().__init__(message)
        self.argument = argument


class CredentialNotFoundError(CredentialError):
    """Raised when a required setting cannot be resolved from any source.

    Attributes:
        env_var_name: The environment variable name that was checked (if any).
    """

    def __init__(self, message: str, env_var_name: str | None = None):
        super().__init__(message)
        self.env_var_name = env_var_name


class RefreshError(CredentialError):
    """Raised when a credential cannot obtain a new token.

    Example:
        ```python
        try:
            credentials.refresh()
        except RefreshError as e:
            logger.error(f"Token refresh failed: {e}")
        ```
    """

    pass
