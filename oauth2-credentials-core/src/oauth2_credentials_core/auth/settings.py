"""Configuration resolution for credential settings.

Settings such as the quota project or the token kind a proxy credential
should present are resolved from several sources, first match wins:

1. Explicitly provided value
2. Environment variable
3. .env file (python-dotenv, loaded into the environment once)
4. Default value

Example:
    ```python
    from oauth2_credentials_core.auth import SettingsResolver

    resolver = SettingsResolver()
    quota_project_id = resolver.resolve_quota_project_id()
    token_kind = resolver.resolve_token_kind(env_var_name="MY_SERVICE_TOKEN_KIND")
    ```

Setting values are masked in logs; only their source is reported.
"""

import logging
import os
from threading import Lock

from dotenv import load_dotenv

from oauth2_credentials_core.auth.exceptions import CredentialNotFoundError
from oauth2_credentials_core.auth.tokens import TokenKind

logger = logging.getLogger(__name__)

QUOTA_PROJECT_ENV_VAR = "GOOGLE_CLOUD_QUOTA_PROJECT"


class SettingsResolver:
    """Resolve credential settings from explicit values, the environment, .env and defaults.

    Args:
        dotenv_path: Path to a .env file. If None, python-dotenv searches
            parent directories.
        load_dotenv: Whether to load a .env file at all.
    """

    def __init__(self, dotenv_path: str | None = None, load_dotenv: bool = True):
        self._dotenv_loaded = False
        self._dotenv_lock = Lock()
        self._dotenv_path = dotenv_path

        if load_dotenv:
            self._ensure_dotenv_loaded()

    def _ensure_dotenv_loaded(self) -> None:
        if self._dotenv_loaded:
            return

        with self._dotenv_lock:
            if self._dotenv_loaded:
                return
            try:
                load_dotenv(dotenv_path=self._dotenv_path)
                logger.debug("Loaded .env file for settings resolution")
            except OSError as e:
                logger.warning(f"Failed to load .env file: {e}")
            self._dotenv_loaded = True

    def resolve(
        self,
        *,
        value: str | None = None,
        env_var_name: str | None = None,
        default: str | None = None,
        required: bool = False,
    ) -> str | None:
        """Resolve a single setting.

        Args:
            value: Explicit value; wins over every other source.
            env_var_name: Environment variable to consult (includes values
                loaded from .env).
            default: Fallback value.
            required: Raise instead of returning None when nothing resolves.

        Raises:
            CredentialNotFoundError: If `required` and no source has a value.
        """
        if value is not None:
            result, source = value, "explicit parameter"
        elif env_var_name and env_var_name in os.environ:
            result, source = os.environ[env_var_name], f"environment variable '{env_var_name}'"
        elif default is not None:
            result, source = default, "default value"
        else:
            result, source = None, None

        if result is not None:
            logger.debug(f"Resolved setting from {source}: ***")
        elif required:
            error_msg = "Required setting not found"
            if env_var_name:
                error_msg += f" (checked env var: {env_var_name})"
            raise CredentialNotFoundError(error_msg, env_var_name=env_var_name)

        return result

    def resolve_quota_project_id(self, value: str | None = None, *, required: bool = False) -> str | None:
        """Resolve the quota project, consulting ``GOOGLE_CLOUD_QUOTA_PROJECT``."""
        return self.resolve(value=value, env_var_name=QUOTA_PROJECT_ENV_VAR, required=required)

    def resolve_token_kind(
        self,
        value: TokenKind | str | None = None,
        *,
        env_var_name: str | None = None,
        default: TokenKind = TokenKind.ACCESS_TOKEN,
    ) -> TokenKind:
        """Resolve which token a proxy credential presents.

        Raises:
            InvalidArgumentError: If the resolved value is not a known token kind.
        """
        if isinstance(value, TokenKind):
            return value
        raw = self.resolve(value=value, env_var_name=env_var_name, default=default.value)
        return TokenKind.parse(raw)
