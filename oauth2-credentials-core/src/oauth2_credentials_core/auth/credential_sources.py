"""Credential source variants for externally issued credentials.

A credential source describes *where* a third-party subject token comes from.
It is pure, validated configuration: fetching the token (reading the file,
calling the metadata endpoint, running the executable) belongs to the
credential that owns the source.

Supported variants:
- IdentityPoolCredentialSource: a local file or a URL
- AwsCredentialSource: the AWS metadata endpoints
- ExecutableCredentialSource: a pluggable executable

Example:
    ```python
    from oauth2_credentials_core.auth import build_credential_source

    source = build_credential_source(
        {
            "file": "/var/run/secrets/token",
            "format": {"type": "json", "subject_token_field_name": "access_token"},
        }
    )
    assert source.source_type is IdentityPoolSourceType.FILE
    ```
"""

import logging
import re
from collections.abc import Mapping
from enum import Enum
from types import MappingProxyType
from typing import Any, ClassVar

from oauth2_credentials_core.auth._validation import check_not_none, optional_str, require_key
from oauth2_credentials_core.auth.exceptions import InvalidArgumentError

logger = logging.getLogger(__name__)


def _freeze(value: Any) -> Any:
    """Deep-copy configuration into read-only mappings and tuples."""
    if isinstance(value, Mapping):
        return MappingProxyType({key: _freeze(item) for key, item in value.items()})
    if isinstance(value, list | tuple):
        return tuple(_freeze(item) for item in value)
    return value


class CredentialSource:
    """Base class for all credential source variants.

    Args:
        credential_source: The ``credential_source`` mapping from a credential
            configuration. May be empty; must not be None.

    Raises:
        InvalidArgumentError: If `credential_source` is None.
    """

    source_name: ClassVar[str] = "generic"

    def __init__(self, credential_source: Mapping[str, Any] | None):
        check_not_none(credential_source, "credential_source")
        self._config = _freeze(credential_source)

    @property
    def config(self) -> Mapping[str, Any]:
        """Read-only view of the configuration this source was built from."""
        return self._config

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CredentialSource):
            return NotImplemented
        return type(self) is type(other) and dict(self._config) == dict(other._config)

    __hash__ = None  # config values may be nested mappings

    def __repr__(self) -> str:
        return f"{type(self).__name__}(source={self.source_name}, keys={sorted(self._config)})"


class IdentityPoolSourceType(str, Enum):
    FILE = "file"
    URL = "url"


class CredentialFormatType(str, Enum):
    TEXT = "text"
    JSON = "json"


class IdentityPoolCredentialSource(CredentialSource):
    """Subject token read from a local file or fetched from a URL.

    Exactly one of ``file`` or ``url`` must be set. The optional ``format``
    block selects between a raw text token (default) and a JSON document, in
    which case ``subject_token_field_name`` names the field holding the token.
    """

    source_name = "identity_pool"

    def __init__(self, credential_source: Mapping[str, Any] | None):
        super().__init__(credential_source)
        config = self.config

        if "file" in config and "url" in config:
            raise InvalidArgumentError(
                "Only one credential source type can be set, either file or url.", argument="file"
            )

        if "file" in config:
            self.source_type = IdentityPoolSourceType.FILE
        elif "url" in config:
            self.source_type = IdentityPoolSourceType.URL
        else:
            raise InvalidArgumentError(
                "Missing credential source file location or URL. At least one must be specified.",
                argument="file",
            )
        self.credential_location = optional_str(config, self.source_type.value)

        headers = config.get("headers")
        if headers is not None and not isinstance(headers, Mapping):
            raise InvalidArgumentError("Credential source headers must be a mapping.", argument="headers")
        self.headers: dict[str, str] | None = dict(headers) if headers else None

        self.format_type = CredentialFormatType.TEXT
        self.subject_token_field_name: str | None = None

        format_config = config.get("format")
        if format_config is not None and not isinstance(format_config, Mapping):
            raise InvalidArgumentError("Credential source format must be a mapping.", argument="format")
        if format_config and "type" in format_config:
            raw_type = format_config["type"]
            normalized = raw_type.lower() if isinstance(raw_type, str) else None
            if normalized == CredentialFormatType.JSON.value:
                self.subject_token_field_name = require_key(
                    format_config,
                    "subject_token_field_name",
                    "When specifying a JSON credential type, the subject_token_field_name must be set.",
                )
                self.format_type = CredentialFormatType.JSON
            elif normalized != CredentialFormatType.TEXT.value:
                raise InvalidArgumentError(
                    f"Invalid credential source format type: {raw_type}.", argument="format"
                )

        logger.debug(
            f"Configured {self.source_type.value} credential source ({self.format_type.value} format)"
        )

    @property
    def has_headers(self) -> bool:
        return bool(self.headers)


class AwsCredentialSource(CredentialSource):
    """Subject token derived from AWS security credentials.

    Requires ``regional_cred_verification_url`` (the regional
    GetCallerIdentity URL) and an ``environment_id`` of the form ``aws<N>``.
    Only environment version 1 is supported.
    """

    source_name = "aws"

    SUPPORTED_ENVIRONMENT_VERSION: ClassVar[int] = 1
    _ENVIRONMENT_ID_PATTERN: ClassVar[re.Pattern[str]] = re.compile(r"^(aws)(\d+)$")

    def __init__(self, credential_source: Mapping[str, Any] | None):
        super().__init__(credential_source)
        config = self.config

        self.regional_cred_verification_url: str = require_key(
            config,
            "regional_cred_verification_url",
            "A regional_cred_verification_url representing the GetCallerIdentity action URL must be specified.",
        )

        environment_id = config.get("environment_id")
        match = self._ENVIRONMENT_ID_PATTERN.match(environment_id) if isinstance(environment_id, str) else None
        if match is None:
            raise InvalidArgumentError("Invalid AWS environment ID.", argument="environment_id")

        environment_version = int(match.group(2))
        if environment_version != self.SUPPORTED_ENVIRONMENT_VERSION:
            raise InvalidArgumentError(
                f"AWS version {environment_version} is not supported in the current build.",
                argument="environment_id",
            )
        self.environment_version = environment_version

        self.region_url = optional_str(config, "region_url")
        self.url = optional_str(config, "url")
        self.imdsv2_session_token_url = optional_str(config, "imdsv2_session_token_url")


class ExecutableCredentialSource(CredentialSource):
    """Subject token produced by running a local executable.

    The ``executable`` block requires ``command``; ``timeout_millis`` defaults
    to 30 seconds and must lie between 5 and 120 seconds; ``output_file`` names
    a file the executable may cache its response in.
    """

    source_name = "executable"

    DEFAULT_TIMEOUT_MILLIS: ClassVar[int] = 30 * 1000
    MINIMUM_TIMEOUT_MILLIS: ClassVar[int] = 5 * 1000
    MAXIMUM_TIMEOUT_MILLIS: ClassVar[int] = 120 * 1000

    def __init__(self, credential_source: Mapping[str, Any] | None):
        super().__init__(credential_source)

        executable = require_key(
            self.config, "executable", "Invalid credential source for PluggableAuth credentials."
        )
        if not isinstance(executable, Mapping):
            raise InvalidArgumentError("The executable block must be a mapping.", argument="executable")

        self.command: str = require_key(
            executable, "command", "The executable credential source is missing the required 'command' field."
        )
        self.timeout_millis = self._parse_timeout(executable.get("timeout_millis"))
        self.output_file = optional_str(executable, "output_file")

    @classmethod
    def _parse_timeout(cls, raw: Any) -> int:
        if raw is None:
            return cls.DEFAULT_TIMEOUT_MILLIS

        try:
            timeout = int(raw)
        except (TypeError, ValueError):
            raise InvalidArgumentError(
                f"Invalid executable timeout: {raw!r}", argument="timeout_millis"
            ) from None

        if not cls.MINIMUM_TIMEOUT_MILLIS <= timeout <= cls.MAXIMUM_TIMEOUT_MILLIS:
            raise InvalidArgumentError(
                f"The executable timeout must be between {cls.MINIMUM_TIMEOUT_MILLIS} and "
                f"{cls.MAXIMUM_TIMEOUT_MILLIS} milliseconds.",
                argument="timeout_millis",
            )
        return timeout


def build_credential_source(credential_source: Mapping[str, Any] | None) -> CredentialSource:
    """Construct the credential source variant a configuration mapping describes.

    Selection order:
    1. ``executable`` key present -> ExecutableCredentialSource
    2. ``environment_id`` starting with ``aws`` -> AwsCredentialSource
    3. Otherwise -> IdentityPoolCredentialSource (file or url)

    Raises:
        InvalidArgumentError: If the mapping is None or fails the chosen
            variant's validation.
    """
    check_not_none(credential_source, "credential_source")

    environment_id = credential_source.get("environment_id")
    if "executable" in credential_source:
        source_cls: type[CredentialSource] = ExecutableCredentialSource
    elif isinstance(environment_id, str) and environment_id.startswith("aws"):
        source_cls = AwsCredentialSource
    else:
        source_cls = IdentityPoolCredentialSource

    return source_cls(credential_source)
