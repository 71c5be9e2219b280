"""Tests for credential exceptions."""

import pytest

from oauth2_credentials_core.auth.exceptions import (
    CredentialError,
    CredentialNotFoundError,
    InvalidArgumentError,
    RefreshError,
)


class TestInvalidArgumentError:
    """Test InvalidArgumentError exception."""

    def test_is_credential_error(self):
        """Test that InvalidArgumentError is a CredentialError."""
        with pytest.raises(CredentialError):
            raise InvalidArgumentError("bad config")

    def test_is_value_error(self):
        """Test that callers catching ValueError also catch it."""
        with pytest.raises(ValueError):
            raise InvalidArgumentError("bad config")

    def test_argument_attribute(self):
        """Test that the offending argument name is kept."""
        error = InvalidArgumentError("Missing command", argument="command")
        assert error.argument == "command"
        assert str(error) == "Missing command"

    def test_argument_optional(self):
        """Test that argument defaults to None."""
        assert InvalidArgumentError("bad").argument is None


class TestCredentialNotFoundError:
    """Test CredentialNotFoundError exception."""

    def test_is_credential_error(self):
        with pytest.raises(CredentialError):
            raise CredentialNotFoundError("Test error")

    def test_env_var_name_attribute(self):
        error = CredentialNotFoundError("Test error", env_var_name="GOOGLE_CLOUD_QUOTA_PROJECT")
        assert error.env_var_name == "GOOGLE_CLOUD_QUOTA_PROJECT"

    def test_env_var_name_optional(self):
        assert CredentialNotFoundError("Test error").env_var_name is None


class TestRefreshError:
    """Test RefreshError exception."""

    def test_is_credential_error(self):
        with pytest.raises(CredentialError):
            raise RefreshError("token endpoint unavailable")

    def test_is_not_value_error(self):
        """Refresh failures are not argument errors."""
        assert not issubclass(RefreshError, ValueError)
