"""Unit tests for the exception hierarchy."""

from __future__ import annotations

import pytest

from photondrift_synthetic.errors import ConfigurationError, EmptyDomainError

pytestmark = pytest.mark.unit


class TestConfigurationError:
    """Tests for ConfigurationError."""

    def test_plain_message(self) -> None:
        """Without context the message is unchanged."""
        error = ConfigurationError("Bad value")

        assert str(error) == "Bad value"
        assert error.field_path is None
        assert error.operation is None

    def test_message_includes_context(self) -> None:
        """Operation and field path are appended to the message."""
        error = ConfigurationError(
            "Value must be greater than or equal to 0",
            field_path="data_volume.repositories",
            operation="build_config",
        )

        assert str(error) == (
            "Value must be greater than or equal to 0 "
            "(in build_config, field 'data_volume.repositories')"
        )
        assert error.user_message == str(error)

    def test_internal_details_logged_not_shown(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Internal details go to the log only."""
        error = ConfigurationError("Bad value", internal_details="secret traceback")

        captured = capsys.readouterr()
        assert "secret traceback" not in str(error)
        assert "configuration_error" in captured.out
        assert "secret traceback" in captured.out

    def test_no_log_without_details(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Nothing is logged when there are no internal details."""
        ConfigurationError("Bad value")

        captured = capsys.readouterr()
        assert "configuration_error" not in captured.out


class TestEmptyDomainError:
    """Tests for EmptyDomainError."""

    def test_message_names_operation(self) -> None:
        """The failing operation appears in the message."""
        error = EmptyDomainError("sample")

        assert str(error) == "Cannot select from an empty pool (in sample)"
        assert error.operation == "sample"

    def test_is_configuration_error(self) -> None:
        """EmptyDomainError is a ConfigurationError."""
        assert issubclass(EmptyDomainError, ConfigurationError)
