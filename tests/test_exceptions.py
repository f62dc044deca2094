"""Tests for exception hierarchy."""

import pytest

from map_exchange.exceptions import (
    ConfigurationError,
    FormatMismatchError,
    MapExchangeError,
    ParseError,
    UnsupportedShapeError,
)


@pytest.mark.unit
class TestExceptionHierarchy:
    """Tests for exception classes."""

    def test_base_exception_exists(self):
        """Should have MapExchangeError base exception."""
        assert issubclass(MapExchangeError, Exception)

    @pytest.mark.parametrize("error_class", [
        ParseError,
        FormatMismatchError,
        UnsupportedShapeError,
        ConfigurationError,
    ])
    def test_errors_inherit_from_base(self, error_class):
        """Every error kind should inherit from MapExchangeError."""
        assert issubclass(error_class, MapExchangeError)

    def test_exception_has_message(self):
        """Exceptions should store message."""
        err = ParseError("Invalid JSON")

        assert str(err) == "Invalid JSON"

    def test_format_id_is_carried(self):
        """Fatal errors should carry the offending format id."""
        err = FormatMismatchError("No pages found in Roll20 export", format_id="roll20")

        assert err.format_id == "roll20"

    def test_format_id_defaults_to_none(self):
        """format_id should be optional."""
        assert ParseError("bad").format_id is None

    def test_unsupported_shape_message(self):
        """UnsupportedShapeError should name the shape type."""
        err = UnsupportedShapeError("hexagon", "foundry")

        assert err.shape_type == "hexagon"
        assert err.format_id == "foundry"
        assert "hexagon" in str(err)

    def test_exceptions_can_be_caught_as_base(self):
        """All exceptions should be catchable as MapExchangeError."""
        with pytest.raises(MapExchangeError):
            raise FormatMismatchError("test")
