"""Tests for the exception hierarchy."""

from amplifier_fetch import BackendInitError
from amplifier_fetch import BackendOperationError
from amplifier_fetch import DestinationExistsError
from amplifier_fetch import DestinationNotCreatedError
from amplifier_fetch import FetchError
from amplifier_fetch import FetchIOError
from amplifier_fetch import GetterNotFoundError
from amplifier_fetch import InvalidInputShapeError
from amplifier_fetch import SourceNotFoundError
from amplifier_fetch import UriParseError


def test_all_errors_are_fetch_errors():
    """Callers can catch FetchError for everything."""
    for cls in [
        BackendInitError,
        BackendOperationError,
        DestinationExistsError,
        DestinationNotCreatedError,
        FetchIOError,
        SourceNotFoundError,
        UriParseError,
    ]:
        assert issubclass(cls, FetchError)
        error = cls("boom", context={"key": "value"})
        assert error.message == "boom"
        assert error.context == {"key": "value"}
        assert str(error) == "boom"


def test_context_defaults_to_empty():
    """Context is optional."""
    assert FetchError("boom").context == {}


def test_invalid_input_shape_carries_hint():
    """Structural errors include the raw input and expected format."""
    error = InvalidInputShapeError("github.com/acme", "expected github.com/:username/:repo")

    assert isinstance(error, FetchError)
    assert error.raw == "github.com/acme"
    assert error.hint == "expected github.com/:username/:repo"
    assert "github.com/acme" in str(error)
    assert error.context == {"raw": "github.com/acme", "hint": "expected github.com/:username/:repo"}


def test_getter_not_found_names_target():
    """Not-found errors expose the missing name."""
    error = GetterNotFoundError("foo")

    assert isinstance(error, FetchError)
    assert error.name == "foo"
    assert str(error) == "No getter found for 'foo'"
    assert str(GetterNotFoundError("foo", "custom message")) == "custom message"
