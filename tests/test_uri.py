"""Tests for forced-scheme and URI helpers."""

import pytest
from amplifier_fetch import UriParseError
from amplifier_fetch import split_forced_scheme
from amplifier_fetch.uri import file_uri_to_path
from amplifier_fetch.uri import parse_uri
from amplifier_fetch.uri import to_file_uri


def test_split_forced_scheme_present():
    """Prefix before '+' is split off."""
    assert split_forced_scheme("s3+https://us-east-2.amazonaws.com/b/k") == (
        "s3",
        "https://us-east-2.amazonaws.com/b/k",
    )


def test_split_forced_scheme_on_shorthand():
    """Prefix works on inputs that are not URIs."""
    assert split_forced_scheme("myscheme+github.com/acme/widget") == ("myscheme", "github.com/acme/widget")


def test_split_forced_scheme_absent():
    """Input without a prefix is returned unchanged."""
    assert split_forced_scheme("https://github.com/acme/widget.git") == (None, "https://github.com/acme/widget.git")
    assert split_forced_scheme("./relative/path") == (None, "./relative/path")


def test_split_forced_scheme_requires_alphanumeric_token():
    """Only [A-Za-z0-9]+ counts as a forced scheme."""
    assert split_forced_scheme("my-scheme+https://x/y") == (None, "my-scheme+https://x/y")
    assert split_forced_scheme("+https://x/y") == (None, "+https://x/y")


def test_parse_uri_accepts_schemes():
    """Anything with a scheme is a URI."""
    assert parse_uri("https://github.com/acme/widget").scheme == "https"
    assert parse_uri("git+https://github.com/acme/widget").scheme == "git+https"
    assert parse_uri("file:///tmp/x").scheme == "file"


def test_parse_uri_rejects_paths_and_shorthand():
    """Paths, shorthand and drive letters are not URIs."""
    assert parse_uri("./data") is None
    assert parse_uri("/srv/data") is None
    assert parse_uri("github.com/acme/widget") is None
    assert parse_uri("bucket.s3.us-east-2.amazonaws.com/key") is None
    assert parse_uri("C:\\src\\data") is None


def test_to_file_uri():
    """Absolute paths become file:// URIs."""
    assert to_file_uri("/srv/data") == "file:///srv/data"
    assert to_file_uri("C:\\src\\data") == "file:///C:/src/data"


def test_file_uri_to_path():
    """Everything after file:// is the path, verbatim."""
    assert file_uri_to_path("file:///tmp/a.txt") == "/tmp/a.txt"
    assert file_uri_to_path("file://./a.txt") == "./a.txt"
    assert file_uri_to_path("file:///tmp/with%20space") == "/tmp/with%20space"
    assert file_uri_to_path("file:///tmp/notes#1?.txt") == "/tmp/notes#1?.txt"
    assert file_uri_to_path("file:///C:/src") == "C:/src"


def test_file_uri_to_path_rejects_other_schemes():
    """Non-file URIs and non-URIs raise UriParseError."""
    with pytest.raises(UriParseError, match="file://"):
        file_uri_to_path("https://example.com/a.txt")

    with pytest.raises(UriParseError, match="Not a valid URI"):
        file_uri_to_path("/tmp/a.txt")
