"""URI helpers - forced-scheme parsing and direct URI parsing.

A forced scheme is a `name+` prefix that selects a getter regardless of the
URI's own scheme, e.g. `s3+https://us-east-2.amazonaws.com/bucket/key`.

Pure string transforms only: nothing in here touches the filesystem or network.
"""

import re
from urllib.parse import SplitResult
from urllib.parse import urlsplit

from .exceptions import UriParseError

_FORCED_SCHEME = re.compile(r"^([A-Za-z0-9]+)\+(.*)$", re.DOTALL)
_URI_SCHEME = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*:")


def split_forced_scheme(value: str) -> tuple[str | None, str]:
    """Split an optional `scheme+` prefix from a URI-like string.

    Args:
        value: Raw input or detector output

    Returns:
        (forced_scheme, remainder). forced_scheme is None when no prefix is present,
        in which case remainder is the input unchanged.

    Example:
        >>> split_forced_scheme("s3+https://example.com/key")
        ('s3', 'https://example.com/key')
        >>> split_forced_scheme("github.com/org/repo")
        (None, 'github.com/org/repo')
    """
    match = _FORCED_SCHEME.match(value)
    if match is None:
        return None, value
    return match.group(1), match.group(2)


def parse_uri(value: str) -> SplitResult | None:
    """Parse value as a fully-qualified URI.

    Single-letter schemes are rejected so Windows drive paths (`C:\\src`) are
    left to the detectors.

    Returns:
        SplitResult if value carries a scheme, None otherwise
    """
    match = _URI_SCHEME.match(value)
    if match is None or len(match.group(0)) < 3:
        return None
    try:
        return urlsplit(value)
    except ValueError:
        return None


def require_uri(value: str) -> SplitResult:
    """Like parse_uri() but raises UriParseError instead of returning None."""
    parsed = parse_uri(value)
    if parsed is None:
        raise UriParseError(f"Not a valid URI: '{value}'", context={"uri": value})
    return parsed


def to_file_uri(path: str) -> str:
    """Build a file:// URI from an already absolute path."""
    path = path.replace("\\", "/")
    if not path.startswith("/"):
        # Windows drive path
        path = f"/{path}"
    return f"file://{path}"


def file_uri_to_path(uri: str) -> str:
    """Extract the filesystem path from a file:// URI.

    Everything after `file://` is the path, taken verbatim: no query or
    fragment splitting and no percent-decoding, so `#`, `?` and `%` in file
    names survive. `file://./a.txt` yields `./a.txt` and `file:///tmp/a.txt`
    yields `/tmp/a.txt`.

    Raises:
        UriParseError: If uri is not a file:// URI
    """
    parsed = require_uri(uri)
    prefix = "file://"
    if parsed.scheme.lower() != "file" or uri[: len(prefix)].lower() != prefix:
        raise UriParseError(f"Expected a file:// URI, got '{uri}'", context={"uri": uri})
    path = uri[len(prefix) :]
    # file:///C:/src -> C:/src
    if re.match(r"^/[A-Za-z]:/", path):
        path = path[1:]
    return path
