"""Built-in detectors - Normalize ambiguous inputs into canonical URIs.

Per KERNEL_PHILOSOPHY: Detector order is app policy. The library only ships
a sensible default order (see default_detectors()).

Detectors never do I/O. LocalPathDetector reads the current working directory,
nothing more.
"""

import os
from pathlib import Path

from .exceptions import InvalidInputShapeError
from .protocols import DetectorProtocol
from .uri import to_file_uri

_S3_HOST_MARKER = "amazonaws.com/"
_S3_HINT = "not a valid s3 url"


class LocalPathDetector:
    """Treat any input as a filesystem path.

    Matches everything, so it belongs at the end of the detector chain.
    """

    def detect(self, raw: str) -> str | None:
        path = Path(raw)
        if not path.is_absolute():
            path = Path.cwd() / path
        return to_file_uri(os.path.normpath(path))


class GitHubDetector:
    """Expand `github.com/:owner/:repo[/sub/path]` shorthand to an https git URL.

    A sub path is appended after `//` to mark it as a path inside the cloned
    repository rather than part of the URL:

        github.com/acme/widget/src/lib -> https://github.com/acme/widget.git//src/lib
    """

    def __init__(self, host: str = "github.com"):
        self.host = host

    def detect(self, raw: str) -> str | None:
        if not raw.startswith(f"{self.host}/"):
            return None

        parts = raw.rstrip("/").split("/")
        if len(parts) < 3:
            raise InvalidInputShapeError(
                raw,
                f"{self.host} urls should have the following format {self.host}/:username/:repo",
            )

        url = f"https://{'/'.join(parts[:3])}"
        if not url.endswith(".git"):
            url = f"{url}.git"

        if len(parts) > 3:
            url = f"{url}//{'/'.join(parts[3:])}"

        return url


class S3Detector:
    """Normalize S3 host URLs to `s3+https://...`.

    Accepted host shapes:
    - Region path style:      us-east-2.amazonaws.com/bucket/key
    - Virtual host style:     bucket.us-east-2.amazonaws.com/key
    - New virtual host style: bucket.s3.us-east-2.amazonaws.com/key

    The output always carries the `s3+` forced scheme so the S3 getter is
    selected even though the rebuilt URL is https.
    """

    def detect(self, raw: str) -> str | None:
        if _S3_HOST_MARKER not in raw:
            return None

        host, _, path = raw.partition("/")
        labels = host.split(".")
        parts = [part for part in path.split("/") if part]

        if not parts:
            raise InvalidInputShapeError(raw, _S3_HINT)

        if len(labels) == 3:
            if len(parts) < 2:
                raise InvalidInputShapeError(raw, f"{_S3_HINT}: expected :region.amazonaws.com/:bucket/:key")
            return self._region_path_style(labels[0], parts)
        if len(labels) == 4:
            return self._vhost_path_style(region=labels[1], bucket=labels[0], parts=parts)
        if len(labels) == 5 and labels[1] == "s3":
            return self._new_vhost_path_style(region=labels[2], bucket=labels[0], parts=parts)

        raise InvalidInputShapeError(raw, _S3_HINT)

    def _region_path_style(self, region: str, parts: list[str]) -> str:
        return f"s3+https://{region}.amazonaws.com/{'/'.join(parts)}"

    def _vhost_path_style(self, region: str, bucket: str, parts: list[str]) -> str:
        return f"s3+https://{region}.amazonaws.com/{bucket}/{'/'.join(parts)}"

    def _new_vhost_path_style(self, region: str, bucket: str, parts: list[str]) -> str:
        return f"s3+https://s3.{region}.amazonaws.com/{bucket}/{'/'.join(parts)}"


def default_detectors() -> list[DetectorProtocol]:
    """Built-in detector chain, most specific first."""
    return [GitHubDetector(), S3Detector(), LocalPathDetector()]
