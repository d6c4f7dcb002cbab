"""Filesystem getter - Symlink a local source into place.

Per IMPLEMENTATION_PHILOSOPHY: Ruthless simplicity - link, don't copy. Repeated
fetches of an unchanged source are cheap and idempotent.

Destination safety:
- A destination that is a symlink (from a previous fetch) is replaced
- Anything else at the destination is refused, never overwritten
"""

import logging
import os
from pathlib import Path

from .exceptions import DestinationExistsError
from .exceptions import DestinationNotCreatedError
from .exceptions import FetchIOError
from .exceptions import SourceNotFoundError
from .uri import file_uri_to_path

logger = logging.getLogger(__name__)


def _absolute_path(path: str | Path) -> Path:
    """Join to the current working directory if relative, then clean `.` and `..`."""
    path = Path(path)
    if not path.is_absolute():
        path = Path.cwd() / path
    # Lexical cleanup only; symlinks in the path are not resolved
    return Path(os.path.normpath(path))


class FileGetter:
    """Getter for file:// URIs."""

    async def get(self, dest: str | Path, source: str) -> None:
        """
        Symlink the path in a file:// URI at dest.

        Args:
            dest: Destination path (parents created if needed)
            source: file:// URI, relative (`file://./data`) or absolute (`file:///srv/data`)

        Raises:
            UriParseError: If source is not a file:// URI
            SourceNotFoundError: If the source path doesn't exist
            DestinationExistsError: If dest exists and is not a symlink
            DestinationNotCreatedError: If dest's parent directories can't be created
            FetchIOError: If removing the old link or creating the new one fails
        """
        source_path = _absolute_path(file_uri_to_path(source))
        dest_path = _absolute_path(dest)

        if not source_path.exists():
            raise SourceNotFoundError(
                f"Source not found: {source_path}",
                context={"source": source, "path": str(source_path)},
            )

        # A dangling link from a previous fetch still counts as a symlink
        if dest_path.is_symlink():
            logger.debug(f"Replacing existing symlink at {dest_path}")
            try:
                dest_path.unlink()
            except OSError as e:
                raise FetchIOError(f"Failed to remove existing symlink {dest_path}: {e}") from e
        elif dest_path.exists():
            raise DestinationExistsError(
                f"Destination already exists and is not a symlink: {dest_path}",
                context={"dest": str(dest_path)},
            )

        try:
            dest_path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise DestinationNotCreatedError(
                f"Could not create parent directories for {dest_path}: {e}",
                context={"dest": str(dest_path)},
            ) from e

        try:
            dest_path.symlink_to(source_path, target_is_directory=source_path.is_dir())
        except OSError as e:
            raise FetchIOError(f"Failed to link {dest_path} -> {source_path}: {e}") from e

        logger.debug(f"Linked {dest_path} -> {source_path}")
