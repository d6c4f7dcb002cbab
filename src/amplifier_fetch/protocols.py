"""Protocols for detectors and getters.

Per KERNEL_PHILOSOPHY: Protocol-based extensibility over configuration.
Per IMPLEMENTATION_PHILOSOPHY: Composition over inheritance.

New backends are added by implementing one of these protocols and registering
an instance with a SourceResolver. The resolver itself never changes.
"""

from pathlib import Path
from typing import Protocol
from typing import runtime_checkable


@runtime_checkable
class DetectorProtocol(Protocol):
    """Protocol for normalizing an ambiguous input into a canonical URI.

    Example implementations:
    - GitHubDetector: github.com/org/repo shorthand
    - S3Detector: *.amazonaws.com/ host URLs
    - LocalPathDetector: relative or absolute filesystem paths
    """

    def detect(self, raw: str) -> str | None:
        """Normalize raw input.

        Must be synchronous and side-effect free (no network or blocking I/O).

        Args:
            raw: Input with any forced-scheme prefix already removed

        Returns:
            Canonical URI (optionally `forced+` prefixed), or None if the input
            does not look like anything this detector handles

        Raises:
            InvalidInputShapeError: If input matches this detector's shape but is malformed
        """
        ...


@runtime_checkable
class GetterProtocol(Protocol):
    """Protocol for materializing a canonical URI at a destination path."""

    async def get(self, dest: str | Path, source: str) -> None:
        """Fetch source into dest.

        Args:
            dest: Destination path
            source: Canonical URI with any forced-scheme prefix removed

        Raises:
            FetchError: If the fetch fails
        """
        ...


@runtime_checkable
class SetupProtocol(Protocol):
    """Optional getter capability: one-time async initialization.

    The resolver awaits setup() before every get(). Implementations must make
    repeated and concurrent calls cheap and initialize at most once.
    """

    async def setup(self) -> None:
        """Initialize backend resources (clients, credentials).

        Raises:
            BackendInitError: If initialization fails
        """
        ...
