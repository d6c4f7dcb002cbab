"""Source resolver - Resolve raw source strings and dispatch to getters.

CRITICAL (KERNEL_PHILOSOPHY): Detector order and getter registrations are app
policy, not library mechanism. The resolver owns them as instance state; there
is no module-level registry, so independent resolvers never interfere.

Resolution:
1. A fully-qualified URI is trusted as-is, detectors are skipped
2. Otherwise detectors run in order, first match wins, a raised error aborts
3. Getter scheme precedence: input's forced scheme > detector's forced scheme > URI scheme

Registries are mutated only through add_detector()/add_getter(); do that
before resolving concurrently.
"""

import logging
from collections.abc import Iterable
from collections.abc import Mapping
from pathlib import Path
from types import MappingProxyType

from .detectors import default_detectors
from .exceptions import BackendInitError
from .exceptions import FetchError
from .exceptions import GetterNotFoundError
from .file_getter import FileGetter
from .protocols import DetectorProtocol
from .protocols import GetterProtocol
from .protocols import SetupProtocol
from .s3_getter import S3Getter
from .schema import ResolvedSource
from .settings import FetchSettings
from .uri import parse_uri
from .uri import require_uri
from .uri import split_forced_scheme

logger = logging.getLogger(__name__)


def default_getters(settings: FetchSettings | None = None) -> dict[str, GetterProtocol]:
    """Built-in getters keyed by scheme."""
    settings = settings or FetchSettings()
    return {
        "file": FileGetter(),
        "s3": S3Getter(settings.s3),
    }


class SourceResolver:
    """
    Resolve raw source strings to canonical URIs and fetch them.

    Apps inject POLICY (detector order, extra getters, backend settings); the
    resolver implements the mechanism.

    Example:
        >>> resolver = SourceResolver()
        >>> resolver.resolve("github.com/acme/widget").uri
        'https://github.com/acme/widget.git'
        >>> await resolver.get("vendor/data", "./fixtures/data")
    """

    def __init__(
        self,
        detectors: Iterable[DetectorProtocol] | None = None,
        getters: Mapping[str, GetterProtocol] | None = None,
        settings: FetchSettings | None = None,
    ):
        """Initialize resolver.

        Args:
            detectors: Detector chain in priority order. Defaults to default_detectors().
            getters: Getters keyed by scheme. Defaults to default_getters(settings).
            settings: Settings for the default getters (ignored when getters is given).
        """
        self._detectors: list[DetectorProtocol] = list(detectors) if detectors is not None else default_detectors()
        self._getters: dict[str, GetterProtocol] = dict(getters) if getters is not None else default_getters(settings)

    @property
    def detectors(self) -> tuple[DetectorProtocol, ...]:
        return tuple(self._detectors)

    @property
    def getters(self) -> Mapping[str, GetterProtocol]:
        return MappingProxyType(self._getters)

    def add_detector(self, detector: DetectorProtocol) -> None:
        """Append a detector to the end of the chain."""
        self._detectors.append(detector)

    def add_getter(self, scheme: str, getter: GetterProtocol) -> None:
        """Register getter for scheme, replacing any previous registration."""
        if scheme in self._getters:
            logger.debug(f"Replacing getter for scheme '{scheme}'")
        self._getters[scheme] = getter

    def resolve(self, raw: str) -> ResolvedSource:
        """
        Resolve raw input to a canonical URI and the scheme used for getter lookup.

        Args:
            raw: Path, shorthand (github.com/org/repo), S3 host URL or URI,
                optionally prefixed with `forced+`

        Returns:
            ResolvedSource

        Raises:
            InvalidInputShapeError: If a detector recognized the input but it is malformed
            GetterNotFoundError: If no detector matched
            UriParseError: If a detector produced something that isn't a URI
        """
        # Fully-qualified URI: trusted as-is
        if parse_uri(raw) is not None:
            forced, source = split_forced_scheme(raw)
            scheme = forced or require_uri(source).scheme
            logger.debug(f"'{raw}' is already a URI (scheme '{scheme}')")
            return ResolvedSource(raw=raw, uri=raw, source=source, scheme=scheme, forced_scheme=forced)

        input_forced, remainder = split_forced_scheme(raw)

        detected = None
        for detector in self._detectors:
            detected = detector.detect(remainder)
            if detected is not None:
                logger.debug(f"{type(detector).__name__} matched '{remainder}' -> '{detected}'")
                break

        if detected is None:
            raise GetterNotFoundError(raw, f"No detector matched '{raw}'")

        detector_forced, source = split_forced_scheme(detected)
        forced = input_forced or detector_forced
        if input_forced and detector_forced and input_forced != detector_forced:
            logger.debug(f"Forced scheme '{input_forced}' overrides detector's '{detector_forced}'")

        native_scheme = require_uri(source).scheme
        scheme = forced or native_scheme
        uri = f"{forced}+{source}" if forced else source

        return ResolvedSource(
            raw=raw,
            uri=uri,
            source=source,
            scheme=scheme,
            forced_scheme=forced,
            detected=True,
        )

    def getter_for(self, scheme: str) -> GetterProtocol:
        """Look up the getter registered for scheme.

        Raises:
            GetterNotFoundError: If no getter is registered for scheme
        """
        getter = self._getters.get(scheme)
        if getter is None:
            raise GetterNotFoundError(scheme, f"No getter registered for scheme '{scheme}'")
        return getter

    async def get(self, dest: str | Path, source: str) -> ResolvedSource:
        """
        Resolve source and fetch it into dest with the matching getter.

        Exactly one fetch per call. Getter errors are returned unmodified and
        never retried.

        Args:
            dest: Destination path
            source: Raw source string (see resolve())

        Returns:
            The ResolvedSource that was fetched

        Raises:
            FetchError: Any resolution, setup or fetch failure
        """
        resolved = self.resolve(source)
        getter = self.getter_for(resolved.scheme)

        if isinstance(getter, SetupProtocol):
            try:
                await getter.setup()
            except FetchError:
                raise
            except Exception as e:
                raise BackendInitError(
                    f"Setup failed for '{resolved.scheme}' getter: {e}",
                    context={"scheme": resolved.scheme},
                ) from e

        logger.info(f"Fetching {resolved.uri} to {dest}")
        await getter.get(dest, resolved.source)
        logger.info(f"Fetched {resolved.uri}")
        return resolved
