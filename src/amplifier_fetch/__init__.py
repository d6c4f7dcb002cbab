"""amplifier-fetch - Resolve source strings to canonical URIs and fetch them.

Per KERNEL_PHILOSOPHY: This is library mechanism, apps inject policy
(detector order, getters, backend settings).
"""

from .detectors import GitHubDetector
from .detectors import LocalPathDetector
from .detectors import S3Detector
from .detectors import default_detectors
from .exceptions import BackendInitError
from .exceptions import BackendOperationError
from .exceptions import DestinationExistsError
from .exceptions import DestinationNotCreatedError
from .exceptions import FetchError
from .exceptions import FetchIOError
from .exceptions import GetterNotFoundError
from .exceptions import InvalidInputShapeError
from .exceptions import SourceNotFoundError
from .exceptions import UriParseError
from .file_getter import FileGetter
from .protocols import DetectorProtocol
from .protocols import GetterProtocol
from .protocols import SetupProtocol
from .resolver import SourceResolver
from .resolver import default_getters
from .s3_getter import S3Getter
from .schema import ResolvedSource
from .settings import FetchSettings
from .settings import S3Settings
from .uri import split_forced_scheme

__all__ = [
    # Resolution
    "SourceResolver",
    "ResolvedSource",
    "split_forced_scheme",
    # Detectors
    "DetectorProtocol",
    "GitHubDetector",
    "S3Detector",
    "LocalPathDetector",
    "default_detectors",
    # Getters
    "GetterProtocol",
    "SetupProtocol",
    "FileGetter",
    "S3Getter",
    "default_getters",
    # Settings
    "FetchSettings",
    "S3Settings",
    # Exceptions
    "FetchError",
    "InvalidInputShapeError",
    "UriParseError",
    "GetterNotFoundError",
    "SourceNotFoundError",
    "DestinationExistsError",
    "DestinationNotCreatedError",
    "BackendInitError",
    "BackendOperationError",
    "FetchIOError",
]

__version__ = "0.1.0"
