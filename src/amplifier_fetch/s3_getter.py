"""S3 getter - Stream an object from S3 to a local file.

The boto3 client is built lazily by setup(), at most once per getter, and then
lives as long as the getter (normally the resolver that owns it).

boto3 is synchronous, so client construction, get_object and each chunk read
run in a worker thread to keep the event loop free.

Cancellation: the response body is always closed, but a partially written
destination file may remain. Callers needing atomic contents should fetch to
a temporary path and rename.
"""

import asyncio
import logging
from enum import Enum
from pathlib import Path
from typing import Any
from urllib.parse import unquote

import boto3
from botocore.exceptions import BotoCoreError
from botocore.exceptions import ClientError

from .exceptions import BackendInitError
from .exceptions import BackendOperationError
from .exceptions import FetchIOError
from .settings import S3Settings
from .uri import require_uri

logger = logging.getLogger(__name__)


class _SetupState(Enum):
    UNINITIALIZED = "uninitialized"
    INITIALIZING = "initializing"
    READY = "ready"


def split_bucket_key(source: str) -> tuple[str, str]:
    """
    Derive (bucket, key) from an S3 https URL.

    Virtual-host style URLs carry the bucket as the first host label:
        https://bucket.s3.us-east-2.amazonaws.com/path/to/key -> (bucket, path/to/key)

    Path-style AWS endpoints (`<region>.amazonaws.com`, `s3.<region>.amazonaws.com`)
    have no bucket in the host, so it is the first path segment instead:
        https://us-east-2.amazonaws.com/bucket/path/to/key -> (bucket, path/to/key)

    Raises:
        UriParseError: If source is not a URI
        BackendOperationError: If no bucket or key can be derived
    """
    parsed = require_uri(source)
    host = parsed.hostname or ""
    labels = host.split(".")
    key = unquote(parsed.path).lstrip("/")

    path_style = host.endswith(".amazonaws.com") and (
        len(labels) == 3 or (len(labels) == 4 and labels[0] == "s3")
    )
    if path_style:
        bucket, _, key = key.partition("/")
    else:
        bucket = labels[0]

    if not bucket or not key:
        raise BackendOperationError(
            f"Cannot derive bucket and key from '{source}'",
            context={"source": source},
        )
    return bucket, key


class S3Getter:
    """Getter for S3 objects (registered under the `s3` scheme)."""

    def __init__(self, settings: S3Settings | None = None, client: Any = None):
        """Initialize getter.

        Args:
            settings: Session/client settings. Defaults to S3Settings().
            client: Pre-built boto3 S3 client. When given, setup() is a no-op.
        """
        self.settings = settings or S3Settings()
        self._client = client
        self._state = _SetupState.READY if client is not None else _SetupState.UNINITIALIZED
        # Created per event loop in _lock_for_loop(); asyncio locks bind to one loop
        self._setup_lock: asyncio.Lock | None = None
        self._setup_lock_loop: asyncio.AbstractEventLoop | None = None

    @property
    def ready(self) -> bool:
        return self._state is _SetupState.READY

    def _create_client(self) -> Any:
        session = boto3.session.Session(
            profile_name=self.settings.profile_name,
            region_name=self.settings.region_name,
        )
        return session.client("s3", endpoint_url=self.settings.endpoint_url)

    def _lock_for_loop(self) -> asyncio.Lock:
        loop = asyncio.get_running_loop()
        if self._setup_lock is None or self._setup_lock_loop is not loop:
            self._setup_lock = asyncio.Lock()
            self._setup_lock_loop = loop
        return self._setup_lock

    async def setup(self) -> None:
        """Build the boto3 client once. Safe to call repeatedly and concurrently.

        Raises:
            BackendInitError: If the session or client can't be created. The getter
                stays uninitialized so a later call can try again.
        """
        if self._state is _SetupState.READY:
            return

        async with self._lock_for_loop():
            if self._state is _SetupState.READY:
                return

            self._state = _SetupState.INITIALIZING
            logger.debug("Creating S3 client")
            try:
                self._client = await asyncio.to_thread(self._create_client)
            except Exception as e:
                self._state = _SetupState.UNINITIALIZED
                raise BackendInitError(f"Failed to create S3 client: {e}") from e
            self._state = _SetupState.READY

    async def get(self, dest: str | Path, source: str) -> None:
        """
        Download the object at source into dest, chunk by chunk.

        Args:
            dest: Destination file (created or truncated, parents created)
            source: S3 https URL with any `s3+` prefix removed

        Raises:
            BackendInitError: If setup() has not completed
            BackendOperationError: If get_object or reading the body fails
            FetchIOError: If writing dest fails
        """
        if not self.ready:
            raise BackendInitError("S3 getter used before setup()")

        bucket, key = split_bucket_key(source)
        logger.debug(f"Fetching s3://{bucket}/{key}")

        try:
            response = await asyncio.to_thread(self._client.get_object, Bucket=bucket, Key=key)
        except (BotoCoreError, ClientError) as e:
            raise BackendOperationError(
                f"Failed to get s3://{bucket}/{key}: {e}",
                context={"bucket": bucket, "key": key},
            ) from e

        body = response["Body"]
        try:
            await self._stream_to_file(body, Path(dest), bucket, key)
        finally:
            body.close()

    async def _stream_to_file(self, body: Any, dest: Path, bucket: str, key: str) -> None:
        chunks = body.iter_chunks(chunk_size=self.settings.chunk_size)

        try:
            dest.parent.mkdir(parents=True, exist_ok=True)
            f = dest.open("wb")
        except OSError as e:
            raise FetchIOError(f"Failed to open {dest} for writing: {e}") from e

        written = 0
        with f:
            while True:
                try:
                    chunk = await asyncio.to_thread(next, chunks, None)
                except (BotoCoreError, ClientError) as e:
                    raise BackendOperationError(
                        f"Failed reading s3://{bucket}/{key}: {e}",
                        context={"bucket": bucket, "key": key, "bytes_written": written},
                    ) from e
                if chunk is None:
                    break

                try:
                    f.write(chunk)
                except OSError as e:
                    raise FetchIOError(f"Failed writing {dest}: {e}") from e
                written += len(chunk)

        logger.debug(f"Wrote {written} bytes to {dest}")
