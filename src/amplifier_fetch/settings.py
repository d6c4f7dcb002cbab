"""Fetch settings - Parse [tool.amplifier.fetch] from pyproject.toml.

Per KERNEL_PHILOSOPHY: Backend tuning is app policy. Apps build settings
(or load them from their pyproject.toml) and inject them into the resolver.

Credentials are NOT configured here. The S3 getter relies on boto3's default
credential chain (environment, shared config, instance metadata).
"""

import tomllib
from pathlib import Path

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field

DEFAULT_CHUNK_SIZE = 64 * 1024


class S3Settings(BaseModel):
    """Settings for the S3 getter's boto3 session and client."""

    model_config = ConfigDict(frozen=True)

    region_name: str | None = None
    profile_name: str | None = None
    endpoint_url: str | None = None
    chunk_size: int = Field(default=DEFAULT_CHUNK_SIZE, gt=0)


class FetchSettings(BaseModel):
    """Top-level settings for the default getters."""

    model_config = ConfigDict(frozen=True)

    s3: S3Settings = Field(default_factory=S3Settings)

    @classmethod
    def from_pyproject(cls, pyproject_path: Path) -> "FetchSettings":
        """
        Load settings from the [tool.amplifier.fetch] section of pyproject.toml.

        Example:
            [tool.amplifier.fetch.s3]
            region_name = "us-east-2"
            chunk_size = 1048576

        Args:
            pyproject_path: Path to pyproject.toml file

        Returns:
            FetchSettings instance (defaults if the section is absent)

        Raises:
            FileNotFoundError: If pyproject.toml doesn't exist
            tomllib.TOMLDecodeError: If invalid TOML
            pydantic.ValidationError: If values have the wrong type
        """
        if not pyproject_path.exists():
            raise FileNotFoundError(f"pyproject.toml not found: {pyproject_path}")

        with open(pyproject_path, "rb") as f:
            data = tomllib.load(f)

        section = data.get("tool", {}).get("amplifier", {}).get("fetch", {})
        return cls.model_validate(section)
