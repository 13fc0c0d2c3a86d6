"""Middleware configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from unityweb_encoding.exceptions import ConfigurationError

if TYPE_CHECKING:
    from collections.abc import Mapping

DEFAULT_EXTENSION = ".unityweb"
DEFAULT_MOUNT_PATH = "/"


@dataclass(frozen=True)
class UnityWebConfig:
    """Where UnityWeb files are served from, and which paths to inspect.

    Attributes:
        root: Directory that request paths are resolved against.
        extension: File extension of the files to sniff, matched case-insensitively.
        mount_path: URL prefix the static files are served under.
    """

    root: Path
    extension: str = DEFAULT_EXTENSION
    mount_path: str = DEFAULT_MOUNT_PATH

    def __post_init__(self) -> None:
        root = Path(self.root).resolve()
        if not root.is_dir():
            raise ConfigurationError(f"UnityWeb root is not a directory: {self.root}")
        object.__setattr__(self, "root", root)

        if not self.extension.startswith(".") or len(self.extension) < 2:  # noqa: PLR2004
            raise ConfigurationError(f"Extension must start with a dot, got: {self.extension!r}")

        if not self.mount_path.startswith("/"):
            raise ConfigurationError(f"Mount path must start with a slash, got: {self.mount_path!r}")

    @property
    def url_prefix(self) -> str:
        """Mount path without its trailing slash."""
        return self.mount_path.rstrip("/")

    def relative_path(self, path: str) -> str | None:
        """Strip the mount path from a request path.

        Returns None if the request path is not under the mount path.
        """
        prefix = self.url_prefix
        if not prefix:
            return path
        if path.startswith(f"{prefix}/"):
            return path[len(prefix) :]
        return None

    def matches(self, path: str) -> bool:
        """Check whether a request path has the configured extension."""
        return path.lower().endswith(self.extension.lower())

    @classmethod
    def from_env(cls, environ: Mapping[str, str] = os.environ) -> UnityWebConfig:
        """Build a configuration from ``UNITYWEB_*`` environment variables."""
        return cls(
            root=Path(environ.get("UNITYWEB_ROOT", ".")),
            extension=environ.get("UNITYWEB_EXTENSION", DEFAULT_EXTENSION),
            mount_path=environ.get("UNITYWEB_MOUNT_PATH", DEFAULT_MOUNT_PATH),
        )
