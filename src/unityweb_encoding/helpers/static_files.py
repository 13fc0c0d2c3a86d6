"""Safe static-file resolution and bounded reads."""

from __future__ import annotations

import logging
import os
import re
from pathlib import Path

import anyio

logger = logging.getLogger(__name__)

_SEPARATORS = re.compile(r"[/\\]")


def is_inside_path(root: Path, subpath: Path) -> bool:
    """Check that ``subpath`` is ``root`` itself or nested inside it."""
    try:
        relative = os.path.relpath(subpath, root)
    except ValueError:
        # Different drives
        return False
    return _SEPARATORS.split(relative, maxsplit=1)[0] != os.pardir and not os.path.isabs(relative)


def resolve_static_file(root: Path, request_path: str) -> Path | None:
    """Resolve a request path to a file path within ``root``.

    No filesystem access happens here, the result may not exist.
    """
    candidate = Path(os.path.normpath(root / f".{request_path}"))
    if not is_inside_path(root, candidate):
        logger.debug("Rejected path outside of %s: %r", root, request_path)
        return None
    return candidate


async def read_prefix(path: Path, nbytes: int) -> bytes | None:
    """Read at most ``nbytes`` from the start of a file.

    Returns None if the file cannot be opened or read.
    """
    try:
        async with await anyio.open_file(path, "rb") as f:
            return await f.read(nbytes)
    except (OSError, ValueError) as exc:
        logger.debug("Could not read %s: %s", path, exc)
        return None


async def read_static_file_prefix(root: Path, request_path: str, nbytes: int) -> bytes | None:
    """Read the first bytes of the static file a request path points to."""
    path = resolve_static_file(root, request_path)
    if path is None:
        return None
    return await read_prefix(path, nbytes)
