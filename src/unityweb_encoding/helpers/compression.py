"""Starlette middleware that labels pre-compressed UnityWeb files.

Unity WebGL builds may ship ``.unityweb`` files that are already brotli or
gzip compressed. The middleware sniffs the first bytes of the requested file
and, when the client accepts the detected encoding, sets ``Content-Encoding``
so the browser decompresses the body. The body itself is never touched.

Follows the Starlette pure ASGI middleware pattern.
"""

from __future__ import annotations

import dataclasses
import logging
import re
from typing import TYPE_CHECKING

from starlette.datastructures import Headers, MutableHeaders

from unityweb_encoding import detection
from unityweb_encoding.helpers import static_files

if TYPE_CHECKING:
    from starlette.types import ASGIApp, Message, Receive, Scope, Send

    from unityweb_encoding.config import UnityWebConfig
    from unityweb_encoding.enums import ContentEncoding

logger = logging.getLogger(__name__)

MAX_ACCEPT_ENCODING_ENTRIES = 32

_ENTRY = re.compile(
    r"""
    ^\s*
    (?P<coding>[!#$%&'*+.^_`|~0-9a-z-]+)
    \s*
    (?:;\s*q\s*=\s*(?P<q>0(?:\.\d{0,3})?|1(?:\.0{0,3})?))?
    \s*$
    """,
    re.IGNORECASE | re.VERBOSE,
)


@dataclasses.dataclass(frozen=True)
class AcceptedEncodings:
    """Quality weights of the encodings the middleware cares about."""

    br: float = 0.0
    gzip: float = 0.0
    identity: float = 1.0

    @property
    def brotli_accepted(self) -> bool:
        return self.br > 0

    @property
    def gzip_accepted(self) -> bool:
        return self.gzip > 0


def parse_accept_encoding(header_value: str) -> AcceptedEncodings:
    """Parse the Accept-Encoding header.

    Malformed entries and encodings other than br, gzip and identity are
    ignored. When an encoding is listed more than once, the last entry wins.

    Args:
        header_value: Value of the Accept-Encoding header

    Returns:
        The weights of br, gzip and identity

    Examples:
        >>> parse_accept_encoding("gzip;q=0.5, br;q=0")
        AcceptedEncodings(br=0.0, gzip=0.5, identity=1.0)
        >>> parse_accept_encoding("identity")
        AcceptedEncodings(br=0.0, gzip=0.0, identity=1.0)
    """
    accepted = AcceptedEncodings()
    for entry in header_value.split(",", MAX_ACCEPT_ENCODING_ENTRIES)[:MAX_ACCEPT_ENCODING_ENTRIES]:
        match = _ENTRY.match(entry)
        if match is None:
            continue

        coding = match["coding"].lower()
        if coding not in {"br", "gzip", "identity"}:
            continue

        quality = float(match["q"]) if match["q"] is not None else 1.0
        accepted = dataclasses.replace(accepted, **{coding: quality})

    return accepted


def get_route_path(scope: Scope) -> str:
    """Request path with the ASGI root path stripped, as Starlette routes it."""
    path: str = scope["path"]
    root_path: str = scope.get("root_path", "")
    if not root_path or not path.startswith(root_path):
        return path
    if path == root_path:
        return ""
    if path[len(root_path)] == "/":
        return path[len(root_path) :]
    return path


class UnityWebEncodingMiddleware:
    """Middleware that sets Content-Encoding on pre-compressed UnityWeb files.

    Only requests for paths ending with the configured extension are
    inspected, and only when the client accepts brotli or gzip. Any failure
    to read the file leaves the response untouched.
    """

    def __init__(self, app: ASGIApp, *, config: UnityWebConfig) -> None:
        """Initialize the middleware.

        Args:
            app: The ASGI application
            config: Where the static files live and which paths to inspect
        """
        self.app = app
        self.config = config

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """Handle the ASGI request.

        Args:
            scope: The ASGI scope
            receive: The receive callable
            send: The send callable
        """
        if scope["type"] != "http":  # pragma: no cover
            await self.app(scope, receive, send)
            return

        encoding = await self.detect_encoding(scope)
        if encoding is None:
            await self.app(scope, receive, send)
            return

        async def send_with_encoding(message: Message) -> None:
            if message["type"] == "http.response.start":
                headers = MutableHeaders(scope=message)
                headers["Content-Encoding"] = encoding
            await send(message)

        await self.app(scope, receive, send_with_encoding)

    async def detect_encoding(self, scope: Scope) -> ContentEncoding | None:
        """Sniff the encoding of the requested file, if it is worth doing."""
        path = get_route_path(scope)
        if not self.config.matches(path):
            return None

        relative_path = self.config.relative_path(path)
        if relative_path is None:
            return None

        accepted = parse_accept_encoding(Headers(scope=scope).get("accept-encoding", ""))
        if not accepted.brotli_accepted and not accepted.gzip_accepted:
            return None

        data = await static_files.read_static_file_prefix(
            self.config.root,
            relative_path,
            detection.prefix_size(gzip=accepted.gzip_accepted),
        )
        encoding = detection.detect(
            data,
            brotli=accepted.brotli_accepted,
            gzip=accepted.gzip_accepted,
        )
        logger.debug("Detected encoding of %s: %s", path, encoding or "identity")
        return encoding
