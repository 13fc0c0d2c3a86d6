from __future__ import annotations

import enum


class ContentEncoding(enum.StrEnum):
    """Encodings that can be detected in a UnityWeb file."""

    BROTLI = "br"
    GZIP = "gzip"
