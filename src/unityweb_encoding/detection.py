"""Signature sniffing for pre-compressed UnityWeb files.

Unity WebGL builds write their ``.unityweb`` files either raw or compressed,
and mark the compressed variants with a fixed header:

- brotli: the stream starts with ``6B 8D 00`` followed by the text
  ``UnityWeb Compressed Content (brotli)``.
- gzip: a gzip header with the FNAME and FCOMMENT flags set, followed by a
  NUL-terminated filename and the comment ``UnityWeb Compressed Content (gzip)``.
"""

from __future__ import annotations

import struct

from unityweb_encoding.enums import ContentEncoding

BROTLI_SIGNATURE = b"\x6b\x8d\x00UnityWeb Compressed Content (brotli)"

# 1F 8B 08 18: gzip magic, deflate method, FNAME | FCOMMENT
GZIP_MAGIC = 403213087
GZIP_HEADER_SIZE = 10
GZIP_MAX_FILENAME_SIZE = 255
GZIP_COMMENT_SIGNATURE = b"\x00UnityWeb Compressed Content (gzip)\x00"

BROTLI_PREFIX_SIZE = len(BROTLI_SIGNATURE)
GZIP_PREFIX_SIZE = GZIP_HEADER_SIZE + GZIP_MAX_FILENAME_SIZE + len(GZIP_COMMENT_SIGNATURE)

_MAGIC = struct.Struct("<i")


def prefix_size(*, gzip: bool) -> int:
    """Number of leading bytes needed to test the relevant signatures."""
    return GZIP_PREFIX_SIZE if gzip else BROTLI_PREFIX_SIZE


def is_brotli(data: bytes) -> bool:
    """Check for the UnityWeb brotli header."""
    return data.startswith(BROTLI_SIGNATURE)


def is_gzip(data: bytes) -> bool:
    """Check for the UnityWeb gzip header and comment."""
    if len(data) < _MAGIC.size or _MAGIC.unpack_from(data)[0] != GZIP_MAGIC:
        return False

    # The filename terminator doubles as the first byte of the signature
    comment_index = data.find(b"\x00", GZIP_HEADER_SIZE)
    if comment_index < 0:
        return False
    return data[comment_index : comment_index + len(GZIP_COMMENT_SIGNATURE)] == GZIP_COMMENT_SIGNATURE


def detect(data: bytes | None, *, brotli: bool, gzip: bool) -> ContentEncoding | None:
    """Detect the encoding of a UnityWeb file from its first bytes.

    Args:
        data: The beginning of the file, or None if it could not be read.
        brotli: Whether to look for the brotli signature. Needs the first
            ``BROTLI_PREFIX_SIZE`` bytes of the file.
        gzip: Whether to look for the gzip signature. Needs the first
            ``GZIP_PREFIX_SIZE`` bytes of the file.

    Returns:
        The detected encoding, or None if no signature matched.

    Examples:
        >>> detect(BROTLI_SIGNATURE + b"...", brotli=True, gzip=True)
        <ContentEncoding.BROTLI: 'br'>
        >>> detect(b"raw", brotli=True, gzip=True) is None
        True
    """
    if data is None:
        return None
    if brotli and is_brotli(data):
        return ContentEncoding.BROTLI
    if gzip and is_gzip(data):
        return ContentEncoding.GZIP
    return None
