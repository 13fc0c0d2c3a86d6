from __future__ import annotations

import struct
import zlib
from typing import TYPE_CHECKING

import pytest

from unityweb_encoding.config import UnityWebConfig
from unityweb_encoding.detection import BROTLI_SIGNATURE

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path

GZIP_COMMENT = b"UnityWeb Compressed Content (gzip)\x00"


def _unityweb_gzip(payload: bytes, filename: bytes = b"") -> bytes:
    """Build a valid gzip stream with the UnityWeb comment."""
    compressor = zlib.compressobj(wbits=-zlib.MAX_WBITS)
    deflated = compressor.compress(payload) + compressor.flush()
    header = b"\x1f\x8b\x08\x18" + struct.pack("<I", 0) + b"\x00\x03"
    trailer = struct.pack("<II", zlib.crc32(payload), len(payload) & 0xFFFFFFFF)
    return header + filename + b"\x00" + GZIP_COMMENT + deflated + trailer


@pytest.fixture
def make_gzip() -> Callable[..., bytes]:
    """Factory for UnityWeb gzip files."""
    return _unityweb_gzip


@pytest.fixture
def payload() -> bytes:
    """Content of the compressed test files once decoded."""
    return b"var unityFramework = function() {};\n" * 20


@pytest.fixture
def build_dir(tmp_path: Path, payload: bytes) -> Path:
    """A Unity WebGL build directory with one file per encoding."""
    root = tmp_path / "webgl"
    build = root / "Build"
    build.mkdir(parents=True)
    build.joinpath("game.data.unityweb").write_bytes(_unityweb_gzip(payload, b"game.data"))
    build.joinpath("game.wasm.code.UNITYWEB").write_bytes(BROTLI_SIGNATURE + payload)
    build.joinpath("UnityLoader.js.unityweb").write_bytes(payload)
    build.joinpath("game.json").write_bytes(_unityweb_gzip(payload))
    root.joinpath("index.html").write_text("<html></html>", encoding="utf-8")
    tmp_path.joinpath("secret.unityweb").write_bytes(BROTLI_SIGNATURE)
    return root


@pytest.fixture
def config(build_dir: Path) -> UnityWebConfig:
    """Configuration serving the build directory at the root URL."""
    return UnityWebConfig(root=build_dir)
