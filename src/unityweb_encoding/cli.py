"""Report the encoding of UnityWeb files."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING

import anyio

from unityweb_encoding import detection
from unityweb_encoding.helpers import static_files

if TYPE_CHECKING:
    from collections.abc import Sequence

logger = logging.getLogger(__name__)


async def sniff_files(paths: Sequence[Path], *, brotli: bool, gzip: bool) -> int:
    """Print the detected encoding of each file.

    Returns the number of files that could not be read.
    """
    unreadable = 0
    for path in paths:
        data = await static_files.read_prefix(path, detection.prefix_size(gzip=gzip))
        if data is None:
            print(f"{path}: unreadable")
            unreadable += 1
            continue

        encoding = detection.detect(data, brotli=brotli, gzip=gzip)
        logger.debug("Read %d bytes from %s", len(data), path)
        print(f"{path}: {encoding or 'identity'}")

    return unreadable


def main(argv: Sequence[str] | None = None) -> int:
    class CLINamespace(argparse.Namespace):
        files: list[Path]
        brotli: bool
        gzip: bool
        verbose: bool

    parser = argparse.ArgumentParser(prog="unityweb-detect", allow_abbrev=False)
    parser.add_argument("files", nargs="+", type=Path)
    parser.add_argument("--no-brotli", action="store_false", dest="brotli")
    parser.add_argument("--no-gzip", action="store_false", dest="gzip")
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args(argv, namespace=CLINamespace())

    logging.basicConfig(level=logging.INFO, format="%(message)s")
    logging.getLogger("unityweb_encoding").setLevel(logging.DEBUG if args.verbose else logging.INFO)

    unreadable = anyio.run(lambda: sniff_files(args.files, brotli=args.brotli, gzip=args.gzip))
    return 1 if unreadable else 0


if __name__ == "__main__":
    sys.exit(main())
