"""FastAPI app serving a Unity WebGL build."""

from __future__ import annotations

from importlib import metadata

import fastapi
from fastapi import staticfiles

from unityweb_encoding.config import UnityWebConfig
from unityweb_encoding.helpers import compression

DESCRIPTION = """\
Serves the static files of a Unity WebGL build. Pre-compressed `.unityweb` files are \
detected from their first bytes and sent with the matching `Content-Encoding` header.
"""


def create_app(config: UnityWebConfig) -> fastapi.FastAPI:
    """Create an app serving the files under ``config.root``."""
    app = fastapi.FastAPI(
        title="UnityWeb static server",
        description=DESCRIPTION,
        version=metadata.version("unityweb-encoding"),
    )
    app.add_middleware(compression.UnityWebEncodingMiddleware, config=config)  # ty: ignore[invalid-argument-type]
    app.mount(config.mount_path, staticfiles.StaticFiles(directory=config.root), name="build")
    return app


app = create_app(UnityWebConfig.from_env())
