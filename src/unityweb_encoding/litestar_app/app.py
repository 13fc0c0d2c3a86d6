from __future__ import annotations

from litestar import Litestar
from litestar.middleware import DefineMiddleware
from litestar.static_files import create_static_files_router

from unityweb_encoding.config import UnityWebConfig
from unityweb_encoding.helpers.compression import UnityWebEncodingMiddleware


def create_app(config: UnityWebConfig) -> Litestar:
    """Create a Litestar app serving the files under ``config.root``."""
    return Litestar(
        [
            create_static_files_router(
                path=config.mount_path,
                directories=[config.root],
                name="build",
                middleware=[DefineMiddleware(UnityWebEncodingMiddleware, config=config)],
            ),
        ],
    )


app = create_app(UnityWebConfig.from_env())
