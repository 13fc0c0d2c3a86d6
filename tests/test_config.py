"""Test middleware configuration."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from unityweb_encoding.config import UnityWebConfig
from unityweb_encoding.exceptions import ConfigurationError

if TYPE_CHECKING:
    from pathlib import Path


def test_config_defaults(build_dir: Path) -> None:
    """Test default extension and mount path."""
    config = UnityWebConfig(root=build_dir)
    assert config.root == build_dir.resolve()
    assert config.extension == ".unityweb"
    assert config.mount_path == "/"
    assert config.relative_path("/Build/game.data.unityweb") == "/Build/game.data.unityweb"


def test_config_root_is_resolved(build_dir: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Relative roots are made absolute."""
    monkeypatch.chdir(build_dir.parent)
    config = UnityWebConfig(root=build_dir.name)  # type: ignore[arg-type]
    assert config.root == build_dir.resolve()


@pytest.mark.parametrize(
    "kwargs",
    [
        pytest.param({"extension": "unityweb"}, id="extension-without-dot"),
        pytest.param({"extension": "."}, id="extension-dot-only"),
        pytest.param({"mount_path": "build"}, id="mount-path-without-slash"),
    ],
)
def test_config_invalid(build_dir: Path, kwargs: dict[str, str]) -> None:
    """Test validation of the extension and mount path."""
    with pytest.raises(ConfigurationError):
        UnityWebConfig(root=build_dir, **kwargs)  # type: ignore[arg-type]


def test_config_missing_root(tmp_path: Path) -> None:
    """The root must be an existing directory."""
    with pytest.raises(ConfigurationError, match="not a directory"):
        UnityWebConfig(root=tmp_path / "missing")

    with pytest.raises(ConfigurationError, match="not a directory"):
        UnityWebConfig(root=tmp_path / "secret.unityweb")


def test_config_matches(build_dir: Path) -> None:
    """Extensions are matched case-insensitively."""
    config = UnityWebConfig(root=build_dir, extension=".UnityWeb")
    assert config.matches("/Build/game.data.unityweb")
    assert config.matches("/Build/game.data.UNITYWEB")
    assert not config.matches("/Build/game.json")
    assert not config.matches("/Build/game.unityweb.map")


def test_config_relative_path(build_dir: Path) -> None:
    """Request paths are made relative to the mount path."""
    config = UnityWebConfig(root=build_dir, mount_path="/game/")
    assert config.url_prefix == "/game"
    assert config.relative_path("/game/Build/game.data.unityweb") == "/Build/game.data.unityweb"
    assert config.relative_path("/game") is None
    assert config.relative_path("/gameBuild/game.data.unityweb") is None
    assert config.relative_path("/other/game.data.unityweb") is None


def test_config_from_env(build_dir: Path) -> None:
    """Test configuration from environment variables."""
    config = UnityWebConfig.from_env(
        {
            "UNITYWEB_ROOT": str(build_dir),
            "UNITYWEB_EXTENSION": ".data",
            "UNITYWEB_MOUNT_PATH": "/game",
        },
    )
    assert config == UnityWebConfig(root=build_dir, extension=".data", mount_path="/game")


def test_config_from_env_defaults(build_dir: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """The current directory is served by default."""
    monkeypatch.chdir(build_dir)
    config = UnityWebConfig.from_env({})
    assert config.root == build_dir.resolve()
    assert config.extension == ".unityweb"
