"""Configuration loading for the perception layer."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Callable, Dict, Mapping

import structlog
import yaml

from tilesight.constants import (
    DEFAULT_FOV_RADIUS,
    DEFAULT_WORKER_BATCH_SIZE,
    FOV_NETWORK_MARGIN,
)

log = structlog.get_logger(__name__)

DEFAULT_CONFIG_FILE = Path(__file__).resolve().parent / "data" / "fov.yaml"


@dataclass(frozen=True)
class FovConfig:
    """Tunable perception values, passed explicitly to the code that needs them.

    ``margin_uses_player_radius`` selects which radius sizes the awareness
    margin window. Off by default, which measures the window from
    ``DEFAULT_FOV_RADIUS`` for every player regardless of their own radius.
    """

    default_radius: int = DEFAULT_FOV_RADIUS
    network_margin: int = FOV_NETWORK_MARGIN
    margin_uses_player_radius: bool = False
    worker_batch_size: int = DEFAULT_WORKER_BATCH_SIZE

    def __post_init__(self) -> None:
        for name in ("default_radius", "network_margin", "worker_batch_size"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"{name} must be an integer, got {value!r}")
            if value < 0:
                raise ValueError(f"{name} must be non-negative, got {value}")
        if not isinstance(self.margin_uses_player_radius, bool):
            raise ValueError("margin_uses_player_radius must be a boolean")

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> "FovConfig":
        if not data:
            return cls()
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            log.error("Unknown FOV config keys", unknown=sorted(unknown))
            raise ValueError(f"Unknown FOV config keys: {sorted(unknown)}")
        return cls(**dict(data))

    def window_radius_for(self, player_radius: int) -> int:
        """Radius used for the awareness margin window of one player."""
        if self.margin_uses_player_radius:
            return player_radius
        return self.default_radius


def _read_config_file(
    config_path: Path,
    config_name: str,
    mode: str,
    parse: Callable[[Any], Any],
    parse_error: type[Exception],
) -> Any:
    config_path = Path(config_path)
    if not config_path.is_file():
        log.error("Config file not found", config=config_name, path=str(config_path))
        raise FileNotFoundError(
            f"{config_name} configuration file not found: {config_path}"
        )
    try:
        with config_path.open(mode) as f:
            config_data = parse(f)
    except parse_error as e:
        log.error(
            "Config file could not be parsed",
            config=config_name,
            path=str(config_path),
            error=str(e),
            exc_info=True,
        )
        raise
    log.info("Config loaded", config=config_name, path=str(config_path))
    return config_data


def load_yaml_config(config_path: Path, config_name: str) -> Dict[str, Any]:
    """Loads a YAML configuration file. An empty file reads as ``{}``."""
    config_data = _read_config_file(
        config_path, config_name, "r", yaml.safe_load, yaml.YAMLError
    )
    if config_data is None:
        log.warning("Config file is empty", config=config_name, path=str(config_path))
        return {}
    return config_data


def load_toml_config(config_path: Path, config_name: str) -> Dict[str, Any]:
    """Loads a TOML configuration file."""
    # tomllib requires bytes mode
    return _read_config_file(
        config_path, config_name, "rb", tomllib.load, tomllib.TOMLDecodeError
    )


def load_fov_config(config_path: Path | None = None) -> FovConfig:
    """Read the ``fov`` section of a YAML or TOML file into a :class:`FovConfig`.

    Without a path the defaults shipped inside the package are read. If that
    file is missing from the install, built-in defaults are used.
    """
    if config_path is None:
        if not DEFAULT_CONFIG_FILE.is_file():
            log.warning(
                "Shipped FOV config missing, using built-in defaults",
                path=str(DEFAULT_CONFIG_FILE),
            )
            return FovConfig()
        config_path = DEFAULT_CONFIG_FILE
    config_path = Path(config_path)
    if config_path.suffix == ".toml":
        data = load_toml_config(config_path, "FOV")
    else:
        data = load_yaml_config(config_path, "FOV")
    if not isinstance(data, dict):
        raise ValueError(f"FOV config must be a mapping: {config_path}")
    return FovConfig.from_mapping(data.get("fov", {}))
