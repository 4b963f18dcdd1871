"""Configuration loading and management for vdu.

Configuration sources are merged in priority order:
    1. Defaults (defined in VduConfig)
    2. Global config (~/.vdu.toml)
    3. Project config (./vdu.toml)
    4. Explicit config file
    5. Environment variables (VDU_* prefix)
    6. CLI overrides (passed as kwargs)

Example:
    >>> config = load_config(host="0.0.0.0", open_browser=False)
    >>> config.host
    '0.0.0.0'
"""

from __future__ import annotations

import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Literal, Optional, get_type_hints

from .exceptions import ConfigurationError, InvalidConfigError

Verbosity = Literal["quiet", "normal", "verbose"]

_VERBOSITY_LEVELS = ("quiet", "normal", "verbose")


@dataclass(frozen=True)
class VduConfig:
    """Runtime options for scanning, serving and viewing.

    Attributes:
        Server:
            host: Interface the HTTP server binds to
            port: TCP port (0 = let the OS pick a free one)
            open_browser: Open the web viewer once the server is listening
            bundle_path: Tar archive to serve as the web viewer instead of
                the bundled static directory

        Layout and rendering:
            min_cell_area: Rectangles smaller than this (in pixels) are
                painted as a single cell instead of being subdivided
            label_strip_height: Pixels reserved under the treemap for the
                selected path
            frame_rate: Redraws per second in the terminal viewer
            cell_width_px: Virtual pixel width of one terminal cell
            cell_height_px: Virtual pixel height of one terminal cell

        Output:
            verbosity: Logging verbosity level
    """

    host: str = "localhost"
    port: int = 0
    open_browser: bool = True
    bundle_path: Optional[str] = None

    min_cell_area: float = 10_000.0
    label_strip_height: float = 20.0
    frame_rate: float = 30.0
    cell_width_px: int = 8
    cell_height_px: int = 16

    verbosity: Verbosity = "normal"

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if not 0 <= self.port <= 65535:
            raise InvalidConfigError("port", self.port, "must be between 0 and 65535")
        if not self.host:
            raise InvalidConfigError("host", self.host, "must not be empty")
        if self.min_cell_area <= 0:
            raise InvalidConfigError("min_cell_area", self.min_cell_area, "must be positive")
        if self.label_strip_height < 0:
            raise InvalidConfigError(
                "label_strip_height", self.label_strip_height, "must be non-negative"
            )
        if self.frame_rate <= 0:
            raise InvalidConfigError("frame_rate", self.frame_rate, "must be positive")
        if self.cell_width_px < 1:
            raise InvalidConfigError("cell_width_px", self.cell_width_px, "must be at least 1")
        if self.cell_height_px < 1:
            raise InvalidConfigError("cell_height_px", self.cell_height_px, "must be at least 1")
        if self.verbosity not in _VERBOSITY_LEVELS:
            raise InvalidConfigError(
                "verbosity", self.verbosity, f"must be one of {', '.join(_VERBOSITY_LEVELS)}"
            )

    @property
    def frame_interval(self) -> float:
        """Seconds between two frames."""
        return 1.0 / self.frame_rate


def load_config(config_file: Optional[Path] = None, **overrides) -> VduConfig:
    """Load configuration with auto-discovery and merging.

    Args:
        config_file: Optional explicit config file path
        **overrides: Direct overrides (typically from CLI flags). ``None``
            values are ignored so unset CLI options keep lower layers.

    Returns:
        Validated VduConfig instance

    Raises:
        ConfigurationError: If a config file is missing or malformed
        InvalidConfigError: If a merged value fails validation
    """
    merged: dict = {}

    global_config = Path.home() / ".vdu.toml"
    if global_config.exists():
        merged.update(_load_toml_file(global_config))

    project_config = Path.cwd() / "vdu.toml"
    if project_config.exists():
        merged.update(_load_toml_file(project_config))

    if config_file is not None:
        if not config_file.exists():
            raise ConfigurationError(f"Config file not found: {config_file}")
        merged.update(_load_toml_file(config_file))

    merged.update(_load_env_vars())

    if overrides.pop("verbose", False):
        overrides["verbosity"] = "verbose"
    if overrides.pop("quiet", False):
        overrides["verbosity"] = "quiet"

    merged.update({k: v for k, v in overrides.items() if v is not None})

    known = {f.name for f in fields(VduConfig)}
    unknown = sorted(set(merged) - known)
    if unknown:
        raise ConfigurationError(
            f"Unknown configuration keys: {', '.join(unknown)}",
            details={"known": ", ".join(sorted(known))},
        )

    return VduConfig(**merged)


def _load_env_vars() -> dict[str, Any]:
    """Load configuration from VDU_* environment variables.

    Every field of VduConfig can be set, e.g. ``VDU_HOST``, ``VDU_PORT``,
    ``VDU_OPEN_BROWSER`` (true/false/1/0) or ``VDU_MIN_CELL_AREA``.
    """
    type_hints = get_type_hints(VduConfig)

    result: dict[str, Any] = {}

    for field_name in VduConfig.__dataclass_fields__:
        env_key = f"VDU_{field_name.upper()}"
        env_value = os.environ.get(env_key)

        if env_value is None:
            continue

        try:
            parsed = _parse_env_value(env_value, type_hints[field_name])
        except ValueError as e:
            raise InvalidConfigError(env_key, env_value, str(e))
        if parsed is not None:
            result[field_name] = parsed

    return result


def _parse_env_value(value: str, type_hint: Any) -> Any:
    """Parse environment variable string to the type of a config field."""
    args = getattr(type_hint, "__args__", ())
    if type(None) in args:
        non_none_types = [t for t in args if t is not type(None)]
        if non_none_types:
            type_hint = non_none_types[0]

    origin = getattr(type_hint, "__origin__", None)

    if type_hint is bool:
        lower = value.lower()
        if lower in ("true", "1", "yes", "on"):
            return True
        elif lower in ("false", "0", "no", "off"):
            return False
        else:
            raise ValueError(f"expected true/false, got '{value}'")

    if type_hint is int:
        return int(value)

    if type_hint is float:
        return float(value)

    if type_hint is str or origin is Literal:
        return value

    return None


def _load_toml_file(path: Path) -> dict:
    """Load TOML file and return parsed dict.

    Raises:
        ConfigurationError: If the file cannot be read or parsed
    """
    try:
        # Python 3.11+ has tomllib in stdlib
        import tomllib
    except ModuleNotFoundError:
        # Fallback to tomli for Python 3.9-3.10
        import tomli as tomllib  # type: ignore

    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigurationError(f"Invalid config file '{path}': {e}")
