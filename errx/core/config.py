"""Typed capture configuration loaded from TOML.

Settings live either at the root of an ``errx.toml`` or under
``[tool.errx]`` in a ``pyproject.toml``:

    [tool.errx]
    caller_skip_level = 1   # errors are created through one helper layer
    max_stack_depth = 16
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from .chain import ErrorFactory
from .result import Err, Ok, Result
from .stack import MAX_STACK_DEPTH, StackCapturer
from .structured import StrDict, as_str_dict, get_int, get_table

__all__ = [
    "Config",
    "ConfigError",
    "load_config",
    "load_config_or_default",
]


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be loaded or parsed."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class Config:
    """Stack capture settings.

    Attributes:
        caller_skip_level: Extra frames to skip, one per helper function
            that creates errors on behalf of its caller.
        max_stack_depth: Maximum number of frames recorded per trace.
    """

    caller_skip_level: int = 0
    max_stack_depth: int = MAX_STACK_DEPTH

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> Config:
        """Create Config from a settings table.

        Raises:
            TypeError: A setting has the wrong type.
            ValueError: max_stack_depth is negative.
        """
        skip = get_int(data, "caller_skip_level")
        depth = get_int(data, "max_stack_depth")
        if depth is not None and depth < 0:
            raise ValueError(f"'max_stack_depth' must not be negative, got {depth}")
        return cls(
            caller_skip_level=skip if skip is not None else 0,
            max_stack_depth=depth if depth is not None else MAX_STACK_DEPTH,
        )

    def capturer(self) -> StackCapturer:
        """Build the StackCapturer these settings describe."""
        return StackCapturer(max_depth=self.max_stack_depth).adjusted(self.caller_skip_level)

    def factory(self) -> ErrorFactory:
        """Build an ErrorFactory bound to capturer()."""
        return ErrorFactory(self.capturer())


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    """Parse a TOML file, handling read and parse errors."""
    import tomllib

    try:
        content = path.read_bytes()
        data_obj: object = tomllib.loads(content.decode("utf-8"))
        data = as_str_dict(data_obj)
        if data is None:
            return Err(ConfigError("Config root must be a TOML table", path=path))
        return Ok(data)
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))


def _settings_table(path: Path, data: StrDict) -> StrDict:
    if path.name != "pyproject.toml":
        return data
    tool = get_table(data, "tool") or {}
    return get_table(tool, "errx") or {}


def load_config(path: Path) -> Result[Config, ConfigError]:
    """Load capture settings from an errx.toml or pyproject.toml.

    Args:
        path: Path to the settings file.

    Returns:
        Ok(Config) on success, Err(ConfigError) on failure. A pyproject.toml
        without a ``[tool.errx]`` table yields the defaults.
    """
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result

    try:
        return Ok(Config.from_dict(_settings_table(path, result.value)))
    except (TypeError, ValueError) as e:
        return Err(ConfigError(f"Invalid config structure: {e}", path=path))


def load_config_or_default(path: Path) -> Config:
    """Load config from file, or return the defaults when it can't be loaded."""
    result = load_config(path)
    if isinstance(result, Ok):
        return result.value
    return Config()
