"""Config file loading.

A config file provides default inputs for scheduled runs:

    [prune]
    tag_names = ["nightly", "preview"]
    keep_days_assets = 14
    dry_run = false

Values are normalized to the raw strings the other input sources use, so
``resolve_inputs`` validates every source the same way.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from .inputs import INPUT_NAMES
from .result import Err, Ok, Result
from .structured import StrDict, as_obj_list, as_str_dict, get_table

__all__ = ["ConfigError", "load_config", "PRUNE_TABLE"]

PRUNE_TABLE = "prune"


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be loaded or parsed."""

    message: str
    path: Path | None = None


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    """Parse a TOML file, handling import and parse errors."""
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
    except OSError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))


def _as_raw(value: object) -> str | None:
    # bool before int: bool is an int subclass
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (str, int)):
        return str(value)
    items = as_obj_list(value)
    if items is not None and all(isinstance(i, str) for i in items):
        return ",".join(str(i) for i in items)
    return None


def load_config(path: Path) -> Result[dict[str, str], ConfigError]:
    """Load default inputs from the ``[prune]`` table of a TOML file.

    Args:
        path: Path to the TOML file

    Returns:
        Ok(input name -> raw value) on success, Err(ConfigError) on failure.
        Unknown keys are rejected so typos don't silently fall back to defaults.
    """
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result

    table = get_table(result.value, PRUNE_TABLE)
    if table is None:
        return Err(ConfigError(f"Missing [{PRUNE_TABLE}] table", path=path))

    raw: dict[str, str] = {}
    for key, value in table.items():
        if key not in INPUT_NAMES:
            return Err(ConfigError(f"Unknown key in [{PRUNE_TABLE}]: {key}", path=path))
        text = _as_raw(value)
        if text is None:
            return Err(ConfigError(f"Unsupported value for {key}: {value!r}", path=path))
        raw[key] = text
    return Ok(raw)
