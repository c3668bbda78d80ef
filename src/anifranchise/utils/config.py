"""Config utility for persistent anifranchise settings.

Reads defaults (relation policy, request budget, build timeout) from
~/.config/anifranchise/config.toml. Uses tomli for TOML parsing.

Example config.toml::

    [relations]
    policy = "kind-blind"

    [catalog]
    requests_per_minute = 60
"""

from pathlib import Path
from typing import TypeVar, Any, cast
import os
import contextlib

import tomli

from anifranchise.utils.debug import warn

# Determine config directory respecting XDG_CONFIG_HOME if set.
_xdg_config_home = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))
# Path like ~/.config/anifranchise or $XDG_CONFIG_HOME/anifranchise
CONFIG_DIR = _xdg_config_home / "anifranchise"
CONFIG_FILE = CONFIG_DIR / "config.toml"

_TRUTHY = {"1", "true", "yes", "on"}

T = TypeVar("T")


def _read_config_file() -> dict[str, Any]:
    """Read the TOML config file if it exists, returning a (nested) dict."""

    if not CONFIG_FILE.exists():
        return {}
    with CONFIG_FILE.open("rb") as f:
        return tomli.load(f)


def _lookup_nested(data: dict[str, Any], dotted_key: str) -> Any | None:
    """Retrieve a nested value from *data* given a dotted key path.

    Example: dotted_key="relations.policy" will attempt
    ``data["relations"]["policy"]`` returning None if any level is missing.
    """

    current: Any = data
    for part in dotted_key.split("."):
        if not isinstance(current, dict):
            return None
        current = current.get(part)
        if current is None:
            return None
    return current


def _make_env_var_name(dotted_key: str, prefix: str = "ANIFRANCHISE_") -> str:
    """Convert a dotted key path to an uppercase ENV var name.

    Example: "catalog.requests_per_minute" -> "ANIFRANCHISE_CATALOG_REQUESTS_PER_MINUTE".
    """

    return prefix + dotted_key.replace(".", "_").upper()


def _coerce(value: Any, default: T) -> T:
    """Coerce a raw env/config *value* to the type of *default*.

    Raises:
        ValueError: If the value cannot be converted.
    """
    if isinstance(default, bool):
        if isinstance(value, bool):
            return cast(T, value)
        if isinstance(value, str):
            return cast(T, value.lower() in _TRUTHY)
        raise ValueError(f"expected a boolean, got {value!r}")
    if isinstance(default, int):
        if isinstance(value, int) and not isinstance(value, bool):
            return cast(T, value)
        if isinstance(value, str):
            return cast(T, int(value))
        raise ValueError(f"expected an integer, got {value!r}")
    if isinstance(default, float):
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return cast(T, float(value))
        if isinstance(value, str):
            return cast(T, float(value))
        raise ValueError(f"expected a number, got {value!r}")
    if default is None and isinstance(value, str):
        # Type unknown: infer int/float when the text looks numeric.
        if value.isdigit():
            return cast(T, int(value))
        with contextlib.suppress(ValueError):
            return cast(T, float(value))
    return cast(T, value)


def _coerce_or_default(value: Any, default: T, source: str) -> T:
    try:
        return _coerce(value, default)
    except ValueError:
        warn(f"Ignoring invalid value {value!r} from {source}; using {default!r}")
        return default


def resolve_setting(
    key: str,
    *,
    default: T,
    cli_value: T | None = None,
) -> T:
    """Resolve a configuration *key* using precedence CLI > env > config > default.

    Args:
        key: Dotted key path, e.g. ``"relations.policy"``.
        default: Value to fall back to when no overrides found.
        cli_value: Value passed from CLI option (may be ``None`` when not provided).

    Returns:
        The resolved value with type matching *default* (or *cli_value*).
    """

    # 1. CLI value wins if provided (``None`` means the option was omitted).
    if cli_value is not None:
        return cli_value

    # 2. Environment variable
    env_var = _make_env_var_name(key)
    if env_var in os.environ:
        return _coerce_or_default(os.environ[env_var], default, env_var)

    # 3. Config file lookup
    file_val = _lookup_nested(_read_config_file(), key)
    if file_val is not None:
        return _coerce_or_default(file_val, default, f"{CONFIG_FILE} [{key}]")

    # 4. Default
    return default
