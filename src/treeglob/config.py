"""
TOML-based config file loading for treeglob.

Searches for `.treeglob.toml`, `treeglob.toml`, or `pyproject.toml [tool.treeglob]`
walking up from the current directory. Config values are merged with CLI flags
using three-way precedence: explicit CLI flags > config file > built-in defaults.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, TypeVar, cast

if sys.version_info >= (3, 11):
    import tomllib  # pyright: ignore[reportUnreachable]
else:
    import tomli as tomllib  # type: ignore[no-redef]  # pyright: ignore[reportUnreachable]


@dataclass
class TreeglobConfig:
    """
    Parsed config from a TOML file. Fields are `None` when not set in the config,
    allowing the merge logic to distinguish "not configured" from "explicitly set
    to default value".
    """

    include: list[str] | None = None
    exclude: list[str] | None = None
    include_dirs: bool | None = None
    respect_gitignore: bool | None = None


# Config file search order (first match wins within each directory level)
_CONFIG_FILENAMES = [".treeglob.toml", "treeglob.toml", "pyproject.toml"]

_VALID_FIELDS = {f.name for f in fields(TreeglobConfig)}

_LIST_FIELDS = {"include", "exclude"}


def find_config_file(start_dir: Path) -> Path | None:
    """
    Walk up from `start_dir` looking for a config file. Returns the first
    found, or `None`. Search order per directory: `.treeglob.toml` >
    `treeglob.toml` > `pyproject.toml` (only if it has `[tool.treeglob]`).
    """
    current = start_dir.resolve()
    while True:
        for filename in _CONFIG_FILENAMES:
            candidate = current / filename
            if candidate.is_file():
                if filename != "pyproject.toml" or _pyproject_has_treeglob_section(candidate):
                    return candidate
        parent = current.parent
        if parent == current:
            break
        current = parent
    return None


def _pyproject_has_treeglob_section(path: Path) -> bool:
    try:
        data = tomllib.loads(path.read_text())
        return "treeglob" in data.get("tool", {})
    except (tomllib.TOMLDecodeError, OSError):
        return False


def load_config(config_path: Path) -> TreeglobConfig:
    """
    Load a `TreeglobConfig` from a TOML file, extracting `[tool.treeglob]`
    from a `pyproject.toml`. Kebab-case keys are mapped to snake_case.

    A malformed file is reported on stderr and treated as empty.
    """
    try:
        data = tomllib.loads(config_path.read_text())
    except (tomllib.TOMLDecodeError, OSError) as e:
        print(f"Warning: ignoring config file {config_path}: {e}", file=sys.stderr)
        return TreeglobConfig()

    if config_path.name == "pyproject.toml":
        data = data.get("tool", {}).get("treeglob", {})

    return _parse_config_data(data)


def _valid_value(field: str, value: Any) -> bool:
    if field in _LIST_FIELDS:
        return isinstance(value, list) and all(
            isinstance(v, str) for v in cast(list[Any], value)
        )
    return isinstance(value, bool)


def _parse_config_data(data: dict[str, Any]) -> TreeglobConfig:
    """Parse a flat or sectioned TOML dict into TreeglobConfig."""
    # Flatten sections like [patterns] into the top level
    flat: dict[str, Any] = {}
    for key, value in data.items():
        if isinstance(value, dict):
            for sub_key, sub_value in cast(dict[str, Any], value).items():
                flat[sub_key] = sub_value
        else:
            flat[key] = value

    mapped: dict[str, Any] = {}
    for key, value in flat.items():
        snake_key = key.replace("-", "_")
        if snake_key not in _VALID_FIELDS:
            print(f"Warning: unrecognized config key: {key}", file=sys.stderr)
        elif not _valid_value(snake_key, value):
            expected = "a list of strings" if snake_key in _LIST_FIELDS else "true or false"
            print(f"Warning: ignoring config key {key}: expected {expected}", file=sys.stderr)
        else:
            mapped[snake_key] = value

    return TreeglobConfig(**mapped)


_T = TypeVar("_T")


def merge_cli_with_config(
    cli_opts: _T,
    config: TreeglobConfig | None,
    explicit_flags: set[str],
) -> _T:
    """
    Merge CLI options with config file settings.

    Precedence: explicit CLI flags > config file > built-in defaults.
    """
    if config is None:
        return cli_opts

    for cfg_field in fields(TreeglobConfig):
        cfg_value = getattr(config, cfg_field.name)
        if cfg_value is None:
            continue
        if cfg_field.name in explicit_flags:
            continue
        if hasattr(cli_opts, cfg_field.name):
            setattr(cli_opts, cfg_field.name, cfg_value)

    return cli_opts
