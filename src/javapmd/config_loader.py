# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Config loading utilities with layered precedence.

Sources are merged in order (later wins): built-in defaults, the
``[tool.javapmd]`` table of ``pyproject.toml``, the project's
``.javapmd.toml`` (or an explicit file) and finally caller overrides such as
CLI flags.
"""

from __future__ import annotations

import os
import re
import tomllib
from collections.abc import Mapping, MutableMapping, Sequence
from pathlib import Path
from typing import Any, Final

from pydantic import ValidationError

from .config import Config
from .constants import CONFIG_FILE_NAME, PYPROJECT_FILE_NAME, PYPROJECT_SECTION_KEY, PYPROJECT_TOOL_KEY
from .errors import ConfigError

# Settings names used by the editor extension, mapped onto model fields.
_KEY_ALIASES: Final[dict[str, str]] = {
    "workspaceRootPath": "workspace_root_path",
    "pmdBinPath": "pmd_bin_path",
    "pmdPath": "pmd_bin_path",
    "jrePath": "jre_path",
    "rulesets": "rulesets",
    "additionalClassPaths": "additional_class_paths",
    "enableCache": "enable_cache",
    "priorityErrorThreshold": "priority_error_threshold",
    "priorityWarnThreshold": "priority_warn_threshold",
    "commandBufferSize": "command_buffer_size",
}
_PATH_KEYS: Final[frozenset[str]] = frozenset({"workspace_root_path", "pmd_bin_path", "jre_path"})
_PATH_LIST_KEYS: Final[frozenset[str]] = frozenset({"rulesets", "additional_class_paths"})
_VARIABLE_PATTERN: Final[re.Pattern[str]] = re.compile(r"\$\{(workspaceFolder|env:([A-Za-z_][A-Za-z0-9_]*))\}")


class TomlConfigSource:
    """Load a configuration table from a TOML document."""

    def __init__(self, path: Path, *, section: Sequence[str] = ()) -> None:
        self.path = path
        self.name = str(path)
        self._section = tuple(section)

    def load(self) -> Mapping[str, Any]:
        if not self.path.is_file():
            return {}
        try:
            with self.path.open("rb") as handle:
                data: Any = tomllib.load(handle)
        except tomllib.TOMLDecodeError as exc:
            raise ConfigError(f"Invalid TOML in {self.path}: {exc}") from exc
        for key in self._section:
            if not isinstance(data, Mapping):
                return {}
            data = data.get(key, {})
        if not isinstance(data, MutableMapping):
            raise ConfigError(f"Configuration at {self.path} must be a table")
        return dict(data)

    def describe(self) -> str:
        return f"TOML configuration at {self.name}"


class PyProjectConfigSource(TomlConfigSource):
    """Read configuration from ``[tool.javapmd]`` within ``pyproject.toml``."""

    def __init__(self, path: Path) -> None:
        super().__init__(path, section=(PYPROJECT_TOOL_KEY, PYPROJECT_SECTION_KEY))

    def describe(self) -> str:
        return f"pyproject.toml ({self.name})"


def normalise_keys(data: Mapping[str, Any]) -> dict[str, Any]:
    """Return ``data`` keyed by model field names.

    Args:
        data: Raw mapping using either snake_case field names, kebab-case
            names or the editor's camelCase setting names.

    Returns:
        dict[str, Any]: Mapping keyed by :class:`Config` field names.

    Raises:
        ConfigError: If a key does not correspond to any configuration field.
    """

    known = set(Config.model_fields)
    normalised: dict[str, Any] = {}
    for raw_key, value in data.items():
        key = _KEY_ALIASES.get(raw_key, raw_key.replace("-", "_"))
        if key not in known:
            raise ConfigError(f"Unknown configuration key '{raw_key}'")
        normalised[key] = value
    return normalised


def expand_variables(value: str, *, root: Path, env: Mapping[str, str] | None = None) -> str:
    """Expand ``${workspaceFolder}``, ``${env:NAME}`` and a leading ``~`` in ``value``."""

    environ = os.environ if env is None else env

    def _replace(match: re.Match[str]) -> str:
        if match.group(2) is not None:
            return environ.get(match.group(2), "")
        return str(root)

    expanded = _VARIABLE_PATTERN.sub(_replace, value)
    return os.path.expanduser(expanded) if expanded.startswith("~") else expanded


def _resolve_path_value(value: Any, *, root: Path, env: Mapping[str, str] | None) -> Any:
    if not isinstance(value, (str, Path)):
        return value
    text = expand_variables(str(value), root=root, env=env)
    if not text.strip():
        return text
    path = Path(text)
    return path if path.is_absolute() else root / path


def resolve_paths(data: Mapping[str, Any], *, root: Path, env: Mapping[str, str] | None = None) -> dict[str, Any]:
    """Expand variables and anchor relative paths in ``data`` at ``root``."""

    resolved = dict(data)
    for key in _PATH_KEYS & resolved.keys():
        resolved[key] = _resolve_path_value(resolved[key], root=root, env=env)
    for key in _PATH_LIST_KEYS & resolved.keys():
        entries = resolved[key]
        if isinstance(entries, (str, Path)):
            entries = [entries]
        if key == "additional_class_paths":
            # Classpath entries may be wildcards or jar names; only expand variables.
            resolved[key] = [expand_variables(str(item), root=root, env=env) for item in entries]
        else:
            resolved[key] = [_resolve_path_value(item, root=root, env=env) for item in entries]
    return resolved


def load_config(
    root: Path,
    *,
    config_file: Path | None = None,
    overrides: Mapping[str, Any] | None = None,
    env: Mapping[str, str] | None = None,
) -> Config:
    """Build a :class:`Config` for ``root`` from layered sources.

    Args:
        root: Workspace root; anchors relative paths and the PMD cache file.
        config_file: Optional explicit TOML file replacing ``.javapmd.toml``.
        overrides: Final layer of values, typically supplied by CLI flags.
            ``None`` values are ignored.
        env: Environment used for ``${env:NAME}`` expansion.

    Returns:
        Config: Validated configuration.

    Raises:
        ConfigError: If a source is unreadable or the merged values are invalid.
    """

    workspace = root.resolve()
    if config_file is not None and not config_file.is_file():
        raise ConfigError(f"Configuration file {config_file} does not exist")
    sources = [
        PyProjectConfigSource(workspace / PYPROJECT_FILE_NAME),
        TomlConfigSource(config_file if config_file is not None else workspace / CONFIG_FILE_NAME),
    ]
    merged: dict[str, Any] = {"workspace_root_path": workspace}
    for source in sources:
        fragment = normalise_keys(source.load())
        merged.update(resolve_paths(fragment, root=workspace, env=env))
    if overrides:
        fragment = normalise_keys({key: value for key, value in overrides.items() if value is not None})
        merged.update(resolve_paths(fragment, root=workspace, env=env))
    try:
        return Config.model_validate(merged)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc


__all__ = [
    "PyProjectConfigSource",
    "TomlConfigSource",
    "expand_variables",
    "load_config",
    "normalise_keys",
    "resolve_paths",
]
