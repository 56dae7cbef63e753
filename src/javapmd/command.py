# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Build the PMD command line and its environment overlay."""

from __future__ import annotations

import ntpath
import os
import posixpath
import shlex
import subprocess  # nosec B404 - only used for Windows command-line quoting
import sys
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path

from .config import Config
from .constants import (
    CACHE_FLAG,
    CLASSPATH_ENV,
    CLASSPATH_WILDCARD,
    FORMAT_FLAG,
    JRE_BIN_DIR,
    JSON_FORMAT,
    NO_CACHE_FLAG,
    NO_PROGRESS_FLAG,
    PATH_ENV,
    PMD_BIN_DIR,
    PMD_EXECUTABLE,
    PMD_SUBCOMMAND,
    PMD_WINDOWS_EXECUTABLE,
    POSIX_CLASSPATH_DELIMITER,
    RULESETS_FLAG,
    TARGET_FLAG,
    WINDOWS_CLASSPATH_DELIMITER,
    WINDOWS_PLATFORM,
)


@dataclass(frozen=True, slots=True)
class PmdCommand:
    """Argument vector and environment overlay for one PMD invocation."""

    args: tuple[str, ...]
    env: Mapping[str, str] = field(default_factory=dict)
    platform: str = sys.platform

    def render(self) -> str:
        """Return a shell-quoted rendering of :attr:`args` for logging."""
        if self.platform == WINDOWS_PLATFORM:
            return subprocess.list2cmdline(self.args)
        return shlex.join(self.args)


def _is_windows(platform: str) -> bool:
    return platform == WINDOWS_PLATFORM


def _join(platform: str, *parts: str) -> str:
    module = ntpath if _is_windows(platform) else posixpath
    return module.join(*parts)


def classpath_delimiter(platform: str | None = None) -> str:
    """Return the separator used between classpath entries on ``platform``."""
    return WINDOWS_CLASSPATH_DELIMITER if _is_windows(platform or sys.platform) else POSIX_CLASSPATH_DELIMITER


def pmd_executable(pmd_bin_path: Path, platform: str | None = None) -> str:
    """Return the PMD launcher script inside the install directory."""
    active = platform or sys.platform
    name = PMD_WINDOWS_EXECUTABLE if _is_windows(active) else PMD_EXECUTABLE
    return _join(active, str(pmd_bin_path), PMD_BIN_DIR, name)


def build_environment(
    config: Config,
    *,
    platform: str | None = None,
    environ: Mapping[str, str] | None = None,
) -> dict[str, str]:
    """Return the CLASSPATH/PATH overlay for a PMD process.

    Args:
        config: Active configuration supplying workspace root, extra classpath
            entries and the optional JRE override.
        platform: ``sys.platform`` style identifier; defaults to the host.
        environ: Ambient environment whose ``PATH`` is extended when a JRE
            override is configured; defaults to :data:`os.environ`.

    Returns:
        dict[str, str]: Environment variables to merge over the ambient
        environment.
    """

    active = platform or sys.platform
    ambient = os.environ if environ is None else environ
    windows = _is_windows(active)
    classpath = classpath_delimiter(active).join(
        [_join(active, str(config.workspace_root_path), CLASSPATH_WILDCARD), *config.additional_class_paths],
    )
    # Quote on Windows so entries containing spaces survive the launcher script.
    env: dict[str, str] = {CLASSPATH_ENV: f'"{classpath}"' if windows else classpath}
    if config.jre_path is not None:
        jre_bin = _join(active, str(config.jre_path), JRE_BIN_DIR)
        search_path = f"{jre_bin}{classpath_delimiter(active)}{ambient.get(PATH_ENV, '')}"
        env[PATH_ENV] = f'"{search_path}"' if windows else search_path
    return env


def build_arguments(target: Path | str, rulesets: Sequence[Path | str], config: Config) -> list[str]:
    """Return the ``pmd check`` arguments following the executable."""

    cache_args = [CACHE_FLAG, str(config.cache_path)] if config.enable_cache else [NO_CACHE_FLAG]
    return [
        PMD_SUBCOMMAND,
        NO_PROGRESS_FLAG,
        FORMAT_FLAG,
        JSON_FORMAT,
        *cache_args,
        TARGET_FLAG,
        str(target),
        RULESETS_FLAG,
        ",".join(str(ruleset) for ruleset in rulesets),
    ]


def build_command(
    target: Path | str,
    rulesets: Sequence[Path | str],
    config: Config,
    *,
    platform: str | None = None,
    environ: Mapping[str, str] | None = None,
) -> PmdCommand:
    """Assemble the complete PMD invocation for ``target``.

    Args:
        target: File or directory to analyse.
        rulesets: Validated ruleset paths, joined into a single ``-R`` value.
        config: Active configuration.
        platform: ``sys.platform`` style identifier; defaults to the host.
        environ: Ambient environment used to extend ``PATH``.

    Returns:
        PmdCommand: Arguments and environment overlay; nothing is executed.

    Raises:
        ValueError: If no PMD install directory is configured.
    """

    if config.pmd_bin_path is None:
        raise ValueError("PMD install directory is not configured")
    active = platform or sys.platform
    args = (pmd_executable(config.pmd_bin_path, active), *build_arguments(target, rulesets, config))
    return PmdCommand(
        args=args,
        env=build_environment(config, platform=active, environ=environ),
        platform=active,
    )


__all__ = [
    "PmdCommand",
    "build_arguments",
    "build_command",
    "build_environment",
    "classpath_delimiter",
    "pmd_executable",
]
