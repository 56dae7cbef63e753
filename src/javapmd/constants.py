# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Shared constants describing the PMD command line contract."""

from __future__ import annotations

from pathlib import Path
from typing import Final

PMD_SUBCOMMAND: Final[str] = "check"
PMD_EXECUTABLE: Final[str] = "pmd"
PMD_WINDOWS_EXECUTABLE: Final[str] = "pmd.bat"
PMD_BIN_DIR: Final[str] = "bin"
JRE_BIN_DIR: Final[str] = "bin"

NO_PROGRESS_FLAG: Final[str] = "--no-progress"
FORMAT_FLAG: Final[str] = "-f"
JSON_FORMAT: Final[str] = "json"
CACHE_FLAG: Final[str] = "--cache"
NO_CACHE_FLAG: Final[str] = "--no-cache"
TARGET_FLAG: Final[str] = "-d"
RULESETS_FLAG: Final[str] = "-R"
CACHE_FILE_NAME: Final[str] = ".pmdCache"

WINDOWS_PLATFORM: Final[str] = "win32"
WINDOWS_CLASSPATH_DELIMITER: Final[str] = ";"
POSIX_CLASSPATH_DELIMITER: Final[str] = ":"
CLASSPATH_WILDCARD: Final[str] = "*"
CLASSPATH_ENV: Final[str] = "CLASSPATH"
PATH_ENV: Final[str] = "PATH"
PMD_HOME_ENV: Final[str] = "PMD_HOME"

# PMD exits with 4 when the analysis completed and found violations.
EXIT_OK: Final[int] = 0
EXIT_VIOLATIONS: Final[int] = 4
SUCCESS_EXIT_CODES: Final[frozenset[int]] = frozenset({EXIT_OK, EXIT_VIOLATIONS})

RULESET_LOAD_MARKER: Final[str] = "Cannot load ruleset"
BYTES_PER_MEGABYTE: Final[int] = 1024 * 1024

DIAGNOSTIC_SOURCE: Final[str] = "pmd java"
PLACEHOLDER_END_COLUMN: Final[int] = 100

DEFAULT_PRIORITY_ERROR_THRESHOLD: Final[int] = 1
DEFAULT_PRIORITY_WARN_THRESHOLD: Final[int] = 3
DEFAULT_COMMAND_BUFFER_SIZE: Final[int] = 64

PACKAGE_ROOT: Final[Path] = Path(__file__).resolve().parent
DEFAULT_RULESET: Final[Path] = PACKAGE_ROOT / "resources" / "default.xml"

CONFIG_FILE_NAME: Final[str] = ".javapmd.toml"
PYPROJECT_FILE_NAME: Final[str] = "pyproject.toml"
PYPROJECT_TOOL_KEY: Final[str] = "tool"
PYPROJECT_SECTION_KEY: Final[str] = "javapmd"

OUTPUT_LOGGER_NAME: Final[str] = "javapmd.output"
LOG_SEPARATOR: Final[str] = "###################################"
