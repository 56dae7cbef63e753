# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Configuration model for PMD analysis runs."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .constants import (
    CACHE_FILE_NAME,
    DEFAULT_COMMAND_BUFFER_SIZE,
    DEFAULT_PRIORITY_ERROR_THRESHOLD,
    DEFAULT_PRIORITY_WARN_THRESHOLD,
    DEFAULT_RULESET,
    PMD_HOME_ENV,
)


def default_pmd_bin_path() -> Path | None:
    """Return the PMD install directory advertised by ``PMD_HOME`` (if any)."""
    value = os.environ.get(PMD_HOME_ENV, "").strip()
    return Path(value) if value else None


class Config(BaseModel):
    """Immutable settings describing how PMD is invoked and how results are graded.

    Instances are replaced wholesale when settings change; use
    :meth:`with_updates` to derive a modified copy.
    """

    model_config = ConfigDict(frozen=True)

    workspace_root_path: Path = Field(default_factory=Path.cwd)
    pmd_bin_path: Path | None = Field(default_factory=default_pmd_bin_path)
    jre_path: Path | None = None
    rulesets: tuple[Path, ...] = (DEFAULT_RULESET,)
    additional_class_paths: tuple[str, ...] = ()
    enable_cache: bool = True
    priority_error_threshold: int = Field(default=DEFAULT_PRIORITY_ERROR_THRESHOLD, ge=0)
    priority_warn_threshold: int = Field(default=DEFAULT_PRIORITY_WARN_THRESHOLD, ge=0)
    command_buffer_size: int = DEFAULT_COMMAND_BUFFER_SIZE

    @field_validator("pmd_bin_path", "jre_path", mode="before")
    @classmethod
    def _blank_path_is_unset(cls, value: object) -> object:
        """Treat empty strings from settings files as an unset path."""
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("rulesets", mode="before")
    @classmethod
    def _coerce_rulesets(cls, value: object) -> object:
        """Accept a single ruleset path as shorthand for a one-element list."""
        if isinstance(value, (str, Path)):
            return (value,)
        return value

    @field_validator("additional_class_paths", mode="before")
    @classmethod
    def _coerce_class_paths(cls, value: object) -> object:
        if isinstance(value, (str, Path)):
            return (str(value),)
        if isinstance(value, (list, tuple)):
            return tuple(str(item) for item in value)
        return value

    @property
    def cache_path(self) -> Path:
        """Return the location of PMD's incremental analysis cache."""
        return self.workspace_root_path / CACHE_FILE_NAME

    def with_updates(self, **changes: Any) -> Config:
        """Return a validated copy of the configuration with ``changes`` applied."""
        payload = self.model_dump()
        payload.update(changes)
        return Config.model_validate(payload)


__all__ = ["Config", "default_pmd_bin_path"]
