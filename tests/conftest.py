# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

import json
import os
import shlex
import stat
import sys
from collections.abc import Callable
from pathlib import Path

import pytest

from javapmd.config import Config


class RecordingNotifier:
    """Notifier double capturing every error message."""

    def __init__(self) -> None:
        self.errors: list[str] = []

    def show_error(self, message: str) -> None:
        self.errors.append(message)


class RecordingProgress:
    """Progress double capturing reported messages and increments."""

    def __init__(self) -> None:
        self.messages: list[str] = []
        self.increments: list[float] = []

    def report(self, *, message: str | None = None, increment: float | None = None) -> None:
        if message is not None:
            self.messages.append(message)
        if increment is not None:
            self.increments.append(increment)


def make_report(files: dict[str, list[dict[str, object]]]) -> str:
    """Return a PMD JSON report containing ``files``."""
    return json.dumps(
        {
            "formatVersion": 0,
            "pmdVersion": "7.0.0",
            "timestamp": "2025-01-01T00:00:00.000+00:00",
            "files": [{"filename": name, "violations": violations} for name, violations in files.items()],
        },
    )


def make_violation(line: int, *, priority: int = 3, rule: str = "AvoidX", ruleset: str = "Best Practices") -> dict:
    return {
        "beginline": line,
        "begincolumn": 1,
        "endline": line,
        "endcolumn": 5,
        "description": f"Avoid {rule}",
        "rule": rule,
        "ruleset": ruleset,
        "priority": priority,
        "externalInfoUrl": f"https://pmd.github.io/rules#{rule.lower()}",
    }


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def progress() -> RecordingProgress:
    return RecordingProgress()


@pytest.fixture
def ruleset(tmp_path: Path) -> Path:
    """Return an existing (empty) ruleset file."""
    path = tmp_path / "rulesets" / "custom.xml"
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("<ruleset/>\n", encoding="utf-8")
    return path


@pytest.fixture
def pmd_home(tmp_path: Path) -> Path:
    """Return an (empty) PMD install directory."""
    home = tmp_path / "pmd"
    (home / "bin").mkdir(parents=True)
    return home


@pytest.fixture
def config(tmp_path: Path, pmd_home: Path, ruleset: Path) -> Config:
    return Config(
        workspace_root_path=tmp_path,
        pmd_bin_path=pmd_home,
        rulesets=(ruleset,),
        priority_error_threshold=2,
        priority_warn_threshold=4,
    )


FakePmdFactory = Callable[..., Path]


@pytest.fixture
def fake_pmd(pmd_home: Path) -> FakePmdFactory:
    """Install a ``bin/pmd`` launcher that replays canned output.

    The launcher records its arguments and CLASSPATH in ``invocation.json``
    next to itself.
    """

    if os.name != "posix":
        pytest.skip("fake PMD launcher requires a POSIX shell")

    def _install(stdout: str = "", stderr: str = "", exit_code: int = 0, sleep: float = 0.0) -> Path:
        script = pmd_home / "fake_pmd.py"
        script.write_text(
            "\n".join(
                [
                    "import json, os, sys, time",
                    "from pathlib import Path",
                    "record = {'argv': sys.argv[1:], 'classpath': os.environ.get('CLASSPATH')}",
                    "(Path(__file__).parent / 'invocation.json').write_text(json.dumps(record))",
                    f"sys.stdout.write({stdout!r})",
                    "sys.stdout.flush()",
                    f"sys.stderr.write({stderr!r})",
                    "sys.stderr.flush()",
                    f"time.sleep({sleep!r})",
                    f"sys.exit({exit_code!r})",
                ],
            )
            + "\n",
            encoding="utf-8",
        )
        launcher = pmd_home / "bin" / "pmd"
        launcher.write_text(
            f'#!/bin/sh\nexec {shlex.quote(sys.executable)} {shlex.quote(str(script))} "$@"\n',
            encoding="utf-8",
        )
        launcher.chmod(launcher.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        return pmd_home / "invocation.json"

    return _install
