# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for the PMD process runner."""

from __future__ import annotations

import sys
import time
from pathlib import Path
from threading import Timer

import pytest

from javapmd.cancellation import CancellationTokenSource
from javapmd.constants import BYTES_PER_MEGABYTE
from javapmd.errors import (
    AnalysisCancelledError,
    OutputLimitExceededError,
    ProcessExitError,
    ProcessSpawnError,
    RulesetLoadError,
)
from javapmd.output import BufferOutputChannel
from javapmd.process import ProcessRunner, buffer_limit_bytes


def _script(body: str) -> list[str]:
    return [sys.executable, "-c", body]


def test_success_returns_stdout_and_echoes_streams() -> None:
    output = BufferOutputChannel()
    runner = ProcessRunner(output)

    result = runner.execute(_script("import sys; print('hello'); print('warn', file=sys.stderr)"))

    assert result.strip() == "hello"
    assert "stdout:hello" in output.text
    assert "stderr:warn" in output.text


def test_violation_exit_code_counts_as_success() -> None:
    runner = ProcessRunner(BufferOutputChannel())

    result = runner.execute(_script("import sys; sys.stdout.write('{}'); sys.exit(4)"))

    assert result == "{}"


def test_failure_with_stdout_returns_partial_output() -> None:
    output = BufferOutputChannel()
    runner = ProcessRunner(output)

    result = runner.execute(_script("import sys; sys.stdout.write('partial'); sys.exit(1)"))

    assert result == "partial"
    assert output.text.endswith("Failed Exit Code: 1\n")


def test_ruleset_problem_is_reported_specifically() -> None:
    runner = ProcessRunner(BufferOutputChannel())
    body = "import sys; sys.stdout.write('x'); sys.stderr.write('Cannot load ruleset foo.xml'); sys.exit(1)"

    with pytest.raises(RulesetLoadError) as excinfo:
        runner.execute(_script(body))

    assert "problem with the ruleset" in str(excinfo.value)
    assert excinfo.value.returncode == 1


def test_failure_without_stdout_raises_generic_error() -> None:
    output = BufferOutputChannel()
    runner = ProcessRunner(output)

    with pytest.raises(ProcessExitError) as excinfo:
        runner.execute(_script("import sys; sys.stderr.write('boom'); sys.exit(2)"))

    assert not isinstance(excinfo.value, RulesetLoadError)
    assert excinfo.value.returncode == 2
    assert excinfo.value.stderr == "boom"
    assert output.text.endswith("Failed Exit Code: 2\n")


def test_missing_executable_raises_spawn_error(tmp_path: Path) -> None:
    output = BufferOutputChannel()
    runner = ProcessRunner(output)
    missing = tmp_path / "no-such-pmd"

    with pytest.raises(ProcessSpawnError) as excinfo:
        runner.execute([str(missing), "check"])

    assert excinfo.value.command == (str(missing), "check")
    assert output.lines[0].startswith("error:")


def test_environment_overlay_reaches_child() -> None:
    runner = ProcessRunner(BufferOutputChannel())

    result = runner.execute(
        _script("import os, sys; sys.stdout.write(os.environ['JAVAPMD_PROBE'])"),
        env={"JAVAPMD_PROBE": "classpath-value"},
    )

    assert result == "classpath-value"


def test_cancellation_kills_running_process() -> None:
    output = BufferOutputChannel()
    runner = ProcessRunner(output)
    source = CancellationTokenSource()
    timer = Timer(0.2, source.cancel)
    timer.start()
    started = time.monotonic()

    try:
        with pytest.raises(AnalysisCancelledError):
            runner.execute(_script("import time; time.sleep(30)"), token=source.token)
    finally:
        timer.cancel()

    assert time.monotonic() - started < 15
    assert "PMD process cancelled" in output.lines


def test_already_cancelled_token_raises() -> None:
    source = CancellationTokenSource()
    source.cancel()
    runner = ProcessRunner(BufferOutputChannel())

    with pytest.raises(AnalysisCancelledError):
        runner.execute(_script("import time; time.sleep(30)"), token=source.token)


def test_output_beyond_buffer_limit_fails() -> None:
    runner = ProcessRunner(BufferOutputChannel())
    body = "import sys; sys.stdout.write('x' * (3 * 1024 * 1024)); sys.stdout.flush()"

    with pytest.raises(OutputLimitExceededError) as excinfo:
        runner.execute(_script(body), buffer_size_mb=1)

    assert "stdout" in str(excinfo.value)


def test_buffer_limit_has_one_megabyte_floor() -> None:
    assert buffer_limit_bytes(0) == BYTES_PER_MEGABYTE
    assert buffer_limit_bytes(-5) == BYTES_PER_MEGABYTE
    assert buffer_limit_bytes(64) == 64 * BYTES_PER_MEGABYTE
