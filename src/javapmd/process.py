# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Run PMD as a subprocess with streamed output and cooperative cancellation."""

from __future__ import annotations

import codecs
import os
import signal
import subprocess  # nosec B404 - argument vectors only, never ``shell=True``
from collections.abc import Callable, Mapping, Sequence
from contextlib import suppress
from dataclasses import dataclass, field
from threading import Lock, Thread
from typing import IO, Final

from .constants import BYTES_PER_MEGABYTE, RULESET_LOAD_MARKER, SUCCESS_EXIT_CODES
from .errors import (
    AnalysisCancelledError,
    OutputLimitExceededError,
    ProcessExitError,
    ProcessSpawnError,
    RulesetLoadError,
)
from .interfaces import CancellationToken, OutputChannel

_READ_CHUNK_SIZE: Final[int] = 64 * 1024
_POSIX: Final[bool] = os.name == "posix"

PopenFactory = Callable[..., subprocess.Popen[bytes]]


@dataclass(slots=True)
class _StreamBuffer:
    """Accumulated text for one output stream."""

    label: str
    chunks: list[str] = field(default_factory=list)
    size: int = 0

    @property
    def text(self) -> str:
        return "".join(self.chunks)


@dataclass(slots=True)
class _ProcessState:
    """Bookkeeping shared between the waiting thread and the reader threads."""

    process: subprocess.Popen[bytes]
    limit: int
    cancelled: bool = False
    overflowed: str | None = None
    lock: Lock = field(default_factory=Lock)

    def terminate(self) -> None:
        """Kill the process (and its process group on POSIX)."""
        if self.process.poll() is not None:
            return
        if _POSIX:
            with suppress(ProcessLookupError, PermissionError):
                os.killpg(self.process.pid, signal.SIGKILL)
                return
        with suppress(ProcessLookupError, OSError):
            self.process.kill()

    def cancel(self) -> None:
        with self.lock:
            self.cancelled = True
        self.terminate()

    def overflow(self, label: str) -> None:
        with self.lock:
            if self.overflowed is None:
                self.overflowed = label
        self.terminate()


def buffer_limit_bytes(buffer_size_mb: int) -> int:
    """Return the byte limit for ``buffer_size_mb`` (at least one megabyte)."""
    return max(buffer_size_mb, 1) * BYTES_PER_MEGABYTE


class ProcessRunner:
    """Execute one PMD process per call and return its standard output.

    Output from both streams is copied to the output channel as it arrives,
    prefixed with ``stdout:``/``stderr:``. Exit codes 0 and 4 are treated as
    success; 4 is PMD's "violations found" status.
    """

    def __init__(self, output: OutputChannel, *, popen: PopenFactory = subprocess.Popen) -> None:
        self._output = output
        self._popen = popen

    def execute(
        self,
        args: Sequence[str],
        env: Mapping[str, str] | None = None,
        buffer_size_mb: int = 1,
        token: CancellationToken | None = None,
    ) -> str:
        """Run ``args`` to completion and return the captured stdout.

        Args:
            args: Argument vector; the first element is the executable.
            env: Variables merged over the ambient process environment.
            buffer_size_mb: Maximum output per stream, in megabytes (floor 1).
            token: Optional cancellation token; cancelling kills the process.

        Returns:
            str: Standard output. When the exit code signals failure but some
            stdout was produced, that partial output is still returned.

        Raises:
            ProcessSpawnError: If the executable could not be started.
            AnalysisCancelledError: If cancellation was requested before exit.
            OutputLimitExceededError: If a stream exceeded the buffer limit.
            RulesetLoadError: If PMD reported that a ruleset could not be loaded.
            ProcessExitError: If PMD failed without producing any stdout.
        """

        command = list(args)
        merged_env = {**os.environ, **(env or {})}
        try:
            process = self._popen(
                command,
                env=merged_env,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                start_new_session=_POSIX,
            )
        except OSError as exc:
            self._output.append_line(f"error:{exc}")
            raise ProcessSpawnError(command, exc) from exc

        state = _ProcessState(process=process, limit=buffer_limit_bytes(buffer_size_mb))
        stdout = _StreamBuffer("stdout")
        stderr = _StreamBuffer("stderr")
        unregister = token.on_cancellation_requested(state.cancel) if token is not None else None
        readers = [
            Thread(target=self._pump, args=(process.stdout, stdout, state), daemon=True),
            Thread(target=self._pump, args=(process.stderr, stderr, state), daemon=True),
        ]
        try:
            for reader in readers:
                reader.start()
            returncode = process.wait()
            for reader in readers:
                reader.join()
        finally:
            if unregister is not None:
                unregister()

        if state.cancelled or (token is not None and token.is_cancellation_requested):
            self._output.append_line("PMD process cancelled")
            raise AnalysisCancelledError("PMD analysis was cancelled")
        if state.overflowed is not None:
            message = f"PMD Command Failed!  Output on {state.overflowed} exceeded the configured buffer size."
            self._output.append_line(message)
            raise OutputLimitExceededError(message, returncode=returncode, stdout=stdout.text, stderr=stderr.text)
        return self._resolve(returncode, stdout.text, stderr.text)

    def _resolve(self, returncode: int, stdout: str, stderr: str) -> str:
        if returncode in SUCCESS_EXIT_CODES:
            return stdout
        self._output.append_line(f"Failed Exit Code: {returncode}")
        if RULESET_LOAD_MARKER in stderr:
            raise RulesetLoadError(
                "PMD Command Failed!  There is a problem with the ruleset. Check the plugin output for details.",
                returncode=returncode,
                stdout=stdout,
                stderr=stderr,
            )
        if not stdout:
            raise ProcessExitError(
                "PMD Command Failed!  Check the plugin output for details.",
                returncode=returncode,
                stdout=stdout,
                stderr=stderr,
            )
        return stdout

    def _pump(self, stream: IO[bytes] | None, buffer: _StreamBuffer, state: _ProcessState) -> None:
        """Copy ``stream`` into ``buffer`` and the output channel until EOF."""
        if stream is None:
            return
        decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        read = getattr(stream, "read1", stream.read)
        with stream:
            while chunk := read(_READ_CHUNK_SIZE):
                text = decoder.decode(chunk)
                if text:
                    self._output.append(f"{buffer.label}:{text}")
                if state.overflowed is not None:
                    continue
                buffer.size += len(chunk)
                if buffer.size > state.limit:
                    state.overflow(buffer.label)
                    continue
                buffer.chunks.append(text)
            tail = decoder.decode(b"", final=True)
            if tail and state.overflowed is None:
                buffer.chunks.append(tail)


__all__ = ["ProcessRunner", "buffer_limit_bytes"]
