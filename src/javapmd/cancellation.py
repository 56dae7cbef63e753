# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Thread-safe cooperative cancellation tokens."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from threading import Lock


@dataclass(slots=True)
class CancellationTokenState:
    """Shared state behind a :class:`CancellationToken`."""

    cancelled: bool = False
    callbacks: list[Callable[[], None]] = field(default_factory=list)
    lock: Lock = field(default_factory=Lock)


class CancellationToken:
    """Read-only view of a cancellation request.

    Callbacks registered after cancellation run immediately on the
    registering thread; callbacks registered before run once on the thread
    that calls :meth:`CancellationTokenSource.cancel`.
    """

    __slots__ = ("_state",)

    def __init__(self, state: CancellationTokenState) -> None:
        self._state = state

    @property
    def is_cancellation_requested(self) -> bool:
        """Return ``True`` once cancellation has been requested."""
        return self._state.cancelled

    def on_cancellation_requested(self, callback: Callable[[], None]) -> Callable[[], None]:
        """Register ``callback`` to run when cancellation is requested.

        Args:
            callback: Zero-argument callable invoked once.

        Returns:
            Callable[[], None]: Function removing ``callback`` again.
        """

        with self._state.lock:
            if not self._state.cancelled:
                self._state.callbacks.append(callback)
                return _Unregister(self._state, callback)
        callback()
        return _noop


@dataclass(slots=True)
class _Unregister:
    state: CancellationTokenState
    callback: Callable[[], None]

    def __call__(self) -> None:
        with self.state.lock:
            if self.callback in self.state.callbacks:
                self.state.callbacks.remove(self.callback)


def _noop() -> None:
    return None


class CancellationTokenSource:
    """Owner side of a cancellation token."""

    def __init__(self) -> None:
        self._state = CancellationTokenState()
        self.token = CancellationToken(self._state)

    def cancel(self) -> None:
        """Request cancellation and fire registered callbacks exactly once."""
        with self._state.lock:
            if self._state.cancelled:
                return
            self._state.cancelled = True
            callbacks = list(self._state.callbacks)
            self._state.callbacks.clear()
        for callback in callbacks:
            callback()


__all__ = ["CancellationToken", "CancellationTokenSource"]
