# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for CLI console helpers."""

from __future__ import annotations

import io
import logging

from rich.console import Console

from javapmd.cli.shared import CLILogger, ConsoleNotifier, configure_output_logging
from javapmd.constants import OUTPUT_LOGGER_NAME


def _logger(*, emoji: bool, debug: bool = False) -> tuple[CLILogger, io.StringIO]:
    buffer = io.StringIO()
    console = Console(file=buffer, no_color=True, highlight=False, soft_wrap=True)
    return CLILogger(console=console, use_emoji=emoji, use_color=False, debug_enabled=debug), buffer


def test_messages_print_through_the_logger_console() -> None:
    logger, buffer = _logger(emoji=False)

    logger.ok("done")
    logger.fail("broken")
    logger.debug("hidden")
    logger.section("Rulesets")

    assert buffer.getvalue().splitlines() == ["done", "broken", "", "--- Rulesets ---"]


def test_emoji_prefix_and_debug_output() -> None:
    logger, buffer = _logger(emoji=True, debug=True)

    logger.ok("done")
    logger.debug("details")

    assert buffer.getvalue().splitlines() == ["✅ done", "[debug] details"]


def test_notifier_prints_failures() -> None:
    logger, buffer = _logger(emoji=False)

    ConsoleNotifier(logger).show_error("Static Analysis Failed.")

    assert buffer.getvalue() == "Static Analysis Failed.\n"


def test_output_logging_keeps_a_single_handler() -> None:
    logger = logging.getLogger(OUTPUT_LOGGER_NAME)

    configure_output_logging(verbose=False)
    configure_output_logging(verbose=True)

    assert len(logger.handlers) == 1
    assert logger.level == logging.DEBUG
    assert logger.propagate is False
