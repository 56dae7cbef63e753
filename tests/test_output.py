# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for output channel implementations."""

from __future__ import annotations

import logging

import pytest

from javapmd.output import BufferOutputChannel, LoggerOutputChannel


def test_logger_channel_emits_complete_lines(caplog: pytest.LogCaptureFixture) -> None:
    logger = logging.getLogger("javapmd.test.output")
    channel = LoggerOutputChannel(logger)

    with caplog.at_level(logging.DEBUG, logger=logger.name):
        channel.append("stdout:first ")
        channel.append("half\nsecond")
        channel.append_line(" line")
        channel.append("tail")
        channel.flush()

    assert [record.getMessage() for record in caplog.records] == ["stdout:first half", "second line", "tail"]


def test_show_hints_when_debug_is_disabled(caplog: pytest.LogCaptureFixture) -> None:
    logger = logging.getLogger("javapmd.test.show")
    channel = LoggerOutputChannel(logger)

    with caplog.at_level(logging.INFO, logger=logger.name):
        channel.append("pending")
        channel.show(True)

    assert channel.shown is True
    assert [record.levelno for record in caplog.records] == [logging.INFO]
    assert "--verbose" in caplog.records[0].getMessage()


def test_buffer_channel_collects_text() -> None:
    channel = BufferOutputChannel()
    channel.append("a")
    channel.append_line("b")
    channel.append_line("c")

    assert channel.text == "ab\nc\n"
    assert channel.lines == ["ab", "c"]
    assert channel.shown is False
