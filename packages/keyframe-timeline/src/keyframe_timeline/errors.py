# SPDX-License-Identifier: MIT
"""Exceptions raised by the keyframe timeline."""

from __future__ import annotations


class TimelineError(Exception):
    """Base class for timeline errors."""


class PreconditionViolation(TimelineError):
    """A checked timeline primitive was called in a state it does not allow."""


class DecodeError(TimelineError, ValueError):
    """A persisted keyframe line could not be decoded."""

    def __init__(self, message: str, *, line: str, line_number: int | None = None):
        self.line = line
        self.line_number = line_number
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(f"{message}: {line!r}")
