# src/makibot/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the presentation layer.

Console input is read through an InputSource passed in explicitly, so the
console loop and the startup prompts can run against scripted input in tests.
"""

import sys
from collections.abc import Iterable
from typing import Protocol, TextIO


class InputSource(Protocol):
    """Line-oriented input. `read_line` returns None at end of input."""

    def read_line(self, prompt: str = "") -> str | None: ...


class StdinInput:
    """InputSource backed by the interactive terminal (built-in `input`)."""

    def read_line(self, prompt: str = "") -> str | None:
        try:
            return input(prompt)
        except EOFError:
            return None


class StreamInput:
    """InputSource over any text stream or iterable of lines (pipes, files)."""

    def __init__(self, lines: TextIO | Iterable[str] | None = None) -> None:
        self._it = iter(lines if lines is not None else sys.stdin)

    def read_line(self, prompt: str = "") -> str | None:
        try:
            line = next(self._it)
        except StopIteration:
            return None
        return line.rstrip("\r\n")
