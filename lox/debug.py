"""Verbosity-levelled trace output.

Tracing is off by default. With ``-v`` (repeatable up to ``-vvvv``) the CLI
creates a ``DebugLog`` that appends trace lines to ``debug.txt`` in the
current directory. Higher levels include everything from lower ones:

1. phase summaries (token and statement counts, run outcome)
2. variable definitions and assignments
3. branch and loop decisions, block entry and exit
4. every print and every evaluated expression
"""

from __future__ import annotations

from typing import Optional, TextIO

DEFAULT_DEBUG_FILE = 'debug.txt'


class DebugLog:
    def __init__(self, level: int = 0, path: str = DEFAULT_DEBUG_FILE):
        self.level = level
        self.path = path
        self._fp: Optional[TextIO] = None
        self._started = False

    def enabled(self, level: int) -> bool:
        return 0 < level <= self.level

    def log(self, level: int, msg: str) -> None:
        if not self.enabled(level):
            return
        if self._fp is None:
            # truncate on first use only, so a reopened log keeps earlier runs
            self._fp = open(self.path, 'a' if self._started else 'w', encoding='utf-8')
            self._started = True
        self._fp.write(msg + '\n')
        self._fp.flush()

    def close(self) -> None:
        if self._fp is not None:
            self._fp.close()
            self._fp = None
