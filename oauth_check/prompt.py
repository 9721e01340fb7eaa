"""Input providers for the single interactive read."""

import logging
import sys
from typing import Iterable, Protocol, TextIO

logger = logging.getLogger(__name__)


class InputProvider(Protocol):
    """Supplies the next line of operator text."""

    def read_line(self, prompt: str) -> str: ...

    def close(self) -> None: ...


class ConsoleInput:
    """Reads from a text stream (stdin by default); blocks with no timeout."""

    def __init__(self, stream: TextIO | None = None, echo: TextIO | None = None):
        self.stream = stream or sys.stdin
        self.echo = echo or sys.stdout
        self.closed = False

    def read_line(self, prompt: str) -> str:
        if self.closed:
            raise ValueError("Input provider is closed")
        self.echo.write(prompt)
        self.echo.flush()
        line = self.stream.readline()
        if not line:
            logger.debug("End of input reached before a line was read")
        return line.rstrip("\r\n")

    def close(self) -> None:
        if self.closed:
            return
        self.closed = True
        # Leave the process-wide stdin open for whoever owns it
        if self.stream is not sys.stdin:
            self.stream.close()
        logger.debug("Console input closed")


class ScriptedInput:
    """Replays prepared lines; returns an empty string once they run out."""

    def __init__(self, lines: Iterable[str]):
        self._lines = list(lines)
        self.prompts: list[str] = []
        self.closed = False

    def read_line(self, prompt: str) -> str:
        if self.closed:
            raise ValueError("Input provider is closed")
        self.prompts.append(prompt)
        return self._lines.pop(0) if self._lines else ""

    def close(self) -> None:
        self.closed = True
