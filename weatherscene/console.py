from __future__ import annotations
import sys
from typing import Protocol, TextIO


class ConsoleIO(Protocol):
    def read_line(self) -> str:
        """Block for one line of raw text; "" means the input is closed."""
        ...

    def write(self, text: str = "") -> None:
        ...


class StdConsole:
    def __init__(self, stdin: TextIO | None = None, stdout: TextIO | None = None):
        self.stdin = stdin or sys.stdin
        self.stdout = stdout or sys.stdout

    def read_line(self) -> str:
        return self.stdin.readline()

    def write(self, text: str = "") -> None:
        print(text, file=self.stdout, flush=True)


def ask(console: ConsoleIO, prompt: str) -> str | None:
    """Prompt and read one trimmed answer; None once input is exhausted."""
    console.write(prompt)
    try:
        line = console.read_line()
    except (OSError, ValueError) as e:
        # Undecodable bytes or a closed stream: treat like end of input
        print(f"[console] read failed: {e!r}", flush=True)
        return None
    if line == "":
        return None
    return line.strip()
