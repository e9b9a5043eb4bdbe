from __future__ import annotations
import queue
import threading
from enum import Enum
from typing import Optional

from weatherscene.console import ConsoleIO


class Command(Enum):
    SWITCH_CITY = "w"
    EXIT = "x"


def parse_command(raw: str | None) -> Optional[Command]:
    """Normalize one console line; unknown input is ignored (None)."""
    text = (raw or "").strip().lower()
    for cmd in Command:
        if text == cmd.value:
            return cmd
    return None


class ListenerGate:
    """
    Open/closed gate in front of the listener's blocking read.

    The listener claims a read slot with acquire_read() and gives it back with
    release_read(); the app loop closes the gate and then wait_idle()s until no
    read is in flight before it uses the console itself.
    """

    def __init__(self):
        self._cond = threading.Condition()
        self._open = False
        self._reading = False
        self._stopped = False

    def open(self) -> None:
        with self._cond:
            if self._stopped:
                return
            self._open = True
            self._cond.notify_all()

    def close(self) -> None:
        with self._cond:
            self._open = False
            self._cond.notify_all()

    def stop(self) -> None:
        with self._cond:
            self._stopped = True
            self._open = False
            self._cond.notify_all()

    @property
    def is_open(self) -> bool:
        with self._cond:
            return self._open

    @property
    def is_reading(self) -> bool:
        with self._cond:
            return self._reading

    @property
    def stopped(self) -> bool:
        with self._cond:
            return self._stopped

    def acquire_read(self, timeout: float | None = None) -> bool:
        """Wait for the gate to open; True means the caller may read once."""
        with self._cond:
            self._cond.wait_for(lambda: self._open or self._stopped, timeout=timeout)
            if not self._open or self._stopped:
                return False
            self._reading = True
            return True

    def release_read(self, close: bool = False) -> None:
        with self._cond:
            if close:
                self._open = False
            self._reading = False
            self._cond.notify_all()

    def wait_idle(self, timeout: float | None = None) -> bool:
        with self._cond:
            return self._cond.wait_for(lambda: not self._reading, timeout=timeout)


class InputListener:
    """Background console reader; forwards recognized commands to the app loop."""

    def __init__(
        self,
        console: ConsoleIO,
        gate: ListenerGate,
        commands: "queue.SimpleQueue[Command]",
        poll_interval: float = 0.1,
    ):
        self.console = console
        self.gate = gate
        self.commands = commands
        self.poll_interval = max(0.001, float(poll_interval))
        self._t: threading.Thread | None = None

    def start(self) -> None:
        self._t = threading.Thread(target=self.run, name="input-listener", daemon=True)
        self._t.start()

    def stop(self, timeout: float = 1.0) -> None:
        # A thread blocked in read_line() cannot be interrupted; it is a daemon and is abandoned.
        self.gate.stop()
        if self._t and self._t is not threading.current_thread():
            self._t.join(timeout=timeout)

    def is_alive(self) -> bool:
        return bool(self._t and self._t.is_alive())

    def run(self) -> None:
        while not self.gate.stopped:
            if not self.gate.acquire_read(timeout=self.poll_interval):
                continue
            try:
                line = self.console.read_line()
            except (OSError, ValueError) as e:
                self.gate.release_read()
                print(f"[listener] console read failed: {e!r}", flush=True)
                return
            if line == "":
                self.gate.release_read()
                print("[listener] console closed; no further commands", flush=True)
                return
            cmd = parse_command(line)
            if cmd is not None:
                self.commands.put(cmd)
            # Park on a city switch until the app loop reopens the gate.
            self.gate.release_read(close=cmd is Command.SWITCH_CITY)
            if cmd is Command.EXIT:
                return
