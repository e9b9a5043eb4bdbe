from __future__ import annotations
import queue
import time
from enum import Enum
from typing import Callable, Optional

from PIL import Image

from weatherscene.console import ConsoleIO, ask
from weatherscene.core.composer import Scene, SceneComposer, format_temperature
from weatherscene.core.compositor import Compositor
from weatherscene.core.listener import Command, ListenerGate
from weatherscene.core.sample import FetchOutcome, WeatherSample
from weatherscene.owm import CityNotFound, WeatherFetcher, fetch_outcome

CITY_PROMPT = "Enter the name of a city you would like the weather for:"


class LoopState(Enum):
    IDLE = "idle"
    LISTENING = "listening"
    CITY_SWITCH_IN_FLIGHT = "city-switch-in-flight"
    TERMINATED = "terminated"


class AppLoop:
    """
    Per-frame driver. Drains at most one console command per tick without
    blocking; a city switch closes the listener gate, waits for the listener to
    let go of the console, asks for the next city, then reopens the gate.
    """

    def __init__(
        self,
        fetcher: WeatherFetcher,
        composer: SceneComposer,
        console: ConsoleIO,
        gate: ListenerGate,
        commands: "queue.SimpleQueue[Command]",
        city_attempts: int = 5,
        grace_sec: float = 0.1,
        fps: int = 4,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.fetcher = fetcher
        self.composer = composer
        self.console = console
        self.gate = gate
        self.commands = commands
        self.city_attempts = max(0, int(city_attempts))
        self.grace_sec = max(0.0, float(grace_sec))
        self.fps = max(1, int(fps))
        self._clock = clock
        self._sleep = sleep
        self.state = LoopState.IDLE
        self.outcome: Optional[FetchOutcome] = None

    @property
    def sample(self) -> Optional[WeatherSample]:
        return self.outcome.sample if self.outcome else None

    # ---------- city resolution ----------
    def resolve_city(self) -> Optional[FetchOutcome]:
        """Ask until a city resolves or attempts run out; None if the console closed."""
        attempts = 0
        while True:
            city = ask(self.console, CITY_PROMPT)
            if city is None:
                return None
            attempts += 1
            outcome = fetch_outcome(self.fetcher, city)
            if outcome.ok:
                return outcome
            if isinstance(outcome.error, CityNotFound):
                self.console.write("City not found. Please enter a valid city name.")
            else:
                self.console.write("Weather data is unavailable right now. Please try again.")
            if self.city_attempts and attempts >= self.city_attempts:
                self.console.write(f"Showing a no-data scene for {city}.")
                return outcome

    def _adopt(self, outcome: FetchOutcome) -> None:
        # Every switch discards the previous sample entirely.
        self.outcome = outcome
        s = outcome.sample
        if outcome.ok:
            self.console.write(
                f"The temperature in {s.city_name} is {format_temperature(s.temperature_c)} "
                f"degrees Celsius and the forecast is: {s.description}"
            )
        self.console.write()
        self.console.write("If you would like to exit the simulation, press 'x' and hit enter.")
        self.console.write("To see a visualization for a new city, press 'w' and hit enter.")

    # ---------- state machine ----------
    def start(self) -> bool:
        """Idle -> Listening once the first city resolves."""
        outcome = self.resolve_city()
        if outcome is None:
            self.terminate()
            return False
        self._adopt(outcome)
        self.gate.open()
        self.state = LoopState.LISTENING
        return True

    def switch_city(self) -> None:
        self.state = LoopState.CITY_SWITCH_IN_FLIGHT
        self.gate.close()
        if not self.gate.wait_idle(timeout=self.grace_sec):
            print("[listener] still holding the console; prompting anyway", flush=True)
        outcome = self.resolve_city()
        if outcome is None:
            self.terminate()
            return
        self._adopt(outcome)
        self.gate.open()
        self.state = LoopState.LISTENING

    def terminate(self) -> None:
        self.state = LoopState.TERMINATED
        self.gate.stop()

    def tick(self) -> bool:
        """Handle at most one pending command; False once terminated."""
        if self.state is LoopState.TERMINATED:
            return False
        try:
            cmd = self.commands.get_nowait()
        except queue.Empty:
            return True
        if cmd is Command.EXIT:
            self.console.write()
            self.console.write("I hope you enjoyed your weather visualization. Goodbye!")
            self.terminate()
        elif cmd is Command.SWITCH_CITY:
            self.switch_city()
        return self.state is not LoopState.TERMINATED

    # ---------- frames ----------
    def scene(self) -> Scene:
        if self.sample is None:
            raise RuntimeError("no city resolved yet; call start() first")
        return self.composer.compose_scene(self.sample)

    def run_forever(
        self,
        compositor: Compositor,
        on_present: Callable[[Image.Image], None],
        should_stop: Callable[[], bool] | None = None,
    ) -> None:
        interval = 1.0 / self.fps
        next_frame = self._clock()
        while self.tick():
            if should_stop and should_stop():
                break
            compositor.compose(self.scene().ops)
            on_present(compositor.present())

            next_frame += interval
            delay = next_frame - self._clock()
            if delay > 0:
                self._sleep(delay)
            else:
                next_frame = self._clock()
