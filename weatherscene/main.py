from __future__ import annotations
import queue
import sys
from typing import Optional

from dotenv import load_dotenv

from weatherscene.config import ConfigurationError, load_config
from weatherscene.console import ConsoleIO, StdConsole, ask
from weatherscene.core.app_loop import AppLoop
from weatherscene.core.composer import SceneComposer
from weatherscene.core.compositor import Compositor
from weatherscene.core.listener import Command, InputListener, ListenerGate
from weatherscene.data.cities import CityImageResolver, supported_city_names
from weatherscene.output.frame_file import FrameFileSink
from weatherscene.owm import OpenWeatherClient


def welcome(console: ConsoleIO) -> None:
    cities = ", ".join(supported_city_names())
    console.write()
    console.write("****** Welcome to the Weather Scene Visualizer! ******")
    console.write("This application provides real time visualization of the weather in a city of your choice.")
    console.write("The scene shows the weather conditions in the city and is tinted by its temperature.")
    console.write(f"For a special visualization effect, choose a city from the following list: {cities}.")
    console.write()


def confirm_start(console: ConsoleIO) -> bool:
    answer = ask(console, "Would you like to begin? (y/n):")
    while answer is not None and answer.lower() not in ("y", "n"):
        answer = ask(console, "Invalid input. Please enter 'y' to start or 'n' to exit: ")
    return answer is not None and answer.lower() == "y"


def main(argv: Optional[list[str]] = None) -> int:
    load_dotenv()
    try:
        cfg = load_config(argv)
    except ConfigurationError as e:
        print(f"[config] {e}", file=sys.stderr, flush=True)
        return 2

    console = StdConsole()
    welcome(console)
    if not confirm_start(console):
        console.write("Goodbye!")
        return 0

    gate = ListenerGate()
    commands: "queue.SimpleQueue[Command]" = queue.SimpleQueue()
    listener = InputListener(console, gate, commands, poll_interval=cfg.listener_poll_sec)

    composer = SceneComposer(
        width=cfg.width,
        height=cfg.height,
        resolver=CityImageResolver(cfg.assets_dir),
    )
    client = OpenWeatherClient(
        api_key=cfg.api_key,
        user_agent=cfg.user_agent,
        timeout=cfg.request_timeout,
    )
    app = AppLoop(
        fetcher=client,
        composer=composer,
        console=console,
        gate=gate,
        commands=commands,
        city_attempts=cfg.city_attempts,
        grace_sec=cfg.listener_grace_sec,
        fps=cfg.fps,
    )
    comp = Compositor(w=cfg.width, h=cfg.height)
    sink = FrameFileSink(cfg.out_path)

    def on_present(image):
        try:
            sink.send(image)
        except OSError as e:
            print(f"[output] write failed: {e!r}", flush=True)

    # Listener starts parked; the gate opens once the first city resolves.
    listener.start()
    try:
        if app.start():
            console.write(f"Rendering frames to {sink.path}")
            app.run_forever(compositor=comp, on_present=on_present)
    except KeyboardInterrupt:
        pass
    finally:
        app.terminate()
        listener.stop(timeout=0.2)
    return 0


if __name__ == "__main__":
    sys.exit(main())
