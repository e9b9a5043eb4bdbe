from __future__ import annotations
import argparse
import os
from dataclasses import dataclass
from typing import Mapping

API_KEY_ENV_VARS = ("API_KEY", "OPENWEATHER_API_KEY")


class ConfigurationError(Exception):
    """Fatal startup problem (missing credential, invalid option)."""


@dataclass
class Config:
    # Credentials
    api_key: str

    # Output surface
    width: int
    height: int
    fps: int
    out_path: str

    # Assets
    assets_dir: str | None

    # City prompt / listener
    city_attempts: int
    listener_grace_sec: float
    listener_poll_sec: float

    # HTTP
    request_timeout: float
    user_agent: str


def _parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser("weatherscene")

    cred = p.add_argument_group("Credentials")
    cred.add_argument("--api-key", type=str, default=None,
                      help="OpenWeatherMap API key (defaults to $API_KEY or $OPENWEATHER_API_KEY)")

    out = p.add_argument_group("Output")
    out.add_argument("--w", "--width", dest="width", type=int, default=1024)
    out.add_argument("--h", "--height", dest="height", type=int, default=512)
    out.add_argument("--fps", type=int, default=4, help="Frames rendered per second")
    out.add_argument("--out", dest="out_path", type=str, default="weather_scene.png",
                     help="Image file rewritten with every presented frame")
    out.add_argument("--assets-dir", type=str, default=None,
                     help="Folder with city reference images (defaults to assets/cities)")

    loop = p.add_argument_group("City prompt & console")
    loop.add_argument("--city-attempts", type=int, default=5,
                      help="City prompts before falling back to a no-data scene (0 = keep asking)")
    loop.add_argument("--listener-grace-sec", type=float, default=0.1,
                      help="Max wait for the console listener to release the input")
    loop.add_argument("--listener-poll-sec", type=float, default=0.1)

    net = p.add_argument_group("Network")
    net.add_argument("--request-timeout", type=float, default=15.0)
    net.add_argument("--user-agent", type=str, default="WeatherScene/0.1 (+contact)")
    return p


def load_config(argv: list[str] | None = None, environ: Mapping[str, str] | None = None) -> Config:
    args = _parser().parse_args(argv)
    env = os.environ if environ is None else environ

    api_key = args.api_key
    if not api_key:
        for name in API_KEY_ENV_VARS:
            if env.get(name):
                api_key = env[name]
                break
    if not api_key:
        raise ConfigurationError(
            "API_KEY must be set (use --api-key, the environment, or a .env file)"
        )

    for name in ("width", "height", "fps"):
        if getattr(args, name) <= 0:
            raise ConfigurationError(f"--{name} must be positive")
    if args.city_attempts < 0:
        raise ConfigurationError("--city-attempts must be >= 0")
    if args.request_timeout <= 0:
        raise ConfigurationError("--request-timeout must be positive")

    return Config(
        api_key=api_key,
        width=args.width,
        height=args.height,
        fps=args.fps,
        out_path=args.out_path,
        assets_dir=args.assets_dir,
        city_attempts=args.city_attempts,
        listener_grace_sec=max(0.0, args.listener_grace_sec),
        listener_poll_sec=max(0.001, args.listener_poll_sec),
        request_timeout=args.request_timeout,
        user_agent=args.user_agent,
    )
