"""Application entry point."""

from __future__ import annotations

import argparse
import sys
from dataclasses import replace

from vocalchess.settings import AppSettings
from vocalchess.voice.interfaces import RecognizerConfig


def _parse_args(argv: list[str]) -> AppSettings:
    parser = argparse.ArgumentParser(
        prog="vocalchess", description="Play chess by speaking your moves."
    )
    parser.add_argument("--log-level", default="INFO", help="logging level (default: INFO)")
    parser.add_argument("--mute", action="store_true", help="disable spoken feedback")
    parser.add_argument(
        "--volume", type=int, default=80, help="spoken feedback volume 0-100"
    )
    parser.add_argument(
        "--listen-timeout",
        type=float,
        default=RecognizerConfig.listen_timeout_s,
        help="seconds of silence before a listening round ends",
    )
    args = parser.parse_args(argv)

    settings = AppSettings(
        speech_enabled=not args.mute,
        speech_volume=args.volume,
        log_level=args.log_level,
    )
    settings.recognizer = replace(settings.recognizer, listen_timeout_s=args.listen_timeout)
    return settings


def main() -> None:
    """Launch the Vocal chess application."""
    from vocalchess.ui.bootstrap import run_application

    settings = _parse_args(sys.argv[1:])
    sys.exit(run_application(sys.argv[:1], settings))


if __name__ == "__main__":
    main()
