#!/usr/bin/env python3
"""CLI entrypoint for the terminal stock-market simulator.

Usage::

    python run_simulator.py
    python run_simulator.py --config config/example.yaml
    python run_simulator.py --users-file ~/.stocksim/users.dat --seed 42

Settings come from the optional YAML config; flags given on the command line
override it. Game text goes to stdout and logs to stderr.

Exit codes: 0 on a clean exit, 1 on an unexpected I/O failure, 2 when the
configuration is invalid or SHA-256 is unavailable.
"""

from __future__ import annotations

import argparse
import logging
import sys

import yaml

from models.config import SimulatorConfig
from simulation.errors import CryptoUnavailable
from simulation.market import Market
from simulation.session import SessionLoop

EXIT_OK = 0
EXIT_IO_ERROR = 1
EXIT_STARTUP_ERROR = 2


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Play the terminal stock-market simulator.",
    )
    parser.add_argument(
        "--config",
        default=None,
        type=str,
        help="Path to an optional YAML configuration file.",
    )
    parser.add_argument(
        "--users-file",
        default=None,
        type=str,
        help="Credential store path (default: .users.dat in the working directory).",
    )
    parser.add_argument(
        "--seed",
        default=None,
        type=int,
        help="Seed the market's random generator for a reproducible game.",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity (default: WARNING).",
    )
    return parser.parse_args(argv)


def _setup_logging(level: str) -> None:
    """Configure root logger with a clean format."""
    logging.basicConfig(
        level=getattr(logging, level),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )


def load_config(args: argparse.Namespace) -> SimulatorConfig:
    """Build the effective config: YAML file (if any), then CLI overrides."""
    config = SimulatorConfig.from_yaml(args.config) if args.config else SimulatorConfig()
    overrides = {
        "users_file": args.users_file,
        "seed": args.seed,
        "log_level": args.log_level,
    }
    overrides = {key: value for key, value in overrides.items() if value is not None}
    if not overrides:
        return config
    return SimulatorConfig(**{**config.model_dump(), **overrides})


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    try:
        config = load_config(args)
    except (FileNotFoundError, ValueError, yaml.YAMLError) as exc:
        print(f"Invalid configuration: {exc}", file=sys.stderr)
        return EXIT_STARTUP_ERROR

    _setup_logging(config.log_level)
    logger = logging.getLogger(__name__)
    logger.info("Using credential store '%s'", config.users_file)

    try:
        market = Market(config)
        return SessionLoop(market).run()
    except CryptoUnavailable as exc:
        logger.error("%s", exc)
        return EXIT_STARTUP_ERROR
    except KeyboardInterrupt:
        print()
        return EXIT_OK
    except OSError as exc:
        logger.exception("I/O failure: %s", exc)
        return EXIT_IO_ERROR


if __name__ == "__main__":
    sys.exit(main())
