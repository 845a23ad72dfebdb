"""Command-line interface for the user registration console."""

from __future__ import annotations
import argparse
import logging
import sys
from dataclasses import replace
from getpass import getpass
from pathlib import Path
from typing import Sequence

from registro.config import ConfigurationError, SessionSettings, load_settings
from registro.console import run_session
from registro.registry import UserRegistry
from registro.validation import invalid_fields

logger = logging.getLogger("registro.main")

_FIELDS = ("name", "email", "password")


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Console user registration")
    parser.add_argument(
        "--log-level",
        default=None,
        type=str.upper,
        choices=["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"],
        help="Logging level (overrides the configured value)",
    )
    subparsers = parser.add_subparsers(dest="command")

    parser.set_defaults(command="session")

    session_parser = subparsers.add_parser(
        "session", help="Register users interactively and list them on exit"
    )
    session_parser.add_argument(
        "--config",
        dest="config_path",
        default=None,
        help="Path to the YAML settings file (defaults to REGISTRO_CONFIG_PATH or config/session.yaml)",
    )
    session_parser.add_argument(
        "--sentinel",
        default=None,
        help="Name that ends the session (default: exit)",
    )
    session_parser.add_argument(
        "--show-password",
        action="store_true",
        help="Echo the password while it is typed",
    )

    check_parser = subparsers.add_parser(
        "check", help="Validate a single name, email and password without registering"
    )
    check_parser.add_argument("name", help="Full name to validate")
    check_parser.add_argument("email", help="Email address to validate")
    check_parser.add_argument(
        "--password",
        default=None,
        help="Password to validate (prompted for when omitted)",
    )

    args_list = list(argv) if argv is not None else sys.argv[1:]
    known_commands = {"session", "check"}

    # Only --log-level belongs to the top-level parser; skip it to find the subcommand slot.
    index = 0
    while index < len(args_list):
        token = args_list[index]
        if token in ("-h", "--help"):
            return parser.parse_args(args_list)
        if token == "--log-level":
            index += 2
        elif token.startswith("--log-level="):
            index += 1
        else:
            break

    if index >= len(args_list) or args_list[index] not in known_commands:
        args_list = [*args_list[:index], "session", *args_list[index:]]

    return parser.parse_args(args_list)


def _session_settings(args: argparse.Namespace) -> SessionSettings:
    config_path = Path(args.config_path).expanduser() if args.config_path else None
    settings = load_settings(config_path)
    if args.sentinel:
        settings = replace(settings, sentinel=args.sentinel)
    if args.show_password:
        settings = replace(settings, mask_password=False)
    return settings


def _check(name: str, email: str, password: str | None) -> int:
    if password is None:
        password = getpass("Contraseña: ")

    invalid = set(invalid_fields(name, email, password))
    for field in _FIELDS:
        print(f"{field}: {'invalid' if field in invalid else 'ok'}")
    return 1 if invalid else 0


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level),
        format="%(asctime)s [%(levelname)s] %(message)s",
    )


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for CLI usage."""

    args = _parse_args(argv)

    if args.command == "check":
        _configure_logging(args.log_level or "WARNING")
        return _check(args.name, args.email, args.password)

    try:
        settings = _session_settings(args)
    except ConfigurationError as exc:
        raise SystemExit(f"Invalid configuration: {exc}") from exc

    _configure_logging(args.log_level or settings.log_level)
    logger.debug("Starting session with exit word %r", settings.sentinel)

    run_session(UserRegistry(), settings)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
