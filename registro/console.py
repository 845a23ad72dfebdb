"""Interactive registration session run over the console."""
from __future__ import annotations

import contextlib
import getpass
import logging
import sys
from typing import Iterable, List, TextIO

from .config import SessionSettings
from .models import User
from .registry import UserRegistry

logger = logging.getLogger("registro.console")

NAME_PROMPT = "Nombre completo: "
EMAIL_PROMPT = "Correo electrónico: "
PASSWORD_PROMPT = "Contraseña: "
SUCCESS_MESSAGE = "✔ Registro exitoso\n"
FAILURE_MESSAGE = "✖ Datos inválidos. Inténtalo de nuevo.\n"
LISTING_HEADER = "\n=== Lista de usuarios registrados ==="
EMPTY_LISTING = "No hay usuarios registrados."


@contextlib.contextmanager
def _temporary_stdio(stdin: TextIO | None, stdout: TextIO | None):
    """Temporarily replace ``sys.stdin`` and ``sys.stdout``."""

    original_stdin, original_stdout = sys.stdin, sys.stdout
    try:
        if stdin is not None:
            sys.stdin = stdin
        if stdout is not None:
            sys.stdout = stdout
        yield
    finally:
        sys.stdin = original_stdin
        sys.stdout = original_stdout


def _prompt_input(
    prompt: str,
    *,
    stdin: TextIO | None = None,
    stdout: TextIO | None = None,
    password: bool = False,
) -> str:
    """Invoke ``input``/``getpass`` using optional replacement streams."""

    func = getpass.getpass if password else input
    if stdin is None and stdout is None:
        return func(prompt)

    with _temporary_stdio(stdin, stdout):
        return func(prompt)


def _print(message: str, stdout: TextIO | None) -> None:
    print(message, file=stdout if stdout is not None else sys.stdout, flush=True)


def banner(sentinel: str) -> str:
    return f"\n=== Registro de Usuarios ===\nEscribe '{sentinel}' como nombre para salir.\n"


def is_sentinel(value: str, sentinel: str) -> bool:
    """Return ``True`` when ``value`` is the exit word, ignoring case."""

    return value.casefold() == sentinel.casefold()


def render_users(users: Iterable[User]) -> List[str]:
    """Return the listing lines for ``users``. The passwords are never included."""

    lines = [str(user) for user in users]
    if not lines:
        return [EMPTY_LISTING]
    return lines


def run_session(
    registry: UserRegistry,
    settings: SessionSettings | None = None,
    *,
    stdin: TextIO | None = None,
    stdout: TextIO | None = None,
) -> List[User]:
    """Prompt for users until the exit word is entered, then list the registry.

    End of input and Ctrl+C finish the session the same way the exit word does.
    """

    settings = settings or SessionSettings()
    _print(banner(settings.sentinel), stdout)

    attempts = 0
    try:
        while True:
            name = _prompt_input(NAME_PROMPT, stdin=stdin, stdout=stdout)
            if is_sentinel(name, settings.sentinel):
                break

            email = _prompt_input(EMAIL_PROMPT, stdin=stdin, stdout=stdout)
            password = _prompt_input(
                PASSWORD_PROMPT,
                stdin=stdin,
                stdout=stdout,
                password=settings.mask_password,
            )

            attempts += 1
            if registry.register(name, email, password):
                _print(SUCCESS_MESSAGE, stdout)
            else:
                _print(FAILURE_MESSAGE, stdout)
    except EOFError:
        logger.info("Input closed; ending session")
        _print("", stdout)
    except KeyboardInterrupt:
        logger.info("Session interrupted")
        _print("", stdout)

    logger.info("Session finished after %d attempt(s); %d user(s) registered", attempts, len(registry))

    users = registry.list()
    _print(LISTING_HEADER, stdout)
    for line in render_users(users):
        _print(line, stdout)
    return users


__all__ = [
    "banner",
    "is_sentinel",
    "render_users",
    "run_session",
]
