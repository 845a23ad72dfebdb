"""Tests for the interactive registration session."""

from __future__ import annotations

import io

import pytest

from registro import console
from registro.config import SessionSettings
from registro.console import is_sentinel, render_users, run_session
from registro.models import User
from registro.registry import UserRegistry


ECHO = SessionSettings(mask_password=False)


def _run(script: str, settings: SessionSettings = ECHO) -> tuple[list[User], str, UserRegistry]:
    registry = UserRegistry()
    stdout = io.StringIO()
    users = run_session(registry, settings, stdin=io.StringIO(script), stdout=stdout)
    return users, stdout.getvalue(), registry


def test_session_registers_users_until_exit_word() -> None:
    users, output, registry = _run(
        "Ana Gómez\nana@x.co\nABcdefg1!\n"
        "ana\nana@x.co\nABcdefg1!\n"
        "EXIT\n"
    )

    assert len(registry) == 1
    assert [str(user) for user in users] == ["Nombre: Ana Gómez | Correo: ana@x.co"]
    assert "=== Registro de Usuarios ===" in output
    assert "Escribe 'exit' como nombre para salir." in output
    assert output.count("Nombre completo: ") == 3
    assert output.count("Correo electrónico: ") == 2
    assert "✔ Registro exitoso" in output
    assert "✖ Datos inválidos. Inténtalo de nuevo." in output
    assert output.index("✔ Registro exitoso") < output.index("✖ Datos inválidos")
    assert "=== Lista de usuarios registrados ===" in output
    assert output.rstrip().endswith("Nombre: Ana Gómez | Correo: ana@x.co")
    assert "ABcdefg1!" not in output


def test_session_without_users_reports_empty_listing() -> None:
    users, output, _ = _run("exit\n")

    assert users == []
    assert "Correo electrónico: " not in output
    assert output.rstrip().endswith("No hay usuarios registrados.")


def test_session_ends_at_end_of_input() -> None:
    users, output, _ = _run("Ana Gómez\nana@x.co\nABcdefg1!\nLuis Pérez\n")

    assert len(users) == 1
    assert "=== Lista de usuarios registrados ===" in output


def test_session_uses_configured_exit_word() -> None:
    settings = SessionSettings(sentinel="salir", mask_password=False)
    users, output, _ = _run("exit\nexit@x.co\nABcdefg1!\nSalir\n", settings)

    assert users == []
    assert "Escribe 'salir' como nombre para salir." in output
    assert "✖ Datos inválidos. Inténtalo de nuevo." in output


def test_masked_password_is_read_with_getpass(monkeypatch: pytest.MonkeyPatch) -> None:
    prompts: list[str] = []

    def fake_getpass(prompt: str, stream=None) -> str:
        prompts.append(prompt)
        return "ABcdefg1!"

    monkeypatch.setattr(console.getpass, "getpass", fake_getpass)

    users, _, _ = _run("Ana Gómez\nana@x.co\nexit\n", SessionSettings())

    assert prompts == ["Contraseña: "]
    assert len(users) == 1


def test_interrupt_still_lists_registered_users(monkeypatch: pytest.MonkeyPatch) -> None:
    answers = iter(["Ana Gómez", "ana@x.co", "ABcdefg1!"])

    def fake_prompt(prompt: str, **_kwargs) -> str:
        try:
            return next(answers)
        except StopIteration:
            raise KeyboardInterrupt from None

    monkeypatch.setattr(console, "_prompt_input", fake_prompt)

    users, output, _ = _run("")

    assert len(users) == 1
    assert output.rstrip().endswith("Nombre: Ana Gómez | Correo: ana@x.co")


def test_render_users() -> None:
    assert render_users([]) == ["No hay usuarios registrados."]

    users = [
        User(name="Ana Gómez", email="ana@x.co", password="ABcdefg1!"),
        User(name="Luis Pérez", email="luis@x.co", password="LUisss9$"),
    ]
    assert render_users(users) == [
        "Nombre: Ana Gómez | Correo: ana@x.co",
        "Nombre: Luis Pérez | Correo: luis@x.co",
    ]


@pytest.mark.parametrize(
    ("value", "expected"),
    [("exit", True), ("EXIT", True), ("ExIt", True), (" exit", False), ("exit ", False), ("", False)],
)
def test_is_sentinel(value: str, expected: bool) -> None:
    assert is_sentinel(value, "exit") is expected


def test_masked_password_reads_from_supplied_streams(monkeypatch: pytest.MonkeyPatch) -> None:
    supplied_stdin = io.StringIO("Ana Gómez\nana@x.co\nexit\n")
    supplied_stdout = io.StringIO()
    seen: list[tuple[bool, bool]] = []

    def fake_getpass(prompt: str, stream=None) -> str:
        seen.append((console.sys.stdin is supplied_stdin, console.sys.stdout is supplied_stdout))
        return "ABcdefg1!"

    monkeypatch.setattr(console.getpass, "getpass", fake_getpass)

    users = run_session(UserRegistry(), stdin=supplied_stdin, stdout=supplied_stdout)

    assert seen == [(True, True)]
    assert len(users) == 1
