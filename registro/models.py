"""Domain models for the user registry."""

from __future__ import annotations

from dataclasses import dataclass, field

from .validation import invalid_fields


@dataclass(frozen=True)
class User:
    """A registered user. The password is kept out of every text representation."""

    name: str
    email: str
    password: str = field(repr=False)

    def __post_init__(self) -> None:
        invalid = invalid_fields(self.name, self.email, self.password)
        if invalid:
            raise ValueError(f"Invalid user fields: {', '.join(invalid)}")

    def __str__(self) -> str:
        return f"Nombre: {self.name} | Correo: {self.email}"


__all__ = ["User"]
