"""In-memory registry of accepted users."""

from __future__ import annotations

import logging
from typing import List

from .models import User
from .validation import invalid_fields

logger = logging.getLogger("registro.registry")


class UserRegistry:
    """Append-only, insertion-ordered store of validated users."""

    def __init__(self) -> None:
        self._users: List[User] = []

    def __len__(self) -> int:
        return len(self._users)

    def register(self, name: str, email: str, password: str) -> bool:
        """Validate the details and store a new user.

        Returns ``False`` and leaves the registry untouched when any field is
        invalid. Duplicate names and emails are accepted.
        """

        invalid = invalid_fields(name, email, password)
        if invalid:
            logger.info("Rejected registration: invalid %s", ", ".join(invalid))
            return False

        self._users.append(User(name=name, email=email, password=password))
        logger.info("Registered user %s (%d total)", name, len(self._users))
        return True

    def list(self) -> List[User]:
        return list(self._users)


__all__ = ["UserRegistry"]
