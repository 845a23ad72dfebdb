"""Console user registration with pattern-based validation."""

from __future__ import annotations

from .models import User
from .registry import UserRegistry
from .validation import valid_email, valid_name, valid_password

__all__ = [
    "User",
    "UserRegistry",
    "valid_email",
    "valid_name",
    "valid_password",
]
