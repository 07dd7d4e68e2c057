"""Service interfaces (ports) used by the application services."""

from __future__ import annotations

from typing import Protocol


class IPasswordHasher(Protocol):
    """Adaptive password hashing. Calls are CPU-bound; services run them in a thread."""

    def hash_password(self, password: str) -> str:
        """Return a salted hash of password."""

    def verify_password(self, password: str, hashed_password: str) -> bool:
        """Return True if password matches hashed_password."""
