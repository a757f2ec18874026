"""
Password hasher interface.
"""

from abc import ABC, abstractmethod


class IPasswordHasher(ABC):
    """One-way password hashing."""

    @abstractmethod
    def hash(self, password: str) -> str:
        """Hash a plaintext password."""

    @abstractmethod
    def verify(self, password_hash: str, password: str) -> bool:
        """Return True if password matches password_hash."""

    @abstractmethod
    def verify_dummy(self, password: str) -> None:
        """Spend the cost of one verification without a stored hash."""
