"""
User entity - the off-chain identity that owns wallets and payments.
"""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID, uuid4


@dataclass
class User:
    """
    User entity.

    Business rules:
    - username, email and phone_number are each globally unique
    - phone_number is the key wallet bindings hang off
    - Only the Argon2id hash of the password is kept
    """

    username: str
    email: str
    phone_number: str
    password_hash: str = field(repr=False)
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=datetime.now)
    updated_at: datetime = field(default_factory=datetime.now)

    def __post_init__(self):
        if not self.username:
            raise ValueError("Username is required")
        if not self.email:
            raise ValueError("Email is required")
        if not self.phone_number:
            raise ValueError("Phone number is required")
        if not self.password_hash:
            raise ValueError("Password hash is required")

    def change_email(self, email: str) -> None:
        self.email = email
        self.updated_at = datetime.now()

    def change_password_hash(self, password_hash: str) -> None:
        self.password_hash = password_hash
        self.updated_at = datetime.now()
