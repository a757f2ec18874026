"""
RefreshSession entity - one issued refresh token, stored by hash.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4


@dataclass(frozen=True)
class RefreshSession:
    """
    Server-side record of a refresh token.

    Business rules:
    - Only the SHA-256 digest of the token is stored
    - Terminal once deleted (revoked/rotated) or past expires_at
    - A user may hold any number of concurrent sessions
    """

    user_id: UUID
    token_hash: str
    expires_at: datetime
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=datetime.now)

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        return (now or datetime.now()) >= self.expires_at
