"""
Persistence infrastructure.
"""

from caissier.infrastructure.persistence.database import Database

__all__ = ["Database"]
