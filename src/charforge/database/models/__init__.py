"""SQLAlchemy models for charforge."""

from charforge.database.models.base import Base
from charforge.database.models.snapshot import CharacterSnapshot

__all__ = [
    "Base",
    "CharacterSnapshot",
]
