"""Versioned character snapshots."""

import uuid
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import JSON, DateTime, Integer, String, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class CharacterSnapshot(Base):
    """One saved copy of a whole character."""

    __tablename__ = "character_snapshots"
    __table_args__ = (
        UniqueConstraint("character_id", "version", name="uq_character_snapshot_version"),
    )

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
        comment="Row identifier",
    )

    character_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        nullable=False,
        index=True,
        comment="Stable character identifier shared by all versions",
    )

    version: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        comment="Version number, starting at 1",
    )

    name: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        index=True,
        comment="Character name at save time",
    )

    level: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=1,
        comment="Character level at save time",
    )

    data: Mapped[dict[str, Any]] = mapped_column(
        JSON,
        nullable=False,
        comment="Serialized character document",
    )

    saved_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
        comment="When this version was saved",
    )

    def __repr__(self) -> str:
        """String representation of CharacterSnapshot."""
        return (
            f"<CharacterSnapshot(character_id={self.character_id}, "
            f"version={self.version}, name='{self.name}')>"
        )
