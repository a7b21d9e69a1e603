"""Versioned storage of whole characters.

Every save appends a new numbered snapshot (1, 2, ...) for the character's
id. Older versions stay available until deleted. The store only flushes;
committing is left to the session owner (see :func:`get_session`).
"""

import uuid
from dataclasses import dataclass
from datetime import datetime

import structlog
from sqlalchemy import and_, delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from charforge.game.catalog.definitions import Catalogs
from charforge.game.character.model import Character
from charforge.game.character.serialization import character_from_dict, character_to_dict

from .models import CharacterSnapshot
from .models.snapshot import utc_now

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class CharacterVersion:
    """A loaded snapshot."""

    character_id: uuid.UUID
    version: int
    saved_at: datetime
    character: Character


@dataclass(frozen=True)
class VersionSummary:
    version: int
    saved_at: datetime
    name: str
    level: int


@dataclass(frozen=True)
class CharacterSummary:
    """Latest state of one stored character."""

    character_id: uuid.UUID
    name: str
    level: int
    versions: int
    last_saved: datetime


class CharacterStore:
    """Snapshot store on top of an async SQLAlchemy session."""

    def __init__(self, session: AsyncSession, catalogs: Catalogs) -> None:
        self.session = session
        self.catalogs = catalogs

    def _load(self, snapshot: CharacterSnapshot) -> CharacterVersion:
        return CharacterVersion(
            character_id=snapshot.character_id,
            version=snapshot.version,
            saved_at=snapshot.saved_at,
            character=character_from_dict(snapshot.data, self.catalogs),
        )

    async def save(self, character: Character) -> CharacterVersion:
        """Append a new version of ``character``."""
        result = await self.session.execute(
            select(func.max(CharacterSnapshot.version)).where(
                CharacterSnapshot.character_id == character.id
            )
        )
        version = (result.scalar_one_or_none() or 0) + 1

        snapshot = CharacterSnapshot(
            character_id=character.id,
            version=version,
            name=character.name,
            level=character.level,
            data=character_to_dict(character),
            saved_at=utc_now(),
        )
        self.session.add(snapshot)
        await self.session.flush()

        logger.info(
            "character_saved",
            character_id=str(character.id),
            character_name=character.name,
            version=version,
        )
        return CharacterVersion(
            character_id=character.id,
            version=version,
            saved_at=snapshot.saved_at,
            character=character,
        )

    async def latest(self, character_id: uuid.UUID) -> CharacterVersion | None:
        result = await self.session.execute(
            select(CharacterSnapshot)
            .where(CharacterSnapshot.character_id == character_id)
            .order_by(CharacterSnapshot.version.desc())
            .limit(1)
        )
        snapshot = result.scalar_one_or_none()
        return self._load(snapshot) if snapshot else None

    async def get_version(self, character_id: uuid.UUID, version: int) -> CharacterVersion | None:
        result = await self.session.execute(
            select(CharacterSnapshot).where(
                CharacterSnapshot.character_id == character_id,
                CharacterSnapshot.version == version,
            )
        )
        snapshot = result.scalar_one_or_none()
        return self._load(snapshot) if snapshot else None

    async def list_versions(self, character_id: uuid.UUID) -> list[VersionSummary]:
        """Versions of one character, oldest first."""
        result = await self.session.execute(
            select(
                CharacterSnapshot.version,
                CharacterSnapshot.saved_at,
                CharacterSnapshot.name,
                CharacterSnapshot.level,
            )
            .where(CharacterSnapshot.character_id == character_id)
            .order_by(CharacterSnapshot.version)
        )
        return [VersionSummary(*row) for row in result.all()]

    async def summaries(self) -> list[CharacterSummary]:
        """One summary per stored character, from its latest version, sorted by name."""
        latest = (
            select(
                CharacterSnapshot.character_id,
                func.max(CharacterSnapshot.version).label("version"),
                func.count().label("versions"),
            )
            .group_by(CharacterSnapshot.character_id)
            .subquery()
        )
        result = await self.session.execute(
            select(
                CharacterSnapshot.character_id,
                CharacterSnapshot.name,
                CharacterSnapshot.level,
                latest.c.versions,
                CharacterSnapshot.saved_at,
            )
            .join(
                latest,
                and_(
                    CharacterSnapshot.character_id == latest.c.character_id,
                    CharacterSnapshot.version == latest.c.version,
                ),
            )
            .order_by(CharacterSnapshot.name)
        )
        return [CharacterSummary(*row) for row in result.all()]

    async def delete_version(self, character_id: uuid.UUID, version: int) -> bool:
        """Delete one version; the others keep their numbers."""
        result = await self.session.execute(
            delete(CharacterSnapshot).where(
                CharacterSnapshot.character_id == character_id,
                CharacterSnapshot.version == version,
            )
        )
        deleted = result.rowcount > 0
        if deleted:
            logger.info(
                "character_version_deleted", character_id=str(character_id), version=version
            )
        return deleted

    async def delete(self, character_id: uuid.UUID) -> int:
        """Delete every version of a character; returns how many were removed."""
        result = await self.session.execute(
            delete(CharacterSnapshot).where(CharacterSnapshot.character_id == character_id)
        )
        logger.info("character_deleted", character_id=str(character_id), versions=result.rowcount)
        return result.rowcount

    async def name_exists(self, name: str) -> bool:
        """Whether any stored snapshot uses ``name`` (case-insensitive)."""
        result = await self.session.execute(
            select(func.count())
            .select_from(CharacterSnapshot)
            .where(func.lower(CharacterSnapshot.name) == name.strip().lower())
        )
        return result.scalar_one() > 0
