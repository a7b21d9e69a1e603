"""Shared fixtures for all tests."""

import os

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from charforge.config import PACKAGE_DATA_DIR, get_settings
from charforge.database.engine import reset_engine
from charforge.database.models import Base
from charforge.game.catalog import Catalogs, load_catalogs
from charforge.game.character.model import Character
from charforge.game.character.race import CharacterClass, Race
from charforge.game.engine import CharacterEngine


@pytest.fixture(scope="session", autouse=True)
def use_test_database(tmp_path_factory):
    """Point the configured database at a temporary file for the whole session.

    Settings are cached, so the cache and the global engine are reset after
    the environment variable is set.
    """
    test_db_path = tmp_path_factory.mktemp("charforge_test") / "test_charforge.db"
    os.environ["CHARFORGE_DATABASE_URL"] = f"sqlite+aiosqlite:///{test_db_path}"

    get_settings.cache_clear()
    reset_engine()

    yield

    reset_engine()
    os.environ.pop("CHARFORGE_DATABASE_URL", None)
    get_settings.cache_clear()


@pytest.fixture(scope="session")
def catalogs() -> Catalogs:
    """Catalogs loaded from the data files shipped with the package."""
    return load_catalogs(PACKAGE_DATA_DIR)


@pytest.fixture
def engine(catalogs: Catalogs) -> CharacterEngine:
    return CharacterEngine(catalogs)


@pytest.fixture
def make_character(catalogs: Catalogs):
    """Factory for level 1 bards with effects computed and full resources."""

    def _make(**overrides) -> Character:
        fields = {
            "name": "Lyra",
            "race": Race.DARK_HALF_ELF,
            "character_class": CharacterClass.BARD,
        }
        fields.update(overrides)
        character = Character(**fields)
        character.refresh_effects(catalogs)
        character.restore_resources()
        return character

    return _make


@pytest.fixture
def character(make_character) -> Character:
    return make_character()


@pytest.fixture
async def db_session():
    """Create a test database session with in-memory SQLite."""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", echo=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async_session = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async with async_session() as session:
        yield session
        await session.rollback()

    await engine.dispose()
