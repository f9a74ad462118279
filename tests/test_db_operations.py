"""Tests for player state persistence."""

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from cardvault.db.kv_store import SnapshotStore
from cardvault.db.operations import (
    delete_player,
    get_player_rows,
    load_player_store,
    save_player_store,
)
from cardvault.models.db import Base


@pytest.fixture
async def async_engine():
    """Create an in-memory SQLite engine for testing."""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def session(async_engine) -> AsyncSession:
    """Provide a database session for tests."""
    async_session = async_sessionmaker(async_engine, class_=AsyncSession, expire_on_commit=False)
    async with async_session() as session:
        yield session


class TestLoadPlayerStore:
    async def test_unknown_player_is_empty(self, session: AsyncSession) -> None:
        """A player never seen before loads as an empty, clean snapshot."""
        store = await load_player_store(session, "nobody")

        assert store.keys() == []
        assert not store.has_changes()

    async def test_round_trips_saved_keys(self, session: AsyncSession) -> None:
        store = SnapshotStore()
        store.set("draw_credits", 7)
        store.set("cards_collection", {"mc_01": {"count": 2}})
        await save_player_store(session, "player-1", store)
        await session.commit()

        loaded = await load_player_store(session, "player-1")

        assert loaded.get("draw_credits") == 7
        assert loaded.get("cards_collection") == {"mc_01": {"count": 2}}
        assert not loaded.has_changes()


class TestSavePlayerStore:
    async def test_clean_store_writes_nothing(self, session: AsyncSession) -> None:
        written = await save_player_store(session, "player-1", SnapshotStore({"a": 1}))

        assert written == 0
        assert await get_player_rows(session, "player-1") == []

    async def test_only_dirty_keys_are_written(self, session: AsyncSession) -> None:
        store = SnapshotStore({"untouched": 1})
        store.set("draw_credits", 5)

        written = await save_player_store(session, "player-1", store)

        rows = await get_player_rows(session, "player-1")
        assert written == 1
        assert [row.key for row in rows] == ["draw_credits"]
        assert not store.has_changes()

    async def test_existing_key_is_updated(self, session: AsyncSession) -> None:
        store = SnapshotStore()
        store.set("draw_credits", 5)
        await save_player_store(session, "player-1", store)

        store.set("draw_credits", 4)
        await save_player_store(session, "player-1", store)
        await session.commit()

        rows = await get_player_rows(session, "player-1")
        assert len(rows) == 1
        assert rows[0].value == 4

    async def test_removed_key_is_deleted(self, session: AsyncSession) -> None:
        store = SnapshotStore()
        store.set("last_draw_time", "2024-05-01T12:00:00+00:00")
        store.set("draw_credits", 5)
        await save_player_store(session, "player-1", store)

        store.remove("last_draw_time")
        written = await save_player_store(session, "player-1", store)

        rows = await get_player_rows(session, "player-1")
        assert written == 1
        assert [row.key for row in rows] == ["draw_credits"]

    async def test_players_are_isolated(self, session: AsyncSession) -> None:
        first = SnapshotStore()
        first.set("draw_credits", 1)
        second = SnapshotStore()
        second.set("draw_credits", 9)

        await save_player_store(session, "player-1", first)
        await save_player_store(session, "player-2", second)

        loaded = await load_player_store(session, "player-1")
        assert loaded.get("draw_credits") == 1


class TestDeletePlayer:
    async def test_delete_existing_player(self, session: AsyncSession) -> None:
        store = SnapshotStore()
        store.set("draw_credits", 5)
        await save_player_store(session, "player-1", store)

        deleted = await delete_player(session, "player-1")

        assert deleted is True
        assert await get_player_rows(session, "player-1") == []

    async def test_delete_unknown_player(self, session: AsyncSession) -> None:
        assert await delete_player(session, "nobody") is False
