"""Tests for player gameplay API endpoints."""

from collections.abc import Callable
from datetime import UTC, datetime, timedelta

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from cardvault.db.database import get_session
from cardvault.db.operations import get_player_rows, load_player_store, save_player_store
from cardvault.main import app
from cardvault.models.db import Base
from cardvault.models.rarity import Rarity
from cardvault.services.card_game import CardGame, build_game
from cardvault.services.collection_store import StorageKeys


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
async def client(async_engine):
    """Provide an async test client with overridden database session."""
    async_session = async_sessionmaker(async_engine, class_=AsyncSession, expire_on_commit=False)

    async def override_get_session():
        async with async_session() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_session] = override_get_session

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
def seed_player(async_engine):
    """Write a player's state directly, bypassing the API."""
    async_session = async_sessionmaker(async_engine, class_=AsyncSession, expire_on_commit=False)

    async def seed(player_id: str, setup: Callable[[CardGame], None]) -> None:
        async with async_session() as session:
            store = await load_player_store(session, player_id)
            setup(build_game(store))
            await save_player_store(session, player_id, store)
            await session.commit()

    return seed


def owning(card_id: str, count: int, rarity: Rarity = Rarity.COMMON) -> Callable[[CardGame], None]:
    def setup(game: CardGame) -> None:
        game.collection.record_draw(card_id, datetime.now(UTC))
        game.collection.set_count(card_id, count)
        game.collection.set_rarity(card_id, rarity)

    return setup


class TestCredits:
    async def test_new_player_starts_with_initial_credits(self, client: AsyncClient) -> None:
        response = await client.get("/players/player-1/credits")

        assert response.status_code == 200
        data = response.json()
        assert data["player_id"] == "player-1"
        assert data["balance"] == 5
        assert data["max_stored"] == 99
        assert data["can_claim_daily"] is True
        assert data["seconds_until_claim"] == 0

    async def test_blank_player_id_rejected(self, client: AsyncClient) -> None:
        response = await client.get("/players/%20/credits")
        assert response.status_code == 400


class TestDailyClaim:
    async def test_first_claim_records_baseline(self, client: AsyncClient) -> None:
        response = await client.post("/players/player-1/daily")

        assert response.status_code == 200
        data = response.json()
        assert data["outcome"] == "success"
        assert data["data"]["first_claim"] is True
        assert data["data"]["credits_added"] == 0
        assert data["data"]["total_credits"] == 5

    async def test_second_claim_is_refused(self, client: AsyncClient) -> None:
        await client.post("/players/player-1/daily")

        response = await client.post("/players/player-1/daily")

        assert response.status_code == 200
        data = response.json()
        assert data["outcome"] == "refusal"
        assert data["failure"]["kind"] == "cooldown_active"
        assert data["failure"]["detail"].startswith("retry_after_seconds=")

        credits = (await client.get("/players/player-1/credits")).json()
        assert credits["can_claim_daily"] is False
        assert credits["seconds_until_claim"] > 0

    async def test_claim_catches_up_missed_days(self, client: AsyncClient, seed_player) -> None:
        last = datetime.now(UTC) - timedelta(days=3, hours=1)

        def setup(game: CardGame) -> None:
            game.store.set(StorageKeys.LAST_DAILY_CREDIT, last.isoformat())

        await seed_player("player-1", setup)

        response = await client.post("/players/player-1/daily")

        data = response.json()["data"]
        assert data["periods_elapsed"] == 3
        assert data["credits_added"] == 15
        assert data["total_credits"] == 20


class TestDraw:
    async def test_draw_spends_a_credit(self, client: AsyncClient) -> None:
        response = await client.post("/players/player-1/draw")

        assert response.status_code == 200
        data = response.json()
        assert data["outcome"] == "success"
        assert data["data"]["credits_remaining"] == 4
        assert data["data"]["new_count"] >= 1
        assert data["data"]["card"]["id"]

        collection = (await client.get("/players/player-1/collection")).json()
        assert sum(view["count"] for view in collection) == 1

    async def test_draw_without_credit_is_refused(self, client: AsyncClient) -> None:
        for _ in range(5):
            await client.post("/players/player-1/draw")

        response = await client.post("/players/player-1/draw")

        data = response.json()
        assert data["outcome"] == "refusal"
        assert data["failure"]["kind"] == "no_credit"

        credits = (await client.get("/players/player-1/credits")).json()
        assert credits["balance"] == 0


class TestUpgrade:
    async def test_evaluate_unowned_card(self, client: AsyncClient) -> None:
        response = await client.get("/players/player-1/cards/mc_01/upgrade")

        assert response.status_code == 200
        data = response.json()
        assert data["can_upgrade"] is False
        assert data["reason"] == "card_not_owned"

    async def test_upgrade_consumes_copies(self, client: AsyncClient, seed_player) -> None:
        await seed_player("player-1", owning("mc_01", 5))

        evaluation = (await client.get("/players/player-1/cards/mc_01/upgrade")).json()
        assert evaluation["can_upgrade"] is True
        assert evaluation["cost"] == 4
        assert evaluation["next_rarity"] == "rare"

        response = await client.post("/players/player-1/cards/mc_01/upgrade")

        data = response.json()
        assert data["outcome"] == "success"
        assert data["data"]["new_rarity"] == "rare"
        assert data["data"]["cost"] == 4

        views = (await client.get("/players/player-1/collection?search=creeper")).json()
        assert views[0]["count"] == 1
        assert views[0]["current_rarity"] == "rare"

    async def test_insufficient_copies_refusal(self, client: AsyncClient, seed_player) -> None:
        await seed_player("player-1", owning("mc_01", 2))

        response = await client.post("/players/player-1/cards/mc_01/upgrade")

        data = response.json()
        assert data["outcome"] == "refusal"
        assert data["failure"]["kind"] == "insufficient_copies"
        assert data["failure"]["detail"] == "required=4, current=2"

    async def test_max_rarity_refusal(self, client: AsyncClient, seed_player) -> None:
        await seed_player("player-1", owning("mc_01", 3, Rarity.LEGENDARY))

        response = await client.post("/players/player-1/cards/mc_01/upgrade")

        data = response.json()
        assert data["outcome"] == "refusal"
        assert data["failure"]["kind"] == "max_rarity_reached"
        assert data["failure"]["detail"] == "card_id=mc_01"

    async def test_terminal_upgrade_converts_excess(
        self, client: AsyncClient, seed_player
    ) -> None:
        await seed_player("player-1", owning("mc_01", 70, Rarity.EPIC))

        response = await client.post("/players/player-1/cards/mc_01/upgrade")

        data = response.json()["data"]
        assert data["new_rarity"] == "legendary"
        assert data["cost"] == 32
        assert data["excess_cards"] == 38
        assert data["credits_earned"] == 38

        credits = (await client.get("/players/player-1/credits")).json()
        assert credits["balance"] == 5 + 38


class TestCollectionAndStats:
    async def test_collection_filters(self, client: AsyncClient, seed_player) -> None:
        await seed_player("player-1", owning("space_02", 1, Rarity.EPIC))

        by_theme = (await client.get("/players/player-1/collection?theme=space")).json()
        by_rarity = (await client.get("/players/player-1/collection?rarity=epic")).json()

        assert len(by_theme) == 8
        assert [view["card"]["id"] for view in by_rarity] == ["space_02"]
        assert by_rarity[0]["points"] == 8

    async def test_invalid_theme_rejected(self, client: AsyncClient) -> None:
        response = await client.get("/players/player-1/collection?theme=pirates")
        assert response.status_code == 422

    async def test_stats(self, client: AsyncClient, seed_player) -> None:
        await seed_player("player-1", owning("dino_01", 1, Rarity.RARE))

        response = await client.get("/players/player-1/stats")

        assert response.status_code == 200
        data = response.json()
        assert data["total_cards"] == 24
        assert data["owned_cards"] == 1
        assert data["total_score"] == 2
        assert data["by_theme"]["dinosaurs"]["owned"] == 1
        assert data["by_base_rarity"]["legendary"]["owned"] == 1
        assert data["highest_card"]["id"] == "dino_01"
        assert data["highest_rarity"] == "rare"


class TestReadOnlyEndpoints:
    @pytest.mark.parametrize(
        "path",
        [
            "/players/ghost/credits",
            "/players/ghost/cards/mc_01/upgrade",
            "/players/ghost/collection",
            "/players/ghost/stats",
        ],
    )
    async def test_reading_unknown_player_writes_nothing(
        self, client: AsyncClient, async_engine, path: str
    ) -> None:
        """Looking at a player who never played leaves no rows behind."""
        response = await client.get(path)
        assert response.status_code == 200

        async_session = async_sessionmaker(
            async_engine, class_=AsyncSession, expire_on_commit=False
        )
        async with async_session() as session:
            assert await get_player_rows(session, "ghost") == []

        deleted = await client.delete("/players/ghost")
        assert deleted.json()["deleted"] is False

    async def test_reads_do_not_undo_writes(self, client: AsyncClient) -> None:
        await client.post("/players/player-1/draw")
        await client.get("/players/player-1/stats")

        credits = (await client.get("/players/player-1/credits")).json()
        assert credits["balance"] == 4


class TestResetPlayer:
    async def test_reset_existing_player(self, client: AsyncClient) -> None:
        await client.post("/players/player-1/draw")

        response = await client.delete("/players/player-1")

        assert response.status_code == 200
        assert response.json()["deleted"] is True

        credits = (await client.get("/players/player-1/credits")).json()
        assert credits["balance"] == 5

    async def test_reset_unknown_player(self, client: AsyncClient) -> None:
        response = await client.delete("/players/nobody")

        assert response.status_code == 200
        assert response.json()["deleted"] is False
