"""Tests for API endpoints."""

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from api.main import app
from api.session import set_session_store
from core.errors import StorageError
from core.game import SessionRecord


@pytest_asyncio.fixture
async def client(store):
    """Create test client backed by the in-memory store."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


def seeded_record(player_id: int = 1, **overrides) -> SessionRecord:
    """Player 9 against dealer 16 with only tens left to draw."""
    fields = dict(
        player_id=player_id,
        bet=50,
        deck=["CLUBS:TEN", "DIAMONDS:TEN"],
        player_hand=["SPADES:FIVE", "SPADES:FOUR"],
        dealer_hand=["HEARTS:TEN", "HEARTS:SIX"],
    )
    fields.update(overrides)
    return SessionRecord(**fields)


class BrokenSessionStore:
    """Store whose backend is unreachable."""

    async def get(self, player_id):
        raise StorageError("connection refused")

    async def exists(self, player_id):
        raise StorageError("connection refused")

    async def count_in_progress(self):
        raise StorageError("connection refused")


@pytest.mark.asyncio
async def test_health_check(client):
    """Test health check endpoint."""
    response = await client.get("/api/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


@pytest.mark.asyncio
async def test_create_game(client, store):
    """Test creating a new game."""
    response = await client.post("/api/blackjack/1/create/50")
    assert response.status_code == 200
    data = response.json()

    assert data["player_id"] == 1
    assert data["bet"] == 50
    assert data["first_turn"] is True
    assert data["gain"] == 0
    assert len(data["player_hand"]["cards"]) == 2
    assert len(data["dealer_hand"]["cards"]) == 2
    assert data["status"] in ["IN_PROGRESS", "PLAYER_WON", "PLAYER_LOST"]

    record = await store.get(1)
    assert len(record.deck) == 48
    assert record.player_hand == data["player_hand"]["cards"]


@pytest.mark.asyncio
async def test_create_twice_conflicts(client):
    await client.post("/api/blackjack/1/create/50")

    response = await client.post("/api/blackjack/1/create/10")

    assert response.status_code == 409
    assert response.json()["kind"] == "cannot_create"


@pytest.mark.asyncio
async def test_invalid_path_params(client):
    """Test that bad ids and bets are rejected before reaching the game."""
    assert (await client.post("/api/blackjack/1/create/0")).status_code == 422
    assert (await client.post("/api/blackjack/-1/create/10")).status_code == 422
    assert (await client.get("/api/blackjack/abc")).status_code == 422


@pytest.mark.asyncio
async def test_user_info(client, store):
    await store.upsert(seeded_record())

    response = await client.get("/api/blackjack/1")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "IN_PROGRESS"
    assert data["player_hand"] == {"score": 9, "cards": ["SPADES:FIVE", "SPADES:FOUR"]}
    assert data["dealer_hand"] == {"score": 16, "cards": ["HEARTS:TEN", "HEARTS:SIX"]}


@pytest.mark.asyncio
async def test_unknown_player(client):
    for method, url in [
        ("GET", "/api/blackjack/42"),
        ("POST", "/api/blackjack/42/hit"),
        ("POST", "/api/blackjack/42/stay"),
        ("POST", "/api/blackjack/42/claim"),
    ]:
        response = await client.request(method, url)
        assert response.status_code == 404
        assert response.json()["kind"] == "not_found"


@pytest.mark.asyncio
async def test_full_game(client, store):
    """Test hit, stay and claim across separate requests."""
    await store.upsert(seeded_record())

    response = await client.post("/api/blackjack/1/hit")
    assert response.status_code == 200
    data = response.json()
    assert data["player_hand"]["score"] == 19
    assert data["first_turn"] is False
    assert data["status"] == "IN_PROGRESS"

    response = await client.post("/api/blackjack/1/stay")
    assert response.status_code == 200
    data = response.json()
    assert data["player_stay"] is True
    assert data["dealer_stay"] is True
    assert data["dealer_hand"]["score"] == 26
    assert data["status"] == "PLAYER_WON"

    record = await store.get(1)
    assert record.outcome is True
    assert record.bet == 50

    response = await client.post("/api/blackjack/1/claim")
    assert response.status_code == 200
    assert response.json()["gain"] == 50
    assert await store.get(1) is None

    response = await client.post("/api/blackjack/1/claim")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_claim_in_progress(client, store):
    await store.upsert(seeded_record())

    response = await client.post("/api/blackjack/1/claim")

    assert response.status_code == 409
    assert response.json()["kind"] == "game_not_over"
    assert await store.exists(1)


@pytest.mark.asyncio
async def test_claim_loss(client, store):
    await store.upsert(
        seeded_record(
            player_hand=["SPADES:TEN", "SPADES:SEVEN"],
            dealer_hand=["HEARTS:TEN", "HEARTS:EIGHT"],
            player_stay=True,
            dealer_stay=True,
            outcome=False,
        )
    )

    response = await client.post("/api/blackjack/1/claim")

    assert response.status_code == 200
    assert response.json()["gain"] == -50


@pytest.mark.asyncio
async def test_hit_after_stay(client, store):
    await store.upsert(seeded_record(player_stay=True))

    response = await client.post("/api/blackjack/1/hit")

    assert response.status_code == 409
    assert response.json()["kind"] == "player_already_pressed_stay"


@pytest.mark.asyncio
async def test_hit_after_game_ended(client, store):
    await store.upsert(seeded_record(player_hand=["SPADES:ACE", "SPADES:KING"], outcome=True))

    response = await client.post("/api/blackjack/1/hit")

    assert response.status_code == 409
    assert response.json()["kind"] == "player_already_won"


@pytest.mark.asyncio
async def test_record_without_bet(client, store):
    await store.upsert(seeded_record(bet=None))

    response = await client.get("/api/blackjack/1")

    assert response.status_code == 409
    assert response.json()["kind"] == "game_over"


@pytest.mark.asyncio
async def test_active_sessions(client, store):
    await store.upsert(seeded_record(1))
    await store.upsert(seeded_record(2))
    await store.upsert(seeded_record(3, outcome=True))

    response = await client.get("/api/blackjack/")

    assert response.status_code == 200
    assert response.json() == {"count": 2}


@pytest.mark.asyncio
async def test_storage_unavailable(client):
    set_session_store(BrokenSessionStore())

    response = await client.get("/api/blackjack/1")

    assert response.status_code == 503
    assert response.json()["kind"] == "storage"
