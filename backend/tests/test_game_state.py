import uuid
import pytest
from conftest import register


@pytest.mark.asyncio
async def test_locations_in_hunt_order(client):
    r = await client.get("/api/locations")
    assert r.status_code == 200
    locs = r.json()
    assert len(locs) == 8
    assert locs[0]["name"] == "Prime Pizza"
    assert locs[0]["answer"] == "Prime Pizza"
    assert len(locs[0]["clues"]) == 3
    assert [l["id"] for l in locs] == sorted(l["id"] for l in locs)


@pytest.mark.asyncio
async def test_game_state_missing_is_404(client):
    r = await client.get("/api/game-state")
    assert r.status_code == 404
    assert r.json()["message"] == "Game state not found"


@pytest.mark.asyncio
async def test_save_and_load_round_trip(client):
    payload = {
        "currentLocationIndex": 2,
        "visibleClueIndices": [0, 1],
        "startTime": 1700000000000,
        "endTime": None,
        "showIntro": False,
        "completedLocations": [0, 1],
        "totalLocations": 8,  # extra keys from the client are ignored
    }
    r = await client.post("/api/game-state", json=payload)
    assert r.status_code == 200
    r = await client.get("/api/game-state")
    assert r.status_code == 200
    body = r.json()
    assert body["currentLocationIndex"] == 2
    assert body["visibleClueIndices"] == [0, 1]
    assert body["completedLocations"] == [0, 1]
    assert body["skippedLocations"] == []


@pytest.mark.asyncio
async def test_invalid_game_state_is_400(client):
    r = await client.post("/api/game-state", json={"currentLocationIndex": -1})
    assert r.status_code == 400
    r = await client.post("/api/game-state", json={"currentLocationIndex": "two"})
    assert r.status_code == 400


@pytest.mark.asyncio
async def test_play_through_server_side(client):
    await register(client, f"player_{uuid.uuid4().hex[:8]}")
    locs = (await client.get("/api/locations")).json()

    r = await client.post("/api/game-state/start")
    assert r.status_code == 200
    state = r.json()["state"]
    assert state["showIntro"] is False and state["startTime"] is not None

    r = await client.post("/api/game-state/answer", json={"answer": "definitely wrong"})
    assert r.json()["correct"] is False

    r = await client.post("/api/game-state/next-clue")
    assert r.json()["state"]["visibleClueIndices"] == [0, 1]

    r = await client.post("/api/game-state/skip")
    body = r.json()
    assert body["revealedAnswer"] == locs[0]["answer"]
    assert body["state"]["currentLocationIndex"] == 1

    for loc in locs[1:]:
        r = await client.post("/api/game-state/answer", json={"answer": loc["answer"]})
        assert r.json()["correct"] is True

    final = (await client.get("/api/game-state")).json()
    assert final["endTime"] is not None
    assert len(final["completedLocations"]) == len(locs)
    assert final["skippedLocations"] == [0]

    summary = (await client.get("/api/game-state/summary")).json()
    assert summary["phase"] == "completed"
    assert summary["completed"] == len(locs)
    assert summary["skipped"] == 1

    r = await client.post("/api/game-state/restart")
    state = r.json()["state"]
    assert state["currentLocationIndex"] == 0
    assert state["endTime"] is None
    assert state["visibleClueIndices"] == [0]


@pytest.mark.asyncio
async def test_state_is_per_player(client):
    await register(client, f"alice_{uuid.uuid4().hex[:8]}")
    await client.post("/api/game-state/start")
    await client.post("/api/game-state/answer", json={"answer": "Prime Pizza"})
    assert (await client.get("/api/game-state")).json()["currentLocationIndex"] == 1

    client.cookies.clear()
    await register(client, f"bob_{uuid.uuid4().hex[:8]}")
    assert (await client.get("/api/game-state")).status_code == 404


@pytest.mark.asyncio
async def test_anonymous_player_gets_cookie(client):
    r = await client.post("/api/game-state/start")
    assert r.status_code == 200
    assert "hunt_player" in client.cookies
    # same cookie, same state
    assert (await client.get("/api/game-state")).json()["showIntro"] is False

    client.cookies.clear()
    assert (await client.get("/api/game-state")).status_code == 404


@pytest.mark.asyncio
async def test_seeding_rejects_location_without_clues(sessionmaker):
    from scavenger.services.locations import seed_default_locations
    async with sessionmaker() as session:
        with pytest.raises(ValueError):
            await seed_default_locations(session, [{"name": "Blank", "clues": [], "answer": "Blank"}])
