"""Tests for the bracket batch and simulation workflows."""

import asyncio

import httpx
import pytest

from podstakes.calculator import (
    USER_NOT_IN_BRACKET,
    SimulationError,
    calculate_brackets,
    simulate_pool,
    simulate_tournament,
)
from podstakes.config import StakeConfig
from podstakes.exceptions import PlayerNotFoundError
from podstakes.models import Player
from podstakes.services.topdeck import TopdeckNotFoundError

BRACKET = "https://topdeck.gg/bracket/abc123"


def _run_brackets(make_client, urls, username):
    async def run():
        async with make_client() as client:
            return await calculate_brackets(client, urls, username)

    return asyncio.run(run())


def test_calculate_brackets_prices_pod(make_client):
    results = _run_brackets(make_client, [BRACKET], "alice")

    assert len(results) == 1
    result = results[0]
    assert result.url == BRACKET
    assert result.error is None
    assert [p.username for p in result.pod] == ["alice", "bob", "carol", "dave"]
    assert result.outcomes.win == pytest.approx(17.5)
    assert result.outcomes.loss == pytest.approx(-7.0)
    assert result.outcomes.draw == pytest.approx(-0.875)


def test_calculate_brackets_user_missing_is_per_item(make_client, upstream):
    upstream.tournaments["def456"] = httpx.Response(200, json={"rounds": []})

    results = _run_brackets(
        make_client,
        ["https://topdeck.gg/bracket/def456", BRACKET],
        "alice",
    )

    assert results[0].error == USER_NOT_IN_BRACKET
    assert results[0].pod is None
    assert results[1].outcomes is not None


def test_calculate_brackets_fetches_in_order(make_client, upstream):
    upstream.tournaments["def456"] = httpx.Response(200, json={})

    _run_brackets(
        make_client,
        [BRACKET, "https://topdeck.gg/bracket/def456", BRACKET],
        "bob",
    )

    assert [r.url.path for r in upstream.requests] == [
        "/v2/tournaments/abc123",
        "/v2/tournaments/def456",
        "/v2/tournaments/abc123",
    ]


def test_calculate_brackets_failure_aborts_batch(make_client, upstream):
    with pytest.raises(TopdeckNotFoundError):
        _run_brackets(
            make_client,
            ["https://topdeck.gg/bracket/missing", BRACKET],
            "alice",
        )

    assert len(upstream.requests) == 1


def test_calculate_brackets_empty_urls(make_client, upstream):
    assert _run_brackets(make_client, [], "alice") == []
    assert upstream.requests == []


def test_simulate_pool():
    players = [
        Player(username="A", points=100),
        Player(username="B", points=200),
        Player(username="C", points=0),
        Player(username="D", points=50),
    ]

    result = simulate_pool(players)

    assert result.players == players
    assert result.pod is None
    assert set(result.results) == {"A", "B", "C", "D"}
    assert result.results["A"].draw == pytest.approx(-0.875)
    assert result.results["B"].win == pytest.approx(10.5)


def test_simulate_pool_requires_four_players():
    with pytest.raises(SimulationError, match="exactly 4 players"):
        simulate_pool([Player(username="A", points=1)])


def test_simulate_pool_respects_configured_size():
    stakes = StakeConfig(pod_size=2)
    players = [Player(username="A", points=100), Player(username="B", points=100)]

    result = simulate_pool(players, stakes=stakes)

    assert result.results["A"].win == pytest.approx(7.0)


def test_simulate_tournament(make_client):
    async def run():
        async with make_client() as client:
            return await simulate_tournament(
                client, "abc123", ["kate", "alice", "hank", "dup"]
            )

    result = asyncio.run(run())

    assert [p.username for p in result.pod] == ["kate", "alice", "hank", "dup"]
    assert [p.points for p in result.pod] == [80, 100, 10, 100]
    # pool = 0.07 * 290 = 20.3
    assert result.results["alice"].win == pytest.approx(13.3)


def test_simulate_tournament_requires_four_usernames(make_client, upstream):
    async def run():
        async with make_client() as client:
            return await simulate_tournament(client, "abc123", ["alice"])

    with pytest.raises(SimulationError, match="exactly 4 usernames"):
        asyncio.run(run())

    assert upstream.requests == []


def test_simulate_tournament_missing_player(make_client):
    async def run():
        async with make_client() as client:
            return await simulate_tournament(
                client, "abc123", ["alice", "bob", "ghost", "carol"]
            )

    with pytest.raises(PlayerNotFoundError, match="ghost"):
        asyncio.run(run())
