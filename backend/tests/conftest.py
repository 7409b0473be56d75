"""Shared fixtures: Topdeck payloads and a stubbed upstream transport."""

from collections.abc import Callable

import httpx
import pytest

from podstakes.services.topdeck import TopdeckClient, TopdeckConfig

API_KEY = "test-key"


def make_tournament_payload() -> dict:
    """Two rounds; 'dup' sits in two first-round pods and 'carol' repeats in round 2."""
    return {
        "name": "Weekly Commander",
        "rounds": [
            {
                "round": 1,
                "pods": [
                    {
                        "table": 1,
                        "players": [
                            {"username": "alice", "points": 100},
                            {"username": "bob", "points": 200},
                            {"username": "carol", "points": 0},
                            {"username": "dave", "points": 50},
                        ],
                    },
                    {
                        "table": 2,
                        "players": [
                            {"username": "erin", "points": 100},
                            {"username": "dup", "points": 100},
                            {"username": "frank", "points": 100},
                            {"username": "gina", "points": 100},
                        ],
                    },
                    {
                        "table": 3,
                        "players": [
                            {"username": "dup", "points": 400},
                            {"username": "hank", "points": 10},
                            {"username": "ivy", "points": 20},
                            {"username": "jack", "points": 30},
                        ],
                    },
                ],
            },
            {
                "round": 2,
                "pods": [
                    {
                        "players": [
                            {"username": "carol", "points": 999},
                            {"username": "kate", "points": 80},
                        ],
                    },
                ],
            },
        ],
    }


class UpstreamStub:
    """Routes requests to canned responses and records what was asked for."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.tournaments: dict[str, httpx.Response] = {}
        self.players_response: httpx.Response = httpx.Response(200, json={"players": []})

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        if path.startswith("/v2/tournaments/"):
            tournament_id = path.rsplit("/", 1)[-1]
            return self.tournaments.get(
                tournament_id, httpx.Response(404, json={"error": "not found"})
            )
        if path == "/v2/players":
            return self.players_response
        return httpx.Response(404)

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def tournament_payload() -> dict:
    return make_tournament_payload()


@pytest.fixture
def upstream(tournament_payload) -> UpstreamStub:
    stub = UpstreamStub()
    stub.tournaments["abc123"] = httpx.Response(200, json=tournament_payload)
    return stub


@pytest.fixture
def make_client(upstream) -> Callable[..., TopdeckClient]:
    def factory(**config_overrides) -> TopdeckClient:
        return TopdeckClient(
            TopdeckConfig(**config_overrides),
            api_key=API_KEY,
            transport=upstream.transport(),
        )

    return factory
