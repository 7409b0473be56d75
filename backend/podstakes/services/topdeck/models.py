"""Decoded Topdeck.gg tournament payloads.

Only the fields the calculator reads are kept. Absent or null lists decode
to empty lists, so a tournament with no rounds simply has no pods.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from podstakes.models import Player


def _list_field(data: dict[str, Any], key: str) -> list[Any]:
    value = data.get(key)
    return value if isinstance(value, list) else []


class Pod(BaseModel):
    players: list[Player] = Field(default_factory=list)

    def has_player(self, username: str) -> bool:
        return any(p.username == username for p in self.players)

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> Pod:
        return cls(
            players=[Player.from_api(p) for p in _list_field(data, "players")]
        )


class Round(BaseModel):
    pods: list[Pod] = Field(default_factory=list)

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> Round:
        return cls(pods=[Pod.from_api(p) for p in _list_field(data, "pods")])


class Tournament(BaseModel):
    tournament_id: str = ""
    rounds: list[Round] = Field(default_factory=list)

    @property
    def first_round_pods(self) -> list[Pod]:
        if not self.rounds:
            return []
        return self.rounds[0].pods

    @classmethod
    def from_api(cls, data: dict[str, Any], tournament_id: str = "") -> Tournament:
        return cls(
            tournament_id=tournament_id,
            rounds=[Round.from_api(r) for r in _list_field(data, "rounds")],
        )
