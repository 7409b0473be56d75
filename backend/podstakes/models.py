"""Domain models shared by the calculator, the API and the CLI."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator


class Player(BaseModel):
    """A player and their current point total."""

    username: str
    points: float = Field(default=0.0, ge=0, allow_inf_nan=False)

    @field_validator("points", mode="before")
    @classmethod
    def default_points(cls, v: Any) -> Any:
        return 0.0 if v is None else v

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> Player:
        return cls(
            username=data.get("username") or "",
            points=data.get("points"),
        )


class Outcome(BaseModel):
    """Net point change for one player under each result."""

    win: float
    loss: float
    draw: float
