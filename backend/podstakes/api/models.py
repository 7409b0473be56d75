"""Request bodies accepted by the API.

Every field is optional so that missing input is answered with an inline
`error` payload by the route, not with a validation status code.
"""

from pydantic import BaseModel, ConfigDict, Field

from podstakes.models import Player


class CalcRequest(BaseModel):
    urls: list[str] | None = None
    username: str | None = None


class SimulateRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    players: list[Player] | None = None
    tournament_id: str | int | None = Field(default=None, alias="tournamentId")
    usernames: list[str] | None = None
