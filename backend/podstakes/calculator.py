"""Bracket and simulation workflows shared by the API and the CLI.

`calculate_brackets` walks a list of bracket URLs one at a time, finds the
user's first-round pod in each and prices it. `simulate_pool` and
`simulate_tournament` price a fixed four-player group for every member.
"""

import logging
from collections.abc import Sequence

from pydantic import BaseModel

from podstakes.config import StakeConfig
from podstakes.models import Outcome, Player
from podstakes.outcomes import calculate_outcomes, calculate_pod_outcomes
from podstakes.pods import find_player_pod, lookup_roster, tournament_id_from_url
from podstakes.services.topdeck import TopdeckClient

logger = logging.getLogger(__name__)

USER_NOT_IN_BRACKET = "User not found in this bracket."


class SimulationError(ValueError):
    """Simulation input rejected before any calculation."""


class BracketResult(BaseModel):
    url: str
    pod: list[Player] | None = None
    outcomes: Outcome | None = None
    error: str | None = None


class SimulationResult(BaseModel):
    players: list[Player] | None = None
    pod: list[Player] | None = None
    results: dict[str, Outcome]


async def calculate_brackets(
    client: TopdeckClient,
    urls: Sequence[str],
    username: str,
    stakes: StakeConfig | None = None,
) -> list[BracketResult]:
    """Price `username`'s pod in each bracket, in URL order.

    A bracket without the user yields an error item. Upstream or decoding
    failures propagate and abort the rest of the batch.
    """
    stakes = stakes or StakeConfig()
    results: list[BracketResult] = []

    for url in urls:
        tournament_id = tournament_id_from_url(url)
        tournament = await client.get_tournament(tournament_id)
        pod = find_player_pod(tournament, username)

        if pod is None:
            logger.info(f"{username} not found in bracket {tournament_id}")
            results.append(BracketResult(url=url, error=USER_NOT_IN_BRACKET))
            continue

        players = [Player(username=p.username, points=p.points) for p in pod.players]
        outcomes = calculate_outcomes(
            players,
            username,
            stake_rate=stakes.stake_rate,
            draw_split=stakes.draw_split,
        )
        results.append(BracketResult(url=url, pod=players, outcomes=outcomes))

    return results


def simulate_pool(
    players: Sequence[Player],
    stakes: StakeConfig | None = None,
) -> SimulationResult:
    """Price an explicit group of players against each other.

    Raises:
        SimulationError: If the player count is not the pod size.
    """
    stakes = stakes or StakeConfig()
    if len(players) != stakes.pod_size:
        raise SimulationError(f"You must provide exactly {stakes.pod_size} players.")

    players = list(players)
    results = calculate_pod_outcomes(
        players, stake_rate=stakes.stake_rate, draw_split=stakes.draw_split
    )
    return SimulationResult(players=players, results=results)


async def simulate_tournament(
    client: TopdeckClient,
    tournament_id: str,
    usernames: Sequence[str],
    stakes: StakeConfig | None = None,
) -> SimulationResult:
    """Look the usernames up in a tournament roster and price them as one pod.

    Raises:
        SimulationError: If the username count is not the pod size.
        PlayerNotFoundError: If a username is absent from every round.
    """
    stakes = stakes or StakeConfig()
    if len(usernames) != stakes.pod_size:
        raise SimulationError(f"You must provide exactly {stakes.pod_size} usernames.")

    tournament = await client.get_tournament(tournament_id)
    pod = lookup_roster(tournament, usernames)
    results = calculate_pod_outcomes(
        pod, stake_rate=stakes.stake_rate, draw_split=stakes.draw_split
    )
    return SimulationResult(pod=pod, results=results)
