"""Zero-sum wager redistribution for a pod.

Every player stakes a fixed share of their points into a common pool. The
winner collects the other stakes, a loser forfeits their own, and a draw
splits the pool evenly before netting out the player's stake.
"""

import math
from collections.abc import Sequence

from podstakes.exceptions import PlayerNotFoundError
from podstakes.models import Outcome, Player

STAKE_RATE = 0.07
DRAW_SPLIT = 4


def calculate_stake(points: float, stake_rate: float = STAKE_RATE) -> float:
    """Points a player puts into the pool."""
    return points * stake_rate


def calculate_outcomes(
    players: Sequence[Player],
    username: str,
    stake_rate: float = STAKE_RATE,
    draw_split: int = DRAW_SPLIT,
) -> Outcome:
    """Calculate win/loss/draw point changes for `username` within `players`.

    The draw share always divides the pool by `draw_split` (4), whatever the
    number of players passed in.

    Raises:
        PlayerNotFoundError: If no player has the given username.
    """
    stakes = [calculate_stake(p.points, stake_rate) for p in players]
    # fsum keeps the pool independent of player order
    total_pool = math.fsum(stakes)

    your_stake = next(
        (stake for p, stake in zip(players, stakes) if p.username == username),
        None,
    )
    if your_stake is None:
        raise PlayerNotFoundError(username)

    return Outcome(
        win=total_pool - your_stake,
        loss=-your_stake,
        draw=total_pool / draw_split - your_stake,
    )


def calculate_pod_outcomes(
    players: Sequence[Player],
    stake_rate: float = STAKE_RATE,
    draw_split: int = DRAW_SPLIT,
) -> dict[str, Outcome]:
    """Outcomes for every player in the pod, keyed by username."""
    return {
        p.username: calculate_outcomes(players, p.username, stake_rate, draw_split)
        for p in players
    }
