"""Pod and roster resolution over decoded tournament data."""

from collections.abc import Iterator, Sequence
from urllib.parse import urlsplit

from podstakes.exceptions import PlayerNotFoundError
from podstakes.models import Player
from podstakes.services.topdeck.models import Pod, Tournament


def tournament_id_from_url(url: str) -> str:
    """Return the last path segment of a bracket URL."""
    path = urlsplit(url.strip()).path
    return path.rstrip("/").rsplit("/", 1)[-1]


def find_pod(pods: Sequence[Pod], username: str) -> Pod | None:
    """First pod in list order that contains `username`."""
    for pod in pods:
        if pod.has_player(username):
            return pod
    return None


def find_player_pod(tournament: Tournament, username: str) -> Pod | None:
    """Resolve the first-round pod holding `username`."""
    return find_pod(tournament.first_round_pods, username)


def iter_roster(tournament: Tournament) -> Iterator[Player]:
    """Every player record, rounds then pods then players."""
    for round_ in tournament.rounds:
        for pod in round_.pods:
            yield from pod.players


def lookup_roster(tournament: Tournament, usernames: Sequence[str]) -> list[Player]:
    """Resolve each username to its first record across all rounds.

    Raises:
        PlayerNotFoundError: For the first requested username missing from
            the roster.
    """
    roster: dict[str, Player] = {}
    for player in iter_roster(tournament):
        roster.setdefault(player.username, player)

    resolved = []
    for username in usernames:
        if username not in roster:
            raise PlayerNotFoundError(username, where="tournament")
        resolved.append(Player(username=username, points=roster[username].points))
    return resolved
