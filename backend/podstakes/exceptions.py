"""Domain exceptions for pod resolution and outcome calculation."""


class PlayerNotFoundError(LookupError):
    """A requested username is absent from the pod or roster being evaluated."""

    def __init__(self, username: str, where: str = "pod"):
        super().__init__(f"Player not found in {where}: {username}")
        self.username = username
        self.where = where
