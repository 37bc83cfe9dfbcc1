"""Exceptions raised across the bingo engine."""


class BingoError(Exception):
    """Base class for engine errors."""


class ConfigurationError(BingoError):
    """Boards, items, teams or rosters could not be loaded.

    Aborts the current processing pass; nothing is committed.
    """


class ActivityFetchError(BingoError):
    """An activity source could not be read.

    Scoped to one source (clan feed or a single guest). The pass continues
    with whatever other sources returned.
    """

    def __init__(self, source: str, message: str):
        super().__init__(f"{source}: {message}")
        self.source = source
        self.message = message
