"""Exception types raised by the Knight's Tour package."""


class KnightTourError(Exception):
    """Base class for all Knight's Tour errors."""


class InvalidBoardError(KnightTourError, ValueError):
    """The supplied board is malformed (wrong shape, bad cells, bad size)."""


class InvalidStartError(KnightTourError):
    """No knight position was supplied for a query."""

    def __init__(self, message: str = "Knight not placed."):
        super().__init__(message)


class SearchAborted(KnightTourError):
    """
    Raised inside a search to unwind the recursion when a deadline,
    cancellation request or node budget is hit.

    Never escapes BaseTourSolver.find_tour or solve; callers see an
    INCONCLUSIVE outcome.
    """

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason
