"""forkpoint error types."""


class ForkpointError(Exception):
    """Base class for errors raised by forkpoint."""


class InvalidEndpoint(ForkpointError, LookupError):
    """Raised when a reference or commit id is not in the graph.

    Attributes:
        name: The reference or commit id that failed to resolve.
    """

    def __init__(self, name: str, detail: str | None = None) -> None:
        self.name = name
        message = f"Unknown revision: {name!r}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)


class NoCommonAncestor(ForkpointError):
    """Raised when two commits have disjoint histories.

    This is an expected outcome for unrelated roots. Callers should
    fall back to rendering the unfiltered history.

    Attributes:
        left: The accumulated ancestor at the failing step.
        right: The endpoint it could not be combined with.
    """

    def __init__(self, left: str, right: str) -> None:
        self.left = left
        self.right = right
        super().__init__(f"No common ancestor between {left} and {right}")


class EmptyEndpointSet(ForkpointError, ValueError):
    """Raised when no endpoints are supplied."""

    def __init__(self) -> None:
        super().__init__("At least one endpoint is required")
