"""Error taxonomy shared by the graph, walk and analysis layers.

Every error raised on purpose by the package derives from RWTesterError so
that the command-line entry point can report it and exit cleanly. None of
these are retried: a failed precondition aborts only the requested operation.
"""


class RWTesterError(Exception):
    """Base class for all errors raised by rwtester."""


class VertexNotFoundError(RWTesterError, KeyError):
    """Raised when a referenced vertex name is absent from the graph."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(name)

    def __str__(self) -> str:
        return f"No such vertex: {self.name!r}"


class MalformedInputError(RWTesterError):
    """Raised when a graph text file violates the line grammar.

    Attributes:
        line_no: 1-based number of the offending line.
        reason: Short description of the violation.
    """

    def __init__(self, line_no: int, reason: str) -> None:
        self.line_no = line_no
        self.reason = reason
        super().__init__(f"Line {line_no}: {reason}")


class InvalidConfigurationError(RWTesterError, ValueError):
    """Raised when a run is requested that cannot be carried out."""


class UnreachableCoverageError(InvalidConfigurationError):
    """Raised when the requested coverage exceeds what BFS can reach."""

    def __init__(self, requested: int, reachable: int, start: str) -> None:
        self.requested = requested
        self.reachable = reachable
        self.start = start
        super().__init__(
            f"Coverage {requested}% requested but only {reachable}% of the "
            f"graph is reachable from {start!r}"
        )


class UnreachableTargetError(InvalidConfigurationError):
    """Raised when the path target cannot be reached from the start vertex."""

    def __init__(self, start: str, target: str) -> None:
        self.start = start
        self.target = target
        super().__init__(f"Vertex {target!r} is not reachable from {start!r}")


class PreconditionError(RWTesterError, ValueError):
    """Raised when an object is constructed with invalid arguments."""


class VertexError(PreconditionError):
    """Raised on an invalid adjacency update, e.g. mixing weighted edges."""


class WalkStalledError(RWTesterError):
    """Raised when a walk cannot make progress towards its stop condition.

    Happens on a dead-end vertex or when the step limit is exhausted.
    """

    def __init__(self, message: str, time: int) -> None:
        self.time = time
        super().__init__(message)
