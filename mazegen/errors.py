# errors.py
# -----------------------------------------------------------------------------
# Exceptions raised by the maze generator.
# -----------------------------------------------------------------------------


class MazeError(Exception):
    """Base class for every error raised by mazegen."""


class GraphError(MazeError, ValueError):
    """Vertex membership, duplicate edge or self-loop violations."""


class ConfigurationError(MazeError, ValueError):
    """Bad lattice dimensions, sampling parameters, records or names."""


class DisconnectedGraphError(MazeError):
    """A spanning tree was requested over a graph that is not connected."""


class InconsistentTreeError(MazeError):
    """A generated tree broke its own invariants; only the current attempt is lost."""


class TargetUnreachableError(MazeError):
    def __init__(self, attempts: int, highest_ratio: float, lowest_ratio: float,
                 desired_ratio: float, epsilon: float):
        self.attempts = attempts
        self.highest_ratio = highest_ratio
        self.lowest_ratio = lowest_ratio
        self.desired_ratio = desired_ratio
        self.epsilon = epsilon
        super().__init__(
            f"No maze within {desired_ratio:.4f} ± {epsilon:.4f} after {attempts} attempts "
            f"(observed ratios {lowest_ratio:.4f}..{highest_ratio:.4f})"
        )


__all__ = [
    "MazeError", "GraphError", "ConfigurationError", "DisconnectedGraphError",
    "InconsistentTreeError", "TargetUnreachableError",
]
