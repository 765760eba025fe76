# sampler.py
# -----------------------------------------------------------------------------
# Acceptance sampling: regenerate mazes with consecutive seeds until the
# solution covers the desired share of cells.
#
#   ratio = path_cell_count / cell_count
#   accept iff desired - eps < ratio < desired + eps   (strict both sides)
#
# Without max_attempts the loop only ends on acceptance; an epsilon narrower
# than the lattice's achievable ratios never terminates. survey.py helps
# choose epsilon.
# -----------------------------------------------------------------------------
import logging
import random
from dataclasses import dataclass
from typing import Iterator, Optional

from mazegen.errors import ConfigurationError, InconsistentTreeError, TargetUnreachableError
from mazegen.lattice import LatticeSpec
from mazegen.topology import DEF_ALGORITHM, Maze, generate_maze

logger = logging.getLogger(__name__)

DEF_REPORT_EVERY = 500
SEED_SPACE = 2 ** 32


@dataclass(frozen=True)
class Attempt:
    maze: Maze
    ratio: float


@dataclass(frozen=True)
class SamplingResult:
    maze: Maze
    attempts: int
    highest_ratio: float
    lowest_ratio: float

    @property
    def ratio(self) -> float:
        return self.maze.ratio

    @property
    def seed(self) -> int:
        return self.maze.seed


def attempt_generate(lattice: LatticeSpec, seed: int, algorithm: str = DEF_ALGORITHM) -> Attempt:
    maze = generate_maze(lattice, seed, algorithm)
    return Attempt(maze=maze, ratio=maze.ratio)


def within_tolerance(ratio: float, desired_ratio: float, epsilon: float) -> bool:
    return desired_ratio - epsilon < ratio < desired_ratio + epsilon


def check_target(desired_ratio: float, epsilon: float) -> None:
    if not 0.0 < desired_ratio <= 1.0:
        raise ConfigurationError(f"desired_ratio must be in (0, 1], got {desired_ratio}")
    if not epsilon >= 0.0:
        raise ConfigurationError(f"epsilon must be >= 0, got {epsilon}")


def seed_stream(base_seed: Optional[int] = None) -> Iterator[int]:
    """base_seed, base_seed + 1, ...; a random base is drawn when none is given."""
    if base_seed is None:
        base_seed = random.SystemRandom().randrange(SEED_SPACE)
        logger.info("Drawing attempt seeds from base seed %d", base_seed)
    seed = base_seed
    while True:
        yield seed
        seed += 1


def sample_maze(lattice: LatticeSpec, desired_ratio: float, epsilon: float, *,
                base_seed: Optional[int] = None,
                max_attempts: Optional[int] = None,
                algorithm: str = DEF_ALGORITHM,
                report_every: int = DEF_REPORT_EVERY) -> SamplingResult:
    """
    Generate mazes for `lattice` until one lands strictly within
    desired_ratio ± epsilon. Each attempt builds its own dual graph.

    Raises TargetUnreachableError once `max_attempts` attempts have failed.
    Attempts that hit InconsistentTreeError are logged, counted and skipped.
    """
    check_target(desired_ratio, epsilon)
    if max_attempts is not None and max_attempts < 1:
        raise ConfigurationError(f"max_attempts must be >= 1, got {max_attempts}")

    highest_ratio, lowest_ratio = 0.0, 1.0
    attempts = 0

    for seed in seed_stream(base_seed):
        if max_attempts is not None and attempts >= max_attempts:
            raise TargetUnreachableError(attempts, highest_ratio, lowest_ratio, desired_ratio, epsilon)
        attempts += 1

        try:
            attempt = attempt_generate(lattice, seed, algorithm)
        except InconsistentTreeError as exc:
            logger.warning("Attempt %d (seed %d) discarded: %s", attempts, seed, exc)
            continue

        highest_ratio = max(highest_ratio, attempt.ratio)
        lowest_ratio = min(lowest_ratio, attempt.ratio)

        if within_tolerance(attempt.ratio, desired_ratio, epsilon):
            logger.info("pathRatio = %.4f, count = %d, seed = %d", attempt.ratio, attempts, seed)
            return SamplingResult(maze=attempt.maze, attempts=attempts,
                                  highest_ratio=highest_ratio, lowest_ratio=lowest_ratio)

        if report_every and attempts % report_every == 0:
            logger.info("count = %d, highestRatio = %.4f, lowestRatio = %.4f",
                        attempts, highest_ratio, lowest_ratio)


__all__ = [
    "DEF_REPORT_EVERY", "Attempt", "SamplingResult",
    "attempt_generate", "within_tolerance", "check_target", "seed_stream", "sample_maze",
]
