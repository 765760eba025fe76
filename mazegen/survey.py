# survey.py
# -----------------------------------------------------------------------------
# Empirical distribution of path ratios for a lattice. Used to pick an
# epsilon that the acceptance loop can actually hit.
# -----------------------------------------------------------------------------
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

import numpy as np
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt

from mazegen.errors import ConfigurationError
from mazegen.lattice import LatticeSpec
from mazegen.sampler import attempt_generate
from mazegen.topology import DEF_ALGORITHM

PERCENTILES = (5, 25, 50, 75, 95)


@dataclass(frozen=True)
class RatioSurvey:
    ratios: np.ndarray
    base_seed: int

    @property
    def samples(self) -> int:
        return int(self.ratios.size)

    @property
    def lowest(self) -> float:
        return float(self.ratios.min())

    @property
    def highest(self) -> float:
        return float(self.ratios.max())

    @property
    def mean(self) -> float:
        return float(self.ratios.mean())

    @property
    def std(self) -> float:
        return float(self.ratios.std())

    def percentiles(self, qs: Tuple[int, ...] = PERCENTILES) -> Dict[int, float]:
        return {q: float(v) for q, v in zip(qs, np.percentile(self.ratios, qs))}

    def hit_rate(self, desired_ratio: float, epsilon: float) -> float:
        """Share of sampled mazes that the acceptance test would take."""
        hits = (self.ratios > desired_ratio - epsilon) & (self.ratios < desired_ratio + epsilon)
        return float(hits.mean())


def survey_ratios(lattice: LatticeSpec, samples: int, base_seed: int = 0,
                  algorithm: str = DEF_ALGORITHM) -> RatioSurvey:
    if samples < 1:
        raise ConfigurationError(f"samples must be >= 1, got {samples}")
    ratios = np.fromiter(
        (attempt_generate(lattice, base_seed + i, algorithm).ratio for i in range(samples)),
        dtype=np.float64, count=samples,
    )
    return RatioSurvey(ratios=ratios, base_seed=base_seed)


def plot_ratio_histogram(survey: RatioSurvey, out_png: str, bins: int = 30,
                         desired_ratio: Optional[float] = None, epsilon: Optional[float] = None):
    fig = plt.figure(figsize=(6.4, 4.8), dpi=100)
    ax = fig.add_subplot(111)
    ax.hist(survey.ratios, bins=bins, color='0.4')
    ax.set_xlabel("path cells / total cells")
    ax.set_ylabel("mazes")
    if desired_ratio is not None:
        ax.axvline(desired_ratio, color='red', linewidth=1.5)
        if epsilon:
            ax.axvspan(desired_ratio - epsilon, desired_ratio + epsilon, color='red', alpha=0.15)
    plt.tight_layout(pad=0.6)
    fig.savefig(out_png, dpi=100)
    plt.close(fig)


__all__ = ["PERCENTILES", "RatioSurvey", "survey_ratios", "plot_ratio_histogram"]
