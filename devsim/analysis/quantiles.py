"""Sort-and-index quartile summaries."""

import math
from dataclasses import dataclass
from typing import List, Sequence, Tuple

import numpy as np


def quartile_indices(n: int) -> Tuple[int, int, int]:
    """Indices of q1, median and q3 in a sorted sequence of length ``n``."""
    return math.floor(0.25 * n), math.floor(0.5 * n), math.floor(0.75 * n)


@dataclass(frozen=True)
class DistributionSummary:
    """Five-number summary taken directly from sorted sample elements."""

    minimum: float
    q1: float
    median: float
    q3: float
    maximum: float

    def as_list(self) -> List[float]:
        return [self.minimum, self.q1, self.median, self.q3, self.maximum]


def summarize_sorted(values: Sequence[float]) -> DistributionSummary:
    """
    Summarize an already sorted sequence.

    No interpolation: each quartile is the element at its index, e.g. for
    ``[10, 20, 30, 40]`` q1 is index 1 (20), median index 2 (30) and q3
    index 3 (40).
    """
    n = len(values)
    if n == 0:
        raise ValueError("Cannot summarize an empty sample")

    i1, i2, i3 = quartile_indices(n)
    return DistributionSummary(
        minimum=values[0],
        q1=values[i1],
        median=values[i2],
        q3=values[i3],
        maximum=values[n - 1],
    )


def summarize(values: Sequence[float]) -> DistributionSummary:
    """Sort ``values`` and summarize them."""
    return summarize_sorted(np.sort(np.asarray(values)).tolist())
