from collections.abc import Sequence

import numpy as np

from common.errors import EmptyInput, InvalidRank


def validate_rank(p: float) -> None:
    if p <= 0 or p > 100:
        raise InvalidRank(p)


def nearest_rank_index(p: int, n: int) -> int:
    """
    0-based index ceil(p/100 * n) into n sorted samples, clamped to the last one.
    """
    k = int(-(-p * n // 100))
    return min(k, n - 1)


def percentile[T: (int, float)](p: int, samples: Sequence[T]) -> T:
    """
    Nearest-rank percentile: always returns one of the samples, never an
    interpolated value. The caller's sequence is left in its original order.
    """
    validate_rank(p)
    if len(samples) == 0:
        raise EmptyInput()

    ordered = np.sort(np.asarray(samples))
    return ordered[nearest_rank_index(p, len(ordered))].item()
