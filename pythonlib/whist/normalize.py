import numpy as np

from .errors import EmptyHistogramError


def normalize(counts):
    """Divide raw weighted counts by their total so the result sums to 1."""
    counts = np.asarray(counts, dtype=float)
    total = counts.sum()
    if total == 0.0:
        raise EmptyHistogramError(
            "total histogram weight is zero (no samples in range, "
            "or weights cancel); cannot normalize"
        )
    return counts / total
