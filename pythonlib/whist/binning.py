import numpy as np

from .errors import DegenerateEdgesError, ShapeError

# bin index for values outside [edges[0], edges[-1]]
EXCLUDED = -1


def _as_edges(edges):
    e = np.asarray(edges, dtype=float)
    if e.ndim != 1:
        raise ShapeError(f"edges must be 1D, got shape {e.shape}")
    if e.size < 2:
        raise DegenerateEdgesError(
            f"need at least 2 edges to form a bin, got {e.size}"
        )
    return e


def bin_indices(edges, values):
    """
    Bin index per value, or EXCLUDED.

    Bins are [e[q], e[q+1]) except the last one, which is closed:
    [e[-2], e[-1]]. Edges must be non-decreasing (not checked).
    """
    e = _as_edges(edges)
    nbins = e.size - 1
    vals = np.atleast_1d(np.asarray(values, dtype=float))

    b = np.searchsorted(e, vals, side="right").astype(np.int64) - 1
    b[vals == e[-1]] = nbins - 1
    b[(b < 0) | (b >= nbins)] = EXCLUDED
    return b


def bin_indices_uniform(edges, values):
    """
    Same result as bin_indices for equally spaced edges, via arithmetic.

    The floor estimate is corrected by one bin against the actual edges, so
    rounding in the scale factor never moves a value across an edge.
    """
    e = _as_edges(edges)
    nbins = e.size - 1
    vals = np.atleast_1d(np.asarray(values, dtype=float))

    with np.errstate(over="ignore", divide="ignore"):
        scale = nbins / (e[-1] - e[0])
    if not (np.isfinite(scale) and scale > 0):
        return bin_indices(e, vals)

    inside = (vals >= e[0]) & (vals <= e[-1])
    with np.errstate(invalid="ignore"):
        est = np.floor((vals - e[0]) * scale)
    b = np.clip(np.nan_to_num(est), 0, nbins - 1).astype(np.int64)

    b -= (vals < e[b]) & (b > 0)
    b += (vals >= e[b + 1]) & (b < nbins - 1)
    b[~inside] = EXCLUDED
    return b


def is_uniform(edges) -> bool:
    e = np.asarray(edges, dtype=float)
    if e.size < 2 or not np.all(np.isfinite(e)):
        return False
    # span must stay finite, or the scale in bin_indices_uniform collapses to 0
    with np.errstate(over="ignore"):
        span = e[-1] - e[0]
        d = np.diff(e)
    if not (np.isfinite(span) and span > 0 and np.all(np.isfinite(d))):
        return False
    return bool(d[0] > 0 and np.allclose(d, d[0], rtol=1e-9, atol=0.0))


def bin_index(edges, value) -> int:
    """Scalar version of bin_indices."""
    return int(bin_indices(edges, [value])[0])
