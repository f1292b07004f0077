from __future__ import annotations

from dataclasses import dataclass
from numbers import Integral, Real
from typing import Any, List, Sequence, Tuple

import numpy as np

from .errors import DegenerateEdgesError, ShapeError

# Widening applied to the observed range of auto-generated edges.
EPS = np.finfo(float).eps


@dataclass(frozen=True)
class Scalar:
    """One edge spec (bin count or explicit edges) broadcast to every axis."""

    spec: Any


@dataclass(frozen=True)
class PerDimension:
    """One edge spec per axis; length must equal the sample dimension."""

    specs: Tuple[Any, ...]

    def __init__(self, specs):
        object.__setattr__(self, "specs", tuple(specs))

    def __len__(self):
        return len(self.specs)


def _is_count(x) -> bool:
    if isinstance(x, (bool, np.bool_)):
        return False
    if isinstance(x, Integral):
        return True
    return isinstance(x, Real) and float(x).is_integer()


def _is_number(x) -> bool:
    return isinstance(x, Real) and not isinstance(x, (bool, np.bool_))


def _is_edge_sequence(x) -> bool:
    if isinstance(x, (str, bytes)):
        return False
    if isinstance(x, np.ndarray):
        return x.ndim == 1
    if isinstance(x, (list, tuple)):
        return all(_is_number(v) for v in x)
    return False


def _check_one(spec):
    if _is_count(spec):
        if int(spec) < 1:
            raise DegenerateEdgesError(f"bin count must be >= 1, got {spec!r}")
        return int(spec)
    if _is_edge_sequence(spec):
        return spec
    raise ShapeError(
        f"edge spec must be a bin count or a 1D edge sequence, got {spec!r}"
    )


def as_edge_spec(spec, ndim: int) -> Scalar | PerDimension:
    """
    Classify a raw edge specification for samples with `ndim` dimensions.

    A count or a flat sequence of numbers is broadcast (`Scalar`). A list or
    tuple holding at least one nested sequence, a 2D array, or an explicit
    `PerDimension` is a per-axis spec and must have exactly `ndim` entries.
    Per-axis bin counts alone, e.g. ``[5, 10]``, read as explicit edges;
    spell them ``PerDimension([5, 10])``.
    """
    if isinstance(spec, Scalar):
        return Scalar(_check_one(spec.spec))

    if isinstance(spec, PerDimension):
        per_dim = spec
    elif isinstance(spec, np.ndarray) and spec.ndim == 2:
        per_dim = PerDimension(list(spec))
    elif isinstance(spec, (list, tuple)) and not _is_edge_sequence(spec):
        per_dim = PerDimension(spec)
    else:
        return Scalar(_check_one(spec))

    if len(per_dim) != ndim:
        raise ShapeError(
            f"per-dimension edge spec has {len(per_dim)} entries, "
            f"samples have {ndim} dimensions"
        )
    return PerDimension([_check_one(s) for s in per_dim.specs])


def auto_edges(column, nbins: int) -> np.ndarray:
    """
    Equally spaced edges from just below min(column) to just above max(column).

    Raises DegenerateEdgesError if the column holds infinite values, since
    no finite edges can cover them.
    """
    col = np.asarray(column, dtype=float)
    col = col[~np.isnan(col)]
    if col.size == 0:
        lo = hi = 0.0
    else:
        lo, hi = col.min(), col.max()
    if not (np.isfinite(lo) and np.isfinite(hi)):
        raise DegenerateEdgesError(
            f"cannot auto-generate edges over an infinite range [{lo}, {hi}]"
        )

    lo, hi = lo - EPS, hi + EPS
    with np.errstate(over="ignore"):
        span = hi - lo
    if np.isfinite(span):
        return np.linspace(lo, hi, int(nbins) + 1)
    # hi - lo overflows: interpolate without forming the span
    t = np.linspace(0.0, 1.0, int(nbins) + 1)
    return lo * (1.0 - t) + hi * t


def resolve_edges(samples, spec) -> List[np.ndarray]:
    """
    Turn an edge specification into one concrete edge array per axis.

    Parameters
    ----------
    samples : ndarray, shape (n, d)
        Float sample matrix; only used to range auto-generated edges.
    spec : int, sequence, list of those, Scalar or PerDimension
        See :func:`as_edge_spec`.

    Notes
    -----
    Explicit edges are passed through unchanged. They must be
    monotonically non-decreasing; this is not checked and bin assignment
    for unsorted edges is undefined.
    """
    samples = np.asarray(samples, dtype=float)
    if samples.ndim != 2:
        raise ShapeError(f"samples must be 2D (n, d), got shape {samples.shape}")
    ndim = samples.shape[1]

    spec = as_edge_spec(spec, ndim)
    per_axis: Sequence[Any] = (
        [spec.spec] * ndim if isinstance(spec, Scalar) else spec.specs
    )

    edges = []
    for k, s in enumerate(per_axis):
        if _is_count(s):
            edges.append(auto_edges(samples[:, k], s))
        else:
            edges.append(np.array(s, dtype=float, copy=True))
    return edges
