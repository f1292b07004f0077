import numpy as np

from .binning import EXCLUDED, bin_indices, bin_indices_uniform, is_uniform
from .errors import DegenerateEdgesError, ShapeError
from .normalize import normalize


def as_weights(weights, n: int):
    """Float weight vector of length n, or None for unit weights."""
    if weights is None:
        return None
    w = np.asarray(weights, dtype=float)
    if w.ndim == 2 and 1 in w.shape:
        w = w.ravel()
    if w.ndim != 1 or w.shape[0] != n:
        raise ShapeError(
            f"weights must have one entry per sample ({n}), got shape {w.shape}"
        )
    return w


class HistND:
    """
    Weighted N-D histogram with bincount + flat indexing.

    Parameters
    ----------
    edges : sequence of 1D arrays
        Bin edges per axis, length D. Bins are left-closed, right-open
        [e[i], e[i+1]), except the last bin of each axis which also
        contains its upper edge. Edges must be non-decreasing; this is
        not checked.
    """

    def __init__(self, edges):
        # Copy edges so external modifications don't affect us
        self.edges = [np.array(e, dtype=float, copy=True) for e in edges]
        self.D = len(self.edges)
        if self.D == 0:
            raise ShapeError("Need at least 1 dimension.")

        for k, e in enumerate(self.edges):
            if e.ndim != 1:
                raise ShapeError(f"Edges for axis {k} must be 1D, got shape {e.shape}.")
            if e.size < 2:
                raise DegenerateEdgesError(
                    f"Edges for axis {k} need at least 2 entries, got {e.size}."
                )

        self.nbins = np.array([len(e) - 1 for e in self.edges], dtype=np.int64)
        self.size = int(np.prod(self.nbins))
        self.counts = np.zeros(tuple(self.nbins), dtype=float)

        self._uniform = [is_uniform(e) for e in self.edges]

        # C-order strides for flattening indices: flat = sum(b_k * stride_k)
        self._strides = np.empty(self.D, dtype=np.int64)
        acc = 1
        for k in range(self.D - 1, -1, -1):
            self._strides[k] = acc
            acc *= self.nbins[k]

    # ---------- arithmetic ----------
    def __add__(self, other):
        """Return a new histogram that is the elementwise sum of self and other."""
        if not isinstance(other, HistND):
            return NotImplemented
        self._check_compat(other)
        out = self.copy()
        out.counts += other.counts
        return out

    def __iadd__(self, other):
        """In-place elementwise sum (self += other)."""
        if not isinstance(other, HistND):
            return NotImplemented
        self._check_compat(other)
        self.counts += other.counts
        return self

    def __radd__(self, other):
        # supports sum(list_of_hists)
        if isinstance(other, (int, float)) and other == 0:
            return self.copy()
        return NotImplemented

    # ---------- filling ----------
    def _bin_axes(self, coords):
        bins = []
        for e, uni, v in zip(self.edges, self._uniform, coords):
            bins.append(bin_indices_uniform(e, v) if uni else bin_indices(e, v))
        return bins

    def _accumulate(self, bins, weights=None):
        # a row is dropped if any axis excluded it
        ok = np.ones_like(bins[0], dtype=bool)
        for b in bins:
            ok &= b != EXCLUDED
        if not np.any(ok):
            return

        b_ok = [b[ok] for b in bins]

        flat = np.zeros_like(b_ok[0], dtype=np.int64)
        for k in range(self.D):
            flat += b_ok[k] * self._strides[k]

        if weights is None:
            add = np.bincount(flat, minlength=self.size).astype(float)
        else:
            add = np.bincount(flat, weights=weights[ok], minlength=self.size)

        self.counts += add.reshape(self.counts.shape)

    def fill(self, samples, weights=None):
        """
        Fill with an (n, D) sample matrix, one optional weight per row.
        """
        a = np.asarray(samples, dtype=float)
        if a.ndim != 2 or a.shape[1] != self.D:
            raise ShapeError(
                f"Expected samples of shape (n, {self.D}), got {a.shape}."
            )
        w = as_weights(weights, a.shape[0])
        if a.shape[0] == 0:
            return
        self._accumulate(self._bin_axes(a.T), w)

    def fill_columns(self, *coords, weights=None):
        """
        Fill with raw coordinates (one array per axis).
        """
        if len(coords) != self.D:
            raise ShapeError(f"Expected {self.D} coordinate arrays.")
        arrs = [np.atleast_1d(np.asarray(c, dtype=float)) for c in coords]
        n = arrs[0].shape[0]
        if any(a.ndim != 1 or a.shape[0] != n for a in arrs):
            raise ShapeError("Coordinate arrays must be 1D and of equal length.")
        w = as_weights(weights, n)
        if n == 0:
            return
        self._accumulate(self._bin_axes(arrs), w)

    # ---------- utilities ----------
    def merge_(self, other):
        """In-place merge (same as +=)."""
        return self.__iadd__(other)

    def total(self):
        """Sum of accumulated weights over all bins."""
        return float(self.counts.sum())

    def normalized(self):
        """
        Return a new histogram whose counts sum to one.

        Raises EmptyHistogramError when the total weight is zero.
        """
        out = self.copy()
        out.counts = normalize(self.counts)
        return out

    def normalize_inplace(self):
        """Normalize this histogram in-place so its counts sum to one."""
        self.counts = normalize(self.counts)
        return self

    def to_numpy(self):
        """Return (counts copy, edges copy list) similar to numpy.histogramdd outputs."""
        return self.counts.copy(), [e.copy() for e in self.edges]

    def copy(self):
        """Deep copy of the histogram structure and contents."""
        out = HistND([e.copy() for e in self.edges])
        out.counts = self.counts.copy()
        return out

    def _check_compat(self, other):
        """Ensure histograms have identical binning."""
        if self.D != other.D:
            raise ShapeError("Histogram dimensionality mismatch.")

        if not np.array_equal(self.nbins, other.nbins):
            raise ShapeError("Histogram bin counts differ.")

        for a, b in zip(self.edges, other.edges):
            if not np.array_equal(a, b):
                raise ShapeError("Histogram edges differ.")

    def __repr__(self):
        return f"HistND(nbins={tuple(self.nbins.tolist())}, total={self.total():g})"
