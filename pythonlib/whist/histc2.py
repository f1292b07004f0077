from __future__ import annotations

import os
from concurrent.futures import ThreadPoolExecutor
from itertools import repeat

import numpy as np
from tqdm import tqdm

from .edges import resolve_edges
from .errors import ShapeError
from .histNd import HistND, as_weights
from .merging.merge import merge_histograms
from .normalize import normalize


def as_samples(samples) -> np.ndarray:
    """Float (n, d) sample matrix; a 1D input is n samples of one dimension."""
    a = np.asarray(samples, dtype=float)
    if a.ndim == 1:
        return a[:, None]
    if a.ndim != 2:
        raise ShapeError(f"samples must be a 2D (n, d) array, got shape {a.shape}")
    return a


def raw_histogram(samples, edges, weights=None) -> HistND:
    """
    Unnormalized weighted histogram of `samples`.

    Parameters
    ----------
    samples : array_like, shape (n, d) or (n,)
    edges : int, sequence of float, or list of those (one per dimension)
        A bin count generates equally spaced edges over the range of that
        dimension; an explicit sequence is used as-is and must be
        non-decreasing.
    weights : array_like, shape (n,), optional
        One weight per sample. Defaults to 1 for every sample.
    """
    a = as_samples(samples)
    w = as_weights(weights, a.shape[0])
    h = HistND(resolve_edges(a, edges))
    h.fill(a, w)
    return h


def histogram(samples, edges, weights=None) -> np.ndarray:
    """
    Normalized weighted histogram, shape (nbins_1, ..., nbins_d), summing to 1.

    The last bin of every axis is closed, so a sample equal to the last
    edge is counted. Samples outside the edges in any dimension are dropped.
    Raises EmptyHistogramError if nothing (or zero total weight) remains.
    """
    return normalize(raw_histogram(samples, edges, weights).counts)


def _fill_chunk(template, rows, weights):
    h = template.copy()
    h.fill(rows, weights)
    return h


def raw_histogram_parallel(
    samples,
    edges,
    weights=None,
    *,
    nchunks: int | None = None,
    max_workers: int | None = None,
    show_progressbar: bool = False,
) -> HistND:
    """
    raw_histogram over row chunks filled on a thread pool.

    Every chunk gets its own HistND; partials are summed at the end by tree
    reduction. Edges are resolved once on the full sample set.
    """
    a = as_samples(samples)
    w = as_weights(weights, a.shape[0])
    template = HistND(resolve_edges(a, edges))

    if nchunks is None:
        nchunks = max_workers or os.cpu_count() or 1
    nchunks = max(1, min(int(nchunks), a.shape[0]))

    row_chunks = np.array_split(a, nchunks)
    w_chunks = repeat(None) if w is None else np.array_split(w, nchunks)

    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        partials = list(
            tqdm(
                executor.map(_fill_chunk, repeat(template), row_chunks, w_chunks),
                total=len(row_chunks),
                desc="Filling chunks",
                dynamic_ncols=True,
                disable=not show_progressbar,
            )
        )

    return merge_histograms(partials)


def histogram_parallel(samples, edges, weights=None, **kwargs) -> np.ndarray:
    """Normalized histogram computed with raw_histogram_parallel."""
    return normalize(raw_histogram_parallel(samples, edges, weights, **kwargs).counts)
