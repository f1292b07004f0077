from __future__ import annotations

from typing import Iterable, List

from whist.histNd import HistND


def merge_histograms(hists: Iterable[HistND]) -> HistND:
    """
    Sum partial histograms with identical binning by pairwise tree reduction.

    The inputs are left untouched; the result is a new HistND.
    """
    level: List[HistND] = list(hists)
    if not level:
        raise ValueError("merge_histograms: empty histogram list")

    for h in level:
        if not isinstance(h, HistND):
            raise TypeError(f"cannot merge object of type {type(h)}")

    if len(level) == 1:
        return level[0].copy()

    while len(level) > 1:
        nxt = [level[i] + level[i + 1] for i in range(0, len(level) - 1, 2)]
        if len(level) % 2:
            nxt.append(level[-1])
        level = nxt
    return level[0]
