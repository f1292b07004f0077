from .errors import (
    WhistError,
    ShapeError,
    DegenerateEdgesError,
    EmptyHistogramError,
    ConfigError,
)
from .edges import Scalar, PerDimension, as_edge_spec, auto_edges, resolve_edges
from .binning import EXCLUDED, bin_index, bin_indices
from .normalize import normalize
from .histNd import HistND
from .merging.merge import merge_histograms
from .histc2 import (
    as_samples,
    as_weights,
    raw_histogram,
    histogram,
    raw_histogram_parallel,
    histogram_parallel,
)

__all__ = [name for name in dir() if not name.startswith("_")]
