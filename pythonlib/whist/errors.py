class WhistError(ValueError):
    """Base class for histogram input errors."""


class ShapeError(WhistError):
    """Samples, weights or edge specification have incompatible shapes."""


class DegenerateEdgesError(WhistError):
    """An edge sequence has fewer than two values and forms no bin."""


class EmptyHistogramError(WhistError):
    """Total accumulated weight is zero, normalization is undefined."""


class ConfigError(WhistError):
    """Invalid command-line or YAML configuration."""
