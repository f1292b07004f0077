from __future__ import annotations

import difflib
from dataclasses import dataclass, fields, replace
from typing import Any, Dict, List, Optional

import yaml

from .edges import PerDimension
from .errors import ConfigError


@dataclass
class HistConfig:
    """
    Settings for the whist-hist command.

    YAML keys match the field names, e.g.::

        edges: 25                       # or [0, 1, 2.5, 4]
                                        # or [[0, 1, 2], 10] (one per dimension)
                                        # or {per_dimension: [10, 20]}
        weights: weights.txt
        columns: [0, 2]
        nproc: 4
        output: hist.pkl
        raw: false
    """

    edges: Any = None
    weights: Optional[str] = None
    columns: Optional[List[int]] = None
    nproc: Optional[int] = None
    output: Optional[str] = None
    raw: bool = False

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "HistConfig":
        known = [f.name for f in fields(cls)]
        unknown = [k for k in d if k not in known]
        if unknown:
            msg = [f"unknown config keys: {', '.join(map(str, unknown))}"]
            for k in unknown:
                suggestion = difflib.get_close_matches(str(k), known, n=1)
                if suggestion:
                    msg.append(f"did you mean '{suggestion[0]}' for '{k}'?")
            raise ConfigError("; ".join(msg))

        cfg = cls(**d)
        cfg.edges = _edges_from_yaml(cfg.edges)
        if cfg.columns is not None:
            cfg.columns = [int(c) for c in cfg.columns]
        if cfg.nproc is not None:
            cfg.nproc = int(cfg.nproc)
        cfg.raw = bool(cfg.raw)
        return cfg

    def override(self, **kwargs) -> "HistConfig":
        """Copy with every non-None keyword replacing the stored value."""
        return replace(self, **{k: v for k, v in kwargs.items() if v is not None})


def _edges_from_yaml(value):
    if isinstance(value, dict):
        if set(value) != {"per_dimension"}:
            raise ConfigError(
                f"edges mapping must have the single key 'per_dimension', got {sorted(value)}"
            )
        return PerDimension(value["per_dimension"])
    return value


def load_config(path) -> HistConfig:
    with open(path, "r") as f:
        try:
            cfg = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"bad YAML {path}: {e}") from e
    if not isinstance(cfg, dict):
        raise ConfigError(f"config file {path} must hold a mapping, got {type(cfg).__name__}")
    return HistConfig.from_dict(cfg)


def parse_edges_arg(text: str):
    """'25' -> bin count 25, '0,1,2.5' -> explicit edges [0.0, 1.0, 2.5]."""
    text = text.strip()
    try:
        if "," in text:
            return [float(t) for t in text.split(",") if t.strip()]
        return int(text)
    except ValueError:
        raise ConfigError(
            f"bins must be an integer count or comma-separated edges, got {text!r}"
        ) from None


def edges_from_args(bins):
    """One --bins value broadcasts; several give one spec per dimension."""
    if not bins:
        return None
    if len(bins) == 1:
        return bins[0]
    return PerDimension(bins)
