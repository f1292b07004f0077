# whist/cli/histc.py
from __future__ import annotations

import argparse
import pickle
import sys
from pathlib import Path

import numpy as np

import whist as wh
from whist.config import HistConfig, edges_from_args, load_config, parse_edges_arg


def load_array(path, ndmin=1) -> np.ndarray:
    """Read a .npy file with numpy.load, anything else as whitespace text."""
    path = Path(path)
    if path.suffix == ".npy":
        return np.load(path)
    return np.loadtxt(path, ndmin=ndmin)


def main(argv=None):
    ap = argparse.ArgumentParser(
        description="Normalized weighted histogram of the rows of a samples file."
    )
    ap.add_argument("samples", help="Samples file (.npy or text), one row per sample")
    ap.add_argument(
        "--bins",
        "-b",
        action="append",
        type=parse_edges_arg,
        default=None,
        help=(
            "Bin count ('25') or explicit edges ('0,1,2.5,4'). "
            "Give once to use for every dimension, or once per dimension."
        ),
    )
    ap.add_argument("--weights", "-w", default=None, help="Weights file, one per sample")
    ap.add_argument(
        "--columns",
        type=int,
        nargs="+",
        default=None,
        help="Sample columns to histogram (default: all)",
    )
    ap.add_argument("--config", "-c", default=None, help="YAML config file")
    ap.add_argument(
        "--nproc",
        type=int,
        default=None,
        help="Number of worker threads (default: single pass, no pool).",
    )
    ap.add_argument(
        "--raw",
        action="store_true",
        default=None,
        help="Store unnormalized counts only (partial result for whist-merge)",
    )
    ap.add_argument("--output", "-o", default=None, help="Output pickle file")
    ap.add_argument("--show-progressbar", action="store_true")
    ap.add_argument("-v", "--verbose", action="store_true")

    args = ap.parse_args(argv)

    try:
        cfg = load_config(args.config) if args.config else HistConfig()
        cfg = cfg.override(
            edges=edges_from_args(args.bins),
            weights=args.weights,
            columns=args.columns,
            nproc=args.nproc,
            output=args.output,
            raw=args.raw,
        )
    except (OSError, wh.WhistError) as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        return 2

    if cfg.edges is None:
        print("[ERROR] no bins given (use --bins or 'edges' in --config)", file=sys.stderr)
        return 2

    try:
        samples = load_array(args.samples, ndmin=2)
        weights = load_array(cfg.weights) if cfg.weights else None
    except (OSError, ValueError) as e:
        print(f"[ERROR] cannot read input: {e}", file=sys.stderr)
        return 2

    if args.verbose:
        print(f"[INFO] Samples: {args.samples} shape={np.shape(samples)}")
        print(f"[INFO] Columns: {cfg.columns or 'all'}")
        print(f"[INFO] Edges: {cfg.edges!r}")
        print(f"[INFO] Weights: {cfg.weights or 'unit'}")

    try:
        if cfg.columns is not None:
            samples = wh.as_samples(samples)[:, cfg.columns]
        if cfg.nproc is not None and cfg.nproc > 1:
            raw = wh.raw_histogram_parallel(
                samples,
                cfg.edges,
                weights,
                max_workers=cfg.nproc,
                show_progressbar=args.show_progressbar,
            )
        else:
            raw = wh.raw_histogram(samples, cfg.edges, weights)
        hist = None if cfg.raw else wh.normalize(raw.counts)
    except (wh.WhistError, IndexError) as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        return 2

    if args.verbose:
        print(f"[INFO] {raw!r}")

    if cfg.output is None:
        np.set_printoptions(linewidth=120, suppress=True)
        print(raw.counts if hist is None else hist)
        return 0

    output = Path(cfg.output).resolve()
    with open(output, "wb") as f:
        pickle.dump({"counts": raw, "hist": hist, "edges": raw.edges}, f)

    if args.verbose:
        print(f"[DONE] {output}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
