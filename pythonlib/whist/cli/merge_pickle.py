import pickle
import argparse
import sys
from pathlib import Path

import whist as wh


def _raw_hist(obj, path):
    if isinstance(obj, wh.HistND):
        return obj
    if isinstance(obj, dict) and isinstance(obj.get("counts"), wh.HistND):
        return obj["counts"]
    raise TypeError(f"{path}: no raw HistND found (got {type(obj).__name__})")


def main(argv=None):

    parser = argparse.ArgumentParser(
        description="Merge pickled partial histograms by summing their raw counts"
    )

    parser.add_argument(
        "--input", "-i", nargs="+", required=True, help="List of pickle files to merge"
    )
    parser.add_argument("--output", "-o", required=True, help="Output pickle file")
    parser.add_argument(
        "--raw",
        action="store_true",
        help="Do not normalize the merged histogram (keep it mergeable only)",
    )

    args = parser.parse_args(argv)

    output = Path(args.output).resolve()

    hists = []
    for p in args.input:
        p = Path(p).resolve()
        with open(p, "rb") as f:
            hists.append(_raw_hist(pickle.load(f), p))

    try:
        merged = wh.merge_histograms(hists)
        hist = None if args.raw else wh.normalize(merged.counts)
    except wh.WhistError as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        return 2

    with open(output, "wb") as f:
        pickle.dump({"counts": merged, "hist": hist, "edges": merged.edges}, f)

    print(f"Merged {len(args.input)} files → {output}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
