"""Command line entry point for the disjoint_sets library."""

from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

from .components import ComponentConfig
from .runner import MODES, run_file


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Group records of a table into disjoint sets.")
    parser.add_argument("input", type=Path, help="Path to the input CSV or Excel file")
    parser.add_argument("output", type=Path, help="Path where the results will be written")
    parser.add_argument(
        "--mode",
        choices=MODES,
        default="components",
        help="components: connected components of an edge list; "
        "spanning: minimum spanning forest of a weighted edge list; "
        "similarity: group rows with similar labels (default: components)",
    )
    parser.add_argument(
        "--source-column",
        default=os.getenv("DISJOINT_SETS_SOURCE_COLUMN", "source"),
        help="Column holding edge sources (default: source)",
    )
    parser.add_argument(
        "--target-column",
        default=os.getenv("DISJOINT_SETS_TARGET_COLUMN", "target"),
        help="Column holding edge targets (default: target)",
    )
    parser.add_argument(
        "--weight-column",
        default=os.getenv("DISJOINT_SETS_WEIGHT_COLUMN"),
        help="Column holding edge weights",
    )
    parser.add_argument("--max-weight", type=float, default=None, help="Ignore edges heavier than this")
    parser.add_argument(
        "--label-column",
        default=os.getenv("DISJOINT_SETS_LABEL_COLUMN", "label"),
        help="Column holding the texts compared in similarity mode (default: label)",
    )
    parser.add_argument(
        "--threshold",
        type=float,
        default=0.8,
        help="Cosine similarity needed to link two rows in similarity mode",
    )
    parser.add_argument(
        "--normalize-labels",
        action="store_true",
        help="Fold case, accents and broken encodings before comparing labels",
    )
    parser.add_argument(
        "--disable-tqdm",
        action="store_true",
        help="Disable progress bars even if tqdm is installed",
    )
    parser.add_argument("--quiet", action="store_true", help="Only print errors")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(sys.argv[1:] if argv is None else argv)

    config = ComponentConfig(
        source_column=args.source_column,
        target_column=args.target_column,
        weight_column=args.weight_column,
        max_weight=args.max_weight,
        label_column=args.label_column,
        similarity_threshold=args.threshold,
        normalize_labels=args.normalize_labels,
        use_tqdm=not args.disable_tqdm,
        verbose=not args.quiet,
    )

    result = run_file(args.input, args.output, config, mode=args.mode)
    return 0 if result is not None else 1


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
