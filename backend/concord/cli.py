#!/usr/bin/env python3
"""
CONCORD command line tool: unify a list of values.

Reads one value per line, trims each line, and writes the unified values
in the same order, one per line.

Usage:
    concord-unify names.txt
    cat names.txt | concord-unify --metric jaro_winkler --threshold 0.2
    concord-unify names.txt --preprocessor strip_legal_suffix --show-clusters
"""

import argparse
import sys
from pathlib import Path

import structlog

from .config import (
    PRESETS,
    ClusterLinkage,
    DistanceMetric,
    RepresentativeStrategy,
    UnifyConfigError,
)
from .logging_config import LOG_FORMATS, configure as configure_logging
from .models import UnificationResult
from .preprocessors import PREPROCESSORS, chain_preprocessors
from .unifier import unify_with_details

logger = structlog.get_logger("concord.cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="concord-unify",
        description="CONCORD: collapse spelling variants of the same value onto one canonical form",
    )
    parser.add_argument(
        "input",
        nargs="?",
        default="-",
        help="File with one value per line ('-' or omitted reads stdin)",
    )
    parser.add_argument("-o", "--output", type=Path, help="Write results here instead of stdout")
    parser.add_argument(
        "--preset",
        choices=sorted(PRESETS),
        default="default",
        help="Starting configuration; other flags override it",
    )
    parser.add_argument("--threshold", type=float, dest="distance_threshold",
                        help="Largest linkage distance that still merges (default 0.35)")
    parser.add_argument("--metric", choices=[m.value for m in DistanceMetric], dest="distance_metric")
    parser.add_argument("--linkage", choices=[l.value for l in ClusterLinkage], dest="cluster_linkage")
    parser.add_argument("--strategy", choices=[s.value for s in RepresentativeStrategy],
                        dest="representative_strategy")
    parser.add_argument("--no-lowercase", action="store_false", dest="lowercase", default=None,
                        help="Compare values case-sensitively")
    parser.add_argument("--strip-chars", help="Characters trimmed from both ends of each value")
    parser.add_argument("--remove-chars", dest="remove_internal_chars",
                        help="Characters removed anywhere in each value")
    parser.add_argument("--min-cluster-size", type=int,
                        help="Clusters smaller than this are left unchanged")
    parser.add_argument(
        "--preprocessor",
        action="append",
        choices=sorted(PREPROCESSORS),
        default=[],
        help="Named transform applied before normalization (repeatable, applied in order)",
    )
    parser.add_argument("--show-clusters", action="store_true",
                        help="Print the clusters instead of the unified values")
    parser.add_argument("--log-level", default="WARNING")
    parser.add_argument("--log-format", choices=LOG_FORMATS, default="auto")
    return parser


def read_values(source: str) -> list[str]:
    """Read values one per line, trimmed."""
    if source == "-":
        text = sys.stdin.read()
    else:
        text = Path(source).read_text(encoding="utf-8")
    return [line.strip() for line in text.splitlines()]


def format_clusters(result: UnificationResult) -> str:
    lines = []
    for cluster in result.clusters:
        if cluster.representative is None or len(cluster.members) < 2:
            continue
        variants = [m for m in cluster.members if m != cluster.representative]
        lines.append(f"{cluster.representative} <- {' | '.join(variants)}")
    lines.append(
        f"# {len(result.values)} values, {result.distinct_keys} distinct keys, "
        f"{len(result.clusters)} clusters, {result.empty_count} empty"
    )
    return "\n".join(lines)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level, stream=sys.stderr, log_format=args.log_format)

    overrides = {
        name: getattr(args, name)
        for name in (
            "distance_threshold",
            "distance_metric",
            "cluster_linkage",
            "representative_strategy",
            "lowercase",
            "strip_chars",
            "remove_internal_chars",
            "min_cluster_size",
        )
        if getattr(args, name) is not None
    }

    try:
        values = read_values(args.input)
        overrides["preprocessor"] = chain_preprocessors(*args.preprocessor)
        result = unify_with_details(values, PRESETS[args.preset], **overrides)
    except UnifyConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2
    except OSError as e:
        print(f"Error: cannot read {args.input}: {e}", file=sys.stderr)
        return 1

    output = format_clusters(result) if args.show_clusters else "\n".join(result.values)
    if args.output:
        args.output.write_text(output + "\n", encoding="utf-8")
        logger.info("results_written", path=str(args.output), values=len(result.values))
    else:
        sys.stdout.write(output + "\n")
    return 0


if __name__ == '__main__':
    sys.exit(main())
