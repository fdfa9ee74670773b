from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .pga_api import DEFAULT_MAX_REBALANCE_PASSES, run_assignment_csv
from .pga_errors import AssignmentError
from .pga_io import (
    _write_assignment_csv,
    _write_metrics_extended_csv,
    _write_moves_csv,
    _write_placement_csv,
    _write_summary_csv,
)

LOG = logging.getLogger(__name__)


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        description="Assign members to size-bounded projects from ranked preferences",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    p.add_argument(
        "--csv",
        type=Path,
        default=Path("tables/ranks.csv"),
        help="Rank table: member name column followed by one rank column per project",
    )
    p.add_argument("--max-size", type=int, required=True, help="Maximum members per project")
    p.add_argument(
        "--min-size",
        type=int,
        default=0,
        help="Minimum members per project (0 disables rebalancing)",
    )
    p.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed (omit for a non-reproducible run)",
    )
    p.add_argument(
        "--max-rebalance-passes",
        type=int,
        default=DEFAULT_MAX_REBALANCE_PASSES,
        help="Give up rebalancing after this many passes",
    )
    p.add_argument(
        "--refill-donors",
        action="store_true",
        help="Re-queue a project that drops below --min-size after giving up a member",
    )
    p.add_argument(
        "--progress",
        action="store_true",
        help="Print progress per phase/pass",
    )
    p.add_argument(
        "--out-assignment",
        type=Path,
        default=Path("assignment.csv"),
        help="CSV grid with one column of members per project",
    )
    p.add_argument(
        "--out-placements",
        type=Path,
        default=Path("placements.csv"),
        help="CSV with the initial placement log",
    )
    p.add_argument(
        "--out-moves",
        type=Path,
        default=Path("moves.csv"),
        help="CSV with rebalancing moves",
    )
    p.add_argument("--out-summary", type=Path, default=Path("summary.csv"))
    p.add_argument(
        "--out-metrics-extended",
        type=Path,
        default=Path("metrics_extended.csv"),
        help="CSV with extended metrics",
    )
    p.add_argument(
        "--sanity-checks",
        action="store_true",
        help="Check capacity/coverage invariants after each phase",
    )
    p.add_argument(
        "--log-level",
        default="WARNING",
        choices=["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"],
        help="Logging verbosity",
    )
    return p.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)

    logging.basicConfig(level=getattr(logging, args.log_level))
    LOG.debug("Starting run with args=%s", args)

    try:
        result = run_assignment_csv(
            args.csv,
            max_size=args.max_size,
            min_size=args.min_size,
            seed=args.seed,
            max_rebalance_passes=args.max_rebalance_passes,
            refill_donors=args.refill_donors,
            progress=args.progress,
            sanity_checks=args.sanity_checks,
        )
    except AssignmentError as exc:
        LOG.error("Run aborted: %s: %s", type(exc).__name__, exc)
        print(f"ERROR: {exc}", file=sys.stderr)
        return 2

    _write_assignment_csv(args.out_assignment, assignment=result.assignment)
    _write_placement_csv(args.out_placements, placement_log=result.placement_log)
    _write_moves_csv(args.out_moves, move_log=result.move_log)
    _write_summary_csv(
        args.out_summary,
        seed=args.seed,
        max_size=args.max_size,
        min_size=args.min_size,
        summary=result.summary,
    )
    _write_metrics_extended_csv(
        args.out_metrics_extended,
        metrics=result.metrics_extended,
    )

    print(
        f"OK: {args.out_assignment} ({len(result.placement_log)} members, "
        f"{len(result.move_log)} moves)"
    )
    print(
        "Metrics: "
        f"MeanRank={result.summary.mean_rank:.6f} "
        f"ShareFirstChoice={result.summary.share_first_choice:.6f} "
        f"GiniSatisfaction={result.summary.gini_satisfaction:.6f}"
    )
    return 0
