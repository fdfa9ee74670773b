from __future__ import annotations

import csv
from itertools import zip_longest
from pathlib import Path

from .pga_domain import (
    ExtendedMetrics,
    MemberRanks,
    MoveLogRow,
    PlacementLogRow,
    RunSummary,
)
from .pga_errors import EmptyOrMalformedData, MissingProjectSource


def _parse_cell(raw: str) -> object:
    """
    Convert one rank cell: integers become int, blanks None, anything else stays text.

    Range and type checks are left to the decoder so the error names the row.
    """

    value = raw.strip()
    if value == "":
        return None
    try:
        return int(value)
    except ValueError:
        return value


def _read_rank_table(path: Path) -> tuple[list[str], list[MemberRanks]]:
    """
    Read a wide rank table: `<label>,<project 1>,...,<project N>` then one row per member.

    Row numbers in the returned records are 1-based file rows (header is row 1),
    matching what a spreadsheet shows. Fully blank rows are skipped. A leading
    byte-order mark from spreadsheet exports is ignored.
    """

    if not path.is_file():
        raise MissingProjectSource(f"Rank table not found: {path}")

    try:
        with path.open(newline="", encoding="utf-8-sig") as f:
            reader = csv.reader(f)
            header = next(reader, None)
            if header is None or len(header) < 2:
                raise MissingProjectSource(
                    f"Rank table needs a header with a member column and at least one project column (file: {path})"
                )
            projects = [h.strip() for h in header[1:]]

            rows: list[MemberRanks] = []
            for line_no, r in enumerate(reader, start=2):
                if not any(cell.strip() for cell in r):
                    continue
                rows.append(
                    MemberRanks(
                        name=r[0].strip(),
                        ranks=tuple(_parse_cell(cell) for cell in r[1:]),
                        row=line_no,
                    )
                )
    except UnicodeDecodeError as exc:
        raise EmptyOrMalformedData(f"Rank table is not UTF-8 text: {path}") from exc
    return projects, rows


def _write_assignment_csv(path: Path, *, assignment: dict[str, list[str]]) -> None:
    """
    Write the final assignment as a grid: one column per project, members listed downwards.
    """

    projects = list(assignment.keys())
    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(projects)
        for row in zip_longest(*(assignment[p] for p in projects), fillvalue=""):
            writer.writerow(row)


def _write_placement_csv(path: Path, *, placement_log: list[PlacementLogRow]) -> None:
    """
    Write initial placements in visitation order.
    """

    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(["Order", "Member", "Project", "Rank"])
        for row in placement_log:
            writer.writerow([row.order, row.member, row.project, row.rank])


def _write_moves_csv(path: Path, *, move_log: list[MoveLogRow]) -> None:
    """
    Write minimum-size rebalancing moves (header only when nothing moved).
    """

    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(["Pass", "Member", "FromProject", "ToProject", "Rank"])
        for row in move_log:
            writer.writerow(
                [row.pass_index, row.member, row.from_project, row.to_project, row.rank]
            )


def _write_summary_csv(
    path: Path,
    *,
    seed: int | None,
    max_size: int,
    min_size: int,
    summary: RunSummary,
) -> None:
    """
    Write a one-row summary CSV.
    """

    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(
            [
                "seed",
                "max_size",
                "min_size",
                "mean_rank",
                "share_first_choice",
                "gini_satisfaction",
            ]
        )
        writer.writerow(
            [
                "" if seed is None else seed,
                max_size,
                min_size,
                f"{summary.mean_rank:.6f}",
                f"{summary.share_first_choice:.6f}",
                f"{summary.gini_satisfaction:.6f}",
            ]
        )


def _write_metrics_extended_csv(
    path: Path,
    *,
    metrics: ExtendedMetrics,
) -> None:
    """
    Write extended metrics as a one-row CSV.
    """

    keys = list(metrics.values.keys())
    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(keys)
        writer.writerow([f"{metrics.values[k]:.6f}" for k in keys])
