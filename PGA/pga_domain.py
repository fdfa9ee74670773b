from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class MemberRanks:
    """One input row: a member name and one rank per project (1 is best), in project column order."""

    name: str
    ranks: tuple[object, ...]
    row: int | None = None


@dataclass(eq=False)
class Member:
    """
    A member taking part in a run.

    `preferences` is a stack ordered from least to most preferred, so `pop()`
    yields the most preferred remaining project. Equality is identity: two
    members may share a name and are still different people.
    """

    name: str
    preferences: list[str]
    rank_by_project: dict[str, int] = field(default_factory=dict)


@dataclass(frozen=True)
class PlacementLogRow:
    """Initial placement of one member (order is the random visitation order, 1-based)."""

    order: int
    member: str
    project: str
    rank: int


@dataclass(frozen=True)
class MoveLogRow:
    """One minimum-size rebalancing move."""

    pass_index: int
    member: str
    from_project: str
    to_project: str
    rank: int


@dataclass(frozen=True)
class RunSummary:
    """Aggregated metrics for a single run (used for analysis/experiments)."""

    mean_rank: float
    share_first_choice: float
    gini_satisfaction: float


@dataclass(frozen=True)
class ExtendedMetrics:
    """Additional metrics for deeper analysis (exported to metrics_extended CSV)."""

    values: dict[str, float]


@dataclass(frozen=True)
class RunResult:
    """
    Outputs of a run.

    `assignment` is the final mapping (project -> member names), keyed in
    project input order; each list is in the order members ended up there.
    `placement_log` and `move_log` record how the mapping was built.
    """

    assignment: dict[str, list[str]]
    placement_log: list[PlacementLogRow]
    move_log: list[MoveLogRow]
    summary: RunSummary
    metrics_extended: ExtendedMetrics
