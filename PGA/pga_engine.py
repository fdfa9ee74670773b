from __future__ import annotations

import logging
from typing import Sequence

from .pga_config import _RunConfig
from .pga_domain import (
    ExtendedMetrics,
    Member,
    MoveLogRow,
    PlacementLogRow,
    RunResult,
    RunSummary,
)
from .pga_errors import RebalanceUnsatisfiable, UnplaceableMember
from .pga_metrics import (
    compute_gini_index,
    compute_jain_index,
    compute_median,
    compute_total_satisfaction,
)
from .pga_random import FairRandomSelector
from .pga_store import AssignmentStore

LOG = logging.getLogger(__name__)


def _rank_u(rank: int | None, n_projects: int) -> float:
    """
    Convert a 1-based preference rank into a [0..1] satisfaction.

    Assumptions:
      - Lower rank means higher preference (1 is best).
      - If there is only one project, rank=1 maps to 1, others to 0.
    """

    if rank is None:
        return 0.0
    if n_projects <= 1:
        return 1.0 if rank == 1 else 0.0
    return (n_projects - rank) / (n_projects - 1)


class _GroupAssignmentEngine:
    """
    Application service that places members into projects and computes metrics.

    Responsibility:
      - Greedy most-preferred-available placement under max_size, in random member order.
      - Optional repair pass that pulls members into projects below min_size.
      - Produce placement/move logs for analysis/debugging.
      - Compute run-level metrics in a single, well-defined place.

    Members are expected to arrive already decoded (full preference stacks);
    the stacks are consumed as the run progresses.
    """

    def __init__(
        self,
        *,
        projects: Sequence[str],
        members: Sequence[Member],
        config: _RunConfig,
        selector: FairRandomSelector | None = None,
    ) -> None:
        self._config = config
        self._projects = tuple(projects)
        self._members = list(members)
        self._selector = selector if selector is not None else FairRandomSelector.seeded(config.seed)
        self._store = AssignmentStore(self._projects)
        self._rebalance_passes = 0

    # ---- Invariants ----------------------------------------------------

    def _assert_capacity(self) -> None:
        for project in self._projects:
            count = self._store.count(project)
            if count > self._config.max_size:
                raise AssertionError(
                    f"Capacity exceeded for {project}: {count} > {self._config.max_size}"
                )

    def _assert_coverage(self) -> None:
        if self._store.total() != len(self._members):
            raise AssertionError(
                f"Assigned {self._store.total()} members, expected {len(self._members)}"
            )
        seen: set[int] = set()
        for project in self._projects:
            for member in self._store.members(project):
                if id(member) in seen:
                    raise AssertionError(f"Member {member.name!r} assigned more than once")
                seen.add(id(member))

    def _check_invariants(self) -> None:
        if self._config.sanity_checks:
            self._assert_capacity()
            self._assert_coverage()

    # ---- Run -----------------------------------------------------------

    def run(self) -> RunResult:
        """
        Execute the assignment and compute metrics.

        Flow:
          1) Visit members in random order; seat each in its best project below max_size.
          2) If min_size > 0, move members into projects still below min_size.
          3) Compute summary metrics over the final assignment.
        """

        if self._config.progress:
            print(
                f"Progress: members={len(self._members)} projects={len(self._projects)} "
                f"(max_size={self._config.max_size}, min_size={self._config.min_size})",
                flush=True,
            )

        placement_log = self._run_initial_assignment()
        self._check_invariants()

        move_log: list[MoveLogRow] = []
        if self._config.min_size > 0:
            move_log = self._run_rebalance()
            self._check_invariants()

        summary, metrics_extended = self._compute_metrics(move_log)

        return RunResult(
            assignment=self._store.as_names(),
            placement_log=placement_log,
            move_log=move_log,
            summary=summary,
            metrics_extended=metrics_extended,
        )

    # ---- Initial assignment --------------------------------------------

    def _run_initial_assignment(self) -> list[PlacementLogRow]:
        """
        Phase A: greedy placement.

        Each drawn member pops preferences (best first) until a project with a
        free seat turns up. Rejected preferences are gone for good; anything
        below the chosen project stays on the stack for the repair phase.
        """

        max_size = self._config.max_size
        placement_log: list[PlacementLogRow] = []

        for order, member in enumerate(self._selector.draw(self._members), start=1):
            placed = None
            while member.preferences:
                project = member.preferences.pop()
                if self._store.count(project) < max_size:
                    placed = project
                    break
            if placed is None:
                raise UnplaceableMember(
                    f"Could not place member {member.name!r}: every project is already at "
                    f"max_size={max_size}"
                )

            self._store.place(placed, member)
            rank = member.rank_by_project.get(placed, 0)
            placement_log.append(
                PlacementLogRow(order=order, member=member.name, project=placed, rank=rank)
            )
            LOG.debug("Placed %s in %s (rank %d)", member.name, placed, rank)

        LOG.info("Initial assignment placed %d members", len(placement_log))
        return placement_log

    # ---- Minimum-size rebalancing ----------------------------------------

    def _run_rebalance(self) -> list[MoveLogRow]:
        """
        Phase B: raise every project to min_size.

        The deficient set is computed once up front. A donor that drops below
        min_size is not put back into it unless `refill_donors` is set, so a
        finished run can still leave a former donor short (logged as a warning).
        """

        min_size = self._config.min_size
        deficient = {p for p in self._projects if self._store.count(p) < min_size}
        move_log: list[MoveLogRow] = []

        pass_index = 0
        while deficient:
            pass_index += 1
            if pass_index > self._config.max_rebalance_passes:
                raise RebalanceUnsatisfiable(
                    f"Projects still below min_size={min_size} after "
                    f"{self._config.max_rebalance_passes} passes: {self._ordered(deficient)}"
                )
            if self._config.progress:
                print(
                    f"Pass {pass_index}: REBALANCE deficient={len(deficient)}",
                    flush=True,
                )

            popped = self._rebalance_pass(deficient, pass_index, move_log)
            if deficient and popped == 0:
                raise RebalanceUnsatisfiable(
                    f"No member has a preference left that could fill "
                    f"{self._ordered(deficient)} (min_size={min_size})"
                )

        self._rebalance_passes = pass_index
        LOG.info("Rebalancing made %d moves in %d passes", len(move_log), pass_index)

        short = [p for p in self._projects if self._store.count(p) < min_size]
        if short:
            LOG.warning("Projects left below min_size=%d after rebalancing: %s", min_size, short)
        return move_log

    def _rebalance_pass(
        self,
        deficient: set[str],
        pass_index: int,
        move_log: list[MoveLogRow],
    ) -> int:
        """
        One sweep over all donors. Returns how many preferences were popped.

        Each visited member gives up exactly one preference: if it names a
        deficient project the member moves there, otherwise it is dropped.
        """

        min_size = self._config.min_size
        popped = 0

        for donor in self._selector.draw(self._projects):
            if not deficient:
                break
            if donor in deficient:
                continue

            for member in self._selector.draw(self._store.members(donor)):
                if not deficient or donor in deficient:
                    break
                if not member.preferences:
                    continue

                target = member.preferences.pop()
                popped += 1
                if target not in deficient:
                    continue

                self._store.move(member, donor, target)
                rank = member.rank_by_project.get(target, 0)
                move_log.append(
                    MoveLogRow(
                        pass_index=pass_index,
                        member=member.name,
                        from_project=donor,
                        to_project=target,
                        rank=rank,
                    )
                )
                LOG.debug("Moved %s from %s to %s (rank %d)", member.name, donor, target, rank)

                if self._store.count(target) == min_size:
                    deficient.discard(target)
                if self._config.refill_donors and self._store.count(donor) < min_size:
                    deficient.add(donor)

        return popped

    def _ordered(self, projects: set[str]) -> list[str]:
        return [p for p in self._projects if p in projects]

    # ---- Metrics -------------------------------------------------------

    def _compute_metrics(self, move_log: list[MoveLogRow]) -> tuple[RunSummary, ExtendedMetrics]:
        n_projects = len(self._projects)
        ranks: list[int] = []
        satisfaction: list[float] = []
        for project in self._projects:
            for member in self._store.members(project):
                rank = member.rank_by_project.get(project, n_projects)
                ranks.append(rank)
                satisfaction.append(_rank_u(rank, n_projects))

        n_members = len(ranks)
        mean_rank = sum(ranks) / n_members if n_members else 0.0
        share_top1 = sum(1 for r in ranks if r <= 1) / n_members if n_members else 0.0
        share_top3 = sum(1 for r in ranks if r <= 3) / n_members if n_members else 0.0
        gini = compute_gini_index(satisfaction)

        summary = RunSummary(
            mean_rank=mean_rank,
            share_first_choice=share_top1,
            gini_satisfaction=gini,
        )

        sizes = [self._store.count(p) for p in self._projects]
        total = compute_total_satisfaction(satisfaction)
        metrics = {
            "total_satisfaction": total,
            "avg_satisfaction_per_member": total / n_members if n_members else 0.0,
            "mean_rank": mean_rank,
            "median_rank": compute_median(ranks),
            "worst_rank": float(max(ranks)) if ranks else 0.0,
            "share_top1": share_top1,
            "share_top3": share_top3,
            "gini_satisfaction": gini,
            "jain_index": compute_jain_index(satisfaction),
            "group_size_min": float(min(sizes)) if sizes else 0.0,
            "group_size_max": float(max(sizes)) if sizes else 0.0,
            "empty_projects": float(sum(1 for s in sizes if s == 0)),
            "projects_below_min": float(sum(1 for s in sizes if s < self._config.min_size)),
            "rebalance_moves": float(len(move_log)),
            "rebalance_passes": float(self._rebalance_passes),
        }
        return summary, ExtendedMetrics(values=metrics)
