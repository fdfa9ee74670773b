from __future__ import annotations

from typing import Sequence

from .pga_domain import Member


class AssignmentStore:
    """
    Project -> ordered member list for the lifetime of one run.

    Lists keep insertion order: initial placements in visitation order, then
    rebalancing moves appended at the end of the destination.
    """

    def __init__(self, projects: Sequence[str]) -> None:
        self._projects = tuple(projects)
        self._members: dict[str, list[Member]] = {p: [] for p in self._projects}

    @property
    def project_names(self) -> tuple[str, ...]:
        return self._projects

    def count(self, project: str) -> int:
        return len(self._members[project])

    def members(self, project: str) -> tuple[Member, ...]:
        """Snapshot of a project's current members."""

        return tuple(self._members[project])

    def place(self, project: str, member: Member) -> None:
        self._members[project].append(member)

    def move(self, member: Member, from_project: str, to_project: str) -> None:
        self._members[from_project].remove(member)
        self._members[to_project].append(member)

    def total(self) -> int:
        return sum(len(v) for v in self._members.values())

    def as_names(self) -> dict[str, list[str]]:
        return {p: [m.name for m in self._members[p]] for p in self._projects}
