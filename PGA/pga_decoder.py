from __future__ import annotations

from typing import Sequence

from .pga_domain import Member, MemberRanks
from .pga_errors import (
    BlankMemberName,
    DuplicatePreferenceValue,
    DuplicateProjectName,
    EmptyOrMalformedData,
    InvalidPreferenceValue,
    PreferenceCountMismatch,
)


def _member_name(row: MemberRanks) -> str:
    return str(row.name).strip() if row.name is not None else ""


def _row_label(row: MemberRanks, index: int) -> str:
    """Human-readable pointer to an input row for error messages."""

    line = row.row if row.row is not None else index + 1
    name = _member_name(row)
    if name:
        return f"row {line} ({name!r})"
    return f"row {line}"


def _validate_projects(projects: Sequence[str]) -> tuple[str, ...]:
    if not projects:
        raise EmptyOrMalformedData("No projects found")
    seen: set[str] = set()
    cleaned: list[str] = []
    for i, raw in enumerate(projects, start=1):
        name = str(raw).strip() if raw is not None else ""
        if not name:
            raise EmptyOrMalformedData(f"Project #{i} has no name")
        if name in seen:
            raise DuplicateProjectName(f"Project name {name!r} appears more than once")
        seen.add(name)
        cleaned.append(name)
    return tuple(cleaned)


def _is_rank_int(value: object) -> bool:
    # bool is an int subclass, but True/False are never meaningful ranks.
    return isinstance(value, int) and not isinstance(value, bool)


def decode_preferences(
    projects: Sequence[str],
    ranks: Sequence[object],
    *,
    label: str = "member",
) -> list[str]:
    """
    Turn one rank row into a preference stack.

    The project with rank r is stored at index N - r, so the stack runs from
    least to most preferred and `pop()` yields rank 1, then rank 2, and so on.
    """

    if ranks is None:
        raise EmptyOrMalformedData(f"{label}: no ranks given")

    n = len(projects)
    if len(ranks) != n:
        raise PreferenceCountMismatch(
            f"{label}: expected {n} preferences (one per project), got {len(ranks)}"
        )

    stack: list[str | None] = [None] * n
    for project, rank in zip(projects, ranks):
        if rank is None or (isinstance(rank, str) and not rank.strip()):
            raise EmptyOrMalformedData(f"{label}: no rank given for project {project!r}")
        if not _is_rank_int(rank) or not (1 <= rank <= n):
            raise InvalidPreferenceValue(
                f"{label}: rank for project {project!r} must be an integer in [1, {n}], got {rank!r}"
            )
        slot = n - rank
        if stack[slot] is not None:
            raise DuplicatePreferenceValue(
                f"{label}: rank {rank} given to both {stack[slot]!r} and {project!r}"
            )
        stack[slot] = project
    return [p for p in stack if p is not None]


def decode_members(projects: Sequence[str], rows: Sequence[MemberRanks]) -> list[Member]:
    """
    Validate every input row and build members with full preference stacks.

    Rows are checked in input order and the first failure aborts; nothing is
    returned for a partially valid table.
    """

    if not rows:
        raise EmptyOrMalformedData("No members found")

    members: list[Member] = []
    for index, row in enumerate(rows):
        label = _row_label(row, index)
        name = _member_name(row)
        if not name:
            raise BlankMemberName(f"{label}: member name is blank")
        stack = decode_preferences(projects, row.ranks, label=label)
        rank_by_project = {project: len(stack) - i for i, project in enumerate(stack)}
        members.append(Member(name=name, preferences=stack, rank_by_project=rank_by_project))
    return members
