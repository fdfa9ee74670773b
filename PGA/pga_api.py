from __future__ import annotations

import logging
from pathlib import Path
from typing import Sequence

from .pga_config import _RunConfig
from .pga_decoder import _validate_projects, decode_members
from .pga_domain import MemberRanks, RunResult
from .pga_engine import _GroupAssignmentEngine
from .pga_errors import ConfigurationError, InfeasibleMinimum, MissingProjectSource
from .pga_io import _read_rank_table
from .pga_random import FairRandomSelector

LOG = logging.getLogger(__name__)

DEFAULT_MAX_REBALANCE_PASSES = 1000


def _require_int(name: str, value: object) -> int:
    if value is None:
        raise ConfigurationError(f"{name} is required")
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(f"{name} must be an integer, got {value!r}")
    return value


def _build_config(
    *,
    max_size: object,
    min_size: object,
    seed: int | None,
    max_rebalance_passes: object,
    refill_donors: bool,
    progress: bool,
    sanity_checks: bool,
) -> _RunConfig:
    max_size = _require_int("max_size", max_size)
    min_size = _require_int("min_size", min_size)
    max_rebalance_passes = _require_int("max_rebalance_passes", max_rebalance_passes)
    if max_size < 1:
        raise ConfigurationError("max_size must be >= 1")
    if min_size < 0:
        raise ConfigurationError("min_size must be >= 0")
    if min_size > max_size:
        raise ConfigurationError(f"min_size ({min_size}) must be <= max_size ({max_size})")
    if max_rebalance_passes < 1:
        raise ConfigurationError("max_rebalance_passes must be >= 1")

    return _RunConfig(
        max_size=max_size,
        min_size=min_size,
        max_rebalance_passes=max_rebalance_passes,
        refill_donors=refill_donors,
        progress=progress,
        seed=seed,
        sanity_checks=sanity_checks,
    )


def _run_with_config(
    projects: Sequence[str] | None,
    members: Sequence[MemberRanks] | None,
    config: _RunConfig,
    selector: FairRandomSelector | None,
) -> RunResult:
    if projects is None:
        raise MissingProjectSource("Project list is missing")
    if members is None:
        raise MissingProjectSource("Member list is missing")

    project_names = _validate_projects(projects)
    decoded = decode_members(project_names, members)

    if config.min_size * len(project_names) > len(decoded):
        raise InfeasibleMinimum(
            f"min_size={config.min_size} x {len(project_names)} projects needs "
            f"{config.min_size * len(project_names)} members, only {len(decoded)} given"
        )

    LOG.debug(
        "Assigning %d members to %d projects (max_size=%d, min_size=%d, seed=%s)",
        len(decoded),
        len(project_names),
        config.max_size,
        config.min_size,
        config.seed,
    )
    engine = _GroupAssignmentEngine(
        projects=project_names,
        members=decoded,
        config=config,
        selector=selector,
    )
    return engine.run()


def run_assignment(
    projects: Sequence[str] | None,
    members: Sequence[MemberRanks] | None,
    *,
    max_size: int,
    min_size: int = 0,
    seed: int | None = None,
    max_rebalance_passes: int = DEFAULT_MAX_REBALANCE_PASSES,
    refill_donors: bool = False,
    progress: bool = False,
    sanity_checks: bool = False,
    selector: FairRandomSelector | None = None,
) -> RunResult:
    """
    Public API function: assign members to projects from their ranked preferences.

    This is a thin orchestration layer:
      - Validates parameters
      - Validates and decodes every rank row (before any random draw)
      - Checks that min_size is reachable at all
      - Builds and runs the assignment engine

    `selector` overrides the seeded random source; tests use it to script draws.
    """
    config = _build_config(
        max_size=max_size,
        min_size=min_size,
        seed=seed,
        max_rebalance_passes=max_rebalance_passes,
        refill_donors=refill_donors,
        progress=progress,
        sanity_checks=sanity_checks,
    )
    return _run_with_config(projects, members, config, selector)


def run_assignment_csv(
    csv_path: Path,
    *,
    max_size: int,
    min_size: int = 0,
    seed: int | None = None,
    max_rebalance_passes: int = DEFAULT_MAX_REBALANCE_PASSES,
    refill_donors: bool = False,
    progress: bool = False,
    sanity_checks: bool = False,
    selector: FairRandomSelector | None = None,
) -> RunResult:
    """
    Load a wide rank table from CSV and run a single assignment on it.

    Parameters are checked before the file is opened.
    """

    config = _build_config(
        max_size=max_size,
        min_size=min_size,
        seed=seed,
        max_rebalance_passes=max_rebalance_passes,
        refill_donors=refill_donors,
        progress=progress,
        sanity_checks=sanity_checks,
    )
    projects, rows = _read_rank_table(csv_path)
    return _run_with_config(projects, rows, config, selector)
