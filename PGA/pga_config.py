from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class _RunConfig:
    """
    User-controlled parameters that define group sizes and how the repair pass behaves.
    """

    max_size: int
    min_size: int
    max_rebalance_passes: int
    refill_donors: bool
    progress: bool
    seed: int | None
    sanity_checks: bool
