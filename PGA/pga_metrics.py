from __future__ import annotations

from typing import Sequence


def _clamped(values: Sequence[float]) -> list[float]:
    # Satisfaction is defined on [0, 1]; anything negative counts as 0.
    return [max(0.0, float(v)) for v in values]


def compute_total_satisfaction(per_member_satisfaction: Sequence[float]) -> float:
    return float(sum(per_member_satisfaction))


def compute_gini_index(per_member_satisfaction: Sequence[float]) -> float:
    """
    How unevenly satisfaction is spread over members: 0 when everyone got an
    equally good project, approaching 1 when a few members got their top
    choice and the rest their last.

    Uses the rank-weighted form over ascending values s_1..s_n with S = sum(s):
      G = sum_i (2i - n - 1) * s_i / (n * S), and 0 for an empty or all-zero run.
    """

    ordered = sorted(_clamped(per_member_satisfaction))
    n = len(ordered)
    total = sum(ordered)
    if n == 0 or total <= 0.0:
        return 0.0
    weighted = sum((2 * i - n - 1) * s for i, s in enumerate(ordered, start=1))
    return weighted / (n * total)


def compute_jain_index(per_member_satisfaction: Sequence[float]) -> float:
    """Jain fairness (sum s)^2 / (n * sum s^2): 1 for equal satisfaction, 1/n at worst."""

    values = _clamped(per_member_satisfaction)
    squares = sum(s * s for s in values)
    if squares <= 0.0:
        return 0.0
    return sum(values) ** 2 / (len(values) * squares)


def compute_median(values: Sequence[float]) -> float:
    """Median of the values (mean of the two middle ones for even counts)."""

    vals = sorted(float(v) for v in values)
    n = len(vals)
    if n == 0:
        return 0.0
    mid = n // 2
    if n % 2 == 1:
        return vals[mid]
    return (vals[mid - 1] + vals[mid]) / 2.0
