#!/usr/bin/env python3
from __future__ import annotations

import argparse
import csv
import random
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence


@dataclass(frozen=True)
class RankRow:
    member: str
    ranks: tuple[int, ...]


def _prompt_positive_int(prompt: str) -> int:
    while True:
        raw = input(prompt).strip()
        try:
            value = int(raw)
        except ValueError:
            print("Enter a whole number.")
            continue
        if value <= 0:
            print("The number must be > 0.")
            continue
        return value


def _popularity_weights(n_projects: int, skew: float) -> list[float]:
    """
    Zipf-like popularity: project i (1-based) gets weight 1 / i**skew.
    skew=0 makes every project equally popular.
    """
    return [1.0 / (i**skew) for i in range(1, n_projects + 1)]


def _rank_positions(rng: random.Random, weights: Sequence[float]) -> list[int]:
    """
    Weighted random ordering without replacement (key = u ** (1 / w)), returned
    as a rank per project (1 = most preferred).
    """
    keys = [rng.random() ** (1.0 / w) for w in weights]
    ranked_indices = sorted(range(len(weights)), key=lambda i: keys[i], reverse=True)
    positions = [0] * len(weights)
    for pos, idx in enumerate(ranked_indices, start=1):
        positions[idx] = pos
    return positions


def generate_rank_table(
    member_names: Sequence[str],
    n_projects: int,
    rng: random.Random,
    *,
    popularity_skew: float,
) -> list[RankRow]:
    weights = _popularity_weights(n_projects, popularity_skew)
    return [
        RankRow(member=name, ranks=tuple(_rank_positions(rng, weights)))
        for name in member_names
    ]


def _validate_rank_table(rows: Sequence[RankRow], *, n_projects: int) -> None:
    expected = set(range(1, n_projects + 1))
    for r in rows:
        if len(r.ranks) != n_projects or set(r.ranks) != expected:
            raise ValueError(f"Member {r.member}: ranks are not a permutation of 1..{n_projects}")


def _write_rank_table(path: Path, project_names: Sequence[str], rows: Sequence[RankRow]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(["Name", *project_names])
        for r in rows:
            writer.writerow([r.member, *r.ranks])


def _parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(
        description="Generate a random rank table (Name, one rank column per project)"
    )
    p.add_argument("--members", type=int, help="Number of members (M)")
    p.add_argument("--projects", type=int, help="Number of projects (N)")
    p.add_argument("--seed", type=int, default=None, help="Seed for reproducibility")
    p.add_argument(
        "--popularity-skew",
        type=float,
        default=1.0,
        help="How strongly early projects are preferred (0 = uniform)",
    )
    p.add_argument(
        "--out",
        type=Path,
        default=Path("tables/ranks.csv"),
        help="Output CSV path",
    )
    return p.parse_args()


def main() -> int:
    args = _parse_args()

    n_members = args.members if args.members is not None else _prompt_positive_int("Number of members (M): ")
    n_projects = args.projects if args.projects is not None else _prompt_positive_int("Number of projects (N): ")

    if n_members <= 0 or n_projects <= 0:
        raise SystemExit("--members and --projects must be > 0")
    if args.popularity_skew < 0.0:
        raise SystemExit("--popularity-skew must be >= 0")

    member_names = [f"M{i}" for i in range(1, n_members + 1)]
    project_names = [f"P{i}" for i in range(1, n_projects + 1)]

    rng = random.Random(args.seed)
    rows = generate_rank_table(
        member_names,
        n_projects,
        rng,
        popularity_skew=args.popularity_skew,
    )
    _validate_rank_table(rows, n_projects=n_projects)
    _write_rank_table(args.out, project_names, rows)

    print(f"Done: {args.out} ({len(rows)} members x {n_projects} projects)")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
