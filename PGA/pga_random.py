from __future__ import annotations

import random
from typing import Callable, Iterator, Sequence, TypeVar

T = TypeVar("T")


class FairRandomSelector:
    """
    Unbiased pick-one-of-remaining, without replacement.

    `randbelow(k)` must return an integer in [0, k). Each draw picks one of the
    first k not-yet-chosen slots, swaps it to the end of that range and shrinks
    the range, so visiting a sequence costs O(k) and yields a uniformly random
    order when `randbelow` is uniform.

    This is the only place randomness enters a run; tests pass a scripted
    `randbelow` to pin every draw.
    """

    def __init__(self, randbelow: Callable[[int], int]) -> None:
        self._randbelow = randbelow

    @classmethod
    def seeded(cls, seed: int | None) -> FairRandomSelector:
        """Selector backed by `random.Random(seed)`; `seed=None` is non-deterministic."""

        return cls(random.Random(seed).randrange)

    def draw(self, items: Sequence[T]) -> Iterator[T]:
        """
        Yield every element of `items` exactly once in random order.

        Works on a private copy, so the caller may mutate the original
        sequence while iterating.
        """

        pool = list(items)
        k = len(pool)
        while k > 0:
            i = self._randbelow(k)
            if not 0 <= i < k:
                raise ValueError(f"randbelow({k}) returned {i}, expected 0 <= i < {k}")
            last = k - 1
            pool[i], pool[last] = pool[last], pool[i]
            yield pool[last]
            k = last
