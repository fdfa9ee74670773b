import sys
import unittest
from pathlib import Path

sys.path.append(str(Path(__file__).resolve().parents[1]))

from PGA.pga_random import FairRandomSelector


def _scripted(draws: list[int]):
    """randbelow that replays `draws` and records every k it was asked for."""

    queue = list(draws)
    calls: list[int] = []

    def randbelow(k: int) -> int:
        calls.append(k)
        return queue.pop(0)

    return randbelow, calls


class TestFairRandomSelector(unittest.TestCase):
    def test_scripted_draws_pick_by_swap_to_end(self) -> None:
        randbelow, calls = _scripted([0, 0, 0])
        selector = FairRandomSelector(randbelow)
        # [a,b,c]: pick 0 -> a (pool [c,b,a]); pick 0 of 2 -> c (pool [b,c]); then b.
        self.assertEqual(list(selector.draw(["a", "b", "c"])), ["a", "c", "b"])
        self.assertEqual(calls, [3, 2, 1])

    def test_always_last_slot_reverses(self) -> None:
        selector = FairRandomSelector(lambda k: k - 1)
        self.assertEqual(list(selector.draw([1, 2, 3, 4])), [4, 3, 2, 1])

    def test_empty_sequence_is_noop(self) -> None:
        randbelow, calls = _scripted([])
        selector = FairRandomSelector(randbelow)
        self.assertEqual(list(selector.draw([])), [])
        self.assertEqual(calls, [])

    def test_input_sequence_untouched(self) -> None:
        items = ["x", "y", "z"]
        selector = FairRandomSelector(lambda k: 0)
        list(selector.draw(items))
        self.assertEqual(items, ["x", "y", "z"])

    def test_every_element_drawn_once(self) -> None:
        selector = FairRandomSelector.seeded(7)
        items = list(range(25))
        drawn = list(selector.draw(items))
        self.assertEqual(sorted(drawn), items)

    def test_same_seed_same_order(self) -> None:
        items = list(range(10))
        first = list(FairRandomSelector.seeded(123).draw(items))
        second = list(FairRandomSelector.seeded(123).draw(items))
        self.assertEqual(first, second)

    def test_every_permutation_reachable(self) -> None:
        seen = set()
        for a in range(3):
            for b in range(2):
                randbelow, _ = _scripted([a, b, 0])
                seen.add(tuple(FairRandomSelector(randbelow).draw("abc")))
        self.assertEqual(len(seen), 6)

    def test_out_of_range_draw_rejected(self) -> None:
        selector = FairRandomSelector(lambda k: k)
        with self.assertRaises(ValueError):
            list(selector.draw([1, 2]))


if __name__ == "__main__":
    unittest.main()
