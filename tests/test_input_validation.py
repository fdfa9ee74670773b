import sys
import unittest
from pathlib import Path
from tempfile import TemporaryDirectory

sys.path.append(str(Path(__file__).resolve().parents[1]))

from PGA.pga_api import run_assignment, run_assignment_csv
from PGA.pga_domain import MemberRanks
from PGA.pga_errors import (
    AssignmentError,
    BlankMemberName,
    ConfigurationError,
    DuplicatePreferenceValue,
    DuplicateProjectName,
    EmptyOrMalformedData,
    InvalidPreferenceValue,
    MissingProjectSource,
    PreferenceCountMismatch,
)

ROWS = [
    MemberRanks(name="S1", ranks=(1, 2)),
    MemberRanks(name="S2", ranks=(2, 1)),
]


def _write_table(path: Path, lines: list[str]) -> None:
    with path.open("w", newline="", encoding="utf-8") as f:
        f.write("\n".join(lines) + "\n")


class TestConfigValidation(unittest.TestCase):
    def test_bad_sizes(self) -> None:
        cases = [
            {"max_size": 0},
            {"max_size": 2, "min_size": -1},
            {"max_size": 2, "min_size": 3},
            {"max_size": "2"},
            {"max_size": 2.0},
            {"max_size": True},
            {"max_size": None},
            {"max_size": 2, "max_rebalance_passes": 0},
        ]
        for kwargs in cases:
            with self.subTest(kwargs=kwargs):
                with self.assertRaises(ConfigurationError):
                    run_assignment(["A", "B"], ROWS, **kwargs)

    def test_errors_are_value_errors(self) -> None:
        with self.assertRaises(ValueError):
            run_assignment(["A", "B"], ROWS, max_size=0)
        self.assertTrue(issubclass(ConfigurationError, AssignmentError))

    def test_missing_inputs(self) -> None:
        with self.assertRaises(MissingProjectSource):
            run_assignment(None, ROWS, max_size=2)
        with self.assertRaises(MissingProjectSource):
            run_assignment(["A", "B"], None, max_size=2)


class TestTableValidation(unittest.TestCase):
    def _run(self, lines: list[str] | None, **kwargs):
        with TemporaryDirectory() as tmp:
            path = Path(tmp) / "ranks.csv"
            if lines is not None:
                _write_table(path, lines)
            return run_assignment_csv(path, max_size=kwargs.pop("max_size", 2), **kwargs)

    def test_missing_file(self) -> None:
        with self.assertRaises(MissingProjectSource):
            self._run(None)

    def test_bad_sizes_reported_before_file_is_read(self) -> None:
        with self.assertRaises(ConfigurationError):
            self._run(None, max_size=0)
        with self.assertRaises(ConfigurationError):
            self._run(["Name,A,B", "S1,1,2"], max_size=2, min_size=3)

    def test_header_without_projects(self) -> None:
        with self.assertRaises(MissingProjectSource):
            self._run(["Name", "S1"])

    def test_header_only(self) -> None:
        with self.assertRaises(EmptyOrMalformedData):
            self._run(["Name,A,B", "", ","])

    def test_duplicate_project_column(self) -> None:
        with self.assertRaises(DuplicateProjectName):
            self._run(["Name,A,A", "S1,1,2"])

    def test_blank_member_name(self) -> None:
        with self.assertRaisesRegex(BlankMemberName, "row 3"):
            self._run(["Name,A,B", "S1,1,2", ",2,1"])

    def test_short_row(self) -> None:
        with self.assertRaises(PreferenceCountMismatch):
            self._run(["Name,A,B,C", "S1,1,2"], max_size=3)

    def test_non_integer_cell(self) -> None:
        with self.assertRaisesRegex(InvalidPreferenceValue, "'abc'"):
            self._run(["Name,A,B", "S1,1,abc"])
        with self.assertRaises(InvalidPreferenceValue):
            self._run(["Name,A,B", "S1,1.0,2"])

    def test_blank_cell(self) -> None:
        with self.assertRaises(EmptyOrMalformedData):
            self._run(["Name,A,B", "S1,1,"])

    def test_repeated_rank(self) -> None:
        with self.assertRaises(DuplicatePreferenceValue):
            self._run(["Name,A,B", "S1,1,1"])

    def test_table_not_utf8(self) -> None:
        with TemporaryDirectory() as tmp:
            path = Path(tmp) / "ranks.csv"
            path.write_bytes(b"Name,A,B\n\xff\xfe,1,2\n")
            with self.assertRaisesRegex(EmptyOrMalformedData, "not UTF-8"):
                run_assignment_csv(path, max_size=2)

    def test_byte_order_mark_is_ignored(self) -> None:
        with TemporaryDirectory() as tmp:
            path = Path(tmp) / "ranks.csv"
            path.write_bytes("Name,A,B\nS1,1,2\nS2,2,1\n".encode("utf-8-sig"))
            result = run_assignment_csv(path, max_size=1)
        self.assertEqual(result.assignment, {"A": ["S1"], "B": ["S2"]})

    def test_valid_table_with_padding(self) -> None:
        result = self._run(["Name, A , B", " S1 , 1 , 2 ", "", "S2,2,1"], max_size=1)
        self.assertEqual(result.assignment, {"A": ["S1"], "B": ["S2"]})


if __name__ == "__main__":
    unittest.main()
