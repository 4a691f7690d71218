"""Loading Boggle test files and reporting solver results against them.

A test file holds three sections separated by two or more blank lines:

    catsrepobonedigs          <- board, one line or one row per line


    bone                      <- expected answers, one per line
    cat                          (blank lines between answers are fine)


    act                       <- dictionary, one word per line
    bone
    ...
"""
from __future__ import annotations

import math
import re
from dataclasses import dataclass, field
from itertools import zip_longest
from pathlib import Path

from boggle_solver.errors import InvalidInput
from boggle_solver.solver import BoggleSolver

_SECTION_BREAK = re.compile(r"\n(?:[ \t]*\n){2,}")


@dataclass
class BoggleTestCase:
    name: str
    width: int
    height: int
    letters: str
    answers: list[str] = field(default_factory=list)
    words: list[str] = field(default_factory=list)


@dataclass
class ComparisonLine:
    expected: str | None
    actual: str | None

    @property
    def matched(self) -> bool:
        return self.expected == self.actual


@dataclass
class Comparison:
    lines: list[ComparisonLine]

    @property
    def passed(self) -> bool:
        return all(line.matched for line in self.lines)

    @property
    def mismatches(self) -> list[ComparisonLine]:
        return [line for line in self.lines if not line.matched]


def _entries(section: str) -> list[str]:
    return [line.strip() for line in section.splitlines() if line.strip()]


def _board_shape(rows: list[str]) -> tuple[int, int]:
    if len(rows) > 1:
        width = len(rows[0])
        if any(len(row) != width for row in rows):
            raise InvalidInput("Board rows have different lengths")
        return width, len(rows)

    n = len(rows[0]) if rows else 0
    side = math.isqrt(n)
    if side * side != n:
        raise InvalidInput(f"Cannot infer a square board from {n} letters")
    return side, side


def parse_test_case(
    text: str, name: str = "", width: int | None = None, height: int | None = None
) -> BoggleTestCase:
    text = text.replace("\r\n", "\n").replace("\r", "\n").strip("\n")
    sections = [s for s in _SECTION_BREAK.split(text) if s.strip()]
    if len(sections) != 3:
        raise InvalidInput(
            f"Expected board, answers and dictionary sections, found {len(sections)}"
        )

    board, answers, dictionary = sections
    rows = _entries(board)
    if width is None or height is None:
        width, height = _board_shape(rows)
    letters = "".join(rows)
    if len(letters) != width * height:
        raise InvalidInput(f"Board has {len(letters)} letters, expected {width}x{height}")

    return BoggleTestCase(
        name=name,
        width=width,
        height=height,
        letters=letters,
        answers=_entries(answers),
        words=_entries(dictionary),
    )


def load_test_case(path: str | Path, width: int | None = None, height: int | None = None) -> BoggleTestCase:
    path = Path(path)
    return parse_test_case(path.read_text(encoding="utf-8"), path.stem, width, height)


def compare(expected, actual) -> Comparison:
    """Pair sorted expected and actual words line by line."""
    return Comparison([
        ComparisonLine(exp, act)
        for exp, act in zip_longest(sorted(expected), sorted(actual))
    ])


def format_report(name: str, comparison: Comparison) -> str:
    out = [f"------------------------------ Running {name}", ""]
    for line in comparison.lines:
        exp = line.expected if line.expected is not None else "<missing>"
        act = line.actual if line.actual is not None else "<missing>"
        out.append(f"{exp} - {act}" if line.matched else f"{exp} - {act}    <-- mismatch")
    out.append("")
    out.append("PASS" if comparison.passed else f"FAIL ({len(comparison.mismatches)} mismatched lines)")
    return "\n".join(out)


def run_test_case(case: BoggleTestCase, solver: BoggleSolver | None = None) -> Comparison:
    if solver is None:
        solver = BoggleSolver()
        solver.set_legal_words(case.words)
    found = solver.solve_board(case.width, case.height, case.letters)
    return compare(case.answers, found)
