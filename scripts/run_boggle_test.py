"""
Run Boggle test files against the solver.

Usage:
    python -m scripts.run_boggle_test <test_file> [<test_file> ...] [--size WxH]

Examples:
    python -m scripts.run_boggle_test tests/data/test1.txt
    python -m scripts.run_boggle_test tests/data/*.txt --size 4x4

Each file holds a board, the expected answers and a dictionary (see
boggle_solver/testfile.py). Prints every expected/actual pair, then an
overall summary; exits 1 if any file fails.
"""
import argparse
import logging
import sys
from pathlib import Path

# Ensure project root is on path
PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from boggle_solver.errors import BoggleError
from boggle_solver.metrics import StageTimer
from boggle_solver.settings import settings
from boggle_solver.solver import BoggleSolver, parse_tile_spellings
from boggle_solver.testfile import compare, format_report, load_test_case

logger = logging.getLogger("boggle")


def _parse_size(value: str) -> tuple[int, int]:
    width, sep, height = value.lower().partition("x")
    if not sep or not width.isdigit() or not height.isdigit():
        raise argparse.ArgumentTypeError(f"expected WxH, got {value!r}")
    return int(width), int(height)


def run_file(path: Path, size: tuple[int, int] | None, tiles: dict[str, str]) -> bool:
    width, height = size if size else (None, None)
    case = load_test_case(path, width, height)

    timer = StageTimer(case.name)
    solver = BoggleSolver(tiles)
    with timer.stage("index"):
        solver.set_legal_words(case.words)
    with timer.stage("solve"):
        found = solver.solve_board(case.width, case.height, case.letters)

    comparison = compare(case.answers, found)
    print(format_report(f"{case.name} ({case.width}x{case.height})", comparison))
    print()
    return comparison.passed


def main():
    parser = argparse.ArgumentParser(description="Boggle Solver Test Runner")
    parser.add_argument("test_files", nargs="+", help="Paths to Boggle test files")
    parser.add_argument("--size", type=_parse_size, default=None,
                        help="Board size as WxH (default: inferred from the board section)")
    parser.add_argument("--tiles", type=str, default=settings.TILE_SPELLINGS,
                        help=f"Multi-letter tile spellings (default: {settings.TILE_SPELLINGS})")
    args = parser.parse_args()

    logging.basicConfig(level=settings.LOG_LEVEL, format="%(asctime)s %(name)s %(levelname)s %(message)s")

    no_error = True
    for name in args.test_files:
        path = Path(name)
        if not path.exists():
            print(f"Error: {path} does not exist")
            sys.exit(1)
        try:
            no_error = run_file(path, args.size, parse_tile_spellings(args.tiles)) and no_error
        except BoggleError as e:
            print(f"Error: {path}: {e}")
            sys.exit(1)

    if no_error:
        print("All tests completed successfully.")
    else:
        print("Tests completed with errors.")
    sys.exit(0 if no_error else 1)


if __name__ == "__main__":
    main()
