from __future__ import annotations

import functools
import logging
from typing import Iterable, Iterator, Sequence

from boggle_solver.errors import InvalidInput, NotConfigured
from boggle_solver.trie import Trie, TrieNode

logger = logging.getLogger("boggle")

# Board characters that stand for more than one letter
DEFAULT_TILES = {"q": "qu"}

# (row, col) offsets: right, left, down, up, then the four diagonals
OFFSETS = ((0, 1), (0, -1), (1, 0), (-1, 0), (1, 1), (-1, 1), (1, -1), (-1, -1))


# Board shapes come from clients, so only the most recent ones are kept
NEIGHBOR_CACHE_SIZE = 64


@functools.lru_cache(maxsize=NEIGHBOR_CACHE_SIZE)
def neighbors(width: int, height: int) -> tuple[tuple[int, ...], ...]:
    """Adjacent cell indices for every cell of a row-major board.

    Cell (row, col) lives at index row * width + col.
    """
    table = []
    for idx in range(width * height):
        r, c = divmod(idx, width)
        adj = []
        for dr, dc in OFFSETS:
            nr, nc = r + dr, c + dc
            if 0 <= nr < height and 0 <= nc < width:
                adj.append(nr * width + nc)
        table.append(tuple(adj))
    return tuple(table)


def parse_tile_spellings(text: str) -> dict[str, str]:
    """Parse "q=qu,x=xy" into {"q": "qu", "x": "xy"}."""
    tiles = {}
    for entry in text.split(","):
        entry = entry.strip()
        if not entry:
            continue
        char, sep, spelling = entry.partition("=")
        char, spelling = char.strip(), spelling.strip()
        if not sep or len(char) != 1 or not spelling:
            raise InvalidInput(f"Bad tile spelling {entry!r}, expected e.g. 'q=qu'")
        tiles[char] = spelling
    return tiles


class BoggleSolver:
    """Finds every legal word traceable on a board.

    The prefix index is the only state kept between calls; everything a
    search mutates is local to solve_board, so one solver may serve
    concurrent calls.
    """

    def __init__(self, tiles: dict[str, str] | None = None):
        self.tiles = dict(DEFAULT_TILES if tiles is None else tiles)
        for char, spelling in self.tiles.items():
            if not spelling:
                raise InvalidInput(f"Tile {char!r} has an empty spelling")
        self._trie: Trie | None = None

    @property
    def trie(self) -> Trie | None:
        return self._trie

    @property
    def configured(self) -> bool:
        return self._trie is not None

    def set_legal_words(self, words: Iterable[str]):
        trie = Trie.build(words)
        logger.info("Prefix index built: %d words, %d nodes", trie.size(), trie.num_nodes())
        self._trie = trie

    set_dictionary = set_legal_words

    def _board_tiles(self, width: int, height: int, letters: str | Sequence[str]) -> list[str]:
        if width < 0 or height < 0:
            raise InvalidInput(f"Board dimensions must be non-negative, got {width}x{height}")
        if len(letters) != width * height:
            raise InvalidInput(
                f"A {width}x{height} board needs {width * height} cells, got {len(letters)}"
            )
        if isinstance(letters, str):
            return [self.tiles.get(ch, ch) for ch in letters]

        cells = list(letters)
        for idx, tile in enumerate(cells):
            if not isinstance(tile, str) or not tile:
                raise InvalidInput(f"Cell {idx} has no letters: {tile!r}")
        return cells

    def solve_board(self, width: int, height: int, letters: str | Sequence[str]) -> set[str]:
        """Return the distinct legal words on a width x height board.

        `letters` is row-major: either one character per cell (expanded through
        the tile spellings) or one tile string per cell, e.g. ["qu", "i", ...].
        """
        trie = self._trie
        if trie is None:
            raise NotConfigured("set_legal_words must be called before solve_board")

        cells = self._board_tiles(width, height, letters)
        adjacency = neighbors(width, height)

        found: set[str] = set()
        path: list[str] = []
        visited = [False] * len(cells)

        # Frames of (cell, trie node, unexplored neighbors), one per cell on the path
        stack: list[tuple[int, TrieNode, Iterator[int]]] = []

        def enter(idx: int, node: TrieNode) -> bool:
            # A multi-letter tile advances several levels at once, or not at all
            current = trie.advance_tile(node, cells[idx])
            if current is None:
                return False

            visited[idx] = True
            path.append(cells[idx])
            if trie.is_terminal(current):
                found.add("".join(path))
            stack.append((idx, current, iter(adjacency[idx] if current.children else ())))
            return True

        for start in range(len(cells)):
            enter(start, trie.root)
            while stack:
                idx, node, pending = stack[-1]
                for nidx in pending:
                    if not visited[nidx] and enter(nidx, node):
                        break
                else:
                    stack.pop()
                    path.pop()
                    visited[idx] = False

        logger.debug("Solved %dx%d board: %d words", width, height, len(found))
        return found

    solve = solve_board


def load_words(path: str, min_length: int = 1) -> list[str]:
    words = []
    with open(path, "r", encoding="utf-8") as f:
        for line in f:
            word = line.strip()
            if word and len(word) >= min_length:
                words.append(word)
    return words


def load_solver(path: str, min_length: int = 1, tiles: dict[str, str] | None = None) -> BoggleSolver:
    solver = BoggleSolver(tiles)
    solver.set_legal_words(load_words(path, min_length))
    return solver
