from __future__ import annotations

from typing import Iterable

from boggle_solver.errors import NotFound


class TrieNode:
    __slots__ = ("children", "is_word")

    def __init__(self):
        self.children: dict[str, TrieNode] = {}
        self.is_word: bool = False


class Trie:
    """Prefix index over the legal words.

    Each node is one prefix; the root is the empty prefix and is never a word.
    Built once, then only read by searches.
    """

    def __init__(self):
        self.root = TrieNode()

    @classmethod
    def build(cls, words: Iterable[str]) -> Trie:
        trie = cls()
        for word in words:
            trie.insert(word)
        return trie

    def insert(self, word: str):
        if not word:
            return
        node = self.root
        for ch in word:
            if ch not in node.children:
                node.children[ch] = TrieNode()
            node = node.children[ch]
        node.is_word = True

    @staticmethod
    def has_letter(node: TrieNode, letter: str) -> bool:
        return letter in node.children

    @staticmethod
    def advance(node: TrieNode, letter: str) -> TrieNode:
        """Step one letter down. Guard with has_letter first."""
        try:
            return node.children[letter]
        except KeyError:
            raise NotFound(letter) from None

    @staticmethod
    def is_terminal(node: TrieNode) -> bool:
        return node.is_word

    @classmethod
    def advance_tile(cls, node: TrieNode, tile: str) -> TrieNode | None:
        """Consume every letter of a tile ("a", "qu", ...) or none of them.

        Returns None when any letter of the chain is missing.
        """
        for ch in tile:
            if not cls.has_letter(node, ch):
                return None
            node = cls.advance(node, ch)
        return node

    def find(self, prefix: str) -> TrieNode | None:
        return self.advance_tile(self.root, prefix)

    def __contains__(self, word: str) -> bool:
        node = self.find(word)
        return node is not None and node.is_word

    def size(self) -> int:
        """Number of words stored."""
        count = 0
        stack = [self.root]
        while stack:
            node = stack.pop()
            count += node.is_word
            stack.extend(node.children.values())
        return count

    def num_nodes(self) -> int:
        count = 0
        stack = [self.root]
        while stack:
            node = stack.pop()
            count += 1
            stack.extend(node.children.values())
        return count
