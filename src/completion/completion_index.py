"""This module implements the frequency-aware prefix index used to
answer word completion queries.

The index is a forest of PrefixNode tries keyed by the first character
of every trained word. Training a word walks (and extends) the path of
its characters and counts one occurrence on the last node. Completing a
fragment walks the same path and gathers every trained word below it,
ranked by how often each one was seen.
"""

from typing import Optional

from .candidate import Candidate
from .prefix_node import PrefixNode
from .tokenizer import extract_words


class CompletionIndex:
    """Represents the prefix completion index."""

    def __init__(self) -> None:
        """Initialize an empty index."""
        self.roots: dict[str, PrefixNode] = {}

    def train(self, word: str) -> None:
        """Add one occurrence of `word` to the index.

        Args:
            word (str): A non-empty lowercase alphabetic word. Callers are
            expected to normalize tokens (see `extract_words`).

        """
        if not word:
            return

        first = word[0]
        node = self.roots.get(first)
        if node is None:
            node = PrefixNode(first)
            self.roots[first] = node

        for letter in word[1:]:
            node = node.ensure_child(letter)

        # Only the node the word ends on is counted
        node.mark_occurrence()

    def train_passage(self, passage: str) -> int:
        """Train every word token found in a raw passage.

        Args:
            passage (str): Free text; it is lowercased and split into
            alphabetic runs before training.

        Returns:
            int: The number of tokens trained.

        """
        count = 0
        for word in extract_words(passage):
            self.train(word)
            count += 1
        return count

    def complete(self, fragment: str) -> list[Candidate]:
        """Return the trained words starting with `fragment`.

        Args:
            fragment (str): The partial word to complete. Case is ignored.

        Returns:
            list[Candidate]: One candidate per trained word that has
            `fragment` as a prefix (the fragment itself included), ordered
            by descending confidence and then alphabetically. Empty when
            the fragment is empty or no trained word starts with it.

        """
        if not fragment:
            return []

        node = self._find(fragment.lower())
        if node is None:
            return []

        nodes: list[PrefixNode] = []
        node.collect_terminal_descendants(nodes)

        candidates = [Candidate(n.substring, n.occurrences) for n in nodes]
        candidates.sort(key=Candidate.rank_key)
        return candidates

    def occurrences(self, word: str) -> int:
        """Return how many times exactly `word` was trained.

        Args:
            word (str): The word to look up.

        Returns:
            int: The occurrence count, 0 for unknown words.

        """
        if not word:
            return 0
        node = self._find(word.lower())
        return node.occurrences if node is not None else 0

    @property
    def total_occurrences(self) -> int:
        """The number of training instances seen so far."""
        return sum(c.confidence for c in self._all_candidates())

    def _find(self, path: str) -> Optional[PrefixNode]:
        """Walk the index along `path`.

        Returns:
            Optional[PrefixNode]: The node reached after the last
            character, or None as soon as a character has no node.

        """
        node = self.roots.get(path[0])
        for letter in path[1:]:
            if node is None:
                return None
            node = node.child_for(letter)
        return node

    def _all_candidates(self) -> list[Candidate]:
        nodes: list[PrefixNode] = []
        for root in self.roots.values():
            root.collect_terminal_descendants(nodes)
        return [Candidate(n.substring, n.occurrences) for n in nodes]

    def __contains__(self, word: object) -> bool:
        return isinstance(word, str) and self.occurrences(word) > 0

    def __len__(self) -> int:
        return len(self._all_candidates())

    def __repr__(self) -> str:
        return (
            f"CompletionIndex(words={len(self)}, "
            f"occurrences={self.total_occurrences})"
        )
