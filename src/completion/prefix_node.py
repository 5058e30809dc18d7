"""This module represents a single node of the prefix trie used for
word completion.
"""

from typing import Optional


class PrefixNode:
    """Represent a node in the prefix trie."""

    __slots__ = ("substring", "occurrences", "children")

    def __init__(self, substring: str) -> None:
        """Initialize a new prefix node.

        Attributes:
            substring (str): The characters on the path from the trie
            root to this node.
            occurrences (int): How many trained words ended exactly here.
            children (dict): A dictionary mapping the next character to
            its corresponding child PrefixNode.

        """
        self.substring = substring
        self.occurrences = 0
        self.children: dict[str, PrefixNode] = {}

    @property
    def is_terminal(self) -> bool:
        """Whether a trained word ends at this node."""
        return self.occurrences > 0

    def child_for(self, letter: str) -> Optional["PrefixNode"]:
        """Return the child reached through `letter`, if any.

        Args:
            letter (str): The next character.

        Returns:
            Optional[PrefixNode]: The child node, or None if absent.

        """
        return self.children.get(letter)

    def ensure_child(self, letter: str) -> "PrefixNode":
        """Return the child reached through `letter`, creating it if needed.

        Args:
            letter (str): The next character.

        Returns:
            PrefixNode: The existing or newly inserted child.

        """
        child = self.children.get(letter)
        if child is None:
            child = PrefixNode(self.substring + letter)
            self.children[letter] = child
        return child

    def mark_occurrence(self) -> None:
        """Record one more trained word ending at this node."""
        self.occurrences += 1

    def collect_terminal_descendants(self, out: list["PrefixNode"]) -> None:
        """Append every terminal node of this subtree to `out`.

        The walk is pre-order and starts at this node, so the node itself
        is included when it is terminal. An explicit stack is used instead
        of recursion.

        Args:
            out (list[PrefixNode]): The list the terminal nodes are
            appended to.

        """
        stack = [self]
        while stack:
            node = stack.pop()
            if node.occurrences > 0:
                out.append(node)
            # Reversed so children come off the stack in insertion order
            stack.extend(reversed(node.children.values()))

    def __repr__(self) -> str:
        return (
            f"PrefixNode(substring={self.substring!r}, "
            f"occurrences={self.occurrences}, "
            f"children={len(self.children)})"
        )
