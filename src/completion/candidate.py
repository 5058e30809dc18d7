"""Completion result returned for a fragment query."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Candidate:
    """A possible completion of a fragment.

    Attributes:
        word (str): The completed word.
        confidence (int): How many times the word occurred in training.
        This is a raw count, not a probability.

    """

    word: str
    confidence: int

    def __lt__(self, other: "Candidate") -> bool:
        # Candidates are ordered by confidence only
        if not isinstance(other, Candidate):
            return NotImplemented
        return self.confidence < other.confidence

    def __gt__(self, other: "Candidate") -> bool:
        if not isinstance(other, Candidate):
            return NotImplemented
        return self.confidence > other.confidence

    def __le__(self, other: "Candidate") -> bool:
        if not isinstance(other, Candidate):
            return NotImplemented
        return self.confidence <= other.confidence

    def __ge__(self, other: "Candidate") -> bool:
        if not isinstance(other, Candidate):
            return NotImplemented
        return self.confidence >= other.confidence

    def rank_key(self) -> tuple[int, str]:
        """Return the sort key used for ranked results.

        Higher confidence comes first; equal confidence falls back to
        the word in ascending order.

        Returns:
            tuple[int, str]: The ranking key.

        """
        return (-self.confidence, self.word)

    def __str__(self) -> str:
        return f'"{self.word}" ({self.confidence})'
