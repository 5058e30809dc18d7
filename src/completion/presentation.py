"""Render ranked candidates for display."""

from collections.abc import Sequence

from .candidate import Candidate

NO_CANDIDATES = "no candidates"


def format_candidates(fragment: str, candidates: Sequence[Candidate]) -> str:
    """Format the candidates of a fragment in ranked order.

    Args:
        fragment (str): The fragment that was completed.
        candidates (Sequence[Candidate]): The ranked candidates.

    Returns:
        str: A line such as `ca --> "cat" (2), "car" (1)`, or
        `xyz --> no candidates` when the list is empty.

    """
    if not candidates:
        return f"{fragment} --> {NO_CANDIDATES}"
    return f"{fragment} --> " + ", ".join(str(c) for c in candidates)
