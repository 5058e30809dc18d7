"""Split raw training passages into trainable word tokens."""

import re
from collections.abc import Iterator

_WORD_PATTERN = re.compile(r"[a-z]+")


def extract_words(passage: str) -> Iterator[str]:
    """Lazily yield the lowercase alphabetic words of a passage.

    The whole passage is lowercased first, then every maximal run of
    the characters a-z is yielded. Anything else acts as a separator.

    Args:
        passage (str): The raw passage.

    Yields:
        str: The next word token.

    """
    for match in _WORD_PATTERN.finditer(passage.lower()):
        yield match.group()
