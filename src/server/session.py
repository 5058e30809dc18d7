"""Interpret command lines against a completion index.

Commands:
    -T <passage>   train the index with every word of the passage
    ?              report how many words the index holds
    !              end the session
    <fragment>     list the completions of the fragment
"""

import logging
from typing import NamedTuple, Optional

from src.completion.completion_index import CompletionIndex
from src.completion.presentation import format_candidates

TRAIN_PREFIX = "-T"
QUIT_COMMAND = "!"
STATS_COMMAND = "?"


class SessionReply(NamedTuple):
    """The answer to one command line."""

    text: str
    close: bool = False


class CompletionSession:
    """Dispatch command lines to a CompletionIndex."""

    def __init__(self, index: CompletionIndex) -> None:
        """Bind the session to an index.

        Args:
            index (CompletionIndex): The index trained and queried by
            this session. It may be shared with other sessions.

        """
        self.index = index

    def handle(self, line: str) -> Optional[SessionReply]:
        """Run one command line.

        Args:
            line (str): The raw command line.

        Returns:
            Optional[SessionReply]: The reply, or None when the line is
            blank and there is nothing to answer.

        """
        command = line.strip()
        if not command:
            return None

        if command == QUIT_COMMAND:
            return SessionReply("BYE", close=True)

        if command == STATS_COMMAND:
            return SessionReply(
                f"WORDS {len(self.index)} "
                f"OCCURRENCES {self.index.total_occurrences}",
            )

        if command.startswith(TRAIN_PREFIX):
            trained = self.index.train_passage(command[len(TRAIN_PREFIX) :])
            logging.info(f"Trained {trained} words.")
            return SessionReply(
                f"TRAINED {trained} {'WORD' if trained == 1 else 'WORDS'}",
            )

        candidates = self.index.complete(command)
        return SessionReply(format_candidates(command, candidates))
