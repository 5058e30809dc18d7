"""Interactive console front end for a local completion index."""

import sys
from typing import Optional, TextIO

from src.completion.completion_index import CompletionIndex
from src.server.session import CompletionSession

BANNER = """
Welcome to the word autocompleter!

-------------------------------------------------------------------
-T [passage] to train.
? to show how many words have been trained.
! to quit.
Other entries are word fragments which will be completed.
-------------------------------------------------------------------
"""


def run_repl(
    index: Optional[CompletionIndex] = None,
    stdin: TextIO = sys.stdin,
    stdout: TextIO = sys.stdout,
) -> CompletionIndex:
    """Read commands line by line until `!` or end of input.

    Args:
        index (Optional[CompletionIndex]): The index to use. A new empty
        one is created when omitted.
        stdin (TextIO): Where commands are read from.
        stdout (TextIO): Where replies are written to.

    Returns:
        CompletionIndex: The index, trained with whatever the session fed
        into it.

    """
    if index is None:
        index = CompletionIndex()
    session = CompletionSession(index)

    print(BANNER, file=stdout)
    for line in stdin:
        reply = session.handle(line)
        if reply is None:
            continue
        if reply.close:
            break
        print(reply.text, file=stdout)

    return index
