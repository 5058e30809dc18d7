import io

from src.client.repl import run_repl
from src.completion.completion_index import CompletionIndex


def test_repl_trains_and_completes():
    stdin = io.StringIO("-T cat car cat\n\nca\n!\nca\n")
    stdout = io.StringIO()

    index = run_repl(stdin=stdin, stdout=stdout)

    lines = stdout.getvalue().splitlines()
    assert "TRAINED 3 WORDS" in lines
    assert 'ca --> "cat" (2), "car" (1)' in lines
    # Nothing after "!" is processed
    assert lines.count('ca --> "cat" (2), "car" (1)') == 1
    assert index.occurrences("cat") == 2


def test_repl_stops_at_end_of_input_and_reuses_index():
    index = CompletionIndex()
    index.train("hello")
    stdout = io.StringIO()

    returned = run_repl(index, io.StringIO("he"), stdout)

    assert returned is index
    assert stdout.getvalue().splitlines()[-1] == 'he --> "hello" (1)'
