import dataclasses

import pytest

from src.completion.candidate import Candidate


def test_candidate_is_immutable():
    candidate = Candidate("cat", 2)
    with pytest.raises(dataclasses.FrozenInstanceError):
        candidate.confidence = 3


def test_candidates_compare_by_confidence_only():
    assert Candidate("zebra", 1) < Candidate("apple", 2)
    assert Candidate("apple", 3) > Candidate("zebra", 2)
    assert not Candidate("apple", 2) < Candidate("zebra", 2)
    assert not Candidate("apple", 2) > Candidate("zebra", 2)


def test_candidates_compare_or_equal_by_confidence_only():
    assert Candidate("apple", 2) <= Candidate("zebra", 2)
    assert Candidate("zebra", 2) >= Candidate("apple", 2)
    assert Candidate("zebra", 1) <= Candidate("apple", 2)
    assert not Candidate("zebra", 3) <= Candidate("apple", 2)
    assert not Candidate("apple", 1) >= Candidate("zebra", 2)


def test_ordering_with_other_types_is_unsupported():
    with pytest.raises(TypeError):
        Candidate("cat", 1) <= 1
    with pytest.raises(TypeError):
        Candidate("cat", 1) >= 1


def test_rank_key_orders_by_confidence_then_word():
    candidates = [
        Candidate("cart", 1),
        Candidate("cat", 2),
        Candidate("car", 1),
    ]
    ranked = sorted(candidates, key=Candidate.rank_key)
    assert [c.word for c in ranked] == ["cat", "car", "cart"]


def test_str_form():
    assert str(Candidate("cat", 2)) == '"cat" (2)'
