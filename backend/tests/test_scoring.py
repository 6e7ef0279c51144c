import pytest

from ponggou.services.tournament.scoring import RoundResult, evaluate, is_deuce, is_shutout


def test_low_scores_only_decided_by_shutout():
    for a in range(4):
        for b in range(4):
            assert evaluate(a, b) is RoundResult.NONE
    assert evaluate(4, 0) is RoundResult.WINS_A
    assert evaluate(0, 4) is RoundResult.WINS_B


def test_shutout_only_at_exactly_four_nil():
    assert evaluate(4, 1) is RoundResult.NONE
    assert evaluate(5, 0) is RoundResult.NONE
    assert evaluate(6, 0) is RoundResult.NONE


@pytest.mark.parametrize('a,b,expected', [
    (7, 5, RoundResult.WINS_A),
    (7, 0, RoundResult.WINS_A),
    (5, 7, RoundResult.WINS_B),
    (6, 6, RoundResult.NONE),
    (7, 6, RoundResult.NONE),
    (8, 6, RoundResult.WINS_A),
    (7, 7, RoundResult.NONE),
    (9, 7, RoundResult.WINS_A),
    (10, 12, RoundResult.WINS_B),
])
def test_standard_and_deuce(a, b, expected):
    assert evaluate(a, b) is expected


def test_evaluate_is_idempotent_on_final_scores():
    assert evaluate(9, 7) == evaluate(9, 7)
    assert evaluate(4, 0) == evaluate(4, 0)


def test_helpers():
    assert is_shutout(0, 4)
    assert not is_shutout(4, 2)
    assert is_deuce(6, 6)
    assert is_deuce(9, 9)
    assert not is_deuce(7, 6)
