from enum import Enum


SHUTOUT_SCORE = 4
DEUCE_SCORE = 6
WINNING_SCORE = 7
DEUCE_MARGIN = 2


class RoundResult(str, Enum):
    NONE = 'none'
    WINS_A = 'A'
    WINS_B = 'B'


def evaluate(score_a: int, score_b: int) -> RoundResult:
    """Decide a round from the current scores.

    4-0 is a shutout win. Once both sides reach 6 a two point lead is
    required. Otherwise the first side to 7 wins. Safe to call again on
    an already decided score.
    """
    if score_a == SHUTOUT_SCORE and score_b == 0:
        return RoundResult.WINS_A
    if score_b == SHUTOUT_SCORE and score_a == 0:
        return RoundResult.WINS_B

    if score_a >= DEUCE_SCORE and score_b >= DEUCE_SCORE:
        if score_a - score_b >= DEUCE_MARGIN:
            return RoundResult.WINS_A
        if score_b - score_a >= DEUCE_MARGIN:
            return RoundResult.WINS_B
        return RoundResult.NONE

    if score_a >= WINNING_SCORE:
        return RoundResult.WINS_A
    if score_b >= WINNING_SCORE:
        return RoundResult.WINS_B
    return RoundResult.NONE


def is_shutout(score_a: int, score_b: int) -> bool:
    return (score_a, score_b) in ((SHUTOUT_SCORE, 0), (0, SHUTOUT_SCORE))


def is_deuce(score_a: int, score_b: int) -> bool:
    return score_a == score_b and score_a >= DEUCE_SCORE
