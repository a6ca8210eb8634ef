from dataclasses import dataclass

from app.core.constants import ANSWER_MATCH_PREFIX_LENGTH


@dataclass(frozen=True)
class Verdict:
    is_correct: bool
    points_earned: int


def _normalize_text(value: str | None) -> str:
    return str(value or "").lower()


def match_target(correct_answer: str) -> str:
    return _normalize_text(correct_answer)[:ANSWER_MATCH_PREFIX_LENGTH]


def is_answer_correct(correct_answer: str, answer: str) -> bool:
    """Lenient keyword match: the answer only has to contain the start of the key.

    Extra text around the key is accepted, and so is a submission made of the
    key prefix alone.
    """
    return match_target(correct_answer) in _normalize_text(answer)


def judge_answer(correct_answer: str, points: int, answer: str) -> Verdict:
    if is_answer_correct(correct_answer, answer):
        return Verdict(is_correct=True, points_earned=int(points))
    return Verdict(is_correct=False, points_earned=0)
