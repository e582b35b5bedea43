import math
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple

from ..models.question import Question


@dataclass(frozen=True)
class SubmittedAnswer:
    question_id: int
    selected_option_id: int


@dataclass(frozen=True)
class ScoredAnswer:
    question_id: int
    selected_option_id: int
    is_correct: bool


def calculate_percentage(score: Optional[int], total: Optional[int]) -> int:
    """
    Whole-number percentage of ``score`` out of ``total``.

    Halves round up (2.5 -> 3), and a missing or zero total yields 0.
    """
    if not total or total <= 0 or score is None:
        return 0
    return int(math.floor(score * 100 / total + 0.5))


def build_correct_answer_map(questions: Iterable[Question]) -> Dict[int, int]:
    """
    Map question id -> id of its correct option.

    When more than one option is flagged correct the first one in stored
    order (order_index, then id) wins. Questions without a correct option
    are left out, so answers to them never score.
    """
    correct_answers: Dict[int, int] = {}
    for question in questions:
        options = sorted(question.answer_options, key=lambda o: (o.order_index or 0, o.id or 0))
        correct_option = next((o for o in options if o.is_correct), None)
        if correct_option is not None:
            correct_answers[question.id] = correct_option.id
    return correct_answers


def score_answers(
    answers: Iterable[SubmittedAnswer],
    correct_answers: Dict[int, int]
) -> Tuple[List[ScoredAnswer], int]:
    scored = []
    correct_count = 0

    for answer in answers:
        correct_option_id = correct_answers.get(answer.question_id)
        is_correct = correct_option_id is not None and correct_option_id == answer.selected_option_id
        if is_correct:
            correct_count += 1

        scored.append(ScoredAnswer(
            question_id=answer.question_id,
            selected_option_id=answer.selected_option_id,
            is_correct=is_correct
        ))

    return scored, correct_count
