"""
Quiz scoring.

Pure functions over an immutable snapshot of a quiz. Nothing here touches the
database once `build_snapshot` has read the rows, so the same snapshot and
answers always produce the same result.
"""
from dataclasses import dataclass
from typing import Dict, FrozenSet, Iterable, Mapping, Tuple


@dataclass(frozen=True)
class QuestionSnapshot:
    question_id: str
    correct_option_ids: FrozenSet[str]


@dataclass(frozen=True)
class AwardTable:
    first_try: int = 0
    second_try: int = 0
    third_try: int = 0
    fourth_plus: int = 0


@dataclass(frozen=True)
class QuizSnapshot:
    quiz_id: str
    course_id: str
    questions: Tuple[QuestionSnapshot, ...]
    award_table: AwardTable
    allow_multiple_attempts: bool = True


@dataclass(frozen=True)
class ScoreResult:
    score: int
    max_score: int


def build_snapshot(quiz) -> QuizSnapshot:
    """Read a Quiz with its questions and options into a QuizSnapshot.

    Prefetch `questions__options` on the queryset to keep this to one query
    per relation.
    """
    questions = tuple(
        QuestionSnapshot(
            question_id=str(question.id),
            correct_option_ids=frozenset(
                str(option.id) for option in question.options.all() if option.is_correct
            ),
        )
        for question in quiz.questions.all()
    )
    return QuizSnapshot(
        quiz_id=str(quiz.id),
        course_id=str(quiz.course_id),
        questions=questions,
        award_table=AwardTable(
            first_try=quiz.points_first_try,
            second_try=quiz.points_second_try,
            third_try=quiz.points_third_try,
            fourth_plus=quiz.points_fourth_plus,
        ),
        allow_multiple_attempts=quiz.allow_multiple_attempts,
    )


def normalize_answers(answers: Iterable[Mapping]) -> Dict[str, FrozenSet[str]]:
    """Turn a list of {question_id, selected_option_ids} into a lookup table.

    Ids are compared as strings. When a question appears more than once the
    first entry wins.
    """
    normalized: Dict[str, FrozenSet[str]] = {}
    for answer in answers:
        question_id = str(answer['question_id'])
        if question_id in normalized:
            continue
        normalized[question_id] = frozenset(
            str(option_id) for option_id in answer.get('selected_option_ids') or ()
        )
    return normalized


def score_quiz(snapshot: QuizSnapshot, answers: Mapping[str, Iterable[str]]) -> ScoreResult:
    """Count the questions whose selection exactly equals the answer key.

    A question with no submitted answer counts as an empty selection, which
    is only correct when the question has no correct options.
    """
    score = 0
    for question in snapshot.questions:
        selected = frozenset(str(option_id) for option_id in answers.get(question.question_id, ()))
        if selected == question.correct_option_ids:
            score += 1
    return ScoreResult(score=score, max_score=len(snapshot.questions))


def points_for_attempt(award_table: AwardTable, attempt_number: int) -> int:
    if attempt_number < 1:
        raise ValueError(f'attempt_number must be >= 1, got {attempt_number}')
    if attempt_number == 1:
        return award_table.first_try
    if attempt_number == 2:
        return award_table.second_try
    if attempt_number == 3:
        return award_table.third_try
    return award_table.fourth_plus
