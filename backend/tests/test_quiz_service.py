from uuid import uuid4

import pytest

from academy.exceptions import NotFoundError, ValidationError
from academy.models.quiz import QuizQuestion, QuizSubmission
from academy.schemas.quiz import QuizFormUpdate, QuizQuestionUpdate, QuizSubmissionCreate
from academy.services.progress_service import ProgressService
from academy.services.quiz_service import QuizService

PASS_PERCENTAGE = 70


def questions(*correct):
    return [QuizQuestion(correct_answer_index=answer) for answer in correct]


@pytest.mark.parametrize("answers, expected", [
    ([0, 2, 1], 3),
    ([0, 0, 1], 2),
    ([3, 3, 3], 0),
    ([7, -1, 1], 1),
])
def test_score_counts_matching_answers(answers, expected):
    assert QuizService.score(questions(0, 2, 1), answers) == expected


def test_score_of_empty_quiz_is_zero():
    assert QuizService.score([], []) == 0


def submit(db, user, quiz, answers):
    return QuizService.submit(
        db, user.id, QuizSubmissionCreate(quiz_id=quiz.id, answers=answers), PASS_PERCENTAGE
    )


def test_passing_submission_completes_chapter(db, student, course_tree, make_quiz):
    chapter = course_tree.chapters[0]
    quiz = make_quiz(chapter.id, correct=(0, 2, 1))

    result = submit(db, student, quiz, [0, 2, 1])

    assert result.passed
    assert result.score == 3
    assert result.total == 3
    assert result.percentage == 100
    assert ProgressService.get_chapter_progress(db, student.id, chapter.id).is_completed


def test_failing_submission_is_recorded_without_progress(db, student, course_tree, make_quiz):
    chapter = course_tree.chapters[0]
    quiz = make_quiz(chapter.id, correct=(0, 2, 1))

    result = submit(db, student, quiz, [0, 2, 3])

    assert not result.passed
    assert result.score == 2
    assert round(result.percentage, 2) == 66.67
    assert db.query(QuizSubmission).filter(QuizSubmission.user_id == student.id).count() == 1
    assert not ProgressService.get_chapter_progress(db, student.id, chapter.id).is_completed


def test_every_attempt_is_recorded(db, student, course_tree, make_quiz):
    quiz = make_quiz(course_tree.chapters[0].id)

    submit(db, student, quiz, [1, 1, 1])
    submit(db, student, quiz, [0, 2, 1])

    attempts = QuizService.get_submissions(db, student.id, quiz.id)
    assert sorted(attempt.score for attempt in attempts) == [1, 3]


def test_answer_count_must_match_questions(db, student, course_tree, make_quiz):
    quiz = make_quiz(course_tree.chapters[0].id)

    with pytest.raises(ValidationError):
        submit(db, student, quiz, [0, 2])
    assert db.query(QuizSubmission).count() == 0


def test_unknown_quiz_is_not_found(db, student):
    with pytest.raises(NotFoundError):
        QuizService.submit(db, student.id, QuizSubmissionCreate(quiz_id=uuid4(), answers=[]), PASS_PERCENTAGE)


def test_create_and_update_quiz_form(db, course_tree, make_quiz):
    quiz = make_quiz(course_tree.chapters[0].id, correct=(1, 3))
    first, second = quiz.questions

    assert first.options == ["A", "B", "C", "D"]
    assert [question.position for question in quiz.questions] == [0, 1]

    QuizService.update_form(db, quiz.id, QuizFormUpdate(
        title="Renamed",
        questions=[
            QuizQuestionUpdate(
                id=second.id, question_text="Changed", options=["w", "x", "y", "z"], correct_answer_index=0
            ),
            QuizQuestionUpdate(
                id=uuid4(), question_text="Ignored", options=["1", "2", "3", "4"], correct_answer_index=2
            ),
        ],
    ))

    reloaded = QuizService.get_form(db, quiz.id)
    assert reloaded.title == "Renamed"
    assert len(reloaded.questions) == 2
    assert reloaded.questions[0].question_text == "Question 0"
    assert reloaded.questions[1].options == ["w", "x", "y", "z"]
    assert reloaded.questions[1].correct_answer_index == 0
