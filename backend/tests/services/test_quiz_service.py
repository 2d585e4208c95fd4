"""
Tests for quiz authoring and submission scoring
"""

import pytest

from athos.exceptions import InvalidSubmissionError, QuizNotFoundError
from athos.models import QuizSubmission
from athos.services import ProgressService, QuizService


def submission(quiz, choices):
    return QuizSubmission(
        answers=[
            {"question_id": question.id, "selected_option": choice}
            for question, choice in zip(quiz.questions, choices)
        ]
    )


class TestQuizService:
    @pytest.mark.asyncio
    async def test_learner_view_strips_answers(self, db_session, seeder):
        async with db_session() as session:
            quiz = await seeder(session).quiz(module_id=1)
            learner_quiz = await QuizService(session).get_learner_quiz(quiz.id)

            for question in learner_quiz.model_dump()["questions"]:
                for option in question["options"]:
                    assert set(option) == {"id", "text"}

    @pytest.mark.asyncio
    async def test_module_listing(self, db_session, seeder):
        async with db_session() as session:
            seed = seeder(session)
            await seed.quiz(module_id=1)
            await seed.quiz(module_id=2)

            quizzes = await QuizService(session).get_learner_quizzes(2)
            assert [q.module_id for q in quizzes] == [2]

    @pytest.mark.asyncio
    async def test_submit_scores_and_records(self, db_session, seeder):
        async with db_session() as session:
            quiz = await seeder(session).quiz(module_id=1, correct=(0, 1, 0, 1))
            service = QuizService(session)

            result = await service.submit_quiz("u1", quiz.id, submission(quiz, [0, 1, 1, 0]))

            assert result.correct_answers == 2
            assert result.total_questions == 4
            assert result.score == 50
            assert [r.is_correct for r in result.results] == [True, True, False, False]

            progress = await ProgressService(session).get_or_create_progress("u1")
            stored = progress.quiz_result_for(quiz.id)
            assert stored.score == 50
            assert len(stored.answers) == 4

    @pytest.mark.asyncio
    async def test_unanswered_questions_count_as_wrong(self, db_session, seeder):
        async with db_session() as session:
            quiz = await seeder(session).quiz(module_id=1, correct=(0, 0, 0))
            result = await QuizService(session).submit_quiz(
                "u1", quiz.id, submission(quiz, [0])
            )
            assert result.score == pytest.approx(33.33)

    @pytest.mark.asyncio
    async def test_out_of_range_option_rejected(self, db_session, seeder):
        async with db_session() as session:
            quiz = await seeder(session).quiz(module_id=1, correct=(0,))
            with pytest.raises(InvalidSubmissionError):
                await QuizService(session).submit_quiz("u1", quiz.id, submission(quiz, [5]))

    @pytest.mark.asyncio
    async def test_unknown_question_rejected(self, db_session, seeder):
        async with db_session() as session:
            quiz = await seeder(session).quiz(module_id=1, correct=(0,))
            bad = QuizSubmission(answers=[{"question_id": "nope", "selected_option": 0}])
            with pytest.raises(InvalidSubmissionError):
                await QuizService(session).submit_quiz("u1", quiz.id, bad)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("repeats", [2, 5])
    async def test_repeated_answer_rejected(self, db_session, seeder, repeats):
        async with db_session() as session:
            quiz = await seeder(session).quiz(module_id=1, correct=(0, 1))
            repeated = QuizSubmission(
                answers=[{"question_id": quiz.questions[0].id, "selected_option": 0}]
                * repeats
            )
            with pytest.raises(InvalidSubmissionError):
                await QuizService(session).submit_quiz("u1", quiz.id, repeated)

            progress = await ProgressService(session).get_or_create_progress("u1")
            assert progress.quiz_result_for(quiz.id) is None

    @pytest.mark.asyncio
    async def test_unknown_quiz(self, db_session):
        async with db_session() as session:
            with pytest.raises(QuizNotFoundError):
                await QuizService(session).submit_quiz(
                    "u1", "missing", QuizSubmission(answers=[])
                )
