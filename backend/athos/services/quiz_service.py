"""
Quiz service: quiz authoring, learner views and submission scoring
"""

import logging
import uuid
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from ..config import AdaptiveConfig
from ..database import QuizDatabase
from ..database.base import json_dumps, utcnow_iso
from ..exceptions import InvalidSubmissionError, QuizNotFoundError
from ..models import LearnerQuiz, Quiz, QuizCreate, QuizSubmission, QuizSubmissionResult
from ..models.progress import QuizAnswerRecord
from ..models.quiz import AnswerResult
from .progress_service import ProgressService

logger = logging.getLogger(__name__)


class QuizService:
    def __init__(
        self,
        db: AsyncSession,
        progress_service: ProgressService = None,
        config: AdaptiveConfig = None,
    ):
        self.quiz_db = QuizDatabase(db)
        self.progress_service = progress_service or ProgressService(db, config)

    async def create_quiz(self, quiz_data: QuizCreate) -> Quiz:
        quiz_id = str(uuid.uuid4())
        await self.quiz_db.create_quiz(
            {
                "id": quiz_id,
                "module_id": quiz_data.module_id,
                "title": quiz_data.title,
                "questions": json_dumps(
                    [q.model_dump(mode="json") for q in quiz_data.questions]
                ),
                "created_at": utcnow_iso(),
            }
        )
        logger.info(
            f"Created quiz {quiz_id} with {len(quiz_data.questions)} questions "
            f"for module {quiz_data.module_id}"
        )
        return await self.get_quiz(quiz_id)

    async def get_quiz(self, quiz_id: str) -> Optional[Quiz]:
        row = await self.quiz_db.get_quiz(quiz_id)
        return Quiz(**row) if row else None

    async def get_module_quizzes(self, module_id: int) -> List[Quiz]:
        rows = await self.quiz_db.find_by_module(module_id)
        return [Quiz(**row) for row in rows]

    async def get_learner_quiz(self, quiz_id: str) -> LearnerQuiz:
        quiz = await self.get_quiz(quiz_id)
        if quiz is None:
            raise QuizNotFoundError(quiz_id)
        return LearnerQuiz.from_quiz(quiz)

    async def get_learner_quizzes(self, module_id: int) -> List[LearnerQuiz]:
        return [LearnerQuiz.from_quiz(q) for q in await self.get_module_quizzes(module_id)]

    async def submit_quiz(
        self, user_id: str, quiz_id: str, submission: QuizSubmission
    ) -> QuizSubmissionResult:
        """
        Score a submission against the stored answers and record the attempt.

        Questions without a submitted answer count as incorrect.
        """
        quiz = await self.get_quiz(quiz_id)
        if quiz is None:
            raise QuizNotFoundError(quiz_id)
        if not quiz.questions:
            raise InvalidSubmissionError(f"Quiz {quiz_id} has no questions")

        questions = {q.id: q for q in quiz.questions}
        results = []
        answered = set()
        for answer in submission.answers:
            question = questions.get(answer.question_id)
            if question is None:
                raise InvalidSubmissionError(
                    f"Unknown question {answer.question_id} for quiz {quiz_id}"
                )
            if question.id in answered:
                raise InvalidSubmissionError(
                    f"Question {answer.question_id} answered more than once"
                )
            answered.add(question.id)
            if answer.selected_option >= len(question.options):
                raise InvalidSubmissionError(
                    f"Option {answer.selected_option} out of range for question "
                    f"{answer.question_id}"
                )
            results.append(
                AnswerResult(
                    question_id=question.id,
                    is_correct=question.options[answer.selected_option].is_correct,
                )
            )

        correct_answers = sum(1 for r in results if r.is_correct)
        score = round(correct_answers / len(quiz.questions) * 100, 2)

        await self.progress_service.save_quiz_result(
            user_id,
            quiz_id,
            score,
            [QuizAnswerRecord(question_id=r.question_id, is_correct=r.is_correct) for r in results],
        )
        logger.info(f"User {user_id} scored {score} on quiz {quiz_id}")

        return QuizSubmissionResult(
            quiz_id=quiz_id,
            score=score,
            correct_answers=correct_answers,
            total_questions=len(quiz.questions),
            results=results,
        )
