"""
Quiz ranking: flags quizzes for first attempt or retake from past scores
"""

import logging
from typing import List

from ...config import AdaptiveConfig
from ...models import (
    AdaptiveQuiz,
    LearnerQuiz,
    ModuleAnalysis,
    Quiz,
    QuizAdaptiveMetadata,
    RankingResult,
    UserProgress,
)

logger = logging.getLogger(__name__)

REASON_NOT_ATTEMPTED = "not attempted"
REASON_RETAKE = "retake"
REASON_EXCELLENT = "excellent, consider advanced"
REASON_ERROR = "error"


class QuizRanker:
    def __init__(self, config: AdaptiveConfig = None):
        self.config = config or AdaptiveConfig()

    def rank(
        self,
        quizzes: List[Quiz],
        progress: UserProgress,
        analysis: ModuleAnalysis,
    ) -> RankingResult[AdaptiveQuiz]:
        """Annotate quizzes in their stored order; answers are stripped"""
        try:
            items = [
                _adaptive_quiz(quiz, self.annotate(quiz, progress, analysis))
                for quiz in quizzes
            ]
            return RankingResult(items=items)
        except Exception as e:
            logger.error(f"Error ranking quizzes for module {analysis.module_id}: {e}")
            return self.fallback(quizzes)

    def fallback(self, quizzes: List[Quiz]) -> RankingResult[AdaptiveQuiz]:
        items = [
            _adaptive_quiz(quiz, QuizAdaptiveMetadata(reason=REASON_ERROR))
            for quiz in quizzes
        ]
        return RankingResult(items=items, degraded=True)

    def annotate(
        self, quiz: Quiz, progress: UserProgress, analysis: ModuleAnalysis
    ) -> QuizAdaptiveMetadata:
        previous = progress.quiz_result_for(quiz.id)
        if previous is None:
            return QuizAdaptiveMetadata(recommended=True, reason=REASON_NOT_ATTEMPTED)

        metadata = QuizAdaptiveMetadata(last_score=previous.score)
        if previous.score < self.config.retake_score:
            metadata.recommended = True
            metadata.should_retake = True
            metadata.reason = REASON_RETAKE
        elif previous.score > self.config.advanced_score and analysis.ready_for_advanced:
            metadata.reason = REASON_EXCELLENT
        return metadata


def _adaptive_quiz(quiz: Quiz, metadata: QuizAdaptiveMetadata) -> AdaptiveQuiz:
    learner_view = LearnerQuiz.from_quiz(quiz)
    return AdaptiveQuiz(**learner_view.model_dump(), adaptive_metadata=metadata)
