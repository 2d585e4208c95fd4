"""
Performance analysis: summarizes a user's mastery of one module
"""

import logging
from typing import List

from ...config import AdaptiveConfig
from ...database import ContentDatabase, QuizDatabase
from ...models import ModuleAnalysis, UserProgress
from ..utils import mean, round_half_up

logger = logging.getLogger(__name__)


class PerformanceAnalyzer:
    """
    Computes a ModuleAnalysis from the user's quiz results and content
    progress for the quizzes and content that belong to a module.
    """

    def __init__(
        self,
        content_db: ContentDatabase,
        quiz_db: QuizDatabase,
        config: AdaptiveConfig = None,
    ):
        self.content_db = content_db
        self.quiz_db = quiz_db
        self.config = config or AdaptiveConfig()

    async def analyze(
        self, user_id: str, progress: UserProgress, module_id: int
    ) -> ModuleAnalysis:
        """
        Analyze one module for a user.

        Never raises: lookup failures are logged and reported as a zeroed
        analysis so callers treat them as "no signal".
        """
        try:
            quizzes = await self.quiz_db.find_by_module(module_id)
            contents = await self.content_db.find_by_module(module_id)
            return self.summarize(
                module_id,
                [q["id"] for q in quizzes],
                [c["id"] for c in contents],
                progress,
            )
        except Exception as e:
            logger.error(
                f"Error analyzing module {module_id} performance for user {user_id}: {e}"
            )
            return ModuleAnalysis.empty(module_id)

    def summarize(
        self,
        module_id: int,
        quiz_ids: List[str],
        content_ids: List[str],
        progress: UserProgress,
    ) -> ModuleAnalysis:
        module_quiz_ids = set(quiz_ids)
        module_content_ids = set(content_ids)

        quiz_results = [r for r in progress.quiz_results if r.quiz_id in module_quiz_ids]
        content_progress = [
            p for p in progress.content_progress if p.content_id in module_content_ids
        ]

        raw_average = mean(r.score for r in quiz_results)
        average_score = round_half_up(raw_average)

        total_content = len(module_content_ids)
        completed_content = sum(1 for p in content_progress if p.completed)
        completion_rate = (
            round_half_up(completed_content / total_content * 100)
            if total_content > 0
            else 0
        )

        struggle_areas = [
            r.quiz_id for r in quiz_results if r.score < self.config.remediation_score
        ]
        strength_areas = [
            r.quiz_id for r in quiz_results if r.score > self.config.advanced_score
        ]

        return ModuleAnalysis(
            module_id=module_id,
            total_quizzes=len(module_quiz_ids),
            completed_quizzes=len(quiz_results),
            average_score=average_score,
            total_content=total_content,
            completed_content=completed_content,
            completion_rate=completion_rate,
            struggle_areas=struggle_areas,
            strength_areas=strength_areas,
            avg_time_per_content=mean(p.time_spent for p in content_progress),
            # Flags use the unrounded mean
            needs_remediation=raw_average < self.config.remediation_score,
            ready_for_advanced=(
                raw_average > self.config.advanced_score
                and completed_content
                >= total_content * self.config.advanced_completion_ratio
            ),
        )
