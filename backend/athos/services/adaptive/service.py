"""
Adaptive Learning Service: orchestrates module analysis, preference synthesis,
content and quiz ranking, preference learning and the learning path.
"""

import logging
from typing import List

from sqlalchemy.ext.asyncio import AsyncSession

from ...config import AdaptiveConfig
from ...database import ContentDatabase, ProgressDatabase, QuizDatabase, UserDatabase
from ...exceptions import StoreError, UserNotFoundError
from ...models import (
    AdaptiveContentItem,
    AdaptiveQuiz,
    BehaviorEventCreate,
    ContentItem,
    Difficulty,
    LearningPathStep,
    Quiz,
    Recommendations,
    User,
)
from ...models.progress import TrackBehaviorResponse
from ..progress_service import DEFAULT_DERIVED_PREFERENCES, ProgressService
from .content_ranker import ContentRanker
from .learning_path_generator import LearningPathGenerator
from .performance_analyzer import PerformanceAnalyzer
from .preference_learner import PreferenceLearner
from .preference_synthesizer import PreferenceSynthesizer
from .quiz_ranker import QuizRanker

logger = logging.getLogger(__name__)


class AdaptiveLearningService:
    """
    Service for personalized recommendations and behavior tracking.
    Components can be injected for testing; by default each is built from
    the session and config.
    """

    def __init__(
        self,
        db: AsyncSession,
        config: AdaptiveConfig = None,
        progress_service: ProgressService = None,
        learning_path_generator: LearningPathGenerator = None,
    ):
        self.config = config or AdaptiveConfig()
        self.user_db = UserDatabase(db)
        self.content_db = ContentDatabase(db)
        self.quiz_db = QuizDatabase(db)
        self.progress_db = ProgressDatabase(db)
        self.progress_service = progress_service or ProgressService(db, self.config)

        self.analyzer = PerformanceAnalyzer(self.content_db, self.quiz_db, self.config)
        self.synthesizer = PreferenceSynthesizer(self.config)
        self.content_ranker = ContentRanker(self.config)
        self.quiz_ranker = QuizRanker(self.config)
        self.preference_learner = PreferenceLearner(self.progress_db, self.config)
        self.learning_path_generator = (
            learning_path_generator or LearningPathGenerator(self.config)
        )

    async def _load_user(self, user_id: str) -> User:
        row = await self.user_db.get_user(user_id)
        if row is None:
            raise UserNotFoundError(user_id)
        return User(**row)

    async def _module_content(self, module_id: int, **filters) -> List[ContentItem]:
        rows = await self.content_db.find_by_module(module_id, **filters)
        return [ContentItem(**row) for row in rows]

    async def _module_quizzes(self, module_id: int) -> List[Quiz]:
        return [Quiz(**row) for row in await self.quiz_db.find_by_module(module_id)]

    async def get_recommendations(self, user_id: str) -> Recommendations:
        """
        Build personalized recommendations across all modules.

        Args:
            user_id: ID of the requesting user

        Returns:
            Recommendations; empty when a store lookup fails
        """
        user = await self._load_user(user_id)
        try:
            progress = await self.progress_service.get_or_create_progress(user_id)
            priority = self.synthesizer.synthesize(
                user.learning_style, progress.derived_preferences
            )

            recommendations = Recommendations()
            analyses = []
            for module_id in self.config.module_ids:
                analysis = await self.analyzer.analyze(user_id, progress, module_id)
                analyses.append(analysis)

                if analysis.needs_remediation:
                    recommendations.remedial_content.extend(
                        await self._module_content(
                            module_id,
                            difficulty=Difficulty.BASIC.value,
                            limit=self.config.difficulty_content_limit,
                        )
                    )
                elif analysis.average_score > self.config.advanced_score:
                    recommendations.advanced_content.extend(
                        await self._module_content(
                            module_id,
                            difficulty=Difficulty.ADVANCED.value,
                            limit=self.config.difficulty_content_limit,
                        )
                    )

                contents = await self._module_content(module_id)
                recommendations.next_content.extend(
                    self.content_ranker.next_content(
                        contents, progress, analysis, priority
                    )
                )

                ranked_quizzes = self.quiz_ranker.rank(
                    await self._module_quizzes(module_id), progress, analysis
                )
                recommendations.suggested_quizzes.extend(
                    q for q in ranked_quizzes.items if q.adaptive_metadata.recommended
                )

                recommendations.performance_insights[f"module{module_id}"] = analysis

            recommendations.learning_path = (
                self.learning_path_generator.generate_learning_path(analyses)
            )
            return recommendations
        except StoreError as e:
            logger.error(f"Error generating recommendations for user {user_id}: {e}")
            return Recommendations()

    async def get_learning_path(self, user_id: str) -> List[LearningPathStep]:
        """Learning path only, one step per module"""
        await self._load_user(user_id)
        progress = await self.progress_service.get_or_create_progress(user_id)
        analyses = [
            await self.analyzer.analyze(user_id, progress, module_id)
            for module_id in self.config.module_ids
        ]
        return self.learning_path_generator.generate_learning_path(analyses)

    async def _ranking_inputs(self, user_id: str, module_id: int):
        user = await self._load_user(user_id)
        progress = await self.progress_service.get_or_create_progress(user_id)
        analysis = await self.analyzer.analyze(user_id, progress, module_id)
        return user, progress, analysis

    async def get_adaptive_content(
        self, user_id: str, module_id: int
    ) -> List[AdaptiveContentItem]:
        """Module content ranked and annotated for the user"""
        contents = await self._module_content(module_id)
        try:
            user, progress, analysis = await self._ranking_inputs(user_id, module_id)
        except StoreError as e:
            logger.error(f"Error loading ranking inputs for user {user_id}: {e}")
            return self.content_ranker.fallback(contents).items

        priority = self.synthesizer.synthesize(
            user.learning_style, progress.derived_preferences
        )
        result = self.content_ranker.rank(contents, progress, user, analysis, priority)
        if result.degraded:
            logger.warning(
                f"Serving unranked content for module {module_id} to user {user_id}"
            )
        return result.items

    async def get_adaptive_quizzes(
        self, user_id: str, module_id: int
    ) -> List[AdaptiveQuiz]:
        """Module quizzes flagged for first attempt or retake"""
        quizzes = await self._module_quizzes(module_id)
        try:
            _, progress, analysis = await self._ranking_inputs(user_id, module_id)
        except StoreError as e:
            logger.error(f"Error loading ranking inputs for user {user_id}: {e}")
            return self.quiz_ranker.fallback(quizzes).items

        result = self.quiz_ranker.rank(quizzes, progress, analysis)
        if result.degraded:
            logger.warning(
                f"Serving unranked quizzes for module {module_id} to user {user_id}"
            )
        return result.items

    async def track_behavior(
        self, user_id: str, event: BehaviorEventCreate
    ) -> TrackBehaviorResponse:
        """
        Append a behavior event and apply its side effects.

        The append is atomic and always happens first. Every
        `analysis_interval`-th event triggers a best-effort preference refresh.
        Events for a content item that carry a completion flag or time spent
        also update that item's progress.
        """
        await self._load_user(user_id)

        event_count = await self.progress_db.append_behavior_event(
            user_id,
            event.model_dump(mode="json"),
            DEFAULT_DERIVED_PREFERENCES,
            self.config.module_ids,
        )

        refreshed = False
        if self.preference_learner.should_refresh(event_count):
            refreshed = await self.preference_learner.refresh(user_id) is not None

        if event.content_id and (event.completed is not None or event.time_spent > 0):
            await self.progress_service.record_content_activity(
                user_id,
                event.content_id,
                completed=event.completed,
                time_spent=event.time_spent,
                interactions=event.interactions,
            )

        return TrackBehaviorResponse(
            message="Behavior tracked successfully",
            event_count=event_count,
            preferences_refreshed=refreshed,
        )
