"""
Preference learning: recomputes derived preferences from a rolling window of
logged behavior events.
"""

import logging
from datetime import datetime, UTC
from typing import Dict, List, Optional

from ...config import AdaptiveConfig
from ...database import ProgressDatabase
from ...models import (
    ActionType,
    BehaviorEvent,
    ContentType,
    DerivedPreferences,
    DifficultyPreference,
    LearningPace,
)
from ..utils import mean

logger = logging.getLogger(__name__)


class PreferenceLearner:
    def __init__(self, progress_db: ProgressDatabase, config: AdaptiveConfig = None):
        self.progress_db = progress_db
        self.config = config or AdaptiveConfig()

    def should_refresh(self, event_count: int) -> bool:
        """True after every `analysis_interval`-th appended event"""
        interval = self.config.analysis_interval
        return event_count > 0 and interval > 0 and event_count % interval == 0

    async def refresh(self, user_id: str) -> Optional[DerivedPreferences]:
        """
        Recompute and store the user's derived preferences.

        Best effort: failures are logged and None is returned, so the request
        that triggered the refresh is never affected. An empty window leaves
        the stored preferences untouched.
        """
        try:
            rows = await self.progress_db.get_recent_behavior_events(
                user_id, self.config.behavior_window
            )
            events = [BehaviorEvent(**row) for row in rows]
            preferences = self.analyze(events)
            if preferences is None:
                return None

            await self.progress_db.replace_derived_preferences(
                user_id, preferences.model_dump_json()
            )
            logger.info(
                f"Derived preferences updated for user {user_id}: "
                f"{preferences.preferred_content_type.value}, "
                f"pace={preferences.learning_pace.value}, "
                f"difficulty={preferences.difficulty_preference.value}"
            )
            return preferences
        except Exception as e:
            logger.error(f"Error analyzing behavior patterns for user {user_id}: {e}")
            return None

    def analyze(
        self, events: List[BehaviorEvent], now: Optional[datetime] = None
    ) -> Optional[DerivedPreferences]:
        """Derive preferences from the most recent events; None for no events"""
        window = events[-self.config.behavior_window :]
        if not window:
            return None

        engagement_scores = self._engagement_scores(window)
        average_time = mean(e.time_spent for e in window)

        return DerivedPreferences(
            preferred_content_type=self._preferred_type(engagement_scores),
            average_time_per_content=average_time,
            learning_pace=self._learning_pace(average_time),
            difficulty_preference=self._difficulty_preference(window, average_time),
            engagement_scores=engagement_scores,
            last_analysis_date=now or datetime.now(UTC),
        )

    def _engagement_scores(self, window: List[BehaviorEvent]) -> Dict[str, float]:
        grouped: Dict[str, List[BehaviorEvent]] = {}
        for event in window:
            grouped.setdefault(event.content_type, []).append(event)

        scores = {}
        for content_type, events in grouped.items():
            avg_interactions = mean(e.interactions for e in events)
            avg_time = mean(e.time_spent for e in events)
            scores[content_type] = (
                self.config.interaction_weight * avg_interactions
                + self.config.time_weight * (avg_time / self.config.time_scale_seconds)
            )
        return scores

    def _preferred_type(self, engagement_scores: Dict[str, float]) -> ContentType:
        # Strictly greater wins, so ties keep the earlier candidate
        known_types = {t.value for t in ContentType}
        preferred = ContentType.TEXT.value
        best_score = 0.0
        for content_type, score in engagement_scores.items():
            if score > best_score and content_type in known_types:
                preferred = content_type
                best_score = score
        return ContentType(preferred)

    def _learning_pace(self, average_time: float) -> LearningPace:
        if average_time < self.config.fast_pace_seconds:
            return LearningPace.FAST
        if average_time > self.config.slow_pace_seconds:
            return LearningPace.SLOW
        return LearningPace.MEDIUM

    def _difficulty_preference(
        self, window: List[BehaviorEvent], average_time: float
    ) -> DifficultyPreference:
        size = len(window)
        struggles = sum(1 for e in window if e.action_type == ActionType.STRUGGLE)
        quick_exits = sum(1 for e in window if e.action_type == ActionType.QUICK_EXIT)

        if struggles > self.config.struggle_ratio * size:
            return DifficultyPreference.BASIC
        if (
            quick_exits < self.config.quick_exit_ratio * size
            and average_time > self.config.advanced_time_seconds
        ):
            return DifficultyPreference.ADVANCED
        return DifficultyPreference.MIXED
