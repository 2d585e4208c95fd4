"""
Content ranking: orders a module's content by the priority table and the
module analysis, and annotates every item with recommendation metadata.
"""

import logging
from typing import Dict, List, Optional

from ...config import AdaptiveConfig
from ...models import (
    AdaptiveContentItem,
    AdaptiveMetadata,
    ContentItem,
    ContentType,
    Difficulty,
    LearningStyle,
    ModuleAnalysis,
    PriorityBucket,
    RankingResult,
    User,
    UserProgress,
)
from ..utils import enum_value as _value

logger = logging.getLogger(__name__)

REASON_VISUAL_MATCH = "Not completed yet - visual content matches your learning style"
REASON_TEXTUAL_MATCH = "Not completed yet - text content matches your learning style"
REASON_NEW_CONTENT = "Not completed yet - new content to explore"
REASON_ENGAGEMENT = "Matches the type of content you engage with most"
REASON_REVIEW = "Recommended for review - strengthen basics"
REASON_CHALLENGE = "Advanced content - you're ready for the challenge"
REASON_VISUAL = "Visual content suited to your learning style"
REASON_ADDITIONAL = "Additional learning opportunity"
REASON_ERROR = "error"


class ContentRanker:
    def __init__(self, config: AdaptiveConfig = None):
        self.config = config or AdaptiveConfig()

    def rank(
        self,
        contents: List[ContentItem],
        progress: UserProgress,
        user: User,
        analysis: ModuleAnalysis,
        priority: Dict[str, int],
    ) -> RankingResult[AdaptiveContentItem]:
        """Sort and annotate content; falls back to the unranked list on failure"""
        try:
            ordered = self.sort(contents, analysis, priority)
            items = [
                AdaptiveContentItem(
                    **content.model_dump(),
                    adaptive_metadata=self.annotate(
                        content, progress, user, analysis, priority
                    ),
                )
                for content in ordered
            ]
            return RankingResult(items=items)
        except Exception as e:
            logger.error(f"Error ranking content for module {analysis.module_id}: {e}")
            return self.fallback(contents)

    def fallback(self, contents: List[ContentItem]) -> RankingResult[AdaptiveContentItem]:
        items = [
            AdaptiveContentItem(
                **content.model_dump(),
                adaptive_metadata=AdaptiveMetadata(
                    recommended=False,
                    reason=REASON_ERROR,
                    priority=PriorityBucket.MEDIUM,
                ),
            )
            for content in contents
        ]
        return RankingResult(items=items, degraded=True)

    def sort(
        self,
        contents: List[ContentItem],
        analysis: ModuleAnalysis,
        priority: Dict[str, int],
        basic_first_by_default: bool = False,
    ) -> List[ContentItem]:
        """
        Stable sort: higher type priority first, then difficulty according to
        the module analysis. Items equal on both keep their input order.
        """

        def key(content: ContentItem):
            return (
                -priority.get(_value(content.type), 0),
                self._difficulty_rank(content, analysis, basic_first_by_default),
            )

        return sorted(contents, key=key)

    def next_content(
        self,
        contents: List[ContentItem],
        progress: UserProgress,
        analysis: ModuleAnalysis,
        priority: Dict[str, int],
        limit: Optional[int] = None,
    ) -> List[ContentItem]:
        """Top uncompleted items of a module, basic before advanced on ties"""
        completed = progress.completed_content_ids()
        uncompleted = [c for c in contents if c.id not in completed]
        ordered = self.sort(uncompleted, analysis, priority, basic_first_by_default=True)
        return ordered[: limit or self.config.next_content_limit]

    def annotate(
        self,
        content: ContentItem,
        progress: UserProgress,
        user: User,
        analysis: ModuleAnalysis,
        priority: Dict[str, int],
    ) -> AdaptiveMetadata:
        content_type = _value(content.type)
        difficulty = _value(content.difficulty)
        learning_style = _value(user.learning_style)
        derived_type = _value(progress.derived_preferences.preferred_content_type)

        completed = progress.is_completed(content.id)
        is_visual_learner = learning_style == LearningStyle.VISUAL.value
        is_textual_learner = learning_style == LearningStyle.TEXTUAL.value
        is_text = content_type == ContentType.TEXT.value
        remediation_match = (
            analysis.needs_remediation and difficulty == Difficulty.BASIC.value
        )
        advanced_match = (
            analysis.ready_for_advanced and difficulty == Difficulty.ADVANCED.value
        )
        behavior_match = derived_type is not None and derived_type == content_type
        type_score = priority.get(content_type, 0)

        recommended = (
            not completed
            or (is_visual_learner and not is_text)
            or remediation_match
            or advanced_match
        )

        return AdaptiveMetadata(
            recommended=recommended,
            reason=self._reason(
                completed,
                is_visual_learner,
                is_textual_learner,
                is_text,
                behavior_match,
                remediation_match,
                advanced_match,
            ),
            priority=self._priority_bucket(
                type_score, remediation_match, advanced_match
            ),
            learning_style_match=type_score,
            visual_learner_boost=is_visual_learner and not is_text,
            behavior_match=behavior_match,
        )

    def _reason(
        self,
        completed: bool,
        is_visual_learner: bool,
        is_textual_learner: bool,
        is_text: bool,
        behavior_match: bool,
        remediation_match: bool,
        advanced_match: bool,
    ) -> str:
        if not completed:
            if is_visual_learner and not is_text:
                return REASON_VISUAL_MATCH
            if is_textual_learner and is_text:
                return REASON_TEXTUAL_MATCH
            return REASON_NEW_CONTENT
        if behavior_match:
            return REASON_ENGAGEMENT
        if remediation_match:
            return REASON_REVIEW
        if advanced_match:
            return REASON_CHALLENGE
        if is_visual_learner and not is_text:
            return REASON_VISUAL
        return REASON_ADDITIONAL

    def _priority_bucket(
        self,
        type_score: int,
        remediation_match: bool,
        advanced_match: bool,
    ) -> PriorityBucket:
        # The type score overrides any completion-based bucket
        if type_score >= self.config.high_priority_score:
            bucket = PriorityBucket.HIGH
        elif type_score >= self.config.medium_priority_score:
            bucket = PriorityBucket.MEDIUM
        else:
            bucket = PriorityBucket.LOW

        if remediation_match or advanced_match:
            bucket = PriorityBucket.HIGH
        return bucket

    def _difficulty_rank(
        self,
        content: ContentItem,
        analysis: ModuleAnalysis,
        basic_first_by_default: bool,
    ) -> int:
        is_basic = _value(content.difficulty) == Difficulty.BASIC.value
        if analysis.needs_remediation:
            return 0 if is_basic else 1
        if analysis.ready_for_advanced:
            return 1 if is_basic else 0
        if basic_first_by_default:
            return 0 if is_basic else 1
        return 0
