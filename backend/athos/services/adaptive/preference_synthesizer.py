"""
Merges the explicit learning style with behavior-derived preferences into a
content-type priority table.
"""

from typing import Dict, Mapping, Optional

from ...config import AdaptiveConfig
from ...models import DerivedPreferences
from ..utils import enum_value as _value, round_half_up


class PreferenceSynthesizer:
    def __init__(self, config: AdaptiveConfig = None):
        self.config = config or AdaptiveConfig()

    def build_priority_table(
        self,
        learning_style: str,
        derived_preferred_type: Optional[str] = None,
        engagement_scores: Optional[Mapping[str, float]] = None,
    ) -> Dict[str, int]:
        """
        Priority per content type. Steps are applied in a fixed order:
        base priority, explicit style boost, derived-type boost, then the
        engagement nudge. Every step only adds.
        """
        learning_style = _value(learning_style)
        derived_preferred_type = _value(derived_preferred_type)

        priority = dict(self.config.base_type_priority)

        for content_type, boost in self.config.learning_style_boosts.get(
            learning_style, {}
        ).items():
            priority[content_type] += boost

        if (
            derived_preferred_type in priority
            and derived_preferred_type != learning_style
        ):
            priority[derived_preferred_type] += self.config.derived_preference_boost

        for content_type, score in (engagement_scores or {}).items():
            if content_type in priority and score > 0:
                priority[content_type] += round_half_up(
                    score / self.config.engagement_divisor
                )

        return priority

    def synthesize(
        self, learning_style: str, derived: DerivedPreferences
    ) -> Dict[str, int]:
        return self.build_priority_table(
            learning_style,
            derived.preferred_content_type,
            derived.engagement_scores,
        )
