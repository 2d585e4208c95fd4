import os
from dataclasses import dataclass, field, fields
from typing import Dict, Tuple


@dataclass
class AdaptiveConfig:
    """Tunable thresholds for the adaptive learning engine"""

    module_ids: Tuple[int, ...] = (1, 2, 3)

    # Module performance
    remediation_score: float = 60
    advanced_score: float = 85
    advanced_completion_ratio: float = 0.8
    retake_score: float = 70

    # Learning path: below this completion rate a started module is in progress
    in_progress_completion_rate: float = 50

    # Module progress (content share + quiz share = 100%)
    content_progress_weight: float = 0.7
    quiz_progress_weight: float = 0.3
    quiz_pass_score: float = 70

    # Content-type priority table
    base_type_priority: Dict[str, int] = field(
        default_factory=lambda: {"text": 1, "image": 2, "video": 3}
    )
    learning_style_boosts: Dict[str, Dict[str, int]] = field(
        default_factory=lambda: {
            "visual": {"image": 3, "video": 3},
            "textual": {"text": 3, "image": 1, "video": 1},
        }
    )
    derived_preference_boost: int = 2
    engagement_divisor: float = 2

    # Priority buckets on the type score
    high_priority_score: int = 5
    medium_priority_score: int = 3

    # Behavior analysis
    behavior_window: int = 20
    analysis_interval: int = 5
    interaction_weight: float = 0.4
    time_weight: float = 0.6
    time_scale_seconds: float = 100
    fast_pace_seconds: float = 90
    slow_pace_seconds: float = 240
    struggle_ratio: float = 0.3
    quick_exit_ratio: float = 0.1
    advanced_time_seconds: float = 150

    # Recommendation list sizes
    next_content_limit: int = 3
    difficulty_content_limit: int = 3

    @classmethod
    def from_env(cls, prefix: str = "ATHOS_") -> "AdaptiveConfig":
        """Build a config, overriding scalar fields from ATHOS_<FIELD> variables"""
        overrides = {}
        for f in fields(cls):
            if f.type not in (int, float, "int", "float"):
                continue
            raw = os.getenv(f"{prefix}{f.name.upper()}")
            if raw is None:
                continue
            caster = int if f.type in (int, "int") else float
            try:
                overrides[f.name] = caster(raw)
            except ValueError as e:
                raise ValueError(
                    f"Invalid value for {prefix}{f.name.upper()}: {raw!r}"
                ) from e
        return cls(**overrides)


# Global instance for easy access
adaptive_config = AdaptiveConfig.from_env()


def get_adaptive_config() -> AdaptiveConfig:
    return adaptive_config
