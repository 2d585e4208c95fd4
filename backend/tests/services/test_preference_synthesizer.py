"""
Tests for the content-type priority table
"""

import pytest

from athos.config import AdaptiveConfig
from athos.models import DerivedPreferences
from athos.services.adaptive import PreferenceSynthesizer


@pytest.fixture
def synthesizer():
    return PreferenceSynthesizer(AdaptiveConfig())


class TestPreferenceSynthesizer:
    def test_base_priority_without_signals(self, synthesizer):
        priority = synthesizer.build_priority_table("unknown")
        assert priority == {"text": 1, "image": 2, "video": 3}

    def test_visual_learner_without_history(self, synthesizer):
        priority = synthesizer.synthesize("visual", DerivedPreferences())
        assert priority == {"text": 1, "image": 5, "video": 6}
        assert priority["image"] > priority["text"]

    def test_textual_learner_without_history(self, synthesizer):
        priority = synthesizer.synthesize("textual", DerivedPreferences())
        assert priority == {"text": 4, "image": 3, "video": 4}

    def test_textual_learner_with_video_engagement(self, synthesizer):
        priority = synthesizer.build_priority_table(
            "textual", "video", {"video": 10}
        )
        # base 3, textual nudge 1, derived type 2, engagement round(10 / 2)
        assert priority["video"] == 3 + 1 + 2 + 5
        assert priority["text"] == 4
        assert priority["image"] == 3

    def test_textual_learner_with_derived_text(self, synthesizer):
        # a learning style never equals a content type, so the boost applies
        priority = synthesizer.build_priority_table("textual", "text")
        assert priority == {"text": 6, "image": 3, "video": 4}

    def test_visual_learner_with_derived_image(self, synthesizer):
        priority = synthesizer.build_priority_table("visual", "image")
        assert priority["image"] == 7

    def test_engagement_rounds_half_up(self, synthesizer):
        priority = synthesizer.build_priority_table("visual", None, {"text": 5})
        # round(2.5) goes up
        assert priority["text"] == 1 + 3

    def test_unknown_and_non_positive_engagement_ignored(self, synthesizer):
        priority = synthesizer.build_priority_table(
            "visual", "audio", {"audio": 40, "text": 0}
        )
        assert priority == {"text": 1, "image": 5, "video": 6}

    def test_stated_style_dominates_single_derived_signal(self, synthesizer):
        priority = synthesizer.build_priority_table("visual", "text")
        assert priority["text"] == 3
        assert priority["image"] > priority["text"]
        assert priority["video"] > priority["text"]

    def test_accepts_enum_values(self, synthesizer):
        derived = DerivedPreferences(
            preferred_content_type="video", engagement_scores={"video": 2.2}
        )
        priority = synthesizer.synthesize("visual", derived)
        assert priority["video"] == 3 + 3 + 2 + 1
