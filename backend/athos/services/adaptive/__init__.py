"""
Adaptive learning engine: analysis, preference synthesis, ranking, preference
learning and learning paths.
"""

from .content_ranker import ContentRanker
from .learning_path_generator import LearningPathGenerator
from .performance_analyzer import PerformanceAnalyzer
from .preference_learner import PreferenceLearner
from .preference_synthesizer import PreferenceSynthesizer
from .quiz_ranker import QuizRanker
from .service import AdaptiveLearningService

__all__ = [
    "ContentRanker",
    "LearningPathGenerator",
    "PerformanceAnalyzer",
    "PreferenceLearner",
    "PreferenceSynthesizer",
    "QuizRanker",
    "AdaptiveLearningService",
]
