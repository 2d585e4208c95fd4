"""
Adaptive learning models: module analysis, ranked content and quizzes,
learning path and recommendation payloads
"""

from dataclasses import dataclass, field
from pydantic import BaseModel, Field
from typing import Optional, List, Dict, Generic, TypeVar
from enum import Enum

from .content import ContentItem
from .quiz import LearnerQuiz

T = TypeVar("T")


class ModuleAnalysis(BaseModel):
    """Summary of a user's mastery of one module"""

    module_id: int
    total_quizzes: int = 0
    completed_quizzes: int = 0
    average_score: int = 0
    total_content: int = 0
    completed_content: int = 0
    completion_rate: int = Field(0, ge=0, le=100)
    struggle_areas: List[str] = Field(default_factory=list)
    strength_areas: List[str] = Field(default_factory=list)
    avg_time_per_content: float = 0
    needs_remediation: bool = False
    ready_for_advanced: bool = False

    @classmethod
    def empty(cls, module_id: int) -> "ModuleAnalysis":
        """Zeroed analysis reported when no signal could be computed"""
        return cls(module_id=module_id)


class PriorityBucket(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class AdaptiveMetadata(BaseModel):
    recommended: bool = False
    reason: str = ""
    priority: PriorityBucket = PriorityBucket.MEDIUM
    learning_style_match: int = 0
    visual_learner_boost: bool = False
    behavior_match: bool = False


class AdaptiveContentItem(ContentItem):
    adaptive_metadata: AdaptiveMetadata


class QuizAdaptiveMetadata(BaseModel):
    recommended: bool = False
    reason: str = ""
    last_score: Optional[float] = None
    should_retake: bool = False


class AdaptiveQuiz(LearnerQuiz):
    adaptive_metadata: QuizAdaptiveMetadata


@dataclass
class RankingResult(Generic[T]):
    """Ranked items, or the neutral fallback list when ranking failed"""

    items: List[T] = field(default_factory=list)
    degraded: bool = False


class PathStatus(str, Enum):
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    NEEDS_REVIEW = "needs_review"
    ADVANCED_READY = "advanced_ready"
    COMPLETED = "completed"


class LearningPathStep(BaseModel):
    module_id: int
    status: PathStatus
    recommendation: str
    next_actions: List[str] = Field(default_factory=list)


class Recommendations(BaseModel):
    next_content: List[ContentItem] = Field(default_factory=list)
    remedial_content: List[ContentItem] = Field(default_factory=list)
    advanced_content: List[ContentItem] = Field(default_factory=list)
    suggested_quizzes: List[AdaptiveQuiz] = Field(default_factory=list)
    learning_path: List[LearningPathStep] = Field(default_factory=list)
    performance_insights: Dict[str, ModuleAnalysis] = Field(default_factory=dict)
