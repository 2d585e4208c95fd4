"""
Progress tracking models for the Athos Explorer application
"""

from pydantic import BaseModel, Field
from typing import Optional, List, Dict, Any, Set
from datetime import datetime
from enum import Enum

from .content import ContentType


class ActionType(str, Enum):
    VIEW = "view"
    COMPLETE = "complete"
    STRUGGLE = "struggle"
    QUICK_EXIT = "quick_exit"
    DEEP_ENGAGEMENT = "deep_engagement"
    QUIZ_ATTEMPT = "quiz_attempt"
    NAVIGATION = "navigation"


class LearningPace(str, Enum):
    SLOW = "slow"
    MEDIUM = "medium"
    FAST = "fast"


class DifficultyPreference(str, Enum):
    BASIC = "basic"
    MIXED = "mixed"
    ADVANCED = "advanced"


class ContentProgress(BaseModel):
    content_id: str
    completed: bool = False
    last_accessed: datetime
    time_spent: float = Field(0, ge=0, description="Cumulative seconds")
    interactions: int = Field(0, ge=0, description="Cumulative interaction count")


class QuizAnswerRecord(BaseModel):
    question_id: str
    is_correct: bool


class QuizResult(BaseModel):
    quiz_id: str
    score: float = Field(..., ge=0, le=100)
    answers: List[QuizAnswerRecord] = Field(default_factory=list)
    attempt_number: int = 1
    completed_at: datetime


class ModuleProgressEntry(BaseModel):
    module_id: int = Field(..., ge=1, le=3)
    progress: int = Field(0, ge=0, le=100)


class BehaviorEventCreate(BaseModel):
    content_id: Optional[str] = None
    action_type: ActionType = ActionType.VIEW
    time_spent: float = Field(0, ge=0, description="Seconds spent")
    interactions: int = Field(0, ge=0)
    difficulty: Optional[str] = None
    completed: Optional[bool] = Field(
        None, description="Completion flag reported with this event, if any"
    )
    metadata: Dict[str, Any] = Field(
        default_factory=dict,
        description="contentType, scrollPercentage, clickCount, pauseTime, exitReason",
    )


class BehaviorEvent(BaseModel):
    id: int
    user_id: str
    content_id: Optional[str] = None
    action_type: ActionType
    time_spent: float = 0
    interactions: int = 0
    difficulty: Optional[str] = None
    metadata: Dict[str, Any] = Field(default_factory=dict)
    timestamp: datetime

    @property
    def content_type(self) -> str:
        return self.metadata.get("contentType") or ContentType.TEXT.value


class DerivedPreferences(BaseModel):
    """Preferences inferred from recent behavior; replaced wholesale on each analysis"""

    preferred_content_type: Optional[ContentType] = None
    average_time_per_content: float = 0
    learning_pace: LearningPace = LearningPace.MEDIUM
    difficulty_preference: DifficultyPreference = DifficultyPreference.MIXED
    engagement_scores: Dict[str, float] = Field(default_factory=dict)
    last_analysis_date: Optional[datetime] = None

    class Config:
        frozen = True


class UserProgress(BaseModel):
    user_id: str
    content_progress: List[ContentProgress] = Field(default_factory=list)
    quiz_results: List[QuizResult] = Field(default_factory=list)
    module_progress: List[ModuleProgressEntry] = Field(default_factory=list)
    behavior_event_count: int = 0
    derived_preferences: DerivedPreferences = Field(default_factory=DerivedPreferences)
    created_at: datetime
    updated_at: datetime

    def content_progress_for(self, content_id: str) -> Optional[ContentProgress]:
        for item in self.content_progress:
            if item.content_id == content_id:
                return item
        return None

    def quiz_result_for(self, quiz_id: str) -> Optional[QuizResult]:
        for result in self.quiz_results:
            if result.quiz_id == quiz_id:
                return result
        return None

    def completed_content_ids(self) -> Set[str]:
        return {p.content_id for p in self.content_progress if p.completed}

    def is_completed(self, content_id: str) -> bool:
        item = self.content_progress_for(content_id)
        return bool(item and item.completed)


class ContentProgressUpdate(BaseModel):
    content_id: str
    completed: bool = True


class QuizResultCreate(BaseModel):
    quiz_id: str
    score: float = Field(..., ge=0, le=100)
    answers: List[QuizAnswerRecord] = Field(default_factory=list)


class ProgressOverview(BaseModel):
    module_progress: List[ModuleProgressEntry]
    completed_contents: int
    quizzes_taken: int


class ModuleProgressDetail(BaseModel):
    module_progress: ModuleProgressEntry
    content_progress: List[ContentProgress]
    quiz_results: List[QuizResult]


class ContentProgressResponse(BaseModel):
    message: str
    content_progress: ContentProgress
    module_progress: ModuleProgressEntry


class TrackBehaviorResponse(BaseModel):
    message: str
    event_count: int
    preferences_refreshed: bool = False
