from .user import User, UserCreate, PreferencesUpdate, LearningStyle
from .content import ContentItem, ContentCreate, ContentType, Difficulty, ModuleSummary
from .quiz import (
    Quiz,
    QuizCreate,
    QuizQuestion,
    QuizOption,
    LearnerQuiz,
    QuizSubmission,
    QuizSubmissionResult,
)
from .progress import (
    ActionType,
    BehaviorEvent,
    BehaviorEventCreate,
    ContentProgress,
    ContentProgressUpdate,
    DerivedPreferences,
    DifficultyPreference,
    LearningPace,
    ModuleProgressEntry,
    QuizResult,
    QuizResultCreate,
    UserProgress,
)
from .adaptive import (
    AdaptiveContentItem,
    AdaptiveMetadata,
    AdaptiveQuiz,
    LearningPathStep,
    ModuleAnalysis,
    PathStatus,
    PriorityBucket,
    QuizAdaptiveMetadata,
    RankingResult,
    Recommendations,
)


__all__ = [
    "User",
    "UserCreate",
    "PreferencesUpdate",
    "LearningStyle",
    "ContentItem",
    "ContentCreate",
    "ContentType",
    "Difficulty",
    "ModuleSummary",
    "Quiz",
    "QuizCreate",
    "QuizQuestion",
    "QuizOption",
    "LearnerQuiz",
    "QuizSubmission",
    "QuizSubmissionResult",
    "ActionType",
    "BehaviorEvent",
    "BehaviorEventCreate",
    "ContentProgress",
    "ContentProgressUpdate",
    "DerivedPreferences",
    "DifficultyPreference",
    "LearningPace",
    "ModuleProgressEntry",
    "QuizResult",
    "QuizResultCreate",
    "UserProgress",
    "AdaptiveContentItem",
    "AdaptiveMetadata",
    "AdaptiveQuiz",
    "LearningPathStep",
    "ModuleAnalysis",
    "PathStatus",
    "PriorityBucket",
    "QuizAdaptiveMetadata",
    "RankingResult",
    "Recommendations",
]
