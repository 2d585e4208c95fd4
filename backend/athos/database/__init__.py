# Table-level database access over a request-scoped AsyncSession
from .content import ContentDatabase
from .progress import ProgressDatabase
from .quizzes import QuizDatabase
from .users import UserDatabase

__all__ = [
    "ContentDatabase",
    "ProgressDatabase",
    "QuizDatabase",
    "UserDatabase",
]
