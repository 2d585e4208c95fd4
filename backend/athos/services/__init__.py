"""
Services layer for the Athos Explorer application
"""

from .content_service import ContentService
from .progress_service import ProgressService
from .quiz_service import QuizService
from .user_service import UserService
