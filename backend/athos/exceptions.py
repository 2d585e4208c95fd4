class AthosError(Exception):
    """Base exception for the Athos Explorer backend."""

    pass


class NotFoundError(AthosError):
    """Raised when a referenced record does not exist."""

    pass


class UserNotFoundError(NotFoundError):
    """Raised when the requesting user is unknown."""

    def __init__(self, user_id: str):
        super().__init__(f"User not found: {user_id}")
        self.user_id = user_id


class ContentNotFoundError(NotFoundError):
    """Raised when a content item id does not exist."""

    def __init__(self, content_id: str):
        super().__init__(f"Content not found: {content_id}")
        self.content_id = content_id


class QuizNotFoundError(NotFoundError):
    """Raised when a quiz id does not exist."""

    def __init__(self, quiz_id: str):
        super().__init__(f"Quiz not found: {quiz_id}")
        self.quiz_id = quiz_id


class StoreError(AthosError):
    """Raised when the underlying database call fails."""

    pass


class InvalidSubmissionError(AthosError):
    """Raised when a quiz submission references unknown questions or options."""

    pass
