import os
import uuid
from datetime import datetime, UTC

import pytest
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.testclient import TestClient

from athos.models import (
    ContentCreate,
    ContentItem,
    ContentProgress,
    DerivedPreferences,
    ModuleProgressEntry,
    Quiz,
    QuizCreate,
    QuizOption,
    QuizQuestion,
    QuizResult,
    User,
    UserCreate,
    UserProgress,
)
from athos.routes import (
    adaptive_router,
    content_router,
    progress_router,
    quizzes_router,
    users_router,
)
from athos.services import ContentService, QuizService, UserService
from athos.services.database import DatabaseService, get_db


@pytest.fixture(scope="function", autouse=True)
def setup_test_database(tmp_path):
    """Point DATABASE_PATH at an isolated file for each test."""
    test_db_path = tmp_path / f"test_athos_{uuid.uuid4().hex}.db"

    original_db_path = os.environ.get("DATABASE_PATH")
    os.environ["DATABASE_PATH"] = str(test_db_path)

    yield test_db_path

    if original_db_path:
        os.environ["DATABASE_PATH"] = original_db_path
    else:
        os.environ.pop("DATABASE_PATH", None)


@pytest.fixture
def db_service(setup_test_database):
    """Database service with the schema migrated."""
    return DatabaseService(str(setup_test_database))


@pytest.fixture
def db_session(db_service):
    """Async session factory bound to the test database."""
    return db_service.async_session


@pytest.fixture
def app(db_service):
    """Create a test FastAPI app."""
    test_app = FastAPI(title="Test Athos Explorer API")

    test_app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    test_app.include_router(adaptive_router, prefix="/api/adaptive", tags=["adaptive"])
    test_app.include_router(progress_router, prefix="/api/progress", tags=["progress"])
    test_app.include_router(content_router, prefix="/api/content", tags=["content"])
    test_app.include_router(quizzes_router, prefix="/api/quizzes", tags=["quizzes"])
    test_app.include_router(users_router, prefix="/api/users", tags=["users"])

    async def override_get_db():
        async with db_service.async_session() as session:
            yield session

    test_app.dependency_overrides[get_db] = override_get_db
    return test_app


@pytest.fixture
def client(app):
    """Create a test client for the FastAPI app."""
    with TestClient(app) as test_client:
        yield test_client


# Plain model builders for the pure engine tests

NOW = datetime(2024, 1, 1, 12, 0, tzinfo=UTC)


def make_user(learning_style="visual", user_id="user-1") -> User:
    return User(
        id=user_id,
        username=f"{user_id}-name",
        email=f"{user_id}@example.com",
        learning_style=learning_style,
        created_at=NOW,
    )


def make_content(content_id, content_type="text", difficulty="basic", module_id=1):
    return ContentItem(
        id=content_id,
        module_id=module_id,
        title=f"Content {content_id}",
        type=content_type,
        content="body",
        difficulty=difficulty,
        created_at=NOW,
    )


def make_quiz(quiz_id, module_id=1, questions=None) -> Quiz:
    return Quiz(
        id=quiz_id,
        module_id=module_id,
        title=f"Quiz {quiz_id}",
        questions=questions or [],
        created_at=NOW,
    )


def make_progress(
    completed=(),
    viewed=(),
    scores=None,
    derived=None,
    user_id="user-1",
) -> UserProgress:
    content_progress = [
        ContentProgress(content_id=c, completed=True, last_accessed=NOW, time_spent=60)
        for c in completed
    ] + [
        ContentProgress(content_id=c, completed=False, last_accessed=NOW, time_spent=30)
        for c in viewed
    ]
    quiz_results = [
        QuizResult(quiz_id=q, score=s, completed_at=NOW)
        for q, s in (scores or {}).items()
    ]
    return UserProgress(
        user_id=user_id,
        content_progress=content_progress,
        quiz_results=quiz_results,
        module_progress=[ModuleProgressEntry(module_id=m, progress=0) for m in (1, 2, 3)],
        derived_preferences=derived or DerivedPreferences(),
        created_at=NOW,
        updated_at=NOW,
    )


@pytest.fixture
def builders():
    """Model builders for engine tests."""

    class Builders:
        user = staticmethod(make_user)
        content = staticmethod(make_content)
        quiz = staticmethod(make_quiz)
        progress = staticmethod(make_progress)

    return Builders


class Seeder:
    """Creates reference data through the services inside a test session."""

    def __init__(self, session):
        self.users = UserService(session)
        self.contents = ContentService(session)
        self.quizzes = QuizService(session)

    async def user(self, username="learner", learning_style="visual"):
        return await self.users.create_user(
            UserCreate(
                username=username,
                email=f"{username}@example.com",
                learning_style=learning_style,
            )
        )

    async def content(self, module_id=1, content_type="text", difficulty="basic", title=None):
        return await self.contents.create_content(
            ContentCreate(
                module_id=module_id,
                title=title or f"{content_type} {difficulty} {module_id}",
                type=content_type,
                content=f"About {content_type} material",
                difficulty=difficulty,
            )
        )

    async def quiz(self, module_id=1, correct=(0, 1)):
        """Quiz with one two-option question per entry in `correct`"""
        questions = [
            QuizQuestion(
                text=f"Question {i}",
                options=[
                    QuizOption(text="first", is_correct=answer == 0),
                    QuizOption(text="second", is_correct=answer == 1),
                ],
            )
            for i, answer in enumerate(correct)
        ]
        return await self.quizzes.create_quiz(
            QuizCreate(module_id=module_id, title=f"Module {module_id} quiz", questions=questions)
        )


@pytest.fixture
def seeder():
    """Factory building a Seeder for a session."""
    return Seeder
