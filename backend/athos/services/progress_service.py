"""
Progress service: per-user progress record, content completion, quiz results
and module progress recomputation
"""

import logging
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from ..config import AdaptiveConfig
from ..database import ContentDatabase, ProgressDatabase, QuizDatabase
from ..exceptions import ContentNotFoundError, QuizNotFoundError
from ..models import (
    ContentProgress,
    ContentProgressUpdate,
    DerivedPreferences,
    ModuleProgressEntry,
    QuizResult,
    UserProgress,
)
from ..models.progress import (
    ContentProgressResponse,
    ModuleProgressDetail,
    ProgressOverview,
    QuizAnswerRecord,
)
from .utils import round_half_up

logger = logging.getLogger(__name__)

DEFAULT_DERIVED_PREFERENCES = DerivedPreferences().model_dump_json()


class ProgressService:
    def __init__(self, db: AsyncSession, config: AdaptiveConfig = None):
        self.progress_db = ProgressDatabase(db)
        self.content_db = ContentDatabase(db)
        self.quiz_db = QuizDatabase(db)
        self.config = config or AdaptiveConfig()

    async def ensure_progress(self, user_id: str) -> None:
        await self.progress_db.create_progress(
            user_id, DEFAULT_DERIVED_PREFERENCES, self.config.module_ids
        )

    async def get_or_create_progress(self, user_id: str) -> UserProgress:
        """Load the user's progress record, creating a zeroed one on first access"""
        row = await self.progress_db.get_progress(user_id)
        if row is None:
            logger.info(f"Creating default progress for user {user_id}")
            await self.ensure_progress(user_id)
            row = await self.progress_db.get_progress(user_id)

        return UserProgress(
            user_id=user_id,
            content_progress=await self.progress_db.get_content_progress(user_id),
            quiz_results=await self.progress_db.get_quiz_results(user_id),
            module_progress=await self.progress_db.get_module_progress(user_id),
            behavior_event_count=await self.progress_db.count_behavior_events(user_id),
            derived_preferences=DerivedPreferences(**row["derived_preferences"]),
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )

    async def get_overview(self, user_id: str) -> ProgressOverview:
        progress = await self.get_or_create_progress(user_id)
        return ProgressOverview(
            module_progress=progress.module_progress,
            completed_contents=len(progress.completed_content_ids()),
            quizzes_taken=len(progress.quiz_results),
        )

    async def get_module_progress(
        self, user_id: str, module_id: int
    ) -> ModuleProgressDetail:
        progress = await self.get_or_create_progress(user_id)
        content_ids = {c["id"] for c in await self.content_db.find_by_module(module_id)}
        quiz_ids = {q["id"] for q in await self.quiz_db.find_by_module(module_id)}

        entry = next(
            (m for m in progress.module_progress if m.module_id == module_id),
            ModuleProgressEntry(module_id=module_id, progress=0),
        )
        return ModuleProgressDetail(
            module_progress=entry,
            content_progress=[
                p for p in progress.content_progress if p.content_id in content_ids
            ],
            quiz_results=[r for r in progress.quiz_results if r.quiz_id in quiz_ids],
        )

    async def update_content_progress(
        self, user_id: str, update: ContentProgressUpdate
    ) -> ContentProgressResponse:
        """Mark content viewed or completed and recompute its module's progress"""
        content = await self.content_db.get_content(update.content_id)
        if content is None:
            raise ContentNotFoundError(update.content_id)

        await self.ensure_progress(user_id)
        row = await self.progress_db.upsert_content_progress(
            user_id, update.content_id, completed=update.completed
        )
        module_progress = await self.recalculate_module_progress(
            user_id, content["module_id"]
        )
        return ContentProgressResponse(
            message="Progress updated",
            content_progress=ContentProgress(**row),
            module_progress=ModuleProgressEntry(
                module_id=content["module_id"], progress=module_progress
            ),
        )

    async def record_content_activity(
        self,
        user_id: str,
        content_id: str,
        completed: Optional[bool] = None,
        time_spent: float = 0,
        interactions: int = 0,
    ) -> Optional[ContentProgress]:
        """
        Accumulate time and interactions reported by the behavior tracker.

        Activity for unknown content is ignored. Module progress is recomputed
        only when a completion flag was reported.
        """
        content = await self.content_db.get_content(content_id)
        if content is None:
            logger.warning(
                f"Ignoring activity for unknown content {content_id} from user {user_id}"
            )
            return None

        await self.ensure_progress(user_id)
        row = await self.progress_db.upsert_content_progress(
            user_id, content_id, completed, time_spent, interactions
        )
        if completed is not None:
            await self.recalculate_module_progress(user_id, content["module_id"])
        return ContentProgress(**row) if row else None

    async def save_quiz_result(
        self,
        user_id: str,
        quiz_id: str,
        score: float,
        answers: List[QuizAnswerRecord] = None,
    ) -> QuizResult:
        """Store an attempt (replacing the previous one) and recompute module progress"""
        quiz = await self.quiz_db.get_quiz(quiz_id)
        if quiz is None:
            raise QuizNotFoundError(quiz_id)

        await self.ensure_progress(user_id)
        await self.progress_db.upsert_quiz_result(
            user_id, quiz_id, score, [a.model_dump() for a in answers or []]
        )
        await self.recalculate_module_progress(user_id, quiz["module_id"])

        results = await self.progress_db.get_quiz_results(user_id)
        stored = next(r for r in results if r["quiz_id"] == quiz_id)
        return QuizResult(**stored)

    async def recalculate_module_progress(self, user_id: str, module_id: int) -> int:
        """
        Module progress = content share of completed items plus quiz share of
        passed quizzes, rounded to a whole percent.
        """
        content_ids = {c["id"] for c in await self.content_db.find_by_module(module_id)}
        quiz_ids = {q["id"] for q in await self.quiz_db.find_by_module(module_id)}

        completed_content = [
            p
            for p in await self.progress_db.get_content_progress(user_id)
            if p["content_id"] in content_ids and p["completed"]
        ]
        passed_quizzes = [
            r
            for r in await self.progress_db.get_quiz_results(user_id)
            if r["quiz_id"] in quiz_ids and r["score"] >= self.config.quiz_pass_score
        ]

        progress = module_progress_percent(
            len(completed_content),
            len(content_ids),
            len(passed_quizzes),
            len(quiz_ids),
            self.config,
        )
        await self.progress_db.set_module_progress(user_id, module_id, progress)
        logger.info(
            f"Module {module_id} progress updated to {progress}% for user {user_id}"
        )
        return progress


def module_progress_percent(
    completed_content: int,
    total_content: int,
    passed_quizzes: int,
    total_quizzes: int,
    config: AdaptiveConfig = None,
) -> int:
    config = config or AdaptiveConfig()
    content_part = (
        completed_content / total_content * config.content_progress_weight * 100
        if total_content
        else 0
    )
    quiz_part = (
        passed_quizzes / total_quizzes * config.quiz_progress_weight * 100
        if total_quizzes
        else 0
    )
    return min(100, round_half_up(content_part + quiz_part))
