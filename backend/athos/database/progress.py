"""
Database operations for the per-user progress record and its child tables
"""

from typing import Any, Dict, List, Optional, Sequence
import logging

from .base import BaseDatabase, json_dumps, json_loads, utcnow_iso

logger = logging.getLogger(__name__)


class ProgressDatabase(BaseDatabase):
    async def _ensure_progress(
        self, user_id: str, default_preferences: str, module_ids: Sequence[int]
    ) -> None:
        now = utcnow_iso()
        await self._execute(
            """
            INSERT OR IGNORE INTO progress (user_id, derived_preferences, created_at, updated_at)
            VALUES (:user_id, :prefs, :now, :now)
        """,
            {"user_id": user_id, "prefs": default_preferences, "now": now},
        )
        for module_id in module_ids:
            await self._execute(
                """
                INSERT OR IGNORE INTO module_progress (user_id, module_id, progress)
                VALUES (:user_id, :module_id, 0)
            """,
                {"user_id": user_id, "module_id": module_id},
            )

    async def create_progress(
        self, user_id: str, default_preferences: str, module_ids: Sequence[int]
    ) -> None:
        """Create the progress record with zeroed module entries if missing"""
        await self._ensure_progress(user_id, default_preferences, module_ids)
        await self._commit()

    async def get_progress(self, user_id: str) -> Optional[Dict[str, Any]]:
        row = await self._fetch_one(
            "SELECT * FROM progress WHERE user_id = :user_id", {"user_id": user_id}
        )
        if row:
            row["derived_preferences"] = json_loads(row["derived_preferences"], {})
        return row

    async def get_content_progress(self, user_id: str) -> List[Dict[str, Any]]:
        rows = await self._fetch_all(
            """
            SELECT content_id, completed, last_accessed, time_spent, interactions
            FROM content_progress WHERE user_id = :user_id ORDER BY id
        """,
            {"user_id": user_id},
        )
        for row in rows:
            row["completed"] = bool(row["completed"])
        return rows

    async def get_quiz_results(self, user_id: str) -> List[Dict[str, Any]]:
        rows = await self._fetch_all(
            """
            SELECT quiz_id, score, answers, attempt_number, completed_at
            FROM quiz_results WHERE user_id = :user_id ORDER BY id
        """,
            {"user_id": user_id},
        )
        for row in rows:
            row["answers"] = json_loads(row["answers"], [])
        return rows

    async def get_module_progress(self, user_id: str) -> List[Dict[str, Any]]:
        return await self._fetch_all(
            """
            SELECT module_id, progress FROM module_progress
            WHERE user_id = :user_id ORDER BY module_id
        """,
            {"user_id": user_id},
        )

    async def count_behavior_events(self, user_id: str) -> int:
        row = await self._fetch_one(
            "SELECT COUNT(*) AS count FROM behavior_events WHERE user_id = :user_id",
            {"user_id": user_id},
        )
        return row["count"] if row else 0

    async def append_behavior_event(
        self,
        user_id: str,
        event: Dict[str, Any],
        default_preferences: str,
        module_ids: Sequence[int],
    ) -> int:
        """
        Append one behavior event, creating the progress record on first use.

        The record creation and the insert commit together, so concurrent
        appends for the same user never lose events. Returns the new event count.
        """
        await self._ensure_progress(user_id, default_preferences, module_ids)
        now = utcnow_iso()
        await self._execute(
            """
            INSERT INTO behavior_events
                (user_id, content_id, action_type, time_spent, interactions,
                 difficulty, metadata, timestamp)
            VALUES
                (:user_id, :content_id, :action_type, :time_spent, :interactions,
                 :difficulty, :metadata, :timestamp)
        """,
            {
                "user_id": user_id,
                "content_id": event.get("content_id"),
                "action_type": event["action_type"],
                "time_spent": event.get("time_spent", 0),
                "interactions": event.get("interactions", 0),
                "difficulty": event.get("difficulty"),
                "metadata": json_dumps(event.get("metadata") or {}),
                "timestamp": now,
            },
        )
        await self._touch(user_id, now)
        await self._commit()
        return await self.count_behavior_events(user_id)

    async def get_recent_behavior_events(
        self, user_id: str, limit: int
    ) -> List[Dict[str, Any]]:
        """Last `limit` events for the user, oldest first"""
        rows = await self._fetch_all(
            """
            SELECT * FROM (
                SELECT * FROM behavior_events WHERE user_id = :user_id
                ORDER BY id DESC LIMIT :limit
            ) ORDER BY id ASC
        """,
            {"user_id": user_id, "limit": limit},
        )
        for row in rows:
            row["metadata"] = json_loads(row["metadata"], {})
        return rows

    async def upsert_content_progress(
        self,
        user_id: str,
        content_id: str,
        completed: Optional[bool] = None,
        time_spent: float = 0,
        interactions: int = 0,
    ) -> Optional[Dict[str, Any]]:
        """
        Insert or update the (user, content) record in one statement.

        Time and interactions accumulate; the completion flag is only changed
        when one is reported.
        """
        now = utcnow_iso()
        await self._execute(
            """
            INSERT INTO content_progress
                (user_id, content_id, completed, last_accessed, time_spent, interactions)
            VALUES
                (:user_id, :content_id, :completed, :now, :time_spent, :interactions)
            ON CONFLICT(user_id, content_id) DO UPDATE SET
                completed = CASE WHEN :has_completed = 1
                    THEN excluded.completed ELSE content_progress.completed END,
                last_accessed = excluded.last_accessed,
                time_spent = content_progress.time_spent + excluded.time_spent,
                interactions = content_progress.interactions + excluded.interactions
        """,
            {
                "user_id": user_id,
                "content_id": content_id,
                "completed": 1 if completed else 0,
                "has_completed": 0 if completed is None else 1,
                "now": now,
                "time_spent": time_spent or 0,
                "interactions": interactions or 0,
            },
        )
        await self._touch(user_id, now)
        await self._commit()

        row = await self._fetch_one(
            """
            SELECT content_id, completed, last_accessed, time_spent, interactions
            FROM content_progress WHERE user_id = :user_id AND content_id = :content_id
        """,
            {"user_id": user_id, "content_id": content_id},
        )
        if row:
            row["completed"] = bool(row["completed"])
        return row

    async def upsert_quiz_result(
        self, user_id: str, quiz_id: str, score: float, answers: List[Dict[str, Any]]
    ) -> None:
        """Store a quiz attempt, replacing any earlier result for the same quiz"""
        now = utcnow_iso()
        await self._execute(
            """
            INSERT INTO quiz_results
                (user_id, quiz_id, score, answers, attempt_number, completed_at)
            VALUES (:user_id, :quiz_id, :score, :answers, 1, :now)
            ON CONFLICT(user_id, quiz_id) DO UPDATE SET
                score = excluded.score,
                answers = excluded.answers,
                attempt_number = quiz_results.attempt_number + 1,
                completed_at = excluded.completed_at
        """,
            {
                "user_id": user_id,
                "quiz_id": quiz_id,
                "score": score,
                "answers": json_dumps(answers),
                "now": now,
            },
        )
        await self._touch(user_id, now)
        await self._commit()

    async def set_module_progress(
        self, user_id: str, module_id: int, progress: int
    ) -> None:
        await self._execute(
            """
            INSERT INTO module_progress (user_id, module_id, progress)
            VALUES (:user_id, :module_id, :progress)
            ON CONFLICT(user_id, module_id) DO UPDATE SET progress = excluded.progress
        """,
            {"user_id": user_id, "module_id": module_id, "progress": progress},
        )
        await self._touch(user_id, utcnow_iso())
        await self._commit()

    async def replace_derived_preferences(self, user_id: str, preferences: str) -> int:
        """Swap in a freshly computed derived-preferences document"""
        result = await self._execute(
            """
            UPDATE progress SET derived_preferences = :prefs, updated_at = :now
            WHERE user_id = :user_id
        """,
            {"prefs": preferences, "now": utcnow_iso(), "user_id": user_id},
        )
        await self._commit()
        return result.rowcount

    async def _touch(self, user_id: str, now: str) -> None:
        await self._execute(
            "UPDATE progress SET updated_at = :now WHERE user_id = :user_id",
            {"now": now, "user_id": user_id},
        )
