"""
Database operations for quizzes table
"""

from typing import Any, Dict, List, Optional

from .base import BaseDatabase, json_loads


class QuizDatabase(BaseDatabase):
    async def create_quiz(self, data: Dict[str, Any]) -> None:
        """Insert a quiz; questions must already be JSON-encoded"""
        await self._execute(
            """
            INSERT INTO quizzes (id, module_id, title, questions, created_at)
            VALUES (:id, :module_id, :title, :questions, :created_at)
        """,
            data,
        )
        await self._commit()

    async def get_quiz(self, quiz_id: str) -> Optional[Dict[str, Any]]:
        row = await self._fetch_one(
            "SELECT * FROM quizzes WHERE id = :id", {"id": quiz_id}
        )
        return self._decode(row) if row else None

    async def find_by_module(self, module_id: int) -> List[Dict[str, Any]]:
        rows = await self._fetch_all(
            "SELECT * FROM quizzes WHERE module_id = :module_id ORDER BY rowid",
            {"module_id": module_id},
        )
        return [self._decode(row) for row in rows]

    def _decode(self, row: Dict[str, Any]) -> Dict[str, Any]:
        row["questions"] = json_loads(row["questions"], [])
        return row
