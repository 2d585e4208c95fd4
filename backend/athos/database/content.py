"""
Database operations for content table
"""

from typing import Any, Dict, List, Optional

from .base import BaseDatabase


class ContentDatabase(BaseDatabase):
    async def create_content(self, data: Dict[str, Any]) -> None:
        await self._execute(
            """
            INSERT INTO content (id, module_id, title, type, content, difficulty, created_at)
            VALUES (:id, :module_id, :title, :type, :content, :difficulty, :created_at)
        """,
            data,
        )
        await self._commit()

    async def get_content(self, content_id: str) -> Optional[Dict[str, Any]]:
        return await self._fetch_one(
            "SELECT * FROM content WHERE id = :id", {"id": content_id}
        )

    async def find_by_module(
        self,
        module_id: int,
        difficulty: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        """Content for a module in insertion order, optionally filtered by difficulty"""
        query = "SELECT * FROM content WHERE module_id = :module_id"
        params: Dict[str, Any] = {"module_id": module_id}
        if difficulty:
            query += " AND difficulty = :difficulty"
            params["difficulty"] = difficulty
        query += " ORDER BY rowid"
        if limit:
            query += " LIMIT :limit"
            params["limit"] = limit
        return await self._fetch_all(query, params)

    async def get_module_ids(self) -> List[int]:
        rows = await self._fetch_all(
            "SELECT DISTINCT module_id FROM content ORDER BY module_id"
        )
        return [row["module_id"] for row in rows]

    async def search(self, term: str) -> List[Dict[str, Any]]:
        """Case-insensitive match on title or body"""
        pattern = f"%{term.lower()}%"
        return await self._fetch_all(
            """
            SELECT * FROM content
            WHERE lower(title) LIKE :pattern OR lower(content) LIKE :pattern
            ORDER BY module_id, rowid
        """,
            {"pattern": pattern},
        )
