"""
Database operations for users table
"""

from typing import Any, Dict, Optional

from .base import BaseDatabase


class UserDatabase(BaseDatabase):
    async def create_user(self, data: Dict[str, Any]) -> None:
        await self._execute(
            """
            INSERT INTO users (id, username, email, learning_style, created_at)
            VALUES (:id, :username, :email, :learning_style, :created_at)
        """,
            data,
        )
        await self._commit()

    async def get_user(self, user_id: str) -> Optional[Dict[str, Any]]:
        return await self._fetch_one(
            "SELECT * FROM users WHERE id = :id", {"id": user_id}
        )

    async def update_learning_style(self, user_id: str, learning_style: str) -> int:
        result = await self._execute(
            "UPDATE users SET learning_style = :style WHERE id = :id",
            {"style": learning_style, "id": user_id},
        )
        await self._commit()
        return result.rowcount
