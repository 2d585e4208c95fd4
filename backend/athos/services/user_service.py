"""
User service: registration record and explicit learning-style preference
"""

import logging
import uuid
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from ..database import UserDatabase
from ..database.base import utcnow_iso
from ..exceptions import UserNotFoundError
from ..models import PreferencesUpdate, User, UserCreate

logger = logging.getLogger(__name__)


class UserService:
    def __init__(self, db: AsyncSession):
        self.user_db = UserDatabase(db)

    async def create_user(self, user_data: UserCreate) -> User:
        user_id = str(uuid.uuid4())
        await self.user_db.create_user(
            {
                "id": user_id,
                "username": user_data.username,
                "email": user_data.email,
                "learning_style": user_data.learning_style.value,
                "created_at": utcnow_iso(),
            }
        )
        logger.info(f"Created user {user_id} ({user_data.username})")
        return await self.require_user(user_id)

    async def get_user(self, user_id: str) -> Optional[User]:
        row = await self.user_db.get_user(user_id)
        return User(**row) if row else None

    async def require_user(self, user_id: str) -> User:
        user = await self.get_user(user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        return user

    async def update_preferences(
        self, user_id: str, preferences: PreferencesUpdate
    ) -> User:
        updated = await self.user_db.update_learning_style(
            user_id, preferences.learning_style.value
        )
        if not updated:
            raise UserNotFoundError(user_id)
        return await self.require_user(user_id)
