"""
Content service for the module reference content
"""

import uuid
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from ..database import ContentDatabase
from ..database.base import utcnow_iso
from ..models import ContentCreate, ContentItem, ModuleSummary


class ContentService:
    def __init__(self, db: AsyncSession):
        self.content_db = ContentDatabase(db)

    async def create_content(self, content_data: ContentCreate) -> ContentItem:
        content_id = str(uuid.uuid4())
        await self.content_db.create_content(
            {
                "id": content_id,
                "module_id": content_data.module_id,
                "title": content_data.title,
                "type": content_data.type.value,
                "content": content_data.content,
                "difficulty": content_data.difficulty.value,
                "created_at": utcnow_iso(),
            }
        )
        return await self.get_content(content_id)

    async def get_content(self, content_id: str) -> Optional[ContentItem]:
        row = await self.content_db.get_content(content_id)
        return ContentItem(**row) if row else None

    async def get_module_content(
        self,
        module_id: int,
        difficulty: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> List[ContentItem]:
        rows = await self.content_db.find_by_module(module_id, difficulty, limit)
        return [ContentItem(**row) for row in rows]

    async def get_modules(self) -> List[ModuleSummary]:
        """Modules that have at least one content item"""
        module_ids = await self.content_db.get_module_ids()
        return [ModuleSummary(id=m, title=f"Module {m}") for m in module_ids]

    async def search_content(self, term: str) -> List[ContentItem]:
        rows = await self.content_db.search(term)
        return [ContentItem(**row) for row in rows]
