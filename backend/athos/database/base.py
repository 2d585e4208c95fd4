"""
Shared helpers for the table-level database classes
"""

import json
import logging
from datetime import datetime, UTC
from typing import Any, Dict, Optional

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ..exceptions import StoreError

logger = logging.getLogger(__name__)


def utcnow_iso() -> str:
    return datetime.now(UTC).isoformat()


def json_dumps(obj: Any) -> str:
    return json.dumps(obj, default=str)


def json_loads(raw: Optional[str], default: Any = None) -> Any:
    return json.loads(raw) if raw else default


class BaseDatabase:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def _execute(self, query: str, params: Optional[Dict[str, Any]] = None):
        """Run one statement, converting driver failures into StoreError"""
        try:
            return await self.db.execute(text(query), params or {})
        except SQLAlchemyError as e:
            logger.error(f"Database query failed: {e}")
            await self.db.rollback()
            raise StoreError(str(e)) from e

    async def _fetch_all(self, query: str, params: Optional[Dict[str, Any]] = None):
        result = await self._execute(query, params)
        return [dict(row._mapping) for row in result.fetchall()]

    async def _fetch_one(self, query: str, params: Optional[Dict[str, Any]] = None):
        result = await self._execute(query, params)
        row = result.fetchone()
        return dict(row._mapping) if row else None

    async def _commit(self):
        try:
            await self.db.commit()
        except SQLAlchemyError as e:
            logger.error(f"Database commit failed: {e}")
            await self.db.rollback()
            raise StoreError(str(e)) from e
