"""
Content API routes
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Path, Query
from sqlalchemy.ext.asyncio import AsyncSession

from ..models import ContentCreate, ContentItem, ModuleSummary
from ..services.content_service import ContentService
from ..services.database import get_db

router = APIRouter()


def get_content_service(db: AsyncSession = Depends(get_db)) -> ContentService:
    return ContentService(db)


@router.post("", response_model=ContentItem)
async def create_content(
    content: ContentCreate, service: ContentService = Depends(get_content_service)
):
    """Create a content item"""
    try:
        return await service.create_content(content)
    except Exception as e:
        raise HTTPException(
            status_code=400, detail=f"Failed to create content: {str(e)}"
        )


@router.get("/modules", response_model=List[ModuleSummary])
async def get_modules(service: ContentService = Depends(get_content_service)):
    """Modules that have content"""
    try:
        return await service.get_modules()
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to get modules: {str(e)}")


@router.get("/modules/{module_id}", response_model=List[ContentItem])
async def get_module_content(
    module_id: int = Path(..., ge=1, le=3),
    service: ContentService = Depends(get_content_service),
):
    """All content of a module in stored order"""
    try:
        return await service.get_module_content(module_id)
    except Exception as e:
        raise HTTPException(
            status_code=500, detail=f"Failed to get module content: {str(e)}"
        )


@router.get("/search", response_model=List[ContentItem])
async def search_content(
    term: str = Query(..., min_length=1),
    service: ContentService = Depends(get_content_service),
):
    """Case-insensitive search over title and body"""
    try:
        return await service.search_content(term)
    except Exception as e:
        raise HTTPException(
            status_code=500, detail=f"Failed to search content: {str(e)}"
        )


@router.get("/{content_id}", response_model=ContentItem)
async def get_content(
    content_id: str, service: ContentService = Depends(get_content_service)
):
    """Get a content item by ID"""
    try:
        content = await service.get_content(content_id)
        if not content:
            raise HTTPException(status_code=404, detail="Content not found")
        return content
    except HTTPException:
        raise
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to get content: {str(e)}")
