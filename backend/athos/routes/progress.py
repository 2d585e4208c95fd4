"""
Progress API routes
"""

from fastapi import APIRouter, Depends, HTTPException, Path
from sqlalchemy.ext.asyncio import AsyncSession

from ..config import AdaptiveConfig
from ..exceptions import NotFoundError
from ..models import ContentProgressUpdate, QuizResult, QuizResultCreate
from ..models.progress import (
    ContentProgressResponse,
    ModuleProgressDetail,
    ProgressOverview,
)
from ..services.database import get_db
from ..services.progress_service import ProgressService
from .dependencies import get_config, get_current_user_id

router = APIRouter()


def get_progress_service(
    db: AsyncSession = Depends(get_db), config: AdaptiveConfig = Depends(get_config)
) -> ProgressService:
    return ProgressService(db, config)


@router.get("", response_model=ProgressOverview)
async def get_progress(
    user_id: str = Depends(get_current_user_id),
    service: ProgressService = Depends(get_progress_service),
):
    """Progress overview for the user"""
    try:
        return await service.get_overview(user_id)
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to get progress: {str(e)}")


@router.get("/modules/{module_id}", response_model=ModuleProgressDetail)
async def get_module_progress(
    module_id: int = Path(..., ge=1, le=3),
    user_id: str = Depends(get_current_user_id),
    service: ProgressService = Depends(get_progress_service),
):
    """Progress details for a single module"""
    try:
        return await service.get_module_progress(user_id, module_id)
    except Exception as e:
        raise HTTPException(
            status_code=500, detail=f"Failed to get module progress: {str(e)}"
        )


@router.post("/content", response_model=ContentProgressResponse)
async def update_content_progress(
    update: ContentProgressUpdate,
    user_id: str = Depends(get_current_user_id),
    service: ProgressService = Depends(get_progress_service),
):
    """Mark a content item completed (or not)"""
    try:
        return await service.update_content_progress(user_id, update)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        raise HTTPException(
            status_code=500, detail=f"Failed to update progress: {str(e)}"
        )


@router.post("/quiz", response_model=QuizResult)
async def save_quiz_result(
    result: QuizResultCreate,
    user_id: str = Depends(get_current_user_id),
    service: ProgressService = Depends(get_progress_service),
):
    """Store a quiz result computed by the client"""
    try:
        return await service.save_quiz_result(
            user_id, result.quiz_id, result.score, result.answers
        )
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        raise HTTPException(
            status_code=500, detail=f"Failed to save quiz result: {str(e)}"
        )
