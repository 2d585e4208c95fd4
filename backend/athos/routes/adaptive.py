"""
Adaptive learning API routes
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Path
from sqlalchemy.ext.asyncio import AsyncSession

from ..config import AdaptiveConfig
from ..exceptions import NotFoundError
from ..models import (
    AdaptiveContentItem,
    AdaptiveQuiz,
    BehaviorEventCreate,
    LearningPathStep,
    Recommendations,
)
from ..models.progress import TrackBehaviorResponse
from ..services.adaptive import AdaptiveLearningService
from ..services.database import get_db
from .dependencies import get_config, get_current_user_id

logger = logging.getLogger(__name__)

router = APIRouter()


def get_adaptive_service(
    db: AsyncSession = Depends(get_db), config: AdaptiveConfig = Depends(get_config)
) -> AdaptiveLearningService:
    return AdaptiveLearningService(db, config)


@router.get("/recommendations", response_model=Recommendations)
async def get_recommendations(
    user_id: str = Depends(get_current_user_id),
    service: AdaptiveLearningService = Depends(get_adaptive_service),
):
    """Personalized recommendations across all modules"""
    try:
        return await service.get_recommendations(user_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        logger.error(f"Recommendations failed for user {user_id}: {e}")
        raise HTTPException(
            status_code=500, detail=f"Failed to get recommendations: {str(e)}"
        )


@router.get("/learning-path", response_model=List[LearningPathStep])
async def get_learning_path(
    user_id: str = Depends(get_current_user_id),
    service: AdaptiveLearningService = Depends(get_adaptive_service),
):
    """One learning path step per module"""
    try:
        return await service.get_learning_path(user_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        raise HTTPException(
            status_code=500, detail=f"Failed to get learning path: {str(e)}"
        )


@router.get("/content/{module_id}", response_model=List[AdaptiveContentItem])
async def get_adaptive_content(
    module_id: int = Path(..., ge=1, le=3),
    user_id: str = Depends(get_current_user_id),
    service: AdaptiveLearningService = Depends(get_adaptive_service),
):
    """Module content ranked for the user"""
    try:
        return await service.get_adaptive_content(user_id, module_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        raise HTTPException(
            status_code=500, detail=f"Failed to get adaptive content: {str(e)}"
        )


@router.get("/quizzes/{module_id}", response_model=List[AdaptiveQuiz])
async def get_adaptive_quizzes(
    module_id: int = Path(..., ge=1, le=3),
    user_id: str = Depends(get_current_user_id),
    service: AdaptiveLearningService = Depends(get_adaptive_service),
):
    """Module quizzes with retake flags"""
    try:
        return await service.get_adaptive_quizzes(user_id, module_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        raise HTTPException(
            status_code=500, detail=f"Failed to get adaptive quizzes: {str(e)}"
        )


@router.post("/track-behavior", response_model=TrackBehaviorResponse)
async def track_behavior(
    event: BehaviorEventCreate,
    user_id: str = Depends(get_current_user_id),
    service: AdaptiveLearningService = Depends(get_adaptive_service),
):
    """Log one behavior event"""
    try:
        return await service.track_behavior(user_id, event)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        logger.error(f"Behavior tracking failed for user {user_id}: {e}")
        raise HTTPException(
            status_code=500, detail=f"Failed to track behavior: {str(e)}"
        )
