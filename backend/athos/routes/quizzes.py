"""
Quiz API routes
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Path
from sqlalchemy.ext.asyncio import AsyncSession

from ..config import AdaptiveConfig
from ..exceptions import InvalidSubmissionError, NotFoundError
from ..models import LearnerQuiz, Quiz, QuizCreate, QuizSubmission, QuizSubmissionResult
from ..services.database import get_db
from ..services.quiz_service import QuizService
from .dependencies import get_config, get_current_user_id

router = APIRouter()


def get_quiz_service(
    db: AsyncSession = Depends(get_db), config: AdaptiveConfig = Depends(get_config)
) -> QuizService:
    return QuizService(db, config=config)


@router.post("", response_model=Quiz)
async def create_quiz(quiz: QuizCreate, service: QuizService = Depends(get_quiz_service)):
    """Create a quiz; the response includes the correct answers"""
    try:
        return await service.create_quiz(quiz)
    except Exception as e:
        raise HTTPException(status_code=400, detail=f"Failed to create quiz: {str(e)}")


@router.get("/modules/{module_id}", response_model=List[LearnerQuiz])
async def get_module_quizzes(
    module_id: int = Path(..., ge=1, le=3),
    service: QuizService = Depends(get_quiz_service),
):
    """Quizzes of a module without their answers"""
    try:
        return await service.get_learner_quizzes(module_id)
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to get quizzes: {str(e)}")


@router.get("/{quiz_id}", response_model=LearnerQuiz)
async def get_quiz(quiz_id: str, service: QuizService = Depends(get_quiz_service)):
    """Get a quiz by ID without its answers"""
    try:
        return await service.get_learner_quiz(quiz_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to get quiz: {str(e)}")


@router.post("/{quiz_id}/submit", response_model=QuizSubmissionResult)
async def submit_quiz(
    quiz_id: str,
    submission: QuizSubmission,
    user_id: str = Depends(get_current_user_id),
    service: QuizService = Depends(get_quiz_service),
):
    """Score a submission and record the attempt"""
    try:
        return await service.submit_quiz(user_id, quiz_id, submission)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except InvalidSubmissionError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to submit quiz: {str(e)}")
