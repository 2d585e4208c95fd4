"""
User API routes
"""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ..exceptions import NotFoundError, StoreError
from ..models import PreferencesUpdate, User, UserCreate
from ..services.database import get_db
from ..services.user_service import UserService
from .dependencies import get_current_user_id

router = APIRouter()


def get_user_service(db: AsyncSession = Depends(get_db)) -> UserService:
    return UserService(db)


@router.post("", response_model=User)
async def create_user(user: UserCreate, service: UserService = Depends(get_user_service)):
    """Register a user"""
    try:
        return await service.create_user(user)
    except StoreError as e:
        if isinstance(e.__cause__, IntegrityError):
            raise HTTPException(status_code=409, detail="User already exists")
        raise HTTPException(status_code=500, detail=f"Failed to create user: {str(e)}")
    except Exception as e:
        raise HTTPException(status_code=400, detail=f"Failed to create user: {str(e)}")


@router.get("/me", response_model=User)
async def get_me(
    user_id: str = Depends(get_current_user_id),
    service: UserService = Depends(get_user_service),
):
    """The calling user's record"""
    try:
        return await service.require_user(user_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to get user: {str(e)}")


@router.put("/me/preferences", response_model=User)
async def update_preferences(
    preferences: PreferencesUpdate,
    user_id: str = Depends(get_current_user_id),
    service: UserService = Depends(get_user_service),
):
    """Change the explicit learning style"""
    try:
        return await service.update_preferences(user_id, preferences)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        raise HTTPException(
            status_code=500, detail=f"Failed to update preferences: {str(e)}"
        )
