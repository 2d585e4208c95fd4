"""
User models for the Athos Explorer application
"""

from pydantic import BaseModel, Field
from datetime import datetime
from enum import Enum


class LearningStyle(str, Enum):
    VISUAL = "visual"
    TEXTUAL = "textual"


class UserBase(BaseModel):
    username: str = Field(..., min_length=1, max_length=50, description="Username")
    email: str = Field(..., min_length=3, max_length=254, description="Email address")
    learning_style: LearningStyle = Field(
        LearningStyle.VISUAL, description="Explicitly stated learning style"
    )


class UserCreate(UserBase):
    pass


class PreferencesUpdate(BaseModel):
    learning_style: LearningStyle


class User(UserBase):
    id: str = Field(..., description="Unique user ID")
    created_at: datetime = Field(..., description="Registration timestamp")

    class Config:
        from_attributes = True
