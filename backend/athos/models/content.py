"""
Content models for the Athos Explorer application
"""

from pydantic import BaseModel, Field
from datetime import datetime
from enum import Enum


class ContentType(str, Enum):
    TEXT = "text"
    IMAGE = "image"
    VIDEO = "video"


class Difficulty(str, Enum):
    BASIC = "basic"
    ADVANCED = "advanced"


class ContentBase(BaseModel):
    module_id: int = Field(..., ge=1, le=3, description="Module the item belongs to")
    title: str = Field(..., min_length=1, max_length=200, description="Content title")
    type: ContentType = Field(ContentType.TEXT, description="Content type")
    content: str = Field(..., description="Body text, or the media URL")
    difficulty: Difficulty = Field(Difficulty.BASIC, description="Difficulty tag")


class ContentCreate(ContentBase):
    pass


class ContentItem(ContentBase):
    id: str = Field(..., description="Unique content ID")
    created_at: datetime = Field(..., description="Creation timestamp")

    class Config:
        from_attributes = True


class ModuleSummary(BaseModel):
    id: int
    title: str
