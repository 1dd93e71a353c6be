"""
Course Domain Models
"""
from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field

from artverse.domain.common import DomainModel, ImageData, UserSummary

COURSE_SORTS = ("newest", "oldest", "price-high", "price-low", "popular")


class LessonResource(BaseModel):
    name: str = Field(..., min_length=1)
    url: str = Field(..., min_length=1)


class CourseCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=1)
    price: Decimal = Field(..., gt=0, max_digits=12, decimal_places=2)
    thumbnail: ImageData


class CourseUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = Field(None, min_length=1)
    price: Optional[Decimal] = Field(None, gt=0, max_digits=12, decimal_places=2)
    thumbnail: Optional[ImageData] = None


class LessonCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    youtube_url: str = Field(..., min_length=1, max_length=500)
    duration: int = Field(..., ge=1, description="Length in minutes")
    resources: List[LessonResource] = Field(default_factory=list)


class RejectCourseRequest(BaseModel):
    reason: Optional[str] = None


class LessonView(DomainModel):
    id: str
    position: int
    title: str
    youtube_url: str
    duration: Optional[int] = None
    resources: List[LessonResource] = Field(default_factory=list)


class CourseView(DomainModel):
    id: str
    title: str
    description: str
    price: float
    thumbnail: Optional[ImageData] = None
    status: str
    is_approved: bool
    rejection_reason: Optional[str] = None
    artist_id: str
    artist: Optional[UserSummary] = None
    lessons: List[LessonView] = Field(default_factory=list)
    lesson_count: int = 0
    student_count: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
