# app/schemas/teacher.py
"""
Teacher & Review Pydantic Schemas
Request bodies are validated here; response models mirror the JSON
field names the frontend reads (avgRating, reviewCount, newAvg).
"""

import datetime
from typing import List

from pydantic import BaseModel, Field, validator


def _require_text(v: str) -> str:
    if v is None or v.strip() == "":
        raise ValueError("Field cannot be empty or just whitespace")
    return v.strip()


# ======================
# REQUEST SCHEMAS
# ======================

class ReviewCreate(BaseModel):
    """Body of POST /api/teachers/{id}/reviews"""
    rating: int = Field(..., ge=1, le=5, strict=True, description="Rating from 1 to 5 stars")
    reason: str = Field(..., max_length=2000, description="Why the rating was given")

    @validator('reason')
    def validate_reason(cls, v):
        return _require_text(v)


class TeacherCreate(ReviewCreate):
    """Body of POST /api/teachers: a new teacher together with its first review"""
    name: str = Field(..., max_length=200, description="Teacher name (unique, case-insensitive)")
    description: str = Field(..., max_length=2000, description="Free-form description")

    @validator('name', 'description')
    def validate_text(cls, v):
        return _require_text(v)


# ======================
# RESPONSE SCHEMAS
# ======================

class ReviewDisplay(BaseModel):
    """Review as nested inside a teacher"""
    rating: int
    reason: str
    date: datetime.date


class TeacherResponse(BaseModel):
    """Teacher returned after creation"""
    id: int
    name: str
    description: str
    avgRating: float
    reviews: List[ReviewDisplay] = Field(default_factory=list)


class TeacherListItem(TeacherResponse):
    """Teacher entry in the listing"""
    reviewCount: int = 0


class ReviewSubmitResponse(BaseModel):
    """Response after appending a review"""
    success: bool = True
    newAvg: float = Field(..., description="Teacher's recomputed average rating")


class ErrorResponse(BaseModel):
    error: str


class DuplicateTeacherResponse(ErrorResponse):
    teacherId: int


class RatingRecalculationResponse(BaseModel):
    """Response after recalculating all ratings"""
    total_teachers: int
    updated_count: int
    message: str
