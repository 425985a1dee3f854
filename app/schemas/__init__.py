# app/schemas/__init__.py

from .teacher import (
    ReviewCreate,
    TeacherCreate,
    ReviewDisplay,
    TeacherResponse,
    TeacherListItem,
    ReviewSubmitResponse,
    ErrorResponse,
    DuplicateTeacherResponse,
    RatingRecalculationResponse,
)

__all__ = [
    "ReviewCreate",
    "TeacherCreate",
    "ReviewDisplay",
    "TeacherResponse",
    "TeacherListItem",
    "ReviewSubmitResponse",
    "ErrorResponse",
    "DuplicateTeacherResponse",
    "RatingRecalculationResponse",
]
