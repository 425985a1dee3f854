# app/api/teacher.py
"""
Teacher & Review API Router

Endpoints:
- GET /api/teachers - List teachers with nested reviews, best rated first
- POST /api/teachers - Create a teacher together with its first review
- POST /api/teachers/{teacher_id}/reviews - Append a review to a teacher

Failures are returned as {"error": message}; a duplicate teacher name
also carries the existing teacherId so the client can append instead.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from app.database import get_db
from app.schemas.teacher import (
    DuplicateTeacherResponse,
    ErrorResponse,
    ReviewCreate,
    ReviewSubmitResponse,
    TeacherCreate,
    TeacherListItem,
    TeacherResponse,
)
from app.services import teacher_service
from app.services.teacher_service import TeacherExistsError, TeacherNotFoundError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/teachers", tags=["teachers"])


def _error(status_code: int, message: str, **extra) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message, **extra})


# ======================
# LIST TEACHERS
# ======================
@router.get(
    "",
    response_model=List[TeacherListItem],
    responses={500: {"model": ErrorResponse}},
)
def list_teachers(db: Session = Depends(get_db)):
    """
    Get all teachers with their reviews.

    Returns:
        Teachers sorted by avgRating (highest first), each with
        reviewCount and a reviews list of {rating, reason, date}
    """
    try:
        return teacher_service.list_teachers(db)
    except Exception as e:
        logger.exception("Failed to list teachers")
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, str(e))


# ======================
# CREATE TEACHER
# ======================
@router.post(
    "",
    response_model=TeacherResponse,
    responses={400: {"model": DuplicateTeacherResponse}, 500: {"model": ErrorResponse}},
)
def create_teacher(payload: TeacherCreate, db: Session = Depends(get_db)):
    """
    Add a new teacher with a first review.

    A name that already exists (ignoring case) is rejected with 400 and
    the existing teacher's id.
    """
    try:
        return teacher_service.create_teacher(
            db=db,
            name=payload.name,
            description=payload.description,
            rating=payload.rating,
            reason=payload.reason
        )

    except TeacherExistsError as e:
        return _error(status.HTTP_400_BAD_REQUEST, str(e), teacherId=e.teacher_id)
    except ValueError as e:
        return _error(status.HTTP_400_BAD_REQUEST, str(e))
    except Exception as e:
        logger.exception("Failed to create teacher %r", payload.name)
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, str(e))


# ======================
# ADD REVIEW
# ======================
@router.post(
    "/{teacher_id}/reviews",
    response_model=ReviewSubmitResponse,
    responses={404: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
def add_review(teacher_id: int, payload: ReviewCreate, db: Session = Depends(get_db)):
    """
    Add a review to an existing teacher.

    Returns:
        {"success": true, "newAvg": <recomputed average>}
    """
    try:
        new_avg = teacher_service.add_review(
            db=db,
            teacher_id=teacher_id,
            rating=payload.rating,
            reason=payload.reason
        )
        return {"success": True, "newAvg": new_avg}

    except TeacherNotFoundError as e:
        logger.warning("Review submitted for unknown teacher id=%s", teacher_id)
        return _error(status.HTTP_404_NOT_FOUND, str(e))
    except ValueError as e:
        return _error(status.HTTP_400_BAD_REQUEST, str(e))
    except Exception as e:
        logger.exception("Failed to add review to teacher id=%s", teacher_id)
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, str(e))
