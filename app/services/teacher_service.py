# app/services/teacher_service.py
"""
Teacher Service Layer
Business logic for listing teachers, creating a teacher with its first
review, and appending reviews while keeping avgRating current.
"""

import logging
from datetime import date
from typing import Any, Dict, List

from sqlalchemy.orm import Session

from app.crud import teacher as teacher_crud
from app.database import transaction
from app.models.teacher import Review, Teacher

logger = logging.getLogger(__name__)


class TeacherExistsError(ValueError):
    """A teacher with the same name (ignoring case) is already recorded."""

    def __init__(self, teacher_id: int):
        super().__init__("Teacher already exists")
        self.teacher_id = teacher_id


class TeacherNotFoundError(LookupError):
    def __init__(self, teacher_id: int):
        super().__init__("Teacher not found")
        self.teacher_id = teacher_id


def _validate_rating(rating: int) -> None:
    if not (1 <= rating <= 5):
        raise ValueError("Rating must be between 1 and 5")


def _review_to_dict(review: Review) -> Dict[str, Any]:
    return {
        "rating": review.rating,
        "reason": review.reason,
        "date": review.date,
    }


def _teacher_to_dict(teacher: Teacher) -> Dict[str, Any]:
    reviews = [_review_to_dict(r) for r in teacher.reviews]
    return {
        "id": teacher.id,
        "name": teacher.name,
        "description": teacher.description,
        "avgRating": float(teacher.avg_rating or 0.0),
        "reviews": reviews,
        "reviewCount": len(reviews),
    }


# ======================
# TEACHER LISTING
# ======================

def list_teachers(db: Session) -> List[Dict[str, Any]]:
    """
    Get every teacher with its nested reviews.

    Args:
        db: Database session

    Returns:
        List of teacher dictionaries ordered by avgRating descending,
        each with a reviewCount and a (possibly empty) reviews list
    """
    teachers = teacher_crud.get_teachers_with_reviews(db)
    return [_teacher_to_dict(t) for t in teachers]


# ======================
# TEACHER CREATION
# ======================

def create_teacher(
    db: Session,
    name: str,
    description: str,
    rating: int,
    reason: str
) -> Dict[str, Any]:
    """
    Create a teacher together with its first review.

    The teacher row and the review row are written in one transaction;
    if the review insert fails the teacher insert is rolled back too.

    Args:
        db: Database session
        name: Teacher name, unique ignoring case
        description: Free-form description
        rating: First review rating (1-5)
        reason: First review justification

    Returns:
        Dictionary with the new teacher and its single review

    Raises:
        TeacherExistsError: If a teacher with that name already exists
        ValueError: If rating is out of range
    """
    _validate_rating(rating)

    with transaction(db):
        existing = teacher_crud.get_teacher_by_name(db, name)
        if existing:
            logger.info("Rejected duplicate teacher %r (existing id=%s)", name, existing.id)
            raise TeacherExistsError(existing.id)

        # With a single review the average is the rating itself.
        teacher = teacher_crud.create_teacher(
            db,
            name=name,
            description=description,
            avg_rating=float(rating)
        )
        review = teacher_crud.create_review(
            db,
            teacher_id=teacher.id,
            rating=rating,
            reason=reason,
            review_date=date.today()
        )

    logger.info("Created teacher id=%s name=%r", teacher.id, teacher.name)

    return {
        "id": teacher.id,
        "name": teacher.name,
        "description": teacher.description,
        "avgRating": float(teacher.avg_rating),
        "reviews": [_review_to_dict(review)],
    }


# ======================
# REVIEW SUBMISSION
# ======================

def add_review(db: Session, teacher_id: int, rating: int, reason: str) -> float:
    """
    Append a review to an existing teacher and recompute its average.

    Insert, aggregate and update run in one transaction, so the stored
    average always matches the reviews table once committed.

    Args:
        db: Database session
        teacher_id: Teacher identifier
        rating: Rating value (1-5)
        reason: Justification text

    Returns:
        The teacher's new average rating

    Raises:
        TeacherNotFoundError: If no teacher has that id
        ValueError: If rating is out of range
    """
    _validate_rating(rating)

    with transaction(db):
        teacher = teacher_crud.get_teacher(db, teacher_id)
        if teacher is None:
            raise TeacherNotFoundError(teacher_id)

        teacher_crud.create_review(
            db,
            teacher_id=teacher.id,
            rating=rating,
            reason=reason,
            review_date=date.today()
        )
        new_avg = teacher_crud.update_teacher_rating(db, teacher)

    logger.info("Added review to teacher id=%s, new average %.2f", teacher_id, new_avg)
    return new_avg


# ======================
# MAINTENANCE
# ======================

def recalculate_all_ratings(db: Session) -> Dict[str, Any]:
    """
    Recompute every teacher's avgRating from the reviews table.

    Teachers without reviews are reset to 0.0.

    Args:
        db: Database session

    Returns:
        Dictionary with recalculation statistics
    """
    updated_count = 0

    with transaction(db):
        teachers = teacher_crud.get_teachers(db)
        for teacher in teachers:
            before = teacher.avg_rating
            after = teacher_crud.update_teacher_rating(db, teacher)
            if before != after:
                updated_count += 1
        total = len(teachers)

    logger.info(
        "Recalculated ratings for %s teachers (%s changed)",
        total,
        updated_count,
    )

    return {
        "total_teachers": total,
        "updated_count": updated_count,
        "message": "Rating recalculation complete",
    }
