# app/crud/teacher.py
"""
Teacher & Review CRUD Operations
Single-statement database operations; callers own the transaction.
"""

from datetime import date
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session, selectinload

from app.models.teacher import Teacher, Review


# ======================
# TEACHER CRUD
# ======================

def get_teacher(db: Session, teacher_id: int) -> Optional[Teacher]:
    return db.query(Teacher).filter(Teacher.id == teacher_id).first()


def get_teacher_by_name(db: Session, name: str) -> Optional[Teacher]:
    """
    Find a teacher by name, ignoring case.

    Args:
        db: Database session
        name: Teacher name to look up

    Returns:
        Teacher object or None if no teacher has that name
    """
    return (
        db.query(Teacher)
        .filter(func.lower(Teacher.name) == name.lower())
        .order_by(Teacher.id)
        .first()
    )


def create_teacher(db: Session, name: str, description: str, avg_rating: float = 0.0) -> Teacher:
    teacher = Teacher(name=name, description=description, avg_rating=avg_rating)
    db.add(teacher)
    db.flush()
    return teacher


def get_teachers_with_reviews(db: Session) -> List[Teacher]:
    """
    Get every teacher with its reviews loaded.

    Ordered by average rating, highest first; equal averages keep
    creation order.
    """
    return (
        db.query(Teacher)
        .options(selectinload(Teacher.reviews))
        .order_by(Teacher.avg_rating.desc(), Teacher.id.asc())
        .all()
    )


def get_teachers(db: Session) -> List[Teacher]:
    return db.query(Teacher).order_by(Teacher.id).all()


# ======================
# REVIEW CRUD
# ======================

def create_review(
    db: Session,
    teacher_id: int,
    rating: int,
    reason: str,
    review_date: Optional[date] = None
) -> Review:
    """
    Create a review for a teacher.

    Args:
        db: Database session
        teacher_id: Teacher identifier
        rating: Rating value (1-5)
        reason: Justification text
        review_date: Calendar date of the review, today if omitted

    Returns:
        Created Review object

    Raises:
        ValueError: If rating is out of range
    """
    if not (1 <= rating <= 5):
        raise ValueError("Rating must be between 1 and 5")

    review = Review(
        teacher_id=teacher_id,
        rating=rating,
        reason=reason,
        date=review_date or date.today()
    )

    db.add(review)
    db.flush()
    return review


# ======================
# AVERAGE RATING
# ======================

def calculate_teacher_rating(db: Session, teacher_id: int) -> tuple[float, int]:
    """
    Calculate average rating and total reviews for a teacher.

    Args:
        db: Database session
        teacher_id: Teacher identifier

    Returns:
        Tuple of (average_rating, total_reviews); (0.0, 0) with no reviews
    """
    result = db.query(
        func.avg(Review.rating).label('avg_rating'),
        func.count(Review.id).label('total')
    ).filter(
        Review.teacher_id == teacher_id
    ).first()

    avg_rating = float(result.avg_rating) if result.avg_rating is not None else 0.0
    total = int(result.total) if result.total else 0

    return (avg_rating, total)


def update_teacher_rating(db: Session, teacher: Teacher) -> float:
    """Recompute the teacher's average from the reviews table and store it."""
    avg_rating, _ = calculate_teacher_rating(db, teacher.id)
    teacher.avg_rating = avg_rating
    db.flush()
    return avg_rating
