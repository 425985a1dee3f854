# tests/test_teacher_service.py
"""
Teacher service and CRUD tests
Average bookkeeping, duplicate detection and the nested listing shape.
"""

from datetime import date

import pytest
from sqlalchemy import event
from sqlalchemy.exc import SQLAlchemyError

from app.crud import teacher as teacher_crud
from app.models.teacher import Review, Teacher
from app.services import teacher_service
from app.services.teacher_service import TeacherExistsError, TeacherNotFoundError


def _create(db, name="Smith", rating=4, reason="Clear lectures", description="Physics"):
    return teacher_service.create_teacher(
        db,
        name=name,
        description=description,
        rating=rating,
        reason=reason,
    )


# ======================
# CREATE TEACHER
# ======================

def test_create_teacher_returns_first_review(db_session):
    result = _create(db_session, name="A", rating=5, reason="great")

    assert result["id"] is not None
    assert result["name"] == "A"
    assert result["description"] == "Physics"
    assert result["avgRating"] == 5.0
    assert result["reviews"] == [{"rating": 5, "reason": "great", "date": date.today()}]

    teacher = db_session.query(Teacher).one()
    assert teacher.avg_rating == 5.0
    assert db_session.query(Review).filter(Review.teacher_id == teacher.id).count() == 1


def test_duplicate_name_rejected_case_insensitively(db_session):
    first = _create(db_session, name="Smith")

    with pytest.raises(TeacherExistsError) as exc_info:
        _create(db_session, name="smith", rating=1, reason="Different person?")

    assert exc_info.value.teacher_id == first["id"]
    assert str(exc_info.value) == "Teacher already exists"
    assert db_session.query(Teacher).count() == 1
    assert db_session.query(Review).count() == 1


def test_create_teacher_invalid_rating(db_session):
    with pytest.raises(ValueError, match="Rating must be between 1 and 5"):
        _create(db_session, rating=6)

    assert db_session.query(Teacher).count() == 0


def test_create_teacher_rolls_back_when_review_insert_fails(db_session, monkeypatch):
    def broken_create_review(*args, **kwargs):
        raise SQLAlchemyError("disk I/O error")

    monkeypatch.setattr(teacher_crud, "create_review", broken_create_review)

    with pytest.raises(SQLAlchemyError):
        _create(db_session)

    assert db_session.query(Teacher).count() == 0


# ======================
# ADD REVIEW
# ======================

def test_average_recomputed_over_all_reviews(db_session):
    teacher = _create(db_session, rating=4)

    assert teacher_service.add_review(db_session, teacher["id"], 2, "Too fast") == pytest.approx(3.0)
    new_avg = teacher_service.add_review(db_session, teacher["id"], 3, "Okay")

    assert new_avg == pytest.approx(3.0)
    stored = teacher_crud.get_teacher(db_session, teacher["id"])
    assert stored.avg_rating == pytest.approx((4 + 2 + 3) / 3)


def test_add_review_non_integer_average(db_session):
    teacher = _create(db_session, rating=5)

    new_avg = teacher_service.add_review(db_session, teacher["id"], 4, "Good")

    assert new_avg == pytest.approx(4.5)


def test_add_review_unknown_teacher(db_session):
    with pytest.raises(TeacherNotFoundError) as exc_info:
        teacher_service.add_review(db_session, 999, 5, "Who?")

    assert exc_info.value.teacher_id == 999
    assert db_session.query(Review).count() == 0


def test_add_review_rolls_back_when_recompute_fails(db_session, monkeypatch):
    teacher = _create(db_session, rating=4)

    def broken_update(*args, **kwargs):
        raise SQLAlchemyError("database is locked")

    monkeypatch.setattr(teacher_crud, "update_teacher_rating", broken_update)

    with pytest.raises(SQLAlchemyError):
        teacher_service.add_review(db_session, teacher["id"], 1, "Bad day")

    assert db_session.query(Review).count() == 1
    assert teacher_crud.get_teacher(db_session, teacher["id"]).avg_rating == 4.0


def test_calculate_rating_without_reviews(db_session):
    teacher = teacher_crud.create_teacher(db_session, "Lonely", "No reviews yet")
    db_session.commit()

    assert teacher_crud.calculate_teacher_rating(db_session, teacher.id) == (0.0, 0)


# ======================
# LIST TEACHERS
# ======================

def test_list_teachers_nested_shape(db_session):
    _create(db_session, name="A", rating=5, reason="great")

    teachers = teacher_service.list_teachers(db_session)

    assert len(teachers) == 1
    entry = teachers[0]
    assert entry["reviewCount"] == 1
    assert entry["reviews"] == [{"rating": 5, "reason": "great", "date": date.today()}]
    assert set(entry) == {"id", "name", "description", "avgRating", "reviews", "reviewCount"}


def test_list_teachers_ordered_by_average(db_session):
    for name, avg in [("Low", 2.0), ("High", 4.5), ("Mid", 3.1)]:
        teacher_crud.create_teacher(db_session, name, "desc", avg_rating=avg)
    db_session.commit()

    teachers = teacher_service.list_teachers(db_session)

    assert [t["avgRating"] for t in teachers] == [4.5, 3.1, 2.0]
    assert [t["name"] for t in teachers] == ["High", "Mid", "Low"]


def test_list_teachers_ties_keep_creation_order(db_session):
    for name in ["First", "Second", "Third"]:
        _create(db_session, name=name, rating=3)

    teachers = teacher_service.list_teachers(db_session)

    assert [t["name"] for t in teachers] == ["First", "Second", "Third"]


def test_list_teachers_zero_reviews(db_session):
    teacher_crud.create_teacher(db_session, "Lonely", "No reviews yet")
    db_session.commit()

    teachers = teacher_service.list_teachers(db_session)

    assert teachers[0]["reviewCount"] == 0
    assert teachers[0]["reviews"] == []
    assert teachers[0]["avgRating"] == 0.0


def test_list_teachers_reviews_in_insertion_order(db_session):
    teacher = _create(db_session, rating=4, reason="first")
    teacher_service.add_review(db_session, teacher["id"], 2, "second")

    teachers = teacher_service.list_teachers(db_session)

    assert [r["reason"] for r in teachers[0]["reviews"]] == ["first", "second"]
    assert teachers[0]["reviewCount"] == 2


def test_list_teachers_empty(db_session):
    assert teacher_service.list_teachers(db_session) == []


# ======================
# MAINTENANCE
# ======================

def test_recalculate_all_ratings_repairs_stale_averages(db_session):
    stale = _create(db_session, name="Stale", rating=4)
    teacher_service.add_review(db_session, stale["id"], 2, "meh")
    _create(db_session, name="Fine", rating=5)
    teacher_crud.create_teacher(db_session, "Empty", "none", avg_rating=3.5)
    db_session.query(Teacher).filter(Teacher.id == stale["id"]).update({Teacher.avg_rating: 1.0})
    db_session.commit()

    result = teacher_service.recalculate_all_ratings(db_session)

    assert result["total_teachers"] == 3
    assert result["updated_count"] == 2
    averages = {t["name"]: t["avgRating"] for t in teacher_service.list_teachers(db_session)}
    assert averages == {"Stale": 3.0, "Fine": 5.0, "Empty": 0.0}


def test_recalculate_all_ratings_loads_teachers_once(engine, db_session):
    for name, rating in [("A", 5), ("B", 3), ("C", 1)]:
        _create(db_session, name=name, rating=rating)
    db_session.commit()

    statements = []

    def record(conn, cursor, statement, parameters, context, executemany):
        statements.append(statement)

    event.listen(engine, "before_cursor_execute", record)
    try:
        result = teacher_service.recalculate_all_ratings(db_session)
    finally:
        event.remove(engine, "before_cursor_execute", record)

    assert result["total_teachers"] == 3
    teacher_selects = [
        s for s in statements
        if s.lstrip().upper().startswith("SELECT") and "FROM teachers" in s
    ]
    assert len(teacher_selects) == 1


# ======================
# TRANSACTION SCOPE
# ======================

def test_duplicate_lookup_runs_inside_transaction(db_session, monkeypatch):
    _create(db_session, name="Smith")
    db_session.commit()

    seen = []
    real_lookup = teacher_crud.get_teacher_by_name

    def tracking_lookup(db, name):
        seen.append(db.in_transaction())
        return real_lookup(db, name)

    monkeypatch.setattr(teacher_crud, "get_teacher_by_name", tracking_lookup)

    with pytest.raises(TeacherExistsError):
        _create(db_session, name="SMITH")

    assert seen == [True]
    assert not db_session.in_transaction()
    assert db_session.query(Teacher).count() == 1
