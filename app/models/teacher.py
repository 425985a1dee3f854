# app/models/teacher.py
from sqlalchemy import Column, Integer, Text, Date, Float, ForeignKey, TIMESTAMP, func, CheckConstraint
from sqlalchemy.orm import relationship
from app.database import Base

class Teacher(Base):
    __tablename__ = "teachers"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(Text, nullable=False)
    description = Column(Text, nullable=False)
    avg_rating = Column("avgRating", Float, default=0.0, server_default="0", nullable=False)
    created_at = Column("createdAt", TIMESTAMP, server_default=func.now())

    # Relationships
    reviews = relationship("Review", back_populates="teacher", order_by="Review.id")

    def __repr__(self) -> str:
        return f"Teacher(id={self.id!r}, name={self.name!r})"


class Review(Base):
    __tablename__ = "reviews"

    id = Column(Integer, primary_key=True, index=True)
    teacher_id = Column("teacherId", Integer, ForeignKey("teachers.id"), nullable=False, index=True)
    rating = Column(Integer, nullable=False)
    reason = Column(Text, nullable=False)
    date = Column(Date, nullable=False)
    created_at = Column("createdAt", TIMESTAMP, server_default=func.now())

    # Constraints
    __table_args__ = (
        CheckConstraint('rating >= 1 AND rating <= 5', name='check_rating_range'),
    )

    # Relationship
    teacher = relationship("Teacher", back_populates="reviews")
