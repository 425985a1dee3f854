# app/models/__init__.py
from .teacher import Teacher, Review

__all__ = ["Teacher", "Review"]
