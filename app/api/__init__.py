# app/api/__init__.py
# This file makes the api directory a Python package.

from . import teacher

__all__ = ["teacher"]
