"""SQLAlchemy declarative base and model imports for Alembic."""
from typetester.db.session import Base

# Import all models so Alembic can see them
from typetester.models.test_result import TestResult  # noqa: F401
from typetester.models.user import User  # noqa: F401

__all__ = ["Base", "User", "TestResult"]
