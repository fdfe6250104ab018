from typetester.models.user import User
from typetester.models.test_result import TestResult

__all__ = ["User", "TestResult"]
