"""
ClassManager data layer.

This package tracks students, courses, and fee payments for a small
tutoring business and persists them as JSON collections.

Usage:
    >>> from class_manager import EntityRepository, DerivedViews
    >>> repo = EntityRepository()
    >>> result = repo.add_student("Ana", "1", "0300-1234567")
    >>> views = DerivedViews(repo)
    >>> views.total_revenue()
    0.0
"""

from .models.course import Course, DEFAULT_COURSES
from .models.fee import FeeRecord, PaymentMethod
from .models.result import Result, ResultStatus
from .models.student import Student
from .navigation import View, ViewSelector
from .repository.entity_repository import EntityRepository, UNKNOWN_STUDENT
from .storage.collection_store import CollectionStore, attach_persistence
from .storage.key_value_store import InMemoryStore, JsonFileStore, KeyValueStore
from .views.derived_views import DerivedViews

__all__ = [
    "Course",
    "DEFAULT_COURSES",
    "FeeRecord",
    "PaymentMethod",
    "Result",
    "ResultStatus",
    "Student",
    "View",
    "ViewSelector",
    "EntityRepository",
    "UNKNOWN_STUDENT",
    "CollectionStore",
    "attach_persistence",
    "InMemoryStore",
    "JsonFileStore",
    "KeyValueStore",
    "DerivedViews",
]

__version__ = "0.1.0"
