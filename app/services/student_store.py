"""
Student Records API — Abstract Student Store Interface
========================================================

What:  Abstract base class defining the storage contract StudentService
       depends on.
Why:   The storage handle is constructed once and injected, so MongoDB can be
       swapped for an in-memory fake in tests without touching the handlers.
How:   Concrete stores inherit from StudentStore and implement every method.

Contract:
    - Every method is exactly one round-trip to the backend.
    - Records are plain dicts: {"id": str, "name": str, "age": int, "course": str}
    - A missing record is reported as None, never as an exception.
    - Identifiers the backend could never have issued are treated as missing.
    - Any backend failure raises app.exceptions.StorageError.

Implementations:
    - MongoStudentStore: MongoDB via the pymongo async API
    - FakeStudentStore (tests/conftest.py): dict-backed, for unit tests
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

StudentRecord = Dict[str, Any]


class StudentStore(ABC):
    """Storage operations for the Student collection."""

    @abstractmethod
    async def list_students(self) -> List[StudentRecord]:
        """All records, in the backend's natural order."""
        ...

    @abstractmethod
    async def get_student(self, student_id: str) -> Optional[StudentRecord]:
        """The record with this id, or None."""
        ...

    @abstractmethod
    async def insert_student(self, fields: Dict[str, Any]) -> StudentRecord:
        """
        Persist a new record and return it with its assigned id.

        Args:
            fields: Validated name, age and course.
        """
        ...

    @abstractmethod
    async def update_student(
        self, student_id: str, fields: Dict[str, Any]
    ) -> Optional[StudentRecord]:
        """
        Overwrite the given fields in place and return the updated record,
        or None if no record has this id. An empty `fields` dict reads the
        record back unchanged.
        """
        ...

    @abstractmethod
    async def delete_student(self, student_id: str) -> Optional[StudentRecord]:
        """Remove the record and return its last state, or None."""
        ...

    @abstractmethod
    async def ping(self) -> bool:
        """Lightweight connectivity check for the health endpoint."""
        ...
