"""
Student Records API — Student Service (Request Handlers)
==========================================================

What:  The five Student operations: list, get, create, update, delete.
How:   Each operation validates its input, makes exactly one StudentStore
       call, and returns a response model or raises an application error.
Who:   Called by the route handlers in app/routes/students.py.

Outcome mapping:
    store returned a record   → response model
    store returned None       → NotFoundError   (404)
    schema violation          → ValidationError (400), store not called
    store raised StorageError → DatabaseError   (500), message passed through

Design Decision:
    StudentService holds nothing but the injected store. There is no
    retrying, batching, or read-before-write: concurrent requests are
    independent, and per-record atomicity is whatever the store gives.
"""

import logging
from typing import Any, List, Optional

from app.exceptions import DatabaseError, NotFoundError, StorageError, ValidationError
from app.schemas.student import (
    SchemaViolation,
    StudentDeleteResponse,
    StudentResponse,
    validate_student,
    validate_student_update,
)
from app.services.student_store import StudentStore

logger = logging.getLogger(__name__)


class StudentService:
    """Business logic layer for Student records."""

    def __init__(self, store: StudentStore):
        self.store = store

    async def list_students(self) -> List[StudentResponse]:
        """
        All persisted students, in the store's natural order.

        Raises:
            DatabaseError: The store failed (→ 500)
        """
        try:
            records = await self.store.list_students()
        except StorageError as e:
            raise self._database_error(e)
        return [StudentResponse(**record) for record in records]

    async def get_student(self, student_id: str) -> StudentResponse:
        """
        A single student by id.

        Raises:
            NotFoundError: No student has this id (→ 404)
            DatabaseError: The store failed (→ 500)
        """
        try:
            record = await self.store.get_student(student_id)
        except StorageError as e:
            raise self._database_error(e, student_id)
        if record is None:
            raise NotFoundError(resource="Student", resource_id=student_id)
        return StudentResponse(**record)

    async def create_student(self, payload: Any) -> StudentResponse:
        """
        Validate and persist a new student.

        Args:
            payload: The raw JSON request body.

        Raises:
            ValidationError: name, age or course missing or mistyped (→ 400)
            DatabaseError: The store failed (→ 500)
        """
        student, violation = validate_student(payload)
        if violation is not None:
            raise self._validation_error(violation)

        try:
            record = await self.store.insert_student(student.model_dump())
        except StorageError as e:
            raise self._database_error(e)

        logger.info("Student created: %s", record["id"])
        return StudentResponse(**record)

    async def update_student(self, student_id: str, payload: Any) -> StudentResponse:
        """
        Apply a partial or full update in place.

        Only submitted fields change; the id never does. Since the stored
        record already satisfies the schema and every submitted field is
        checked, the merged result does too.

        Raises:
            ValidationError: A submitted field is null or mistyped (→ 400)
            NotFoundError: No student has this id (→ 404)
            DatabaseError: The store failed (→ 500)
        """
        update, violation = validate_student_update(payload)
        if violation is not None:
            raise self._validation_error(violation)

        changes = update.changes()
        try:
            record = await self.store.update_student(student_id, changes)
        except StorageError as e:
            raise self._database_error(e, student_id)
        if record is None:
            raise NotFoundError(resource="Student", resource_id=student_id)

        logger.info("Student updated: %s (fields=%s)", student_id, sorted(changes))
        return StudentResponse(**record)

    async def delete_student(self, student_id: str) -> StudentDeleteResponse:
        """
        Permanently remove a student.

        Returns:
            Confirmation message plus the record as it was before removal.

        Raises:
            NotFoundError: No student has this id (→ 404)
            DatabaseError: The store failed (→ 500)
        """
        try:
            record = await self.store.delete_student(student_id)
        except StorageError as e:
            raise self._database_error(e, student_id)
        if record is None:
            raise NotFoundError(resource="Student", resource_id=student_id)

        logger.info("Student deleted: %s", student_id)
        return StudentDeleteResponse(
            message="Student deleted",
            student=StudentResponse(**record),
        )

    @staticmethod
    def _validation_error(violation: SchemaViolation) -> ValidationError:
        return ValidationError(message=violation.describe(), field=violation.field)

    @staticmethod
    def _database_error(exc: StorageError, student_id: Optional[str] = None) -> DatabaseError:
        context = {"operation": exc.operation}
        if student_id is not None:
            context["student_id"] = student_id
        return DatabaseError(message=exc.message, context=context)
