"""
Student Records API — Student Route Handlers
==============================================

What:  Route table binding HTTP method + path to StudentService operations.
How:   The router has no prefix of its own; main.py mounts it under
       settings.students_prefix (default /students).
Who:   Called by any HTTP client of the service.

Route Inventory (relative to the prefix):
    GET    ""                → list_students    200
    GET    "/{student_id}"   → get_student      200
    POST   ""                → create_student   201
    PUT    "/{student_id}"   → update_student   200
    DELETE "/{student_id}"   → delete_student   200

The collection path is registered both with and without a trailing slash
so neither form answers with a redirect. `student_id` is passed through
as an opaque string; existence and format are the store's concern.
"""

import logging
from typing import Any, List

from fastapi import APIRouter, Body, Depends, status

from app.database import get_student_service
from app.schemas.student import (
    MessageResponse,
    StudentDeleteResponse,
    StudentResponse,
)
from app.services.student_service import StudentService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Students"])

_NOT_FOUND = {404: {"description": "Student not found", "model": MessageResponse}}
_INVALID = {400: {"description": "Validation failed", "model": MessageResponse}}
_SERVER_ERROR = {500: {"description": "Storage error", "model": MessageResponse}}


@router.get(
    "",
    response_model=List[StudentResponse],
    responses={**_SERVER_ERROR},
    summary="List all students",
)
@router.get("/", response_model=List[StudentResponse], include_in_schema=False)
async def list_students(
    service: StudentService = Depends(get_student_service),
) -> List[StudentResponse]:
    """Every persisted student. Order is whatever the store returns."""
    return await service.list_students()


@router.get(
    "/{student_id}",
    response_model=StudentResponse,
    responses={**_NOT_FOUND, **_SERVER_ERROR},
    summary="Get a student by id",
)
async def get_student(
    student_id: str,
    service: StudentService = Depends(get_student_service),
) -> StudentResponse:
    return await service.get_student(student_id)


@router.post(
    "",
    response_model=StudentResponse,
    status_code=status.HTTP_201_CREATED,
    responses={**_INVALID, **_SERVER_ERROR},
    summary="Create a student",
)
@router.post(
    "/",
    response_model=StudentResponse,
    status_code=status.HTTP_201_CREATED,
    include_in_schema=False,
)
async def create_student(
    payload: Any = Body(default=None, examples=[{"name": "Alice", "age": 20, "course": "CS"}]),
    service: StudentService = Depends(get_student_service),
) -> StudentResponse:
    """
    Create a student from `{name, age, course}`.

    The body is taken as raw JSON and validated by the service, so a bad
    record answers 400 with the failing field in the message.
    """
    return await service.create_student(payload)


@router.put(
    "/{student_id}",
    response_model=StudentResponse,
    responses={**_INVALID, **_NOT_FOUND, **_SERVER_ERROR},
    summary="Update a student",
)
async def update_student(
    student_id: str,
    payload: Any = Body(default=None, examples=[{"age": 21}]),
    service: StudentService = Depends(get_student_service),
) -> StudentResponse:
    """Apply any subset of `{name, age, course}`; other fields are kept."""
    return await service.update_student(student_id, payload)


@router.delete(
    "/{student_id}",
    response_model=StudentDeleteResponse,
    responses={**_NOT_FOUND, **_SERVER_ERROR},
    summary="Delete a student",
)
async def delete_student(
    student_id: str,
    service: StudentService = Depends(get_student_service),
) -> StudentDeleteResponse:
    return await service.delete_student(student_id)
