"""
Student Records API — Pydantic Request/Response Schemas
=========================================================

What:  The typed Student record, its partial-update variant, the response
       shapes, and the pure validation functions used by StudentService.
Why:   Strict input validation, automatic serialization, and OpenAPI docs.
How:   validate_student() / validate_student_update() run the pydantic model
       over a raw JSON value and return either the parsed model or a
       SchemaViolation. They never raise for bad input.

Strictness:
    Types are checked without coercion: "20" is not an age, 20 is not a
    name, and true is not an integer.
"""

from typing import Any, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr
from pydantic import ValidationError as PydanticValidationError

# BSON stores integers in at most 8 bytes; larger values cannot be persisted
BSON_INT64_MIN = -(2 ** 63)
BSON_INT64_MAX = 2 ** 63 - 1


# ══════════════════════════════════════════════════════════════════════════
# Request Models — What clients send
# ══════════════════════════════════════════════════════════════════════════


class StudentCreate(BaseModel):
    """A complete candidate record, as submitted to POST /students."""

    model_config = ConfigDict(extra="ignore")

    name: StrictStr = Field(min_length=1, description="Student's full name")
    age: StrictInt = Field(ge=BSON_INT64_MIN, le=BSON_INT64_MAX, description="Age in years")
    course: StrictStr = Field(min_length=1, description="Enrolled course")


class StudentUpdate(BaseModel):
    """
    A partial candidate record, as submitted to PUT /students/{id}.

    Omitted fields are left untouched. Sending a field as null is rejected:
    a persisted record never holds a null name, age or course.
    """

    model_config = ConfigDict(extra="ignore")

    name: Optional[StrictStr] = Field(default=None, min_length=1)
    age: Optional[StrictInt] = Field(default=None, ge=BSON_INT64_MIN, le=BSON_INT64_MAX)
    course: Optional[StrictStr] = Field(default=None, min_length=1)

    def changes(self) -> dict:
        """Only the fields the client actually submitted."""
        return self.model_dump(exclude_unset=True)


# ══════════════════════════════════════════════════════════════════════════
# Response Models — What the API returns
# ══════════════════════════════════════════════════════════════════════════


class StudentResponse(BaseModel):
    """A persisted Student, including its store-assigned id."""

    id: str = Field(description="Store-assigned identifier")
    name: str
    age: int
    course: str


class StudentDeleteResponse(BaseModel):
    """Confirmation plus the removed record's last known state."""

    message: str = Field(default="Student deleted")
    student: StudentResponse


class MessageResponse(BaseModel):
    """Error body used for every 4xx/5xx response."""

    message: str


class HealthResponse(BaseModel):
    """Health check response showing service and database status."""

    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")


# ══════════════════════════════════════════════════════════════════════════
# Validation
# ══════════════════════════════════════════════════════════════════════════


class SchemaViolation(BaseModel):
    """Structured description of the first field that failed validation."""

    field: str
    message: str

    def describe(self) -> str:
        return f"Student validation failed: {self.field}: {self.message}"


def _first_violation(exc: PydanticValidationError) -> SchemaViolation:
    errors: List[dict] = exc.errors()
    first = errors[0]
    loc = first.get("loc") or ()
    field = ".".join(str(part) for part in loc) or "body"
    message = first.get("msg", "Invalid value")
    if first.get("type") == "missing":
        message = "Field required"
    return SchemaViolation(field=field, message=message)


def _not_an_object(candidate: Any) -> SchemaViolation:
    return SchemaViolation(
        field="body",
        message=f"Expected a JSON object, got {type(candidate).__name__}",
    )


def validate_student(candidate: Any) -> Tuple[Optional[StudentCreate], Optional[SchemaViolation]]:
    """Check that name, age and course are all present and correctly typed."""
    if not isinstance(candidate, dict):
        return None, _not_an_object(candidate)
    try:
        return StudentCreate.model_validate(candidate), None
    except PydanticValidationError as exc:
        return None, _first_violation(exc)


def validate_student_update(candidate: Any) -> Tuple[Optional[StudentUpdate], Optional[SchemaViolation]]:
    """Check the submitted subset of fields of a partial update."""
    if not isinstance(candidate, dict):
        return None, _not_an_object(candidate)
    for field in ("name", "age", "course"):
        if field in candidate and candidate[field] is None:
            return None, SchemaViolation(field=field, message="Field may not be null")
    try:
        return StudentUpdate.model_validate(candidate), None
    except PydanticValidationError as exc:
        return None, _first_violation(exc)
