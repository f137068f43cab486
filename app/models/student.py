"""
Student Records API — Student Document Mapping
================================================

What:  Layout of a Student document in the MongoDB `students` collection and
       the conversions between stored documents and API-facing dicts.
Why:   Keeps BSON details (ObjectId, `_id`) inside the storage layer; every
       other layer sees a plain dict with a string `id`.
Who:   Used by MongoStudentStore on every read and write.

Document layout:
    {
        "_id":    ObjectId,   # assigned by MongoDB on insert, never changes
        "name":   str,
        "age":    int,
        "course": str,
    }
"""

from typing import Any, Dict, Mapping, Optional

from bson import ObjectId
from bson.errors import InvalidId

# Fields a client may write. `_id` is never part of a $set.
STUDENT_FIELDS = ("name", "age", "course")


def parse_object_id(student_id: str) -> Optional[ObjectId]:
    """
    Convert a path identifier into an ObjectId.

    Returns None for anything MongoDB could not have issued, so the caller
    can answer "not found" without a round-trip.
    """
    if not isinstance(student_id, str):
        return None
    try:
        return ObjectId(student_id)
    except (InvalidId, TypeError):
        return None


def to_document(fields: Mapping[str, Any]) -> Dict[str, Any]:
    """Build a document for insert/$set from validated fields."""
    return {key: fields[key] for key in STUDENT_FIELDS if key in fields}


def from_document(document: Mapping[str, Any]) -> Dict[str, Any]:
    """Render a stored document as an API record with a string `id`."""
    record = {"id": str(document["_id"])}
    for key in STUDENT_FIELDS:
        record[key] = document.get(key)
    return record
