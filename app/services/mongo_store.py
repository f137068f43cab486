"""
Student Records API — MongoDB Student Store
=============================================

What:  StudentStore implementation backed by a MongoDB collection.
How:   Uses the pymongo async API (AsyncCollection). Each method issues one
       command; driver errors are translated into StorageError so callers
       never depend on pymongo exception types.

Command per operation:
    list_students   → find({})
    get_student     → find_one({_id})
    insert_student  → insert_one(doc)
    update_student  → find_one_and_update({_id}, {$set}, AFTER)
                      (find_one when there is nothing to set)
    delete_student  → find_one_and_delete({_id})
    ping            → db.command("ping")
"""

import logging
from typing import Any, Dict, List, Optional

from bson.errors import BSONError
from pymongo import ReturnDocument
from pymongo.asynchronous.collection import AsyncCollection
from pymongo.errors import PyMongoError

from app.exceptions import StorageError
from app.models.student import from_document, parse_object_id, to_document
from app.services.student_store import StudentRecord, StudentStore

logger = logging.getLogger(__name__)

# Encoding failures (e.g. an int wider than 8 bytes) surface as BSONError or
# OverflowError, neither of which is a PyMongoError.
DRIVER_ERRORS = (PyMongoError, BSONError, OverflowError)


class MongoStudentStore(StudentStore):
    """
    Student storage on a single MongoDB collection.

    The collection (and the client behind it) is owned by the caller;
    this class never opens or closes connections.
    """

    def __init__(self, collection: AsyncCollection):
        self.collection = collection

    async def list_students(self) -> List[StudentRecord]:
        try:
            documents = await self.collection.find({}).to_list(None)
        except DRIVER_ERRORS as e:
            raise self._storage_error("list", e)
        return [from_document(doc) for doc in documents]

    async def get_student(self, student_id: str) -> Optional[StudentRecord]:
        oid = parse_object_id(student_id)
        if oid is None:
            return None
        try:
            document = await self.collection.find_one({"_id": oid})
        except DRIVER_ERRORS as e:
            raise self._storage_error("get", e)
        return from_document(document) if document else None

    async def insert_student(self, fields: Dict[str, Any]) -> StudentRecord:
        document = to_document(fields)
        try:
            result = await self.collection.insert_one(document)
        except DRIVER_ERRORS as e:
            raise self._storage_error("insert", e)
        document["_id"] = result.inserted_id
        return from_document(document)

    async def update_student(
        self, student_id: str, fields: Dict[str, Any]
    ) -> Optional[StudentRecord]:
        oid = parse_object_id(student_id)
        if oid is None:
            return None
        changes = to_document(fields)
        try:
            if changes:
                document = await self.collection.find_one_and_update(
                    {"_id": oid},
                    {"$set": changes},
                    return_document=ReturnDocument.AFTER,
                )
            else:
                # $set with an empty document is rejected by the server
                document = await self.collection.find_one({"_id": oid})
        except DRIVER_ERRORS as e:
            raise self._storage_error("update", e)
        return from_document(document) if document else None

    async def delete_student(self, student_id: str) -> Optional[StudentRecord]:
        oid = parse_object_id(student_id)
        if oid is None:
            return None
        try:
            document = await self.collection.find_one_and_delete({"_id": oid})
        except DRIVER_ERRORS as e:
            raise self._storage_error("delete", e)
        return from_document(document) if document else None

    async def ping(self) -> bool:
        try:
            await self.collection.database.command("ping")
        except Exception as e:
            logger.warning("MongoDB ping failed: %s", str(e))
            return False
        return True

    @staticmethod
    def _storage_error(operation: str, exc: Exception) -> StorageError:
        logger.error("MongoDB %s failed: %s", operation, str(exc))
        return StorageError(str(exc), operation=operation)
