"""
Student Records API — Database Client Management
==================================================

What:  MongoDB client construction, store factory, and FastAPI dependencies.
Why:   Centralizes all database connection logic in one place.
How:   The lifespan handler (main.py) calls create_client() once and keeps
       the resulting store on app.state; routes receive it through
       get_student_store(), so tests can inject a fake store instead.
Who:   Used by main.py at startup/shutdown and by route handlers via Depends().

Connection Strategy:
    One AsyncMongoClient per process. The driver pools connections
    internally; there is no per-request session to open or close.
"""

import logging

from fastapi import Depends, Request
from pymongo import AsyncMongoClient

from app.config import Settings, settings
from app.services.mongo_store import MongoStudentStore
from app.services.student_service import StudentService
from app.services.student_store import StudentStore

logger = logging.getLogger(__name__)


def create_client(config: Settings = settings) -> AsyncMongoClient:
    """
    Build the MongoDB client.

    Construction does not connect; the first operation (or ping) does.
    """
    return AsyncMongoClient(
        config.mongodb_url,
        serverSelectionTimeoutMS=config.mongodb_server_selection_timeout_ms,
        appname="student-records-api",
    )


def create_student_store(client: AsyncMongoClient, config: Settings = settings) -> StudentStore:
    """Bind a MongoStudentStore to the configured database and collection."""
    collection = client[config.mongodb_database][config.students_collection]
    logger.info(
        "Student store bound to %s.%s",
        config.mongodb_database,
        config.students_collection,
    )
    return MongoStudentStore(collection)


async def dispose_client(client: AsyncMongoClient) -> None:
    """Close all pooled connections. Called during application shutdown."""
    await client.close()


# ── Dependencies ──────────────────────────────────────────────────────────
def get_student_store(request: Request) -> StudentStore:
    """FastAPI dependency returning the store installed on app.state."""
    return request.app.state.student_store


def get_student_service(store: StudentStore = Depends(get_student_store)) -> StudentService:
    """FastAPI dependency returning a StudentService bound to the store."""
    return StudentService(store)
