"""
Student Records API — Application Package
===========================================

Architecture Note:
    This backend follows a layered architecture:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │    StudentService (Handlers)        │  ← validation, outcome mapping
    ├─────────────────────────────────────┤
    │       Schemas & Models (Data)       │  ← pydantic records, BSON mapping
    ├─────────────────────────────────────┤
    │     StudentStore (Persistence)      │  ← MongoDB, injected
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
