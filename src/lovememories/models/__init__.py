"""
Models module for lovememories application.

This module contains data models and schemas:
- Photo, Note, User: Data classes for stored rows
- Database schemas and table definitions
- DatabaseManager: Database connection and schema management
"""

from .database import DatabaseManager, create_database, get_database_manager
from .memory import Note, Photo, User
from .schema import get_schema_statements, validate_schema_compatibility

__all__ = [
    "Photo",
    "Note",
    "User",
    "DatabaseManager",
    "create_database",
    "get_database_manager",
    "get_schema_statements",
    "validate_schema_compatibility",
]
