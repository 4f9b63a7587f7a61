"""
Database schema definitions for lovememories application.

This module contains SQL schema definitions for the users, photos and notes tables.
DuckDB has no SERIAL type, so integer ids come from one sequence per table.
"""

from typing import List

SEQUENCE_STATEMENTS = [
    "CREATE SEQUENCE IF NOT EXISTS users_id_seq START 1;",
    "CREATE SEQUENCE IF NOT EXISTS photos_id_seq START 1;",
    "CREATE SEQUENCE IF NOT EXISTS notes_id_seq START 1;",
]

USERS_TABLE_SCHEMA = """
CREATE TABLE IF NOT EXISTS users (
    id INTEGER PRIMARY KEY DEFAULT nextval('users_id_seq'),
    username TEXT NOT NULL UNIQUE,
    password TEXT NOT NULL
);
"""

PHOTOS_TABLE_SCHEMA = """
CREATE TABLE IF NOT EXISTS photos (
    id INTEGER PRIMARY KEY DEFAULT nextval('photos_id_seq'),
    filename TEXT NOT NULL,
    caption TEXT,
    date TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP
);
"""

NOTES_TABLE_SCHEMA = """
CREATE TABLE IF NOT EXISTS notes (
    id INTEGER PRIMARY KEY DEFAULT nextval('notes_id_seq'),
    title TEXT NOT NULL,
    content TEXT NOT NULL,
    date TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP
);
"""

# Lists are always read newest first
TABLE_INDEXES = [
    "CREATE INDEX IF NOT EXISTS idx_photos_date ON photos(date DESC);",
    "CREATE INDEX IF NOT EXISTS idx_notes_date ON notes(date DESC);",
]

ALL_SCHEMA_STATEMENTS = (
    SEQUENCE_STATEMENTS + [USERS_TABLE_SCHEMA, PHOTOS_TABLE_SCHEMA, NOTES_TABLE_SCHEMA] + TABLE_INDEXES
)

# Columns each table must expose for the models in memory.py
REQUIRED_COLUMNS = {
    "users": {"id", "username", "password"},
    "photos": {"id", "filename", "caption", "date"},
    "notes": {"id", "title", "content", "date"},
}

TABLE_SCHEMAS = {
    "users": USERS_TABLE_SCHEMA,
    "photos": PHOTOS_TABLE_SCHEMA,
    "notes": NOTES_TABLE_SCHEMA,
}


def get_schema_statements() -> List[str]:
    """
    Get all database schema creation statements.

    Returns:
        List of SQL statements to create sequences, tables and indexes
    """
    return ALL_SCHEMA_STATEMENTS


def get_required_columns() -> dict[str, set[str]]:
    """Get the required column names per table."""
    return REQUIRED_COLUMNS


def validate_schema_compatibility() -> bool:
    """
    Validate that the schema is compatible with the Photo, Note and User models.

    Returns:
        True if every required column appears in its table definition, False otherwise
    """
    for table, columns in REQUIRED_COLUMNS.items():
        schema_lower = TABLE_SCHEMAS[table].lower()
        for column in columns:
            if column not in schema_lower:
                return False

    return True
