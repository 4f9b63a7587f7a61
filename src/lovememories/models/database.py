"""
Database initialization and management for lovememories application.

This module provides functions to initialize the DuckDB database and manage
its connection.
"""

import logging
import threading
from pathlib import Path
from typing import Any

import duckdb

from .schema import get_required_columns, get_schema_statements, validate_schema_compatibility

logger = logging.getLogger(__name__)


class DatabaseManager:
    """
    Manages the DuckDB database connection and initialization.

    The API serves requests from a thread pool, so statements on the shared
    connection are serialized with a lock.
    """

    def __init__(self, db_path: str):
        """
        Initialize DatabaseManager.

        Args:
            db_path: Path to the DuckDB database file, or ":memory:"
        """
        self.db_path = db_path
        self._connection: duckdb.DuckDBPyConnection | None = None
        self._lock = threading.RLock()

    def connect(self) -> duckdb.DuckDBPyConnection:
        """
        Get or create a database connection.

        Returns:
            DuckDB connection object
        """
        if self._connection is None:
            self._connection = duckdb.connect(self.db_path)
            logger.info(f"Connected to DuckDB database at {self.db_path}")

        return self._connection

    def close(self) -> None:
        """Close the database connection."""
        if self._connection is not None:
            self._connection.close()
            self._connection = None
            logger.info("Closed DuckDB database connection")

    def initialize_schema(self) -> None:
        """
        Initialize the database schema.

        Creates all sequences, tables and indexes if they don't exist.

        Raises:
            RuntimeError: If schema validation fails
            duckdb.Error: If database operations fail
        """
        if not validate_schema_compatibility():
            raise RuntimeError("Schema is not compatible with the memory models")

        with self._lock:
            conn = self.connect()

            try:
                for statement in get_schema_statements():
                    logger.debug(f"Executing SQL: {statement}")
                    conn.execute(statement)

                logger.info("Database schema initialized successfully")

            except duckdb.Error as e:
                logger.error(f"Failed to initialize database schema: {e}")
                raise

    def verify_schema(self) -> bool:
        """
        Verify that the database schema is correctly set up.

        Returns:
            True if every table exists with its required columns, False otherwise
        """
        try:
            for table, required_columns in get_required_columns().items():
                result = self.execute_query(
                    "SELECT table_name FROM information_schema.tables WHERE table_name = ?", (table,)
                )
                if not result:
                    logger.warning(f"Table {table} does not exist")
                    return False

                column_names = {col["name"] for col in self.get_table_info(table)}
                missing_columns = required_columns - column_names
                if missing_columns:
                    logger.warning(f"Missing columns in {table}: {missing_columns}")
                    return False

            logger.info("Database schema verification successful")
            return True

        except duckdb.Error as e:
            logger.error(f"Schema verification failed: {e}")
            return False

    def get_table_info(self, table: str) -> list[dict]:
        """
        Get information about a table structure.

        Args:
            table: One of the application tables

        Returns:
            List of dictionaries containing column information
        """
        if table not in get_required_columns():
            raise ValueError(f"Unknown table: {table}")

        try:
            columns = self.execute_query(f"PRAGMA table_info('{table}')")
            return [
                {
                    "cid": col[0],
                    "name": col[1],
                    "type": col[2],
                    "notnull": bool(col[3]),
                    "default_value": col[4],
                    "pk": bool(col[5]),
                }
                for col in columns
            ]
        except duckdb.Error as e:
            logger.error(f"Failed to get table info: {e}")
            return []

    def execute_query(self, query: str, parameters: tuple | list | None = None) -> list[tuple]:
        """
        Execute a SQL query and return results.

        Args:
            query: SQL query string
            parameters: Optional query parameters

        Returns:
            List of result tuples

        Raises:
            duckdb.Error: If query execution fails
        """
        with self._lock:
            conn = self.connect()

            try:
                if parameters:
                    result = conn.execute(query, parameters)
                else:
                    result = conn.execute(query)

                return result.fetchall()

            except duckdb.Error as e:
                logger.error(f"Query execution failed: {query}, error: {e}")
                raise

    def __enter__(self) -> "DatabaseManager":
        """Context manager entry."""
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Context manager exit."""
        self.close()


def create_database(db_path: str) -> DatabaseManager:
    """
    Create and initialize a new DuckDB database.

    Args:
        db_path: Path where the database file should be created

    Returns:
        Initialized DatabaseManager instance

    Raises:
        RuntimeError: If database creation fails
    """
    try:
        if db_path != ":memory:":
            Path(db_path).parent.mkdir(parents=True, exist_ok=True)

        db_manager = DatabaseManager(db_path)
        db_manager.initialize_schema()

        if not db_manager.verify_schema():
            raise RuntimeError("Schema verification failed after creation")

        logger.info(f"Successfully created database at {db_path}")
        return db_manager

    except Exception as e:
        logger.error(f"Failed to create database at {db_path}: {e}")
        raise RuntimeError(f"Database creation failed: {e}") from e


def get_database_manager(db_path: str, create_if_missing: bool = True) -> DatabaseManager:
    """
    Get a DatabaseManager instance, optionally creating the database if it doesn't exist.

    Args:
        db_path: Path to the database file
        create_if_missing: Whether to create the database if it doesn't exist

    Returns:
        DatabaseManager instance

    Raises:
        FileNotFoundError: If database doesn't exist and create_if_missing is False
        RuntimeError: If database operations fail
    """
    if db_path == ":memory:" or not Path(db_path).exists():
        if create_if_missing:
            return create_database(db_path)
        raise FileNotFoundError(f"Database file not found: {db_path}")

    db_manager = DatabaseManager(db_path)

    if not db_manager.verify_schema():
        logger.warning("Schema verification failed, reinitializing...")
        db_manager.initialize_schema()

    return db_manager
