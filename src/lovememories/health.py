"""
Health check functionality for LoveMemories application.

Checks the database and the uploads directory. Served unauthenticated at
/api/health so it can be used by a container orchestrator.
"""

import os
import time
from typing import Any

import duckdb

from . import __version__
from .config import get_environment
from .logging_config import get_logger
from .models.database import DatabaseManager
from .services.storage import UploadStorage

logger = get_logger(__name__)


def check_database_health(db_manager: DatabaseManager) -> dict[str, Any]:
    """Check database connectivity and schema."""
    try:
        db_manager.execute_query("SELECT 1")
        if not db_manager.verify_schema():
            return {"status": "unhealthy", "message": "Database schema is incomplete", "timestamp": time.time()}

        return {"status": "healthy", "message": "Database connection successful", "timestamp": time.time()}
    except duckdb.Error as e:
        logger.error("database_health_check_failed", error=str(e))
        return {"status": "unhealthy", "message": f"Database connection failed: {str(e)}", "timestamp": time.time()}


def check_uploads_health(uploads: UploadStorage) -> dict[str, Any]:
    """Check that the uploads directory exists and is writable."""
    uploads_dir = uploads.uploads_dir
    if not uploads_dir.is_dir():
        return {
            "status": "unhealthy",
            "message": f"Uploads directory missing: {uploads_dir}",
            "timestamp": time.time(),
        }

    if not os.access(uploads_dir, os.W_OK):
        return {
            "status": "unhealthy",
            "message": f"Uploads directory not writable: {uploads_dir}",
            "timestamp": time.time(),
        }

    return {"status": "healthy", "message": "Uploads directory is writable", "timestamp": time.time()}


def get_health_status(db_manager: DatabaseManager, uploads: UploadStorage) -> dict[str, Any]:
    """
    Get overall health status.

    Returns:
        dict with an overall "status" and one entry per check
    """
    checks = {
        "database": check_database_health(db_manager),
        "uploads": check_uploads_health(uploads),
    }
    overall = "healthy" if all(check["status"] == "healthy" for check in checks.values()) else "unhealthy"

    return {
        "status": overall,
        "version": __version__,
        "environment": get_environment(),
        "checks": checks,
        "timestamp": time.time(),
    }
