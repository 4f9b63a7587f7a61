"""
Maintenance tasks for lovememories.

Usage:
    invoke --search-root src/lovememories/cli init-db
    invoke --search-root src/lovememories/cli serve --port 8000
"""

import os

import structlog
from dotenv import load_dotenv
from invoke import Context, task

from lovememories.config import (
    get_access_pin,
    get_config,
    get_database_path,
    get_default_username,
    get_uploads_dir,
)
from lovememories.logging_config import configure_structured_logging
from lovememories.services.memories import create_memory_storage

logger = structlog.get_logger()


def _load_environment(env_file: str) -> None:
    if os.path.exists(env_file):
        logger.info("loading_env_file", env_file=str(env_file))
        load_dotenv(dotenv_path=env_file)
        get_config().clear_cache()
    else:
        logger.warning("env_file_not_found", env_file=str(env_file))


@task
def init_db(c: Context, env_file: str = ".env"):
    """
    Create the database schema and the default user.

    Safe to run more than once: existing tables and the user are kept.

    Args:
        c (Context): Invoke context.
        env_file (str): Path to the environment file. Default is '.env'.
    """
    _load_environment(env_file)
    configure_structured_logging()

    db_path = get_database_path()
    storage = create_memory_storage(str(db_path), str(get_uploads_dir()))
    logger.info("database_schema_ready", database=str(db_path))

    username = get_default_username()
    if storage.get_user_by_username(username) is None:
        logger.info("creating_default_user", username=username)
        storage.create_user(username, get_access_pin())
    else:
        logger.info("default_user_exists", username=username)

    storage.db_manager.close()
    logger.info("database_initialized", database=str(db_path))


@task
def serve(c: Context, host: str = "127.0.0.1", port: int = 8000, env_file: str = ".env", reload: bool = False):
    """
    Run the API server with uvicorn.

    Args:
        c (Context): Invoke context.
        host (str): Interface to bind. Default is 127.0.0.1.
        port (int): Port to listen on. Default is 8000.
        env_file (str): Path to the environment file. Default is '.env'.
        reload (bool): Restart on code changes. Default is False.
    """
    _load_environment(env_file)
    reload_flag = " --reload" if reload else ""
    c.run(f"uvicorn lovememories.server:app --factory --host {host} --port {port}{reload_flag}", pty=True)
