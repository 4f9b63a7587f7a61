"""
Entry point for the lovememories API server.

Run with `lovememories-api` or `uvicorn lovememories.server:app --factory`.
"""

import uvicorn

from .api.app import create_app
from .config import get_env
from .logging_config import configure_structured_logging, get_logger

logger = get_logger(__name__)


def app():
    """Application factory for uvicorn --factory."""
    configure_structured_logging()
    return create_app()


def main() -> None:
    """Run the API with uvicorn."""
    host = str(get_env("API_HOST", "127.0.0.1"))
    port = get_env("API_PORT", 8000, int)
    logger.info("api_server_starting", host=host, port=port)
    uvicorn.run(app, host=host, port=port, factory=True)


if __name__ == "__main__":
    main()
