"""
Run script to start the FastAPI server (no reload).
"""
import logging

import uvicorn

from app.config import settings

logger = logging.getLogger(__name__)


def main():
    """Start the Uvicorn server."""
    logger.info(f"Starting {settings.PROJECT_NAME} API")
    logger.info("API Documentation: http://localhost:8000/docs")

    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=8000,
        reload=False,  # No reload for stability
        log_level=settings.LOG_LEVEL.lower()
    )


if __name__ == "__main__":
    logging.basicConfig(level=settings.LOG_LEVEL, format='%(asctime)s - %(levelname)s - %(message)s')
    main()
