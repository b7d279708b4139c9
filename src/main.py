"""
Main entry point for the Token Registry service.
"""

import structlog
import uvicorn
from typing import Optional

from .config import settings
from .services.registry_store import JsonFileTokenStore
from .utils.logging import setup_logging


def main(host: Optional[str] = None, port: Optional[int] = None, debug: bool = False):
    """Main application entry point"""
    setup_logging("DEBUG" if debug else settings.LOG_LEVEL, settings.LOG_JSON)

    logger = structlog.get_logger()
    logger.info("Starting Token Registry", config=settings.model_dump())

    try:
        JsonFileTokenStore(settings.DATA_FILE).initialize()

        from .api.main import app

        uvicorn.run(app, host=host or settings.API_HOST, port=port or settings.API_PORT)
    except Exception as e:
        logger.error("Unhandled exception", error=str(e))
        raise


if __name__ == "__main__":
    main()
