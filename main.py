"""
Store Rating Backend - Main Application
Entry point for uvicorn: `uvicorn main:app` or `python main.py`
"""

import logging

from storerate.main import create_app

logger = logging.getLogger(__name__)

app = create_app()


# ============================================================================
# Application Entry Point
# ============================================================================

if __name__ == "__main__":
    import uvicorn
    from storerate.config import SERVER_HOST, SERVER_PORT, DEBUG_MODE

    logger.info("Starting server with uvicorn...")

    # Run the application
    uvicorn.run(
        "main:app",
        host=SERVER_HOST,
        port=SERVER_PORT,
        reload=DEBUG_MODE,  # Auto-reload in debug mode
    )
