"""Run the API with uvicorn: ``python -m server``."""

import os

import uvicorn

from guidetiles.utils.logging_config import configure_logging, get_logger

configure_logging()
logger = get_logger(__name__)

if __name__ == "__main__":
    host = os.getenv("HOST", "0.0.0.0")  # noqa: S104
    port = int(os.getenv("PORT", "8000"))
    reload = os.getenv("RELOAD", "false").lower() == "true"

    logger.info("Starting guidetiles server", extra={"host": host, "port": port, "reload": reload})
    # Logging is configured above; uvicorn must not replace the handlers.
    uvicorn.run("server.main:app", host=host, port=port, reload=reload, log_config=None)
