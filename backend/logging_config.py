"""
Logging Configuration
Single place where the root logger gets its handler and format
"""

import logging

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: str = "INFO") -> None:
    """
    Configure root logging for the service

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ...)
    """
    logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO), format=LOG_FORMAT)

    # uvicorn access lines duplicate the request middleware output
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
