import logging
import sys
from jamii.core.config import settings

def setup_logging():
    """
    Configure logging for the dashboard client.
    """
    logger = logging.getLogger("jamii")
    logger.setLevel(settings.LOG_LEVEL)

    # Create console handler
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(settings.LOG_LEVEL)

    # Create formatter
    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )
    handler.setFormatter(formatter)

    # Add handler to logger
    if not logger.handlers:
        logger.addHandler(handler)

    return logger

logger = setup_logging()
