"""Logger configuration for the coaching lifecycle API."""
import sys

from loguru import logger


def setup_logger(level: str = "INFO") -> None:
    """Replace loguru's default handler with a formatted stderr sink.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """
    logger.remove()
    logger.add(
        sys.stderr,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>",
        level=level,
        colorize=True,
    )
    logger.info(f"Logger initialized with level={level}")
