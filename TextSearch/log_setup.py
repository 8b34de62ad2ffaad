import sys

from loguru import logger


def setup_logging(level: str = "WARNING") -> None:
    """Configure Loguru once for the whole process."""
    logger.remove()  # drop the default handler to avoid duplicate output
    logger.add(
        sys.stderr,
        level=level.upper(),
        format="<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
               "<level>{level: <8}</level> | "
               "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
               "<level>{message}</level>",
        backtrace=False,
        diagnose=False,
    )
