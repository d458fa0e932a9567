"""
Loguru configuration shared by the backend services.

One colorized console sink plus two rotating file sinks under LOG_DIR. Every
record carries the service name (``extra["service"]``) so logs from several
services can be merged and still told apart.

Log Files:
    - {service}.log: everything at LOG_LEVEL and above (50 MB, kept 7 days)
    - {service}-error.log: ERROR and above only (10 MB, kept 30 days)

Both files are zip-compressed on rotation and written through loguru's
background queue (``enqueue=True``) so request handlers never block on disk I/O.

Example:
    ```python
    from common.logging import setup_logging
    from loguru import logger

    setup_logging("queue-service")
    logger.info("Fetched 25 stores")
    # 2025-08-17 10:35:23 | INFO     | queue-service | services.queue_service...:42 | Fetched 25 stores
    ```
"""

from pathlib import Path
import sys

from loguru import logger

from common.config import get_settings

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<magenta>{extra[service]}</magenta> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<level>{message}</level>"
)
FILE_FORMAT = (
    "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {extra[service]} | "
    "{name}:{function}:{line} | {message}"
)


def setup_logging(service_name: str | None = None) -> None:
    """
    Replace loguru's default handler with the service sinks.

    Args:
        service_name: Names the log files and tags every record; "app" when omitted.

    Note:
        Idempotent: calling it again removes the previous sinks first. The
        application factory calls it before anything else.
    """
    settings = get_settings(service_name)
    base_name = service_name or "app"

    logger.remove()
    logger.configure(extra={"service": base_name})

    logger.add(sys.stdout, format=CONSOLE_FORMAT, level=settings.LOG_LEVEL, colorize=True)

    logs_dir = Path(settings.LOG_DIR)
    logs_dir.mkdir(parents=True, exist_ok=True)

    logger.add(
        logs_dir / f"{base_name}-error.log",
        format=FILE_FORMAT,
        level="ERROR",
        rotation="10 MB",
        retention="30 days",
        compression="zip",
        enqueue=True,
    )
    logger.add(
        logs_dir / f"{base_name}.log",
        format=FILE_FORMAT,
        level=settings.LOG_LEVEL,
        rotation="50 MB",
        retention="7 days",
        compression="zip",
        enqueue=True,
    )
