import logging
from fastapi.logger import logger as fastapi_logger


def setup_logging(level: str = "INFO"):
    logging_format = "%(asctime)s - %(levelname)s - %(message)s"
    date_format = "%Y-%m-%d %H:%M:%S"

    logging.basicConfig(
        level=level.upper(),
        format=logging_format,
        datefmt=date_format
    )

    # Route FastAPI's logger through uvicorn's handlers
    fastapi_logger.handlers = logging.getLogger("uvicorn").handlers
    fastapi_logger.setLevel(level.upper())
