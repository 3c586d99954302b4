import logging

from app.core.config import settings

_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str | None = None) -> None:
    """Configure the root logger once; gunicorn/uvicorn keep their own handlers."""
    logging.basicConfig(level=(level or settings.LOG_LEVEL).upper(), format=_FORMAT)
