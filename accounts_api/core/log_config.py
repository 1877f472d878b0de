import logging
import sys

from accounts_api.core.settings import settings


def configure_logging() -> None:
    level = logging.DEBUG if settings.debug else getattr(logging, settings.log_level.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s  %(levelname)-8s  %(name)s - %(message)s",
        stream=sys.stdout,
    )
    # uvicorn already logs each request line
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
