import logging

from fastapi import FastAPI

from accounts_api.db.session import Base, engine
from accounts_api.models import user  # noqa: F401  registers the users table

logger = logging.getLogger(__name__)


def register_startup(app: FastAPI) -> None:
    @app.on_event("startup")
    def _create_tables() -> None:
        Base.metadata.create_all(bind=engine)
        logger.info("Database schema ready at %s", engine.url.render_as_string(hide_password=True))
