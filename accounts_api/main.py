from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from accounts_api.core.errors import register_exception_handlers
from accounts_api.core.log_config import configure_logging
from accounts_api.core.settings import settings
from accounts_api.middleware import register_middleware
from accounts_api.routers.auth import router as auth_router
from accounts_api.routers.health import router as health_router
from accounts_api.routers.users import router as users_router
from accounts_api.startup import register_startup

configure_logging()

app = FastAPI(title=settings.app_name, debug=settings.debug)

if settings.cors_origins:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

register_middleware(app)
register_exception_handlers(app)
register_startup(app)

app.include_router(health_router, tags=["health"])
app.include_router(auth_router, prefix="/api/auth", tags=["auth"])
app.include_router(users_router, prefix="/api/users", tags=["users"])
