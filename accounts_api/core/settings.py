from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_ignore_empty=True, case_sensitive=False)

    # App
    app_name: str = "Accounts API"
    environment: str = "development"
    debug: bool = False
    log_level: str = "INFO"
    cors_origins: List[str] = []

    # Database
    database_url: str = "sqlite:///./accounts.db"
    sql_echo: bool = False

    # Security
    jwt_secret: str = "dev-jwt-secret-change-me"
    jwt_algorithm: str = "HS256"
    token_expires_minutes: int = 15

    # Cookies
    token_cookie_name: str = "token"
    token_cookie_secure: Optional[bool] = None
    token_cookie_samesite: str = "strict"

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    @property
    def cookie_secure(self) -> bool:
        if self.token_cookie_secure is not None:
            return self.token_cookie_secure
        return self.is_production


settings = Settings()
