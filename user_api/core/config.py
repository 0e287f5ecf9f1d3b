# File: user_api/core/config.py

from functools import lru_cache
from typing import Annotated, List, Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict
from sqlalchemy.engine import URL

DEFAULT_JWT_SECRET = "default-secret-key"


class Settings(BaseSettings):
    """
    Process-wide configuration, read from the environment (and `.env`).

    The DATABASE_* values are required: building Settings without them
    raises a pydantic ValidationError, which aborts startup.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    PROJECT_NAME: str = "User Management API"
    VERSION: str = "1.0.0"

    # Database
    database_host: str
    database_port: int
    database_name: str
    database_user: str
    database_password: str
    # Full SQLAlchemy URL, overrides the DATABASE_* parts when set
    database_url: Optional[str] = None

    # Security / auth
    jwt_secret: str = DEFAULT_JWT_SECRET
    algorithm: str = "HS256"
    bcrypt_rounds: int = 10

    # Server
    port: int = 3000
    log_level: str = "INFO"
    default_language: str = "en"

    # CORS
    backend_cors_origins: Annotated[List[str], NoDecode] = []

    @field_validator("backend_cors_origins", mode="before")
    @classmethod
    def assemble_cors_origins(cls, v):
        if isinstance(v, str):
            return [i.strip() for i in v.split(",") if i.strip()]
        if isinstance(v, list):
            return v
        return []

    @property
    def sqlalchemy_database_url(self) -> str:
        if self.database_url:
            return self.database_url
        return URL.create(
            "postgresql+psycopg",
            username=self.database_user,
            password=self.database_password,
            host=self.database_host,
            port=self.database_port,
            database=self.database_name,
        ).render_as_string(hide_password=False)

    @property
    def uses_default_secret(self) -> bool:
        return self.jwt_secret == DEFAULT_JWT_SECRET


@lru_cache
def get_settings() -> Settings:
    return Settings()
