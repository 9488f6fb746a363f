from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


LOG_LEVELS = ("critical", "error", "warning", "info", "debug", "trace")


class Settings(BaseSettings):

    SERVER_ADDRESS: str = "0.0.0.0"
    SERVER_PORT: int = Field(3000, validation_alias=AliasChoices("PORT", "SERVER_PORT"))

    DATABASE_URL: str
    DATABASE_SSL: bool = False
    POSTGRES_POOL_SIZE: int = 5
    POSTGRES_MAX_OVERFLOW: int = 0

    ADMIN_KEY: str = Field(..., min_length=1)
    ADMIN_RECENT_LIMIT: int = Field(100, ge=1)

    WATCH_FILES: bool = False
    LOG_LEVEL: str = "info"  # Logging level: critical, error, warning, info, debug, trace

    model_config = SettingsConfigDict(
        env_file="local.env",
        case_sensitive=True,
        extra="ignore",
        env_ignore_empty=True,
        populate_by_name=True,
    )

    @field_validator("DATABASE_URL")
    @classmethod
    def normalize_database_url(cls, v: str) -> str:
        if not v:
            raise ValueError("DATABASE_URL must not be empty")
        # Render / Heroku hand out plain postgres URLs; use the async psycopg driver
        for prefix in ("postgres://", "postgresql://"):
            if v.startswith(prefix):
                return "postgresql+psycopg://" + v[len(prefix):]
        return v

    @property
    def is_sqlite(self) -> bool:
        return self.DATABASE_URL.startswith("sqlite")

    @property
    def connect_args(self) -> dict:
        if self.DATABASE_SSL and not self.is_sqlite:
            return {"sslmode": "require"}
        return {}

    @field_validator("LOG_LEVEL")
    @classmethod
    def check_log_level(cls, v: str) -> str:
        v = v.lower()
        if v not in LOG_LEVELS:
            raise ValueError(f"LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}")
        return v

    @property
    def python_log_level(self) -> str:
        # uvicorn knows "trace", the logging module does not
        return "DEBUG" if self.LOG_LEVEL == "trace" else self.LOG_LEVEL.upper()
