from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator
from sqlalchemy.engine import URL
from typing import Optional


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        # Search .env in CWD first, then parent dir.
        env_file=(".env", "../.env"),
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # --- Database (each part falls back to a local default) ---
    DB_HOST: str = "localhost"
    DB_USER: str = "root"
    DB_PASSWORD: str = ""
    DB_PORT: int = 3306
    DB_NAME: str = "General_Store"
    # Full async URL; when set it wins over the DB_* parts
    DATABASE_URL: Optional[str] = None
    DB_POOL_SIZE: int = 5

    # --- Rate limiting ---
    RATE_LIMIT: str = "100/minute"
    RATE_LIMIT_ENABLED: bool = True
    RATE_LIMIT_MESSAGE: str = "Too many requests from this IP, Try again Later."

    # --- Server ---
    PORT: int = 3000

    # --- Observability ---
    LOG_LEVEL: str = "INFO"
    ENVIRONMENT: str = "development"  # development | staging | production

    @field_validator("LOG_LEVEL")
    @classmethod
    def log_level_must_be_valid(cls, v: str) -> str:
        valid = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid:
            raise ValueError(f"LOG_LEVEL must be one of {valid}")
        return v.upper()

    @field_validator("DB_POOL_SIZE")
    @classmethod
    def pool_size_must_be_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("DB_POOL_SIZE must be at least 1")
        return v

    def get_database_url(self) -> str:
        """Return DATABASE_URL, or a MySQL URL assembled from the DB_* parts."""
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return URL.create(
            "mysql+aiomysql",
            username=self.DB_USER,
            password=self.DB_PASSWORD or None,
            host=self.DB_HOST,
            port=self.DB_PORT,
            database=self.DB_NAME,
        ).render_as_string(hide_password=False)


settings = Settings()
