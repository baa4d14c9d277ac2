"""Application configuration from environment variables."""
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """All config comes from env vars or .env file."""

    # Metadata store (PostgreSQL)
    DB_USER: str = ""
    DB_PASS: str = ""
    DB_HOST: str = "db"
    DB_PORT: int = 5432
    DB_NAME: str = "db"
    DATABASE_URL: str = ""  # overrides the DB_* parts when set

    # Blob store
    UPLOAD_DIR: str = "./uploads"
    MAX_UPLOAD_BYTES: int = 10 << 26  # 640 MB

    # Cross-origin policy
    CORS_ORIGIN: str = "http://localhost:5173"
    CORS_METHODS: str = "POST, GET, OPTIONS, PUT, DELETE"
    CORS_HEADERS: str = "Content-Type, Authorization"

    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8080
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"

    @property
    def database_url(self) -> str | None:
        """SQLAlchemy URL for the metadata store, or None when not configured."""
        if self.DATABASE_URL:
            return self.DATABASE_URL
        if not self.DB_USER or not self.DB_PASS:
            return None
        return (
            f"postgresql+asyncpg://{self.DB_USER}:{self.DB_PASS}"
            f"@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"
        )


settings = Settings()
