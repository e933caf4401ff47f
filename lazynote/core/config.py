from typing import List

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    ENVIRONMENT: str = "development"

    PROJECT_NAME: str = "LazyNote API"
    LOG_LEVEL: str = "INFO"

    # Database (in-memory SQLite by default, seeded with demo data)
    DATABASE_URL: str = "sqlite://"
    SEED_DEMO_DATA: bool = True

    # Auth
    BCRYPT_ROUNDS: int = 12
    DEMO_TOKEN: str = "demo-token"
    DEMO_PASSWORD: str = "lazynote-demo"

    # Frontend
    CORS_ORIGINS: List[str] = ["http://localhost:3000"]

    # Ingestion progress simulation
    UPLOAD_TICK_SECONDS: float = 0.2
    UPLOAD_STEP: int = 5
    PROCESSING_TICK_SECONDS: float = 0.3
    PROCESSING_STEP: int = 3
    ALLOWED_UPLOAD_EXTENSIONS: List[str] = [
        ".pdf",
        ".doc",
        ".docx",
        ".txt",
        ".jpg",
        ".jpeg",
        ".png",
        ".ppt",
        ".pptx",
    ]

    # Finished quiz sessions and ingestion jobs are kept this long in memory
    SESSION_RETENTION_SECONDS: int = 3600
    INGESTION_RETENTION_SECONDS: int = 3600

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()
