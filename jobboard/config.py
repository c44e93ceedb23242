"""
Configuration management for the Job Board backend.
"""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings from environment variables."""

    # Database
    database_url: str = ""

    # Object storage
    supabase_url: str = ""
    supabase_service_key: str = ""
    resume_bucket: str = "resumes"

    # Auth
    jwt_secret: str = ""
    jwt_algorithm: str = "HS256"
    jwt_expires_hours: int = 24
    bcrypt_rounds: int = 10

    # Limits
    max_resume_bytes: int = 2 * 1024 * 1024  # 2 MB
    jobs_max_limit: int = 100
    auth_rate_limit: str = "10/minute"
    rate_limit_enabled: bool = True

    # HTTP
    cors_origins: str = "*"

    # Observability
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"  # Ignore extra env vars


settings = Settings()
