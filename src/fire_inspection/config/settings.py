"""Application settings loaded from environment variables."""

from pydantic_settings import BaseSettings, SettingsConfigDict
from pathlib import Path


class Settings(BaseSettings):
    """
    Application configuration loaded from environment variables.

    All settings can be overridden via environment variables prefixed with INSPECTION_
    For example: INSPECTION_GEMINI_API_KEY=abc123
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="INSPECTION_",
        case_sensitive=False,
        extra="ignore",
    )

    # ===== Supabase (auth + tables) =====
    supabase_url: str = "http://localhost:54321"
    supabase_key: str = ""

    # ===== Object storage (Supabase Storage S3 endpoint) =====
    storage_endpoint_url: str | None = None
    storage_region: str = "eu-west-3"
    storage_access_key_id: str | None = None
    storage_secret_access_key: str | None = None
    images_bucket: str = "vehicle_images"
    reports_bucket: str = "inspection_reports"

    # ===== Report generation =====
    gemini_api_key: str | None = None
    gemini_model: str = "gemini-2.5-flash"

    # ===== Batch job parameters =====
    user_email: str | None = None
    user_password: str | None = None
    vehicle_name: str | None = None
    inspection_file: Path | None = None
    upload_reports: bool = True

    # ===== Annotation =====
    jpeg_quality: int = 85
    marker_radius_px: int = 14

    # ===== Logging =====
    log_level: str = "INFO"
    log_json: bool = True

    # ===== Working Directory =====
    work_dir: Path = Path("/tmp/inspection_work")

    def __init__(self, **kwargs):  # type: ignore
        super().__init__(**kwargs)
        self.work_dir.mkdir(parents=True, exist_ok=True)


# Global settings instance
settings = Settings()
