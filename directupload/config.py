"""
Application configuration using Pydantic Settings.
All environment variables are loaded here with sensible defaults.
"""
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional


class Settings(BaseSettings):
    """Upload pipeline settings loaded from environment variables."""
    
    # Environment
    environment: str = "dev"
    log_level: str = "INFO"
    service_name: str = "directupload"
    
    # Language for user-facing notifications ("vi" or "en")
    notification_language: str = "vi"
    
    # Authorization backend (issues presigned upload URLs)
    api_base_url: str = "http://localhost:3000"
    admin_prefix: str = "/admin"
    presign_path: str = "/posts/presign"
    access_token: Optional[str] = None  # Sent as Bearer token to the backend only
    
    # No client-side timeout unless a deployment sets one (seconds)
    http_timeout: Optional[float] = None
    
    # Validation gate
    max_upload_size_bytes: int = 5 * 1024 * 1024  # 5MB
    allowed_mime_prefix: str = "image/"
    validate_batch_uploads: bool = True  # False restores the legacy unvalidated batch path
    
    # Cloudflare R2 / S3-compatible storage
    # Only used by the development presign backend
    r2_endpoint: Optional[str] = None  # e.g., https://<account_id>.r2.cloudflarestorage.com
    r2_bucket: str = "directupload-media"
    r2_access_key: Optional[str] = None
    r2_secret_key: Optional[str] = None
    r2_region: str = "auto"  # R2 uses "auto" for region
    r2_presign_expiration: int = 600  # Presigned URL expiration in seconds (10 min)
    r2_public_base_url: Optional[str] = None  # Public bucket/CDN URL used for fileUrl
    presign_api_token: Optional[str] = None  # Require this Bearer token when set
    
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )
    
    @property
    def presign_url(self) -> str:
        """Path of the presign endpoint relative to api_base_url."""
        return f"{self.admin_prefix}{self.presign_path}"


# Global settings instance
settings = Settings()
