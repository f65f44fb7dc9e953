"""Application settings."""

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_LOG_LEVELS = frozenset({"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"})


class Settings(BaseSettings):
    """Runtime settings loaded from environment variables."""

    app_name: str = "Resumable Transfer Endpoints"
    api_prefix: str = ""
    host: str = "0.0.0.0"
    port: int = 8080
    log_level: str = "INFO"
    aws_region: str = "us-east-1"
    s3_endpoint_url: str | None = None
    s3_max_pool_connections: int = 16
    azure_file_api_version: str = "2023-11-03"
    http_probe_timeout_seconds: float = 30.0

    @model_validator(mode="after")
    def validate_probe_settings(self) -> "Settings":
        """Ensure backend probe settings are usable."""

        if self.log_level.upper() not in _LOG_LEVELS:
            raise ValueError(f"RT_LOG_LEVEL must be one of {sorted(_LOG_LEVELS)}.")
        if self.s3_max_pool_connections < 1:
            raise ValueError("RT_S3_MAX_POOL_CONNECTIONS must be >= 1.")
        if self.http_probe_timeout_seconds <= 0:
            raise ValueError("RT_HTTP_PROBE_TIMEOUT_SECONDS must be > 0.")
        if not self.azure_file_api_version.strip():
            raise ValueError("RT_AZURE_FILE_API_VERSION cannot be empty.")
        if self.s3_endpoint_url is not None and not self.s3_endpoint_url.strip():
            raise ValueError("RT_S3_ENDPOINT_URL cannot be blank when set.")
        return self

    model_config = SettingsConfigDict(env_prefix="RT_", extra="ignore")


__all__ = ["Settings"]
