import logging

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


logger = logging.getLogger(__name__)


class CustomSettings(BaseSettings):
    """Application settings loaded from environment variables.

    Validates configuration at startup to catch misconfiguration early.
    """

    host: str = "0.0.0.0"
    port: int = 7000
    log_level: str = "INFO"

    playlist_cache_ttl_sec: int = 300  # 5 minutes
    playlist_cache_max_entries: int = 128
    playlist_fetch_timeout_sec: float = 30.0
    playlist_user_agent: str = "m3u-catalog-service/1.0"

    frontend_dir: str | None = None

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("port")
    @classmethod
    def validate_port(cls, value: int) -> int:
        """Validate port is a usable TCP port."""
        if not 1 <= value <= 65535:
            raise ValueError("port must be between 1 and 65535")
        return value

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Validate log level is a known logging level name."""
        normalized = value.upper()
        allowed = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}
        if normalized not in allowed:
            raise ValueError(f"log_level must be one of {sorted(allowed)}")
        return normalized

    @field_validator("playlist_cache_ttl_sec", "playlist_cache_max_entries")
    @classmethod
    def validate_positive_ints(cls, value: int, info) -> int:
        """Ensure cache sizing values are positive."""
        if value <= 0:
            raise ValueError(f"{info.field_name} must be > 0")
        return value

    @field_validator("playlist_fetch_timeout_sec")
    @classmethod
    def validate_fetch_timeout(cls, value: float) -> float:
        """Validate outbound playlist fetch timeout (seconds)."""
        if value <= 0:
            raise ValueError("playlist_fetch_timeout_sec must be > 0")
        return value

    @field_validator("frontend_dir", mode="before")
    @classmethod
    def parse_frontend_dir(cls, value):
        """Treat an empty string as unset."""
        if isinstance(value, str) and not value.strip():
            return None
        return value

    def log_configuration(self) -> None:
        """Log the loaded configuration."""
        logger.info("Configuration loaded:")
        logger.info("  Listen: %s:%s", self.host, self.port)
        logger.info("  Log Level: %s", self.log_level)
        logger.info("  Playlist Cache TTL: %ss", self.playlist_cache_ttl_sec)
        logger.info("  Playlist Cache Max Entries: %s", self.playlist_cache_max_entries)
        logger.info("  Playlist Fetch Timeout: %ss", self.playlist_fetch_timeout_sec)
        logger.info("  Frontend Dir: %s", self.frontend_dir or "disabled")


settings = CustomSettings()


def setup_logging() -> None:
    """Configure application logging."""
    logging.basicConfig(
        level=getattr(logging, settings.log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
