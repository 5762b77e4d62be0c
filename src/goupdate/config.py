"""Configuration management for goupdate."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from goupdate.constants import (
    DEFAULT_BASE_URL,
    DEFAULT_DOWNLOAD_DIR,
    DEFAULT_INSTALL_DIR,
    DEFAULT_OWNER,
    DEFAULT_REQUEST_TIMEOUT,
    DEFAULT_USER_AGENT,
    WGET_READ_TIMEOUT,
    WGET_TRIES,
)


class Settings(BaseSettings):
    """Application settings loaded from ``GOUPDATE_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="GOUPDATE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Distribution index
    base_url: str = Field(
        default=DEFAULT_BASE_URL, description="Go download index (also used as Referer)"
    )
    user_agent: str = Field(
        default=DEFAULT_USER_AGENT, description="User-Agent sent to the download index"
    )
    request_timeout: float = Field(
        default=DEFAULT_REQUEST_TIMEOUT, gt=0, description="HTTP timeout in seconds"
    )

    # Installation
    download_dir: str = Field(
        default=DEFAULT_DOWNLOAD_DIR, description="Where archives are downloaded and unpacked"
    )
    install_dir: str = Field(default=DEFAULT_INSTALL_DIR, description="Go installation root")
    owner: str = Field(default=DEFAULT_OWNER, description="user:group for the installed tree")
    use_sudo: bool = Field(default=True, description="Prefix privileged steps with sudo")
    verify_checksum: bool = Field(
        default=True, description="Check the archive SHA-256 against the index"
    )
    wget_tries: int = Field(default=WGET_TRIES, ge=1)
    wget_read_timeout: int = Field(default=WGET_READ_TIMEOUT, ge=1)

    # Local toolchain / platform
    go_binary: str = Field(default="go", description="go executable queried for the installed version")
    target_os: str | None = Field(default=None, description="Override the detected GOOS")
    target_arch: str | None = Field(default=None, description="Override the detected GOARCH")

    # Application
    environment: str = Field(default="production", description="Environment name")
    log_level: str = Field(default="WARNING", description="Logging level")

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.environment.lower() == "development"

    @property
    def catalog_url(self) -> str:
        return self.base_url

    @property
    def referer(self) -> str:
        return self.base_url


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
