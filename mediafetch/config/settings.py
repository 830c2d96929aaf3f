import logging
import os
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from rich.logging import RichHandler

from mediafetch import __version__

PACKAGE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))


class _EnvConfig(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="MEDIAFETCH_", populate_by_name=True, extra="ignore")


class ServerConfig(_EnvConfig):
    host: str = Field(default="0.0.0.0", validation_alias="HOST", description="Listen address")
    port: int = Field(default=8080, ge=1, le=65535, validation_alias="PORT", description="Listen port")
    static_dir: str = Field(
        default=os.path.join(PACKAGE_DIR, "static"),
        validation_alias="STATIC_DIR",
        description="Directory holding index.html and assets"
    )


class YtDlpConfig(_EnvConfig):
    binary: str = Field(default="yt-dlp", validation_alias="YT_DLP_BINARY", description="External tool executable")
    audio_format: str = Field(default="mp3", validation_alias="YT_DLP_AUDIO_FORMAT", description="Audio extraction target")
    output_template: str = Field(default="%(title)s.%(ext)s", description="Output filename template")
    info_timeout_seconds: Optional[float] = Field(
        default=None, gt=0, validation_alias="YT_DLP_INFO_TIMEOUT",
        description="Metadata lookup timeout (unset waits indefinitely)"
    )
    download_timeout_seconds: Optional[float] = Field(
        default=None, gt=0, validation_alias="YT_DLP_DOWNLOAD_TIMEOUT",
        description="Download timeout (unset waits indefinitely)"
    )
    log_download_titles: bool = Field(
        default=True, validation_alias="LOG_DOWNLOAD_TITLES",
        description="Re-fetch metadata to log the title of downloads"
    )


class DownloadConfig(_EnvConfig):
    chunk_size: int = Field(default=1024 * 1024, ge=4096, validation_alias="DOWNLOAD_CHUNK_SIZE")
    temp_dir: Optional[str] = Field(
        default=None, validation_alias="DOWNLOAD_TEMP_DIR",
        description="Parent of per-request temporary directories"
    )


class LoggingConfig(_EnvConfig):
    level: str = Field(default="INFO", validation_alias="LOG_LEVEL", description="Log level")
    format: str = Field(default="%(message)s", validation_alias="LOG_FORMAT", description="Log format")
    enable_rich: bool = Field(default=True, validation_alias="LOG_RICH", description="Enable rich console logging")

    @field_validator("level")
    @classmethod
    def validate_log_level(cls, v):
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of {valid_levels}")
        return v.upper()


class ApiConfig(_EnvConfig):
    title: str = Field(default="mediafetch", description="API title")
    version: str = Field(default=__version__, description="API version")
    cors_origins: str = Field(default="*", validation_alias="CORS_ORIGINS", description="Comma separated CORS origins")
    debug: bool = Field(default=False, validation_alias="API_DEBUG", description="Enable debug mode")

    @property
    def cors_origin_list(self) -> List[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


class Config(BaseModel):
    """Main configuration model"""
    server: ServerConfig = Field(default_factory=ServerConfig)
    ytdlp: YtDlpConfig = Field(default_factory=YtDlpConfig)
    download: DownloadConfig = Field(default_factory=DownloadConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    api: ApiConfig = Field(default_factory=ApiConfig)


def configure_logging() -> None:
    """Install the root handler once, honouring the logging config"""
    global _logging_configured
    if _logging_configured:
        return

    if config.logging.enable_rich:
        handler = RichHandler(rich_tracebacks=True, show_path=False)
    else:
        handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(config.logging.format))

    root = logging.getLogger()
    root.addHandler(handler)
    root.setLevel(config.logging.level)
    _logging_configured = True


_logging_configured = False
config = Config()
