from typing import Optional

from dotenv import find_dotenv, load_dotenv
from pydantic import Field, PrivateAttr
from pydantic_settings import BaseSettings, SettingsConfigDict


class OpenAIConfig(BaseSettings):
    """OpenAI provider configuration (vision chat model and speech-to-text)."""

    api_key: Optional[str] = Field(default=None)
    vision_model: str = Field(default="gpt-4o")
    transcription_model: str = Field(default="whisper-1")
    transcription_language: Optional[str] = Field(default="en")
    timeout: float = Field(default=200)
    # single attempt per sub-call; callers own retry policy
    max_retries: int = Field(default=0, ge=0)
    temperature: Optional[float] = Field(default=None)

    model_config = SettingsConfigDict(
        env_prefix="OPENAI_",
        env_file=".env",
        env_file_encoding="utf-8",
        validate_assignment=True,
        extra="ignore",
        case_sensitive=False
    )


class FrameExtractionConfig(BaseSettings):
    """Decoder toolchain and sampling defaults."""

    ffmpeg_binary: str = Field(default="ffmpeg")
    ffprobe_binary: str = Field(default="ffprobe")
    default_frame_count: int = Field(default=10, ge=1)
    default_quality: int = Field(default=2, ge=1, le=31)
    fallback_duration_seconds: float = Field(default=30.0, gt=0)
    temp_dir_prefix: str = Field(default="metacoach-")

    model_config = SettingsConfigDict(
        env_prefix="FRAMES_",
        env_file=".env",
        env_file_encoding="utf-8",
        validate_assignment=True,
        extra="ignore",
        case_sensitive=False
    )


class DownloadConfig(BaseSettings):
    """Media download configuration."""

    timeout_seconds: float = Field(default=60)
    concurrency: int = Field(default=3, ge=1)

    model_config = SettingsConfigDict(
        env_prefix="DOWNLOAD_",
        env_file=".env",
        env_file_encoding="utf-8",
        validate_assignment=True,
        extra="ignore",
        case_sensitive=False
    )


class LoggingConfig(BaseSettings):
    """Logging configuration."""

    level: str = Field(default="INFO")
    log_file: Optional[str] = Field(default=None)
    enable_file_logging: bool = Field(default=False)
    max_file_size: str = Field(default="10 MB")
    retention_days: int = Field(default=7)

    model_config = SettingsConfigDict(
        env_prefix="LOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        validate_assignment=True,
        extra="ignore",
        case_sensitive=False
    )


class MetaCoachConfig(BaseSettings):
    """Main configuration class."""

    # Application settings
    app_name: str = Field(default="MetaCoach Analysis")
    app_version: str = Field(default="1.0.0")
    debug: bool = Field(default=False)
    environment: str = Field(default="development")

    # Provider selection
    vision_provider: str = Field(default="openai")
    transcription_provider: str = Field(default="openai")

    # Cached section configurations
    _openai: Optional[OpenAIConfig] = PrivateAttr(default=None)
    _frames: Optional[FrameExtractionConfig] = PrivateAttr(default=None)
    _download: Optional[DownloadConfig] = PrivateAttr(default=None)
    _logging: Optional[LoggingConfig] = PrivateAttr(default=None)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        validate_assignment=True,
        extra="ignore",
        case_sensitive=False
    )

    def __init__(self, **kwargs):
        # Force load environment variables before initializing
        load_dotenv(find_dotenv(usecwd=True))
        super().__init__(**kwargs)

    @property
    def openai(self) -> OpenAIConfig:
        if self._openai is None:
            self._openai = OpenAIConfig()
        return self._openai

    @property
    def frames(self) -> FrameExtractionConfig:
        if self._frames is None:
            self._frames = FrameExtractionConfig()
        return self._frames

    @property
    def download(self) -> DownloadConfig:
        if self._download is None:
            self._download = DownloadConfig()
        return self._download

    @property
    def logging(self) -> LoggingConfig:
        if self._logging is None:
            self._logging = LoggingConfig()
        return self._logging
