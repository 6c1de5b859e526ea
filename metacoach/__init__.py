"""MetaCoach: AI content analysis for social-media posts."""

from .exceptions import (
    ConfigurationException,
    ExternalToolMissing,
    FrameExtractionError,
    MediaDownloadError,
    MetaCoachException,
    ProviderException,
    ScoringError,
    TranscriptionError,
)

__version__ = "1.0.0"

__all__ = [
    "MetaCoachException",
    "ConfigurationException",
    "ProviderException",
    "ExternalToolMissing",
    "FrameExtractionError",
    "TranscriptionError",
    "ScoringError",
    "MediaDownloadError",
]
