from typing import Dict, Optional


class MetaCoachException(Exception):
    """Base exception for the MetaCoach analysis framework."""

    def __init__(self, message: str, error_code: Optional[str] = None, details: Optional[Dict] = None):
        super().__init__(message)
        self.error_code = error_code
        self.details = details or {}


class ConfigurationException(MetaCoachException):
    """Raised when configuration is invalid or incomplete."""
    pass


class ProviderException(MetaCoachException):
    """Raised when a hosted model provider fails."""
    pass


class ExternalToolMissing(MetaCoachException):
    """Raised when a required command-line tool is not on PATH."""

    def __init__(self, tool: str, details: Optional[Dict] = None):
        super().__init__(
            f"{tool} is not installed or not on PATH. Install it:\n"
            "  Windows: choco install ffmpeg\n"
            "  Mac: brew install ffmpeg\n"
            "  Linux: apt-get install ffmpeg",
            error_code="EXTERNAL_TOOL_MISSING",
            details=details,
        )
        self.tool = tool


class FrameExtractionError(MetaCoachException):
    """Raised when the decoder exits with an error or produces no frames."""
    pass


class TranscriptionError(MetaCoachException):
    """Raised when the speech-to-text provider fails."""
    pass


class ScoringError(MetaCoachException):
    """Raised when a scoring completion request fails."""
    pass


class MediaDownloadError(MetaCoachException):
    """Raised when media cannot be downloaded."""
    pass
