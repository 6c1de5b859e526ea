from abc import ABC, abstractmethod
from typing import Any, Dict, Optional


class TranscriptionProvider(ABC):
    """Abstract base class for transcription providers."""

    @abstractmethod
    async def transcribe(
        self,
        media_data: bytes,
        filename: str = "video.mp4",
        language: Optional[str] = None,
        **kwargs
    ) -> Dict[str, Any]:
        """Transcribe audio or video bytes to text."""
        pass

    @abstractmethod
    async def close(self):
        """Close the provider and cleanup resources."""
        pass
