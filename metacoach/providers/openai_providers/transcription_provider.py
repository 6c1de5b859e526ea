import io
from typing import Any, Dict, Optional

from loguru import logger
from openai import AsyncOpenAI

from metacoach.exceptions import ConfigurationException, ProviderException
from metacoach.providers.base import TranscriptionProvider
from metacoach.utils.error_handler import convert_exceptions


class OpenAITranscriptionProvider(TranscriptionProvider):
    """OpenAI Whisper transcription provider implementation."""

    def __init__(self, config: Dict[str, Any], client: Optional[AsyncOpenAI] = None):
        self.config = config
        self.client = client or self._initialize_client()

    def _initialize_client(self) -> AsyncOpenAI:
        """Initialize OpenAI client."""
        api_key = self.config.get("api_key")
        if not api_key:
            raise ConfigurationException("Missing OPENAI_API_KEY: OpenAI API key is required")

        try:
            return AsyncOpenAI(
                api_key=api_key,
                timeout=self.config.get("timeout", 200),
                max_retries=self.config.get("max_retries", 0)
            )
        except Exception as e:
            raise ProviderException(f"Failed to initialize OpenAI client: {e}")

    @convert_exceptions({Exception: ProviderException})
    async def transcribe(
        self,
        media_data: bytes,
        filename: str = "video.mp4",
        language: Optional[str] = None,
        **kwargs
    ) -> Dict[str, Any]:
        """Transcribe media bytes using OpenAI Whisper with a verbose JSON response."""
        media_file = io.BytesIO(media_data)
        media_file.name = filename  # Whisper infers the container from the filename

        request: Dict[str, Any] = {
            "model": self.config.get("transcription_model", "whisper-1"),
            "file": media_file,
            "response_format": kwargs.get("response_format", "verbose_json"),
        }
        if language:
            request["language"] = language

        try:
            response = await self.client.audio.transcriptions.create(**request)
        except Exception as e:
            logger.error(f"OpenAI Whisper transcription failed: {e}")
            raise ProviderException(
                f"OpenAI Whisper transcription failed: {e}",
                error_code="PROVIDER_ERROR",
                details={"provider": "openai", "original_exception": type(e).__name__},
            ) from e

        return {
            "text": response.text,
            "language": getattr(response, "language", None) or language,
            "duration": getattr(response, "duration", None),
        }

    async def close(self):
        """Close the transcription client and cleanup resources."""
        if self.client:
            logger.info("Closing OpenAI transcription client")
            await self.client.close()
