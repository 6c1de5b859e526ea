import time
from typing import Optional

from loguru import logger

from metacoach.analysis_pipeline.core.models import Transcript
from metacoach.exceptions import ProviderException, TranscriptionError
from metacoach.providers.base import TranscriptionProvider

DEFAULT_LANGUAGE = "en"
UPLOAD_FILENAME = "video.mp4"


class Transcriber:
    """Speech-to-text over raw video bytes through a hosted transcription provider."""

    def __init__(self, provider: TranscriptionProvider, language: Optional[str] = DEFAULT_LANGUAGE):
        self.provider = provider
        self.language = language

    async def transcribe(self, video_bytes: bytes) -> Transcript:
        """
        Transcribe the audio track of a video.

        Args:
            video_bytes: Complete video file contents

        Returns:
            Transcript: text, language and elapsed milliseconds

        Raises:
            TranscriptionError: If the provider call fails
        """
        start = time.perf_counter()
        logger.info("[Whisper] Generating transcript...")

        try:
            response = await self.provider.transcribe(
                video_bytes,
                filename=UPLOAD_FILENAME,
                language=self.language,
                response_format="verbose_json",
            )
        except ProviderException as e:
            logger.error(f"[Whisper] Error generating transcript: {e}")
            raise TranscriptionError(
                f"Failed to generate transcript: {e}",
                error_code="TRANSCRIPTION_FAILED",
                details=e.details,
            ) from e

        duration_ms = int((time.perf_counter() - start) * 1000)
        text = response.get("text") or ""
        logger.info(f"[Whisper] Transcript generated in {duration_ms}ms")
        logger.info(f"[Whisper] Text length: {len(text)} characters")

        return Transcript(
            text=text,
            language=response.get("language") or self.language or DEFAULT_LANGUAGE,
            duration_ms=duration_ms,
        )
