from dataclasses import dataclass
from typing import List, Optional, Sequence

from loguru import logger

from metacoach.analysis_pipeline.core.models import Frame
from metacoach.exceptions import ProviderException, ScoringError
from metacoach.providers.base import VisionProvider


@dataclass(frozen=True)
class ScoringContext:
    """Text that accompanies the frames in a scoring request.

    A transcript (even an empty one) marks the media as video.
    """
    transcript: Optional[str] = None
    caption: Optional[str] = None

    @property
    def is_video(self) -> bool:
        return self.transcript is not None


class BaseScorer:
    """Shared request plumbing for the scorers: one completion per call."""

    name = "scorer"
    log_tag = "Analysis"

    def __init__(self, provider: VisionProvider, max_tokens: int = 1000):
        self.provider = provider
        self.max_tokens = max_tokens

    @staticmethod
    def _require_frames(frames: Sequence[Frame]) -> None:
        if not frames:
            raise ValueError("At least one frame is required for scoring")

    async def _complete(
        self,
        system_prompt: str,
        user_prompt: str,
        frames: Sequence[Frame],
        detail: str,
    ) -> str:
        """Send one completion request and return the reply text.

        Raises:
            ScoringError: If the provider call fails
        """
        try:
            response = await self.provider.analyze_images(
                user_prompt,
                [frame.data for frame in frames],
                system_prompt=system_prompt,
                detail=detail,
                max_tokens=self.max_tokens,
            )
        except ProviderException as e:
            logger.error(f"[{self.log_tag}] Scoring request failed: {e}")
            raise ScoringError(
                f"{self.name} scoring failed: {e}",
                error_code="SCORING_FAILED",
                details=e.details,
            ) from e
        return response.get("content") or ""

    @staticmethod
    def _to_base64(frames: Sequence[Frame]) -> List[str]:
        return [frame.to_base64() for frame in frames]
