import time
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from loguru import logger

from metacoach.analysis_pipeline.core.frame_extraction import FrameExtractor
from metacoach.analysis_pipeline.core.models import AnalysisResult, Frame, MediaRecord, MediaType
from metacoach.analysis_pipeline.core.scoring import (
    ContentQualityScorer,
    HookScorer,
    ScoringContext,
    ThumbnailScorer,
)
from metacoach.analysis_pipeline.core.transcription import Transcriber
from metacoach.config.settings import MetaCoachConfig
from metacoach.exceptions import ScoringError
from metacoach.providers.factory import provider_factory
from metacoach.utils.error_handler import log_exceptions
from metacoach.utils.logging_config import log_manager

HOOK_FRAME_WINDOW = 5


class AnalysisOrchestrator:
    """
    AnalysisOrchestrator runs the content-analysis pipeline for one media item.

    VIDEO runs transcript -> frames -> hook score -> content-quality score; any
    stage failure aborts the call. IMAGE runs the thumbnail and content-quality
    scorers independently, recording a failed stage in `stage_errors` instead of
    aborting. CAROUSEL_ALBUM scores the lead image as a thumbnail.

    Each stage is attempted once. Stages run one after another; independent
    analyses may run concurrently since all working state is call-scoped.

    Attributes:
        transcriber (Transcriber): Speech-to-text stage.
        frame_extractor (FrameExtractor): Frame sampling stage.
        hook_scorer (HookScorer): Opening-seconds scorer.
        thumbnail_scorer (ThumbnailScorer): Single-image scorer.
        content_quality_scorer (ContentQualityScorer): Whole-post scorer.
        frame_count (int): Frames sampled per video. Defaults to 10.

    Example Usage:
    ---------------
    >>> orchestrator = AnalysisOrchestrator.from_config()
    >>> media = MediaRecord(id="1789", media_type=MediaType.VIDEO, caption="New drop")
    >>> result = await orchestrator.analyze(video_bytes, media)
    >>> await orchestrator.close()
    """

    def __init__(
        self,
        transcriber: Transcriber,
        frame_extractor: FrameExtractor,
        hook_scorer: HookScorer,
        thumbnail_scorer: ThumbnailScorer,
        content_quality_scorer: ContentQualityScorer,
        frame_count: int = 10,
    ):
        self.transcriber = transcriber
        self.frame_extractor = frame_extractor
        self.hook_scorer = hook_scorer
        self.thumbnail_scorer = thumbnail_scorer
        self.content_quality_scorer = content_quality_scorer
        self.frame_count = frame_count

    @classmethod
    def from_config(
        cls, config: Optional[MetaCoachConfig] = None, disable_console_log: bool = False
    ) -> "AnalysisOrchestrator":
        """Build the pipeline and its providers from environment configuration."""
        if not disable_console_log:
            log_manager.enable_console()

        config = config or MetaCoachConfig()
        vision_provider = provider_factory.create_vision_provider(config=config)
        transcription_provider = provider_factory.create_transcription_provider(config=config)

        return cls(
            transcriber=Transcriber(transcription_provider, language=config.openai.transcription_language),
            frame_extractor=FrameExtractor(config=config.frames),
            hook_scorer=HookScorer(vision_provider),
            thumbnail_scorer=ThumbnailScorer(vision_provider),
            content_quality_scorer=ContentQualityScorer(vision_provider),
            frame_count=config.frames.default_frame_count,
        )

    async def __call__(self, media_bytes: bytes, media: MediaRecord) -> AnalysisResult:
        return await self.analyze(media_bytes, media)

    @log_exceptions(log_level="ERROR", include_traceback=False, custom_message="[AI Analysis] Error analyzing media")
    async def analyze(self, media_bytes: bytes, media: MediaRecord) -> AnalysisResult:
        """
        Analyze one media item.

        Args:
            media_bytes: Complete media file contents
            media: The post the bytes belong to

        Returns:
            AnalysisResult stamped with completion time and elapsed milliseconds

        Raises:
            ExternalToolMissing, FrameExtractionError, TranscriptionError,
            ScoringError: VIDEO stage failures
        """
        start = time.perf_counter()
        logger.info(f"[AI Analysis] Starting analysis for {media.media_type.value} media: {media.id}")

        fields: Dict[str, Any] = {
            "media_id": media.id,
            "media_type": media.media_type,
            "timestamp": media.timestamp or datetime.now(timezone.utc).isoformat(),
        }

        if media.media_type == MediaType.VIDEO:
            fields.update(await self._analyze_video(media_bytes, media))
        elif media.media_type == MediaType.IMAGE:
            fields.update(await self._analyze_image(media_bytes, media))
        elif media.media_type == MediaType.CAROUSEL_ALBUM:
            fields.update(await self._analyze_carousel(media_bytes, media))

        processing_time_ms = int((time.perf_counter() - start) * 1000)
        logger.info(f"[AI Analysis] Complete in {processing_time_ms}ms")

        return AnalysisResult(
            **fields,
            analyzed_at=datetime.now(timezone.utc),
            processing_time_ms=processing_time_ms,
        )

    async def _analyze_video(self, video_bytes: bytes, media: MediaRecord) -> Dict[str, Any]:
        logger.info("[AI Analysis] Processing video...")

        transcript = await self.transcriber.transcribe(video_bytes)
        frames = await self.frame_extractor.extract_frames(video_bytes, count=self.frame_count)

        hook_analysis = await self.hook_scorer.score(
            frames[:HOOK_FRAME_WINDOW], ScoringContext(transcript=transcript.text)
        )
        content_quality = await self.content_quality_scorer.score(
            frames, ScoringContext(transcript=transcript.text, caption=media.caption)
        )

        return {
            "transcript": transcript,
            "hook_analysis": hook_analysis,
            "content_quality": content_quality,
        }

    async def _analyze_image(self, image_bytes: bytes, media: MediaRecord) -> Dict[str, Any]:
        logger.info("[AI Analysis] Processing image...")
        image = [Frame(index=0, data=image_bytes)]
        context = ScoringContext(caption=media.caption)
        fields: Dict[str, Any] = {"stage_errors": {}}

        try:
            fields["thumbnail_analysis"] = await self.thumbnail_scorer.score(image, context)
        except ScoringError as e:
            logger.warning(f"[AI Analysis] Thumbnail stage failed for {media.id}, continuing: {e}")
            fields["stage_errors"]["thumbnail_analysis"] = str(e)

        try:
            fields["content_quality"] = await self.content_quality_scorer.score(image, context)
        except ScoringError as e:
            logger.warning(f"[AI Analysis] Content quality stage failed for {media.id}, continuing: {e}")
            fields["stage_errors"]["content_quality"] = str(e)

        return fields

    async def _analyze_carousel(self, image_bytes: bytes, media: MediaRecord) -> Dict[str, Any]:
        logger.info("[AI Analysis] Processing carousel album...")
        image = [Frame(index=0, data=image_bytes)]

        try:
            thumbnail = await self.thumbnail_scorer.score(image, ScoringContext(caption=media.caption))
        except ScoringError as e:
            logger.warning(f"[AI Analysis] Thumbnail stage failed for {media.id}: {e}")
            return {"stage_errors": {"thumbnail_analysis": str(e)}}
        return {"thumbnail_analysis": thumbnail}

    async def close(self):
        """Close the providers held by the scorers and transcriber."""
        providers = {id(p): p for p in (
            self.transcriber.provider,
            self.hook_scorer.provider,
            self.thumbnail_scorer.provider,
            self.content_quality_scorer.provider,
        )}
        for provider in providers.values():
            await provider.close()
