from .core.analysis_orchestrator import AnalysisOrchestrator
from .core.frame_extraction import FfmpegFrameDecoder, FrameDecoder, FrameExtractor, FrameSamplingSpec
from .core.models import (
    AnalysisResult,
    ContentQuality,
    Frame,
    HookAnalysis,
    MediaRecord,
    MediaType,
    ThumbnailAnalysis,
    Transcript,
    VideoMetadata,
)
from .core.scoring import ContentQualityScorer, HookScorer, ScoringContext, ThumbnailScorer
from .core.transcription import Transcriber

__all__ = [
    "AnalysisOrchestrator",
    "FrameDecoder",
    "FfmpegFrameDecoder",
    "FrameExtractor",
    "FrameSamplingSpec",
    "Transcriber",
    "HookScorer",
    "ThumbnailScorer",
    "ContentQualityScorer",
    "ScoringContext",
    "MediaRecord",
    "MediaType",
    "Frame",
    "Transcript",
    "HookAnalysis",
    "ThumbnailAnalysis",
    "ContentQuality",
    "AnalysisResult",
    "VideoMetadata",
]
