import os
from typing import Any, Dict, List, Optional

from metacoach.analysis_pipeline import (
    AnalysisOrchestrator,
    ContentQualityScorer,
    FrameExtractor,
    HookScorer,
    ThumbnailScorer,
    Transcriber,
)
from metacoach.analysis_pipeline.core.frame_extraction.base_decoder import FrameDecoder, FrameSamplingSpec
from metacoach.analysis_pipeline.core.models import VideoMetadata
from metacoach.config.settings import FrameExtractionConfig
from metacoach.exceptions import ExternalToolMissing, FrameExtractionError, ProviderException
from metacoach.providers.base import TranscriptionProvider, VisionProvider

HOOK_REPLY = """Score: 72

Strengths:
1. Strength: clear subject in the opening shot
2. Strength: bright colors create visual impact

Weaknesses:
- Text overlay appears too late, a clear weakness

Recommendations:
- Recommendation: add a question in the first second
- Recommendation: tighten the first cut
"""

THUMBNAIL_REPLY = """Clarity: 80
Composition: 70
Attention: 90

- Recommendation: crop tighter on the product
"""

CONTENT_REPLY = """Visual Appeal: 85
Engagement: 70
Relevance: 90

Suggestions:
1. Suggestion: add captions for silent viewing
2. Suggestion: end with a call to action
"""


class StubDecoder(FrameDecoder):
    """In-process decoder that writes fake JPEGs next to the input video."""

    def __init__(
        self,
        duration: Optional[float] = 10.0,
        produced: Optional[int] = None,
        available: bool = True,
        fail_probe: bool = False,
        fail_decode: bool = False,
    ):
        self.duration = duration
        self.produced = produced
        self.available = available
        self.fail_probe = fail_probe
        self.fail_decode = fail_decode
        self.workspaces: List[str] = []
        self.specs: List[FrameSamplingSpec] = []
        self.probe_calls = 0

    def ensure_available(self) -> None:
        if not self.available:
            raise ExternalToolMissing("ffmpeg")

    async def probe_duration(self, video_path: str) -> float:
        self.probe_calls += 1
        if self.fail_probe:
            raise FrameExtractionError("ffprobe failed", error_code="PROBE_FAILED")
        return self.duration

    async def probe_metadata(self, video_path: str) -> VideoMetadata:
        self.workspaces.append(os.path.dirname(video_path))
        return VideoMetadata(duration=self.duration or 0.0, width=1080, height=1920, fps=30.0, codec="h264")

    async def extract_frames(self, video_path: str, spec: FrameSamplingSpec) -> List[str]:
        workspace = os.path.dirname(video_path)
        self.workspaces.append(workspace)
        self.specs.append(spec)
        if self.fail_decode:
            raise FrameExtractionError("Frame extraction failed: corrupt input", error_code="DECODER_FAILED")

        count = self.produced if self.produced is not None else (spec.max_frames or 4)
        paths = []
        for i in range(1, count + 1):
            path = os.path.join(workspace, f"frame-{i:03d}.jpg")
            with open(path, "wb") as f:
                f.write(b"\xff\xd8jpeg-%d" % i)
            paths.append(path)
        return paths

    async def extract_single_frame(self, video_path: str, at_seconds: float, quality: int) -> str:
        workspace = os.path.dirname(video_path)
        self.workspaces.append(workspace)
        path = os.path.join(workspace, "frame.jpg")
        if not self.fail_decode:
            with open(path, "wb") as f:
                f.write(b"\xff\xd8single")
        return path

    async def render_preview_gif(self, video_path: str, duration: float, fps: int, width: int) -> str:
        workspace = os.path.dirname(video_path)
        self.workspaces.append(workspace)
        path = os.path.join(workspace, "preview.gif")
        with open(path, "wb") as f:
            f.write(b"GIF89a")
        return path


class StubVisionProvider(VisionProvider):
    """Returns canned replies chosen by system prompt keyword; records every call."""

    def __init__(self, replies: Optional[Dict[str, str]] = None, fail_on: Optional[str] = None):
        self.replies = replies or {}
        self.fail_on = fail_on
        self.calls: List[Dict[str, Any]] = []
        self.closed = False

    async def analyze_images(
        self,
        prompt: str,
        images: List[bytes],
        system_prompt: Optional[str] = None,
        detail: str = "high",
        **kwargs
    ) -> Dict[str, Any]:
        self.calls.append(
            {"prompt": prompt, "images": list(images), "system_prompt": system_prompt, "detail": detail, **kwargs}
        )
        system_prompt = system_prompt or ""
        if self.fail_on and self.fail_on in system_prompt:
            raise ProviderException("rate limited", error_code="PROVIDER_ERROR")
        for keyword, reply in self.replies.items():
            if keyword in system_prompt:
                return {"content": reply, "model": "stub", "usage": None}
        return {"content": "", "model": "stub", "usage": None}

    async def close(self):
        self.closed = True


class StubTranscriptionProvider(TranscriptionProvider):
    def __init__(self, text: str = "Hey everyone, today we are unboxing the new camera.", fail: bool = False):
        self.text = text
        self.fail = fail
        self.calls: List[Dict[str, Any]] = []
        self.closed = False

    async def transcribe(self, media_data: bytes, filename: str = "video.mp4", language: Optional[str] = None, **kwargs):
        self.calls.append({"size": len(media_data), "filename": filename, "language": language, **kwargs})
        if self.fail:
            raise ProviderException("Whisper unavailable", error_code="PROVIDER_ERROR")
        return {"text": self.text, "language": language or "en", "duration": 12.5}

    async def close(self):
        self.closed = True


DEFAULT_REPLIES = {
    "hook": HOOK_REPLY,
    "thumbnails": THUMBNAIL_REPLY,
    "content strategist": CONTENT_REPLY,
}




def build_orchestrator(decoder=None, vision=None, transcription=None, frame_count=10):
    """Wire a full pipeline around stub providers and decoder."""
    vision = vision or StubVisionProvider(DEFAULT_REPLIES)
    return AnalysisOrchestrator(
        transcriber=Transcriber(transcription or StubTranscriptionProvider()),
        frame_extractor=FrameExtractor(decoder=decoder or StubDecoder(duration=15.0), config=FrameExtractionConfig()),
        hook_scorer=HookScorer(vision),
        thumbnail_scorer=ThumbnailScorer(vision),
        content_quality_scorer=ContentQualityScorer(vision),
        frame_count=frame_count,
    )
