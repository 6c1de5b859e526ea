import math
import os
from typing import List, Optional

from loguru import logger

from metacoach.analysis_pipeline.core.frame_extraction.base_decoder import FrameDecoder, FrameSamplingSpec
from metacoach.analysis_pipeline.core.frame_extraction.ffmpeg_decoder import FfmpegFrameDecoder
from metacoach.analysis_pipeline.core.models import Frame, VideoMetadata
from metacoach.analysis_pipeline.utils.helper import read_all, read_bytes, temporary_workspace, write_bytes
from metacoach.config.settings import FrameExtractionConfig
from metacoach.exceptions import FrameExtractionError
from metacoach.utils.error_handler import convert_exceptions

INPUT_VIDEO_NAME = "input.mp4"
HOOK_FRAME_COUNT = 5


class FrameExtractor:
    """
    Extracts still frames and metadata from in-memory video bytes.

    Every call writes the video into its own temporary workspace, hands the
    path to a FrameDecoder and removes the workspace on every exit path.

    Attributes:
        decoder (FrameDecoder): Decode/probe backend. Defaults to ffmpeg.
        config (FrameExtractionConfig): Sampling defaults and the duration
            assumed when probing fails.

    Example Usage:
    ---------------
    >>> extractor = FrameExtractor()
    >>> frames = await extractor.extract_frames(video_bytes, count=5)
    """

    def __init__(
        self,
        decoder: Optional[FrameDecoder] = None,
        config: Optional[FrameExtractionConfig] = None,
    ):
        self.config = config or FrameExtractionConfig()
        self.decoder = decoder or FfmpegFrameDecoder(
            ffmpeg_binary=self.config.ffmpeg_binary,
            ffprobe_binary=self.config.ffprobe_binary,
        )

    def _validate_quality(self, quality: Optional[int]) -> int:
        quality = self.config.default_quality if quality is None else quality
        if not 1 <= quality <= 31:
            raise ValueError(f"quality must be between 1 and 31, got {quality}")
        return quality

    async def _resolve_duration(self, video_path: str) -> float:
        """Probe the duration, assuming the configured fallback when probing fails."""
        fallback = self.config.fallback_duration_seconds
        try:
            duration = await self.decoder.probe_duration(video_path)
        except (FrameExtractionError, KeyError, ValueError, OSError) as e:
            logger.warning(f"[Video Utils] Could not determine video duration ({e}); assuming {fallback}s")
            return fallback
        if not math.isfinite(duration) or duration <= 0:
            logger.warning(f"[Video Utils] Invalid video duration {duration}; assuming {fallback}s")
            return fallback
        return duration

    @convert_exceptions({OSError: FrameExtractionError})
    async def extract_frames(
        self,
        video_bytes: bytes,
        count: Optional[int] = None,
        interval_seconds: Optional[float] = None,
        quality: Optional[int] = None,
    ) -> List[Frame]:
        """
        Extract frames either evenly spaced across the video or at a fixed cadence.

        Args:
            video_bytes: Complete video file contents
            count: Number of evenly spaced frames (default from config, 10)
            interval_seconds: Take one frame every N seconds instead of `count`
            quality: Encoder quality, 1-31, lower is better (default 2)

        Returns:
            List[Frame]: Frames ordered by position in the video

        Raises:
            ExternalToolMissing: If ffmpeg/ffprobe is not on PATH
            FrameExtractionError: If the decoder fails or yields no frames
        """
        if count is not None and interval_seconds is not None:
            raise ValueError("Specify either count or interval_seconds, not both")
        if interval_seconds is not None and interval_seconds <= 0:
            raise ValueError(f"interval_seconds must be positive, got {interval_seconds}")
        if interval_seconds is None:
            count = self.config.default_frame_count if count is None else count
            if count < 1:
                raise ValueError(f"count must be at least 1, got {count}")
        quality = self._validate_quality(quality)

        self.decoder.ensure_available()

        async with temporary_workspace(self.config.temp_dir_prefix) as workspace:
            video_path = await write_bytes(os.path.join(workspace, INPUT_VIDEO_NAME), video_bytes)

            if interval_seconds is not None:
                spec = FrameSamplingSpec.fixed_interval(interval_seconds, quality=quality)
            else:
                duration = await self._resolve_duration(video_path)
                spec = FrameSamplingSpec.evenly_spaced(count, duration, quality=quality)

            frame_paths = await self.decoder.extract_frames(video_path, spec)
            if spec.max_frames is not None:
                frame_paths = frame_paths[:spec.max_frames]
            if not frame_paths:
                raise FrameExtractionError("Decoder produced no frames", error_code="NO_FRAMES")

            frame_data = await read_all(frame_paths)

        logger.info(f"[Video Utils] Extracted {len(frame_data)} frames at {spec.fps:.3f} fps")
        return [
            Frame(index=i, data=data, timestamp=i / spec.fps)
            for i, data in enumerate(frame_data)
        ]

    @convert_exceptions({OSError: FrameExtractionError})
    async def extract_single_frame(
        self, video_bytes: bytes, at_seconds: float = 0.0, quality: Optional[int] = None
    ) -> Frame:
        """Extract one frame at `at_seconds`."""
        if at_seconds < 0:
            raise ValueError(f"at_seconds must not be negative, got {at_seconds}")
        quality = self._validate_quality(quality)

        self.decoder.ensure_available()

        async with temporary_workspace(self.config.temp_dir_prefix) as workspace:
            video_path = await write_bytes(os.path.join(workspace, INPUT_VIDEO_NAME), video_bytes)
            frame_path = await self.decoder.extract_single_frame(video_path, at_seconds, quality)
            if not os.path.exists(frame_path):
                raise FrameExtractionError(
                    f"Failed to extract frame at {at_seconds}s: no output produced",
                    error_code="NO_FRAMES",
                )
            data = await read_bytes(frame_path)

        return Frame(index=0, data=data, timestamp=at_seconds)

    async def extract_thumbnail(self, video_bytes: bytes, quality: Optional[int] = None) -> Frame:
        """First frame of the video."""
        return await self.extract_single_frame(video_bytes, 0.0, quality)

    async def extract_hook_frames(self, video_bytes: bytes) -> List[Frame]:
        return await self.extract_frames(video_bytes, count=HOOK_FRAME_COUNT)

    @convert_exceptions({OSError: FrameExtractionError})
    async def get_video_metadata(self, video_bytes: bytes) -> VideoMetadata:
        """Probe duration, dimensions, frame rate and codec."""
        self.decoder.ensure_available()

        async with temporary_workspace(self.config.temp_dir_prefix) as workspace:
            video_path = await write_bytes(os.path.join(workspace, INPUT_VIDEO_NAME), video_bytes)
            return await self.decoder.probe_metadata(video_path)

    @convert_exceptions({OSError: FrameExtractionError})
    async def generate_preview_gif(
        self, video_bytes: bytes, duration: float = 3, fps: int = 10, width: int = 320
    ) -> bytes:
        """Render the first `duration` seconds as an animated GIF."""
        self.decoder.ensure_available()

        async with temporary_workspace(self.config.temp_dir_prefix) as workspace:
            video_path = await write_bytes(os.path.join(workspace, INPUT_VIDEO_NAME), video_bytes)
            gif_path = await self.decoder.render_preview_gif(video_path, duration, fps, width)
            return await read_bytes(gif_path)
