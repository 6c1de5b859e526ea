import asyncio
import os
import re
import shutil
from typing import Any, Dict, List, Sequence

import ffmpeg
from loguru import logger

from metacoach.analysis_pipeline.core.frame_extraction.base_decoder import FrameDecoder, FrameSamplingSpec
from metacoach.analysis_pipeline.core.models import VideoMetadata
from metacoach.analysis_pipeline.utils.helper import run_command
from metacoach.exceptions import ExternalToolMissing, FrameExtractionError

FRAME_PREFIX = "frame-"
FRAME_PATTERN = FRAME_PREFIX + "%03d.jpg"
SINGLE_FRAME_NAME = "frame.jpg"
PREVIEW_GIF_NAME = "preview.gif"

_FRAME_NUMBER = re.compile(rf"^{FRAME_PREFIX}(\d+)\.jpg$")


def parse_frame_rate(rate: str) -> float:
    """Parse an ffprobe rational such as '30000/1001' into frames per second."""
    if not rate:
        return 0.0
    if "/" in rate:
        num, den = rate.split("/", 1)
        den_value = float(den)
        return float(num) / den_value if den_value else float(num)
    return float(rate)


def parse_probe_metadata(probe: Dict[str, Any]) -> VideoMetadata:
    """Build VideoMetadata from ffprobe JSON output."""
    streams = [s for s in probe.get("streams", []) if s.get("codec_type", "video") == "video"]
    if not streams:
        raise FrameExtractionError("No video stream found in probe output")
    stream = streams[0]
    fmt = probe.get("format", {})

    try:
        duration = float(fmt.get("duration") or 0)
    except ValueError:
        duration = 0.0
    fps = parse_frame_rate(stream.get("r_frame_rate", ""))

    return VideoMetadata(
        duration=duration,
        width=int(stream.get("width") or 0),
        height=int(stream.get("height") or 0),
        fps=fps or 30.0,
        codec=stream.get("codec_name") or "unknown",
    )


def list_frame_files(directory: str) -> List[str]:
    """Return extracted frame paths in sequence-number order."""
    numbered = []
    for name in os.listdir(directory):
        match = _FRAME_NUMBER.match(name)
        if match:
            numbered.append((int(match.group(1)), name))
    return [os.path.join(directory, name) for _, name in sorted(numbered)]


class FfmpegFrameDecoder(FrameDecoder):
    """FrameDecoder backed by the ffmpeg and ffprobe binaries."""

    def __init__(self, ffmpeg_binary: str = "ffmpeg", ffprobe_binary: str = "ffprobe"):
        self.ffmpeg_binary = ffmpeg_binary
        self.ffprobe_binary = ffprobe_binary

    def ensure_available(self) -> None:
        for binary in (self.ffmpeg_binary, self.ffprobe_binary):
            if shutil.which(binary) is None:
                raise ExternalToolMissing(binary)

    # ------------------------------------------------------------------
    # Metadata helpers
    # ------------------------------------------------------------------
    async def _probe(self, video_path: str, **kwargs) -> Dict[str, Any]:
        try:
            return await asyncio.to_thread(ffmpeg.probe, video_path, cmd=self.ffprobe_binary, **kwargs)
        except ffmpeg.Error as e:
            stderr = (e.stderr or b"").decode(errors="replace").strip()
            raise FrameExtractionError(
                f"ffprobe failed for {video_path}: {stderr}",
                error_code="PROBE_FAILED",
                details={"stderr": stderr},
            ) from e

    async def probe_duration(self, video_path: str) -> float:
        probe = await self._probe(video_path)
        duration = float(probe["format"]["duration"])
        logger.info(f"Video duration: {duration:.2f} seconds")
        return duration

    async def probe_metadata(self, video_path: str) -> VideoMetadata:
        probe = await self._probe(video_path, select_streams="v:0")
        return parse_probe_metadata(probe)

    # ------------------------------------------------------------------
    # Command builders
    # ------------------------------------------------------------------
    def build_extract_frames_command(self, video_path: str, spec: FrameSamplingSpec) -> List[str]:
        output_pattern = os.path.join(os.path.dirname(video_path), FRAME_PATTERN)
        stream = ffmpeg.input(video_path).filter("fps", fps=spec.fps)
        output_kwargs: Dict[str, Any] = {"q:v": spec.quality}
        if spec.max_frames is not None:
            output_kwargs["frames:v"] = spec.max_frames
        return (
            stream.output(output_pattern, **output_kwargs)
            .global_args("-hide_banner", "-loglevel", "error")
            .overwrite_output()
            .compile(cmd=self.ffmpeg_binary)
        )

    def build_single_frame_command(self, video_path: str, at_seconds: float, quality: int) -> List[str]:
        output_path = os.path.join(os.path.dirname(video_path), SINGLE_FRAME_NAME)
        return (
            ffmpeg.input(video_path, ss=at_seconds)
            .output(output_path, vframes=1, **{"q:v": quality})
            .global_args("-hide_banner", "-loglevel", "error")
            .overwrite_output()
            .compile(cmd=self.ffmpeg_binary)
        )

    def build_preview_gif_command(self, video_path: str, duration: float, fps: int, width: int) -> List[str]:
        output_path = os.path.join(os.path.dirname(video_path), PREVIEW_GIF_NAME)
        return (
            ffmpeg.input(video_path, t=duration)
            .filter("fps", fps=fps)
            .filter("scale", width, -1, flags="lanczos")
            .output(output_path, gifflags="+transdiff")
            .global_args("-hide_banner", "-loglevel", "error")
            .overwrite_output()
            .compile(cmd=self.ffmpeg_binary)
        )

    async def _run(self, command: Sequence[str], description: str) -> None:
        returncode, _, stderr = await run_command(command, description)
        if returncode != 0:
            raise FrameExtractionError(
                f"{description} failed: {stderr or f'exit code {returncode}'}",
                error_code="DECODER_FAILED",
                details={"stderr": stderr, "returncode": returncode},
            )

    # ------------------------------------------------------------------
    # Decoding
    # ------------------------------------------------------------------
    async def extract_frames(self, video_path: str, spec: FrameSamplingSpec) -> List[str]:
        await self._run(self.build_extract_frames_command(video_path, spec), "Frame extraction")
        return list_frame_files(os.path.dirname(video_path))

    async def extract_single_frame(self, video_path: str, at_seconds: float, quality: int) -> str:
        await self._run(
            self.build_single_frame_command(video_path, at_seconds, quality),
            f"Single frame extraction at {at_seconds}s",
        )
        return os.path.join(os.path.dirname(video_path), SINGLE_FRAME_NAME)

    async def render_preview_gif(self, video_path: str, duration: float, fps: int, width: int) -> str:
        await self._run(
            self.build_preview_gif_command(video_path, duration, fps, width),
            "Preview GIF rendering",
        )
        return os.path.join(os.path.dirname(video_path), PREVIEW_GIF_NAME)
