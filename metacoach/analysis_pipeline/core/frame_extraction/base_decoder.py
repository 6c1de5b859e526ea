from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional

from metacoach.analysis_pipeline.core.models import VideoMetadata


@dataclass(frozen=True)
class FrameSamplingSpec:
    """
    How a decoder should sample a video.

    fps:
        Output frame rate handed to the decoder's fps filter. Evenly spaced
        extraction uses count / duration, fixed cadence uses 1 / interval.
    quality:
        Encoder quality scale, 1-31, lower is higher fidelity.
    max_frames:
        Upper bound on returned frames, or None for no bound.
    """
    fps: float
    quality: int = 2
    max_frames: Optional[int] = None

    @classmethod
    def evenly_spaced(cls, count: int, duration: float, quality: int = 2) -> "FrameSamplingSpec":
        return cls(fps=count / duration, quality=quality, max_frames=count)

    @classmethod
    def fixed_interval(cls, interval_seconds: float, quality: int = 2) -> "FrameSamplingSpec":
        return cls(fps=1.0 / interval_seconds, quality=quality)


class FrameDecoder(ABC):
    """Capability interface over an external video decode/probe toolchain.

    Output files are written next to the input video, so callers own cleanup
    by owning the input's directory.
    """

    @abstractmethod
    def ensure_available(self) -> None:
        """Raise ExternalToolMissing if the toolchain cannot be resolved."""
        pass

    @abstractmethod
    async def probe_duration(self, video_path: str) -> float:
        """Return the container duration in seconds."""
        pass

    @abstractmethod
    async def probe_metadata(self, video_path: str) -> VideoMetadata:
        """Return duration, dimensions, frame rate and codec of the first video stream."""
        pass

    @abstractmethod
    async def extract_frames(self, video_path: str, spec: FrameSamplingSpec) -> List[str]:
        """Decode frames per spec and return their paths in sequence order."""
        pass

    @abstractmethod
    async def extract_single_frame(self, video_path: str, at_seconds: float, quality: int) -> str:
        """Decode one frame at the given position and return its path."""
        pass

    @abstractmethod
    async def render_preview_gif(self, video_path: str, duration: float, fps: int, width: int) -> str:
        """Render the opening seconds as an animated GIF and return its path."""
        pass
