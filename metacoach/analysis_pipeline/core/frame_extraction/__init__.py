from .base_decoder import FrameDecoder, FrameSamplingSpec
from .ffmpeg_decoder import FfmpegFrameDecoder
from .frame_extractor import FrameExtractor

__all__ = ["FrameDecoder", "FrameSamplingSpec", "FfmpegFrameDecoder", "FrameExtractor"]
