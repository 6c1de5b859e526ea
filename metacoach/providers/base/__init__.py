from .transcription_provider import TranscriptionProvider
from .vision_provider import VisionProvider

__all__ = [
    'TranscriptionProvider',
    'VisionProvider',
]
