"""Provider system for MetaCoach."""

from .base import TranscriptionProvider, VisionProvider
from .factory import ProviderFactory, provider_factory
from .openai_providers import OpenAITranscriptionProvider, OpenAIVisionProvider

__all__ = [
    # Base classes
    'VisionProvider',
    'TranscriptionProvider',
    # Factory
    'ProviderFactory',
    'provider_factory',
    # OpenAI providers
    'OpenAIVisionProvider',
    'OpenAITranscriptionProvider',
]
