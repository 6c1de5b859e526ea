from typing import Dict, List, Optional, Type

from loguru import logger

from ..config.settings import MetaCoachConfig
from ..exceptions import ConfigurationException
from .base import TranscriptionProvider, VisionProvider
from .openai_providers import OpenAITranscriptionProvider, OpenAIVisionProvider


class ProviderFactory:
    """Factory class for creating provider instances."""

    _vision_providers: Dict[str, Type[VisionProvider]] = {
        'openai': OpenAIVisionProvider,
    }

    _transcription_providers: Dict[str, Type[TranscriptionProvider]] = {
        'openai': OpenAITranscriptionProvider,
    }

    @classmethod
    def create_vision_provider(
        cls, provider_name: Optional[str] = None, config: Optional[MetaCoachConfig] = None
    ) -> VisionProvider:
        """
        Create vision provider instance.

        Args:
            provider_name: Name of the provider (optional, defaults to config)
            config: Application configuration (optional, loaded from the environment)

        Returns:
            VisionProvider instance

        Raises:
            ConfigurationException: If provider is not supported or its API key is missing
        """
        config = config or MetaCoachConfig()
        if provider_name is None:
            provider_name = config.vision_provider

        if provider_name not in cls._vision_providers:
            raise ConfigurationException(
                f"Unknown vision provider: {provider_name}. "
                f"Supported providers: {list(cls._vision_providers.keys())}"
            )

        provider_class = cls._vision_providers[provider_name]
        logger.info(f"Creating vision provider: {provider_name}")
        return provider_class(config.openai.model_dump())

    @classmethod
    def create_transcription_provider(
        cls, provider_name: Optional[str] = None, config: Optional[MetaCoachConfig] = None
    ) -> TranscriptionProvider:
        """
        Create transcription provider instance.

        Args:
            provider_name: Name of the provider (optional, defaults to config)
            config: Application configuration (optional, loaded from the environment)

        Returns:
            TranscriptionProvider instance

        Raises:
            ConfigurationException: If provider is not supported or its API key is missing
        """
        config = config or MetaCoachConfig()
        if provider_name is None:
            provider_name = config.transcription_provider

        if provider_name not in cls._transcription_providers:
            raise ConfigurationException(
                f"Unknown transcription provider: {provider_name}. "
                f"Supported providers: {list(cls._transcription_providers.keys())}"
            )

        provider_class = cls._transcription_providers[provider_name]
        logger.info(f"Creating transcription provider: {provider_name}")
        return provider_class(config.openai.model_dump())

    @classmethod
    def get_supported_providers(cls) -> Dict[str, List[str]]:
        """Get list of supported providers for each service type."""
        return {
            'vision': list(cls._vision_providers.keys()),
            'transcription': list(cls._transcription_providers.keys()),
        }


provider_factory = ProviderFactory()
