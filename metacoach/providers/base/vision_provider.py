from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional


class VisionProvider(ABC):
    """Abstract base class for vision-capable chat providers."""

    @abstractmethod
    async def analyze_images(
        self,
        prompt: str,
        images: List[bytes],
        system_prompt: Optional[str] = None,
        detail: str = "high",
        **kwargs
    ) -> Dict[str, Any]:
        """Send a text prompt plus inline images and return the completion."""
        pass

    @abstractmethod
    async def close(self):
        """Close the provider and cleanup resources."""
        pass
