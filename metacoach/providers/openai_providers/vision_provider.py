import base64
from typing import Any, Dict, List, Optional

from loguru import logger
from openai import AsyncOpenAI

from metacoach.exceptions import ConfigurationException, ProviderException
from metacoach.providers.base import VisionProvider
from metacoach.utils.cost import estimate_cost
from metacoach.utils.error_handler import convert_exceptions


class OpenAIVisionProvider(VisionProvider):
    """OpenAI chat-completions provider for prompts with inline images."""

    def __init__(self, config: Dict[str, Any], client: Optional[AsyncOpenAI] = None):
        self.config = config
        self.client = client or self._initialize_client()

    def _initialize_client(self) -> AsyncOpenAI:
        """Initialize OpenAI client."""
        api_key = self.config.get("api_key")
        if not api_key:
            raise ConfigurationException("Missing OPENAI_API_KEY: OpenAI API key is required")

        try:
            return AsyncOpenAI(
                api_key=api_key,
                timeout=self.config.get("timeout", 200),
                max_retries=self.config.get("max_retries", 0)
            )
        except Exception as e:
            raise ProviderException(f"Failed to initialize OpenAI client: {e}")

    @staticmethod
    def _image_part(image: bytes, detail: str) -> Dict[str, Any]:
        image_base64 = base64.b64encode(image).decode("utf-8")
        return {
            "type": "image_url",
            "image_url": {
                "url": f"data:image/jpeg;base64,{image_base64}",
                "detail": detail,
            },
        }

    def build_messages(
        self,
        prompt: str,
        images: List[bytes],
        system_prompt: Optional[str] = None,
        detail: str = "high",
    ) -> List[Dict[str, Any]]:
        messages: List[Dict[str, Any]] = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append(
            {
                "role": "user",
                "content": [{"type": "text", "text": prompt}]
                + [self._image_part(image, detail) for image in images],
            }
        )
        return messages

    @convert_exceptions({Exception: ProviderException})
    async def analyze_images(
        self,
        prompt: str,
        images: List[bytes],
        system_prompt: Optional[str] = None,
        detail: str = "high",
        **kwargs
    ) -> Dict[str, Any]:
        """Run one chat completion over the prompt and images."""
        completion_kwargs: Dict[str, Any] = {
            "model": kwargs.get("model", self.config.get("vision_model", "gpt-4o")),
            "messages": self.build_messages(prompt, images, system_prompt, detail),
            "max_tokens": kwargs.get("max_tokens", 1000),
        }
        temperature = kwargs.get("temperature", self.config.get("temperature"))
        if temperature is not None:
            completion_kwargs["temperature"] = temperature

        logger.debug(f"OpenAI vision request: model={completion_kwargs['model']}, images={len(images)}")
        try:
            response = await self.client.chat.completions.create(**completion_kwargs)
        except Exception as e:
            logger.error(f"OpenAI vision completion failed: {e}")
            raise ProviderException(
                f"OpenAI vision completion failed: {e}",
                error_code="PROVIDER_ERROR",
                details={"provider": "openai", "original_exception": type(e).__name__},
            ) from e

        usage = response.usage.model_dump() if response.usage else None
        cost = None
        if usage:
            cost = estimate_cost(
                completion_kwargs["model"], usage.get("prompt_tokens", 0), usage.get("completion_tokens", 0)
            )
            logger.debug(f"OpenAI vision usage: {usage.get('total_tokens')} tokens, ~${cost:.4f}")

        return {
            "content": response.choices[0].message.content or "",
            "model": response.model,
            "usage": usage,
            "estimated_cost": cost,
        }

    async def close(self):
        """Close the vision client and cleanup resources."""
        if self.client:
            logger.info("Closing OpenAI vision client")
            await self.client.close()
