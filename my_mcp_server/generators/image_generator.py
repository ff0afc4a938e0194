"""Text-to-image generation through the Hugging Face inference API."""

import io
import logging
from typing import Any, Callable, Optional

from huggingface_hub import AsyncInferenceClient

from ..config.settings import HF_TOKEN_ENV, IMAGE_MODEL, get_hf_token
from ..registry.errors import ExternalServiceError

logger = logging.getLogger(__name__)


class ImageGenerator:
    """Generates PNG images from text prompts."""

    def __init__(
        self,
        model: str = IMAGE_MODEL,
        token: Optional[str] = None,
        client_factory: Callable[..., Any] = AsyncInferenceClient
    ):
        """Initialize the generator.

        Args:
            model: Text-to-image model id
            token: Access token; when None it is read from the environment
                on every call
            client_factory: Builds the async inference client
        """
        self.model = model
        self.token = token
        self.client_factory = client_factory

    async def generate_png(self, prompt: str) -> bytes:
        """Generate an image for ``prompt`` and return it as PNG bytes.

        Raises:
            ExternalServiceError: If no token is configured or the call fails
        """
        token = self.token or get_hf_token()
        if not token:
            raise ExternalServiceError(
                f"Image generation error: {HF_TOKEN_ENV} is not set"
            )

        logger.info(f"Generating image with {self.model}")
        try:
            async with self.client_factory(token=token) as client:
                image = await client.text_to_image(prompt, model=self.model)
            buffer = io.BytesIO()
            image.save(buffer, format="PNG")
        except Exception as e:
            logger.error(f"Image generation failed: {e}")
            raise ExternalServiceError(f"Image generation error: {e}") from e

        return buffer.getvalue()
