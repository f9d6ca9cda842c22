import base64
import logging

from google import genai
from google.genai import errors as genai_errors
from google.genai import types

from thumbnail_api.errors import GenerationError, NoContent, NoImageData

logger = logging.getLogger(__name__)


def extract_image_bytes(response) -> bytes:
    """
    Return the first inline image payload of a generate_content response.

    Parts are scanned in order; text parts are skipped.
    """
    candidates = getattr(response, "candidates", None) or []
    content = getattr(candidates[0], "content", None) if candidates else None
    parts = getattr(content, "parts", None) if content else None
    if not parts:
        raise NoContent()

    for part in parts:
        inline_data = getattr(part, "inline_data", None)
        data = getattr(inline_data, "data", None) if inline_data else None
        if not data:
            continue
        # the SDK decodes base64 for us, raw REST payloads arrive as text
        if isinstance(data, str):
            return base64.b64decode(data)
        return bytes(data)

    raise NoImageData()


class GeminiImageGenerator:
    def __init__(self, client, model="gemini-3-pro-image-preview"):
        self.client = client
        self.model = model

    @classmethod
    def from_api_key(cls, api_key, model):
        if not api_key:
            raise GenerationError("GEMINI_API_KEY is not configured")
        return cls(genai.Client(api_key=api_key), model)

    def generate(self, prompt: str) -> bytes:
        logger.info("Requesting image from Gemini", extra={"model": self.model})
        try:
            response = self.client.models.generate_content(
                model=self.model,
                contents=[types.Content(role="user", parts=[types.Part(text=prompt)])],
            )
        except genai_errors.APIError as e:
            logger.error("Gemini request failed", extra={"model": self.model}, exc_info=True)
            raise GenerationError(f"Gemini request failed: {e}") from e

        image = extract_image_bytes(response)
        logger.info("Received image from Gemini", extra={"size_bytes": len(image)})
        return image
