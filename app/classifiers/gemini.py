import logging
from typing import Optional
import httpx
from app.classifiers.base import ClassificationProvider
from app.classifiers.parsing import parse_classification, parse_presence
from app.classifiers.prompts import build_classification_prompt, build_presence_prompt
from app.dependencies import (
    API_KEY_PLACEHOLDER,
    GEMINI_API_URL,
    RELAY_URL,
    extract_image_data,
    merge_generation_config,
)
from app.errors import TransportError, UpstreamError
from app.models import ClassificationResult
from app.models.gemini import GeminiRequest, extract_answer_text

logger = logging.getLogger(__name__)


class GeminiTrashClassifier(ClassificationProvider):
    """Classifies waste images with Gemini, either through the relay (the
    credential stays on the server) or directly with a local API key."""

    name = "gemini"

    def __init__(
        self,
        api_key: Optional[str] = None,
        use_relay: bool = True,
        relay_url: str = RELAY_URL,
        api_url: str = GEMINI_API_URL,
        generation_config: Optional[dict] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.api_key = api_key
        self.use_relay = use_relay
        self.api_url = relay_url if use_relay else api_url
        self.generation_config = merge_generation_config(generation_config)
        self._http_client = http_client

    def is_configured(self) -> bool:
        """When using the relay the API key is managed on the server"""
        if self.use_relay:
            return True
        return bool(self.api_key) and self.api_key != API_KEY_PLACEHOLDER

    # region: request
    def build_request(self, prompt: str, image: str) -> GeminiRequest:
        payload = extract_image_data(image)
        return GeminiRequest.from_prompt(prompt, payload, self.generation_config)

    async def _post(self, client: httpx.AsyncClient, body: dict) -> httpx.Response:
        # the relay injects the key itself, never send it from here
        params = None if self.use_relay else {"key": self.api_key}
        return await client.post(self.api_url, params=params, json=body)

    async def _generate(self, prompt: str, image: str) -> str:
        """Send prompt + image and return the text of the model's answer"""
        body = self.build_request(prompt, image).to_payload()
        try:
            if self._http_client is not None:
                response = await self._post(self._http_client, body)
            else:
                async with httpx.AsyncClient() as client:
                    response = await self._post(client, body)
        except httpx.HTTPError as e:
            logger.error(f"Error calling Gemini at {self.api_url}: {e!r}")
            raise TransportError(str(e) or e.__class__.__name__, e) from e

        if not response.is_success:
            message = _error_message(response)
            logger.error(f"Gemini API error ({response.status_code}): {message}")
            raise UpstreamError(response.status_code, f"Gemini API error: {message}")

        try:
            data = response.json()
        except ValueError as e:
            raise TransportError(f"Invalid JSON in Gemini response: {e}", e) from e
        return extract_answer_text(data)

    # endregion: request

    async def check_presence(self, image: str) -> bool:
        text = await self._generate(build_presence_prompt(), image)
        return parse_presence(text)

    async def classify(self, image: str) -> ClassificationResult:
        text = await self._generate(build_classification_prompt(), image)
        logger.info(f"Gemini response: {text}")
        return parse_classification(text)


def _error_message(response: httpx.Response) -> str:
    """Pull the error message out of a Gemini error body ({"error": {"message"}})
    or a relay error body ({"error", "message"}), else the reason phrase"""
    try:
        data = response.json()
    except ValueError:
        return response.reason_phrase
    if isinstance(data, dict):
        error = data.get("error")
        if isinstance(error, dict) and error.get("message"):
            return error["message"]
        if data.get("message"):
            return data["message"]
    return response.reason_phrase
