import os
import re
import base64
import binascii
from typing import AsyncIterator, Optional
import httpx
from fastapi import Request
from dotenv import load_dotenv
from app.errors import BadRequestError
from app.models.gemini import GenerationConfig, ImagePayload

load_dotenv()

# region: config
GEMINI_API_URL = os.getenv(
    "GEMINI_API_URL",
    "https://generativelanguage.googleapis.com/v1beta/models/gemini-1.5-flash:generateContent",
)
RELAY_URL = os.getenv("RELAY_URL", "http://localhost:8080/api/classify")
CLASSIFIER_PROVIDER = os.getenv("CLASSIFIER_PROVIDER", "gemini")
GEMINI_USE_RELAY = os.getenv("GEMINI_USE_RELAY", "false").lower() in ("1", "true", "yes")

API_KEY_PLACEHOLDER = "YOUR_GEMINI_API_KEY_HERE"
DEFAULT_MIME_TYPE = "image/jpeg"

DEFAULT_GENERATION_CONFIG = GenerationConfig()


def get_gemini_api_key() -> Optional[str]:
    """Read the Gemini credential from the environment.

    Looked up on every call (not at import) so a missing key only fails the
    requests that need it.
    """
    return os.environ.get("GEMINI_API_KEY") or None


def merge_generation_config(overrides: Optional[dict] = None) -> dict:
    """Merge caller supplied generation parameters over the defaults, using the
    camelCase names Gemini expects on the wire"""
    config = DEFAULT_GENERATION_CONFIG.model_dump(by_alias=True)
    if overrides:
        config.update(overrides)
    return config


# endregion: config


# region: image data
def extract_image_data(data_url: str) -> ImagePayload:
    """Split a base64 image into its MIME type and raw base64 data.

    Accepts `data:<content-type>;base64,<data>` data URLs as produced by a
    canvas capture. A string without the `data:` prefix is treated as bare
    base64 data of type image/jpeg.
    """
    # Regular expression pattern to match the content type and base64 data
    pattern = r"data:(?P<content_type>[^;,]+)?(?:;[^,]*)?,(?P<base64_data>.*)"

    match = re.match(pattern, data_url.strip(), re.DOTALL)
    if match:
        content_type = match.group("content_type") or DEFAULT_MIME_TYPE
        base64_data = match.group("base64_data")
    else:
        content_type = DEFAULT_MIME_TYPE
        base64_data = data_url.strip()

    if not base64_data:
        raise BadRequestError("Image data is empty")
    try:
        base64.b64decode(base64_data, validate=True)
    except (binascii.Error, ValueError):
        raise BadRequestError(
            f"Invalid base64 image. Example expected format: data:<content-type>/<image-format>;base64,<base64-image-data> \n Got: {data_url[:30]}..."
        )
    return ImagePayload(mime_type=content_type, data=base64_data)


# endregion: image data


# region: http client
async def get_http_client(request: Request) -> AsyncIterator[httpx.AsyncClient]:
    """Yield the shared client created in the app lifespan, or a throwaway one
    when the app was started without it"""
    client: Optional[httpx.AsyncClient] = getattr(request.app.state, "http_client", None)
    if client is not None:
        yield client
        return
    async with httpx.AsyncClient() as client:
        yield client


# endregion: http client
