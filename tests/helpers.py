import base64
import json
from typing import Callable, List

import httpx

IMAGE_BYTES = b"\x89PNG\r\n\x1a\nnot-really-a-png"
IMAGE_BASE64 = base64.b64encode(IMAGE_BYTES).decode()
PNG_DATA_URL = f"data:image/png;base64,{IMAGE_BASE64}"
JPEG_DATA_URL = f"data:image/jpeg;base64,{IMAGE_BASE64}"


def gemini_answer(text: str) -> dict:
    """Gemini generateContent response carrying `text` as the answer."""
    return {"candidates": [{"content": {"parts": [{"text": text}], "role": "model"}}]}


class RecordingTransport(httpx.MockTransport):
    """MockTransport that remembers every request it handled."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]):
        self.requests: List[httpx.Request] = []

        def record(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(record)

    def json_bodies(self) -> List[dict]:
        return [json.loads(request.content) for request in self.requests]
