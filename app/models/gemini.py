from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field


class GenerationConfig(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    temperature: float = Field(default=0.4, description="Sampling temperature")
    top_k: int = Field(default=32, alias="topK", description="Top-k sampling")
    top_p: float = Field(default=1, alias="topP", description="Nucleus sampling")
    max_output_tokens: int = Field(
        default=2048, alias="maxOutputTokens", description="Max length of the answer"
    )


class ImagePayload(BaseModel):
    mime_type: str = Field(description="MIME type of the image, e.g. image/jpeg")
    data: str = Field(description="Base64 encoded image bytes")


class Part(BaseModel):
    text: Optional[str] = None
    inline_data: Optional[ImagePayload] = None


class Content(BaseModel):
    parts: List[Part]


class GeminiRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    contents: List[Content]
    generation_config: dict = Field(alias="generationConfig")

    @classmethod
    def from_prompt(
        cls, prompt: str, image: ImagePayload, generation_config: dict
    ) -> "GeminiRequest":
        return cls(
            contents=[Content(parts=[Part(text=prompt), Part(inline_data=image)])],
            generation_config=generation_config,
        )

    def to_payload(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)


def extract_answer_text(data: dict) -> str:
    """Return the text of the first part of the first candidate, or "" """
    try:
        return data["candidates"][0]["content"]["parts"][0].get("text", "") or ""
    except (KeyError, IndexError, TypeError, AttributeError):
        return ""
