from pydantic import BaseModel, Field


class ImageRequest(BaseModel):
    base64_image: str = Field(
        description="Captured image as a data URL (data:image/jpeg;base64,...) or bare base64"
    )
