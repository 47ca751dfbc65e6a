from abc import ABC, abstractmethod
from app.models import ClassificationResult


class ClassificationProvider(ABC):
    """Something that can tell whether an image shows trash and which bin it
    goes in. Images are data URLs (or bare base64 JPEG data)."""

    name: str = "base"

    @abstractmethod
    def is_configured(self) -> bool: ...

    @abstractmethod
    async def check_presence(self, image: str) -> bool: ...

    @abstractmethod
    async def classify(self, image: str) -> ClassificationResult: ...
