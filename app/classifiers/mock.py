import random
import logging
from typing import List, Optional
from app.classifiers.base import ClassificationProvider
from app.models import BinCategory, ClassificationResult

logger = logging.getLogger(__name__)

MOCK_RESULTS: List[ClassificationResult] = [
    ClassificationResult(
        item="Plastic Bottle",
        category=BinCategory.PLASTIC,
        confidence=0.95,
        instructions="Remove cap and rinse before recycling",
        recyclable=True,
    ),
    ClassificationResult(
        item="Aluminum Can",
        category=BinCategory.METAL,
        confidence=0.92,
        instructions="Rinse and crush to save space",
        recyclable=True,
    ),
    ClassificationResult(
        item="Paper Cup",
        category=BinCategory.PAPER,
        confidence=0.88,
        instructions="Check if it has a plastic lining",
        recyclable=True,
    ),
    ClassificationResult(
        item="Glass Bottle",
        category=BinCategory.GLASS,
        confidence=0.91,
        instructions="Remove caps and rinse",
        recyclable=True,
    ),
    ClassificationResult(
        item="Food Waste",
        category=BinCategory.COMPOST,
        confidence=0.87,
        instructions="Add to compost bin",
        recyclable=False,
    ),
    ClassificationResult(
        item="Plastic Bag",
        category=BinCategory.LANDFILL,
        confidence=0.85,
        instructions="Not recyclable in most areas",
        recyclable=False,
    ),
    ClassificationResult(
        item="Battery",
        category=BinCategory.HAZARDOUS,
        confidence=0.93,
        instructions="Take to hazardous waste facility",
        recyclable=False,
    ),
]

# probability of "no trash" in the stub presence check
NO_TRASH_RATE = 0.2


class RandomTrashClassifier(ClassificationProvider):
    """Offline stand-in that ignores the image and answers at random"""

    name = "mock"

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    def is_configured(self) -> bool:
        return True

    async def check_presence(self, image: str) -> bool:
        logger.warning("Using mock detection - Gemini API not in use")
        return self.rng.random() > NO_TRASH_RATE

    async def classify(self, image: str) -> ClassificationResult:
        logger.warning("Using mock classification - Gemini API not in use")
        return self.rng.choice(MOCK_RESULTS).model_copy()
