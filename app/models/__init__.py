from pydantic import BaseModel, Field
from typing import Optional
from enum import Enum


class BinCategory(str, Enum):
    RECYCLING = "recycling"
    PLASTIC = "plastic"
    LANDFILL = "landfill"
    COMPOST = "compost"
    HAZARDOUS = "hazardous"
    PAPER = "paper"
    GLASS = "glass"
    METAL = "metal"


BIN_CATEGORIES = [category.value for category in BinCategory]
DEFAULT_BIN_CATEGORY = BinCategory.LANDFILL


class ClassificationResult(BaseModel):
    item: str = Field(description="Name of the item, e.g. Plastic Water Bottle")
    category: BinCategory = Field(description="Bin the item should be disposed in")
    confidence: float = Field(
        ge=0.0, le=1.0, description="Confidence of the classification, 0.0 to 1.0"
    )
    instructions: str = Field(description="Brief disposal instructions for the item")
    recyclable: bool = Field(description="Whether the item can be recycled or not")


class BinInfo(BaseModel):
    category: BinCategory
    name: str
    description: str
    color: str
    icon: str


class ScanResult(BaseModel):
    has_trash: bool = Field(description="Whether the image contains a wasteable item")
    classification: Optional[ClassificationResult] = Field(
        default=None, description="Classification of the item, if trash was found"
    )
    bin: Optional[BinInfo] = Field(
        default=None, description="Bin metadata for the classified category"
    )
    provider: str = Field(description="Name of the classification provider used")
