from langchain_core.prompts import PromptTemplate
from app.models import BIN_CATEGORIES

# region: presence check
PRESENCE_PROMPT = PromptTemplate(
    template="""Analyze this image and determine if it contains any trash, waste, or recyclable items.

Respond with ONLY a JSON object in this exact format:
{{
    "hasTrash": true or false,
    "reasoning": "brief explanation"
}}

If the image shows trash, waste, recyclable materials, packaging, containers, or any disposable items, set hasTrash to true.
If the image shows people, scenery, objects that aren't trash, or is unclear, set hasTrash to false.""",
    input_variables=[],
)

# endregion: presence check

# region: classification
CATEGORY_DESCRIPTIONS = {
    "recycling": "General recyclable items",
    "plastic": "Plastic-specific recycling",
    "paper": "Paper and cardboard recycling",
    "glass": "Glass recycling",
    "metal": "Metal/aluminum recycling",
    "compost": "Organic/food waste",
    "landfill": "Non-recyclable general waste",
    "hazardous": "Batteries, electronics, chemicals, medical waste",
}

CLASSIFICATION_PROMPT = PromptTemplate(
    template="""You are an expert waste management AI assistant. Analyze this image of trash/waste and classify it.

Identify:
1. What the item is (be specific, e.g., "Plastic Water Bottle", "Aluminum Soda Can")
2. Which bin category it belongs to from these options:
{categories}

3. Confidence score (0.0 to 1.0)
4. Disposal instructions (brief, helpful advice)

Respond with ONLY a JSON object in this exact format:
{{
    "item": "Item name",
    "category": "category_name",
    "confidence": 0.95,
    "instructions": "Brief disposal instructions",
    "recyclable": true or false
}}

Example:
{{
    "item": "Plastic Water Bottle",
    "category": "plastic",
    "confidence": 0.95,
    "instructions": "Remove cap and rinse before recycling",
    "recyclable": true
}}""",
    input_variables=["categories"],
)


def build_presence_prompt() -> str:
    return PRESENCE_PROMPT.format()


def build_classification_prompt() -> str:
    categories = "\n".join(
        f"   - {category}: {CATEGORY_DESCRIPTIONS[category]}"
        for category in BIN_CATEGORIES
    )
    return CLASSIFICATION_PROMPT.format(categories=categories)


# endregion: classification
