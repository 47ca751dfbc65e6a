import json
import math
import logging
from typing import Any, Optional
from app.errors import ParseError
from app.models import (
    BIN_CATEGORIES,
    DEFAULT_BIN_CATEGORY,
    BinCategory,
    ClassificationResult,
)

logger = logging.getLogger(__name__)

DEFAULT_ITEM = "Unknown Item"
DEFAULT_CONFIDENCE = 0.5
DEFAULT_INSTRUCTIONS = "Please check local recycling guidelines."


# region: json extraction
def extract_json_object(text: str) -> Optional[str]:
    """Return the first balanced `{...}` span in `text`, or None.

    The model is asked for JSON only but often wraps it in prose or markdown
    fences. Braces inside JSON string literals are not counted. If a `{` is
    never closed the scan restarts at the next `{`.
    """
    start = text.find("{")
    while start != -1:
        depth = 0
        in_string = False
        escaped = False
        for i in range(start, len(text)):
            char = text[i]
            if in_string:
                if escaped:
                    escaped = False
                elif char == "\\":
                    escaped = True
                elif char == '"':
                    in_string = False
                continue
            if char == '"':
                in_string = True
            elif char == "{":
                depth += 1
            elif char == "}":
                depth -= 1
                if depth == 0:
                    return text[start : i + 1]
        start = text.find("{", start + 1)
    return None


def load_json_object(span: str) -> dict:
    try:
        data = json.loads(span)
    except json.JSONDecodeError as e:
        raise ParseError(f"Could not parse model answer as JSON: {e}") from e
    if not isinstance(data, dict):
        raise ParseError("Model answer is not a JSON object")
    return data


# endregion: json extraction


# region: presence
def parse_presence(text: str) -> bool:
    """Read `hasTrash` from the model answer. No JSON object means no trash."""
    span = extract_json_object(text)
    if span is None:
        logger.warning(f"No JSON object in presence answer: {text[:100]!r}")
        return False
    has_trash = load_json_object(span).get("hasTrash", False)
    if not isinstance(has_trash, bool):
        logger.warning(f"Non boolean hasTrash {has_trash!r}, treating as false")
        return False
    return has_trash


# endregion: presence


# region: classification
def validate_category(category: Any) -> BinCategory:
    """Validate that the category is one of the accepted bin categories"""
    if isinstance(category, str) and category in BIN_CATEGORIES:
        return BinCategory(category)
    logger.warning(
        f'Invalid category "{category}", defaulting to {DEFAULT_BIN_CATEGORY.value}'
    )
    return DEFAULT_BIN_CATEGORY


def _confidence(value: Any) -> float:
    if value is None:
        return DEFAULT_CONFIDENCE
    # bool is an int subclass, reject it explicitly
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        try:
            confidence = float(value)
        except OverflowError:
            confidence = math.inf
        if math.isfinite(confidence):
            return min(max(confidence, 0.0), 1.0)
    logger.warning(f"Invalid confidence {value!r}, defaulting to {DEFAULT_CONFIDENCE}")
    return DEFAULT_CONFIDENCE


def _recyclable(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if value is not None:
        logger.warning(f"Invalid recyclable flag {value!r}, defaulting to false")
    return False


def parse_classification(text: str) -> ClassificationResult:
    """Build a ClassificationResult from the model answer, filling in defaults
    for anything missing or invalid"""
    span = extract_json_object(text)
    if span is None:
        raise ParseError("Could not parse classification result")
    data = load_json_object(span)

    item = data.get("item")
    instructions = data.get("instructions")
    return ClassificationResult(
        item=item if isinstance(item, str) and item else DEFAULT_ITEM,
        category=validate_category(data.get("category")),
        confidence=_confidence(data.get("confidence")),
        instructions=(
            instructions
            if isinstance(instructions, str) and instructions
            else DEFAULT_INSTRUCTIONS
        ),
        recyclable=_recyclable(data.get("recyclable")),
    )


# endregion: classification
