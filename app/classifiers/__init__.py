import logging
from typing import Optional
import httpx
from app.classifiers.base import ClassificationProvider
from app.classifiers.gemini import GeminiTrashClassifier
from app.classifiers.mock import RandomTrashClassifier
from app.dependencies import CLASSIFIER_PROVIDER, GEMINI_USE_RELAY, get_gemini_api_key
from app.errors import ConfigurationError

logger = logging.getLogger(__name__)

PROVIDERS = ("gemini", "mock")


def get_classifier(
    provider: Optional[str] = None,
    use_relay: Optional[bool] = None,
    api_key: Optional[str] = None,
    http_client: Optional[httpx.AsyncClient] = None,
) -> ClassificationProvider:
    """Build the classification provider named by `provider` (defaults to the
    CLASSIFIER_PROVIDER env var).

    Never falls back to the mock provider on its own: an unknown name or an
    unconfigured Gemini provider raises ConfigurationError.
    """
    provider = (provider or CLASSIFIER_PROVIDER).lower()
    if provider == "mock":
        return RandomTrashClassifier()
    if provider != "gemini":
        raise ConfigurationError(
            f"Unknown classifier provider {provider!r}, expected one of {PROVIDERS}"
        )

    use_relay = GEMINI_USE_RELAY if use_relay is None else use_relay
    classifier = GeminiTrashClassifier(
        api_key=api_key or get_gemini_api_key(),
        use_relay=use_relay,
        http_client=http_client,
    )
    if not classifier.is_configured():
        raise ConfigurationError(
            "GEMINI_API_KEY is not set. Set it, or set CLASSIFIER_PROVIDER=mock"
        )
    logger.info(
        f"Using gemini classifier ({'relay' if use_relay else 'direct'}: {classifier.api_url})"
    )
    return classifier


__all__ = [
    "ClassificationProvider",
    "GeminiTrashClassifier",
    "RandomTrashClassifier",
    "get_classifier",
]
