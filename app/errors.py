from typing import Optional


class TrashClassifierError(Exception):
    """Base class for errors raised while classifying a waste item"""


class ConfigurationError(TrashClassifierError):
    """The Gemini credential or the provider selection is missing or invalid"""


class BadRequestError(TrashClassifierError):
    """The caller's payload is malformed, e.g. an image that is not base64"""


class UpstreamError(TrashClassifierError):
    """Gemini (or the relay in front of it) answered with a non-success status"""

    def __init__(self, status_code: int, message: str):
        super().__init__(message)
        self.status_code = status_code
        self.message = message


class ParseError(TrashClassifierError):
    """The model answer did not contain a recoverable JSON object"""


class TransportError(TrashClassifierError):
    """The request never produced an HTTP response (connection, timeout, ...)"""

    def __init__(self, message: str, cause: Optional[Exception] = None):
        super().__init__(message)
        self.cause = cause


class SessionBusyError(TrashClassifierError):
    """A capture cycle is already being processed for this session"""
