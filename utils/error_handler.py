"""Custom exception classes for the relay."""

import json
from typing import Any

from googleapiclient.errors import HttpError


class BaseGraderException(Exception):
    """Base exception for all application-specific errors."""
    pass

class ConfigError(BaseGraderException):
    """Error related to configuration loading or values."""
    pass

class AuthenticationError(BaseGraderException):
    """Missing or unusable bearer credential."""
    pass

class APIError(BaseGraderException):
    """Error interacting with an external API (Classroom, Drive, Gemini)."""
    def __init__(self, message: str, status_code: int | None = None, service: str | None = None,
                 details: Any = None):
        super().__init__(message)
        self.status_code = status_code
        self.service = service
        # Decoded error payload returned by the upstream API, if any
        self.details = details

    def __str__(self) -> str:
        base = super().__str__()
        details = []
        if self.service:
            details.append(f"Service: {self.service}")
        if self.status_code:
            details.append(f"Status Code: {self.status_code}")
        if details:
            return f"{base} ({', '.join(details)})"
        return base

    @classmethod
    def from_http_error(cls, message: str, error: HttpError, service: str) -> "APIError":
        """Wraps a googleapiclient HttpError, keeping its status and error payload."""
        return cls(
            f"{message}: {error.resp.status}",
            status_code=error.resp.status,
            service=service,
            details=decode_error_content(error),
        )

class ContentExtractionError(BaseGraderException):
    """Error extracting text from a linked document."""
    pass

class AssignmentLookupError(BaseGraderException):
    """The assignment's instruction document could not be retrieved."""
    pass

class NoDocumentLinkError(AssignmentLookupError):
    """The assignment has no Drive-backed material."""
    pass

class GradingError(BaseGraderException):
    """Error during the language-model grading call."""
    pass


def decode_error_content(error: HttpError) -> Any:
    """Returns the JSON error body of an HttpError, or its raw text if it is not JSON."""
    content = getattr(error, 'content', None)
    if not content:
        return None
    if isinstance(content, bytes):
        content = content.decode('utf-8', errors='replace')
    try:
        return json.loads(content)
    except ValueError:
        return content
