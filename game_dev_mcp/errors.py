"""
Custom exception classes for the game development MCP server.

Provides structured error handling for Linear API failures and for the
stages of the game project creation pipeline.
"""

from typing import Optional, Any


class LinearAPIError(Exception):
    """
    Base exception for Linear API errors.

    Attributes:
        status_code: HTTP status code from the API response
        message: Human-readable error message
        original_error: The original exception that was caught
        details: Additional error details
    """

    def __init__(
        self,
        message: str = "Linear API error",
        status_code: Optional[int] = None,
        original_error: Optional[Exception] = None,
        details: Optional[Any] = None
    ):
        self.status_code = status_code
        self.message = message
        self.original_error = original_error
        self.details = details
        super().__init__(message)

    def __str__(self) -> str:
        """String representation of the error."""
        if self.status_code:
            return f"[{self.status_code}] {self.message}"
        return self.message

    def to_dict(self) -> dict:
        """Convert error to dictionary for JSON serialization."""
        return {
            'error': self.__class__.__name__,
            'status_code': self.status_code,
            'message': self.message,
            'details': str(self.details) if self.details else None
        }


class NotFoundError(LinearAPIError):
    """
    Raised when a Linear entity is not found (HTTP 404).

    This can occur when:
    - The team ID doesn't exist
    - The API key has no access to the team
    """

    def __init__(
        self,
        entity: Optional[str] = None,
        original_error: Optional[Exception] = None
    ):
        message = "Entity not found. Please verify the ID exists and you have access."
        if entity:
            message = f"{entity} not found. Please verify it exists and you have access."

        super().__init__(
            message=message,
            status_code=404,
            original_error=original_error,
            details={'entity': entity} if entity else None
        )


class AuthenticationError(LinearAPIError):
    """
    Raised when authentication fails (HTTP 401).

    This can occur when:
    - The API key was revoked
    - The OAuth token has expired
    """

    def __init__(
        self,
        message: str = "Authentication failed. Your Linear API key may be invalid or revoked.",
        original_error: Optional[Exception] = None
    ):
        super().__init__(
            message=message,
            status_code=401,
            original_error=original_error
        )


class PermissionDeniedError(LinearAPIError):
    """
    Raised when the credentials lack permission for an operation (HTTP 403).

    This can occur when:
    - The OAuth token is missing the `write` scope
    - The user is not a member of the team
    """

    def __init__(
        self,
        operation: Optional[str] = None,
        original_error: Optional[Exception] = None
    ):
        if operation:
            message = f"Permission denied for {operation}. Please check your team membership and token scopes."
        else:
            message = "Permission denied. Please check your credentials and team membership."

        super().__init__(
            message=message,
            status_code=403,
            original_error=original_error,
            details={'operation': operation}
        )


class RateLimitError(LinearAPIError):
    """
    Raised when the API rate limit is exceeded (HTTP 429 or RATELIMITED).

    Includes retry-after information when Linear provides it.
    """

    def __init__(
        self,
        retry_after: Optional[float] = None,
        original_error: Optional[Exception] = None
    ):
        if retry_after:
            message = f"Rate limit exceeded. Please retry after {retry_after} seconds."
        else:
            message = "Rate limit exceeded. Please retry after a brief delay."

        super().__init__(
            message=message,
            status_code=429,
            original_error=original_error,
            details={'retry_after': retry_after}
        )
        self.retry_after = retry_after


class TransientError(LinearAPIError):
    """
    Raised for temporary failures that should be retried.

    - 500 Internal Server Error
    - 502 Bad Gateway
    - 503 Service Unavailable
    - 504 Gateway Timeout
    - network errors (no status code)
    """

    def __init__(
        self,
        status_code: Optional[int] = None,
        original_error: Optional[Exception] = None
    ):
        if status_code:
            message = (
                f"Linear temporarily unavailable (HTTP {status_code}). "
                "This error is transient and will be retried automatically."
            )
        else:
            message = (
                "Network error while contacting Linear. "
                "This error is transient and will be retried automatically."
            )

        super().__init__(
            message=message,
            status_code=status_code,
            original_error=original_error
        )


class BadRequestError(LinearAPIError):
    """
    Raised for malformed requests (HTTP 400 or GraphQL validation errors).

    This can occur when:
    - A required input field is missing
    - A field value is rejected by Linear
    - The team ID is not a valid UUID
    """

    def __init__(
        self,
        message: str = "Bad request. Please check your input values.",
        original_error: Optional[Exception] = None,
        details: Optional[Any] = None
    ):
        super().__init__(
            message=message,
            status_code=400,
            original_error=original_error,
            details=details
        )


class ConflictError(LinearAPIError):
    """Raised when a request conflicts with existing data (HTTP 409)."""

    def __init__(
        self,
        message: str = "Conflict detected. The resource has been modified by another user.",
        original_error: Optional[Exception] = None
    ):
        super().__init__(
            message=message,
            status_code=409,
            original_error=original_error
        )


class RequestTimeoutError(LinearAPIError):
    """Raised when a Linear request does not complete in time."""

    def __init__(
        self,
        timeout_seconds: float = 30,
        original_error: Optional[Exception] = None
    ):
        message = (
            f"Request timeout after {timeout_seconds} seconds. "
            "Linear may be experiencing issues."
        )

        super().__init__(
            message=message,
            status_code=408,
            original_error=original_error,
            details={'timeout_seconds': timeout_seconds}
        )


def map_status_code_to_error(
    status_code: int,
    original_error: Optional[Exception] = None,
    **kwargs
) -> LinearAPIError:
    """
    Map HTTP status code to appropriate error class.

    Args:
        status_code: HTTP status code from the Linear API
        original_error: The original exception
        **kwargs: Additional error-specific parameters

    Returns:
        Appropriate LinearAPIError subclass instance
    """
    if status_code == 400:
        return BadRequestError(original_error=original_error)
    elif status_code == 401:
        return AuthenticationError(original_error=original_error)
    elif status_code == 403:
        return PermissionDeniedError(original_error=original_error)
    elif status_code == 404:
        return NotFoundError(original_error=original_error)
    elif status_code == 408:
        return RequestTimeoutError(original_error=original_error)
    elif status_code == 409:
        return ConflictError(original_error=original_error)
    elif status_code == 429:
        return RateLimitError(retry_after=kwargs.get('retry_after'), original_error=original_error)
    elif status_code in [500, 502, 503, 504]:
        return TransientError(status_code=status_code, original_error=original_error)
    else:
        return LinearAPIError(
            message=f"Linear API error: HTTP {status_code}",
            status_code=status_code,
            original_error=original_error
        )


def map_graphql_error(error: dict) -> LinearAPIError:
    """
    Map a GraphQL error object from a Linear response to an error class.

    Linear reports most failures with HTTP 200 and an `errors` array whose
    entries carry a code under `extensions`.

    Args:
        error: One entry of the response `errors` array

    Returns:
        Appropriate LinearAPIError subclass instance
    """
    extensions = error.get('extensions') or {}
    code = str(extensions.get('code') or extensions.get('type') or '').upper()
    message = extensions.get('userPresentableMessage') or error.get('message') or 'Linear API error'

    if code == 'RATELIMITED':
        return RateLimitError()
    if code in ('AUTHENTICATION_ERROR', 'UNAUTHENTICATED'):
        return AuthenticationError(message=message)
    if code == 'FORBIDDEN':
        return PermissionDeniedError()
    if code in ('ENTITY_NOT_FOUND', 'NOT_FOUND'):
        return NotFoundError(entity=message)
    if code == 'INTERNAL_ERROR':
        return TransientError(status_code=500)
    return BadRequestError(message=message, details=error)


# ============================================================================
# Pipeline Errors
# ============================================================================

class PipelineError(Exception):
    """Base exception for creation pipeline stages."""

    stage = "pipeline"

    def __init__(self, message: str, original_error: Optional[Exception] = None):
        self.message = message
        self.original_error = original_error
        super().__init__(message)

    def to_dict(self) -> dict:
        """Convert error to dictionary for JSON serialization."""
        return {
            'error': self.__class__.__name__,
            'stage': self.stage,
            'message': self.message,
        }


class KnowledgeRefreshError(PipelineError):
    """Raised when the knowledge base cannot be refreshed. Never fatal."""

    stage = "knowledge_refresh"


class TrackerCreationError(PipelineError):
    """
    Raised when the project, a sprint, or an issue cannot be created in Linear.

    Entities created before the failure are not removed; `partial` holds the
    TrackerProject as far as it got (None if the project itself failed).
    """

    stage = "tracker_structuring"

    def __init__(
        self,
        message: str,
        original_error: Optional[Exception] = None,
        partial: Optional[Any] = None
    ):
        super().__init__(message, original_error=original_error)
        self.partial = partial


class TemplateGenerationError(PipelineError):
    """
    Raised when a file or directory of the game template cannot be written.

    Files written before the failure stay on disk.
    """

    stage = "template_assembly"

    def __init__(
        self,
        message: str,
        original_error: Optional[Exception] = None,
        path: Optional[str] = None
    ):
        super().__init__(message, original_error=original_error)
        self.path = path
