"""
Unit tests for error module.

Tests the Linear API error hierarchy, error mapping and pipeline errors.
"""

import pytest
from game_dev_mcp.errors import (
    LinearAPIError,
    NotFoundError,
    AuthenticationError,
    PermissionDeniedError,
    RateLimitError,
    TransientError,
    BadRequestError,
    ConflictError,
    RequestTimeoutError,
    PipelineError,
    KnowledgeRefreshError,
    TrackerCreationError,
    TemplateGenerationError,
    map_status_code_to_error,
    map_graphql_error,
)
from game_dev_mcp.models import TrackerProject


class TestLinearAPIError:
    """Test base LinearAPIError class."""

    def test_base_error_creation(self):
        """Test creating base error with message."""
        error = LinearAPIError("Test error message")
        assert str(error) == "Test error message"
        assert error.status_code is None

    def test_base_error_with_status_code(self):
        """Test base error with status code."""
        error = LinearAPIError("Test error", status_code=500)
        assert error.status_code == 500
        assert str(error) == "[500] Test error"

    def test_to_dict(self):
        """Test JSON-friendly representation."""
        error = BadRequestError(message="teamId is invalid", details={"field": "teamId"})
        data = error.to_dict()

        assert data['error'] == 'BadRequestError'
        assert data['status_code'] == 400
        assert data['message'] == 'teamId is invalid'
        assert 'teamId' in data['details']


class TestSubclasses:
    """Test status codes and messages of each subclass."""

    def test_not_found_with_entity(self):
        """Test error message includes the entity."""
        error = NotFoundError(entity="Team T1")
        assert error.status_code == 404
        assert "Team T1" in str(error)
        assert isinstance(error, LinearAPIError)

    def test_not_found_without_entity(self):
        """Test generic not found message."""
        error = NotFoundError()
        assert "not found" in str(error).lower()

    def test_authentication_default_message(self):
        """Test default authentication error message."""
        error = AuthenticationError()
        assert error.status_code == 401
        assert "api key" in str(error).lower()

    def test_permission_denied_with_operation(self):
        """Test error with specific operation."""
        error = PermissionDeniedError(operation="issueCreate")
        assert error.status_code == 403
        assert "issueCreate" in str(error)

    def test_rate_limit_with_retry_after(self):
        """Test error with retry-after."""
        error = RateLimitError(retry_after=60)
        assert error.status_code == 429
        assert error.retry_after == 60
        assert "60" in str(error)

    def test_transient_with_status(self):
        """Test transient error for server failures."""
        error = TransientError(status_code=503)
        assert error.status_code == 503
        assert "503" in str(error)

    def test_transient_network(self):
        """Test transient error without status code."""
        error = TransientError()
        assert error.status_code is None
        assert "network" in str(error).lower()

    def test_conflict(self):
        """Test conflict error."""
        assert ConflictError().status_code == 409

    def test_timeout(self):
        """Test timeout error message."""
        error = RequestTimeoutError(timeout_seconds=5)
        assert error.status_code == 408
        assert "5 seconds" in str(error)


class TestMapStatusCode:
    """Test map_status_code_to_error."""

    @pytest.mark.parametrize("status_code,expected", [
        (400, BadRequestError),
        (401, AuthenticationError),
        (403, PermissionDeniedError),
        (404, NotFoundError),
        (408, RequestTimeoutError),
        (409, ConflictError),
        (429, RateLimitError),
        (500, TransientError),
        (502, TransientError),
        (503, TransientError),
        (504, TransientError),
    ])
    def test_known_codes(self, status_code, expected):
        """Test that each known code maps to its class."""
        assert isinstance(map_status_code_to_error(status_code), expected)

    def test_rate_limit_keeps_retry_after(self):
        """Test that retry_after is forwarded."""
        error = map_status_code_to_error(429, retry_after=12.0)
        assert error.retry_after == 12.0

    def test_unknown_code(self):
        """Test fallback to the base class."""
        error = map_status_code_to_error(418)
        assert type(error) is LinearAPIError
        assert error.status_code == 418


class TestMapGraphQLError:
    """Test map_graphql_error."""

    def test_rate_limited(self):
        """Test RATELIMITED code."""
        error = map_graphql_error({"message": "Too many", "extensions": {"code": "RATELIMITED"}})
        assert isinstance(error, RateLimitError)

    def test_authentication(self):
        """Test AUTHENTICATION_ERROR code."""
        error = map_graphql_error({
            "message": "Authentication required",
            "extensions": {"code": "AUTHENTICATION_ERROR"},
        })
        assert isinstance(error, AuthenticationError)
        assert "Authentication required" in str(error)

    def test_forbidden(self):
        """Test FORBIDDEN code."""
        assert isinstance(map_graphql_error({"extensions": {"code": "FORBIDDEN"}}), PermissionDeniedError)

    def test_not_found(self):
        """Test entity not found."""
        error = map_graphql_error({
            "message": "Entity not found: Team",
            "extensions": {"code": "ENTITY_NOT_FOUND"},
        })
        assert isinstance(error, NotFoundError)

    def test_internal_error_is_transient(self):
        """Test INTERNAL_ERROR code."""
        error = map_graphql_error({"extensions": {"code": "INTERNAL_ERROR"}})
        assert isinstance(error, TransientError)

    def test_user_presentable_message_preferred(self):
        """Test that Linear's user-facing message is used."""
        error = map_graphql_error({
            "message": "Argument Validation Error",
            "extensions": {
                "code": "INVALID_INPUT",
                "userPresentableMessage": "Cycle dates overlap with an existing cycle",
            },
        })
        assert isinstance(error, BadRequestError)
        assert "overlap" in str(error)

    def test_no_extensions(self):
        """Test plain GraphQL errors."""
        error = map_graphql_error({"message": "Syntax Error"})
        assert isinstance(error, BadRequestError)
        assert "Syntax Error" in str(error)


class TestPipelineErrors:
    """Test pipeline error taxonomy."""

    def test_stages(self):
        """Test each error names its stage."""
        assert KnowledgeRefreshError("x").stage == "knowledge_refresh"
        assert TrackerCreationError("x").stage == "tracker_structuring"
        assert TemplateGenerationError("x").stage == "template_assembly"

    def test_all_are_pipeline_errors(self):
        """Test inheritance."""
        for error in (KnowledgeRefreshError("x"), TrackerCreationError("x"), TemplateGenerationError("x")):
            assert isinstance(error, PipelineError)
            assert not isinstance(error, LinearAPIError)

    def test_tracker_error_carries_partial(self):
        """Test the partial project is kept on the error."""
        partial = TrackerProject(project_id="p1", project_name="Game - arcade Game")
        cause = TransientError(status_code=503)
        error = TrackerCreationError("failed", original_error=cause, partial=partial)

        assert error.partial is partial
        assert error.original_error is cause

    def test_template_error_carries_path(self):
        """Test the failing path is kept on the error."""
        error = TemplateGenerationError("disk full", path="/tmp/game/package.json")
        assert error.path == "/tmp/game/package.json"
        assert error.to_dict() == {
            'error': 'TemplateGenerationError',
            'stage': 'template_assembly',
            'message': 'disk full',
        }
