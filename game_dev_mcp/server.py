"""
Game Development MCP Server
Turns a game concept into a Linear sprint plan and a React Three Fiber starter project
"""
from fastmcp import FastMCP, Context
from typing import List, Dict, Any
import json
import logging
import sys
from datetime import datetime, timezone
from contextlib import asynccontextmanager

from .auth import LinearAuth
from .config import Settings
from .log_sanitizer import safe_log_error, sanitize_log_message
from .models import CreationRequest
from .service_manager import ServiceManager
from .services.confirmation import ElicitationConfirmer
from .services.template_catalog import get_available_templates, get_bundle, resolve_game_type
from .validation import (
    ValidationError,
    validate_game_name,
    validate_game_type,
    validate_project_path,
    validate_team_id,
    validate_topics,
)

logger = logging.getLogger(__name__)

SERVICE_NAME = "Game Development MCP Server"
SERVICE_VERSION = "1.0.0"


# Global state for settings, authentication and service manager
# Initialized during lifespan startup
_settings = None
_auth = None
_service_manager = None


def configure_logging(level: str = "INFO"):
    """Send all logs to stderr; stdout carries the stdio protocol"""
    logging.basicConfig(
        stream=sys.stderr,
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


@asynccontextmanager
async def lifespan(app):
    """Initialize services on startup"""
    global _settings, _auth, _service_manager

    # Loads .env before reading the environment
    _settings = Settings.from_env()

    # Initialize authentication
    _auth = LinearAuth(api_url=_settings.linear_api_url)
    await _auth.initialize()

    _service_manager = ServiceManager(_auth, _settings)
    logger.info(f"{SERVICE_NAME} ready")

    yield  # Server runs

    # Cleanup on shutdown
    await _auth.close()


# Initialize FastMCP server with lifespan
mcp = FastMCP(
    name=SERVICE_NAME,
    lifespan=lifespan
)


def _require_manager() -> ServiceManager:
    if not _service_manager:
        raise RuntimeError("Service manager not initialized")
    return _service_manager


# ============================================================================
# TOOL HANDLERS (called by the MCP tools below, and by tests)
# ============================================================================

async def handle_create_game_project(
    manager: ServiceManager,
    settings: Settings,
    game_name: str,
    game_type: str,
    team_id: str,
    project_path: str,
    ctx
) -> str:
    """Validate the request, run the pipeline and return its result as JSON"""
    try:
        request = CreationRequest(
            game_name=validate_game_name(game_name),
            game_type=validate_game_type(game_type),
            team_id=validate_team_id(team_id),
            project_path=validate_project_path(project_path),
        )

        await ctx.info(f"Creating game project '{request.game_name}' ({request.game_type})...")

        confirmer = ElicitationConfirmer(ctx, fallback=settings.confirm_fallback)
        result = await manager.get_pipeline().run(request, confirmer, progress=ctx.info)

        return json.dumps(result.to_dict(), indent=2)
    except ValidationError as e:
        logger.warning(f"Rejected create_game_project request: {e}")
        return f"Error creating game project: {e}"
    except Exception as e:
        logger.error(safe_log_error(e, "create_game_project"))
        return f"Error creating game project: {sanitize_log_message(str(e))}"


async def handle_update_game_knowledge(manager: ServiceManager, topics: List[str], ctx) -> str:
    """Refresh knowledge topics and return the per-topic summary as JSON"""
    try:
        cleaned = validate_topics(topics)
        await ctx.info(f"Updating knowledge for topics: {', '.join(cleaned)}")

        knowledge_service = manager.get_knowledge_service()
        updates = await knowledge_service.refresh(cleaned)

        return json.dumps({
            "message": f"Knowledge updated for topics: {', '.join(cleaned)}",
            "version": knowledge_service.knowledge.version,
            "updates": {topic: update.to_dict() for topic, update in updates.items()},
        }, indent=2)
    except ValidationError as e:
        return f"Error updating knowledge: {e}"
    except Exception as e:
        logger.error(safe_log_error(e, "update_game_knowledge"))
        return f"Error updating knowledge: {sanitize_log_message(str(e))}"


def handle_get_game_templates() -> str:
    """Catalog listing as JSON"""
    return json.dumps(get_available_templates(), indent=2)


def render_template_resource(game_type: str) -> str:
    """Markdown description of the bundle used for a game type"""
    bundle = get_bundle(game_type)
    note = ""
    if resolve_game_type(game_type) is None:
        note = f"\n> '{game_type}' is not a known game type; the {bundle.game_type} bundle is used.\n"

    def bullets(values):
        return "\n".join(f"- {value}" for value in values)

    return f"""# {bundle.name}
**Game Type:** {bundle.game_type}
**Difficulty:** {bundle.difficulty}
{note}
{bundle.description}

## Features
{bullets(bundle.features)}

## Generated Components
{bullets(f"src/components/{name}.tsx" for name in bundle.scaffold_components)}

## Input Hook
- src/hooks/{bundle.input_hook}.ts

## Planned Components
{bullets(bundle.planned_components)}

## Planned Hooks
{bullets(bundle.hooks)}

## Assets
{bullets(bundle.assets)}
"""


# ============================================================================
# TOOLS
# ============================================================================

@mcp.tool()
async def create_game_project(
    game_name: str,
    game_type: str,
    team_id: str,
    project_path: str,
    ctx: Context = None
) -> str:
    """
    Create a new game project with Linear integration and setup.

    Creates a Linear project with three one-week sprints and one issue per
    planned task, asks for confirmation, then generates a React Three Fiber
    starter project on disk.

    Args:
        game_name: Name of the game (e.g., "Space Invaders 3D")
        game_type: One of platformer, puzzle, endless-runner, physics-based, arcade.
                   Other values fall back to the arcade template.
        team_id: Linear team ID for project creation
        project_path: Directory in which to create the game project

    Returns:
        JSON with status (success, cancelled or failed), the Linear project,
        and for success the generated path, setup instructions and next steps
    """
    return await handle_create_game_project(
        _require_manager(), _settings, game_name, game_type, team_id, project_path, ctx
    )


@mcp.tool()
async def update_game_knowledge(topics: List[str], ctx: Context = None) -> str:
    """
    Update knowledge about game development best practices and technologies.

    Args:
        topics: Topics to research and update knowledge about
                (e.g., ["react-three-fiber", "game-design", "performance"])

    Returns:
        JSON summary of the update for each topic
    """
    return await handle_update_game_knowledge(_require_manager(), topics, ctx)


@mcp.tool()
async def get_game_templates(ctx: Context = None) -> str:
    """
    Get available game templates.

    Returns:
        JSON object keyed by game type with name, description, features and difficulty
    """
    return handle_get_game_templates()


# ============================================================================
# RESOURCES (Read-only data exposure)
# ============================================================================

@mcp.resource("templates://{game_type}")
async def template_resource(game_type: str) -> str:
    """Provides details about the template bundle for a game type"""
    return render_template_resource(game_type)


@mcp.resource("knowledge://current")
async def knowledge_resource() -> str:
    """Provides the current game development knowledge base"""
    return _require_manager().get_knowledge_service().render_markdown()


# ============================================================================
# MONITORING TOOLS (Health and Statistics)
# ============================================================================

@mcp.tool()
async def health_check(ctx: Context = None) -> Dict[str, Any]:
    """
    Get server health status for monitoring.

    Returns server health, authentication status, and version information.
    Useful for Docker health checks and monitoring systems.

    Returns:
        Dictionary with health status, authentication info, and version
    """
    try:
        # Verify auth is still valid
        auth = _auth
        auth_info = auth.get_auth_info() if auth else None
        auth_failure_stats = auth.get_auth_failure_stats() if auth else {}

        return {
            "status": "healthy",
            "service": SERVICE_NAME,
            "version": SERVICE_VERSION,
            "authenticated": auth_info.get("authenticated") if auth_info else False,
            "auth_method": auth_info.get("method") if auth_info else None,
            "linear_user": auth_info.get("user") if auth_info else None,
            "auth_failure_stats": auth_failure_stats
        }
    except Exception as e:
        return {
            "status": "unhealthy",
            "error": str(e)
        }


@mcp.tool()
async def get_service_statistics(ctx: Context = None) -> Dict[str, Any]:
    """
    Get service manager statistics.

    Returns statistics about loaded services, Linear requests, pipeline
    outcomes and the knowledge base version.

    Returns:
        Dictionary with service manager stats
    """
    try:
        if not _service_manager:
            return {"error": "Service manager not initialized"}

        return {
            "service_manager": _service_manager.get_statistics(),
            "timestamp": datetime.now(timezone.utc).isoformat()
        }
    except Exception as e:
        return {"error": str(e)}


def main():
    """Run the server with the transport chosen by MCP_TRANSPORT"""
    settings = Settings.from_env()
    configure_logging(settings.log_level)

    if settings.transport == "stdio":
        # STDIO mode for desktop clients
        logger.info("Starting MCP server in STDIO mode")
        mcp.run()  # Default transport is stdio
    else:
        # Streamable HTTP for web-based clients
        import uvicorn

        logger.info(f"Starting MCP server with HTTP streaming on port {settings.port}")
        logger.info(f"Server URL: http://localhost:{settings.port}/mcp")
        uvicorn.run(
            mcp.http_app(),
            host=settings.host,
            port=settings.port,
            log_level=settings.log_level.lower(),
        )


# Entry point for running the server
if __name__ == "__main__":
    main()
