#!/usr/bin/env python
"""Create a game project without an MCP client"""
import asyncio
import json
import os
import sys

from dotenv import load_dotenv
from game_dev_mcp.auth import LinearAuth
from game_dev_mcp.config import Settings
from game_dev_mcp.models import CreationRequest
from game_dev_mcp.service_manager import ServiceManager
from game_dev_mcp.services.confirmation import StaticConfirmer
from game_dev_mcp.validation import (
    validate_game_name,
    validate_game_type,
    validate_project_path,
    validate_team_id,
)


async def print_progress(message: str):
    print(f"  {message}")


async def main():
    # Load environment
    load_dotenv()
    settings = Settings.from_env()
    team_id = os.getenv('LINEAR_TEAM_ID')

    if not team_id:
        print("Set LINEAR_TEAM_ID to the team that should own the project")
        sys.exit(1)

    request = CreationRequest(
        game_name=validate_game_name("Space Invaders 3D"),
        game_type=validate_game_type("arcade"),
        team_id=validate_team_id(team_id),
        project_path=validate_project_path(os.getenv('GAME_PROJECTS_DIR', '.')),
    )

    print(f"Creating '{request.game_name}' ({request.game_type}) for team {request.team_id}\n")

    # Initialize auth
    auth = LinearAuth(api_url=settings.linear_api_url)
    await auth.initialize()

    try:
        manager = ServiceManager(auth, settings)
        pipeline = manager.get_pipeline()

        # Always proceed past the confirmation gate
        result = await pipeline.run(request, StaticConfirmer(True), progress=print_progress)

        print()
        print(json.dumps(result.to_dict(), indent=2))
    finally:
        await auth.close()


if __name__ == "__main__":
    asyncio.run(main())
