"""
Template assembly engine
Expands a game type into a React Three Fiber starter project on disk
"""
import html
import json
import logging
import os
import re
from string import Template
from typing import List, Tuple, Union

from ..constants import GameType, DEFAULT_GAME_TYPE, PROJECT_SUBDIRECTORIES
from ..errors import TemplateGenerationError
from .filesystem import LocalFileSystem
from .template_catalog import get_bundle, get_input_hook, resolve_game_type
from .templates import scaffold, screens
from .templates.components import render_component, render_input_hook

logger = logging.getLogger(__name__)

_WHITESPACE_RUN = re.compile(r"\s+")


def derive_directory_name(game_name: str) -> str:
    """
    Directory name for a game: lower-cased, whitespace runs become one hyphen.

    >>> derive_directory_name("Space Invaders 3D")
    'space-invaders-3d'
    """
    return _WHITESPACE_RUN.sub("-", game_name.lower())


def get_game_screen(game_type: Union[str, GameType, None]) -> str:
    """Play screen body for a game type, arcade for unknown types"""
    resolved = resolve_game_type(game_type) or DEFAULT_GAME_TYPE
    return screens.GAME_SCREENS[resolved]


class TemplateService:
    """Writes the starter project for a game"""

    def __init__(self, filesystem=None):
        """
        Initialize template service

        Args:
            filesystem: Object with ensure_directory, write_file and
                write_structured_file coroutines (defaults to LocalFileSystem)
        """
        self.fs = filesystem or LocalFileSystem()
        self._projects_generated = 0

    def plan_files(self, game_type: str, game_name: str) -> List[Tuple[str, object]]:
        """
        Every artifact of the project, in write order.

        Returns:
            (relative path, content) pairs; dict content is written as JSON
        """
        bundle = get_bundle(game_type)
        hook_name = get_input_hook(game_type)

        files: List[Tuple[str, object]] = [
            ("package.json", scaffold.package_manifest(derive_directory_name(game_name))),
            ("vite.config.ts", scaffold.VITE_CONFIG),
            ("tsconfig.json", scaffold.TSCONFIG),
            ("tsconfig.node.json", scaffold.TSCONFIG_NODE),
            ("tailwind.config.js", scaffold.TAILWIND_CONFIG),
            ("postcss.config.js", scaffold.POSTCSS_CONFIG),
            ("index.html", Template(scaffold.INDEX_HTML).substitute(title=html.escape(game_name))),
            ("src/main.tsx", scaffold.MAIN_TSX),
            ("src/index.css", scaffold.INDEX_CSS),
            ("src/App.tsx", scaffold.APP_TSX),
            ("src/screens/StartScreen.tsx",
             Template(screens.START_SCREEN).substitute(title="{%s}" % json.dumps(game_name))),
            ("src/screens/GameOverScreen.tsx", screens.GAME_OVER_SCREEN),
            ("src/screens/GameScreen.tsx", get_game_screen(game_type)),
        ]

        for component in bundle.scaffold_components:
            files.append((f"src/components/{component}.tsx", render_component(component)))

        files.append((f"src/hooks/{hook_name}.ts", render_input_hook(hook_name)))
        return files

    async def generate_template(self, game_type: str, game_name: str, project_path: str) -> str:
        """
        Generate the starter project under `project_path`.

        Directory creation is idempotent and existing files are overwritten.
        Files written before a failure stay on disk.

        Args:
            game_type: Game type (unknown types use the arcade bundle)
            game_name: Name of the game
            project_path: Parent directory

        Returns:
            Path of the generated game directory

        Raises:
            TemplateGenerationError: If a directory or file cannot be written
        """
        game_dir = os.path.join(project_path, derive_directory_name(game_name))
        current = game_dir

        try:
            await self.fs.ensure_directory(game_dir)
            for subdirectory in PROJECT_SUBDIRECTORIES:
                current = os.path.join(game_dir, subdirectory)
                await self.fs.ensure_directory(current)

            for relative_path, content in self.plan_files(game_type, game_name):
                current = os.path.join(game_dir, relative_path)
                if isinstance(content, dict):
                    await self.fs.write_structured_file(current, content)
                else:
                    await self.fs.write_file(current, content)
        except (OSError, ValueError) as e:
            # ValueError covers names the filesystem cannot encode
            logger.error(f"Template generation failed at {current!r}: {e}")
            raise TemplateGenerationError(
                f"Failed to write {current!r}: {getattr(e, 'strerror', None) or e}",
                original_error=e,
                path=current,
            )

        self._projects_generated += 1
        logger.info(f"Generated {game_type} template for '{game_name}' at {game_dir}")
        return game_dir

    def get_statistics(self) -> dict:
        stats = {"projects_generated": self._projects_generated}
        if hasattr(self.fs, "get_statistics"):
            stats["filesystem"] = self.fs.get_statistics()
        return stats
