"""
Template catalog
Static registry of what each game type scaffolds and advertises
"""
from typing import Dict, List, Optional, Union

from ..constants import GameType, DEFAULT_GAME_TYPE, DEFAULT_INPUT_HOOK
from ..models import TemplateBundle


_BUNDLES: Dict[GameType, TemplateBundle] = {
    GameType.PLATFORMER: TemplateBundle(
        game_type=GameType.PLATFORMER.value,
        name="Platformer Game",
        description="Side-scrolling platform game with physics",
        features=("Jump mechanics", "Platform collision", "Collectibles", "Enemies"),
        difficulty="intermediate",
        scaffold_components=("Player", "Platform", "Collectible"),
        planned_components=("Player", "Platform", "Enemy", "Collectible"),
        hooks=("usePlayerMovement", "useCollisions", "useScore"),
        assets=("textures/player.png", "textures/platform.png"),
        input_hook="useGameControls",
    ),
    GameType.PUZZLE: TemplateBundle(
        game_type=GameType.PUZZLE.value,
        name="Puzzle Game",
        description="Grid-based puzzle game with matching mechanics",
        features=("Grid system", "Match detection", "Score system", "Combos"),
        difficulty="beginner",
        scaffold_components=("PuzzleGrid", "PuzzlePiece", "ScoreDisplay"),
        planned_components=("Grid", "Piece", "Timer", "ScoreBoard"),
        hooks=("usePuzzleState", "useTimer", "useMoves"),
        assets=("textures/pieces.png", "sounds/match.mp3"),
        input_hook="usePuzzleLogic",
    ),
    GameType.ENDLESS_RUNNER: TemplateBundle(
        game_type=GameType.ENDLESS_RUNNER.value,
        name="Endless Runner",
        description="Infinite running game with obstacles",
        features=("Auto-run", "Obstacle generation", "Score tracking", "Power-ups"),
        difficulty="beginner",
        scaffold_components=("Runner", "Obstacle", "PowerUp"),
        planned_components=("Runner", "Obstacle", "PowerUp", "Background"),
        hooks=("useSpeed", "useObstacles", "useScore"),
        assets=("models/runner.glb", "textures/road.jpg"),
        input_hook="useRunnerControls",
    ),
    GameType.PHYSICS_BASED: TemplateBundle(
        game_type=GameType.PHYSICS_BASED.value,
        name="Physics Puzzle",
        description="Physics-based puzzle or sandbox game",
        features=("Realistic physics", "Object interaction", "Puzzle elements"),
        difficulty="advanced",
        scaffold_components=("PhysicsObject", "Launcher", "Target"),
        planned_components=("PhysicsObject", "Constraint", "Force", "Trigger"),
        hooks=("usePhysics", "useInteractions", "useConstraints"),
        assets=("textures/wood.jpg", "textures/metal.jpg"),
        input_hook="usePhysicsInteraction",
    ),
    GameType.ARCADE: TemplateBundle(
        game_type=GameType.ARCADE.value,
        name="Arcade Game",
        description="Classic arcade-style game",
        features=("Fast-paced action", "Score attack", "Power-ups", "Combos"),
        difficulty="intermediate",
        scaffold_components=("PlayerShip", "Enemy", "Projectile"),
        planned_components=("Ship", "Enemy", "Bullet", "PowerUp"),
        hooks=("useControls", "useProjectiles", "useEnemies"),
        assets=("sprites/ship.png", "sounds/laser.mp3"),
        input_hook="useArcadeControls",
    ),
}


def resolve_game_type(game_type: Union[str, GameType, None]) -> Optional[GameType]:
    """Map a raw game type to the enum, or None if unknown"""
    if isinstance(game_type, GameType):
        return game_type
    return GameType.parse(game_type)


def get_bundle(game_type: Union[str, GameType, None]) -> TemplateBundle:
    """
    Look up the template bundle for a game type.

    Args:
        game_type: Game type value

    Returns:
        The matching bundle, or the arcade bundle for unknown types
    """
    resolved = resolve_game_type(game_type)
    if resolved is None:
        return _BUNDLES[DEFAULT_GAME_TYPE]
    return _BUNDLES[resolved]


def get_input_hook(game_type: Union[str, GameType, None]) -> str:
    """
    Name of the keyboard input hook for a game type.

    Unknown types get `useGameControls`, not the arcade hook.
    """
    resolved = resolve_game_type(game_type)
    if resolved is None:
        return DEFAULT_INPUT_HOOK
    return _BUNDLES[resolved].input_hook


def list_bundles() -> List[TemplateBundle]:
    """All bundles in game type declaration order"""
    return [_BUNDLES[game_type] for game_type in GameType]


def get_available_templates() -> Dict[str, Dict]:
    """
    Catalog listing for callers.

    Returns:
        One entry per game type with name, description, features and difficulty
    """
    return {bundle.game_type: bundle.to_listing() for bundle in list_bundles()}
