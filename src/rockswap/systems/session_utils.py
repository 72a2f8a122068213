from esper import World

from rockswap.components.board import Board
from rockswap.components.game_session import GameSession
from rockswap.components.palette import Palette


def get_or_create_session(world: World) -> GameSession:
    """Return the shared GameSession component, creating it if absent."""
    existing = list(world.get_component(GameSession))
    if existing:
        return existing[0][1]
    world.create_entity(GameSession())
    return list(world.get_component(GameSession))[0][1]


def get_board(world: World) -> Board | None:
    for _, board in world.get_component(Board):
        return board
    return None


def get_palette(world: World) -> Palette:
    for _, palette in world.get_component(Palette):
        return palette
    raise RuntimeError("Palette definitions not found")


def get_rng(world: World):
    return getattr(world, "random", None)
