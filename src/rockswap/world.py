import random

from esper import World
from .events.bus import EventBus
from rockswap.components.game_session import GameSession
from rockswap.components.palette import default_palette
from rockswap.constants import COLOR_COUNT


def create_world(
    event_bus: EventBus,
    *,
    colors: int = COLOR_COUNT,
    rng: random.Random | None = None,
) -> World:
    """Create the world with its session and palette entities.

    The board itself is created by ``BoardSystem`` so tests can choose its size.
    """
    world = World()
    setattr(world, "random", rng or random.Random())

    world.create_entity(GameSession())
    world.create_entity(default_palette(colors))
    return world
