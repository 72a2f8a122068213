"""Entry point for the RockSwap tile-matching puzzle.

Sets up ECS world, event bus, systems, and Arcade window.
"""
from arcade import Window, run, set_background_color, color, key
from rockswap.world import create_world
from rockswap.constants import GRID_ROWS, GRID_COLS
from rockswap.events.bus import EventBus, EVENT_MOUSE_PRESS, EVENT_GAME_RESET
from rockswap.systems.board import BoardSystem
from rockswap.systems.input import InputSystem
from rockswap.systems.match import MatchSystem
from rockswap.systems.match_resolution import MatchResolutionSystem
from rockswap.systems.render import RenderSystem


class RockSwapWindow(Window):
    def __init__(self):
        super().__init__(640, 720, "RockSwap", resizable=True)
        self.set_update_rate(1/60)
        self.event_bus = EventBus()
        self.world = create_world(self.event_bus)

        # Board and resolution systems
        self.board_system = BoardSystem(self.world, self.event_bus, rows=GRID_ROWS, cols=GRID_COLS)
        self.match_system = MatchSystem(self.world, self.event_bus)
        self.match_resolution_system = MatchResolutionSystem(self.world, self.event_bus)

        # Interface systems
        self.input_system = InputSystem(self.event_bus, self, self.world)
        self.render_system = RenderSystem(self.world, self.event_bus, self)

        set_background_color(color.BLACK)

    def on_draw(self):
        self.clear()
        self.render_system.process()

    def on_mouse_press(self, x: float, y: float, button: int, modifiers: int):
        self.event_bus.emit(EVENT_MOUSE_PRESS, x=x, y=y, button=button)

    def on_key_press(self, symbol: int, modifiers: int):
        if symbol == key.R:
            self.event_bus.emit(EVENT_GAME_RESET, reason="restart_key")


def main():
    window = RockSwapWindow()
    run()

if __name__ == "__main__":
    main()
