from rockswap.events.bus import EventBus, EVENT_MOUSE_PRESS, EVENT_TILE_CLICK
from rockswap.constants import MOUSE_BUTTON_LEFT
from rockswap.systems.session_utils import get_board, get_or_create_session
from rockswap.ui.layout import cell_at_point


class InputSystem:
    """Turns left clicks on the board into tile clicks."""

    def __init__(self, event_bus: EventBus, window, world):
        self.event_bus = event_bus
        self.window = window
        self.world = world
        self.event_bus.subscribe(EVENT_MOUSE_PRESS, self.on_mouse_press)

    def on_mouse_press(self, sender, **kwargs):
        x = kwargs.get('x')
        y = kwargs.get('y')
        if x is None or y is None:
            return
        # Other buttons fall through; BoardSystem listens for right-click directly.
        if kwargs.get('button') != MOUSE_BUTTON_LEFT:
            return
        session = get_or_create_session(self.world)
        if session.resolving or session.game_over:
            return
        board = get_board(self.world)
        if board is None:
            return
        cell = cell_at_point(x, y, self.window.width, self.window.height, board.rows, board.cols)
        if cell is None:
            return
        row, col = cell
        self.event_bus.emit(EVENT_TILE_CLICK, row=row, col=col)
