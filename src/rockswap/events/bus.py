from blinker import Signal
from typing import Dict

class EventBus:
    """Simple event bus leveraging blinker Signal objects."""
    def __init__(self):
        self._signals: Dict[str, Signal] = {}

    def subscribe(self, name: str, fn):
        sig = self._signals.setdefault(name, Signal(name))
        # Use weak=False to retain strong reference to bound methods so systems not kept in a variable still receive events.
        sig.connect(fn, weak=False)

    def unsubscribe(self, name: str, fn):
        sig = self._signals.get(name)
        if sig:
            sig.disconnect(fn)

    def emit(self, name: str, **payload):
        sig = self._signals.get(name)
        if sig:
            sig.send(self, **payload)


# ============================================================================
# INPUT & INTERACTION
# ============================================================================
EVENT_MOUSE_PRESS = "mouse_press"          # payload: x, y, button
EVENT_TILE_CLICK = "tile_click"            # payload: row, col


# ============================================================================
# TILE & BOARD MECHANICS
# ============================================================================
EVENT_TILE_SELECTED = "tile_selected"              # payload: row, col
EVENT_TILE_DESELECTED = "tile_deselected"          # payload: reason=str
EVENT_TILE_SWAP_REQUEST = "tile_swap_request"      # payload: src=(r,c), dst=(r,c)
EVENT_TILE_SWAP_VALID = "tile_swap_valid"          # payload: src=(r,c), dst=(r,c), activation=WildcardActivation|None
EVENT_TILE_SWAP_INVALID = "tile_swap_invalid"      # payload: src=(r,c), dst=(r,c), reason=str
EVENT_TILE_SWAP_FINALIZE = "tile_swap_finalize"    # payload: src=(r,c), dst=(r,c)
EVENT_MATCH_FOUND = "match_found"                  # payload: positions=[(r,c),...], size=int, depth=int
EVENT_SPECIAL_CREATED = "special_created"          # payload: position=(r,c), kind=SpecialKind, color=int
EVENT_SPECIAL_ACTIVATED = "special_activated"      # payload: positions=[(r,c),...], depth=int
EVENT_MATCH_CLEARED = "match_cleared"              # payload: positions=[(r,c),...], points=int, depth=int
EVENT_GRAVITY_APPLIED = "gravity_applied"          # payload: moves=list[GravityMove]
EVENT_REFILL_COMPLETED = "refill_completed"        # payload: new_tiles=[(r,c),...]
EVENT_CASCADE_STEP = "cascade_step"                # payload: depth=int, positions=[(r,c),...], points=int, gained=int, score=int
EVENT_CASCADE_COMPLETE = "cascade_complete"        # payload: depth=int, gained=int, score=int
EVENT_CASCADE_LIMIT_REACHED = "cascade_limit_reached"  # payload: max_passes=int, hits=int
EVENT_BOARD_CHANGED = "board_changed"              # payload: reason=str


# ============================================================================
# SCORE & GAME FLOW
# ============================================================================
EVENT_SCORE_CHANGED = "score_changed"      # payload: score=int, best=int, moves=int, gained=int
EVENT_GAME_OVER = "game_over"              # payload: score=int, best=int, moves=int
EVENT_GAME_RESET = "game_reset"            # payload: reason=str|None
EVENT_BOARD_RESET = "board_reset"          # payload: positions=[(r,c),...]
