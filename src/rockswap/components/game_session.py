from dataclasses import dataclass
from typing import Optional, Tuple

Position = Tuple[int, int]


@dataclass(frozen=True, slots=True)
class WildcardActivation:
    """A swap that moved a wildcard, waiting to fire on the next cascade pass.

    ``target_color`` is the partner tile's color; None means both swapped tiles
    were wildcards and the whole board is cleared.
    """
    origin: Position
    partner: Position
    target_color: Optional[int]

    @property
    def full_board(self) -> bool:
        return self.target_color is None


@dataclass(slots=True)
class GameSession:
    """Per-game state owned by the resolution flow."""

    score: int = 0
    best_score: int = 0
    moves: int = 0
    game_over: bool = False
    resolving: bool = False
    pending_activation: Optional[WildcardActivation] = None
    cascade_depth: int = 0
    last_gain: int = 0
    cascade_limit_hits: int = 0

    def add_points(self, gained: int) -> None:
        self.score += gained
        self.last_gain = gained
        if self.score > self.best_score:
            self.best_score = self.score

    def reset(self) -> None:
        """Start a fresh game; the best score survives."""
        self.score = 0
        self.moves = 0
        self.game_over = False
        self.resolving = False
        self.pending_activation = None
        self.cascade_depth = 0
        self.last_gain = 0
