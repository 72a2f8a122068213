from dataclasses import dataclass, field
from typing import List, Tuple


@dataclass(slots=True)
class Palette:
    """Display names and colors for each tile color index.

    The engine only deals in indices; this component lives on a single entity
    and is read by the renderer and by board setup to learn the palette size.
    """
    names: List[str]
    colors: List[Tuple[int, int, int]] = field(default_factory=list)

    def __post_init__(self) -> None:
        if len(self.colors) < len(self.names):
            missing = len(self.names) - len(self.colors)
            self.colors = list(self.colors) + [(128, 128, 128)] * missing

    def __len__(self) -> int:
        return len(self.names)

    def color_for(self, index: int) -> Tuple[int, int, int]:
        if 0 <= index < len(self.colors):
            return self.colors[index]
        return (128, 128, 128)

    def name_for(self, index: int) -> str:
        if 0 <= index < len(self.names):
            return self.names[index]
        return "unknown"


DEFAULT_PALETTE = (
    ("gray", (128, 128, 128)),
    ("green", (80, 180, 80)),
    ("orange", (220, 120, 60)),
    ("purple", (150, 80, 180)),
    ("blue", (60, 170, 220)),
    ("yellow", (220, 200, 70)),
    ("red", (200, 60, 60)),
    ("cyan", (70, 170, 170)),
)


def default_palette(count: int) -> Palette:
    entries = list(DEFAULT_PALETTE[:count])
    while len(entries) < count:
        entries.append((f"color_{len(entries)}", (128, 128, 128)))
    return Palette(names=[name for name, _ in entries], colors=[rgb for _, rgb in entries])
