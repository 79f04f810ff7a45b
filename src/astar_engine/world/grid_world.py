"""Text-encoded grid worlds for exercising the search engine.

A world is a block of text, one character per tile:

    .  plain     (cost 1)
    ~  river     (cost 2)
    M  mountain  (cost 3)
    X  blocker   (impassable)
    F  from      (start tile, cost 1)
    T  to        (goal tile, cost 1)

Moving into a tile costs that tile's entry cost. Unknown characters decode as
blockers. Rendering a path marks every tile on it with ``●``.
"""

import math
from enum import Enum
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

import numpy as np


class TileKind(Enum):
    """Kinds of tile and their text characters."""
    PLAIN = '.'
    RIVER = '~'
    MOUNTAIN = 'M'
    BLOCKER = 'X'
    FROM = 'F'
    TO = 'T'
    PATH = '●'


KIND_COSTS: Dict[TileKind, float] = {
    TileKind.PLAIN: 1.0,
    TileKind.RIVER: 2.0,
    TileKind.MOUNTAIN: 3.0,
    TileKind.FROM: 1.0,
    TileKind.TO: 1.0,
}

_CHAR_KINDS = {kind.value: kind for kind in TileKind if kind is not TileKind.PATH}

# left, right, up, down
_OFFSETS = ((-1, 0), (1, 0), (0, -1), (0, 1))


class WorldParseError(ValueError):
    """Raised when a world text cannot be decoded into a searchable world."""
    pass


class Tile:
    """A single grid cell. Implements the ``Pather`` contract."""

    __slots__ = ('kind', 'x', 'y', 'world')

    def __init__(self, kind: TileKind, x: int, y: int, world: "GridWorld"):
        self.kind = kind
        self.x = x
        self.y = y
        self.world = world

    @property
    def cost(self) -> float:
        """Cost of moving into this tile."""
        return KIND_COSTS.get(self.kind, math.inf)

    def path_neighbors(self) -> List["Tile"]:
        neighbors = []
        for dx, dy in _OFFSETS:
            tile = self.world.tile(self.x + dx, self.y + dy)
            if tile is not None and tile.kind is not TileKind.BLOCKER:
                neighbors.append(tile)
        return neighbors

    def path_neighbor_cost(self, to: "Tile") -> float:
        return to.cost

    def path_estimated_cost(self, to: "Tile") -> float:
        return float(abs(self.x - to.x) + abs(self.y - to.y))

    def __repr__(self) -> str:
        return f"Tile({self.kind.value!r}, x={self.x}, y={self.y})"


class GridWorld:
    """Tiles addressed by column ``x`` and row ``y``."""

    def __init__(self):
        self._tiles: Dict[Tuple[int, int], Tile] = {}
        self.width = 0
        self.height = 0

    def set_tile(self, kind: TileKind, x: int, y: int) -> Tile:
        """Create (or replace) the tile at ``(x, y)``."""
        tile = Tile(kind, x, y, self)
        self._tiles[(x, y)] = tile
        self.width = max(self.width, x + 1)
        self.height = max(self.height, y + 1)
        return tile

    def tile(self, x: int, y: int) -> Optional[Tile]:
        return self._tiles.get((x, y))

    def tiles(self) -> List[Tile]:
        """All tiles in row-major order."""
        return [self._tiles[key] for key in sorted(self._tiles, key=lambda k: (k[1], k[0]))]

    def first_of_kind(self, kind: TileKind) -> Optional[Tile]:
        for tile in self.tiles():
            if tile.kind is kind:
                return tile
        return None

    def from_tile(self) -> Optional[Tile]:
        return self.first_of_kind(TileKind.FROM)

    def to_tile(self) -> Optional[Tile]:
        return self.first_of_kind(TileKind.TO)

    def cost_grid(self) -> np.ndarray:
        """Entry costs as a ``(height, width)`` array; blockers and gaps are inf."""
        grid = np.full((self.height, self.width), np.inf, dtype=np.float64)
        for (x, y), tile in self._tiles.items():
            grid[y, x] = tile.cost
        return grid

    def render_path(self, path: Iterable[Tile] = ()) -> str:
        """Render the world with ``path`` tiles marked."""
        on_path = {(tile.x, tile.y) for tile in path}
        rows = []
        for y in range(self.height):
            row = []
            for x in range(self.width):
                tile = self.tile(x, y)
                if (x, y) in on_path:
                    row.append(TileKind.PATH.value)
                elif tile is not None:
                    row.append(tile.kind.value)
                else:
                    row.append(' ')
            rows.append(''.join(row))
        return '\n'.join(rows)


def parse_world(text: str) -> GridWorld:
    """Parse a text-encoded world. Surrounding whitespace is ignored."""
    world = GridWorld()
    for y, row in enumerate(text.strip().split('\n')):
        for x, char in enumerate(row):
            world.set_tile(_CHAR_KINDS.get(char, TileKind.BLOCKER), x, y)
    return world


def decode(text: str) -> Tuple[List[Tile], Tile, Tile]:
    """Decode a world into its tiles, start tile and goal tile.

    Raises:
        WorldParseError: If the world has no ``F`` or no ``T`` tile
    """
    world = parse_world(text)
    start = world.from_tile()
    goal = world.to_tile()
    if start is None:
        raise WorldParseError(f"World has no start tile ({TileKind.FROM.value!r})")
    if goal is None:
        raise WorldParseError(f"World has no goal tile ({TileKind.TO.value!r})")
    return world.tiles(), start, goal


def render(tiles: Sequence[Tile], path: Iterable[Tile] = ()) -> str:
    """Render the world the given tiles belong to, marking ``path``."""
    if not tiles:
        return ''
    return tiles[0].world.render_path(path)
