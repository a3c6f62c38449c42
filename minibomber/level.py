"""The tile map: generation, loading from text files and wall shapes."""

from __future__ import annotations

import enum
import os
import random
from collections.abc import Iterator, Sequence

MAP_WIDTH = 15
MAP_HEIGHT = 15
TILE_SIZE = 32

SOFT_WALL_CHANCE = 30
EXIT_PLACEMENT_TRIES = 1000
START_AREA = 3

# A map file row is read in chunks of at most this many characters.
_ROW_CHUNK = MAP_WIDTH + 1


class TileType(enum.IntEnum):
    """What occupies one cell of the map."""

    EMPTY = 0
    HARD_WALL = 1
    SOFT_WALL = 2
    EXIT = 3
    POWERUP_BOMB = 4
    POWERUP_RANGE = 5


class WallPiece(enum.Enum):
    """Which part of a wall block an indestructible tile shows."""

    CORNER_TL = "corner_tl"
    CORNER_TR = "corner_tr"
    CORNER_BL = "corner_bl"
    CORNER_BR = "corner_br"
    TOP = "top"
    BOTTOM = "bottom"
    LEFT = "side_left"
    RIGHT = "side_right"
    MIDDLE = "middle"


WALKABLE = frozenset(
    {TileType.EMPTY, TileType.POWERUP_BOMB, TileType.POWERUP_RANGE, TileType.EXIT}
)

_FILE_TILES = {"W": TileType.HARD_WALL, "B": TileType.SOFT_WALL}
_TILE_CHARS = {TileType.HARD_WALL: "W", TileType.SOFT_WALL: "B"}


def _in_start_area(x: int, y: int) -> bool:
    return x <= START_AREA and y <= START_AREA


def _row_chunks(text: str) -> Iterator[str]:
    """Split text the way a fixed-size line reader would: at newlines or every chunk size."""
    pos = 0
    while pos < len(text):
        newline = text.find("\n", pos, pos + _ROW_CHUNK)
        end = newline + 1 if newline != -1 else min(pos + _ROW_CHUNK, len(text))
        yield text[pos:end]
        pos = end


class Level:
    """A MAP_WIDTH x MAP_HEIGHT grid of tiles and the hidden exit position."""

    def __init__(
        self,
        tiles: Sequence[Sequence[int]],
        exit_pos: tuple[int, int] | None = None,
    ) -> None:
        if len(tiles) != MAP_HEIGHT or any(len(row) != MAP_WIDTH for row in tiles):
            raise ValueError(f"a level must be {MAP_WIDTH}x{MAP_HEIGHT} tiles")
        self.tiles: list[list[TileType]] = [[TileType(t) for t in row] for row in tiles]
        self.exit_pos = tuple(exit_pos) if exit_pos is not None else None

    @property
    def width(self) -> int:
        return MAP_WIDTH

    @property
    def height(self) -> int:
        return MAP_HEIGHT

    @classmethod
    def empty(cls) -> Level:
        """A level with every tile empty and no exit."""
        return cls([[TileType.EMPTY] * MAP_WIDTH for _ in range(MAP_HEIGHT)])

    @classmethod
    def generate(cls, rng: random.Random) -> Level:
        """Build a random level with a border, pillars, soft walls and a hidden exit."""
        tiles = []
        for y in range(MAP_HEIGHT):
            row = []
            for x in range(MAP_WIDTH):
                border = y in (0, MAP_HEIGHT - 1) or x in (0, MAP_WIDTH - 1)
                pillar = y % 2 == 0 and x % 2 == 0
                if border or pillar:
                    row.append(TileType.HARD_WALL)
                elif rng.randrange(100) < SOFT_WALL_CHANCE:
                    row.append(TileType.SOFT_WALL)
                else:
                    row.append(TileType.EMPTY)
            tiles.append(row)

        for x, y in ((1, 1), (2, 1), (1, 2)):
            tiles[y][x] = TileType.EMPTY

        level = cls(tiles)
        level.exit_pos = level._pick_exit(rng)
        return level

    def _pick_exit(self, rng: random.Random) -> tuple[int, int] | None:
        for _ in range(EXIT_PLACEMENT_TRIES):
            x = rng.randrange(MAP_WIDTH)
            y = rng.randrange(MAP_HEIGHT)
            if self.tiles[y][x] is TileType.SOFT_WALL and not _in_start_area(x, y):
                return (x, y)
        for y in range(MAP_HEIGHT - 2, -1, -1):
            for x in range(MAP_WIDTH - 2, -1, -1):
                if self.tiles[y][x] is TileType.SOFT_WALL:
                    return (x, y)
        return None

    @classmethod
    def from_file(cls, path: str | os.PathLike[str]) -> Level:
        """Load a map file: 'W' is a hard wall, 'B' a soft wall, anything else empty."""
        with open(path, encoding="latin-1") as f:
            text = f.read()
        level = cls.empty()
        for y, chunk in zip(range(MAP_HEIGHT), _row_chunks(text)):
            for x, ch in enumerate(chunk[:MAP_WIDTH]):
                level.tiles[y][x] = _FILE_TILES.get(ch, TileType.EMPTY)
        return level

    def to_text(self) -> str:
        """The map in file form, one line per row."""
        return "".join(
            "".join(_TILE_CHARS.get(tile, " ") for tile in row) + "\n" for row in self.tiles
        )

    def save_file(self, path: str | os.PathLike[str]) -> None:
        with open(path, "w", encoding="latin-1", newline="\n") as f:
            f.write(self.to_text())

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < MAP_WIDTH and 0 <= y < MAP_HEIGHT

    def __getitem__(self, pos: tuple[int, int]) -> TileType:
        x, y = pos
        if not self.in_bounds(x, y):
            raise IndexError(f"tile {pos} is outside the map")
        return self.tiles[y][x]

    def __setitem__(self, pos: tuple[int, int], tile: int) -> None:
        x, y = pos
        if not self.in_bounds(x, y):
            raise IndexError(f"tile {pos} is outside the map")
        self.tiles[y][x] = TileType(tile)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Level):
            return NotImplemented
        return self.tiles == other.tiles and self.exit_pos == other.exit_pos

    def __repr__(self) -> str:
        return f"Level(exit_pos={self.exit_pos!r})"

    def is_walkable(self, x: int, y: int) -> bool:
        return self.in_bounds(x, y) and self.tiles[y][x] in WALKABLE

    def _is_hard(self, x: int, y: int) -> bool:
        return self.in_bounds(x, y) and self.tiles[y][x] is TileType.HARD_WALL

    def wall_piece(self, x: int, y: int) -> WallPiece | None:
        """The wall shape shown at a hard wall tile, or None for any other tile."""
        if not self._is_hard(x, y):
            return None
        top = not self._is_hard(x, y - 1)
        bottom = not self._is_hard(x, y + 1)
        left = not self._is_hard(x - 1, y)
        right = not self._is_hard(x + 1, y)

        if top and left:
            return WallPiece.CORNER_TL
        if top and right:
            return WallPiece.CORNER_TR
        if bottom and left:
            return WallPiece.CORNER_BL
        if bottom and right:
            return WallPiece.CORNER_BR
        if top:
            return WallPiece.TOP
        if bottom:
            return WallPiece.BOTTOM
        if left:
            return WallPiece.LEFT
        if right:
            return WallPiece.RIGHT
        return WallPiece.MIDDLE