"""The map editor: a cursor over an empty level and a file name being typed."""

from __future__ import annotations

import os

from minibomber.level import Level, TileType
from minibomber.menus import MAP_SUFFIX, MAPS_DIR

MAX_FILENAME = 63
EDITABLE_TILES = frozenset({TileType.HARD_WALL, TileType.SOFT_WALL, TileType.EMPTY})


class MapEditor:
    """Edits a level tile by tile and saves it as a map file."""

    def __init__(self) -> None:
        self.level = Level.empty()
        self.cursor_x = 0
        self.cursor_y = 0
        self.filename = ""

    @property
    def cursor(self) -> tuple[int, int]:
        return (self.cursor_x, self.cursor_y)

    def move(self, dx: int, dy: int) -> tuple[int, int]:
        """Move the cursor; each axis stays put where it would leave the map."""
        if self.level.in_bounds(self.cursor_x + dx, self.cursor_y):
            self.cursor_x += dx
        if self.level.in_bounds(self.cursor_x, self.cursor_y + dy):
            self.cursor_y += dy
        return self.cursor

    def place(self, tile: TileType) -> None:
        """Put a hard wall, soft wall or empty tile under the cursor."""
        tile = TileType(tile)
        if tile not in EDITABLE_TILES:
            raise ValueError(f"{tile.name} cannot be placed in the editor")
        self.level[self.cursor] = tile

    def type_char(self, ch: str) -> bool:
        """Append a printable character to the file name; False if it was refused."""
        if len(ch) != 1 or not 32 <= ord(ch) <= 125:
            return False
        if len(self.filename) >= MAX_FILENAME:
            return False
        self.filename += ch
        return True

    def backspace(self) -> None:
        self.filename = self.filename[:-1]

    def save(self, directory: str | os.PathLike[str] = MAPS_DIR) -> str | None:
        """Write the map under the typed name and clear the name.

        Returns the file written, or None when no name was typed.
        """
        name, self.filename = self.filename, ""
        if not name:
            return None
        path = os.path.join(os.fspath(directory), name + MAP_SUFFIX)
        self.level.save_file(path)
        return path