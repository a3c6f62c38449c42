"""Menu selection state: main menu, pause menu and the custom map list."""

from __future__ import annotations

import enum
import os
from collections.abc import Sequence

MAPS_DIR = "mapas"
MAX_MAPS = 64
MAX_MAP_NAME = 63
MAP_SUFFIX = ".txt"

MAIN_MENU_OPTIONS = (
    "1. Novo Jogo",
    "2. Continuar",
    "3. Carregar Mapa",
    "4. Editor de Mapa",
    "5. Sair",
)

CHOICE_NEW_GAME = 0
CHOICE_CONTINUE = 1
CHOICE_LOAD_MAP = 2
CHOICE_EDITOR = 3
CHOICE_QUIT = 4

PAUSE_OPTIONS_WITH_SAVE = (
    "1. Return",
    "2. Save Game",
    "3. Exit Game",
    "4. Return to Main Menu",
)
PAUSE_OPTIONS_NO_SAVE = (
    "1. Return",
    "2. Exit Editor",
    "3. Return to Main Menu",
)


class PauseAction(enum.IntEnum):
    """What the player chose in the pause menu."""

    RETURN = 0
    SAVE = 1
    EXIT = 2
    RETURN_TO_MENU = 3


_PAUSE_WITH_SAVE = (
    PauseAction.RETURN,
    PauseAction.SAVE,
    PauseAction.EXIT,
    PauseAction.RETURN_TO_MENU,
)
_PAUSE_NO_SAVE = (
    PauseAction.RETURN,
    PauseAction.EXIT,
    PauseAction.RETURN_TO_MENU,
)


class Menu:
    """A list of options with one selected entry; moving wraps around."""

    def __init__(self, options: Sequence[str]) -> None:
        self.options = tuple(options)
        if not self.options:
            raise ValueError("a menu needs at least one option")
        self.selected = 0

    @property
    def current(self) -> str:
        return self.options[self.selected]

    def __len__(self) -> int:
        return len(self.options)

    def move_down(self) -> int:
        self.selected = (self.selected + 1) % len(self.options)
        return self.selected

    def move_up(self) -> int:
        self.selected = (self.selected - 1) % len(self.options)
        return self.selected


def main_menu() -> Menu:
    return Menu(MAIN_MENU_OPTIONS)


def pause_menu(can_save: bool) -> Menu:
    """The pause menu; without saving the save entry is left out."""
    return Menu(PAUSE_OPTIONS_WITH_SAVE if can_save else PAUSE_OPTIONS_NO_SAVE)


def pause_action(can_save: bool, index: int) -> PauseAction:
    """The action behind the option at ``index`` of the matching pause menu."""
    actions = _PAUSE_WITH_SAVE if can_save else _PAUSE_NO_SAVE
    if not 0 <= index < len(actions):
        raise ValueError(f"no pause option at index {index}")
    return actions[index]


def list_maps(directory: str | os.PathLike[str] = MAPS_DIR) -> list[str]:
    """Names of map files in a directory, at most MAX_MAPS, sorted.

    A missing or unreadable directory gives an empty list.
    """
    try:
        entries = sorted(os.listdir(directory))
    except OSError:
        return []
    names = [name[:MAX_MAP_NAME] for name in entries if MAP_SUFFIX in name]
    return names[:MAX_MAPS]