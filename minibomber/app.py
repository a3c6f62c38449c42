"""The windowed game: main menu, map selection, editor and the play loop."""

from __future__ import annotations

import argparse
import contextlib
import os
import random
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import NamedTuple

os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

import pygame  # noqa: E402

from minibomber.editor import MapEditor  # noqa: E402
from minibomber.enemy import Enemy  # noqa: E402
from minibomber.game import Action, Game  # noqa: E402
from minibomber.level import MAP_HEIGHT, MAP_WIDTH, TILE_SIZE, Level, TileType  # noqa: E402
from minibomber.menus import (  # noqa: E402
    CHOICE_CONTINUE,
    CHOICE_EDITOR,
    CHOICE_LOAD_MAP,
    CHOICE_NEW_GAME,
    CHOICE_QUIT,
    MAPS_DIR,
    Menu,
    PauseAction,
    list_maps,
    main_menu,
    pause_action,
    pause_menu,
)
from minibomber.player import FACING_RIGHT, Player  # noqa: E402
from minibomber.save import SAVE_PATH, load_game, save_game  # noqa: E402

WINDOW_WIDTH = 800
WINDOW_HEIGHT = 800
TITLE = "Mini Bomberman"
FPS = 60
RESOURCES_DIR = "resources"
EXIT_KEY = pygame.K_9
FIRE = "\U0001f525"
HUD_FONT_SIZE = 20

RAYWHITE = (245, 245, 245)
WHITE = (255, 255, 255)
BLACK = (0, 0, 0)
LIGHTGRAY = (200, 200, 200)
GRAY = (130, 130, 130)
DARKGRAY = (80, 80, 80)
RED = (230, 41, 55)
BROWN = (127, 106, 79)
ORANGE = (255, 161, 0)
DARKBLUE = (0, 82, 172)

# Stand-in colours for sprites whose image file cannot be loaded.
_TEXTURE_COLORS = {
    "player": (0, 121, 241),
    "enemy": (112, 31, 126),
    "bomb": (40, 40, 40),
    "ground": LIGHTGRAY,
    "destructible_wall": BROWN,
    "wall_top": GRAY,
    "wall_bottom": GRAY,
    "wall_side_left": GRAY,
    "wall_side_right": GRAY,
    "wall_corner_tl": GRAY,
    "wall_corner_tr": GRAY,
    "wall_corner_bl": GRAY,
    "wall_corner_br": GRAY,
    "wall_middle": GRAY,
}

_KEY_ACTIONS = (
    ((pygame.K_RIGHT, pygame.K_d), Action.RIGHT),
    ((pygame.K_LEFT, pygame.K_a), Action.LEFT),
    ((pygame.K_DOWN, pygame.K_s), Action.DOWN),
    ((pygame.K_UP, pygame.K_w), Action.UP),
    ((pygame.K_SPACE,), Action.PLANT_BOMB),
    ((pygame.K_f,), Action.USE_EXIT),
)


def _half(n: int) -> int:
    """Halve rounding toward zero."""
    return int(n / 2)


def board_offset(screen_width: int, screen_height: int) -> tuple[int, int]:
    """Top-left pixel of the board when it is centred on a screen of this size."""
    return (
        _half(screen_width - MAP_WIDTH * TILE_SIZE),
        _half(screen_height - MAP_HEIGHT * TILE_SIZE),
    )


class _HudTexts(NamedTuple):
    bombs: str
    reach: str
    reach_font_size: int
    score: str


def hud_texts(player: Player) -> _HudTexts:
    """The bomb count, blast reach (with its font size) and score lines shown in play."""
    return _HudTexts(
        bombs=f"Bombas: {player.bombs_available} / {player.bombs_max}",
        reach="Alcance: " + FIRE * player.reach,
        reach_font_size=HUD_FONT_SIZE + (player.reach - 1) * 2,
        score=f"Pontos: {player.score}",
    )


class _Closed(Exception):
    """The window was asked to close."""


@dataclass(frozen=True)
class _Input:
    keys: frozenset[int] = frozenset()
    chars: str = ""

    def pressed(self, *keys: int) -> bool:
        return any(key in self.keys for key in keys)


class _Window:
    def __init__(self) -> None:
        self.surface = pygame.display.set_mode((WINDOW_WIDTH, WINDOW_HEIGHT))
        pygame.display.set_caption(TITLE)
        self.clock = pygame.time.Clock()
        self.dt = 0.0
        self._fonts: dict[int, pygame.font.Font] = {}

    @property
    def size(self) -> tuple[int, int]:
        return self.surface.get_size()

    def poll(self) -> _Input:
        keys: set[int] = set()
        chars: list[str] = []
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                raise _Closed
            if event.type == pygame.KEYDOWN:
                if event.key == EXIT_KEY:
                    raise _Closed
                keys.add(event.key)
            elif event.type == pygame.TEXTINPUT:
                chars.append(event.text)
        return _Input(frozenset(keys), "".join(chars))

    def held(self, key: int) -> bool:
        return bool(pygame.key.get_pressed()[key])

    def flush_keys(self) -> None:
        pygame.event.clear((pygame.KEYDOWN, pygame.TEXTINPUT))

    def _font(self, size: int) -> pygame.font.Font:
        if size not in self._fonts:
            self._fonts[size] = pygame.font.Font(None, size)
        return self._fonts[size]

    def text_width(self, text: str, size: int) -> int:
        return self._font(size).size(text)[0]

    def text(self, text: str, x: int, y: int, size: int, color) -> None:
        if text:
            self.surface.blit(self._font(size).render(text, True, color), (x, y))

    def centred_text(self, text: str, y: int, size: int, color) -> None:
        x = self.size[0] // 2 - self.text_width(text, size) // 2
        self.text(text, x, y, size, color)

    def present(self) -> None:
        pygame.display.flip()
        self.dt = self.clock.tick(FPS) / 1000.0

    def wait_release(self, key: int, message: str, pos: tuple[int, int], color=DARKGRAY) -> None:
        """Show a waiting message until a held key is let go."""
        while True:
            self.poll()
            if not self.held(key):
                return
            self.surface.fill(RAYWHITE)
            self.text(message, pos[0], pos[1], 20, color)
            self.present()


def _load_textures() -> dict[str, pygame.Surface]:
    textures = {}
    for name, color in _TEXTURE_COLORS.items():
        path = os.path.join(RESOURCES_DIR, f"{name}.png")
        try:
            image = pygame.image.load(path).convert_alpha()
        except (pygame.error, OSError):
            image = pygame.Surface((TILE_SIZE, TILE_SIZE))
            image.fill(color)
        textures[name] = image
    return textures


def _draw_menu(window: _Window, title: str, menu: Menu) -> None:
    window.surface.fill(RAYWHITE)
    window.centred_text(title, 100, 40, BLACK)
    for i, option in enumerate(menu.options):
        color = RED if i == menu.selected else DARKGRAY
        window.centred_text(option, 200 + i * 40, 20, color)
    window.present()


def _choose_main(window: _Window) -> int:
    menu = main_menu()
    width, height = window.size
    window.wait_release(pygame.K_RETURN, "Aguarde...", (width // 2 - 80, height // 2))
    while True:
        keys = window.poll()
        if keys.pressed(pygame.K_DOWN):
            menu.move_down()
        if keys.pressed(pygame.K_UP):
            menu.move_up()
        if keys.pressed(pygame.K_RETURN):
            return menu.selected
        _draw_menu(window, TITLE, menu)


def _pause(window: _Window, can_save: bool) -> PauseAction:
    menu = pause_menu(can_save)
    while True:
        keys = window.poll()
        if keys.pressed(pygame.K_DOWN):
            menu.move_down()
        if keys.pressed(pygame.K_UP):
            menu.move_up()
        _draw_menu(window, "Paused", menu)
        if keys.pressed(pygame.K_RETURN):
            return pause_action(can_save, menu.selected)


def _select_map(window: _Window) -> str | None:
    names = list_maps(MAPS_DIR)
    if not names:
        return None
    menu = Menu(names)
    window.wait_release(pygame.K_RETURN, "Aguarde...", (300, 400))
    while True:
        keys = window.poll()
        if keys.pressed(pygame.K_DOWN):
            menu.move_down()
        if keys.pressed(pygame.K_UP):
            menu.move_up()
        if keys.pressed(pygame.K_RETURN):
            return os.path.join(MAPS_DIR, menu.current)
        if keys.pressed(pygame.K_BACKSPACE):
            return None

        window.surface.fill(RAYWHITE)
        window.text("Selecione um mapa personalizado", 80, 50, 30, BLACK)
        for i, name in enumerate(menu.options):
            color = RED if i == menu.selected else DARKGRAY
            window.text(name, 100, 100 + i * 30, 20, color)
        window.text("ENTER: Carregar  |  BACKSPACE: Cancelar", 80, 700, 20, GRAY)
        window.present()


def _confirm_leave(window: _Window) -> bool:
    while True:
        keys = window.poll()
        window.surface.fill(RAYWHITE)
        window.text("Deseja sair do editor?", 240, 280, 20, BLACK)
        window.text("ENTER: Sim    BACKSPACE: Cancelar", 180, 320, 20, DARKGRAY)
        window.present()
        if keys.pressed(pygame.K_RETURN):
            return True
        if keys.pressed(pygame.K_BACKSPACE):
            return False


def _type_filename(window: _Window, editor: MapEditor) -> None:
    while True:
        keys = window.poll()
        for ch in keys.chars:
            editor.type_char(ch)
        if keys.pressed(pygame.K_BACKSPACE):
            editor.backspace()

        window.surface.fill(RAYWHITE)
        window.text("Digite o nome do arquivo e pressione ENTER para salvar", 50, 100, 20, BLACK)
        window.text("Backspace para corrigir", 50, 140, 20, GRAY)
        window.text(editor.filename, 50, 180, 30, DARKBLUE)
        window.present()

        if keys.pressed(pygame.K_RETURN):
            with contextlib.suppress(OSError):
                editor.save(MAPS_DIR)
            editor.filename = ""
            return


_EDITOR_KEYS = (
    (pygame.K_q, TileType.HARD_WALL),
    (pygame.K_e, TileType.SOFT_WALL),
    (pygame.K_c, TileType.EMPTY),
)
_EDITOR_COLORS = {TileType.HARD_WALL: GRAY, TileType.SOFT_WALL: BROWN}


def _draw_editor(window: _Window, editor: MapEditor) -> None:
    surface = window.surface
    ox, oy = board_offset(*window.size)
    surface.fill(RAYWHITE)
    for y, row in enumerate(editor.level.tiles):
        for x, tile in enumerate(row):
            rect = pygame.Rect(ox + x * TILE_SIZE, oy + y * TILE_SIZE, TILE_SIZE, TILE_SIZE)
            pygame.draw.rect(surface, _EDITOR_COLORS.get(tile, LIGHTGRAY), rect)
            pygame.draw.rect(surface, DARKGRAY, rect, 1)
    cursor = pygame.Rect(
        ox + editor.cursor_x * TILE_SIZE, oy + editor.cursor_y * TILE_SIZE, TILE_SIZE, TILE_SIZE
    )
    pygame.draw.rect(surface, RED, cursor, 1)
    window.text("Q: Parede | E: Tijolo | C: Limpar", 10, 10, 20, BLACK)
    window.text("ENTER: Salvar | ESC: Menu", 10, 35, 18, DARKGRAY)
    window.present()


def _edit_map(window: _Window) -> None:
    width, height = window.size
    window.wait_release(pygame.K_RETURN, "Aguarde...", (width // 2 - 60, height // 2), GRAY)
    editor = MapEditor()

    while True:
        keys = window.poll()
        if keys.pressed(pygame.K_RIGHT):
            editor.move(1, 0)
        if keys.pressed(pygame.K_LEFT):
            editor.move(-1, 0)
        if keys.pressed(pygame.K_DOWN):
            editor.move(0, 1)
        if keys.pressed(pygame.K_UP):
            editor.move(0, -1)

        for key, tile in _EDITOR_KEYS:
            if keys.pressed(key):
                editor.place(tile)

        saving = False
        if keys.pressed(pygame.K_RETURN):
            window.wait_release(pygame.K_RETURN, "Aguarde...", (10, 10), GRAY)
            saving = True

        if keys.pressed(pygame.K_ESCAPE) and _confirm_leave(window):
            break

        if saving:
            _type_filename(window, editor)

        _draw_editor(window, editor)

    window.flush_keys()


def _actions(keys: _Input) -> list[Action]:
    return [action for codes, action in _KEY_ACTIONS if keys.pressed(*codes)]


def _blit_sprite(surface: pygame.Surface, texture: pygame.Surface, pos, mirrored: bool) -> None:
    if mirrored:
        texture = pygame.transform.flip(texture, True, False)
    surface.blit(texture, pos)


def _tile_pos(offset: tuple[int, int], x: int, y: int) -> tuple[int, int]:
    return (offset[0] + x * TILE_SIZE, offset[1] + y * TILE_SIZE)


def _draw_level(surface, level: Level, textures, offset) -> None:
    for y, row in enumerate(level.tiles):
        for x, tile in enumerate(row):
            if tile is TileType.SOFT_WALL:
                texture = textures["destructible_wall"]
            elif tile is TileType.HARD_WALL:
                texture = textures[f"wall_{level.wall_piece(x, y).value}"]
            else:
                texture = textures["ground"]
            surface.blit(texture, _tile_pos(offset, x, y))


def _draw_enemies(surface, enemies: Iterable[Enemy], texture, offset) -> None:
    for enemy in enemies:
        if enemy.alive:
            _blit_sprite(surface, texture, _tile_pos(offset, enemy.x, enemy.y), enemy.facing == 1)


def _draw_game(window: _Window, game: Game, textures) -> None:
    surface = window.surface
    offset = board_offset(*window.size)
    surface.fill(RAYWHITE)

    _draw_level(surface, game.level, textures, offset)
    for bomb in game.bombs.bombs:
        if bomb.active:
            surface.blit(textures["bomb"], _tile_pos(offset, bomb.x, bomb.y))
    for flame in game.bombs.explosions:
        if flame.active:
            rect = pygame.Rect(*_tile_pos(offset, flame.x, flame.y), TILE_SIZE, TILE_SIZE)
            pygame.draw.rect(surface, ORANGE, rect)
    _draw_enemies(surface, game.enemies, textures["enemy"], offset)

    hud = hud_texts(game.player)
    grid_width = MAP_WIDTH * TILE_SIZE
    window.text(hud.bombs, offset[0], offset[1] - 50, HUD_FONT_SIZE, BLACK)
    reach_width = window.text_width(hud.reach, hud.reach_font_size)
    window.text(
        hud.reach, offset[0] + grid_width - reach_width, offset[1] - 50, hud.reach_font_size, RED
    )
    window.text(hud.score, 10, 10, HUD_FONT_SIZE, BLACK)

    player = game.player
    if player.alive:
        _blit_sprite(
            surface,
            textures["player"],
            _tile_pos(offset, player.x, player.y),
            player.facing == FACING_RIGHT,
        )
    else:
        window.text("GAME  OVER", 250, 220, 40, RED)
        window.text("Pressione R para reiniciar ou ESC para sair", 120, 280, 20, DARKGRAY)


def _play(window: _Window, game: Game, textures, can_save: bool) -> bool:
    """Run the game until the player leaves it; True if the whole program should end."""
    while True:
        keys = window.poll()
        game.update(window.dt, _actions(keys))

        if keys.pressed(pygame.K_ESCAPE):
            action = _pause(window, can_save)
            if action is PauseAction.RETURN_TO_MENU:
                return False
            if action is PauseAction.EXIT:
                return True
            if action is PauseAction.SAVE and can_save:
                with contextlib.suppress(OSError):
                    save_game(game, SAVE_PATH)
            keys = _Input()

        _draw_game(window, game, textures)

        if not game.player.alive:
            if keys.pressed(pygame.K_r):
                game.restart()
                window.flush_keys()
            elif keys.pressed(pygame.K_ESCAPE):
                return False

        window.present()


def _start_game(window: _Window, choice: int, rng: random.Random) -> Game | None:
    if choice == CHOICE_NEW_GAME:
        return Game.new(rng)
    if choice == CHOICE_CONTINUE:
        try:
            return load_game(SAVE_PATH, rng)
        except (OSError, ValueError):
            return Game.new(rng)
    if choice == CHOICE_LOAD_MAP:
        path = _select_map(window)
        if path is None:
            return None
        try:
            level = Level.from_file(path)
        except OSError:
            level = Level.generate(rng)
        return Game(level, rng)
    return None


def _run(window: _Window, textures, rng: random.Random) -> None:
    while True:
        window.flush_keys()
        choice = _choose_main(window)
        if choice == CHOICE_QUIT:
            return
        if choice == CHOICE_EDITOR:
            window.flush_keys()
            _edit_map(window)
            continue
        game = _start_game(window, choice, rng)
        if game is None:
            continue
        if _play(window, game, textures, can_save=choice != CHOICE_LOAD_MAP):
            return


def main(argv: Sequence[str] | None = None) -> int:
    """Open the game window and run until it is closed."""
    parser = argparse.ArgumentParser(prog="minibomber", description=TITLE)
    parser.add_argument("--seed", type=int, default=None, help="seed for level generation")
    args = parser.parse_args(argv)
    rng = random.Random(args.seed)

    pygame.init()
    try:
        window = _Window()
        _run(window, _load_textures(), rng)
    except _Closed:
        pass
    finally:
        pygame.quit()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())