import random

from minibomber.bombs import BOMB_FUSE
from minibomber.enemy import MAX_ENEMIES
from minibomber.level import Level, TileType
from minibomber.player import FACING_LEFT, START_BOMBS, START_X, START_Y
from minibomber.game import Action, Game


def _quiet_game():
    game = Game(Level.empty(), random.Random(0))
    game.enemies = []
    return game


def test_new_game():
    game = Game.new(random.Random(7))
    assert (game.player.x, game.player.y) == (START_X, START_Y)
    assert len(game.enemies) == MAX_ENEMIES
    assert game.level[0, 0] is TileType.HARD_WALL
    assert game.game_over is False


def test_move_action():
    game = _quiet_game()
    game.update(0.01, {Action.RIGHT})
    assert (game.player.x, game.player.y) == (START_X + 1, START_Y)


def test_left_and_right_together_face_left():
    game = _quiet_game()
    game.player.x = 5
    game.update(0.01, {Action.LEFT, Action.RIGHT})
    assert game.player.x == 5
    assert game.player.facing == FACING_LEFT


def test_plant_bomb():
    game = _quiet_game()
    game.update(0.01, [Action.PLANT_BOMB])
    assert game.bombs.bomb_at(START_X, START_Y)
    assert game.player.bombs_available == START_BOMBS - 1


def test_no_bombs_left():
    game = _quiet_game()
    game.player.bombs_available = 0
    game.update(0.01, [Action.PLANT_BOMB])
    assert not game.bombs.bomb_at(START_X, START_Y)
    assert game.player.bombs_available == 0


def test_own_bomb_kills_player():
    game = _quiet_game()
    game.update(0.01, [Action.PLANT_BOMB])
    game.update(BOMB_FUSE)
    assert game.bombs.explosion_at(START_X, START_Y)
    game.update(0.01)
    assert game.game_over is True


def test_dead_player_does_not_move():
    game = _quiet_game()
    game.player.alive = False
    game.update(0.01, {Action.RIGHT})
    assert (game.player.x, game.player.y) == (START_X, START_Y)


def test_exit_leads_to_next_level_keeping_score():
    game = _quiet_game()
    game.level[START_X, START_Y] = TileType.EXIT
    game.player.score = 300
    game.player.x = START_X
    game.update(0.01, {Action.USE_EXIT})
    assert game.player.score == 300
    assert game.level[0, 0] is TileType.HARD_WALL
    assert len(game.enemies) == MAX_ENEMIES


def test_exit_needs_action():
    game = _quiet_game()
    game.level[START_X, START_Y] = TileType.EXIT
    game.update(0.01)
    assert game.level[START_X, START_Y] is TileType.EXIT
    assert game.level[0, 0] is TileType.EMPTY


def test_restart_resets_player_and_bombs():
    game = _quiet_game()
    game.update(0.01, [Action.PLANT_BOMB])
    game.player.alive = False
    game.player.score = 500
    game.restart()
    assert game.player.alive is True
    assert game.player.score == 0
    assert not any(b.active for b in game.bombs.bombs)
    assert len(game.enemies) == MAX_ENEMIES