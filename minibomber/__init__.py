"""A small grid-based bomb-laying arcade game with a map editor, played in a pygame window."""

__version__ = "1.0.0"
__all__ = ["app", "bombs", "editor", "enemy", "game", "level", "menus", "player", "save"]