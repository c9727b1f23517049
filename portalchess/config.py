"""Game configuration loaded from JSON: settings, pieces and portals."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from os import PathLike
from typing import Any

from portalchess.portal import Position

_STANDARD_ABILITIES = ("castling", "royal", "jump_over", "promotion", "en_passant")
_MOVEMENT_INTS = ("forward", "sideways", "diagonal", "diagonal_capture", "first_move_forward")


@dataclass
class Movement:
    """How far a piece may travel in each kind of direction."""

    forward: int = 0
    sideways: int = 0
    diagonal: int = 0
    l_shape: bool = False
    diagonal_capture: int = 0
    first_move_forward: int = 0


@dataclass
class SpecialAbilities:
    """Standard abilities plus any extra named ones."""

    castling: bool = False
    royal: bool = False
    jump_over: bool = False
    promotion: bool = False
    en_passant: bool = False
    custom_abilities: dict[str, bool] = field(default_factory=dict)


@dataclass
class PieceConfig:
    """A piece type with its starting squares for each color."""

    type: str = ""
    positions: dict[str, list[Position]] = field(default_factory=dict)
    movement: Movement = field(default_factory=Movement)
    special_abilities: SpecialAbilities = field(default_factory=SpecialAbilities)
    count: int = 0


@dataclass
class PortalProperties:
    """Behaviour settings of a portal."""

    preserve_direction: bool = False
    allowed_colors: list[str] = field(default_factory=list)
    cooldown: int = 0


@dataclass
class PortalConfig:
    """A portal's identifier, squares and properties."""

    id: str = ""
    entry: Position = field(default_factory=Position)
    exit: Position = field(default_factory=Position)
    properties: PortalProperties = field(default_factory=PortalProperties)
    type: str = ""


@dataclass
class GameSettings:
    """General settings of a game."""

    name: str = ""
    board_size: int = 0
    turn_limit: int = 0


@dataclass
class GameConfig:
    """Everything a configuration file describes."""

    game_settings: GameSettings = field(default_factory=GameSettings)
    pieces: list[PieceConfig] = field(default_factory=list)
    custom_pieces: list[PieceConfig] = field(default_factory=list)
    portals: list[PortalConfig] = field(default_factory=list)


def _get(mapping: Any, key: str, where: str) -> Any:
    if not isinstance(mapping, dict) or key not in mapping:
        raise ValueError(f"missing '{key}' in {where}")
    return mapping[key]


def _as_int(value: Any, what: str) -> int:
    if isinstance(value, (bool, int)):
        return int(value)
    if isinstance(value, float):
        return int(value)
    raise ValueError(f"{what} must be a number, not {value!r}")


def _as_bool(value: Any, what: str) -> bool:
    if not isinstance(value, bool):
        raise ValueError(f"{what} must be a boolean, not {value!r}")
    return value


def _as_str(value: Any, what: str) -> str:
    if not isinstance(value, str):
        raise ValueError(f"{what} must be a string, not {value!r}")
    return value


def _as_list(value: Any, what: str) -> list[Any]:
    if not isinstance(value, list):
        raise ValueError(f"{what} must be a list")
    return value


def _position(data: Any, where: str) -> Position:
    return Position(
        _as_int(_get(data, "x", where), f"{where}.x"),
        _as_int(_get(data, "y", where), f"{where}.y"),
    )


def _parse_settings(data: dict[str, Any]) -> GameSettings:
    settings = _get(data, "game_settings", "configuration")
    return GameSettings(
        name=_as_str(_get(settings, "name", "game_settings"), "name"),
        board_size=_as_int(_get(settings, "board_size", "game_settings"), "board_size"),
        turn_limit=_as_int(_get(settings, "turn_limit", "game_settings"), "turn_limit"),
    )


def _parse_abilities(data: Any) -> SpecialAbilities:
    if not isinstance(data, dict):
        raise ValueError("special_abilities must be an object")
    abilities = SpecialAbilities()
    for key, value in data.items():
        flag = _as_bool(value, key)
        if key in _STANDARD_ABILITIES:
            setattr(abilities, key, flag)
        else:
            abilities.custom_abilities[key] = flag
    return abilities


def _parse_piece(data: Any) -> PieceConfig:
    piece = PieceConfig(
        type=_as_str(_get(data, "type", "piece"), "type"),
        count=_as_int(_get(data, "count", "piece"), "count"),
    )
    sides = _get(data, "positions", "piece")
    if not isinstance(sides, dict):
        raise ValueError("positions must be an object")
    for color, squares in sides.items():
        piece.positions.setdefault(color, []).extend(
            _position(square, "position") for square in _as_list(squares, "positions")
        )

    if "movement" in data:
        moves = data["movement"]
        if not isinstance(moves, dict):
            raise ValueError("movement must be an object")
        for key in _MOVEMENT_INTS:
            if key in moves:
                setattr(piece.movement, key, _as_int(moves[key], key))
        if "l_shape" in moves:
            piece.movement.l_shape = _as_bool(moves["l_shape"], "l_shape")

    if "special_abilities" in data:
        piece.special_abilities = _parse_abilities(data["special_abilities"])
    return piece


def _parse_portal(data: Any) -> PortalConfig:
    positions = _get(data, "positions", "portal")
    properties = _get(data, "properties", "portal")
    return PortalConfig(
        id=_as_str(_get(data, "id", "portal"), "id"),
        entry=_position(_get(positions, "entry", "portal positions"), "entry"),
        exit=_position(_get(positions, "exit", "portal positions"), "exit"),
        properties=PortalProperties(
            preserve_direction=_as_bool(
                _get(properties, "preserve_direction", "portal properties"), "preserve_direction"
            ),
            allowed_colors=[
                _as_str(color, "allowed color")
                for color in _as_list(
                    _get(properties, "allowed_colors", "portal properties"), "allowed_colors"
                )
            ],
            cooldown=_as_int(_get(properties, "cooldown", "portal properties"), "cooldown"),
        ),
    )


def parse_config(data: Any) -> GameConfig:
    """Build a GameConfig from decoded JSON; raise ValueError if it is malformed."""
    if not isinstance(data, dict):
        raise ValueError("configuration must be a JSON object")
    portals = data.get("portals", [])
    return GameConfig(
        game_settings=_parse_settings(data),
        pieces=[_parse_piece(p) for p in _as_list(_get(data, "pieces", "configuration"), "pieces")],
        custom_pieces=[],
        portals=[_parse_portal(p) for p in _as_list(portals, "portals")],
    )


class ConfigReader:
    """Loads a game configuration from a file or a string."""

    def __init__(self) -> None:
        self.config = GameConfig()

    def load_file(self, path: str | PathLike[str]) -> GameConfig:
        """Read and parse a JSON file; raise OSError if it cannot be opened."""
        with open(path, encoding="utf-8") as handle:
            text = handle.read()
        return self.load_string(text)

    def load_string(self, text: str) -> GameConfig:
        """Parse JSON text; raise ValueError if it is invalid."""
        self.config = parse_config(json.loads(text))
        return self.config

    def validate(self) -> bool:
        """Return True if there is at least one piece and a positive board size."""
        return bool(self.config.pieces) and self.config.game_settings.board_size > 0

    def portals(self) -> list[PortalConfig]:
        """Return the configured portals."""
        return self.config.portals