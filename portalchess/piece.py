"""Chess pieces with configurable movement and abilities."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(eq=False)
class Piece:
    """A piece of a given type and color.

    ``movement`` maps a direction name to its range and ``special_abilities``
    maps an ability name to whether the piece has it. Pieces compare by
    identity, as each one is a distinct object on the board.
    """

    type: str
    color: str
    movement: dict[str, int] = field(default_factory=dict)
    special_abilities: dict[str, bool] = field(default_factory=dict)

    def has_ability(self, key: str) -> bool:
        """Return True if the ability is present and enabled."""
        return bool(self.special_abilities.get(key, False))