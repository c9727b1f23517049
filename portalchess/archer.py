"""The Archer: a short-range piece that can hop over friendly pieces."""

from __future__ import annotations

from portalchess.board import ChessBoard
from portalchess.piece import Piece

_ARCHER_MOVEMENT = {"forward": 2, "sideways": 2, "diagonal": 2}
_ARCHER_ABILITIES = {"jump_over": True}


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


class Archer(Piece):
    """A piece moving up to two squares in any straight or diagonal line."""

    def __init__(self, color: str) -> None:
        super().__init__("Archer", color, dict(_ARCHER_MOVEMENT), dict(_ARCHER_ABILITIES))

    def is_valid_move(
        self, from_x: int, from_y: int, to_x: int, to_y: int, board: ChessBoard
    ) -> bool:
        """Return True if the archer may move from one square to another.

        The move must be straight or diagonal and at most two squares long.
        Friendly pieces on the way may be jumped over; enemy pieces block.
        """
        target = board.piece_at(to_x, to_y)
        if target is not None and target.color == self.color:
            return False

        dx = to_x - from_x
        dy = to_y - from_y
        if not (abs(dx) == abs(dy) or dx == 0 or dy == 0):
            return False
        if abs(dx) > 2 or abs(dy) > 2:
            return False

        step_x, step_y = _sign(dx), _sign(dy)
        x, y = from_x + step_x, from_y + step_y
        while (x, y) != (to_x, to_y):
            piece = board.piece_at(x, y)
            if piece is not None and piece.color != self.color:
                return False
            x += step_x
            y += step_y
        return True

    def can_attack(
        self, from_x: int, from_y: int, to_x: int, to_y: int, board: ChessBoard
    ) -> bool:
        """Return True if an enemy stands exactly two squares away in a line."""
        offset = (abs(to_x - from_x), abs(to_y - from_y))
        if offset not in ((2, 0), (0, 2), (2, 2)):
            return False
        target = board.piece_at(to_x, to_y)
        return target is not None and target.color != self.color