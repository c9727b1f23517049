"""Move validation, check detection and game-end rules."""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Iterator, Sequence
from dataclasses import dataclass

from portalchess.board import ChessBoard
from portalchess.piece import Piece
from portalchess.portal import Portal

logger = logging.getLogger(__name__)

_GRID = 8

_DIRECTIONS = (
    (1, 0), (-1, 0), (0, 1), (0, -1),
    (1, 1), (-1, -1), (1, -1), (-1, 1),
)

_L_MOVES = (
    (2, 1), (1, 2), (-1, 2), (-2, 1),
    (-2, -1), (-1, -2), (1, -2), (2, -1),
)

_KING_OFFSETS = (
    (-1, -1), (-1, 0), (-1, 1), (0, -1),
    (0, 1), (1, -1), (1, 0), (1, 1),
)


@dataclass
class LastMove:
    """The most recent move, kept for en passant checks."""

    from_x: int = 0
    from_y: int = 0
    to_x: int = 0
    to_y: int = 0
    piece_type: str = ""


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


def _opponent(color: str) -> str:
    return "black" if color == "white" else "white"


class MoveValidator:
    """Checks moves against the pieces' rules on a given board."""

    def __init__(self, board: ChessBoard) -> None:
        self.board = board

    def _squares(self) -> Iterator[tuple[int, int, Piece]]:
        for x in range(_GRID):
            for y in range(_GRID):
                piece = self.board.piece_at(x, y)
                if piece is not None:
                    yield x, y, piece

    def _find_king(self, color: str) -> tuple[int, int]:
        for x, y, piece in self._squares():
            if piece.type == "King" and piece.color == color:
                return x, y
        return -1, -1

    def is_valid_linear_move(self, from_x: int, from_y: int, to_x: int, to_y: int) -> bool:
        """Return True if the move is straight or diagonal."""
        return from_x == to_x or from_y == to_y or abs(from_x - to_x) == abs(from_y - to_y)

    def is_path_clear(self, from_x: int, from_y: int, to_x: int, to_y: int) -> bool:
        """Return True if no piece stands strictly between the two squares.

        Raises ValueError if the squares are not on one straight or diagonal line.
        """
        if not self.is_valid_linear_move(from_x, from_y, to_x, to_y):
            raise ValueError("path must be straight or diagonal")
        dx, dy = _sign(to_x - from_x), _sign(to_y - from_y)
        x, y = from_x + dx, from_y + dy
        while (x, y) != (to_x, to_y):
            if self.board.piece_at(x, y) is not None:
                return False
            x += dx
            y += dy
        return True

    def is_valid_en_passant(
        self,
        piece: Piece | None,
        from_x: int,
        from_y: int,
        to_x: int,
        to_y: int,
        last_move: LastMove,
    ) -> bool:
        """Return True if the pawn move is an en passant capture after ``last_move``."""
        if piece is None or piece.type != "Pawn":
            logger.debug("Not a pawn")
            return False

        direction = 1 if piece.color == "white" else -1
        logger.debug(
            "Checking en passant: last %s,%s -> %s,%s (%s); current %s,%s -> %s,%s; direction %s",
            last_move.from_x, last_move.from_y, last_move.to_x, last_move.to_y,
            last_move.piece_type, from_x, from_y, to_x, to_y, direction,
        )

        if last_move.piece_type != "Pawn":
            logger.debug("Last move was not a pawn")
            return False
        if abs(last_move.to_y - last_move.from_y) != 2:
            logger.debug("Last move was not two squares")
            return False
        if abs(last_move.to_x - from_x) != 1:
            logger.debug("Pawns are not adjacent")
            return False
        if last_move.to_y != from_y:
            logger.debug("Pawns are not on the same rank")
            return False
        if to_x != last_move.to_x or to_y != from_y + direction:
            logger.debug("Target square is incorrect")
            return False
        logger.debug("En passant is valid")
        return True

    def validate_move(
        self,
        piece: Piece | None,
        from_x: int,
        from_y: int,
        to_x: int,
        to_y: int,
        portals: Sequence[Portal] = (),
    ) -> bool:
        """Return True if ``piece`` may go from one square to the other."""
        if piece is None:
            return False
        kind, color = piece.type, piece.color
        dx, dy = to_x - from_x, to_y - from_y
        abs_dx, abs_dy = abs(dx), abs(dy)
        target = self.board.piece_at(to_x, to_y)

        if kind == "Pawn":
            direction = 1 if color == "white" else -1
            if dx == 0 and dy == direction and target is None:
                return True
            home_rank = (color == "white" and from_y == 1) or (color == "black" and from_y == 6)
            if (
                dx == 0
                and dy == 2 * direction
                and target is None
                and home_rank
                and self.board.piece_at(from_x, from_y + direction) is None
            ):
                return True
            if abs_dx == 1 and dy == direction:
                if target is not None and target.color != color:
                    return True
                adjacent = self.board.piece_at(to_x, from_y)
                if adjacent is not None and adjacent.type == "Pawn" and adjacent.color != color:
                    return True
            return False

        if kind == "King":
            if abs_dx <= 1 and abs_dy <= 1:
                return True
            for portal in portals:
                if portal.is_available() and portal.is_color_allowed(color):
                    entry, exit_ = portal.entry, portal.exit
                    if (from_x, from_y, to_x, to_y) in (
                        (entry.x, entry.y, exit_.x, exit_.y),
                        (exit_.x, exit_.y, entry.x, entry.y),
                    ):
                        return True
            return False

        linear_rules = {
            "Queen": abs_dx == abs_dy or dx == 0 or dy == 0,
            "Rook": dx == 0 or dy == 0,
            "Bishop": abs_dx == abs_dy,
        }
        if kind in linear_rules:
            if linear_rules[kind] and self.is_path_clear(from_x, from_y, to_x, to_y):
                return True
            return self._reachable(piece, from_x, from_y, to_x, to_y, portals)

        if kind == "Knight" and {abs_dx, abs_dy} == {1, 2}:
            return True
        return self._reachable(piece, from_x, from_y, to_x, to_y, portals)

    def _reachable(
        self,
        piece: Piece,
        from_x: int,
        from_y: int,
        to_x: int,
        to_y: int,
        portals: Sequence[Portal],
    ) -> bool:
        """Breadth-first search over the piece's moves and usable portals."""
        movement = piece.movement
        color = piece.color
        can_jump = piece.has_ability("jump_over")
        target = (to_x, to_y)
        queue = deque([(from_x, from_y)])
        visited = {(from_x, from_y)}

        def visit(square: tuple[int, int]) -> None:
            if square not in visited:
                visited.add(square)
                queue.append(square)

        while queue:
            cx, cy = queue.popleft()
            if (cx, cy) == target:
                return True

            for ddx, ddy in _DIRECTIONS:
                if ddx == 0 or ddy == 0:
                    max_step = movement.get("sideways", 0)
                    if "forward" in movement:
                        max_step = max(max_step, movement["forward"])
                else:
                    max_step = movement.get("diagonal", 0)
                for step in range(1, max_step + 1):
                    nx, ny = cx + ddx * step, cy + ddy * step
                    if not self.board.is_valid_position(nx, ny):
                        break
                    occupied = self.board.piece_at(nx, ny) is not None
                    if not can_jump and occupied and (nx, ny) != target:
                        break
                    visit((nx, ny))
                    if not can_jump and occupied:
                        break

            if movement.get("l_shape"):
                for ldx, ldy in _L_MOVES:
                    nx, ny = cx + ldx, cy + ldy
                    if self.board.is_valid_position(nx, ny) and (
                        self.board.piece_at(nx, ny) is None or (nx, ny) == target
                    ):
                        visit((nx, ny))

            for portal in portals:
                if portal.is_available() and portal.is_color_allowed(color):
                    if (cx, cy) == (portal.entry.x, portal.entry.y):
                        visit((portal.exit.x, portal.exit.y))
        return False

    def is_king_in_check(self, color: str, portals: Sequence[Portal] = ()) -> bool:
        """Return True if any opposing piece can reach the king of ``color``."""
        king_x, king_y = self._find_king(color)
        return self.is_square_under_attack(king_x, king_y, _opponent(color), portals)

    def king_moves(self, king_x: int, king_y: int) -> list[tuple[int, int]]:
        """Return the on-board squares adjacent to the king."""
        return [
            (king_x + ddx, king_y + ddy)
            for ddx, ddy in _KING_OFFSETS
            if 0 <= king_x + ddx < _GRID and 0 <= king_y + ddy < _GRID
        ]

    def is_square_under_attack(
        self, x: int, y: int, attacking_color: str, portals: Sequence[Portal] = ()
    ) -> bool:
        """Return True if a piece of ``attacking_color`` can move to (x, y)."""
        return any(
            piece.color == attacking_color and self.validate_move(piece, px, py, x, y, portals)
            for px, py, piece in list(self._squares())
        )

    def can_king_escape(self, color: str, portals: Sequence[Portal] = ()) -> bool:
        """Return True if the king has a neighbouring square that is safe."""
        king_x, king_y = self._find_king(color)
        opponent = _opponent(color)
        for nx, ny in self.king_moves(king_x, king_y):
            occupant = self.board.piece_at(nx, ny)
            if (occupant is None or occupant.color != color) and not self.is_square_under_attack(
                nx, ny, opponent, portals
            ):
                return True
        return False

    def can_piece_block_check(self, color: str, portals: Sequence[Portal] = ()) -> bool:
        """Return True if some move by ``color`` leaves its king out of check.

        Each candidate move is tried on the board and then undone.
        """
        for x, y, piece in list(self._squares()):
            if piece.color != color:
                continue
            for new_x in range(_GRID):
                for new_y in range(_GRID):
                    if not self.validate_move(piece, x, y, new_x, new_y, portals):
                        continue
                    captured = self.board.piece_at(new_x, new_y)
                    self.board.place_piece(new_x, new_y, piece)
                    self.board.remove_piece(x, y)

                    still_in_check = self.is_king_in_check(color, portals)

                    self.board.place_piece(x, y, piece)
                    if captured is not None:
                        self.board.place_piece(new_x, new_y, captured)
                    else:
                        self.board.remove_piece(new_x, new_y)

                    if not still_in_check:
                        return True
        return False

    def is_checkmate(self, color: str, portals: Sequence[Portal] = ()) -> bool:
        """Return True if ``color`` is in check with no escape and no block."""
        return (
            self.is_king_in_check(color, portals)
            and not self.can_king_escape(color, portals)
            and not self.can_piece_block_check(color, portals)
        )

    def _kings_present(self) -> tuple[bool, bool]:
        white = black = False
        for piece in self.board.all_pieces():
            if piece.type == "King":
                if piece.color == "white":
                    white = True
                else:
                    black = True
        return white, black

    def is_game_over(self, portals: Sequence[Portal] = ()) -> bool:
        """Return True once either king has left the board."""
        white, black = self._kings_present()
        return not white or not black

    def winner(self, portals: Sequence[Portal] = ()) -> str:
        """Return "white", "black" or "draw" depending on which kings remain."""
        white, black = self._kings_present()
        if not white:
            return "black"
        if not black:
            return "white"
        return "draw"