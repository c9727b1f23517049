"""A square board holding pieces by coordinate."""

from __future__ import annotations

from portalchess.piece import Piece


class ChessBoard:
    """A ``size`` by ``size`` board mapping squares to pieces."""

    def __init__(self, size: int) -> None:
        self.size = size
        self._squares: dict[tuple[int, int], Piece] = {}

    def is_valid_position(self, x: int, y: int) -> bool:
        """Return True if (x, y) lies on the board."""
        return 0 <= x < self.size and 0 <= y < self.size

    def piece_at(self, x: int, y: int) -> Piece | None:
        """Return the piece on (x, y), or None if the square is empty."""
        return self._squares.get((x, y))

    def place_piece(self, x: int, y: int, piece: Piece) -> None:
        """Put ``piece`` on (x, y); squares off the board are ignored."""
        if not self.is_valid_position(x, y):
            return
        self._squares[(x, y)] = piece

    def remove_piece(self, x: int, y: int) -> None:
        """Empty the square (x, y), if anything is there."""
        self._squares.pop((x, y), None)

    def move_piece(self, from_x: int, from_y: int, to_x: int, to_y: int) -> None:
        """Move a piece, replacing whatever stands on the target square.

        Nothing happens if the source is empty or the target is off the board.
        """
        piece = self.piece_at(from_x, from_y)
        if piece is not None and self.is_valid_position(to_x, to_y):
            self.remove_piece(from_x, from_y)
            self.place_piece(to_x, to_y, piece)

    def all_pieces(self) -> list[Piece]:
        """Return every piece on the board."""
        return [piece for piece in self._squares.values() if piece is not None]