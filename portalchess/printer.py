"""Text rendering of the board with chess symbols."""

from __future__ import annotations

import sys
from typing import TextIO

from portalchess.board import ChessBoard
from portalchess.piece import Piece

_GRID = 8

_SYMBOLS = {
    "white": {
        "King": "♔",
        "Queen": "♕",
        "Rook": "♖",
        "Bishop": "♗",
        "Knight": "♘",
        "Pawn": "♙",
    },
    "black": {
        "King": "♚",
        "Queen": "♛",
        "Rook": "♜",
        "Bishop": "♝",
        "Knight": "♞",
        "Pawn": "♟",
    },
}


def _symbol(piece: Piece | None) -> str:
    if piece is None:
        return "."
    symbol = _SYMBOLS.get(piece.color, {}).get(piece.type)
    return symbol if symbol is not None else piece.type[:1]


def render_board(board: ChessBoard) -> str:
    """Return the 8x8 board as text, row 7 at the top and row 0 at the bottom."""
    lines = ["   " + "".join(f" {x}" for x in range(_GRID))]
    for y in reversed(range(_GRID)):
        cells = "".join(f" {_symbol(board.piece_at(x, y))}" for x in range(_GRID))
        lines.append(f" {y} {cells}")
    return "\n".join(lines) + "\n"


def print_board(board: ChessBoard, file: TextIO | None = None) -> None:
    """Write the rendered board to ``file`` (standard output by default)."""
    print(render_board(board), end="", file=file if file is not None else sys.stdout)