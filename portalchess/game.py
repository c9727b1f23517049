"""The interactive game: building the board and running commands."""

from __future__ import annotations

import argparse
import sys
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass, field
from itertools import islice
from typing import TextIO

from portalchess.board import ChessBoard
from portalchess.config import ConfigReader, GameConfig, PieceConfig
from portalchess.piece import Piece
from portalchess.portal import Portal, Position
from portalchess.printer import print_board
from portalchess.validator import MoveValidator

_INTRO = "\nCustom Chess started. Commands: move x1 y1 x2 y2 | undo | quit\n\n"


@dataclass
class MoveRecord:
    """A move as kept for undo."""

    from_x: int
    from_y: int
    to_x: int
    to_y: int
    piece_type: str
    piece_color: str
    captured_piece: Piece | None = None
    used_portal: bool = False
    portal_exit: Position = field(default_factory=Position)


def _movement_of(config: PieceConfig) -> dict[str, int]:
    movement = config.movement
    result: dict[str, int] = {}
    if movement.forward > 0:
        result["forward"] = movement.forward
    if movement.sideways > 0:
        result["sideways"] = movement.sideways
    if movement.diagonal > 0:
        result["diagonal"] = movement.diagonal
    if movement.l_shape:
        result["l_shape"] = 1
    return result


def _abilities_of(config: PieceConfig) -> dict[str, bool]:
    special = config.special_abilities
    abilities = dict(special.custom_abilities)
    abilities.update(
        castling=special.castling,
        royal=special.royal,
        jump_over=special.jump_over,
        promotion=special.promotion,
        en_passant=special.en_passant,
    )
    return abilities


def build_board(config: GameConfig) -> ChessBoard:
    """Create a board and place every configured piece on it."""
    board = ChessBoard(config.game_settings.board_size)
    for piece_config in [*config.pieces, *config.custom_pieces]:
        for color, squares in piece_config.positions.items():
            for square in squares:
                piece = Piece(
                    piece_config.type,
                    color,
                    _movement_of(piece_config),
                    _abilities_of(piece_config),
                )
                board.place_piece(square.x, square.y, piece)
    return board


def build_portals(config: GameConfig) -> list[Portal]:
    """Create a portal for each configured one."""
    return [
        Portal(
            pc.id,
            pc.entry,
            pc.exit,
            pc.properties.preserve_direction,
            list(pc.properties.allowed_colors),
            pc.properties.cooldown,
        )
        for pc in config.portals
    ]


class Game:
    """A running game that reports what happens to ``out``."""

    def __init__(
        self,
        board: ChessBoard,
        portals: Sequence[Portal] = (),
        out: TextIO | None = None,
    ) -> None:
        self.board = board
        self.portals = list(portals)
        self.validator = MoveValidator(board)
        self.history: list[MoveRecord] = []
        self.out = out if out is not None else sys.stdout

    def _say(self, message: str) -> None:
        self.out.write(message + "\n")

    def move(self, x1: int, y1: int, x2: int, y2: int) -> bool:
        """Move a piece if the rules allow it, teleporting through a portal.

        Returns True if the piece moved.
        """
        piece = self.board.piece_at(x1, y1)
        if piece is None:
            self._say("No piece at that position!")
            return False
        if not self.validator.validate_move(piece, x1, y1, x2, y2, self.portals):
            self._say("Invalid move!")
            return False

        captured = self.board.piece_at(x2, y2)
        self.board.move_piece(x1, y1, x2, y2)
        self._say(f"{piece.type} moved!")

        used_portal = False
        portal_exit = Position()
        for portal in self.portals:
            if (portal.entry.x, portal.entry.y) != (x2, y2) or not portal.is_color_allowed(piece.color):
                continue
            if portal.is_available():
                exit_ = portal.exit
                self._say(f"Portal active: {portal.id} → piece is teleporting...")
                self.board.move_piece(x2, y2, exit_.x, exit_.y)
                self._say(
                    f"{piece.type} teleported via portal ({x2},{y2}) → ({exit_.x},{exit_.y})"
                )
                portal.start_cooldown()
                used_portal = True
                portal_exit = exit_
            else:
                self._say(f"Portal is on cooldown: {portal.id}")
            break

        self.history.append(
            MoveRecord(x1, y1, x2, y2, piece.type, piece.color, captured, used_portal, portal_exit)
        )
        return True

    def undo(self) -> bool:
        """Take back the last move; return False if there is none."""
        if not self.history:
            self._say("No move to undo!")
            return False
        last = self.history.pop()
        if last.used_portal:
            self.board.move_piece(last.portal_exit.x, last.portal_exit.y, last.from_x, last.from_y)
        else:
            self.board.move_piece(last.to_x, last.to_y, last.from_x, last.from_y)
        if last.captured_piece is not None:
            self.board.place_piece(last.to_x, last.to_y, last.captured_piece)
        self._say("Last move undone!")
        return True

    def attack(self, x1: int, y1: int, x2: int, y2: int) -> bool:
        """Perform a ranged attack; return True if an enemy piece was destroyed."""
        piece = self.board.piece_at(x1, y1)
        if piece is None:
            self._say("No piece at that position!")
            return False
        if not piece.has_ability("ranged_attack"):
            self._say("This piece does not have the ranged_attack ability!")
            return False
        reach = piece.movement.get("attack_range", 1)
        dx, dy = abs(x2 - x1), abs(y2 - y1)
        if not ((dx <= reach and dy == 0) or (dy <= reach and dx == 0) or (dx == dy and dx <= reach)):
            self._say("Target is out of range!")
            return False
        target = self.board.piece_at(x2, y2)
        if target is None or target.color == piece.color:
            self._say("No enemy piece at the target!")
            return False
        self.board.remove_piece(x2, y2)
        self._say(f"{piece.type} performed a ranged attack and destroyed the enemy piece!")
        return True

    def end_turn(self) -> str | None:
        """Tick portal cooldowns and return the winner if the game is over."""
        for portal in self.portals:
            portal.decrement_cooldown()
        if not self.validator.is_game_over(self.portals):
            return None
        winner = self.validator.winner(self.portals)
        messages = {"white": "White wins!", "black": "Black wins!"}
        self._say(messages.get(winner, "Draw!"))
        return winner

    @staticmethod
    def _coords(tokens: Iterator[str]) -> tuple[int, int, int, int] | None:
        values = list(islice(tokens, 4))
        if len(values) != 4:
            return None
        try:
            x1, y1, x2, y2 = (int(v) for v in values)
        except ValueError:
            return None
        return x1, y1, x2, y2

    def run(self, lines: Iterable[str]) -> None:
        """Read commands from ``lines`` until quit, game over or end of input."""
        tokens = (token for line in lines for token in line.split())
        self.out.write(_INTRO)
        while True:
            print_board(self.board, self.out)
            self.out.write("> ")
            command = next(tokens, None)
            if command is None:
                break
            if command in ("quit", "exit"):
                self._say("Game ended.")
                break
            if command == "undo":
                self.undo()
                continue
            if command in ("move", "attack"):
                coords = self._coords(tokens)
                if coords is None:
                    self._say("Invalid coordinates!")
                    continue
                if command == "attack":
                    self.attack(*coords)
                    continue
                if self.board.piece_at(coords[0], coords[1]) is None:
                    self._say("No piece at that position!")
                    continue
                self.move(*coords)
            else:
                self._say("Unknown command!")
            if self.end_turn() is not None:
                break


def main(argv: Sequence[str] | None = None) -> int:
    """Load the configuration and play on standard input."""
    parser = argparse.ArgumentParser(description="Chess with portals and custom pieces.")
    parser.add_argument("config", nargs="?", default="chess_pieces.json")
    args = parser.parse_args(argv)

    reader = ConfigReader()
    try:
        config = reader.load_file(args.config)
    except (OSError, ValueError):
        print("Could not load JSON file!", file=sys.stderr)
        return 1

    game = Game(build_board(config), build_portals(config))
    game.run(sys.stdin)
    return 0


if __name__ == "__main__":
    sys.exit(main())