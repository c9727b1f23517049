import pytest

from portalchess.board import ChessBoard
from portalchess.piece import Piece
from portalchess.portal import Portal, Position
from portalchess.validator import LastMove, MoveValidator


def make(board, x, y, kind, color, movement=None, abilities=None):
    piece = Piece(kind, color, movement or {}, abilities or {})
    board.place_piece(x, y, piece)
    return piece


@pytest.fixture
def board():
    return ChessBoard(8)


@pytest.fixture
def validator(board):
    return MoveValidator(board)


def test_linear_move(validator):
    assert validator.is_valid_linear_move(0, 0, 0, 5)
    assert validator.is_valid_linear_move(0, 0, 3, 3)
    assert validator.is_valid_linear_move(2, 4, 7, 4)
    assert not validator.is_valid_linear_move(0, 0, 1, 2)


def test_path_clear(board, validator):
    assert validator.is_path_clear(0, 0, 0, 7)
    make(board, 0, 3, "Pawn", "white")
    assert not validator.is_path_clear(0, 0, 0, 7)
    assert validator.is_path_clear(0, 0, 0, 3)


def test_path_clear_rejects_non_linear(validator):
    with pytest.raises(ValueError):
        validator.is_path_clear(0, 0, 1, 2)


def test_none_piece_is_invalid(validator):
    assert not validator.validate_move(None, 0, 0, 0, 1, [])


def test_white_pawn_moves(board, validator):
    pawn = make(board, 3, 1, "Pawn", "white")
    assert validator.validate_move(pawn, 3, 1, 3, 2, [])
    assert validator.validate_move(pawn, 3, 1, 3, 3, [])
    assert not validator.validate_move(pawn, 3, 1, 3, 0, [])
    assert not validator.validate_move(pawn, 3, 1, 4, 2, [])


def test_pawn_double_step_blocked(board, validator):
    pawn = make(board, 3, 1, "Pawn", "white")
    make(board, 3, 2, "Pawn", "black")
    assert not validator.validate_move(pawn, 3, 1, 3, 3, [])
    assert not validator.validate_move(pawn, 3, 1, 3, 2, [])


def test_pawn_double_step_only_from_home(board, validator):
    pawn = make(board, 3, 2, "Pawn", "white")
    assert not validator.validate_move(pawn, 3, 2, 3, 4, [])


def test_black_pawn_moves_down(board, validator):
    pawn = make(board, 2, 6, "Pawn", "black")
    assert validator.validate_move(pawn, 2, 6, 2, 5, [])
    assert validator.validate_move(pawn, 2, 6, 2, 4, [])
    assert not validator.validate_move(pawn, 2, 6, 2, 7, [])


def test_pawn_diagonal_capture(board, validator):
    pawn = make(board, 3, 3, "Pawn", "white")
    make(board, 4, 4, "Knight", "black")
    make(board, 2, 4, "Knight", "white")
    assert validator.validate_move(pawn, 3, 3, 4, 4, [])
    assert not validator.validate_move(pawn, 3, 3, 2, 4, [])


def test_pawn_adjacent_pawn_capture(board, validator):
    pawn = make(board, 4, 4, "Pawn", "white")
    make(board, 3, 4, "Pawn", "black")
    assert validator.validate_move(pawn, 4, 4, 3, 5, [])
    assert not validator.validate_move(pawn, 4, 4, 5, 5, [])


def test_king_single_steps(board, validator):
    king = make(board, 4, 4, "King", "white")
    for nx, ny in validator.king_moves(4, 4):
        assert validator.validate_move(king, 4, 4, nx, ny, [])
    assert not validator.validate_move(king, 4, 4, 4, 6, [])


def test_king_through_portal(board, validator):
    king = make(board, 1, 1, "King", "white")
    portal = Portal("p1", Position(1, 1), Position(6, 6), False, ["white"], 2)
    assert validator.validate_move(king, 1, 1, 6, 6, [portal])
    assert validator.validate_move(king, 6, 6, 1, 1, [portal])
    assert not validator.validate_move(king, 1, 1, 6, 5, [portal])


def test_king_portal_color_and_cooldown(board, validator):
    king = make(board, 1, 1, "King", "black")
    white_only = Portal("p1", Position(1, 1), Position(6, 6), False, ["white"], 2)
    assert not validator.validate_move(king, 1, 1, 6, 6, [white_only])
    cooling = Portal("p2", Position(1, 1), Position(6, 6), False, ["black"], 2)
    cooling.start_cooldown()
    assert not validator.validate_move(king, 1, 1, 6, 6, [cooling])


def test_rook_straight_and_blocked(board, validator):
    rook = make(board, 0, 0, "Rook", "white")
    assert validator.validate_move(rook, 0, 0, 0, 7, [])
    assert not validator.validate_move(rook, 0, 0, 3, 3, [])
    make(board, 0, 3, "Pawn", "black")
    assert not validator.validate_move(rook, 0, 0, 0, 7, [])


def test_rook_with_movement_searches_around(board, validator):
    rook = make(board, 0, 0, "Rook", "white", {"forward": 8, "sideways": 8})
    make(board, 0, 3, "Pawn", "black")
    assert validator.validate_move(rook, 0, 0, 0, 7, [])


def test_bishop_and_queen(board, validator):
    bishop = make(board, 2, 0, "Bishop", "white")
    assert validator.validate_move(bishop, 2, 0, 5, 3, [])
    assert not validator.validate_move(bishop, 2, 0, 2, 3, [])
    queen = make(board, 3, 3, "Queen", "white")
    assert validator.validate_move(queen, 3, 3, 3, 7, [])
    assert validator.validate_move(queen, 3, 3, 6, 6, [])
    assert not validator.validate_move(queen, 3, 3, 4, 5, [])


def test_knight(board, validator):
    knight = make(board, 1, 0, "Knight", "white")
    assert validator.validate_move(knight, 1, 0, 2, 2, [])
    assert validator.validate_move(knight, 1, 0, 3, 1, [])
    assert not validator.validate_move(knight, 1, 0, 1, 2, [])


def test_custom_piece_l_shape(board, validator):
    piece = make(board, 0, 0, "Camel", "white", {"l_shape": 1})
    assert validator.validate_move(piece, 0, 0, 1, 2, [])
    assert validator.validate_move(piece, 0, 0, 2, 1, [])


def test_custom_piece_uses_portal(board, validator):
    piece = make(board, 0, 1, "Wizard", "white")
    portal = Portal("p", Position(0, 1), Position(5, 5), True, ["white"], 1)
    assert not validator.validate_move(piece, 0, 1, 5, 5, [])
    assert validator.validate_move(piece, 0, 1, 5, 5, [portal])


def test_jump_over_ability(board, validator):
    plain = make(board, 0, 0, "Scout", "white", {"forward": 1})
    for x, y in [(1, 0), (0, 1), (1, 1)]:
        make(board, x, y, "Pawn", "white")
    assert not validator.validate_move(plain, 0, 0, 0, 2, [])
    jumper = make(board, 0, 0, "Scout", "white", {"forward": 1}, {"jump_over": True})
    assert validator.validate_move(jumper, 0, 0, 0, 2, [])


def test_en_passant(board, validator):
    pawn = make(board, 4, 4, "Pawn", "white")
    last = LastMove(3, 6, 3, 4, "Pawn")
    assert validator.is_valid_en_passant(pawn, 4, 4, 3, 5, last)
    assert not validator.is_valid_en_passant(pawn, 4, 4, 5, 5, last)
    assert not validator.is_valid_en_passant(pawn, 4, 4, 3, 5, LastMove(3, 5, 3, 4, "Pawn"))
    assert not validator.is_valid_en_passant(pawn, 4, 4, 3, 5, LastMove(3, 6, 3, 4, "Rook"))


def test_en_passant_requires_pawn(board, validator):
    rook = make(board, 4, 4, "Rook", "white")
    last = LastMove(3, 6, 3, 4, "Pawn")
    assert not validator.is_valid_en_passant(rook, 4, 4, 3, 5, last)
    assert not validator.is_valid_en_passant(None, 4, 4, 3, 5, last)


def test_king_moves_are_adjacent_and_on_board(validator):
    corner = validator.king_moves(0, 0)
    centre = validator.king_moves(4, 4)
    assert len(centre) == 8
    assert set(corner) == {(1, 0), (0, 1), (1, 1)}
    for x, y in centre:
        assert max(abs(x - 4), abs(y - 4)) == 1


def test_king_in_check(board, validator):
    make(board, 4, 0, "King", "white")
    make(board, 4, 7, "Rook", "black")
    assert validator.is_king_in_check("white", [])
    make(board, 4, 3, "Pawn", "white")
    assert not validator.is_king_in_check("white", [])


def test_square_under_attack(board, validator):
    make(board, 0, 7, "Rook", "black")
    assert validator.is_square_under_attack(0, 0, "black", [])
    assert not validator.is_square_under_attack(1, 1, "black", [])
    assert not validator.is_square_under_attack(0, 0, "white", [])


def test_can_king_escape(board, validator):
    make(board, 0, 0, "King", "white")
    make(board, 0, 7, "Rook", "black")
    assert validator.can_king_escape("white", [])
    make(board, 1, 7, "Rook", "black")
    assert not validator.can_king_escape("white", [])


def test_can_piece_block_check_restores_board(board, validator):
    king = make(board, 4, 0, "King", "white")
    blocker = make(board, 0, 3, "Rook", "white")
    attacker = make(board, 4, 7, "Rook", "black")
    assert validator.can_piece_block_check("white", [])
    assert board.piece_at(4, 0) is king
    assert board.piece_at(0, 3) is blocker
    assert board.piece_at(4, 7) is attacker
    assert len(board.all_pieces()) == 3


def test_no_checkmate_without_check(board, validator):
    make(board, 4, 0, "King", "white")
    make(board, 4, 7, "King", "black")
    assert not validator.is_king_in_check("white", [])
    assert not validator.is_checkmate("white", [])


def test_game_over_and_winner(board, validator):
    make(board, 4, 0, "King", "white")
    make(board, 4, 7, "King", "black")
    assert not validator.is_game_over([])
    assert validator.winner([]) == "draw"
    board.remove_piece(4, 7)
    assert validator.is_game_over([])
    assert validator.winner([]) == "white"


def test_black_wins_without_white_king(board, validator):
    make(board, 4, 7, "King", "black")
    assert validator.is_game_over([])
    assert validator.winner([]) == "black"