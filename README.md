# portalchess

A chess variant played in the terminal. The board's pieces and its portals
come from a JSON configuration file. Pieces may have custom movement ranges,
the ability to jump over others, or a ranged attack. Portals carry pieces of
allowed colours from an entry square to an exit square and then cool down for
a set number of turns.

## Installing

```
pip install .
```

## Playing

```
portalchess [CONFIG]
```

`CONFIG` is the path of the JSON configuration and defaults to
`chess_pieces.json` in the current directory. If the file cannot be read or
is not a valid configuration, `Could not load JSON file!` is printed to
standard error and the exit status is 1.

Commands are read from standard input, separated by whitespace. The board is
printed before every prompt. The commands are:

- `move x1 y1 x2 y2`: move the piece on (x1, y1) to (x2, y2) if the rules
  allow it. If the piece lands on the entry of a portal that is open to its
  colour and not cooling down, it is carried on to the portal's exit and the
  portal starts its cooldown.
- `attack x1 y1 x2 y2`: a piece with the `ranged_attack` ability removes the
  enemy piece on the target square if the target lies in a straight or
  diagonal line within the piece's `attack_range` (1 by default).
- `undo`: take back the last move, putting back any piece it captured.
- `quit` or `exit`: end the game.

After a `move` (or an unknown command), every portal's cooldown goes down by
one turn. If either king is then missing from the board, the game prints
`White wins!`, `Black wins!` or `Draw!` and ends. The game also ends at the
end of input.

## Movement rules

`portalchess.validator.MoveValidator.validate_move` decides whether a move is
allowed:

- `Pawn`: one square forward, two from its home row (row 1 for white, row 6
  for black) over an empty square, or one square diagonally forward onto an
  enemy piece or beside an enemy pawn.
- `King`: one square in any direction, or straight between the entry and exit
  of a usable portal.
- `Queen`, `Rook`, `Bishop`: their usual lines with a clear path; `Knight`:
  its usual L-shaped jump.
- Any piece, failing the above: any square it can reach in a series of its
  configured steps (`forward`/`sideways` along ranks and files, `diagonal`,
  `l_shape`), passing through usable portals on the way. Without
  `jump_over`, pieces block the way.

The validator also offers `is_king_in_check`, `can_king_escape`,
`can_piece_block_check`, `is_checkmate`, `is_square_under_attack`,
`is_valid_en_passant`, `is_game_over` and `winner`. Check and checkmate are
looked for over an 8 by 8 grid.

## Configuration

The configuration is a JSON object with these members:

- `game_settings`: `name`, `board_size` and `turn_limit`.
- `pieces`: a list of pieces. Each has a `type`, a `count`, `positions` keyed
  by colour (lists of `{"x": ..., "y": ...}`), and an optional `movement`
  (`forward`, `sideways`, `diagonal`, `l_shape`, `diagonal_capture`,
  `first_move_forward`) and `special_abilities` (`castling`, `royal`,
  `jump_over`, `promotion`, `en_passant`, or any other name with a boolean
  value).
- `portals` (optional): a list of portals, each with an `id`,
  `positions.entry` and `positions.exit`, and `properties` holding
  `preserve_direction`, `allowed_colors` and `cooldown`.

A malformed configuration raises `ValueError`.

## Using it as a library

```python
from portalchess.config import ConfigReader
from portalchess.game import Game, build_board, build_portals
from portalchess.printer import render_board

reader = ConfigReader()
config = reader.load_file("chess_pieces.json")
board = build_board(config)
print(render_board(board))

game = Game(board, build_portals(config))
game.move(4, 1, 4, 3)
game.undo()
```

`Game.move`, `Game.undo` and `Game.attack` return whether they did anything
and report to the game's output stream; `Game.run` plays a sequence of
command lines. `portalchess.archer.Archer` is a piece with its own
`is_valid_move` and `can_attack` rules, moving up to two squares and hopping
over friendly pieces.

## What it does not do

- Players do not take turns: either colour may move at any time.
- Moves that leave one's own king in check are not refused, and checkmate is
  not announced; the game ends only when a king leaves the board.
- There is no castling and no pawn promotion; `turn_limit`,
  `diagonal_capture` and `first_move_forward` are read but not used.
- The board is always printed as 8 by 8, whatever `board_size` says. Pieces
  without a chess symbol are shown by the first letter of their type.
- Games cannot be saved or resumed.