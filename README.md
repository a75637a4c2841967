# echecs

A chess game for two players sharing one terminal. Every move is checked
against the piece's rules, moves that would leave your own king in check are
refused, a player whose king is in check is warned, a checkmate ends the
game, and a pawn that reaches the last rank is promoted.

The texts shown during a game are in French.

## Installing

```
pip install .
```

To run the tests as well:

```
pip install ".[test]"
pytest
```

## Playing

```
echecs
```

The home menu offers:

```
Chess
  1. J1 VS CPU
  2. J1 VS J2
  3. Quitter
```

During a game the board is printed with columns and rows numbered 0 to 7.
Column 0 is on the left and row 0 is Black's back rank, so White starts on
rows 6 and 7 and moves first. White pieces are upper-case letters, black
pieces lower-case (`p` pawn, `r` rook, `n` knight, `b` bishop, `q` queen,
`k` king), and empty squares are `.`.

Commands at the `>` prompt:

- `<column> <row>`, for example `4 6`: press that square. Pressing one of
  your own pieces selects it; pressing another square moves the selected
  piece there if it may go there.
- `nouvelle` (or `new`, `n`): start a new game, after a yes/no confirmation
  (`oui`/`o`/`yes`/`y` confirms).
- `menu` (or `accueil`): go back to the home menu.
- `quitter` (or `quit`, `q`): leave.
- `aide` (or `help`, `?`): show the commands.

While a piece is selected, the empty squares it may reach are shown as `*`
and enemy pieces it may take are shown in brackets, such as `(p)`.

When a pawn reaches the far rank you are asked what it becomes: `1` or
`reine` for a queen, `2` or `fou` for a bishop, `3` or `tour` for a rook,
`4` or `chevalier` for a knight. An empty answer gives a queen.

After a checkmate you can choose `1` for a new game (with the same
confirmation) or `2` to go back to the menu. The game also ends when input
ends.

## Using the library

The rules live in `echecs.model.ChessModel`. It holds the board, the player
to move and the selected piece, and reports what happens through events you
subscribe to with `ChessModel.connect`:

```python
from echecs.model import ChessModel, ModelEvent

model = ChessModel(False)
model.connect(ModelEvent.KING_IN_CHECK, lambda: print("check!"))

model.select(4, 6)          # the white pawn in front of the king
print(model.possible_moves())
model.move_selected(4, 4)
```

`ChessModel` can also be built from a list of pieces (made with
`echecs.pieces.make_piece` or the piece classes `King`, `Queen`, `Rook`,
`Bishop`, `Knight` and `Pawn`); each side must then have exactly one king.
`is_in_check`, `is_checkmate` and `move_puts_in_check` answer rule questions
for the player to move.

`echecs.board.BoardController` sits on top of the model. It turns square
presses (`square_pressed`) and dropped pieces (`piece_released`) into
selections and moves, keeps the marker shown on every square, counts the
pieces taken from each side (`captured_count`), and produces the turn,
check and checkmate texts (`status_text`, `check_message`,
`checkmate_message`). Its `promotion` event lets you call
`choose_promotion`; if no listener does, the pawn becomes a queen.

`echecs.app.ChessApp` runs the home menu and the game loop behind the
`echecs` command.

## What it does not do

- There is no computer opponent. Choosing `J1 VS CPU` records that choice,
  but both sides are still played from the keyboard.
- There is no graphical window and no sound; the game is played in the
  terminal only. The count of captured pieces is kept by `BoardController`
  but not printed by the `echecs` command.
- Castling, en passant and stalemate are not part of the rules.