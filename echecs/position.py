"""Board coordinates, player colours and piece kinds."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

BOARD_SIZE = 8
MIN_POSITION = 0
MAX_POSITION = 8


@dataclass(frozen=True)
class Position:
    """A square of the board, ``x`` being the column and ``y`` the row."""

    x: int
    y: int

    def on_board(self) -> bool:
        """Return True when the square lies inside the 8x8 board."""
        return (
            MIN_POSITION <= self.x < MAX_POSITION
            and MIN_POSITION <= self.y < MAX_POSITION
        )

    def offset(self, dx: int, dy: int) -> Position:
        """Return the square shifted by ``dx`` columns and ``dy`` rows."""
        return Position(self.x + dx, self.y + dy)

    def __str__(self) -> str:
        return f"{self.x},{self.y}"


class Color(Enum):
    """The two sides of a game."""

    WHITE = "white"
    BLACK = "black"

    def opponent(self) -> Color:
        """Return the other side."""
        return Color.BLACK if self is Color.WHITE else Color.WHITE


class PieceType(Enum):
    """The kinds of chess pieces."""

    PAWN = 0
    ROOK = 1
    KNIGHT = 2
    BISHOP = 3
    QUEEN = 4
    KING = 5