"""Chess pieces and the squares each of them can reach."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import ClassVar, Dict, Mapping, Optional, Sequence, Tuple

from .position import Color, PieceType, Position

Board = Mapping[Position, Optional["Piece"]]

_IMAGE_NAMES: Dict[Tuple[PieceType, Color], str] = {
    (PieceType.KING, Color.WHITE): "roi_blanc.jpg",
    (PieceType.QUEEN, Color.WHITE): "reine_blanc.jpg",
    (PieceType.ROOK, Color.WHITE): "tour_blanc.jpg",
    (PieceType.BISHOP, Color.WHITE): "fou_blanc.jpg",
    (PieceType.KNIGHT, Color.WHITE): "chevalier_blanc.png",
    (PieceType.PAWN, Color.WHITE): "pion_blanc.jpg",
    (PieceType.KING, Color.BLACK): "roi_noir.jpg",
    (PieceType.QUEEN, Color.BLACK): "reine_noir.jpg",
    (PieceType.ROOK, Color.BLACK): "tour_noir.jpg",
    (PieceType.BISHOP, Color.BLACK): "fou_noir.jpg",
    (PieceType.KNIGHT, Color.BLACK): "chevalier_noir.jpg",
    (PieceType.PAWN, Color.BLACK): "pion_noir.jpg",
}

IMAGE_DIR = "images/img/"


class Piece(ABC):
    """A piece on the board.

    ``pieces`` arguments map every square of the board to the piece standing
    on it, or to None for an empty square; squares missing from the mapping
    are treated as off the board.
    """

    kind: ClassVar[PieceType]

    def __init__(self, x: int, y: int, color: Color) -> None:
        self.position = Position(x, y)
        self.initial_position = Position(x, y)
        self.previous_position = Position(x, y)
        self.color = color

    @property
    def image(self) -> str:
        """Path of the picture that shows this piece."""
        return IMAGE_DIR + _IMAGE_NAMES[(self.kind, self.color)]

    @abstractmethod
    def possible_positions(self, pieces: Board) -> list[Position]:
        """Return the squares this piece could move to next."""

    def is_valid_target(self, pos: Position, pieces: Board) -> bool:
        """True if ``pos`` is on the board and not held by a piece of the same colour."""
        if pos not in pieces:
            return False
        occupant = pieces[pos]
        return occupant is None or occupant.color != self.color

    def can_move_to(self, pos: Position, pieces: Board) -> bool:
        """True if ``pos`` is among this piece's possible positions."""
        return pos in self.possible_positions(pieces)

    def can_capture(self, pos: Position, pieces: Board) -> bool:
        """True if an opposing piece stands on ``pos``."""
        occupant = pieces.get(pos)
        return (
            occupant is not None
            and occupant.color != self.color
            and occupant.position == pos
        )

    def move_to(self, pos: Position, pieces: Board) -> bool:
        """Move to ``pos`` if that move is possible; return whether it was made."""
        if not self.can_move_to(pos, pieces):
            return False
        self.previous_position = self.position
        self.position = pos
        return True

    def undo_move(self) -> None:
        """Go back to the square held before the last move."""
        self.position = self.previous_position

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}({self.position.x}, {self.position.y}, "
            f"{self.color.name})"
        )


class _SlidingPiece(Piece):
    directions: ClassVar[Sequence[Tuple[int, int]]] = ()

    def possible_positions(self, pieces: Board) -> list[Position]:
        moves: list[Position] = []
        for dx, dy in self.directions:
            pos = self.position.offset(dx, dy)
            while pos.on_board() and self.is_valid_target(pos, pieces):
                moves.append(pos)
                if self.can_capture(pos, pieces):
                    break
                pos = pos.offset(dx, dy)
        return moves


class _SteppingPiece(Piece):
    steps: ClassVar[Sequence[Tuple[int, int]]] = ()

    def possible_positions(self, pieces: Board) -> list[Position]:
        candidates = (self.position.offset(dx, dy) for dx, dy in self.steps)
        return [
            pos
            for pos in candidates
            if pos.on_board() and self.is_valid_target(pos, pieces)
        ]


_ROOK_DIRECTIONS = ((1, 0), (-1, 0), (0, -1), (0, 1))
_BISHOP_DIRECTIONS = ((1, 1), (-1, 1), (1, -1), (-1, -1))


class Rook(_SlidingPiece):
    """Slides along rows and columns."""

    kind = PieceType.ROOK
    directions = _ROOK_DIRECTIONS


class Bishop(_SlidingPiece):
    """Slides along diagonals."""

    kind = PieceType.BISHOP
    directions = _BISHOP_DIRECTIONS


class Queen(_SlidingPiece):
    """Moves like a rook, then like a bishop."""

    kind = PieceType.QUEEN
    directions = _ROOK_DIRECTIONS + _BISHOP_DIRECTIONS


class Knight(_SteppingPiece):
    """Jumps in an L shape."""

    kind = PieceType.KNIGHT
    steps = ((2, 1), (2, -1), (-2, 1), (-2, -1), (1, 2), (1, -2), (-1, 2), (-1, -2))


class King(_SteppingPiece):
    """Steps one square in any direction."""

    kind = PieceType.KING
    steps = ((1, 0), (-1, 0), (0, 1), (0, -1), (1, 1), (-1, 1), (1, -1), (-1, -1))


class Pawn(Piece):
    """Advances towards the opponent and captures diagonally."""

    kind = PieceType.PAWN

    def initial_row(self) -> int:
        """Row the pawn started the game on."""
        return self.initial_position.y

    def possible_positions(self, pieces: Board) -> list[Position]:
        direction = 1 if self.color is Color.BLACK else -1
        here = self.position
        moves: list[Position] = []

        ahead = here.offset(0, direction)
        if self.is_valid_target(ahead, pieces) and pieces[ahead] is None:
            moves.append(ahead)
            if self.initial_position.y == here.y:
                two_ahead = here.offset(0, 2 * direction)
                if self.is_valid_target(two_ahead, pieces):
                    moves.append(two_ahead)

        for dx in (-1, 1):
            diagonal = here.offset(dx, direction)
            occupant = pieces.get(diagonal)
            if occupant is not None and occupant.color != self.color:
                moves.append(diagonal)
        return moves


_PIECE_CLASSES: Dict[PieceType, type] = {
    PieceType.PAWN: Pawn,
    PieceType.ROOK: Rook,
    PieceType.KNIGHT: Knight,
    PieceType.BISHOP: Bishop,
    PieceType.QUEEN: Queen,
    PieceType.KING: King,
}


def make_piece(kind: PieceType, x: int, y: int, color: Color) -> Piece:
    """Create a piece of the given kind; raise ValueError for an unknown kind."""
    return _PIECE_CLASSES[PieceType(kind)](x, y, color)