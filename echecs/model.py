"""Game state of a chess match: the board, whose turn it is and the rules."""

from __future__ import annotations

from collections import defaultdict
from enum import Enum, auto
from typing import Callable, Dict, Iterable, List, Optional

from .pieces import (
    Bishop,
    King,
    Knight,
    Pawn,
    Piece,
    Queen,
    Rook,
    make_piece,
)
from .position import BOARD_SIZE, Color, PieceType, Position

_PROMOTION_KINDS = frozenset(
    {PieceType.QUEEN, PieceType.ROOK, PieceType.BISHOP, PieceType.KNIGHT}
)

_BACK_ROW = (Rook, Knight, Bishop, Queen, King, Bishop, Knight, Rook)


class ModelEvent(Enum):
    """Notifications sent by :class:`ChessModel` to its listeners.

    Callback arguments:
    PIECE_SELECTED: none.
    PIECE_MOVED: the moved piece and the squares it could have reached.
    PIECE_CAPTURED: the captured piece.
    KING_IN_CHECK, CHECKMATE: none.
    PROMOTION_CHOICE: the column and row of the pawn to promote.
    PIECE_PROMOTED: the new piece.
    """

    PIECE_SELECTED = auto()
    PIECE_MOVED = auto()
    PIECE_CAPTURED = auto()
    KING_IN_CHECK = auto()
    CHECKMATE = auto()
    PROMOTION_CHOICE = auto()
    PIECE_PROMOTED = auto()


class ChessModel:
    """Holds the pieces, the selection and the player to move.

    Without ``pieces`` the standard starting position is set up; otherwise the
    given pieces are placed where their positions say, and each side must
    have exactly one king.
    """

    def __init__(
        self, machine: bool = False, pieces: Optional[Iterable[Piece]] = None
    ) -> None:
        self.machine = machine
        self._listeners: Dict[ModelEvent, List[Callable[..., object]]] = defaultdict(
            list
        )
        self._board: Dict[Position, Optional[Piece]] = {}
        self._kings: Dict[Color, Piece] = {}
        self._possible: List[Position] = []
        self._selected: Optional[Piece] = None
        self._previous: Optional[Piece] = None
        self._moves_cache: Dict[str, List[Position]] = {}
        self._check_cache: Dict[str, bool] = {}
        self.current_player = Color.WHITE
        if pieces is None:
            self.reset()
        else:
            self._load(pieces)

    # -- listeners ---------------------------------------------------------

    def connect(self, event: ModelEvent, callback: Callable[..., object]) -> None:
        """Call ``callback`` every time ``event`` is sent."""
        self._listeners[ModelEvent(event)].append(callback)

    def _emit(self, event: ModelEvent, *args: object) -> None:
        for callback in list(self._listeners[event]):
            callback(*args)

    # -- set up ------------------------------------------------------------

    def _clear(self) -> None:
        self._board = {
            Position(x, y): None for y in range(BOARD_SIZE) for x in range(BOARD_SIZE)
        }
        self._kings = {}
        self._possible = []
        self._selected = None
        self._previous = None
        self._moves_cache.clear()
        self._check_cache.clear()

    def reset(self) -> None:
        """Put every piece back on its starting square; White moves first."""
        self._clear()
        for x in range(BOARD_SIZE):
            self._board[Position(x, 1)] = Pawn(x, 1, Color.BLACK)
            self._board[Position(x, 6)] = Pawn(x, 6, Color.WHITE)
        for x, cls in enumerate(_BACK_ROW):
            self._board[Position(x, 0)] = cls(x, 0, Color.BLACK)
            self._board[Position(x, 7)] = cls(x, 7, Color.WHITE)
        self._kings = {
            Color.BLACK: self._board[Position(4, 0)],
            Color.WHITE: self._board[Position(4, 7)],
        }
        self.current_player = Color.WHITE

    def _load(self, pieces: Iterable[Piece]) -> None:
        self._clear()
        for piece in pieces:
            pos = piece.position
            if not pos.on_board():
                raise ValueError(f"piece outside the board at {pos}")
            if self._board[pos] is not None:
                raise ValueError(f"two pieces on square {pos}")
            self._board[pos] = piece
            if isinstance(piece, King):
                if piece.color in self._kings:
                    raise ValueError(f"more than one {piece.color.name} king")
                self._kings[piece.color] = piece
        missing = [color.name for color in Color if color not in self._kings]
        if missing:
            raise ValueError(f"no king for {', '.join(missing)}")
        self.current_player = Color.WHITE

    # -- queries -----------------------------------------------------------

    @property
    def pieces(self) -> Dict[Position, Optional[Piece]]:
        """A copy of the board: every square mapped to its piece or None."""
        return dict(self._board)

    @property
    def selected(self) -> Optional[Piece]:
        """The piece currently selected, if any."""
        return self._selected

    @property
    def previous_selected(self) -> Optional[Piece]:
        """The piece selected before the current one, if any."""
        return self._previous

    def piece_at(self, x: int, y: int) -> Optional[Piece]:
        """Return the piece on square (x, y), or None."""
        return self._board.get(Position(x, y))

    def possible_moves(self) -> List[Position]:
        """Squares the selected piece may move to without exposing its king."""
        return list(self._possible)

    def previous_possible_moves(self) -> List[Position]:
        """Squares the previously selected piece could reach."""
        if self._previous is None:
            return []
        return self._previous.possible_positions(self._board)

    # -- rules -------------------------------------------------------------

    def move_puts_in_check(self, piece: Piece, pos: Position) -> bool:
        """True if moving ``piece`` to ``pos`` leaves the player to move in check."""
        key = f"{piece.position}>{pos}"
        cached = self._check_cache.get(key)
        if cached is not None:
            return cached
        moved = piece.move_to(pos, self._board)
        occupant = self._board[pos]
        self._board[pos] = piece
        try:
            result = self.is_in_check()
        finally:
            self._board[pos] = occupant
            if moved:
                piece.undo_move()
        self._check_cache[key] = result
        return result

    def is_in_check(self) -> bool:
        """True if the king of the player to move is attacked."""
        target = self._kings[self.current_player].position
        return any(
            piece is not None
            and piece.color != self.current_player
            and piece.can_move_to(target, self._board)
            for piece in self._board.values()
        )

    def is_checkmate(self) -> bool:
        """True if no opposing move leaves the player to move out of check."""
        for piece in list(self._board.values()):
            if piece is None or piece.color == self.current_player:
                continue
            for move in piece.possible_positions(self._board):
                if not self.move_puts_in_check(piece, move):
                    return False
        return True

    # -- actions -----------------------------------------------------------

    def select(self, x: int, y: int) -> None:
        """Select the piece on (x, y) and work out where it may go."""
        piece = self.piece_at(x, y)
        if piece is None:
            raise ValueError(f"no piece on square {x},{y}")
        self._possible = []
        if self._selected is not None:
            self._previous = self._selected
        self._selected = piece
        side = 1 if self.current_player is Color.WHITE else 0
        key = f"{piece.position}_{side}"
        cached = self._moves_cache.get(key)
        if cached is not None:
            self._possible = list(cached)
        else:
            self._possible = [
                move
                for move in piece.possible_positions(self._board)
                if not self.move_puts_in_check(piece, move)
            ]
            self._moves_cache[key] = list(self._possible)
        self._emit(ModelEvent.PIECE_SELECTED)

    def capture(self, x: int, y: int) -> None:
        """Announce that the piece on (x, y) is being taken."""
        self._emit(ModelEvent.PIECE_CAPTURED, self._board.get(Position(x, y)))

    def promote(self, kind: PieceType, x: int, y: int) -> Piece:
        """Replace the selected pawn by a new piece of ``kind`` on (x, y)."""
        kind = PieceType(kind)
        if kind not in _PROMOTION_KINDS:
            raise ValueError(f"cannot promote to {kind.name}")
        piece = make_piece(kind, x, y, self.current_player)
        self._selected = piece
        self._emit(ModelEvent.PIECE_PROMOTED, piece)
        return piece

    def move_selected(self, x: int, y: int) -> bool:
        """Move the selected piece to (x, y) if allowed; return whether it moved."""
        target = Position(x, y)
        piece = self._selected
        if piece is None or target not in self._possible:
            return False
        if self._board[target] is not None:
            self.capture(x, y)
        reachable = list(self._possible)
        self._board[piece.position] = None
        piece.move_to(target, self._board)

        if isinstance(piece, Pawn):
            start = piece.initial_row()
            if (start == 1 and y == 7) or (start == 6 and y == 0):
                self._emit(ModelEvent.PROMOTION_CHOICE, x, y)

        placed = self._selected
        self._board[target] = placed
        self._emit(ModelEvent.PIECE_MOVED, placed, reachable)

        self._selected = None
        self._previous = None
        self._possible = []
        self._moves_cache.clear()
        self._check_cache.clear()
        self.current_player = self.current_player.opponent()
        if self.is_in_check():
            if self.is_checkmate():
                self._emit(ModelEvent.CHECKMATE)
            else:
                self._emit(ModelEvent.KING_IN_CHECK)
        return True