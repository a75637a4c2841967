"""Board controller: square markers, piece items, captured counts and messages."""

from __future__ import annotations

from collections import Counter, defaultdict
from enum import Enum
from typing import Callable, Dict, List, Optional, Tuple

from .model import ChessModel, ModelEvent
from .pieces import Piece
from .position import BOARD_SIZE, Color, PieceType, Position

SQUARE_SIZE = 80

_EVENTS = frozenset(
    {"moved", "captured", "check", "checkmate", "promotion", "promoted"}
)

_COUNTED_KINDS = (
    PieceType.PAWN,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.ROOK,
    PieceType.QUEEN,
)


class Marker(Enum):
    """What a square shows while a piece is selected."""

    NONE = "none"
    MOVE = "move"
    CAPTURE = "capture"


def square_from_pixel(px: float, py: float) -> Position:
    """Return the square under the scene point (px, py)."""
    return Position(int(px / SQUARE_SIZE), int(py / SQUARE_SIZE))


def _pixel_of(pos: Position) -> Tuple[int, int]:
    return (pos.x * SQUARE_SIZE, pos.y * SQUARE_SIZE)


class BoardController:
    """Turns clicks and drags into model actions and tracks what the board shows.

    Listeners may be attached with :meth:`connect` to these events:
    ``moved`` (piece, reachable squares), ``captured`` (piece),
    ``check`` (message), ``checkmate`` (message), ``promotion`` (x, y)
    and ``promoted`` (new piece). A ``promotion`` listener is expected to
    call :meth:`choose_promotion`; when none does, the pawn becomes a queen.
    """

    def __init__(self, machine: bool = False, model: Optional[ChessModel] = None) -> None:
        self.machine = machine
        self.model = model if model is not None else ChessModel(machine)
        self._listeners: Dict[str, List[Callable[..., object]]] = defaultdict(list)
        self._markers: Dict[Position, Marker] = {
            Position(x, y): Marker.NONE
            for x in range(BOARD_SIZE)
            for y in range(BOARD_SIZE)
        }
        self._items: Dict[Piece, Tuple[int, int]] = {}
        self._captured: Counter = Counter()
        self._pending_promotion: Optional[Position] = None

        for piece in self.model.pieces.values():
            if piece is not None:
                self._add_item(piece)

        self.model.connect(ModelEvent.PIECE_SELECTED, self._on_selected)
        self.model.connect(ModelEvent.PIECE_MOVED, self._on_moved)
        self.model.connect(ModelEvent.PIECE_CAPTURED, self._on_captured)
        self.model.connect(ModelEvent.KING_IN_CHECK, self._on_check)
        self.model.connect(ModelEvent.CHECKMATE, self._on_checkmate)
        self.model.connect(ModelEvent.PROMOTION_CHOICE, self._on_promotion_choice)
        self.model.connect(ModelEvent.PIECE_PROMOTED, self._on_promoted)

    # -- listeners ---------------------------------------------------------

    def connect(self, event: str, callback: Callable[..., object]) -> None:
        """Call ``callback`` every time ``event`` happens."""
        if event not in _EVENTS:
            raise ValueError(f"unknown board event: {event!r}")
        self._listeners[event].append(callback)

    def _emit(self, event: str, *args: object) -> None:
        for callback in list(self._listeners[event]):
            callback(*args)

    # -- state -------------------------------------------------------------

    @property
    def markers(self) -> Dict[Position, Marker]:
        """Marker shown on every square."""
        return dict(self._markers)

    @property
    def items(self) -> Dict[Piece, Tuple[int, int]]:
        """Scene pixel position of every piece shown on the board."""
        return dict(self._items)

    @property
    def pending_promotion(self) -> Optional[Position]:
        """Square of the pawn waiting for a promotion choice, if any."""
        return self._pending_promotion

    def _add_item(self, piece: Optional[Piece]) -> None:
        if piece is None:
            return
        self._items[piece] = _pixel_of(piece.position)

    # -- user input --------------------------------------------------------

    def square_pressed(self, x: int, y: int) -> None:
        """Select a piece of the player to move, or move the selected piece."""
        piece = self.model.piece_at(x, y)
        if piece is not None and piece.color == self.model.current_player:
            self.model.select(x, y)
        elif self.model.selected is not None:
            self.model.move_selected(x, y)

    def piece_released(self, piece: Piece, x: int, y: int) -> bool:
        """Handle a piece dropped on (x, y); return whether the drop was forwarded."""
        if piece.color != self.model.current_player:
            return False
        target = Position(x, y)
        if piece.position == target or not piece.can_move_to(target, self.model.pieces):
            if piece in self._items:
                self._items[piece] = _pixel_of(piece.position)
            return False
        self.square_pressed(x, y)
        return True

    def choose_promotion(self, choice: PieceType) -> Piece:
        """Promote the waiting pawn to ``choice``."""
        if self._pending_promotion is None:
            raise RuntimeError("no pawn is waiting for promotion")
        pos = self._pending_promotion
        old = self.model.selected
        self._pending_promotion = None
        try:
            piece = self.model.promote(choice, pos.x, pos.y)
        except ValueError:
            self._pending_promotion = pos
            raise
        if old is not None:
            self._items.pop(old, None)
        return piece

    # -- model notifications -----------------------------------------------

    def _on_selected(self) -> None:
        selected = self.model.selected
        if self.model.previous_selected is not None:
            for pos in self.model.previous_possible_moves():
                if pos in self._markers:
                    self._markers[pos] = Marker.NONE
        board = self.model.pieces
        for pos in self.model.possible_moves():
            capture = selected is not None and selected.can_capture(pos, board)
            self._markers[pos] = Marker.CAPTURE if capture else Marker.MOVE

    def _on_moved(self, piece: Piece, positions: List[Position]) -> None:
        if piece not in self._items:
            return
        self._items[piece] = _pixel_of(piece.position)
        for pos in positions:
            self._markers[pos] = Marker.NONE
        self._emit("moved", piece, positions)

    def _on_captured(self, piece: Optional[Piece]) -> None:
        if piece is None or piece not in self._items:
            return
        del self._items[piece]
        if piece.kind in _COUNTED_KINDS:
            side = self.model.current_player.opponent()
            self._captured[(side, piece.kind)] += 1
        self._emit("captured", piece)

    def _on_check(self) -> None:
        self._emit("check", self.check_message())

    def _on_checkmate(self) -> None:
        self._emit("checkmate", self.checkmate_message())

    def _on_promotion_choice(self, x: int, y: int) -> None:
        self._pending_promotion = Position(x, y)
        self._emit("promotion", x, y)
        if self._pending_promotion is not None:
            self.choose_promotion(PieceType.QUEEN)

    def _on_promoted(self, piece: Piece) -> None:
        self._add_item(piece)
        self._emit("promoted", piece)

    # -- texts -------------------------------------------------------------

    def captured_count(self, color: Color, kind: PieceType) -> int:
        """Number of pieces of ``color`` and ``kind`` taken so far."""
        return self._captured[(Color(color), PieceType(kind))]

    def status_text(self) -> str:
        """Line telling whose turn it is."""
        name = "Blanc" if self.model.current_player is Color.WHITE else "Noir"
        return "C'est au tour du joueur " + name

    def check_message(self) -> str:
        """Warning shown to the player whose king is in check."""
        name = "blanc" if self.model.current_player is Color.WHITE else "noir"
        return (
            "Joueur " + name + " votre roi est en échec!\n"
            "Veuillez déplacer une pièce vous permettant de sortir de l'échec.\n"
            "Aucune autre pièce que celles vous permettant de sortir de l'échec\n"
            "ne pourra être jouée."
        )

    def checkmate_message(self) -> str:
        """Announcement of the winner once the game is over."""
        winner = "noir" if self.model.current_player is Color.WHITE else "blanc"
        return (
            "Le joueur " + winner + " a remporté cette partie voulez vous jouer "
            "une nouvelle partie ? \nou allez au menu principal ? \n"
        )