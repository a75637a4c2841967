"""Console front end: home menu, game screen and the command that starts them."""

from __future__ import annotations

import argparse
import sys
from typing import List, Optional, TextIO, Tuple

from .board import BoardController, Marker
from .pieces import Piece
from .position import BOARD_SIZE, Color, PieceType, Position

HOME_SIZE: Tuple[int, int] = (680, 680)
GAME_SIZE: Tuple[int, int] = (975, 710)

_PROMOTION_CHOICES = {
    1: PieceType.QUEEN,
    2: PieceType.BISHOP,
    3: PieceType.ROOK,
    4: PieceType.KNIGHT,
}

_PROMOTION_NAMES = {
    "reine": PieceType.QUEEN,
    "fou": PieceType.BISHOP,
    "tour": PieceType.ROOK,
    "chevalier": PieceType.KNIGHT,
}

_LETTERS = {
    PieceType.PAWN: "p",
    PieceType.ROOK: "r",
    PieceType.KNIGHT: "n",
    PieceType.BISHOP: "b",
    PieceType.QUEEN: "q",
    PieceType.KING: "k",
}

_YES = frozenset({"o", "oui", "y", "yes"})

HOME_MENU = "Chess\n  1. J1 VS CPU\n  2. J1 VS J2\n  3. Quitter\n"

GAME_HELP = (
    "Commandes : <colonne> <ligne> pour choisir une case, "
    "'nouvelle' pour une nouvelle partie, 'menu' pour le menu principal, "
    "'quitter' pour quitter.\n"
)

PROMOTION_MENU = (
    "Promotion du Pion - Faites votre choix\n"
    "  1. Reine\n  2. Fou\n  3. Tour\n  4. Chevalier\n"
)

GAME_OVER_MENU = "  1. Nouvelle partie\n  2. Aller au menu\n"


def promotion_kind(choice: object) -> PieceType:
    """Map a promotion choice (1-4 or a piece name) to the piece kind it picks."""
    if isinstance(choice, str):
        text = choice.strip().lower()
        if text in _PROMOTION_NAMES:
            return _PROMOTION_NAMES[text]
        try:
            choice = int(text)
        except ValueError:
            raise ValueError(f"unknown promotion choice: {choice!r}") from None
    if isinstance(choice, int) and not isinstance(choice, bool):
        if choice in _PROMOTION_CHOICES:
            return _PROMOTION_CHOICES[choice]
    raise ValueError(f"unknown promotion choice: {choice!r}")


def restart_prompt() -> str:
    """Question asked before a new game replaces the current one."""
    return "Êtes vous sûr de vouloir commencer une nouvelle partie ? \n"


def _piece_letter(piece: Piece) -> str:
    letter = _LETTERS[piece.kind]
    return letter.upper() if piece.color is Color.WHITE else letter


class ChessApp:
    """The application: a home menu, then a board played from the console."""

    def __init__(
        self, stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None
    ) -> None:
        self._in = stdin if stdin is not None else sys.stdin
        self._out = stdout if stdout is not None else sys.stdout
        self.board: Optional[BoardController] = None
        self.machine = False
        self.running = False
        self.screen = "home"
        self.window_size = HOME_SIZE
        self._game_over = False

    # -- input and output --------------------------------------------------

    def _write(self, text: str) -> None:
        self._out.write(text)
        self._out.flush()

    def _ask(self, prompt: str) -> str:
        self._write(prompt)
        line = self._in.readline()
        if line == "":
            raise EOFError
        return line.strip()

    # -- screens -----------------------------------------------------------

    def show_home(self) -> str:
        """Leave any game and go back to the home menu; return the menu text."""
        self.board = None
        self._game_over = False
        self.screen = "home"
        self.window_size = HOME_SIZE
        return HOME_MENU

    def start_game(self, machine: bool) -> BoardController:
        """Start a new game; ``machine`` records a game against the computer."""
        self.machine = bool(machine)
        board = BoardController(self.machine)
        board.connect("check", self._on_check)
        board.connect("checkmate", self._on_checkmate)
        board.connect("promotion", lambda x, y: self._promote(board))
        self.board = board
        self._game_over = False
        self.screen = "game"
        self.window_size = GAME_SIZE
        return board

    def restart(self) -> bool:
        """Ask for confirmation, then replace the game; return whether it was replaced."""
        answer = self._ask(restart_prompt() + "(oui/non) ")
        if answer.lower() in _YES:
            self.start_game(self.machine)
            return True
        return False

    def quit(self) -> None:
        """Stop the application loop."""
        self.running = False

    # -- board notifications -----------------------------------------------

    def _on_check(self, message: str) -> None:
        self._write(message + "\n")

    def _on_checkmate(self, message: str) -> None:
        self._write(message)
        self._game_over = True

    def _promote(self, board: BoardController) -> None:
        while True:
            try:
                answer = self._ask(PROMOTION_MENU + "> ")
            except EOFError:
                board.choose_promotion(PieceType.QUEEN)
                raise
            if answer == "":
                kind = PieceType.QUEEN
            else:
                try:
                    kind = promotion_kind(answer)
                except ValueError:
                    self._write("Choix invalide.\n")
                    continue
            board.choose_promotion(kind)
            return

    # -- rendering ---------------------------------------------------------

    def _render(self, board: BoardController) -> str:
        pieces = board.model.pieces
        markers = board.markers
        lines: List[str] = ["   " + "".join(f" {x} " for x in range(BOARD_SIZE))]
        for y in range(BOARD_SIZE):
            cells = []
            for x in range(BOARD_SIZE):
                pos = Position(x, y)
                piece = pieces.get(pos)
                marker = markers.get(pos, Marker.NONE)
                if piece is not None:
                    letter = _piece_letter(piece)
                    cells.append(f"({letter})" if marker is Marker.CAPTURE else f" {letter} ")
                else:
                    cells.append(" * " if marker is not Marker.NONE else " . ")
            lines.append(f" {y} " + "".join(cells))
        return "\n".join(lines) + "\n" + board.status_text() + "\n"

    # -- main loop ---------------------------------------------------------

    def _home_step(self) -> None:
        choice = self._ask(HOME_MENU + "> ").lower()
        if choice == "1":
            self.start_game(True)
        elif choice == "2":
            self.start_game(False)
        elif choice in ("3", "q", "quitter", "quit"):
            self.quit()
        else:
            self._write("Choix invalide.\n")

    def _game_over_step(self) -> None:
        choice = self._ask(GAME_OVER_MENU + "> ")
        if choice == "1":
            self._game_over = False
            self.restart()
        elif choice == "2":
            self.show_home()
        else:
            self._write("Choix invalide.\n")

    def _game_step(self, board: BoardController) -> None:
        command = self._ask(self._render(board) + "> ")
        words = command.lower().split()
        if not words:
            return
        if words[0] in ("menu", "accueil"):
            self.show_home()
        elif words[0] in ("nouvelle", "new", "n"):
            self.restart()
        elif words[0] in ("quitter", "quit", "q"):
            self.quit()
        elif words[0] in ("aide", "help", "?"):
            self._write(GAME_HELP)
        elif len(words) == 2 and all(w.lstrip("-").isdigit() for w in words):
            pos = Position(int(words[0]), int(words[1]))
            if pos.on_board():
                board.square_pressed(pos.x, pos.y)
            else:
                self._write("Case invalide.\n")
        else:
            self._write("Commande inconnue.\n" + GAME_HELP)

    def run(self) -> int:
        """Run until the player quits or input ends; return the exit status."""
        self.running = True
        try:
            while self.running:
                board = self.board
                if board is None:
                    self._home_step()
                elif self._game_over:
                    self._game_over_step()
                else:
                    self._game_step(board)
        except EOFError:
            self._write("\n")
        finally:
            self.running = False
        return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Start the chess game in the console."""
    parser = argparse.ArgumentParser(prog="echecs", description="Jeu d'échecs.")
    parser.parse_args(argv)
    return ChessApp().run()


if __name__ == "__main__":
    sys.exit(main())