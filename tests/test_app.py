import io

import pytest

from echecs.app import ChessApp, main, promotion_kind, restart_prompt
from echecs.pieces import Pawn
from echecs.position import PieceType


def _app(text=""):
    out = io.StringIO()
    return ChessApp(stdin=io.StringIO(text), stdout=out), out


@pytest.mark.parametrize(
    "choice, kind",
    [
        (1, PieceType.QUEEN),
        (2, PieceType.BISHOP),
        (3, PieceType.ROOK),
        (4, PieceType.KNIGHT),
        ("1", PieceType.QUEEN),
        ("Reine", PieceType.QUEEN),
        ("fou", PieceType.BISHOP),
        ("tour", PieceType.ROOK),
        ("chevalier", PieceType.KNIGHT),
    ],
)
def test_promotion_kind(choice, kind):
    assert promotion_kind(choice) is kind


@pytest.mark.parametrize("choice", [0, 5, "roi", "", True])
def test_promotion_kind_rejects_unknown(choice):
    with pytest.raises(ValueError):
        promotion_kind(choice)


def test_restart_prompt_text():
    assert restart_prompt() == "Êtes vous sûr de vouloir commencer une nouvelle partie ? \n"


def test_start_game_and_home():
    app, _ = _app()
    board = app.start_game(True)
    assert app.board is board
    assert app.machine is True
    assert app.screen == "game"
    assert app.window_size == (975, 710)
    menu = app.show_home()
    assert "J1 VS CPU" in menu
    assert app.board is None
    assert app.screen == "home"
    assert app.window_size == (680, 680)


def test_restart_confirmed_replaces_board():
    app, out = _app("oui\n")
    old = app.start_game(False)
    assert app.restart() is True
    assert app.board is not old
    assert app.board.model.piece_at(4, 7).kind is PieceType.KING
    assert app.machine is False
    assert restart_prompt() in out.getvalue()


def test_restart_refused_keeps_board():
    app, _ = _app("non\n")
    old = app.start_game(False)
    assert app.restart() is False
    assert app.board is old


def test_quit_stops_running():
    app, _ = _app()
    app.running = True
    app.quit()
    assert app.running is False


def test_run_quit_from_home():
    app, out = _app("3\n")
    assert app.run() == 0
    assert "J1 VS J2" in out.getvalue()
    assert app.running is False


def test_run_ends_on_eof():
    app, _ = _app("")
    assert app.run() == 0
    assert app.board is None


def test_run_plays_a_move():
    app, out = _app("2\n6 6\n6 4\nquit\n")
    assert app.run() == 0
    moved = app.board.model.piece_at(6, 4)
    assert isinstance(moved, Pawn)
    assert app.board.model.piece_at(6, 6) is None
    text = out.getvalue()
    assert "C'est au tour du joueur Blanc" in text
    assert "C'est au tour du joueur Noir" in text


def test_run_cannot_move_opponent_piece():
    app, _ = _app("2\n4 1\n4 3\nquit\n")
    app.run()
    assert isinstance(app.board.model.piece_at(4, 1), Pawn)
    assert app.board.model.piece_at(4, 3) is None


def test_run_menu_returns_home():
    app, out = _app("2\nmenu\n3\n")
    assert app.run() == 0
    assert app.board is None
    assert out.getvalue().count("J1 VS CPU") == 2


def test_run_off_board_square_leaves_board_unchanged():
    app, _ = _app("2\n9 9\nquit\n")
    app.run()
    assert app.board.model.selected is None
    assert app.board.status_text() == "C'est au tour du joueur Blanc"


def test_main_rejects_unknown_option():
    with pytest.raises(SystemExit):
        main(["--unknown"])