import pytest

from echecs.board import BoardController, Marker, square_from_pixel
from echecs.model import ChessModel
from echecs.pieces import King, Pawn
from echecs.position import Color, PieceType, Position


def play(board, moves):
    for (fx, fy), (tx, ty) in moves:
        board.square_pressed(fx, fy)
        board.square_pressed(tx, ty)


def promotion_board():
    pawn = Pawn(0, 6, Color.WHITE)
    pawn.position = Position(0, 1)
    model = ChessModel(
        pieces=[pawn, King(4, 7, Color.WHITE), King(7, 2, Color.BLACK)]
    )
    return BoardController(model=model), pawn


def test_square_from_pixel_round_trip():
    board = BoardController()
    for piece, pixel in board.items.items():
        assert square_from_pixel(*pixel) == piece.position
    assert square_from_pixel(0, 0) == Position(0, 0)


def test_items_cover_all_pieces():
    board = BoardController()
    pieces = [p for p in board.model.pieces.values() if p is not None]
    assert set(board.items) == set(pieces)


def test_initial_status_and_no_markers():
    board = BoardController()
    assert board.status_text() == "C'est au tour du joueur Blanc"
    assert all(m is Marker.NONE for m in board.markers.values())


def test_select_marks_moves():
    board = BoardController()
    board.square_pressed(4, 6)
    marked = {pos for pos, m in board.markers.items() if m is Marker.MOVE}
    assert marked == set(board.model.possible_moves())
    assert Position(4, 5) in marked


def test_pressing_opponent_piece_does_not_select():
    board = BoardController()
    board.square_pressed(4, 1)
    assert board.model.selected is None


def test_changing_selection_clears_old_markers():
    board = BoardController()
    board.square_pressed(4, 6)
    board.square_pressed(3, 6)
    assert board.markers[Position(4, 5)] is Marker.NONE
    assert board.markers[Position(3, 5)] is Marker.MOVE


def test_move_updates_status_and_item():
    board = BoardController()
    moved = []
    board.connect("moved", lambda piece, positions: moved.append(piece))
    pawn = board.model.piece_at(4, 6)
    play(board, [((4, 6), (4, 4))])
    assert board.status_text() == "C'est au tour du joueur Noir"
    assert moved == [pawn]
    assert square_from_pixel(*board.items[pawn]) == Position(4, 4)
    assert all(m is Marker.NONE for m in board.markers.values())


def test_capture_counts_and_removes_item():
    board = BoardController()
    play(board, [((4, 6), (4, 4)), ((3, 1), (3, 3))])
    victim = board.model.piece_at(3, 3)
    board.square_pressed(4, 4)
    assert board.markers[Position(3, 3)] is Marker.CAPTURE
    board.square_pressed(3, 3)
    assert victim not in board.items
    assert board.captured_count(Color.BLACK, PieceType.PAWN) == 1
    assert board.captured_count(Color.WHITE, PieceType.PAWN) == 0


def test_piece_released_wrong_colour():
    board = BoardController()
    black_pawn = board.model.piece_at(4, 1)
    assert board.piece_released(black_pawn, 4, 3) is False
    assert black_pawn.position == Position(4, 1)


def test_piece_released_invalid_target_snaps_back():
    board = BoardController()
    pawn = board.model.piece_at(4, 6)
    before = board.items[pawn]
    board.square_pressed(4, 6)
    assert board.piece_released(pawn, 4, 3) is False
    assert board.items[pawn] == before
    assert pawn.position == Position(4, 6)


def test_piece_released_valid_target_moves():
    board = BoardController()
    pawn = board.model.piece_at(4, 6)
    board.square_pressed(4, 6)
    assert board.piece_released(pawn, 4, 4) is True
    assert pawn.position == Position(4, 4)
    assert board.model.piece_at(4, 4) is pawn


def test_promotion_with_listener_choice():
    board, pawn = promotion_board()
    board.connect("promotion", lambda x, y: board.choose_promotion(PieceType.KNIGHT))
    play(board, [((0, 1), (0, 0))])
    new = board.model.piece_at(0, 0)
    assert new.kind is PieceType.KNIGHT
    assert new.color is Color.WHITE
    assert pawn not in board.items
    assert square_from_pixel(*board.items[new]) == Position(0, 0)
    assert board.pending_promotion is None


def test_promotion_defaults_to_queen():
    board, _ = promotion_board()
    play(board, [((0, 1), (0, 0))])
    assert board.model.piece_at(0, 0).kind is PieceType.QUEEN


def test_choose_promotion_without_pending_pawn():
    board = BoardController()
    with pytest.raises(RuntimeError):
        board.choose_promotion(PieceType.QUEEN)


def test_bad_promotion_choice_is_rejected():
    board, pawn = promotion_board()
    board.connect("promotion", lambda x, y: board.choose_promotion(PieceType.KING))
    with pytest.raises(ValueError) as excinfo:
        play(board, [((0, 1), (0, 0))])
    assert excinfo.type is ValueError
    assert pawn.kind is PieceType.PAWN
    assert pawn.position == Position(0, 0)


def test_check_event_and_messages():
    board = BoardController()
    messages = []
    board.connect("check", messages.append)
    board.connect("checkmate", messages.append)
    play(
        board,
        [((5, 6), (5, 5)), ((4, 1), (4, 3)), ((6, 6), (6, 4)), ((3, 0), (7, 4))],
    )
    assert board.model.is_in_check() is True
    assert len(messages) == 1
    assert board.check_message().startswith("Joueur blanc votre roi est en échec!")
    assert board.checkmate_message().startswith("Le joueur noir a remporté")


def test_connect_unknown_event():
    board = BoardController()
    with pytest.raises(ValueError):
        board.connect("nothing", lambda: None)