"""Unit tests for /src/ur/pieces.py"""

from src.core.shared_types import PieceLocation
from src.ur.pieces import PIECES_PER_PLAYER, Piece, Player


def test_player_has_seven_pieces_in_hand() -> None:
    player = Player(player_id=1)
    assert len(player.pieces) == PIECES_PER_PLAYER == 7
    assert all(piece.is_in_hand() for piece in player.pieces)
    assert all(piece.player_id == 1 for piece in player.pieces)
    assert [piece.piece_id for piece in player.pieces] == list(range(7))


def test_default_name_is_one_based() -> None:
    assert Player(player_id=0).name == "Player 1"
    assert Player(player_id=1, name="Ea-nasir").name == "Ea-nasir"


def test_piece_locations() -> None:
    piece = Piece(piece_id=0, player_id=0)
    assert piece.location == PieceLocation.IN_HAND

    piece.position_index = 3
    assert piece.location == PieceLocation.ON_BOARD
    assert piece.is_on_board()

    piece.finish()
    assert piece.location == PieceLocation.FINISHED
    assert piece.position_index is None
    assert not piece.is_in_hand()


def test_reset_clears_finished_state() -> None:
    player = Player(player_id=0)
    player.pieces[0].finish()
    player.pieces[1].position_index = 5
    player.reset()
    assert all(p.position_index is None and not p.finished for p in player.pieces)


def test_all_finished_and_counts() -> None:
    player = Player(player_id=0)
    assert not player.all_finished()
    for piece in player.pieces[:-1]:
        piece.finish()
    assert not player.all_finished()
    assert player.pieces_finished() == 6
    assert player.pieces_in_hand() == 1
    assert player.available_pieces() == [player.pieces[-1]]

    player.pieces[-1].finish()
    assert player.all_finished()
    assert player.available_pieces() == []


def test_pieces_compare_by_identity() -> None:
    """Two pieces with the same numbers are still different pieces."""
    assert Piece(0, 0) != Piece(0, 0)
    piece = Piece(0, 0)
    assert piece == piece


def test_lookup_piece() -> None:
    player = Player(player_id=0)
    assert player.piece(3) is player.pieces[3]
    assert player.piece(7) is None
