"""Unit tests for /src/ur/ai.py"""

import pytest

from src.ur.ai import (
    PRIORITY_TIERS,
    AIPlayer,
    choose_move,
    closest_to_exit_moves,
    fort_departure_moves,
    pick_deterministic,
    tie_break_key,
)
from src.ur.board import Board
from src.ur.moves import Move, evaluate_move
from src.ur.pieces import Piece, Player

FORT_INDEX = 7


@pytest.fixture
def players() -> list[Player]:
    return [Player(player_id=0), Player(player_id=1)]


def move_for(board: Board, players: list[Player], piece: Piece, steps: int) -> Move:
    pieces = [p for player in players for p in player.pieces]
    move = evaluate_move(piece, steps, board, pieces)
    assert move is not None, f"{piece} should be able to move {steps}"
    return move


def test_no_candidates_no_move(standard_board: Board) -> None:
    assert choose_move([], standard_board) is None


def test_tier_names_in_priority_order() -> None:
    assert [name for name, _ in PRIORITY_TIERS] == [
        "rosetta",
        "entry",
        "capture",
        "finish",
        "closest to exit",
        "fort departure",
    ]


def test_rosetta_beats_capture(standard_board: Board, players: list[Player]) -> None:
    """One move lands on black-7 (rosetta), the other captures on shared-2."""
    to_rosetta = players[0].pieces[0]
    to_rosetta.position_index = 1
    attacker = players[0].pieces[1]
    attacker.position_index = 7
    players[1].pieces[0].position_index = 9

    candidates = [
        move_for(standard_board, players, attacker, 2),
        move_for(standard_board, players, to_rosetta, 2),
    ]
    assert candidates[0].captures is not None
    assert candidates[1].lands_on_rosetta

    assert choose_move(candidates, standard_board) is candidates[1]


def test_entry_beats_capture(standard_board: Board, players: list[Player]) -> None:
    attacker = players[0].pieces[0]
    attacker.position_index = 8
    players[1].pieces[0].position_index = 10
    entering = players[0].pieces[3]

    capture = move_for(standard_board, players, attacker, 2)
    entry = move_for(standard_board, players, entering, 2)
    assert choose_move([capture, entry], standard_board) is entry


def test_capture_beats_finish(standard_board: Board, players: list[Player]) -> None:
    attacker = players[0].pieces[0]
    attacker.position_index = 8
    players[1].pieces[0].position_index = 10
    leaving = players[0].pieces[1]
    leaving.position_index = 12

    capture = move_for(standard_board, players, attacker, 2)
    finish = move_for(standard_board, players, leaving, 2)
    assert finish.finishes
    assert choose_move([finish, capture], standard_board) is capture


def test_finish_beats_advance(standard_board: Board, players: list[Player]) -> None:
    runner = players[0].pieces[0]
    runner.position_index = 4
    leaving = players[0].pieces[1]
    leaving.position_index = 13

    advance = move_for(standard_board, players, runner, 1)
    finish = move_for(standard_board, players, leaving, 1)
    assert choose_move([advance, finish], standard_board) is finish


def test_advances_piece_closest_to_exit(standard_board: Board, players: list[Player]) -> None:
    """pathLength 14: pieces at index 10 (distance 4) and index 2 (distance 12) -> the piece at 10 moves."""
    far = players[0].pieces[1]
    far.position_index = 2
    near = players[0].pieces[5]
    near.position_index = 10

    far_move = move_for(standard_board, players, far, 2)
    near_move = move_for(standard_board, players, near, 2)
    # plain advances only: no rosetta, no capture, no entry, no finish
    for move in (far_move, near_move):
        assert not move.lands_on_rosetta and move.captures is None and not move.finishes

    assert choose_move([far_move, near_move], standard_board) is near_move


def test_piece_on_fort_is_not_advanced_while_others_can(
    standard_board: Board, players: list[Player]
) -> None:
    on_fort = players[0].pieces[0]
    on_fort.position_index = FORT_INDEX
    behind = players[0].pieces[1]
    behind.position_index = 5

    fort_move = move_for(standard_board, players, on_fort, 1)
    behind_move = move_for(standard_board, players, behind, 1)
    assert closest_to_exit_moves([fort_move, behind_move], standard_board) == [behind_move]
    assert choose_move([fort_move, behind_move], standard_board) is behind_move


def test_fort_departure_when_nothing_else(standard_board: Board, players: list[Player]) -> None:
    on_fort = players[0].pieces[0]
    on_fort.position_index = FORT_INDEX
    fort_move = move_for(standard_board, players, on_fort, 1)
    assert choose_move([fort_move], standard_board) is fort_move


def test_fort_departure_prefers_capture(standard_board: Board, players: list[Player]) -> None:
    on_fort = players[0].pieces[0]
    on_fort.position_index = FORT_INDEX
    victim = players[1].pieces[0]
    victim.position_index = 9

    capture = move_for(standard_board, players, on_fort, 2)
    assert fort_departure_moves([capture], standard_board) == [capture]
    # the capture tier catches it first anyway
    assert choose_move([capture], standard_board) is capture


def test_tie_break_lowest_piece_id(standard_board: Board, players: list[Player]) -> None:
    entries = [move_for(standard_board, players, piece, 1) for piece in players[0].pieces[2:5]]
    assert choose_move(list(reversed(entries)), standard_board) is entries[0]


def test_tie_break_finishing_index_sorts_last() -> None:
    """Same piece id: a numeric target beats the finishing move (None index)."""
    piece = Piece(piece_id=0, player_id=0)
    advance = Move(piece=piece, target_index=13, target_square=None)
    finish = Move(piece=piece, target_index=None, target_square=None, finishes=True)
    assert tie_break_key(advance) < tie_break_key(finish)
    assert pick_deterministic([finish, advance]) is advance


def test_choice_does_not_mutate(standard_board: Board, players: list[Player]) -> None:
    attacker = players[0].pieces[0]
    attacker.position_index = 8
    victim = players[1].pieces[0]
    victim.position_index = 10
    capture = move_for(standard_board, players, attacker, 2)

    choose_move([capture], standard_board)
    assert attacker.position_index == 8
    assert victim.position_index == 10


def test_ai_player_ignores_opponent_moves(standard_board: Board, players: list[Player]) -> None:
    ai = AIPlayer(player_id=1, board=standard_board)
    own = move_for(standard_board, players, players[1].pieces[6], 1)
    theirs = move_for(standard_board, players, players[0].pieces[0], 4)  # a rosetta, but not ours
    assert ai.choose_move([theirs, own]) is own
    assert ai.choose_move([theirs]) is None
