"""
The computer opponent.

Key idea: a fixed priority ladder. Each tier is a named filter; the first tier that keeps at least one candidate wins,
and the deterministic tie-break picks one move out of it. No lookahead, no evaluation of the board.
"""

from dataclasses import dataclass
from typing import Callable, Optional, Sequence

from loguru import logger

from src.ur.moves import Board, Move, current_square, distance_to_exit

TierFn = Callable[[list[Move], Board], list[Move]]


def tie_break_key(move: Move) -> tuple[int, float]:
    """Lowest piece id, then lowest target index. A finishing move (no index) sorts after any index."""
    target = move.target_index if move.target_index is not None else float("inf")
    return (move.piece.piece_id, target)


def pick_deterministic(moves: Sequence[Move]) -> Move:
    return min(moves, key=tie_break_key)


# --- TIERS ---
def rosetta_moves(moves: list[Move], board: Board) -> list[Move]:
    return [move for move in moves if move.lands_on_rosetta]


def entry_moves(moves: list[Move], board: Board) -> list[Move]:
    return [move for move in moves if move.piece.position_index is None]


def capture_moves(moves: list[Move], board: Board) -> list[Move]:
    return [move for move in moves if move.captures is not None]


def finishing_moves(moves: list[Move], board: Board) -> list[Move]:
    return [move for move in moves if move.finishes]


def closest_to_exit_moves(moves: list[Move], board: Board) -> list[Move]:
    """Advance the piece nearest the exit, ignoring pieces that sit on the fort (or are not on the board)."""
    off_fort = [
        move
        for move in moves
        if (square := current_square(move.piece, board)) is not None
        and not square.is_fort
    ]
    if not off_fort:
        return []
    closest = min(distance_to_exit(move.piece, board) for move in off_fort)
    return [move for move in off_fort if distance_to_exit(move.piece, board) == closest]


def fort_departure_moves(moves: list[Move], board: Board) -> list[Move]:
    """Leaving the fort: only when nothing else applies. Capturing on the way out is preferred."""
    from_fort = [
        move
        for move in moves
        if (square := current_square(move.piece, board)) is not None and square.is_fort
    ]
    capturing = [move for move in from_fort if move.captures is not None]
    return capturing or from_fort


PRIORITY_TIERS: list[tuple[str, TierFn]] = [
    ("rosetta", rosetta_moves),
    ("entry", entry_moves),
    ("capture", capture_moves),
    ("finish", finishing_moves),
    ("closest to exit", closest_to_exit_moves),
    ("fort departure", fort_departure_moves),
]


def choose_move(candidate_moves: Sequence[Move], board: Board) -> Optional[Move]:
    """
    Pick one move out of the legal moves for the current roll.
    Returns None only when there is nothing to choose from.
    """
    moves = list(candidate_moves)
    if not moves:
        return None

    for tier_name, tier in PRIORITY_TIERS:
        selected = tier(moves, board)
        if selected:
            choice = pick_deterministic(selected)
            logger.debug(f"AI tier {tier_name!r} picked {choice.describe()}")
            return choice
    return None


@dataclass
class AIPlayer:
    """Binds the ladder to one seat at the table: moves of the other player are ignored."""

    player_id: int
    board: Board

    def choose_move(self, available_moves: Sequence[Move]) -> Optional[Move]:
        own_moves = [move for move in available_moves if move.piece.player_id == self.player_id]
        return choose_move(own_moves, self.board)
