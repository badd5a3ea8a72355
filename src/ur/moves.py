"""
Move legality engine

Key idea: a Move is computed on demand from the live pieces and thrown away afterwards.
Nothing in here mutates a piece, so every function can be called speculatively (highlighting, "is there any move?", the AI).

Occupancy is always recomputed by scanning the pieces and comparing square identity:
the two paths reach the same shared square at different indices, so indices can never be compared across players.
"""

from dataclasses import dataclass
from typing import Iterable, Optional, Protocol

from src.ur.pieces import Piece, Player
from src.ur.square import Square


class Board(Protocol):
    """Just the parts the move engine needs"""

    def path_length(self, player_id: int) -> int: ...
    def square_for(self, player_id: int, index: int) -> Optional[Square]: ...


@dataclass(frozen=True)
class Move:
    """
    The effect of moving one piece by the current roll.

    A finishing move exits the track: it has no target index, no target square and never captures.
    """

    piece: Piece
    target_index: Optional[int]
    target_square: Optional[Square]
    captures: Optional[Piece] = None
    finishes: bool = False
    is_entry: bool = False

    @property
    def lands_on_rosetta(self) -> bool:
        """Bonus roll condition (finishing moves have no square, so never qualify)"""
        return self.target_square is not None and self.target_square.is_rosetta

    def describe(self) -> str:
        if self.finishes:
            return f"piece {self.piece.piece_id + 1} off the board"
        assert self.target_square is not None
        suffix = " (capture)" if self.captures else ""
        return f"piece {self.piece.piece_id + 1} to {self.target_square.id}{suffix}"


def current_square(piece: Piece, board: Board) -> Optional[Square]:
    """The square a piece currently stands on (None when in hand or finished)."""
    if not piece.is_on_board():
        return None
    assert piece.position_index is not None
    return board.square_for(piece.player_id, piece.position_index)


def find_piece_on_square(
    square: Square, board: Board, pieces: Iterable[Piece]
) -> Optional[Piece]:
    """Linear scan over the (at most 14) pieces. Compared by square id, not by path index."""
    for piece in pieces:
        standing_on = current_square(piece, board)
        if standing_on is not None and standing_on.id == square.id:
            return piece
    return None


def distance_to_exit(piece: Piece, board: Board) -> int:
    """Steps needed to leave the track exactly (a piece in hand counts as index -1)."""
    start = piece.position_index if piece.position_index is not None else -1
    return board.path_length(piece.player_id) - start


def evaluate_move(
    piece: Piece, steps: int, board: Board, pieces: Iterable[Piece]
) -> Optional[Move]:
    """
    Decide whether `piece` may move `steps` squares, and what that move would do.
    ----

    1. no steps (a roll of 0) or a finished piece --> no move
    2. overshooting the exit --> no move. The exit must be hit exactly.
    3. hitting the exit exactly --> finishing move
    4. landing on your own piece --> no move
    5. landing on an opponent standing on a safe square or the fort --> no move
    6. otherwise: a plain advance, or a capture of the opponent standing there
    """
    if steps <= 0 or piece.is_finished():
        return None

    path_length = board.path_length(piece.player_id)
    start = piece.position_index if piece.position_index is not None else -1
    target = start + steps
    is_entry = piece.position_index is None

    if target > path_length:
        return None

    if target == path_length:
        return Move(
            piece=piece,
            target_index=None,
            target_square=None,
            captures=None,
            finishes=True,
            is_entry=is_entry,
        )

    target_square = board.square_for(piece.player_id, target)
    if target_square is None:
        return None

    occupant = find_piece_on_square(target_square, board, pieces)
    if occupant is not None and occupant.player_id == piece.player_id:
        return None

    if occupant is not None and target_square.is_protected:
        return None

    return Move(
        piece=piece,
        target_index=target,
        target_square=target_square,
        captures=occupant,
        finishes=False,
        is_entry=is_entry,
    )


def legal_moves(
    player: Player, steps: int, board: Board, pieces: Iterable[Piece]
) -> list[Move]:
    """Every legal move of one player for a given roll, ordered by piece id."""
    all_pieces = list(pieces)
    moves: list[Move] = []
    for piece in sorted(player.available_pieces(), key=lambda p: p.piece_id):
        move = evaluate_move(piece, steps, board, all_pieces)
        if move is not None:
            moves.append(move)
    return moves


def has_any_legal_move(
    player: Player, steps: int, board: Board, pieces: Iterable[Piece]
) -> bool:
    """Decides whether a roll has to be passed"""
    all_pieces = list(pieces)
    return any(
        evaluate_move(piece, steps, board, all_pieces) is not None
        for piece in player.available_pieces()
    )
