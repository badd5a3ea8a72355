"""Defines the pieces and the players that own them"""

from dataclasses import dataclass, field
from typing import Optional

from src.core.shared_types import PieceLocation

PIECES_PER_PLAYER = 7


@dataclass(eq=False)
class Piece:
    """
    A piece is either in hand (not entered yet), on the board at an index of its owner's path, or finished.

    NOTE: A Piece does not know about other pieces. Occupancy is the move engine's business.
    NOTE: eq=False, so two pieces are only ever equal when they are the same object.
    """

    piece_id: int
    player_id: int
    position_index: Optional[int] = None  # None means in hand / finished
    finished: bool = False

    def is_in_hand(self) -> bool:
        return self.position_index is None and not self.finished

    def is_on_board(self) -> bool:
        return self.position_index is not None and not self.finished

    def is_finished(self) -> bool:
        return self.finished

    @property
    def location(self) -> PieceLocation:
        if self.finished:
            return PieceLocation.FINISHED
        if self.position_index is None:
            return PieceLocation.IN_HAND
        return PieceLocation.ON_BOARD

    def reset(self) -> None:
        """Back into the owner's hand (start of a game, or after being captured)."""
        self.position_index = None
        self.finished = False

    def finish(self) -> None:
        self.finished = True
        self.position_index = None

    def __str__(self) -> str:
        return f"Piece(player {self.player_id + 1}, #{self.piece_id + 1}: {self.location} at {self.position_index})"


@dataclass
class Player:
    player_id: int
    name: str = ""
    is_ai: bool = False
    pieces: list[Piece] = field(default_factory=list)

    def __post_init__(self):
        # "Player 1" / "Player 2" as shown to people, ids stay 0-based
        if not self.name:
            self.name = f"Player {self.player_id + 1}"
        if not self.pieces:
            self.pieces = [
                Piece(piece_id=index, player_id=self.player_id)
                for index in range(PIECES_PER_PLAYER)
            ]

    def piece(self, piece_id: int) -> Optional[Piece]:
        return next((p for p in self.pieces if p.piece_id == piece_id), None)

    def reset(self) -> None:
        for piece in self.pieces:
            piece.reset()

    def all_finished(self) -> bool:
        """Victory condition"""
        return all(piece.is_finished() for piece in self.pieces)

    def available_pieces(self) -> list[Piece]:
        return [piece for piece in self.pieces if not piece.is_finished()]

    def pieces_in_hand(self) -> int:
        return sum(1 for piece in self.pieces if piece.is_in_hand())

    def pieces_finished(self) -> int:
        return sum(1 for piece in self.pieces if piece.is_finished())
