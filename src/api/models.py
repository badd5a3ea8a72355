"""Requests and Response models"""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, field_validator

from src.core.exceptions import InvalidRequestError
from src.core.shared_types import GameMode, PieceLocation, TurnPhase
from src.ur.board import PLAYER_IDS
from src.ur.pieces import PIECES_PER_PLAYER

PlayerName = str


# --- REQUEST MODELS ---
class NewGameRequest(BaseModel):
    mode: GameMode = GameMode.HOTSEAT
    player_names: list[PlayerName] = []
    seed: Optional[int] = None

    @field_validator("player_names")
    @classmethod
    def validate_player_names(cls, value: list[PlayerName]) -> list[PlayerName]:
        if len(value) > len(PLAYER_IDS):
            raise InvalidRequestError(
                f"At most {len(PLAYER_IDS)} player names, got {len(value)}."
            )
        if any(not name.strip() for name in value):
            raise InvalidRequestError("Player names cannot be blank.")
        return [name.strip() for name in value]


class GameRequest(BaseModel):
    """Any command that only needs to know which game: roll, confirm, cancel, AI turn, state."""

    game_id: UUID


class SelectPieceRequest(BaseModel):
    game_id: UUID
    player_id: int
    piece_id: int

    @field_validator("player_id")
    @classmethod
    def validate_player_id(cls, value: int) -> int:
        if value not in PLAYER_IDS:
            raise InvalidRequestError(f"Unknown player id: {value!r}.")
        return value

    @field_validator("piece_id")
    @classmethod
    def validate_piece_id(cls, value: int) -> int:
        if not 0 <= value < PIECES_PER_PLAYER:
            raise InvalidRequestError(
                f"Piece id must be between 0 and {PIECES_PER_PLAYER - 1}, got {value!r}."
            )
        return value


class AdvanceClockRequest(BaseModel):
    game_id: UUID
    seconds: float

    @field_validator("seconds")
    @classmethod
    def validate_seconds(cls, value: float) -> float:
        if value < 0:
            raise InvalidRequestError("Cannot move the clock backwards.")
        return value


# --- RESPONSE MODELS ---
class PieceView(BaseModel):
    player_id: int
    piece_id: int
    location: PieceLocation
    position_index: Optional[int]
    square_id: Optional[str]


class MoveView(BaseModel):
    player_id: int
    piece_id: int
    target_index: Optional[int]
    target_square_id: Optional[str]
    captures_piece_id: Optional[int]
    finishes: bool
    grants_bonus: bool


class GameStateResponse(BaseModel):
    game_id: UUID
    mode: GameMode
    players: dict[int, PlayerName]
    ai_players: list[int]
    phase: TurnPhase
    current_player: int
    last_roll: Optional[int]
    last_dice: list[int]
    pending_move: Optional[MoveView]
    pieces: list[PieceView]
    selectable_piece_ids: list[int]
    auto_pass_pending: bool
    winner: Optional[int]
    log: list[str]


class PlayerStatisticsView(BaseModel):
    header: str
    roll_counts: list[int]
    roll_percentages: list[int]
    total_rolls: int
    captures: int
    bonuses: int
    waiting: int
    home: int
    lines: list[str]


class StatisticsResponse(BaseModel):
    game_id: UUID
    round: int
    starting_player: Optional[int]
    players: dict[int, PlayerStatisticsView]
