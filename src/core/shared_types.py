"""
Type definitions used across layers
"""

from enum import StrEnum


class TurnPhase(StrEnum):
    NOT_STARTED = "not started"
    AWAITING_ROLL = "awaiting roll"
    AWAITING_SELECTION = "awaiting selection"
    AWAITING_CONFIRMATION = "awaiting confirmation"
    GAME_OVER = "game over"


class PieceLocation(StrEnum):
    IN_HAND = "in hand"
    ON_BOARD = "on board"
    FINISHED = "finished"


class GameMode(StrEnum):
    HOTSEAT = "hotseat"
    AI = "ai"
