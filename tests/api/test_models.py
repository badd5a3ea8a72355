from uuid import UUID, uuid4

import pytest

from src.api.models import AdvanceClockRequest, NewGameRequest, SelectPieceRequest
from src.core.exceptions import InvalidRequestError
from src.core.shared_types import GameMode


@pytest.fixture
def mock_id() -> UUID:
    return uuid4()


# -- Validation - NewGameRequest --
def test_defaults() -> None:
    """Hotseat, default names, random dice."""
    request = NewGameRequest()
    assert request.mode == GameMode.HOTSEAT
    assert request.player_names == []
    assert request.seed is None


def test_mode_from_string() -> None:
    assert NewGameRequest(mode="ai").mode == GameMode.AI


def test_player_names_are_stripped() -> None:
    request = NewGameRequest(player_names=["  Shulgi ", "Ur-Nammu"])
    assert request.player_names == ["Shulgi", "Ur-Nammu"]


@pytest.mark.parametrize(
    "invalid_names",
    [
        ["one", "two", "three"],  # only two seats
        ["fine", "   "],  # blank
        [""],
    ],
)
def test_invalid_player_names(invalid_names: list[str]) -> None:
    with pytest.raises(InvalidRequestError):
        _ = NewGameRequest(player_names=invalid_names)


# -- Validation - SelectPieceRequest --
def test_valid_selection(mock_id: UUID) -> None:
    request = SelectPieceRequest(game_id=mock_id, player_id=1, piece_id=6)
    assert request.player_id == 1
    assert request.piece_id == 6


@pytest.mark.parametrize("player_id", [-1, 2, 99])
def test_unknown_player(mock_id: UUID, player_id: int) -> None:
    with pytest.raises(InvalidRequestError):
        _ = SelectPieceRequest(game_id=mock_id, player_id=player_id, piece_id=0)


@pytest.mark.parametrize("piece_id", [-1, 7, 42])
def test_piece_out_of_range(mock_id: UUID, piece_id: int) -> None:
    with pytest.raises(InvalidRequestError):
        _ = SelectPieceRequest(game_id=mock_id, player_id=0, piece_id=piece_id)


# -- Validation - AdvanceClockRequest --
def test_clock_cannot_go_backwards(mock_id: UUID) -> None:
    assert AdvanceClockRequest(game_id=mock_id, seconds=0).seconds == 0
    with pytest.raises(InvalidRequestError):
        _ = AdvanceClockRequest(game_id=mock_id, seconds=-0.5)
