from uuid import UUID, uuid4

import pytest

from src.api.models import MoveRequest, SubmitStateRequest
from src.core.exceptions import InvalidRequestError
from src.core.shared_types import PieceType


@pytest.fixture
def mock_id() -> UUID:
    return uuid4()


# -- Validation - MoveRequest --
def test_valid_coord(mock_id: UUID) -> None:
    request = MoveRequest(game_id=mock_id, piece_id=12, to_coord=[4, 3])
    assert request.to_coord == [4, 3]
    assert request.promote_to is None


@pytest.mark.parametrize("coord", [[8, 0], [0, -1], [1, 2, 3], [4]])
def test_invalid_coord(mock_id: UUID, coord: list[int]) -> None:
    with pytest.raises(InvalidRequestError):
        _ = MoveRequest(game_id=mock_id, piece_id=12, to_coord=coord)


def test_promotion_choice(mock_id: UUID) -> None:
    request = MoveRequest(
        game_id=mock_id, piece_id=8, to_coord=[0, 7], promote_to=PieceType.KNIGHT
    )
    assert request.promote_to == PieceType.KNIGHT


@pytest.mark.parametrize("piece_type", ["king", "pawn"])
def test_invalid_promotion_choice(mock_id: UUID, piece_type: str) -> None:
    with pytest.raises(InvalidRequestError):
        _ = MoveRequest(
            game_id=mock_id, piece_id=8, to_coord=[0, 7], promote_to=piece_type
        )


def test_submitted_state_is_kept_as_is(mock_id: UUID) -> None:
    """No structural checks at this level: the engine decides (and rejects instead of raising)."""
    request = SubmitStateRequest(game_id=mock_id, state={"pieces": "nonsense"})
    assert request.state == {"pieces": "nonsense"}
