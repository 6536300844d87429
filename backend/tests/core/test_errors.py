"""Error types - stable messages, HTTP status, and the response envelope."""

import pytest

from punchlines.core.errors import (
    ConcurrencyError, DatabaseError, ErrorContext, GameCodeExhaustedError,
    GameFullError, GameNotFoundError, InvalidRoundTransitionError,
    InvalidSubmissionError, PlayerNotFoundError,
)


@pytest.mark.parametrize("error, status", [
    (GameNotFoundError("1"), 404),
    (PlayerNotFoundError("1", "bob"), 404),
    (InvalidRoundTransitionError("Cannot begin round", "not_host"), 409),
    (InvalidSubmissionError("wrong_count"), 400),
    (GameFullError(25), 409),
    (ConcurrencyError("busy"), 409),
    (GameCodeExhaustedError(10), 503),
    (DatabaseError("boom", "commit"), 503),
])
def test_http_status(error, status):
    assert error.http_status == status


def test_response_envelope_carries_context():
    error = InvalidSubmissionError(
        "not_in_hand", ErrorContext(game_code="123456", player_id="bob", round_number=2),
    )
    body = error.to_response()["error"]
    assert body["code"] == "INVALID_SUBMISSION"
    assert body["message"] == "Cannot choose punchlines"
    assert body["severity"] == "warning"
    assert body["context"] == {
        "game_code": "123456", "player_id": "bob",
        "round_number": 2, "reason": "not_in_hand",
    }


def test_lookup_errors_fill_context():
    error = PlayerNotFoundError("123456", "bob")
    assert str(error) == "Could not get player"
    assert error.context.game_code == "123456"
    assert error.context.player_id == "bob"
    assert error.reason is None
