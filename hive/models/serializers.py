"""JSON serialization helpers for Hive models.

Provides thin wrappers around Pydantic's built-in serialization so that the
protocol layer can turn per-turn snapshots into models (and moves back into
plain data) without directly depending on Pydantic internals.  Malformed
input raises ``pydantic.ValidationError``; nothing is defaulted.
"""

from __future__ import annotations

import typing

import pydantic

from .board import Board
from .game_state import GameState
from .moves import Move

_MOVE_ADAPTER: pydantic.TypeAdapter[Move] = pydantic.TypeAdapter(Move)


def serialize_model(model: pydantic.BaseModel) -> dict[str, typing.Any]:
    """Return a JSON-serializable dict representation of any Pydantic model."""
    return model.model_dump(mode='json')


def serialize_to_json(model: pydantic.BaseModel) -> str:
    """Serialize any Pydantic model to a compact JSON string."""
    return model.model_dump_json()


def deserialize_board(data: dict[str, typing.Any]) -> Board:
    """Deserialize a plain dict into a Board instance."""
    return Board.model_validate(data)


def deserialize_game_state(data: dict[str, typing.Any]) -> GameState:
    """Deserialize a plain dict into a GameState instance."""
    return GameState.model_validate(data)


def deserialize_move(data: dict[str, typing.Any]) -> Move:
    """Deserialize a plain dict into a SetMove or DragMove by its move_type."""
    return _MOVE_ADAPTER.validate_python(data)


def game_state_to_json(game_state: GameState) -> str:
    """Convert a GameState to a JSON string."""
    return serialize_to_json(game_state)


def game_state_from_json(json_str: str) -> GameState:
    """Parse a JSON string back into a GameState instance."""
    return GameState.model_validate_json(json_str)
