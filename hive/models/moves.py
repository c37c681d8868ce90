"""Pydantic move schemas for the two Hive move types.

Each move carries the data needed to check and apply it to a GameState.
The MoveResult carries the outcome back to the caller.
"""

from __future__ import annotations

import enum
from typing import Annotated, Any, Literal

import pydantic

from .board import Piece
from .coords import AxialCoords


class MoveType(enum.StrEnum):
    """Discriminator values for the move types."""

    SET_MOVE = 'set_move'
    DRAG_MOVE = 'drag_move'


class SetMove(pydantic.BaseModel):
    """Place an undeployed piece on the board."""

    model_config = pydantic.ConfigDict(frozen=True)

    move_type: Literal[MoveType.SET_MOVE] = MoveType.SET_MOVE
    piece: Piece
    destination: AxialCoords


class DragMove(pydantic.BaseModel):
    """Move the top piece of *start* to *destination*."""

    model_config = pydantic.ConfigDict(frozen=True)

    move_type: Literal[MoveType.DRAG_MOVE] = MoveType.DRAG_MOVE
    start: AxialCoords
    destination: AxialCoords


# Discriminated union of all move types for deserialization.
Move = Annotated[SetMove | DragMove, pydantic.Field(discriminator='move_type')]


class MoveResult(pydantic.BaseModel):
    """Outcome of checking or applying a move.

    ``error_message`` holds the rule violation when ``success`` is False.
    The updated GameState is carried as ``Any`` to avoid a circular import
    with ``game_state.py``; it is only set by the move processor.
    """

    success: bool
    error_message: str | None = None
    updated_state: Any | None = None
