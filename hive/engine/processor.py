"""Hive move processor.

Applies a single move to a GameState and returns the result.
This is a pure function: the input state is never modified.
"""

from __future__ import annotations

import logging

from ..models import game_state, moves
from . import rules, turn_manager, validator

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def apply_move(state: game_state.GameState, move: moves.Move) -> moves.MoveResult:
    """Apply *move* for the color to play and return a :class:`MoveResult`.

    The input state is never modified; a deep copy is made first.
    On failure a :class:`MoveResult` with ``success=False`` is returned.
    """
    state = state.model_copy(deep=True)

    if rules.get_game_outcome(state).finished:
        return moves.MoveResult(success=False, error_message='The game is already over')

    try:
        validator.check_move(state, state.current_color, move)
        _dispatch(state, move)
    except ValueError as exc:
        logger.debug('Move %s failed at turn %d: %s', move, state.turn, exc)
        return moves.MoveResult(success=False, error_message=str(exc))

    turn_manager.advance_turn(state)
    return moves.MoveResult(success=True, updated_state=state)


# ---------------------------------------------------------------------------
# Internal dispatch
# ---------------------------------------------------------------------------


def _dispatch(state: game_state.GameState, move: moves.Move) -> None:
    """Mutate *state* in place according to *move* type."""
    if isinstance(move, moves.SetMove):
        _apply_set_move(state, move)
    else:
        _apply_drag_move(state, move)


def _apply_set_move(state: game_state.GameState, move: moves.SetMove) -> None:
    field = state.board.field_mut(move.destination)
    if field is None:
        raise ValueError(f'Move destination is out of bounds: {move.destination}')
    # Removes exactly one of the identical undeployed pieces.
    state.undeployed[move.piece.owner].remove(move.piece)
    field.push(move.piece)


def _apply_drag_move(state: game_state.GameState, move: moves.DragMove) -> None:
    start = state.board.field_mut(move.start)
    destination = state.board.field_mut(move.destination)
    if start is None or destination is None:
        raise ValueError('Move start or destination is out of bounds')
    piece = start.pop()
    if piece is None:
        raise ValueError('No piece to move')
    destination.push(piece)
