"""Hive move validator.

Checks a single SetMove or DragMove against the rules for the color making
it.  Checks run in a fixed order and the first violated rule is reported.
Nothing here mutates the given state; the only board copy made is the
throwaway one used to test whether lifting a piece splits the swarm.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from ..models import board as board_model
from ..models import game_state, moves
from ..models.board import Color, Piece, PieceType
from ..models.coords import AxialCoords

logger = logging.getLogger(__name__)


class InvalidMoveError(ValueError):
    """Raised when a move breaks a rule; the message names the rule."""


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def validate_move(
    state: game_state.GameState, color: Color, move: moves.Move
) -> moves.MoveResult:
    """Check *move* for *color* and return a :class:`MoveResult`.

    A rule violation is an ordinary result with ``success=False`` and the
    reason in ``error_message``.
    """
    try:
        check_move(state, color, move)
    except InvalidMoveError as exc:
        logger.debug('Rejected %s for %s: %s', move, color, exc)
        return moves.MoveResult(success=False, error_message=str(exc))
    return moves.MoveResult(success=True)


def is_valid_move(state: game_state.GameState, color: Color, move: moves.Move) -> bool:
    """Return True if *move* is legal for *color*."""
    return validate_move(state, color, move).success


def check_move(state: game_state.GameState, color: Color, move: moves.Move) -> None:
    """Raise :class:`InvalidMoveError` if *move* is illegal for *color*."""
    if isinstance(move, moves.SetMove):
        _check_set_move(state, color, move.piece, move.destination)
    elif isinstance(move, moves.DragMove):
        _check_drag_move(state, color, move.start, move.destination)
    else:
        raise InvalidMoveError(f'Unknown move type: {type(move).__name__}')


# ---------------------------------------------------------------------------
# SetMove
# ---------------------------------------------------------------------------


def _check_set_move(
    state: game_state.GameState,
    color: Color,
    piece: Piece,
    destination: AxialCoords,
) -> None:
    brd = state.board
    opponent = color.opponent()

    field = brd.field(destination)
    if field is None:
        raise InvalidMoveError(f'Move destination is out of bounds: {destination}')
    if field.is_obstructed:
        raise InvalidMoveError(f'Move destination is obstructed: {destination}')
    if field.has_pieces():
        raise InvalidMoveError(f'Move destination is already occupied: {destination}')
    if piece.owner != color:
        raise InvalidMoveError("Cannot place an opponent's piece")

    # The very first piece of the game may go anywhere; the first piece of
    # the second color has to touch it.
    owns_fields = bool(brd.fields_owned_by(color))
    if brd.has_pieces() and not owns_fields:
        if not brd.is_next_to(opponent, destination):
            raise InvalidMoveError(
                "Piece has to be placed next to an opponent's piece"
            )

    if state.must_place_bee(color) and piece.piece_type != PieceType.BEE:
        raise InvalidMoveError('Bee has to be placed in the fourth round or earlier')

    if piece not in state.undeployed_pieces(color):
        raise InvalidMoveError('Piece is not undeployed')

    if owns_fields:
        if not brd.is_next_to(color, destination):
            raise InvalidMoveError('Piece is not placed next to an own piece')
        if brd.is_next_to(opponent, destination):
            raise InvalidMoveError(
                "Piece must not be placed next to an opponent's piece"
            )


# ---------------------------------------------------------------------------
# DragMove
# ---------------------------------------------------------------------------


def _check_drag_move(
    state: game_state.GameState,
    color: Color,
    start: AxialCoords,
    destination: AxialCoords,
) -> None:
    brd = state.board

    if not brd.has_placed_bee(color):
        raise InvalidMoveError('Bee has to be placed before committing a drag move')

    start_field = brd.field(start)
    if start_field is None:
        raise InvalidMoveError(f'Move start is out of bounds: {start}')
    destination_field = brd.field(destination)
    if destination_field is None:
        raise InvalidMoveError(f'Move destination is out of bounds: {destination}')

    dragged = start_field.piece
    if dragged is None:
        raise InvalidMoveError('No piece to move')
    if dragged.owner != color:
        raise InvalidMoveError("Cannot move opponent's piece")
    if start == destination:
        raise InvalidMoveError('Cannot move when start == destination')

    if destination_field.is_obstructed:
        raise InvalidMoveError(f'Move destination is obstructed: {destination}')
    if destination_field.has_pieces() and dragged.piece_type != PieceType.BEETLE:
        raise InvalidMoveError('Only beetles can climb other pieces')

    if not brd.without_piece_at(start).is_swarm_connected():
        raise InvalidMoveError('Drag move would disconnect the swarm')

    _PIECE_RULES[dragged.piece_type](brd, start, destination)


def _check_adjacent(start: AxialCoords, destination: AxialCoords) -> None:
    if not start.is_adjacent_to(destination):
        raise InvalidMoveError('Coords are not adjacent to each other')


def _check_ant_move(
    brd: board_model.Board, start: AxialCoords, destination: AxialCoords
) -> None:
    if not brd.connected_by_boundary_path(start, destination):
        raise InvalidMoveError('Could not find path for ant')


def _check_bee_move(
    brd: board_model.Board, start: AxialCoords, destination: AxialCoords
) -> None:
    _check_adjacent(start, destination)
    if not brd.can_move_between(start, destination):
        raise InvalidMoveError(f'Cannot move between {start} and {destination}')


def _check_beetle_move(
    brd: board_model.Board, start: AxialCoords, destination: AxialCoords
) -> None:
    _check_adjacent(start, destination)
    climbing = brd.is_occupied(destination)
    if not climbing and not any(
        f.has_pieces() for _, f in brd.shared_neighbors(start, destination)
    ):
        raise InvalidMoveError('Beetle has to move along swarm')


def _check_grasshopper_move(
    brd: board_model.Board, start: AxialCoords, destination: AxialCoords
) -> None:
    if not start.forms_line_with(destination):
        raise InvalidMoveError('Grasshopper can only move along straight lines')
    if start.is_adjacent_to(destination):
        raise InvalidMoveError('Grasshopper must not move to a neighbor')
    for cube in start.line_iter(destination):
        field = brd.field(cube.to_axial())
        if field is None or field.is_empty():
            raise InvalidMoveError('Grasshopper cannot move over empty fields')


def _check_spider_move(
    brd: board_model.Board, start: AxialCoords, destination: AxialCoords
) -> None:
    if not brd.bfs_reachable_in_3_steps(start, destination):
        raise InvalidMoveError('No 3-step path found for Spider move')


_PIECE_RULES: dict[
    PieceType, Callable[[board_model.Board, AxialCoords, AxialCoords], None]
] = {
    PieceType.ANT: _check_ant_move,
    PieceType.BEE: _check_bee_move,
    PieceType.BEETLE: _check_beetle_move,
    PieceType.GRASSHOPPER: _check_grasshopper_move,
    PieceType.SPIDER: _check_spider_move,
}
