"""Hive rules engine.

Provides functions for computing legal moves and the game outcome.  Every
generated move is accepted by :func:`hive.engine.validator.validate_move`;
drag moves are in fact produced by filtering candidates through it.
"""

from __future__ import annotations

import logging

import pydantic

from ..models import board, game_state, moves
from ..models.board import Color, PieceType
from ..models.coords import AxialCoords
from . import validator

logger = logging.getLogger(__name__)


class GameOutcome(pydantic.BaseModel):
    """Whether the game is over and, if so, who won (None for a draw)."""

    model_config = pydantic.ConfigDict(frozen=True)

    finished: bool
    winner: Color | None = None


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def possible_moves(state: game_state.GameState, color: Color) -> list[moves.Move]:
    """Return every legal move for *color*: set moves first, then drag moves."""
    result: list[moves.Move] = []
    result.extend(possible_set_moves(state, color))
    result.extend(possible_drag_moves(state, color))
    logger.debug('%d legal moves for %s at turn %d', len(result), color, state.turn)
    return result


def possible_set_moves(
    state: game_state.GameState, color: Color
) -> list[moves.SetMove]:
    """Return every legal placement of an undeployed piece for *color*."""
    destinations = _set_move_destinations(state.board, color)
    if not destinations:
        return []

    # One move per piece type is enough: undeployed pieces of a type are equal.
    pieces = list(dict.fromkeys(state.undeployed_pieces(color)))
    if state.must_place_bee(color):
        pieces = [p for p in pieces if p.piece_type == PieceType.BEE]

    return [
        moves.SetMove(piece=piece, destination=dest)
        for piece in pieces
        for dest in destinations
    ]


def possible_drag_moves(
    state: game_state.GameState, color: Color
) -> list[moves.DragMove]:
    """Return every legal drag move for *color*.

    Candidate destinations are the empty cells around the swarm, plus the
    neighbours of a beetle, which may climb.  Each candidate is kept only if
    the validator accepts it.
    """
    brd = state.board
    if not brd.has_placed_bee(color):
        return []

    boundary = [c for c, _ in brd.swarm_boundary()]
    result: list[moves.DragMove] = []
    for start, field in brd.fields_owned_by(color):
        # Pinned pieces have no moves at all; skip their candidates early.
        if not brd.without_piece_at(start).is_swarm_connected():
            continue
        candidates = list(boundary)
        if field.piece is not None and field.piece.piece_type == PieceType.BEETLE:
            candidates.extend(c for c, _ in brd.neighbors(start))
        for dest in dict.fromkeys(candidates):
            move = moves.DragMove(start=start, destination=dest)
            if validator.is_valid_move(state, color, move):
                result.append(move)
    return result


def is_bee_surrounded(brd: board.Board, color: Color) -> bool:
    """Return True if *color*'s bee is on the board with all six sides blocked.

    Obstructed and off-board cells count as blocking.
    """
    bee_coords = _find_bee(brd, color)
    if bee_coords is None:
        return False
    return all(brd.is_occupied(c) for c in bee_coords.coord_neighbors())


def get_game_outcome(state: game_state.GameState) -> GameOutcome:
    """Return the outcome of the game at *state*.

    The game ends as soon as a bee is surrounded or once the round limit is
    reached.  A color wins only if the opponent's bee is surrounded while its
    own is not; every other finished game is a draw.
    """
    surrounded = {color: is_bee_surrounded(state.board, color) for color in Color}
    finished = any(surrounded.values()) or state.round >= game_state.ROUND_LIMIT
    if not finished:
        return GameOutcome(finished=False)

    winner: Color | None = None
    for color in Color:
        if surrounded[color.opponent()] and not surrounded[color]:
            winner = color
    logger.debug('Game over at turn %d, winner: %s', state.turn, winner)
    return GameOutcome(finished=True, winner=winner)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _set_move_destinations(brd: board.Board, color: Color) -> list[AxialCoords]:
    if not brd.has_pieces():
        return [c for c, _ in brd.empty_fields()]

    if not brd.fields_owned_by(color):
        # Second color's first piece: anywhere next to the opponent.
        seen: dict[AxialCoords, None] = {}
        for coords, _ in brd.fields_owned_by(color.opponent()):
            for c, _ in brd.empty_neighbors(coords):
                seen.setdefault(c, None)
        return list(seen)

    return brd.possible_set_move_destinations(color)


def _find_bee(brd: board.Board, color: Color) -> AxialCoords | None:
    bee = board.Piece(owner=color, piece_type=PieceType.BEE)
    for coords, field in brd.entries():
        if bee in field.pieces:
            return coords
    return None
