"""Hive turn manager.

Handles game state initialization and turn-order advancement.
"""

from __future__ import annotations

import random

from hive.models.board import Board, Color, Field
from hive.models.game_state import BOARD_RADIUS, GameState, Player, starting_pieces


def create_initial_game_state(
    red_name: str = 'Red',
    blue_name: str = 'Blue',
    start_color: Color = Color.RED,
    num_obstructed: int = 0,
    seed: int | None = None,
) -> GameState:
    """Create and return a fresh GameState with an empty radius-6 board.

    Args:
        red_name: Display name of the red player.
        blue_name: Display name of the blue player.
        start_color: The color making the first move.
        num_obstructed: How many randomly chosen fields to block off.
        seed: Optional RNG seed for reproducible obstructions.

    Returns:
        A :class:`GameState` at turn 0 with both players holding all pieces.
    """
    board = Board.filling_radius(BOARD_RADIUS)
    if num_obstructed:
        rng = random.Random(seed)
        for coords in rng.sample(list(board.fields), num_obstructed):
            board.fields[coords] = Field(is_obstructed=True)

    return GameState(
        turn=0,
        start_color=start_color,
        current_color=start_color,
        red_player=Player(color=Color.RED, display_name=red_name),
        blue_player=Player(color=Color.BLUE, display_name=blue_name),
        board=board,
        undeployed={color: starting_pieces(color) for color in Color},
    )


def advance_turn(game_state: GameState) -> GameState:
    """Advance to the next turn and return the modified state.

    Called by the move processor after a move has been applied.  Modifies
    ``game_state`` in place and returns it.
    """
    game_state.turn += 1
    game_state.current_color = game_state.current_color.opponent()
    return game_state
