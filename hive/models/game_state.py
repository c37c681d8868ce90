"""Hive game state model.

Captures a complete game position as received from the server each turn:
the turn counter, whose move it is, both players, every undeployed piece,
and the board.
"""

from __future__ import annotations

import pydantic

from .board import Board, Color, Piece, PieceType

BOARD_RADIUS = 6
FIELD_COUNT = 91
# The game ends after this many rounds at the latest.
ROUND_LIMIT = 30
# A color that has not placed its bee by this round must place it now.
BEE_DEADLINE_ROUND = 3

# Pieces each color starts with (11 total).
STARTING_PIECE_COUNTS: dict[PieceType, int] = {
    PieceType.BEE: 1,
    PieceType.SPIDER: 3,
    PieceType.GRASSHOPPER: 2,
    PieceType.BEETLE: 2,
    PieceType.ANT: 3,
}


def starting_pieces(color: Color) -> list[Piece]:
    """Return the full undeployed set for *color*."""
    pieces: list[Piece] = []
    for piece_type, count in STARTING_PIECE_COUNTS.items():
        pieces.extend([Piece(owner=color, piece_type=piece_type)] * count)
    return pieces


class Player(pydantic.BaseModel):
    """Metadata about one of the two players."""

    color: Color
    display_name: str


class GameState(pydantic.BaseModel):
    """Complete snapshot of a Hive game at one turn."""

    # Number of moves made so far; red and blue alternate.
    turn: int = pydantic.Field(ge=0)
    start_color: Color
    current_color: Color
    red_player: Player
    blue_player: Player
    board: Board
    # Pieces each color still holds in hand, keyed by owner.
    undeployed: dict[Color, list[Piece]]

    @pydantic.model_validator(mode='after')
    def _check_consistency(self) -> GameState:
        if self.red_player.color != Color.RED or self.blue_player.color != Color.BLUE:
            raise ValueError('Player records do not match their colors')
        for color in Color:
            if color not in self.undeployed:
                raise ValueError(f'Missing undeployed pieces for {color}')
            if any(p.owner != color for p in self.undeployed[color]):
                raise ValueError(f'Undeployed pieces of {color} have a foreign owner')
        return self

    @property
    def round(self) -> int:
        """The current round: each round is one move per color."""
        return self.turn // 2

    def player(self, color: Color) -> Player:
        """Return the player record for *color*."""
        return self.red_player if color == Color.RED else self.blue_player

    def undeployed_pieces(self, color: Color) -> list[Piece]:
        """Return the pieces *color* has not placed yet."""
        return self.undeployed[color]

    def must_place_bee(self, color: Color) -> bool:
        """Return True if *color* is out of time to place its bee.

        The bee has to be on the board by a color's fourth move, i.e. from
        round 3 (turns 6 and 7) on, placing the bee is the only legal move.
        """
        return self.round >= BEE_DEADLINE_ROUND and not self.board.has_placed_bee(
            color
        )
