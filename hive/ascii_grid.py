r"""ASCII hex-grid fixtures for Hive boards.

Boards are drawn as rows of pointy-top hexagons, one cell per slot::

        /\  /\
       /  \/  \
       |RB |   |
      /\  /\  /\
     /  \/  \/  \
     |   |## |BA |
     \  /\  /\  /
      \/  \/  \/
       |   |   |
       \  /\  /
        \/  \/

Every third line holds the cells as ``|``-delimited 3-character slots.  A slot
holds ``<owner><type>`` for its top piece (owner ``R``/``B``, type ``A``nt,
``B``ee, bee``T``le, ``G``rasshopper, ``S``pider), ``##`` for an obstructed
cell, or blanks for an empty cell.  Rows alternate their indentation, and a
row is always filled from its left edge, so the column of a slot alone fixes
its position; cells missing from a board are drawn as empty slots.  The grid
is centered on the origin.

Positions are laid out in doubled coordinates (see :mod:`hive.models.coords`).
"""

from __future__ import annotations

import logging
import re

from .models.board import Board, Color, Field, Piece, PieceType
from .models.coords import AxialCoords, DoubledCoords

logger = logging.getLogger(__name__)

_TOKEN = re.compile(r'^([A-Z])([A-Z])$')
_OBSTRUCTED = '##'

_COLOR_CODES: dict[Color, str] = {Color.RED: 'R', Color.BLUE: 'B'}
_PIECE_CODES: dict[PieceType, str] = {
    PieceType.ANT: 'A',
    PieceType.BEE: 'B',
    PieceType.BEETLE: 'T',
    PieceType.GRASSHOPPER: 'G',
    PieceType.SPIDER: 'S',
}
_COLORS_BY_CODE = {code: color for color, code in _COLOR_CODES.items()}
_PIECES_BY_CODE = {code: piece_type for piece_type, code in _PIECE_CODES.items()}


# ---------------------------------------------------------------------------
# Tokens
# ---------------------------------------------------------------------------


def field_token(field: Field) -> str:
    """Return the 2-character token for *field*, or '' when it is empty."""
    if field.is_obstructed:
        return _OBSTRUCTED
    piece = field.piece
    if piece is None:
        return ''
    return _COLOR_CODES[piece.owner] + _PIECE_CODES[piece.piece_type]


def parse_field(token: str) -> Field:
    """Parse a slot's (stripped) token into a Field.

    Raises:
        ValueError: If the token is neither blank, ``##`` nor a known piece.
    """
    if not token:
        return Field()
    if token == _OBSTRUCTED:
        return Field(is_obstructed=True)
    match = _TOKEN.match(token)
    if match is None:
        raise ValueError(f'{token!r} does not match field syntax {_TOKEN.pattern}')
    owner_code, type_code = match.groups()
    if owner_code not in _COLORS_BY_CODE:
        raise ValueError(f'Did not recognize player color {owner_code}')
    if type_code not in _PIECES_BY_CODE:
        raise ValueError(f'Did not recognize piece type {type_code}')
    piece = Piece(
        owner=_COLORS_BY_CODE[owner_code], piece_type=_PIECES_BY_CODE[type_code]
    )
    return Field(pieces=[piece])


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------


def render_board(board: Board) -> str:
    """Draw *board* as an ASCII hex grid that :func:`parse_board` reads back.

    Only the top piece of a stack is shown.
    """
    if not board.fields:
        return ''

    doubled = {coords.to_doubled(): field for coords, field in board.entries()}
    half_height = max(1, max(abs(d.y) for d in doubled))
    half_width = max(abs(d.x) for d in doubled)
    # Rows must start on odd columns when their index is even.
    if (half_width + half_height) % 2 == 0:
        half_width += 1

    height = 2 * half_height + 1
    width = 2 * half_width + 1
    canvas = [[' '] * (2 * width + 6) for _ in range(3 * height + 2)]

    def draw(line: int, col: int, text: str) -> None:
        for i, char in enumerate(text):
            if char != ' ':
                canvas[line][col + i] = char

    for ly in range(height):
        slots = range((ly + 1) % 2, width, 2)
        for lx in slots:
            field = doubled.get(DoubledCoords(x=lx - half_width, y=ly - half_height))
            col = 2 * lx + 1
            draw(3 * ly + 2, col, '|')
            if field is not None:
                draw(3 * ly + 2, col + 1, field_token(field))
            draw(3 * ly, col + 1, '/\\')
            draw(3 * ly + 1, col, '/  \\')
            draw(3 * ly + 3, col, '\\  /')
            draw(3 * ly + 4, col + 1, '\\/')
        draw(3 * ly + 2, 2 * slots[-1] + 5, '|')

    lines = [''.join(row).rstrip() for row in canvas]
    while lines and not lines[-1]:
        lines.pop()
    return '\n'.join(lines)


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


def parse_board(text: str, radius: int | None = None) -> Board:
    """Parse an ASCII hex grid into a Board.

    Args:
        text: The grid; leading blank lines are ignored.
        radius: If given, cells outside this radius are dropped and missing
            cells inside it are added as empty fields.

    Raises:
        ValueError: If a slot holds a malformed token.
    """
    lines = [line.strip() for line in text.splitlines()]
    while lines and not lines[0]:
        lines.pop(0)

    positioned: list[tuple[DoubledCoords, Field]] = []
    for y, line in enumerate(lines[2::3]):
        fragments = [frag for frag in line.split('|') if frag]
        for x, frag in enumerate(fragments):
            coords = DoubledCoords(x=2 * x + (y + 1) % 2, y=y)
            positioned.append((coords, parse_field(frag.strip())))

    center = DoubledCoords(
        x=max((c.x for c, _ in positioned), default=0) // 2,
        y=max((c.y for c, _ in positioned), default=0) // 2,
    )
    fields: dict[AxialCoords, Field] = {
        (coords - center).to_axial(): field for coords, field in positioned
    }
    logger.debug('Parsed %d fields centered at %s', len(fields), center)

    if radius is None:
        return Board(fields=fields)
    inside = {
        coords: field
        for coords, field in fields.items()
        if coords.distance_to(AxialCoords(x=0, y=0)) < radius
    }
    return Board.filling_radius(radius, inside)
