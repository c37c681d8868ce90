"""Hive board data models.

Defines player colors, piece types, the stacked Field, and the Board: a
mapping from axial coordinates to fields together with the adjacency,
connectivity and reachability queries the rules are built on.

Occupancy
---------
A field is *occupied* when it is obstructed or holds at least one piece, and
*empty* otherwise.  The swarm is made of the fields holding pieces; obstructed
fields block movement but never connect the swarm.

Sliding
-------
A piece crawling from A to a neighbouring B squeezes between the (up to two)
fields that neighbour both A and B.  The slide is allowed when::

    (exactly one shared neighbour exists OR one of them is empty)
    AND one of them holds a piece

i.e. a fully blocked gap cannot be squeezed through, and a piece may never
leave the swarm by sliding into the open.  Searches for a moving piece pass
its start cell as the *exception*: that field is viewed with its top piece
lifted, so a piece never uses itself to guide its own slide.
"""

from __future__ import annotations

import collections
import enum
import logging

import pydantic

from .coords import AxialCoords

logger = logging.getLogger(__name__)


class Color(enum.StrEnum):
    """The two player colors."""

    RED = 'red'
    BLUE = 'blue'

    def opponent(self) -> Color:
        """Return the other color."""
        return Color.BLUE if self == Color.RED else Color.RED


class PieceType(enum.StrEnum):
    """The five Hive bug types."""

    ANT = 'ant'
    BEE = 'bee'
    BEETLE = 'beetle'
    GRASSHOPPER = 'grasshopper'
    SPIDER = 'spider'


class Piece(pydantic.BaseModel):
    """A single game piece, compared by value."""

    model_config = pydantic.ConfigDict(frozen=True)

    owner: Color
    piece_type: PieceType


class Field(pydantic.BaseModel):
    """One board cell: a stack of pieces plus an obstruction flag.

    ``pieces`` is ordered bottom to top; only the top piece can move and it
    decides who owns the field.
    """

    pieces: list[Piece] = pydantic.Field(default_factory=list)
    is_obstructed: bool = False

    @property
    def piece(self) -> Piece | None:
        """The top-most piece, or None."""
        return self.pieces[-1] if self.pieces else None

    @property
    def owner(self) -> Color | None:
        """The owner of the top-most piece, or None."""
        top = self.piece
        return top.owner if top else None

    def has_pieces(self) -> bool:
        """Return True if at least one piece is on this field."""
        return bool(self.pieces)

    def is_occupied(self) -> bool:
        """Return True if the field is obstructed or holds a piece."""
        return self.is_obstructed or self.has_pieces()

    def is_empty(self) -> bool:
        """Return True if nothing occupies this field."""
        return not self.is_occupied()

    def is_owned_by(self, color: Color) -> bool:
        """Return True if the top piece belongs to *color*."""
        return self.owner == color

    def push(self, piece: Piece) -> None:
        """Put *piece* on top of the stack."""
        self.pieces.append(piece)

    def pop(self) -> Piece | None:
        """Remove and return the top piece, or None if the stack is empty."""
        return self.pieces.pop() if self.pieces else None

    def lifted(self) -> Field:
        """Return a copy of this field with its top piece removed."""
        return Field(pieces=self.pieces[:-1], is_obstructed=self.is_obstructed)


class PositionedField(pydantic.BaseModel):
    """A field together with its position, as stored in board snapshots."""

    coords: AxialCoords
    field: Field


_ENTRIES = pydantic.TypeAdapter(list[PositionedField])

# (coords, field) pairs returned by the board queries.
FieldEntry = tuple[AxialCoords, Field]


def hex_coords(radius: int) -> list[AxialCoords]:
    """Return every coordinate of a hex board with the given (outer) radius.

    A board of radius r has 1 + 3r(r-1) cells: 1, 7, 19, ... 91 for r = 6.
    """
    inner = radius - 1
    return [
        AxialCoords(x=x, y=y)
        for y in range(-inner, inner + 1)
        for x in range(max(-inner, -inner - y), min(inner, inner - y) + 1)
    ]


class Board(pydantic.BaseModel):
    """The game board: a fixed set of fields keyed by axial coordinates."""

    fields: dict[AxialCoords, Field] = pydantic.Field(default_factory=dict)

    @pydantic.field_validator('fields', mode='before')
    @classmethod
    def _fields_from_entries(cls, value: object) -> object:
        if not isinstance(value, list):
            return value
        fields: dict[AxialCoords, Field] = {}
        for entry in _ENTRIES.validate_python(value):
            if entry.coords in fields:
                raise ValueError(f'Duplicate field at {entry.coords}')
            fields[entry.coords] = entry.field
        return fields

    @pydantic.field_serializer('fields')
    def _fields_to_entries(
        self, fields: dict[AxialCoords, Field]
    ) -> list[PositionedField]:
        return [PositionedField(coords=c, field=f) for c, f in fields.items()]

    # -----------------------------------------------------------------------
    # Construction
    # -----------------------------------------------------------------------

    @classmethod
    def filling_radius(
        cls, radius: int, fields: dict[AxialCoords, Field] | None = None
    ) -> Board:
        """Create a hex board of *radius*, padding *fields* with empty cells.

        Cells are ordered row by row; any given field outside the radius is
        kept and appended at the end.
        """
        given = dict(fields or {})
        ordered: dict[AxialCoords, Field] = {}
        for coords in hex_coords(radius):
            ordered[coords] = given.pop(coords) if coords in given else Field()
        ordered.update(given)
        board = cls(fields=ordered)
        logger.debug(
            'Created board of radius %d with %d occupied fields',
            radius,
            len(board.occupied_fields()),
        )
        return board

    def without_piece_at(self, coords: AxialCoords) -> Board:
        """Return a throwaway copy of the board with the top piece at *coords* gone."""
        clone = Board(
            fields={
                c: Field(pieces=list(f.pieces), is_obstructed=f.is_obstructed)
                for c, f in self.fields.items()
            }
        )
        field = clone.field_mut(coords)
        if field is not None:
            field.pop()
        return clone

    # -----------------------------------------------------------------------
    # Lookups
    # -----------------------------------------------------------------------

    def field(self, coords: AxialCoords) -> Field | None:
        """Return the field at *coords*, or None when off the board."""
        return self.fields.get(coords)

    def field_mut(self, coords: AxialCoords) -> Field | None:
        """Return the field at *coords* for in-place changes, or None."""
        return self.fields.get(coords)

    def contains_coords(self, coords: AxialCoords) -> bool:
        """Return True if *coords* is on the board."""
        return coords in self.fields

    def is_occupied(self, coords: AxialCoords) -> bool:
        """Return True if *coords* is occupied; off-board cells count as occupied."""
        field = self.fields.get(coords)
        return field.is_occupied() if field is not None else True

    def entries(self) -> list[FieldEntry]:
        """Return all (coords, field) pairs in board order."""
        return list(self.fields.items())

    def fields_owned_by(self, color: Color) -> list[FieldEntry]:
        """Return all fields whose top piece belongs to *color*."""
        return [(c, f) for c, f in self.fields.items() if f.is_owned_by(color)]

    def occupied_fields(self) -> list[FieldEntry]:
        """Return all obstructed or piece-holding fields."""
        return [(c, f) for c, f in self.fields.items() if f.is_occupied()]

    def empty_fields(self) -> list[FieldEntry]:
        """Return all empty fields."""
        return [(c, f) for c, f in self.fields.items() if f.is_empty()]

    def has_pieces(self) -> bool:
        """Return True if any piece has been placed."""
        return any(f.has_pieces() for f in self.fields.values())

    def neighbors(self, coords: AxialCoords) -> list[FieldEntry]:
        """Return the (at most 6) neighbouring fields that exist on the board."""
        result: list[FieldEntry] = []
        for c in coords.coord_neighbors():
            field = self.fields.get(c)
            if field is not None:
                result.append((c, field))
        return result

    def empty_neighbors(self, coords: AxialCoords) -> list[FieldEntry]:
        """Return the empty neighbouring fields."""
        return [(c, f) for c, f in self.neighbors(coords) if f.is_empty()]

    def swarm_boundary(self) -> list[FieldEntry]:
        """Return the empty fields adjacent to at least one occupied field."""
        seen: set[AxialCoords] = set()
        result: list[FieldEntry] = []
        for coords, _ in self.occupied_fields():
            for c, f in self.empty_neighbors(coords):
                if c not in seen:
                    seen.add(c)
                    result.append((c, f))
        return result

    def has_placed_bee(self, color: Color) -> bool:
        """Return True if *color*'s bee is anywhere on the board (even buried)."""
        bee = Piece(owner=color, piece_type=PieceType.BEE)
        return any(bee in f.pieces for f in self.fields.values())

    def is_next_to(self, color: Color, coords: AxialCoords) -> bool:
        """Return True if a neighbour of *coords* is owned by *color*."""
        return any(f.is_owned_by(color) for _, f in self.neighbors(coords))

    def possible_set_move_destinations(self, color: Color) -> list[AxialCoords]:
        """Return empty fields touching *color* and not touching its opponent."""
        opponent = color.opponent()
        seen: set[AxialCoords] = set()
        result: list[AxialCoords] = []
        for coords, _ in self.fields_owned_by(color):
            for c, _ in self.empty_neighbors(coords):
                if c in seen:
                    continue
                seen.add(c)
                if not self.is_next_to(opponent, c):
                    result.append(c)
        return result

    # -----------------------------------------------------------------------
    # Connectivity
    # -----------------------------------------------------------------------

    def is_swarm_connected(self) -> bool:
        """Return True if all piece-holding fields form one connected group.

        Uses DFS from an arbitrary piece.  An empty swarm is connected.
        """
        unvisited = {c for c, f in self.fields.items() if f.has_pieces()}
        if not unvisited:
            return True

        stack = [next(iter(unvisited))]
        while stack:
            coords = stack.pop()
            if coords not in unvisited:
                continue
            unvisited.discard(coords)
            for c, _ in self.neighbors(coords):
                if c in unvisited:
                    stack.append(c)
        return not unvisited

    # -----------------------------------------------------------------------
    # Sliding and path search
    # -----------------------------------------------------------------------

    def shared_neighbors(
        self,
        a: AxialCoords,
        b: AxialCoords,
        exception: AxialCoords | None = None,
    ) -> list[FieldEntry]:
        """Return the fields neighbouring both *a* and *b*.

        The field at *exception*, if shared, is returned with its top piece
        lifted so that it no longer counts as occupied by the moving piece.
        """
        b_neighbors = set(b.coord_neighbors())
        result: list[FieldEntry] = []
        for c, f in self.neighbors(a):
            if c in b_neighbors:
                result.append((c, f.lifted() if c == exception else f))
        return result

    def can_move_between(
        self,
        a: AxialCoords,
        b: AxialCoords,
        exception: AxialCoords | None = None,
    ) -> bool:
        """Return True if a piece can slide from *a* to the neighbouring *b*."""
        shared = self.shared_neighbors(a, b, exception)
        return (len(shared) == 1 or any(f.is_empty() for _, f in shared)) and any(
            f.has_pieces() for _, f in shared
        )

    def accessible_neighbors(
        self, coords: AxialCoords, exception: AxialCoords | None = None
    ) -> list[FieldEntry]:
        """Return the empty neighbours reachable by one legal slide."""
        return [
            (c, f)
            for c, f in self.neighbors(coords)
            if f.is_empty() and self.can_move_between(coords, c, exception)
        ]

    def connected_by_boundary_path(
        self, start: AxialCoords, destination: AxialCoords
    ) -> bool:
        """Return True if *destination* is reachable by any number of slides.

        BFS over accessible neighbours, with *start* as the lifted exception.
        """
        queue = collections.deque([start])
        visited = {start}
        while queue:
            coords = queue.popleft()
            if coords == destination:
                return True
            for c, _ in self.accessible_neighbors(coords, exception=start):
                if c not in visited:
                    visited.add(c)
                    queue.append(c)
        logger.debug('No boundary path from %s to %s', start, destination)
        return False

    def bfs_reachable_in_3_steps(
        self, start: AxialCoords, destination: AxialCoords
    ) -> bool:
        """Return True if *destination* is reachable in exactly three slides.

        Paths never revisit a cell, so a piece cannot step back and forth.
        """
        paths: collections.deque[list[AxialCoords]] = collections.deque([[start]])
        while paths:
            path = paths.popleft()
            steps = [
                c
                for c, _ in self.accessible_neighbors(path[-1], exception=start)
                if c not in path
            ]
            if len(path) < 3:
                paths.extend(path + [c] for c in steps)
            elif destination in steps:
                logger.debug('3-step path %s -> %s', path, destination)
                return True
        return False
