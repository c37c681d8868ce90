"""Hex grid coordinate systems.

Three equivalent addressing schemes are used by the engine:

Axial (x, y)
    The primary coordinates for all grid logic and board lookups.

Cube (x, y, z)
    Invariant: x + y + z == 0.  Used for line detection and stepping along a
    straight line, where each of the three axes is one hex direction.  See
    https://www.redblobgames.com/grids/hexagons/#coordinates-cube.

Doubled (x, y)
    Offset coordinates with a doubled horizontal step, used only by the ASCII
    hex-grid fixture format.  The x-axis points right and the y-axis points
    down the rows of the grid.

Conversions::

    cube    -> axial    (x, y)
    axial   -> cube     (x, y, -(x + y))
    axial   -> doubled  (x - y, -(x + y))
    doubled -> axial    ((dx - dy) / 2, -(dx + dy) / 2)

The six neighbour offsets in axial space, in iteration order::

    0: ( 0, +1)
    1: (+1,  0)
    2: (+1, -1)
    3: ( 0, -1)
    4: (-1,  0)
    5: (-1, +1)
"""

from __future__ import annotations

from collections.abc import Iterator

import pydantic

# Six neighbour directions in axial coordinate space, indexed 0–5.
_AXIAL_DIRECTIONS: list[tuple[int, int]] = [
    (0, 1),
    (1, 0),
    (1, -1),
    (0, -1),
    (-1, 0),
    (-1, 1),
]


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


class AxialCoords(pydantic.BaseModel):
    """Axial coordinates for a hex cell."""

    model_config = pydantic.ConfigDict(frozen=True)

    x: int
    y: int

    def __add__(self, other: AxialCoords) -> AxialCoords:
        return AxialCoords(x=self.x + other.x, y=self.y + other.y)

    def __sub__(self, other: AxialCoords) -> AxialCoords:
        return AxialCoords(x=self.x - other.x, y=self.y - other.y)

    def __str__(self) -> str:
        return f'({self.x}, {self.y})'

    def to_cube(self) -> CubeCoords:
        """Return the equivalent cube coordinates."""
        return CubeCoords(x=self.x, y=self.y, z=-(self.x + self.y))

    def to_doubled(self) -> DoubledCoords:
        """Return the equivalent doubled coordinates."""
        return DoubledCoords(x=self.x - self.y, y=-(self.x + self.y))

    def coord_neighbors(self) -> list[AxialCoords]:
        """Return all 6 neighbouring coordinates, regardless of board bounds."""
        return [
            AxialCoords(x=self.x + dx, y=self.y + dy) for dx, dy in _AXIAL_DIRECTIONS
        ]

    def is_adjacent_to(self, other: AxialCoords) -> bool:
        """Return True if *other* is one of the 6 neighbours of this cell."""
        return (other.x - self.x, other.y - self.y) in _AXIAL_DIRECTIONS

    def forms_line_with(self, other: AxialCoords) -> bool:
        """Return True if both cells lie on one of the three hex line axes."""
        return self.to_cube().forms_line_with(other.to_cube())

    def line_iter(self, other: AxialCoords) -> Iterator[CubeCoords]:
        """Return the cube coordinates strictly between this cell and *other*."""
        return self.to_cube().line_iter(other.to_cube())

    def distance_to(self, other: AxialCoords) -> int:
        """Return the number of single steps between this cell and *other*."""
        return self.to_cube().distance_to(other.to_cube())


class CubeCoords(pydantic.BaseModel):
    """Cube coordinates for a hex cell. Invariant: x + y + z == 0."""

    model_config = pydantic.ConfigDict(frozen=True)

    x: int
    y: int
    z: int

    @pydantic.model_validator(mode='after')
    def _check_plane(self) -> CubeCoords:
        if self.x + self.y + self.z != 0:
            raise ValueError(
                f'Cube coordinates must sum to zero: ({self.x}, {self.y}, {self.z})'
            )
        return self

    def __add__(self, other: CubeCoords) -> CubeCoords:
        return CubeCoords(x=self.x + other.x, y=self.y + other.y, z=self.z + other.z)

    def __sub__(self, other: CubeCoords) -> CubeCoords:
        return CubeCoords(x=self.x - other.x, y=self.y - other.y, z=self.z - other.z)

    def __str__(self) -> str:
        return f'({self.x}, {self.y}, {self.z})'

    def to_axial(self) -> AxialCoords:
        """Return the equivalent axial coordinates."""
        return AxialCoords(x=self.x, y=self.y)

    def forms_line_with(self, other: CubeCoords) -> bool:
        """Return True if both cells agree on the x, y or z axis."""
        return self.x == other.x or self.y == other.y or self.z == other.z

    def line_iter(self, other: CubeCoords) -> Iterator[CubeCoords]:
        """Return a lazy iterator over the cells strictly between self and *other*.

        Steps by the unit vector sign(other - self).  Each call returns a new
        iterator, so the sequence can be walked again.

        Raises:
            ValueError: If the two cells do not form a straight line.
        """
        if not self.forms_line_with(other):
            raise ValueError(f'{self} and {other} do not form a line')
        diff = other - self
        step = CubeCoords(x=_sign(diff.x), y=_sign(diff.y), z=_sign(diff.z))
        return _walk(self + step, step, other)

    def distance_to(self, other: CubeCoords) -> int:
        """Return the hex distance between self and *other*."""
        diff = other - self
        return max(abs(diff.x), abs(diff.y), abs(diff.z))


def _walk(
    current: CubeCoords, step: CubeCoords, destination: CubeCoords
) -> Iterator[CubeCoords]:
    while current != destination:
        yield current
        current = current + step


class DoubledCoords(pydantic.BaseModel):
    """Doubled-width offset coordinates, as laid out in ASCII hex grids."""

    model_config = pydantic.ConfigDict(frozen=True)

    x: int
    y: int

    def __add__(self, other: DoubledCoords) -> DoubledCoords:
        return DoubledCoords(x=self.x + other.x, y=self.y + other.y)

    def __sub__(self, other: DoubledCoords) -> DoubledCoords:
        return DoubledCoords(x=self.x - other.x, y=self.y - other.y)

    def to_axial(self) -> AxialCoords:
        """Return the equivalent axial coordinates.

        Only cells with an even ``x + y`` exist in doubled space; odd cells
        have no axial counterpart.
        """
        if (self.x + self.y) % 2:
            raise ValueError(f'Not a doubled hex cell: ({self.x}, {self.y})')
        return AxialCoords(x=(self.x - self.y) // 2, y=-(self.x + self.y) // 2)
