"""
Rectangular maze model.

A maze is a width x height grid of junctures with (0, 0) in the upper-left
corner and y growing downward. Adjacent junctures are joined by a passage
that is either walled off or open with a non-negative integer weight. The grid
border is always a wall.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Collection, List, Optional, Protocol

import numpy as np

# Weight value marking a walled-off passage in GridMaze arrays.
WALL = -1


class Direction(Enum):
    """Passage direction with its (dx, dy) grid offset."""

    ABOVE = (0, -1)
    BELOW = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]

    @property
    def opposite(self) -> "Direction":
        return _OPPOSITES[self]


_OPPOSITES = {
    Direction.ABOVE: Direction.BELOW,
    Direction.BELOW: Direction.ABOVE,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}


@dataclass(frozen=True)
class Juncture:
    """Grid cell identified by integer coordinates."""

    x: int
    y: int

    def neighbour(self, direction: Direction) -> "Juncture":
        return Juncture(self.x + direction.dx, self.y + direction.dy)

    def __repr__(self) -> str:
        return f"Juncture({self.x}, {self.y})"


class Maze(Protocol):
    """Source of maze geometry consumed by the maze graph builder."""

    @property
    def width(self) -> int:
        """Number of junctures per row."""

    @property
    def height(self) -> int:
        """Number of junctures per column."""

    def is_wall(self, juncture: Juncture, direction: Direction) -> bool:
        """True if a wall blocks the passage leaving `juncture` in `direction`."""

    def weight(self, juncture: Juncture, direction: Direction) -> int:
        """Weight of the open passage leaving `juncture` in `direction`."""


class GridMaze:
    """
    Maze backed by two integer numpy arrays of passage weights.

    horizontal_weights has shape (height, width - 1); entry [y, x] is the
    passage between (x, y) and (x + 1, y). vertical_weights has shape
    (height - 1, width); entry [y, x] is the passage between (x, y) and
    (x, y + 1). Negative entries are walls. Passages are symmetric: the same
    weight applies in both directions.
    """

    def __init__(
        self, width: int, height: int, horizontal_weights: np.ndarray, vertical_weights: np.ndarray
    ) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"Maze dimensions must be positive, got {width}x{height}.")
        horizontal = _as_weights("horizontal_weights", horizontal_weights)
        vertical = _as_weights("vertical_weights", vertical_weights)
        if horizontal.shape != (height, width - 1):
            raise ValueError(
                f"horizontal_weights must have shape {(height, width - 1)}, got {horizontal.shape}."
            )
        if vertical.shape != (height - 1, width):
            raise ValueError(
                f"vertical_weights must have shape {(height - 1, width)}, got {vertical.shape}."
            )
        self._width = width
        self._height = height
        self._horizontal = horizontal
        self._vertical = vertical

    @classmethod
    def open(cls, width: int, height: int, weight: int = 1) -> "GridMaze":
        """Maze with no internal walls and a uniform passage weight."""
        if weight < 0:
            raise ValueError(f"Passage weight must be non-negative, got {weight}.")
        return cls(
            width,
            height,
            np.full((height, max(width - 1, 0)), weight, dtype=np.int64),
            np.full((max(height - 1, 0), width), weight, dtype=np.int64),
        )

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    def in_bounds(self, juncture: Juncture) -> bool:
        return 0 <= juncture.x < self._width and 0 <= juncture.y < self._height

    def is_wall(self, juncture: Juncture, direction: Direction) -> bool:
        return self._passage(juncture, direction) < 0

    def weight(self, juncture: Juncture, direction: Direction) -> int:
        value = self._passage(juncture, direction)
        if value < 0:
            raise ValueError(f"No open passage {direction.name} of {juncture!r}.")
        return value

    # --- Per-direction helpers -----------------------------------------------

    def is_wall_above(self, juncture: Juncture) -> bool:
        return self.is_wall(juncture, Direction.ABOVE)

    def is_wall_below(self, juncture: Juncture) -> bool:
        return self.is_wall(juncture, Direction.BELOW)

    def is_wall_to_left(self, juncture: Juncture) -> bool:
        return self.is_wall(juncture, Direction.LEFT)

    def is_wall_to_right(self, juncture: Juncture) -> bool:
        return self.is_wall(juncture, Direction.RIGHT)

    def get_weight_above(self, juncture: Juncture) -> int:
        return self.weight(juncture, Direction.ABOVE)

    def get_weight_below(self, juncture: Juncture) -> int:
        return self.weight(juncture, Direction.BELOW)

    def get_weight_to_left(self, juncture: Juncture) -> int:
        return self.weight(juncture, Direction.LEFT)

    def get_weight_to_right(self, juncture: Juncture) -> int:
        return self.weight(juncture, Direction.RIGHT)

    # --- Internal helpers ----------------------------------------------------

    def _passage(self, juncture: Juncture, direction: Direction) -> int:
        """Stored weight of the passage, WALL for borders and walls."""
        if not self.in_bounds(juncture) or not self.in_bounds(juncture.neighbour(direction)):
            return WALL
        x, y = juncture.x, juncture.y
        if direction is Direction.RIGHT:
            return int(self._horizontal[y, x])
        if direction is Direction.LEFT:
            return int(self._horizontal[y, x - 1])
        if direction is Direction.BELOW:
            return int(self._vertical[y, x])
        return int(self._vertical[y - 1, x])


def _as_weights(name: str, values: np.ndarray) -> np.ndarray:
    """
    Integer copy of a weight array.

    Float arrays are accepted only when every entry is a whole number.
    """
    arr = np.asarray(values)
    if np.issubdtype(arr.dtype, np.integer):
        return arr.astype(np.int64)
    if not np.issubdtype(arr.dtype, np.floating):
        raise ValueError(f"{name} must hold integers, got dtype {arr.dtype}.")
    if not (np.all(np.isfinite(arr)) and np.array_equal(arr, np.floor(arr))):
        raise ValueError(f"{name} must hold whole-number weights.")
    return arr.astype(np.int64)


def generate_random_maze(
    width: int,
    height: int,
    seed: Optional[int] = None,
    wall_probability: float = 0.3,
    max_weight: int = 9,
) -> GridMaze:
    """
    Sample a maze with independently walled passages.

    Each internal passage is a wall with probability wall_probability and
    otherwise gets a weight drawn uniformly from 1..max_weight. The same seed
    always yields the same maze. Nothing guarantees the corners are
    connected.
    """
    if not 0.0 <= wall_probability <= 1.0:
        raise ValueError(f"wall_probability must be within [0, 1], got {wall_probability}.")
    if max_weight < 1:
        raise ValueError(f"max_weight must be at least 1, got {max_weight}.")

    rng = np.random.default_rng(seed)

    def sample(shape: tuple[int, int]) -> np.ndarray:
        weights = rng.integers(1, max_weight + 1, size=shape, dtype=np.int64)
        walls = rng.random(size=shape) < wall_probability
        weights[walls] = WALL
        return weights

    horizontal = sample((height, max(width - 1, 0)))
    vertical = sample((max(height - 1, 0), width))
    return GridMaze(width, height, horizontal, vertical)


def render_maze(maze: Maze, path: Optional[Collection[Juncture]] = None) -> str:
    """ASCII drawing of the maze; junctures on `path` are marked with '*'."""
    marked = set(path or ())
    lines: List[str] = ["+" + "---+" * maze.width]
    for y in range(maze.height):
        row = "|"
        bottom = "+"
        for x in range(maze.width):
            cell = Juncture(x, y)
            row += " * " if cell in marked else "   "
            row += "|" if maze.is_wall(cell, Direction.RIGHT) else " "
            bottom += ("---" if maze.is_wall(cell, Direction.BELOW) else "   ") + "+"
        lines.append(row)
        lines.append(bottom)
    return "\n".join(lines)
