"""
Turn a Maze into a WeightedGraph of Junctures.

Every juncture becomes a vertex. Every open passage becomes two directed
edges, one added from each side, carrying the weight the maze reports.
"""

from typing import Optional

from maze import Direction, Juncture, Maze
from weighted_graph import WeightedGraph

# Order in which each juncture's passages are turned into edges.
EDGE_DIRECTIONS = (Direction.ABOVE, Direction.BELOW, Direction.LEFT, Direction.RIGHT)


class MazeGraph(WeightedGraph[Juncture]):
    """
    WeightedGraph whose vertices and edges come from a maze.
    """

    def __init__(self, maze: Maze, **engines) -> None:
        super().__init__(**engines)
        self.maze = maze
        _add_junctures(self, maze)
        _connect_passages(self, maze)

    def corner(self, which: str) -> Juncture:
        """Juncture at "top-left", "top-right", "bottom-left" or "bottom-right"."""
        last_x = self.maze.width - 1
        last_y = self.maze.height - 1
        corners = {
            "top-left": Juncture(0, 0),
            "top-right": Juncture(last_x, 0),
            "bottom-left": Juncture(0, last_y),
            "bottom-right": Juncture(last_x, last_y),
        }
        if which not in corners:
            raise ValueError(f"Unknown corner {which!r}; expected one of {sorted(corners)}.")
        return corners[which]


def build_maze_graph(maze: Maze, graph: Optional[WeightedGraph[Juncture]] = None) -> WeightedGraph[Juncture]:
    """
    Populate `graph` (a fresh WeightedGraph by default) from `maze`.

    Uses only the public construction API, so any WeightedGraph subclass
    with registered observers can be filled in place.
    """
    if graph is None:
        return MazeGraph(maze)
    _add_junctures(graph, maze)
    _connect_passages(graph, maze)
    return graph


def _add_junctures(graph: WeightedGraph[Juncture], maze: Maze) -> None:
    for x in range(maze.width):
        for y in range(maze.height):
            graph.add_vertex(Juncture(x, y))


def _connect_passages(graph: WeightedGraph[Juncture], maze: Maze) -> None:
    for x in range(maze.width):
        for y in range(maze.height):
            here = Juncture(x, y)
            for direction in EDGE_DIRECTIONS:
                there = here.neighbour(direction)
                # Destination must lie inside the grid.
                if not maze.is_wall(here, direction) and graph.contains_vertex(there):
                    graph.add_edge(here, there, maze.weight(here, direction))
