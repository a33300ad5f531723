# -*- coding: utf-8 -*-
"""Undirected station graph and shortest-distance traversal.

The graph drives the distance based colour gradient and the shortest
path tool; it never affects station placement.
"""

from __future__ import annotations

import heapq
import logging
import math
from typing import TYPE_CHECKING
from typing import NamedTuple

if TYPE_CHECKING:
    from speleo_lib.cave.models import Cave

logger = logging.getLogger(__name__)


class Traversal(NamedTuple):
    """Result of a single-source traversal.

    Attributes:
        distances: Shortest distance (meters) of every reachable station
        previous: Predecessor of every reachable station on its shortest
            path (``None`` for the source)
    """

    distances: dict[str, float]
    previous: dict[str, str | None]


class Section(NamedTuple):
    """Shortest path between two stations."""

    path: list[str]
    distance: float


class StationGraph:
    """Undirected weighted graph over station names.

    Parallel edges collapse onto the shortest one.
    """

    def __init__(self) -> None:
        self._adjacency: dict[str, dict[str, float]] = {}

    def __contains__(self, name: object) -> bool:
        return name in self._adjacency

    def __len__(self) -> int:
        return len(self._adjacency)

    @property
    def vertices(self) -> list[str]:
        return list(self._adjacency)

    def neighbors(self, name: str) -> dict[str, float]:
        return dict(self._adjacency.get(name, {}))

    def add_vertex(self, name: str) -> None:
        self._adjacency.setdefault(name, {})

    def add_edge(self, a: str, b: str, weight: float) -> None:
        self.add_vertex(a)
        self.add_vertex(b)
        current = self._adjacency[a].get(b, math.inf)
        if weight < current:
            self._adjacency[a][b] = weight
            self._adjacency[b][a] = weight

    def traverse(self, start: str) -> Traversal:
        """Dijkstra from ``start``; unreachable stations are left out."""
        distances: dict[str, float] = {}
        previous: dict[str, str | None] = {}

        if start not in self._adjacency:
            logger.warning("Traversal start `%s` is not in the graph", start)
            return Traversal(distances, previous)

        best: dict[str, float] = {start: 0.0}
        previous[start] = None
        queue: list[tuple[float, str]] = [(0.0, start)]

        while queue:
            distance, name = heapq.heappop(queue)
            if name in distances:
                continue
            distances[name] = distance

            for neighbor, weight in self._adjacency[name].items():
                if neighbor in distances:
                    continue
                candidate = distance + weight
                if candidate < best.get(neighbor, math.inf):
                    best[neighbor] = candidate
                    previous[neighbor] = name
                    heapq.heappush(queue, (candidate, neighbor))

        return Traversal(distances, previous)

    def shortest_path(self, source: str, target: str) -> Section | None:
        """Shortest path between two stations, ``None`` if disconnected."""
        traversal = self.traverse(source)
        if target not in traversal.distances:
            return None

        path = [target]
        while (prev := traversal.previous[path[-1]]) is not None:
            path.append(prev)
        path.reverse()
        return Section(path=path, distance=traversal.distances[target])


def build_station_graph(cave: Cave) -> StationGraph:
    """Graph of all stations of ``cave`` joined by their placed valid shots."""
    graph = StationGraph()
    for name in cave.stations:
        graph.add_vertex(name)

    for survey in cave.surveys:
        for shot in survey.valid_shots:
            from_name = survey.get_from_station_name(shot)
            to_name = survey.get_to_station_name(shot)
            if from_name in cave.stations and to_name in cave.stations:
                graph.add_edge(from_name, to_name, shot.length)

    return graph
