from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

import networkx as nx

from src.domain.algorithms.geo_utils import haversine_distance_m, polyline_distance_m
from src.domain.exceptions import EmptyPathError, NoNearbyVertex, ShapeNotFound
from src.domain.models import GeoPoint, Path

SNAP_TOLERANCE_M = 2000.0


@dataclass(slots=True)
class RouteGraph:
    """Sparse routing graph over the endpoints of raw geometry fragments.

    Only the first and last point of every added path become routable
    vertices; interior points live in the stored path payload. Each edge
    keeps its polyline length in meters under the "length" attribute.
    """

    graph: nx.Graph = field(default_factory=nx.Graph)
    paths: dict[tuple[GeoPoint, GeoPoint], Path] = field(default_factory=dict)
    snap_tolerance_m: float = SNAP_TOLERANCE_M

    @classmethod
    def from_paths(cls, paths: Iterable[Path]) -> RouteGraph:
        route_graph = cls()
        route_graph.add_paths(paths)
        return route_graph

    @property
    def vertices(self) -> tuple[GeoPoint, ...]:
        return tuple(self.graph.nodes)

    @property
    def adjacency(self) -> dict[GeoPoint, list[GeoPoint]]:
        return {v: list(self.graph.adj[v]) for v in self.graph.nodes}

    def add_paths(self, paths: Iterable[Path]) -> None:
        for path in paths:
            self.add_path(path)

    def add_path(self, path: Path) -> None:
        if not path:
            raise EmptyPathError("Cannot add an empty path to a route graph")

        forward = tuple(path)
        first = forward[0]
        last = forward[-1]

        self.graph.add_edge(first, last, length=polyline_distance_m(forward))
        self.paths[(first, last)] = forward
        self.paths[(last, first)] = forward[::-1]

    def nearest_vertex(self, point: GeoPoint) -> tuple[GeoPoint, float]:
        """Closest vertex and its distance in meters (first inserted wins ties)."""

        best: GeoPoint | None = None
        best_d = float("inf")
        for vertex in self.graph.nodes:
            d = haversine_distance_m(vertex, point)
            if d < best_d:
                best = vertex
                best_d = d

        if best is None:
            raise NoNearbyVertex(f"Route graph has no vertices to snap {point} to")
        return best, best_d

    def find_shape(self, p0: GeoPoint, p1: GeoPoint) -> Path:
        """Reconstruct the physical path between two arbitrary coordinates.

        Both points are snapped to their nearest vertex; the shape is the
        concatenation of the stored fragments along the shortest connecting
        walk (by polyline length).
        """

        start = self._snap(p0, role="start")
        end = self._snap(p1, role="end")
        if start == end:
            raise ShapeNotFound(f"Start and end both snap to vertex {start}")

        try:
            vertices = nx.shortest_path(self.graph, start, end, weight="length")
        except nx.NetworkXNoPath as exc:
            raise ShapeNotFound(f"No walk connects {start} and {end}") from exc

        return self._concat(vertices)

    def _snap(self, point: GeoPoint, *, role: str) -> GeoPoint:
        vertex, d = self.nearest_vertex(point)
        if d > self.snap_tolerance_m:
            raise NoNearbyVertex(
                f"{role} point {point} to closest {vertex} distance is "
                f"{d:.0f} m > {self.snap_tolerance_m:.0f} m"
            )
        return vertex

    def _concat(self, vertices: list[GeoPoint]) -> Path:
        out: list[GeoPoint] = []
        for a, b in zip(vertices, vertices[1:]):
            segment = self.paths[(a, b)]
            # Consecutive fragments share their junction vertex.
            out.extend(segment[1:] if out else segment)
        return tuple(out)
