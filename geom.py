"""Geometry primitives for the floor planner polygon."""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Final, Iterator, List, Optional, Tuple, Union

EXTREME_X: Final[float] = 10000.0
"""Right end of the containment ray; large relative to any container size."""

MIN_VERTICES: Final[int] = 3


class ConstructionError(ValueError):
    """Raised when a polygon is closed or built with too few vertices."""


@dataclass
class Point:
    """Mutable 2D point in container pixel coordinates."""

    x: float
    y: float

    def __post_init__(self) -> None:
        self.x = float(self.x)
        self.y = float(self.y)

    def distance_to(self, other: Point) -> float:
        """Euclidean distance to another point."""

        return math.hypot(abs(other.y - self.y), abs(other.x - self.x))

    def update(self, x: Union[Point, float], y: Optional[float] = None) -> None:
        """Overwrite the coordinates in place from a point or an (x, y) pair."""

        if isinstance(x, Point):
            self.x, self.y = x.x, x.y
            return
        if y is None:
            raise TypeError("update() needs a Point or both x and y.")
        self.x = float(x)
        self.y = float(y)

    def as_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)

    def __str__(self) -> str:
        return f"({self.x:f},{self.y:f})"


class Segment:
    """Directed line between two points held by reference.

    The slope ``a`` and intercept ``b`` of ``y = a*x + b`` are derived from
    the live endpoints, so they follow any in-place vertex mutation. A
    segment whose endpoints share the same x is ``vertical`` and has NaN for
    both ``a`` and ``b``.
    """

    __slots__ = ("start", "end")

    def __init__(self, start: Point, end: Point) -> None:
        self.start = start
        self.end = end

    @property
    def vertical(self) -> bool:
        return self.end.x == self.start.x

    @property
    def a(self) -> float:
        if self.vertical:
            return math.nan
        return (self.end.y - self.start.y) / (self.end.x - self.start.x)

    @property
    def b(self) -> float:
        if self.vertical:
            return math.nan
        return self.start.y - self.a * self.start.x

    def contains_extent(self, point: Point) -> bool:
        """Return True when the point lies within the segment's bounding extent.

        This is not an on-segment test for sloped segments; it only confirms
        that a point already known to be on the carrier line is between the
        endpoints.
        """

        min_x, max_x = sorted((self.start.x, self.end.x))
        min_y, max_y = sorted((self.start.y, self.end.y))
        return min_x <= point.x <= max_x and min_y <= point.y <= max_y

    def intersection(self, other: Segment) -> Optional[Point]:
        """Return the crossing point of both segments, or None."""

        if not self.vertical and not other.vertical:
            if self.a - other.a == 0:
                return None
            x = (other.b - self.b) / (self.a - other.a)
            candidate = Point(x, other.a * x + other.b)
        elif self.vertical and not other.vertical:
            x = self.start.x
            candidate = Point(x, other.a * x + other.b)
        elif not self.vertical and other.vertical:
            x = other.start.x
            candidate = Point(x, self.a * x + self.b)
        else:
            return None

        if self.contains_extent(candidate) and other.contains_extent(candidate):
            return candidate
        return None

    def __repr__(self) -> str:
        return f"Segment({self.start!r}, {self.end!r})"

    def __str__(self) -> str:
        return f"{self.start}-{self.end}"


@dataclass
class BoundingBox:
    """Axis-aligned extent of a set of points."""

    x_min: float
    x_max: float
    y_min: float
    y_max: float

    @classmethod
    def of(cls, points: List[Point]) -> BoundingBox:
        xs = [point.x for point in points]
        ys = [point.y for point in points]
        return cls(min(xs), max(xs), min(ys), max(ys))

    def contains(self, point: Point) -> bool:
        return self.x_min <= point.x <= self.x_max and self.y_min <= point.y <= self.y_max


def orientation(p: Point, q: Point, r: Point, tolerance: Optional[float] = None) -> int:
    """Classify the ordered triplet (p, q, r).

    Returns 0 when collinear, 1 when clockwise and 2 when counter-clockwise.
    Without a tolerance the cross product is truncated to an integer before
    the sign test, so triplets whose cross product is below 1 in magnitude
    count as collinear. Pass a tolerance to compare against it instead.
    """

    value = (q.y - p.y) * (r.x - q.x) - (q.x - p.x) * (r.y - q.y)
    if tolerance is None:
        value = int(value)
        if value == 0:
            return 0
    elif abs(value) <= tolerance:
        return 0
    return 1 if value > 0 else 2


def on_segment(p: Point, q: Point, r: Point) -> bool:
    """For collinear p, q, r: return True when q lies on segment pr."""

    return (
        min(p.x, r.x) <= q.x <= max(p.x, r.x)
        and min(p.y, r.y) <= q.y <= max(p.y, r.y)
    )


def segments_intersect(
    p1: Point, q1: Point, p2: Point, q2: Point, tolerance: Optional[float] = None
) -> bool:
    """Return True when segment p1q1 intersects segment p2q2."""

    o1 = orientation(p1, q1, p2, tolerance)
    o2 = orientation(p1, q1, q2, tolerance)
    o3 = orientation(p2, q2, p1, tolerance)
    o4 = orientation(p2, q2, q1, tolerance)

    if o1 != o2 and o3 != o4:
        return True

    # Collinear cases: the remaining endpoint must fall within the segment.
    if o1 == 0 and on_segment(p1, p2, q1):
        return True
    if o2 == 0 and on_segment(p1, q2, q1):
        return True
    if o3 == 0 and on_segment(p2, p1, q2):
        return True
    return o4 == 0 and on_segment(p2, q1, q2)


@dataclass(frozen=True, eq=False)
class Polygon:
    """Closed ring of vertices and the sides connecting them.

    Sides reference the vertex instances, so dragging a vertex in place is
    reflected in the sides without rebuilding. ``bounding_box`` is captured
    at build time and is not refreshed after mutation; use ``extent()`` for
    the live extent.
    """

    vertices: Tuple[Point, ...]
    sides: Tuple[Segment, ...]
    bounding_box: BoundingBox

    def __iter__(self) -> Iterator[Point]:
        """Iterate over the vertices in winding order."""

        return iter(self.vertices)

    def __len__(self) -> int:
        return len(self.vertices)

    def extent(self) -> BoundingBox:
        return BoundingBox.of(list(self.vertices))

    def in_bounding_box(self, point: Point) -> bool:
        return self.bounding_box.contains(point)

    def is_inside(self, point: Point, tolerance: Optional[float] = None) -> bool:
        """Return True when the point lies inside or on the boundary.

        Casts a horizontal ray to ``EXTREME_X`` and counts crossed edges
        (even-odd rule). A crossed edge that is collinear with the point
        decides the result on its own: inside iff the point is on that edge.
        """

        n = len(self.sides)
        if n < MIN_VERTICES:
            return False

        extreme = Point(EXTREME_X, point.y)
        vertices = self.vertices
        count = 0
        for i in range(n):
            current, following = vertices[i], vertices[(i + 1) % n]
            if not segments_intersect(current, following, point, extreme, tolerance):
                continue
            if orientation(current, point, following, tolerance) == 0:
                return on_segment(current, point, following)
            count += 1

        return count % 2 == 1


class PolygonBuilder:
    """Incremental builder; add vertices in the order they are drawn."""

    def __init__(self) -> None:
        self._vertices: List[Point] = []
        self._sides: List[Segment] = []
        self._bounding_box: Optional[BoundingBox] = None
        self._closed = False

    def add_vertex(self, point: Point) -> PolygonBuilder:
        if self._closed:
            # A closed ring is final; adding again starts over.
            self._vertices = []
            self._sides = []
            self._bounding_box = None
            self._closed = False

        self._update_bounding_box(point)
        self._vertices.append(point)
        if len(self._vertices) > 1:
            self._sides.append(Segment(self._vertices[-2], point))
        return self

    def close(self) -> PolygonBuilder:
        """Add the side from the last vertex back to the first."""

        self._validate()
        self._sides.append(Segment(self._vertices[-1], self._vertices[0]))
        self._closed = True
        return self

    def build(self) -> Polygon:
        self._validate()
        if not self._closed:
            self.close()
        assert self._bounding_box is not None
        return Polygon(
            vertices=tuple(self._vertices),
            sides=tuple(self._sides),
            bounding_box=self._bounding_box,
        )

    def _update_bounding_box(self, point: Point) -> None:
        box = self._bounding_box
        if box is None:
            self._bounding_box = BoundingBox(point.x, point.x, point.y, point.y)
            return
        box.x_min = min(box.x_min, point.x)
        box.x_max = max(box.x_max, point.x)
        box.y_min = min(box.y_min, point.y)
        box.y_max = max(box.y_max, point.y)

    def _validate(self) -> None:
        if len(self._vertices) < MIN_VERTICES:
            raise ConstructionError(
                f"A polygon requires at least {MIN_VERTICES} vertices, "
                f"got {len(self._vertices)}."
            )


def polygon_from_points(points: List[Tuple[float, float]]) -> Polygon:
    """Build a polygon from (x, y) pairs given in winding order."""

    builder = PolygonBuilder()
    for x, y in points:
        builder.add_vertex(Point(x, y))
    return builder.build()
