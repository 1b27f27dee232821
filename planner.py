"""Planner state: container size, styling inputs and the initial polygon."""
from __future__ import annotations

from pathlib import Path
from typing import IO, Any, Final, List, Optional, Union

from PIL import Image

from geom import Point, Polygon, PolygonBuilder

DEFAULT_MARKER_RADIUS: Final[int] = 8
DEFAULT_STROKE_WIDTH: Final[float] = 7.0

INITIAL_POLYGON_WIDTH_RATIO: Final[float] = 0.75
"""Share of the container width the first polygon spans."""

INITIAL_POLYGON_HEIGHT_RATIO: Final[float] = 0.75
"""Share of the container height the first polygon spans."""

MIN_POLYGON_RATIO: Final[float] = 0.6
MAX_POLYGON_RATIO: Final[float] = 1.0

ImageSource = Union[str, Path, IO[bytes]]


def clamp_ratio(ratio: float) -> float:
    """Snap a size ratio into [MIN_POLYGON_RATIO, MAX_POLYGON_RATIO]."""

    if ratio < MIN_POLYGON_RATIO:
        return MIN_POLYGON_RATIO
    if ratio > MAX_POLYGON_RATIO:
        return MAX_POLYGON_RATIO
    return float(ratio)


class FloorPlanner:
    """Holds the container state and lazily derives the edited polygon.

    The polygon is created on first access from the size and ratios current
    at that moment, then kept for the planner's lifetime. Resizing the
    container does not rebuild it; call ``reset_polygon`` for that.
    """

    def __init__(
        self,
        width: float,
        height: float,
        marker_radius: int = DEFAULT_MARKER_RADIUS,
        stroke_width: float = DEFAULT_STROKE_WIDTH,
        width_ratio: float = INITIAL_POLYGON_WIDTH_RATIO,
        height_ratio: float = INITIAL_POLYGON_HEIGHT_RATIO,
    ) -> None:
        self.width = width
        self.height = height
        self.marker_radius = int(marker_radius)
        self.stroke_width = float(stroke_width)
        self._width_ratio = clamp_ratio(width_ratio)
        self._height_ratio = clamp_ratio(height_ratio)
        self._polygon: Optional[Polygon] = None

    @classmethod
    def from_image(cls, source: ImageSource, **kwargs: Any) -> FloorPlanner:
        """Create a planner whose container matches the image's pixel size."""

        if isinstance(source, (str, Path)) and not Path(source).exists():
            raise FileNotFoundError(f"Image not found at {source}.")

        with Image.open(source) as image:
            width, height = image.size
        return cls(width, height, **kwargs)

    @property
    def width_ratio(self) -> float:
        return self._width_ratio

    @width_ratio.setter
    def width_ratio(self, ratio: float) -> None:
        self._width_ratio = clamp_ratio(ratio)

    @property
    def height_ratio(self) -> float:
        return self._height_ratio

    @height_ratio.setter
    def height_ratio(self, ratio: float) -> None:
        self._height_ratio = clamp_ratio(ratio)

    @property
    def polygon(self) -> Polygon:
        if self._polygon is None:
            self._polygon = self._initial_polygon()
        return self._polygon

    @polygon.setter
    def polygon(self, polygon: Polygon) -> None:
        self._polygon = polygon

    @property
    def vertices(self) -> List[Point]:
        return list(self.polygon.vertices)

    def resize(self, width: float, height: float) -> None:
        self.width = max(width, 0)
        self.height = max(height, 0)

    def reset_polygon(self) -> None:
        self._polygon = None

    def _initial_polygon(self) -> Polygon:
        """Centre a rectangle spanning the configured ratios of the container."""

        width, height = self.width, self.height
        rw, rh = self._width_ratio, self._height_ratio
        return (
            PolygonBuilder()
            .add_vertex(Point(width * (1 - rw), height * (1 - rh)))
            .add_vertex(Point(width * rw, height * (1 - rh)))
            .add_vertex(Point(width * rw, height * rh))
            .add_vertex(Point(width * (1 - rw), height * rh))
            .close()
            .build()
        )
