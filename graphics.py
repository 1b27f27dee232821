"""Matplotlib rendering of the floor planner polygon."""
from __future__ import annotations

from typing import Final, List, Optional, Tuple

import matplotlib.pyplot as plt
from matplotlib.axes import Axes
from matplotlib.figure import Figure
from matplotlib.patches import Circle
from matplotlib.patches import Polygon as PolygonPatch
from PIL import Image

from geom import Polygon
from planner import FloorPlanner

DEFAULT_MARKER_COLOR: Final[str] = "red"
DEFAULT_STROKE_COLOR: Final[str] = "#78a12e"
DEFAULT_FILL_COLOR: Final[str] = "#78a12e5a"


class FloorPlannerGraphics:
    """Draws a planner's polygon: translucent fill, outline, vertex markers."""

    def __init__(
        self,
        floor_planner: FloorPlanner,
        marker_color: str = DEFAULT_MARKER_COLOR,
        stroke_color: str = DEFAULT_STROKE_COLOR,
        fill_color: str = DEFAULT_FILL_COLOR,
    ) -> None:
        self.floor_planner = floor_planner
        self.marker_color = marker_color
        self.stroke_color = stroke_color
        self.fill_color = fill_color

    @property
    def polygon(self) -> Polygon:
        return self.floor_planner.polygon

    def polygon_path(self) -> List[Tuple[float, float]]:
        """Closed path: the first vertex, then the end of every side in order."""

        start = self.polygon.vertices[0]
        path = [start.as_tuple()]
        path.extend(side.end.as_tuple() for side in self.polygon.sides)
        return path

    def draw(self, ax: Axes) -> None:
        path = self.polygon_path()

        ax.add_patch(
            PolygonPatch(path, closed=True, facecolor=self.fill_color, edgecolor="none")
        )
        ax.add_patch(
            PolygonPatch(
                path,
                closed=True,
                fill=False,
                edgecolor=self.stroke_color,
                linewidth=self.floor_planner.stroke_width,
                joinstyle="round",
                capstyle="round",
            )
        )

        radius = self.floor_planner.marker_radius
        for vertex in self.polygon.vertices:
            ax.add_patch(Circle(vertex.as_tuple(), radius, color=self.marker_color))

    def render_overlay(
        self, image: Optional[Image.Image] = None, figsize: Tuple[float, float] = (6, 6)
    ) -> Figure:
        """Return a figure with the image in container coordinates and the polygon on top."""

        width, height = self.floor_planner.width, self.floor_planner.height
        fig, ax = plt.subplots(figsize=figsize)
        if image is not None:
            ax.imshow(image, extent=[0, width, height, 0])

        self.draw(ax)

        ax.set_xlim(0, width)
        ax.set_ylim(height, 0)
        ax.set_aspect("equal")
        ax.set_xticks([])
        ax.set_yticks([])
        return fig
