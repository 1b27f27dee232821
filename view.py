"""Floor planner view: planner, controls and graphics behind one object."""
from __future__ import annotations

from typing import Any, Callable, List, Mapping, Optional

from matplotlib.axes import Axes
from matplotlib.figure import Figure
from PIL import Image

from controls import (
    DEFAULT_BOX_PADDING,
    DEFAULT_EXTENDED_VERTEX_TOUCH_RADIUS,
    FloorPlannerControls,
    PointerEvent,
)
from geom import Point, Polygon
from graphics import (
    DEFAULT_FILL_COLOR,
    DEFAULT_MARKER_COLOR,
    DEFAULT_STROKE_COLOR,
    FloorPlannerGraphics,
)
from planner import (
    DEFAULT_MARKER_RADIUS,
    DEFAULT_STROKE_WIDTH,
    INITIAL_POLYGON_HEIGHT_RATIO,
    INITIAL_POLYGON_WIDTH_RATIO,
    FloorPlanner,
)

CoordinatesListener = Callable[[Polygon], None]

ATTRIBUTE_DEFAULTS: Mapping[str, Any] = {
    "marker_radius": DEFAULT_MARKER_RADIUS,
    "stroke_width": DEFAULT_STROKE_WIDTH,
    "width_ratio": INITIAL_POLYGON_WIDTH_RATIO,
    "height_ratio": INITIAL_POLYGON_HEIGHT_RATIO,
    "box_padding": DEFAULT_BOX_PADDING,
    "extended_touch_radius": DEFAULT_EXTENDED_VERTEX_TOUCH_RADIUS,
    "marker_color": DEFAULT_MARKER_COLOR,
    "stroke_color": DEFAULT_STROKE_COLOR,
    "fill_color": DEFAULT_FILL_COLOR,
}
"""Configurable attributes and their defaults, in the order they are applied."""


class FloorPlannerView:
    """Editable polygon overlaid on a container of the given size.

    Feed pointer events to ``on_touch_event``; after each one the optional
    ``on_coordinates_updated`` listener receives the polygon, whether or not
    the event moved anything.
    """

    def __init__(self, width: float, height: float, **attributes: Any) -> None:
        self.floor_planner = FloorPlanner(width, height)
        self.graphics = FloorPlannerGraphics(self.floor_planner)
        self.on_coordinates_updated: Optional[CoordinatesListener] = None

        settings = dict(ATTRIBUTE_DEFAULTS)
        unknown = set(attributes).difference(settings)
        if unknown:
            raise TypeError(f"Unknown attributes: {', '.join(sorted(unknown))}.")
        settings.update(attributes)

        # Marker radius first: the controls cache their pick radius from it.
        self.set_marker_radius(settings["marker_radius"])
        self.controls = FloorPlannerControls(self.floor_planner)
        self.set_polygon_stroke_width(settings["stroke_width"])
        self.set_polygon_width_ratio(settings["width_ratio"])
        self.set_polygon_height_ratio(settings["height_ratio"])
        self.set_box_padding(settings["box_padding"])
        self.set_extended_touch_radius(settings["extended_touch_radius"])
        self.set_marker_color(settings["marker_color"])
        self.set_stroke_color(settings["stroke_color"])
        self.set_fill_color(settings["fill_color"])

    @classmethod
    def from_attributes(
        cls, width: float, height: float, attributes: Mapping[str, Any]
    ) -> FloorPlannerView:
        """Build a view from a loose mapping, ignoring keys that are not attributes."""

        known = {key: value for key, value in attributes.items() if key in ATTRIBUTE_DEFAULTS}
        return cls(width, height, **known)

    def update_attributes(self, attributes: Mapping[str, Any]) -> None:
        """Apply styling and constraint attributes to a live view.

        Ratios are skipped since they only shape a polygon that is not yet
        built. The extended touch radius is pushed only when it changes, so
        a new marker radius alone leaves the cached pick radius as it was.
        """

        setters = {
            "marker_color": self.set_marker_color,
            "stroke_color": self.set_stroke_color,
            "fill_color": self.set_fill_color,
            "stroke_width": self.set_polygon_stroke_width,
            "marker_radius": self.set_marker_radius,
            "box_padding": self.set_box_padding,
        }
        for key, setter in setters.items():
            if key in attributes:
                setter(attributes[key])

        radius = attributes.get("extended_touch_radius")
        if radius is not None and int(radius) != self.controls.extended_touch_radius:
            self.set_extended_touch_radius(radius)

    @property
    def polygon(self) -> Polygon:
        return self.floor_planner.polygon

    @property
    def vertices(self) -> List[Point]:
        return self.floor_planner.vertices

    def on_touch_event(self, event: PointerEvent) -> bool:
        self.controls.handle_event(event)
        if self.on_coordinates_updated is not None:
            self.on_coordinates_updated(self.floor_planner.polygon)
        return True

    def resize(self, width: float, height: float) -> None:
        self.floor_planner.resize(width, height)

    def draw(self, ax: Axes) -> None:
        self.graphics.draw(ax)

    def render(self, image: Optional[Image.Image] = None) -> Figure:
        return self.graphics.render_overlay(image)

    def set_fill_color(self, color: str) -> None:
        self.graphics.fill_color = color

    def set_stroke_color(self, color: str) -> None:
        self.graphics.stroke_color = color

    def set_marker_color(self, color: str) -> None:
        self.graphics.marker_color = color

    def set_marker_radius(self, radius: int) -> None:
        self.floor_planner.marker_radius = int(radius)

    def set_polygon_stroke_width(self, width: float) -> None:
        self.floor_planner.stroke_width = float(width)

    def set_polygon_width_ratio(self, ratio: float) -> None:
        """Width share of the first polygon; clamped to [0.6, 1]."""

        self.floor_planner.width_ratio = ratio

    def set_polygon_height_ratio(self, ratio: float) -> None:
        """Height share of the first polygon; clamped to [0.6, 1]."""

        self.floor_planner.height_ratio = ratio

    def set_extended_touch_radius(self, radius: int) -> None:
        self.controls.extended_touch_radius = radius

    def set_box_padding(self, padding: float) -> None:
        """Padding kept between the polygon and the container; negatives become 0.

        Padding above half the container width or height leaves no valid
        position and produces undefined clamping.
        """

        self.controls.box_padding = padding
