"""Pointer handling: dragging the whole polygon or a single vertex."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Final, Optional, Union

from geom import Point, Polygon
from planner import FloorPlanner

logger = logging.getLogger(__name__)

DEFAULT_EXTENDED_VERTEX_TOUCH_RADIUS: Final[int] = 30
"""Extra pick tolerance added to the marker radius."""

DEFAULT_BOX_PADDING: Final[float] = 50.0
"""Margin the polygon must keep from the container edges."""


class PointerPhase(Enum):
    PRESS = "press"
    MOVE = "move"
    RELEASE = "release"


@dataclass(frozen=True)
class PointerEvent:
    """One pointer sample delivered by the host event loop."""

    phase: PointerPhase
    x: float
    y: float

    @property
    def point(self) -> Point:
        return Point(self.x, self.y)


class DragState(Enum):
    IDLE = "idle"
    DRAGGING_VERTEX = "dragging_vertex"
    DRAGGING_POLYGON = "dragging_polygon"


@dataclass
class DraggingVertex:
    index: int


@dataclass
class DraggingPolygon:
    dragging_point: Point


Draggable = Union[DraggingVertex, DraggingPolygon]


class FloorPlannerControls:
    """Translates pointer events into in-place edits of the planner's polygon.

    A press on a vertex marker starts a vertex drag, a press inside the
    polygon starts a whole-polygon drag, anything else is ignored until the
    next press. While dragging, the polygon is kept inside the container
    shrunk by ``box_padding`` on every side.
    """

    def __init__(
        self,
        floor_planner: FloorPlanner,
        extended_touch_radius: int = DEFAULT_EXTENDED_VERTEX_TOUCH_RADIUS,
        box_padding: float = DEFAULT_BOX_PADDING,
    ) -> None:
        self.floor_planner = floor_planner
        self._extended_touch_radius = int(extended_touch_radius)
        self._box_padding = 0.0
        self.box_padding = box_padding
        self.draggable: Optional[Draggable] = None
        self.vertex_touch_radius = 0.0
        self.refresh_touch_radius()

    @property
    def extended_touch_radius(self) -> int:
        return self._extended_touch_radius

    @extended_touch_radius.setter
    def extended_touch_radius(self, radius: int) -> None:
        self._extended_touch_radius = int(radius)
        self.refresh_touch_radius()

    @property
    def box_padding(self) -> float:
        return self._box_padding

    @box_padding.setter
    def box_padding(self, padding: float) -> None:
        self._box_padding = max(float(padding), 0.0)

    def refresh_touch_radius(self) -> None:
        """Recompute the pick radius from the planner's current marker radius.

        Changing ``floor_planner.marker_radius`` alone leaves the cached
        radius untouched.
        """

        self.vertex_touch_radius = float(
            self.floor_planner.marker_radius + self._extended_touch_radius
        )

    @property
    def polygon(self) -> Polygon:
        return self.floor_planner.polygon

    @property
    def x_min(self) -> float:
        return self._box_padding

    @property
    def y_min(self) -> float:
        return self._box_padding

    @property
    def x_max(self) -> float:
        return self.floor_planner.width - self._box_padding

    @property
    def y_max(self) -> float:
        return self.floor_planner.height - self._box_padding

    @property
    def state(self) -> DragState:
        if isinstance(self.draggable, DraggingVertex):
            return DragState.DRAGGING_VERTEX
        if isinstance(self.draggable, DraggingPolygon):
            return DragState.DRAGGING_POLYGON
        return DragState.IDLE

    def handle_event(self, event: PointerEvent) -> None:
        if event.phase is PointerPhase.PRESS:
            self._handle_press(event.point)
        elif event.phase is PointerPhase.MOVE:
            self._handle_move(event.point)
        elif event.phase is PointerPhase.RELEASE:
            self._handle_release()
        logger.debug("%s at (%s, %s) -> %s", event.phase.value, event.x, event.y, self.state.value)

    def vertex_at(self, point: Point) -> Optional[int]:
        """Index of the first vertex whose marker is hit by the point."""

        for index, vertex in enumerate(self.polygon.vertices):
            if self._is_touch_inside_vertex(vertex, point):
                return index
        return None

    def _handle_press(self, point: Point) -> None:
        if self.draggable is not None:
            # Press without a release in between is not a modelled gesture.
            logger.debug("Ignoring press while %s is active", self.state.value)
            return

        index = self.vertex_at(point)
        if index is not None:
            self.draggable = DraggingVertex(index)
        elif self.polygon.is_inside(point):
            self.draggable = DraggingPolygon(point)
        else:
            self.draggable = None

    def _handle_move(self, point: Point) -> None:
        draggable = self.draggable
        if isinstance(draggable, DraggingPolygon):
            x_diff = point.x - draggable.dragging_point.x
            y_diff = point.y - draggable.dragging_point.y
            self._cap_polygon_to_container(x_diff, y_diff)
            draggable.dragging_point = point
        elif isinstance(draggable, DraggingVertex):
            self.polygon.vertices[draggable.index].update(point)
            self._cap_vertex_to_container(draggable.index)

    def _handle_release(self) -> None:
        self.draggable = None

    def _vertex_center(self, vertex: Point) -> Point:
        radius = self.floor_planner.marker_radius
        return Point(vertex.x + radius, vertex.y + radius)

    def _is_touch_inside_vertex(self, vertex: Point, touch: Point) -> bool:
        return self._vertex_center(vertex).distance_to(touch) < self.vertex_touch_radius

    def _cap_polygon_to_container(self, x_diff: float, y_diff: float) -> None:
        """Translate every vertex, shortening the move at the padded bounds."""

        extent = self.polygon.extent()

        if extent.x_min + x_diff < self.x_min:
            x_diff = self.x_min - extent.x_min
        elif extent.x_max + x_diff > self.x_max:
            x_diff = self.x_max - extent.x_max

        if extent.y_min + y_diff < self.y_min:
            y_diff = self.y_min - extent.y_min
        elif extent.y_max + y_diff > self.y_max:
            y_diff = self.y_max - extent.y_max

        for vertex in self.polygon.vertices:
            vertex.update(vertex.x + x_diff, vertex.y + y_diff)

    def _cap_vertex_to_container(self, index: int) -> None:
        vertex = self.polygon.vertices[index]
        if vertex.x < self.x_min:
            vertex.x = self.x_min
        elif vertex.x > self.x_max:
            vertex.x = self.x_max
        if vertex.y < self.y_min:
            vertex.y = self.y_min
        elif vertex.y > self.y_max:
            vertex.y = self.y_max
