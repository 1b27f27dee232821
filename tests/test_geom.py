"""Unit tests for the geometry primitives and polygon containment."""

import math

import pytest

from geom import (
    BoundingBox,
    ConstructionError,
    Point,
    PolygonBuilder,
    Segment,
    on_segment,
    orientation,
    polygon_from_points,
    segments_intersect,
)

SQUARE = [(100, 100), (200, 100), (200, 200), (100, 200)]
L_SHAPE = [(0, 0), (200, 0), (200, 100), (100, 100), (100, 200), (0, 200)]


class TestPoint:
    """Point construction, distance and in-place updates"""

    def test_integer_coordinates_become_floats(self):
        point = Point(1, 2)
        assert isinstance(point.x, float)
        assert isinstance(point.y, float)

    def test_distance(self):
        assert Point(0, 0).distance_to(Point(3, 4)) == 5.0
        assert Point(3, 4).distance_to(Point(0, 0)) == 5.0
        assert Point(1, 1).distance_to(Point(1, 1)) == 0.0

    def test_update_from_point(self):
        point = Point(0, 0)
        point.update(Point(5, 6))
        assert point == Point(5, 6)

    def test_update_from_coordinates(self):
        point = Point(0, 0)
        point.update(7, 8)
        assert (point.x, point.y) == (7.0, 8.0)

    def test_update_requires_both_coordinates(self):
        with pytest.raises(TypeError):
            Point(0, 0).update(3)

    def test_str(self):
        assert str(Point(1, 2.5)) == "(1.000000,2.500000)"


class TestSegment:
    """Slope, intercept, extent and line intersection"""

    def test_slope_and_intercept(self):
        segment = Segment(Point(0, 1), Point(2, 5))
        assert not segment.vertical
        assert segment.a == 2.0
        assert segment.b == 1.0

    def test_vertical_segment(self):
        segment = Segment(Point(1, 0), Point(1, 5))
        assert segment.vertical
        assert math.isnan(segment.a)
        assert math.isnan(segment.b)

    def test_contains_extent_is_a_box_test(self):
        segment = Segment(Point(0, 0), Point(2, 4))
        # Not on the line, but inside the extent.
        assert segment.contains_extent(Point(1, 1))
        assert segment.contains_extent(Point(2, 4))
        assert not segment.contains_extent(Point(3, 1))

    def test_follows_endpoint_mutation(self):
        start, end = Point(0, 0), Point(1, 1)
        segment = Segment(start, end)
        end.update(4, 8)
        assert segment.end is end
        assert segment.a == 2.0

    def test_crossing_segments(self):
        first = Segment(Point(0, 0), Point(10, 10))
        second = Segment(Point(0, 10), Point(10, 0))
        assert first.intersection(second) == Point(5, 5)

    def test_vertical_and_sloped(self):
        vertical = Segment(Point(5, 0), Point(5, 10))
        sloped = Segment(Point(0, 0), Point(10, 10))
        assert vertical.intersection(sloped) == Point(5, 5)
        assert sloped.intersection(vertical) == Point(5, 5)

    def test_parallel_segments(self):
        first = Segment(Point(0, 0), Point(10, 10))
        second = Segment(Point(0, 1), Point(10, 11))
        assert first.intersection(second) is None
        assert Segment(Point(0, 0), Point(0, 5)).intersection(
            Segment(Point(1, 0), Point(1, 5))
        ) is None

    def test_lines_cross_outside_segments(self):
        first = Segment(Point(0, 0), Point(1, 1))
        second = Segment(Point(0, 10), Point(10, 0))
        assert first.intersection(second) is None


class TestOrientation:
    """Orientation, on-segment and segment intersection primitives"""

    def test_collinear(self):
        assert orientation(Point(0, 0), Point(4, 4), Point(8, 8)) == 0

    def test_clockwise_and_counter_clockwise(self):
        assert orientation(Point(0, 0), Point(4, 4), Point(8, 0)) == 1
        assert orientation(Point(0, 0), Point(4, 0), Point(4, 4)) == 2

    def test_small_cross_product_truncates_to_collinear(self):
        p, q, r = Point(0, 0), Point(1, 0), Point(1, 0.5)
        assert orientation(p, q, r) == 0
        assert orientation(p, q, r, tolerance=1e-9) == 2

    def test_on_segment(self):
        assert on_segment(Point(0, 0), Point(5, 5), Point(10, 10))
        assert not on_segment(Point(0, 0), Point(11, 11), Point(10, 10))

    def test_segments_intersect(self):
        assert segments_intersect(Point(0, 0), Point(10, 10), Point(0, 10), Point(10, 0))
        assert not segments_intersect(Point(0, 0), Point(10, 0), Point(0, 10), Point(10, 10))

    def test_collinear_disjoint_segments(self):
        assert not segments_intersect(Point(0, 0), Point(1, 1), Point(2, 2), Point(3, 3))

    def test_collinear_overlapping_segments(self):
        assert segments_intersect(Point(0, 0), Point(2, 2), Point(1, 1), Point(3, 3))


class TestPolygonBuilder:
    """Builder validation, sides and bounding box"""

    def test_two_vertices_cannot_build(self):
        builder = PolygonBuilder().add_vertex(Point(0, 0)).add_vertex(Point(1, 1))
        with pytest.raises(ConstructionError):
            builder.build()

    def test_two_vertices_cannot_close(self):
        builder = PolygonBuilder().add_vertex(Point(0, 0)).add_vertex(Point(1, 1))
        with pytest.raises(ConstructionError):
            builder.close()

    def test_construction_error_is_a_value_error(self):
        with pytest.raises(ValueError):
            PolygonBuilder().build()

    def test_triangle_has_three_sides(self):
        polygon = polygon_from_points([(0, 0), (100, 0), (50, 100)])
        assert len(polygon.vertices) == 3
        assert len(polygon.sides) == 3

    def test_sides_connect_consecutive_vertices(self):
        polygon = polygon_from_points(SQUARE)
        n = len(polygon.vertices)
        for i, side in enumerate(polygon.sides):
            assert side.start is polygon.vertices[i]
            assert side.end is polygon.vertices[(i + 1) % n]

    def test_close_then_build_adds_one_closing_side(self):
        builder = PolygonBuilder()
        for x, y in SQUARE:
            builder.add_vertex(Point(x, y))
        polygon = builder.close().build()
        assert len(polygon.sides) == 4

    def test_add_after_close_starts_a_new_ring(self):
        builder = PolygonBuilder()
        for x, y in SQUARE:
            builder.add_vertex(Point(x, y))
        builder.close()
        for x, y in [(0, 0), (10, 0), (5, 10)]:
            builder.add_vertex(Point(x, y))
        polygon = builder.build()

        assert [vertex.as_tuple() for vertex in polygon] == [(0, 0), (10, 0), (5, 10)]
        assert len(polygon.sides) == 3
        assert polygon.bounding_box == BoundingBox(0, 10, 0, 10)

    def test_bounding_box(self):
        polygon = polygon_from_points([(10, 20), (50, 5), (30, 40)])
        assert polygon.bounding_box == BoundingBox(10, 50, 5, 40)

    def test_vertices_round_trip(self):
        points = [Point(x, y) for x, y in SQUARE]
        builder = PolygonBuilder()
        for point in points:
            builder.add_vertex(point)
        polygon = builder.build()

        assert list(polygon.vertices) == points
        assert all(kept is given for kept, given in zip(polygon.vertices, points))


class TestPolygonMutation:
    """Sides alias the vertex instances; the bounding box is a snapshot"""

    def test_vertex_update_visible_through_sides(self):
        polygon = polygon_from_points(SQUARE)
        polygon.vertices[1].update(50, 50)
        assert polygon.sides[0].end == Point(50, 50)
        assert polygon.sides[1].start == Point(50, 50)

    def test_bounding_box_is_not_recomputed(self):
        polygon = polygon_from_points(SQUARE)
        polygon.vertices[2].update(300, 300)
        assert polygon.bounding_box == BoundingBox(100, 200, 100, 200)
        assert not polygon.in_bounding_box(Point(250, 250))
        assert polygon.extent() == BoundingBox(100, 300, 100, 300)


class TestIsInside:
    """Ray casting containment"""

    @pytest.fixture
    def square(self):
        return polygon_from_points(SQUARE)

    def test_point_inside(self, square):
        assert square.is_inside(Point(150, 150))

    def test_points_outside(self, square):
        assert not square.is_inside(Point(250, 150))
        assert not square.is_inside(Point(50, 150))
        assert not square.is_inside(Point(150, 50))

    @pytest.mark.parametrize("x, y", [(100, 150), (200, 150), (150, 100)])
    def test_points_on_edges(self, square, x, y):
        assert square.is_inside(Point(x, y))

    def test_winding_order_does_not_matter(self):
        clockwise = polygon_from_points(SQUARE)
        counter_clockwise = polygon_from_points(list(reversed(SQUARE)))
        for point, expected in [(Point(150, 150), True), (Point(250, 150), False)]:
            assert clockwise.is_inside(point) is expected
            assert counter_clockwise.is_inside(point) is expected

    def test_concave_winding_order_does_not_matter(self):
        forward = polygon_from_points(L_SHAPE)
        backward = polygon_from_points(list(reversed(L_SHAPE)))
        for point, expected in [
            (Point(50, 50), True),
            (Point(150, 50), True),
            (Point(50, 150), True),
            (Point(150, 150), False),
            (Point(250, 50), False),
        ]:
            assert forward.is_inside(point) is expected
            assert backward.is_inside(point) is expected

    def test_concave_polygon(self):
        l_shape = polygon_from_points(L_SHAPE)
        assert l_shape.is_inside(Point(50, 50))
        assert l_shape.is_inside(Point(150, 50))
        assert not l_shape.is_inside(Point(150, 150))

    def test_unit_scale_needs_a_tolerance(self):
        unit_square = polygon_from_points([(0, 0), (1, 0), (1, 1), (0, 1)])
        assert not unit_square.is_inside(Point(0.5, 0.5))
        assert unit_square.is_inside(Point(0.5, 0.5), tolerance=1e-9)

    def test_follows_vertex_mutation(self, square):
        for vertex in square.vertices:
            vertex.update(vertex.x + 200, vertex.y)
        assert not square.is_inside(Point(150, 150))
        assert square.is_inside(Point(350, 150))
