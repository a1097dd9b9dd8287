"""Tests for the pure drawing algorithms."""

import pytest

from ascii_studio.core.cell import TRANSPARENT, Cell, Position
from ascii_studio.document.layer import Layer
from ascii_studio.draw.box import (
    DOUBLE,
    SINGLE,
    BoxStyle,
    E,
    N,
    S,
    W,
    char_to_connections,
    connections_to_char,
    neighbor_connections,
    resolve_char,
    resolve_points,
    smart_box_points,
    smart_line_points,
)
from ascii_studio.draw.fill import flood_fill
from ascii_studio.draw.geometry import ellipse_points, line_points, rect_points
from ascii_studio.draw.justify import justify_horizontal, justify_vertical
from ascii_studio.draw.recolor import replace_colors
from ascii_studio.render.composite import ExportRegion

from conftest import cell


def P(x: int, y: int) -> Position:
    return Position(x, y)


class TestLine:
    def test_horizontal_includes_both_ends(self) -> None:
        points = line_points(P(0, 0), P(4, 0))
        assert points == [P(x, 0) for x in range(5)]

    def test_diagonal(self) -> None:
        assert line_points(P(0, 0), P(3, 3)) == [P(0, 0), P(1, 1), P(2, 2), P(3, 3)]

    def test_single_point(self) -> None:
        assert line_points(P(2, 2), P(2, 2)) == [P(2, 2)]

    @pytest.mark.parametrize("end", [P(7, 2), P(-3, 5), P(1, -6), P(-4, -4)])
    def test_point_count_and_connectivity(self, end: Position) -> None:
        points = line_points(P(0, 0), end)
        assert len(points) == max(abs(end.x), abs(end.y)) + 1
        assert points[0] == P(0, 0) and points[-1] == end
        for a, b in zip(points, points[1:]):
            assert max(abs(a.x - b.x), abs(a.y - b.y)) == 1


class TestRect:
    def test_outline_has_no_duplicates(self) -> None:
        points = rect_points(P(3, 2), P(0, 0))
        assert len(points) == len(set(points)) == 10
        assert P(1, 1) not in points

    def test_filled(self) -> None:
        assert len(rect_points(P(0, 0), P(3, 2), filled=True)) == 12

    def test_degenerate(self) -> None:
        assert rect_points(P(1, 1), P(1, 1)) == [P(1, 1)]
        assert rect_points(P(0, 0), P(0, 2)) == [P(0, 0), P(0, 2), P(0, 1)]


class TestEllipse:
    def test_outline_excludes_interior(self) -> None:
        outline = ellipse_points(P(0, 0), P(6, 6))
        filled = ellipse_points(P(0, 0), P(6, 6), filled=True)
        assert P(3, 3) not in outline
        assert P(3, 3) in filled
        assert P(3, 0) in outline
        assert P(0, 0) not in filled
        assert set(outline) < set(filled)

    def test_thin_ellipse_is_all_outline(self) -> None:
        a, b = P(0, 0), P(7, 1)
        assert ellipse_points(a, b) == ellipse_points(a, b, filled=True)
        assert len(ellipse_points(a, b)) > 0

    def test_single_cell(self) -> None:
        assert ellipse_points(P(4, 4), P(4, 4)) == [P(4, 4)]

    def test_corners_in_any_order(self) -> None:
        assert ellipse_points(P(6, 6), P(0, 0)) == ellipse_points(P(0, 0), P(6, 6))


class TestFloodFill:
    def test_fills_absent_region_bounded_by_wall(self) -> None:
        layer = Layer(5, 3)
        for y in range(3):
            layer.set_cell(2, y, cell('#'))
        region = flood_fill(layer, P(0, 0), cell('.'))
        assert set(region) == {P(x, y) for x in range(2) for y in range(3)}
        assert region[0] == P(0, 0)

    def test_matches_exact_triple(self) -> None:
        layer = Layer(3, 1)
        layer.set_cell(0, 0, Cell.of('a', 1, 0))
        layer.set_cell(1, 0, Cell.of('a', 2, 0))
        layer.set_cell(2, 0, Cell.of('a', 1, 0))
        assert flood_fill(layer, P(0, 0), cell('b')) == [P(0, 0)]

    def test_absent_matches_as_gray_space(self) -> None:
        layer = Layer(2, 1)
        layer.set_cell(1, 0, Cell.of(' ', 7, 0))
        assert set(flood_fill(layer, P(0, 0), cell('x'))) == {P(0, 0), P(1, 0)}

    def test_noop_when_seed_already_matches(self) -> None:
        layer = Layer(3, 3)
        layer.set_cell(1, 1, cell('x'))
        assert flood_fill(layer, P(1, 1), cell('x')) == []
        assert flood_fill(Layer(2, 2), P(0, 0), Cell.of(' ', 7, 0)) == []

    def test_out_of_bounds_seed(self) -> None:
        assert flood_fill(Layer(2, 2), P(5, 5), cell('x')) == []


class TestBoxGlyphs:
    def test_every_mask_round_trips(self) -> None:
        for style, table in ((BoxStyle.SINGLE, SINGLE), (BoxStyle.DOUBLE, DOUBLE)):
            assert len(table) == 11
            for mask, char in table.items():
                assert char_to_connections(char) == (mask, style)
                assert connections_to_char(mask, style) == char

    def test_single_direction_falls_back_to_straight(self) -> None:
        assert connections_to_char(N) == '│'
        assert connections_to_char(S) == '│'
        assert connections_to_char(E) == '─'
        assert connections_to_char(W, BoxStyle.DOUBLE) == '═'

    def test_unknown_char(self) -> None:
        assert char_to_connections('A') == (0, BoxStyle.SINGLE)
        assert char_to_connections(None) == (0, BoxStyle.SINGLE)

    def test_resolve_char_merges_same_style(self) -> None:
        assert resolve_char('│', E | W) == '┼'
        assert resolve_char('─', S | E) == '┬'
        assert resolve_char('┌', N | W) == '┼'

    def test_resolve_char_overwrites_other_style_and_plain_chars(self) -> None:
        assert resolve_char('║', E | W) == '─'
        assert resolve_char('│', E | W, BoxStyle.DOUBLE) == '═'
        assert resolve_char('X', N | S) == '│'
        assert resolve_char(None, S | E) == '┌'


class TestSmartPlans:
    def test_line_follows_dominant_axis(self) -> None:
        horizontal = smart_line_points(P(1, 1), P(4, 2))
        assert [p for p, _ in horizontal] == [P(x, 1) for x in range(1, 5)]
        assert all(mask == E | W for _, mask in horizontal)

        vertical = smart_line_points(P(1, 1), P(2, 5))
        assert [p for p, _ in vertical] == [P(1, y) for y in range(1, 6)]
        assert all(mask == N | S for _, mask in vertical)

    def test_box_corners(self) -> None:
        plan = dict(smart_box_points(P(3, 2), P(0, 0)))
        assert plan[P(0, 0)] == S | E
        assert plan[P(3, 0)] == S | W
        assert plan[P(0, 2)] == N | E
        assert plan[P(3, 2)] == N | W
        assert plan[P(1, 0)] == E | W
        assert plan[P(0, 1)] == N | S
        assert len(plan) == 10

    def test_degenerate_boxes(self) -> None:
        assert smart_box_points(P(1, 1), P(1, 1)) == [(P(1, 1), E | W)]
        assert all(mask == N | S for _, mask in smart_box_points(P(0, 0), P(0, 3)))
        assert all(mask == E | W for _, mask in smart_box_points(P(0, 0), P(3, 0)))


class TestNeighborWelding:
    def test_neighbor_pointing_back_is_picked_up(self) -> None:
        layer = Layer(5, 3)
        layer.set_cell(2, 0, cell('│'))
        assert neighbor_connections(layer, P(2, 1)) == N

    def test_neighbor_not_pointing_back_is_ignored(self) -> None:
        layer = Layer(5, 3)
        layer.set_cell(2, 0, cell('─'))
        layer.set_cell(1, 1, cell('│'))
        assert neighbor_connections(layer, P(2, 1)) == 0

    def test_other_style_neighbor_is_ignored(self) -> None:
        layer = Layer(5, 3)
        layer.set_cell(2, 0, cell('║'))
        assert neighbor_connections(layer, P(2, 1)) == 0
        assert neighbor_connections(layer, P(2, 1), BoxStyle.DOUBLE) == N

    def test_line_welds_onto_existing_vertical(self) -> None:
        layer = Layer(5, 3)
        layer.set_cell(2, 0, cell('│'))
        resolved = dict(resolve_points(layer, smart_line_points(P(0, 1), P(4, 1))))
        assert resolved[P(2, 1)] == '┴'
        assert resolved[P(1, 1)] == '─'

    def test_line_crossing_existing_line(self) -> None:
        layer = Layer(5, 3)
        for y in range(3):
            layer.set_cell(2, y, cell('│'))
        resolved = dict(resolve_points(layer, smart_line_points(P(0, 1), P(4, 1))))
        assert resolved[P(2, 1)] == '┼'

    def test_out_of_bounds_points_dropped(self) -> None:
        layer = Layer(3, 3)
        resolved = resolve_points(layer, smart_line_points(P(1, 1), P(6, 1)))
        assert [p for p, _ in resolved] == [P(1, 1), P(2, 1)]


class TestJustify:
    def make_layer(self) -> Layer:
        layer = Layer(8, 3)
        layer.set_cell(1, 0, cell('a'))
        layer.set_cell(3, 0, cell('b'))
        return layer

    def apply(self, layer: Layer, changes) -> None:
        for change in changes:
            layer.force_set_cell(change.x, change.y, change.new_cell)

    def row(self, layer: Layer, y: int = 0) -> str:
        return ''.join(c.char if c else '.' for c in layer.cells[y])

    def test_right(self) -> None:
        layer = self.make_layer()
        self.apply(layer, justify_horizontal(layer, ExportRegion(0, 0, 7, 0), "right"))
        assert self.row(layer) == ".....a.b"

    def test_center(self) -> None:
        layer = self.make_layer()
        self.apply(layer, justify_horizontal(layer, ExportRegion(0, 0, 7, 0), "center"))
        assert self.row(layer) == "..a.b..."

    def test_left_only_returns_changed_cells(self) -> None:
        layer = self.make_layer()
        changes = justify_horizontal(layer, ExportRegion(0, 0, 7, 0), "left")
        assert {(c.x, c.y) for c in changes} == {(0, 0), (1, 0), (2, 0), (3, 0)}
        self.apply(layer, changes)
        assert self.row(layer) == "a.b....."

    def test_already_aligned_is_empty(self) -> None:
        layer = self.make_layer()
        assert justify_horizontal(layer, ExportRegion(1, 0, 3, 0), "left") == []

    def test_vertical_bottom(self) -> None:
        layer = self.make_layer()
        self.apply(layer, justify_vertical(layer, ExportRegion(0, 0, 7, 2), "bottom"))
        assert self.row(layer, 0) == "........"
        assert self.row(layer, 2) == ".a.b...."

    def test_vertical_without_content(self) -> None:
        assert justify_vertical(Layer(3, 3), ExportRegion(0, 0, 2, 2), "top") == []


class TestReplaceColors:
    def make_layer(self) -> Layer:
        layer = Layer(4, 2)
        layer.set_cell(0, 0, Cell.of('a', 4, 0))
        layer.set_cell(1, 0, Cell.of('b', 4, TRANSPARENT))
        layer.set_cell(2, 0, Cell.of('c', 2, 4))
        layer.set_cell(0, 1, Cell.of('d', TRANSPARENT, 1))
        return layer

    def test_foreground(self) -> None:
        layer = self.make_layer()
        changes = replace_colors(layer, ExportRegion(0, 0, 3, 1), "fg", 4, 12)
        assert [(c.x, c.y) for c in changes] == [(0, 0), (1, 0)]
        assert changes[0].old_cell.triple == ('a', 4, 0)
        assert changes[0].new_cell.triple == ('a', 12, 0)
        assert changes[1].new_cell.triple == ('b', 12, TRANSPARENT)

    def test_background_leaves_foreground_alone(self) -> None:
        layer = self.make_layer()
        changes = replace_colors(layer, ExportRegion(0, 0, 3, 1), "bg", 4, 6)
        assert [c.new_cell.triple for c in changes] == [('c', 2, 6)]

    def test_transparent_as_source(self) -> None:
        layer = self.make_layer()
        changes = replace_colors(layer, ExportRegion(0, 0, 3, 1), "fg", TRANSPARENT, 7)
        assert [c.new_cell.triple for c in changes] == [('d', 7, 1)]

    def test_transparent_as_target(self) -> None:
        layer = self.make_layer()
        changes = replace_colors(layer, ExportRegion(0, 0, 3, 1), "bg", 0, TRANSPARENT)
        assert [c.new_cell.triple for c in changes] == [('a', 4, TRANSPARENT)]

    def test_absent_cells_and_bounds(self) -> None:
        layer = self.make_layer()
        assert replace_colors(layer, ExportRegion(3, 0, 3, 1), "fg", 15, 1) == []
        changes = replace_colors(layer, ExportRegion(1, 0, 2, 0), "fg", 4, 9)
        assert [(c.x, c.y) for c in changes] == [(1, 0)]

    def test_same_colour_is_noop(self) -> None:
        assert replace_colors(self.make_layer(), ExportRegion(0, 0, 3, 1), "fg", 4, 4) == []
