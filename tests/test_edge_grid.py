"""Tests for grid planning and shared edge generation."""

import logging
import random

import pytest

from jigsaw_core.config import Settings
from jigsaw_core.edge_grid import (
    GridLayout,
    calculate_grid_dimensions,
    generate_edge_grid,
    iter_shared_edges,
    plan_grid,
)
from jigsaw_core.joints import opposite_edge
from jigsaw_core.models import ImageInfo, Position


class TestGridDimensions:
    """Tests for choosing rows and columns."""

    @pytest.mark.parametrize(
        "width,height,target,expected",
        [
            (1200, 800, 12, (3, 4)),
            (400, 300, 12, (3, 4)),
            (800, 1200, 12, (4, 3)),
            (100, 100, 16, (4, 4)),
            (100, 100, 1, (1, 1)),
            (1000, 100, 1, (1, 1)),
        ],
    )
    def test_dimensions(self, width: float, height: float, target: int, expected: tuple) -> None:
        assert calculate_grid_dimensions(width, height, target) == expected

    def test_rounds_half_up(self) -> None:
        # sqrt(25 / 4) is exactly 2.5
        assert calculate_grid_dimensions(400, 100, 25) == (3, 8)

    @pytest.mark.parametrize("width,height,target", [(0, 100, 10), (100, -1, 10), (100, 100, 0)])
    def test_rejects_invalid_input(self, width: float, height: float, target: int) -> None:
        with pytest.raises(ValueError):
            calculate_grid_dimensions(width, height, target)


class TestPlanGrid:
    """Tests for resolving the grid layout."""

    def test_landscape_layout(self) -> None:
        layout = plan_grid(ImageInfo(url="a.png", width=1200, height=800), 12)
        assert (layout.rows, layout.cols) == (3, 4)
        assert layout.piece_width == pytest.approx(300.0)
        assert layout.piece_height == pytest.approx(266.6667, rel=1e-4)
        assert layout.actual_piece_count == 12

    @pytest.mark.parametrize("piece_count", [None, 0, -3])
    def test_substitutes_default_count(self, piece_count: int, caplog: pytest.LogCaptureFixture) -> None:
        config = Settings(DEFAULT_PIECE_COUNT=4)
        with caplog.at_level(logging.WARNING):
            layout = plan_grid(ImageInfo(url="a.png", width=100, height=100), piece_count, config)
        assert layout.requested_piece_count == 4
        assert (layout.rows, layout.cols) == (2, 2)
        assert "using default of 4" in caplog.text

    def test_reports_unrepresentable_count(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING):
            layout = plan_grid(ImageInfo(url="a.png", width=400, height=100), 25)
        assert layout.actual_piece_count == 24
        assert layout.requested_piece_count == 25
        assert "Requested 25 pieces, but using 24" in caplog.text


class TestGridLayout:
    """Tests for grid addressing."""

    def test_ids_and_cells(self) -> None:
        layout = GridLayout(rows=3, cols=4, piece_width=100.0, piece_height=50.0, requested_piece_count=12)
        assert layout.piece_id(0, 0) == 0
        assert layout.piece_id(2, 3) == 11
        assert layout.cell_of(6) == (1, 2)
        assert layout.origination(6) == Position(200.0, 50.0)


class TestEdgeGeneration:
    """Tests for generated cuts and joints."""

    @pytest.fixture
    def layout(self) -> GridLayout:
        return GridLayout(rows=3, cols=4, piece_width=100.0, piece_height=100.0, requested_piece_count=12)

    def test_one_cut_per_shared_edge(self, layout: GridLayout) -> None:
        grid = generate_edge_grid(layout, seed=1)
        # (rows - 1) * cols horizontal plus rows * (cols - 1) vertical
        assert len(grid.cuts) == 2 * 4 + 3 * 3
        assert all(len(cut.components) == 3 for cut in grid.cuts)

    def test_waves_per_cut(self, layout: GridLayout) -> None:
        grid = generate_edge_grid(layout, seed=1, waves_per_cut=5)
        assert all(len(cut.components) == 5 for cut in grid.cuts)

    @pytest.mark.parametrize("seed", [42, 123, 456])
    def test_shared_edges_are_complementary(self, layout: GridLayout, seed: int) -> None:
        grid = generate_edge_grid(layout, seed=seed)
        pairs = list(iter_shared_edges(grid))

        assert len(pairs) == len(grid.cuts)
        assert sorted(a.cut_index for a, _b in pairs) == list(range(len(grid.cuts)))
        for side_a, side_b in pairs:
            assert side_a.cut_index == side_b.cut_index
            assert side_a.outward != side_b.outward
            assert side_a.nib_size_ratio == side_b.nib_size_ratio
            assert side_b.owner_edge == opposite_edge(side_a.owner_edge)
            assert side_a.neighbor_piece_id == side_b.owner_piece_id

    def test_perimeter_edges_are_straight(self, layout: GridLayout) -> None:
        grid = generate_edge_grid(layout, seed=1)
        for col in range(layout.cols):
            assert grid.joints[layout.piece_id(0, col)].top is None
            assert grid.joints[layout.piece_id(layout.rows - 1, col)].bottom is None
        for row in range(layout.rows):
            assert grid.joints[layout.piece_id(row, 0)].left is None
            assert grid.joints[layout.piece_id(row, layout.cols - 1)].right is None

    def test_joint_counts(self, layout: GridLayout) -> None:
        grid = generate_edge_grid(layout, seed=1)
        assert grid.joints[0].count == 2  # corner
        assert grid.joints[1].count == 3  # top border
        assert grid.joints[5].count == 4  # interior

    def test_single_piece_has_no_edges(self) -> None:
        layout = GridLayout(rows=1, cols=1, piece_width=10.0, piece_height=10.0, requested_piece_count=1)
        grid = generate_edge_grid(layout, seed=1)
        assert grid.cuts == []
        assert grid.joints[0].count == 0

    def test_seed_is_reproducible(self, layout: GridLayout) -> None:
        first = generate_edge_grid(layout, seed=99)
        second = generate_edge_grid(layout, rng=random.Random(99))
        assert first.cuts == second.cuts
        assert first.joints == second.joints

    def test_different_seeds_differ(self, layout: GridLayout) -> None:
        assert generate_edge_grid(layout, seed=1).cuts != generate_edge_grid(layout, seed=2).cuts
