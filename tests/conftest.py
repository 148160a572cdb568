"""Shared fixtures for the jigsaw_core test suite."""

import random

import pytest

from jigsaw_core.edge_grid import generate_edge_grid, plan_grid
from jigsaw_core.models import ImageInfo
from jigsaw_core.puzzle import Puzzle


@pytest.fixture
def image() -> ImageInfo:
    """A 400x300 image, which splits into a 3x4 grid of 100x100 pieces for 12 pieces."""
    return ImageInfo(url="https://example.test/landscape.jpg", width=400, height=300)


@pytest.fixture
def assembled_puzzle(image: ImageInfo) -> Puzzle:
    """A 3x4 puzzle with every piece still sitting in its slot."""
    layout = plan_grid(image, 12)
    edge_grid = generate_edge_grid(layout, rng=random.Random(7))
    return Puzzle(image, edge_grid)
