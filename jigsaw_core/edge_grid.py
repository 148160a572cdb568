"""Edge grid generation for puzzle layouts.

This module partitions an image into a regular grid of pieces and generates
the interlocking edges between them. Each interior edge gets exactly one Cut
in the cut arena, shared by the two Joints that face each other across it.
"""

import logging
import math
import random
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Tuple

from .config import Settings, settings
from .joints import Joint, PieceJoints, create_joint_pair
from .models import Cut, ImageInfo, Position

logger = logging.getLogger(__name__)


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def calculate_grid_dimensions(
    image_width: float,
    image_height: float,
    target_pieces: int,
) -> Tuple[int, int]:
    """Calculate grid dimensions whose pieces follow the image aspect ratio.

    With cols / rows = aspect and rows * cols = N, rows = sqrt(N / aspect).
    The result may not multiply out to exactly the target.

    Args:
        image_width: Width of the source image in pixels.
        image_height: Height of the source image in pixels.
        target_pieces: Target number of pieces (must be positive).

    Returns:
        Tuple of (rows, cols), each at least 1.
    """
    if image_width <= 0 or image_height <= 0:
        raise ValueError(f"Image dimensions must be positive, got {image_width}x{image_height}")
    if target_pieces <= 0:
        raise ValueError(f"Target piece count must be positive, got {target_pieces}")

    aspect_ratio = image_width / image_height
    rows = max(1, _round_half_up(math.sqrt(target_pieces / aspect_ratio)))
    cols = max(1, _round_half_up(target_pieces / rows))
    return rows, cols


@dataclass
class GridLayout:
    """Resolved grid of a puzzle.

    Attributes:
        rows: Number of piece rows.
        cols: Number of piece columns.
        piece_width: Width of each piece in world units.
        piece_height: Height of each piece in world units.
        requested_piece_count: The piece count that was asked for.
    """

    rows: int
    cols: int
    piece_width: float
    piece_height: float
    requested_piece_count: int

    @property
    def actual_piece_count(self) -> int:
        """Number of pieces the grid actually holds."""
        return self.rows * self.cols

    def piece_id(self, row: int, col: int) -> int:
        """Get the ID of the piece at a grid cell."""
        return row * self.cols + col

    def cell_of(self, piece_id: int) -> Tuple[int, int]:
        """Get the (row, col) grid cell of a piece."""
        return divmod(piece_id, self.cols)

    def origination(self, piece_id: int) -> Position:
        """Get the top-left corner of a piece's correct slot in world units."""
        row, col = self.cell_of(piece_id)
        return Position(col * self.piece_width, row * self.piece_height)


def plan_grid(
    image: ImageInfo,
    piece_count: Optional[int] = None,
    config: Optional[Settings] = None,
) -> GridLayout:
    """Resolve the grid layout for an image and a requested piece count.

    A missing or non-positive piece count is replaced by the configured
    default. A count that does not fit a regular grid is accepted as the
    nearest grid and the difference is logged.

    Args:
        image: The source image.
        piece_count: Requested number of pieces.
        config: Settings to read defaults from.

    Returns:
        The resolved GridLayout.
    """
    config = config or settings

    if piece_count is None or piece_count <= 0:
        logger.warning(
            "Invalid piece count %s, using default of %d",
            piece_count,
            config.DEFAULT_PIECE_COUNT,
        )
        piece_count = config.DEFAULT_PIECE_COUNT

    rows, cols = calculate_grid_dimensions(image.width, image.height, piece_count)
    layout = GridLayout(
        rows=rows,
        cols=cols,
        piece_width=image.width / cols,
        piece_height=image.height / rows,
        requested_piece_count=piece_count,
    )

    if layout.actual_piece_count != piece_count:
        logger.warning(
            "Requested %d pieces, but using %d (%dx%d) for a regular grid",
            piece_count,
            layout.actual_piece_count,
            rows,
            cols,
        )
    return layout


@dataclass
class EdgeGrid:
    """Shared edges of a puzzle.

    Attributes:
        layout: The grid the edges belong to.
        cuts: The cut arena; joints refer to cuts by index.
        joints: The four joints of each piece, keyed by piece ID.
    """

    layout: GridLayout
    cuts: List[Cut] = field(default_factory=list)
    joints: Dict[int, PieceJoints] = field(default_factory=dict)


def generate_edge_grid(
    layout: GridLayout,
    rng: Optional[random.Random] = None,
    seed: Optional[int] = None,
    waves_per_cut: int = 3,
) -> EdgeGrid:
    """Generate all shared edges for a puzzle grid.

    There are (rows - 1) * cols horizontal shared edges and rows * (cols - 1)
    vertical ones. Each gets a fresh Cut and a complementary pair of joints.
    Perimeter edges get no joint and stay straight.

    Args:
        layout: The grid to generate edges for.
        rng: Random source. Takes precedence over seed.
        seed: Optional random seed for reproducibility when no rng is given.
        waves_per_cut: Number of waves summed in each cut.

    Returns:
        An EdgeGrid holding the cut arena and every piece's joints.
    """
    if rng is None:
        rng = random.Random(seed)

    grid = EdgeGrid(layout=layout)
    for piece_id in range(layout.actual_piece_count):
        grid.joints[piece_id] = PieceJoints()

    def add_shared_edge(piece_a: int, piece_b: int, vertical: bool) -> None:
        cut_index = len(grid.cuts)
        grid.cuts.append(Cut.random(rng, num_waves=waves_per_cut))
        if vertical:
            # piece_a is left of piece_b
            side_a, side_b = create_joint_pair(piece_a, piece_b, "right", "left", cut_index, rng)
        else:
            # piece_a is above piece_b
            side_a, side_b = create_joint_pair(piece_a, piece_b, "bottom", "top", cut_index, rng)
        grid.joints[piece_a].set_joint(side_a.owner_edge, side_a)
        grid.joints[piece_b].set_joint(side_b.owner_edge, side_b)

    # Horizontal grid lines: between row r and r + 1
    for r in range(layout.rows - 1):
        for c in range(layout.cols):
            add_shared_edge(layout.piece_id(r, c), layout.piece_id(r + 1, c), vertical=False)

    # Vertical grid lines: between col c and c + 1
    for r in range(layout.rows):
        for c in range(layout.cols - 1):
            add_shared_edge(layout.piece_id(r, c), layout.piece_id(r, c + 1), vertical=True)

    logger.debug("Generated %d cuts for a %dx%d grid", len(grid.cuts), layout.rows, layout.cols)
    return grid


def iter_shared_edges(edge_grid: EdgeGrid) -> Iterator[Tuple[Joint, Joint]]:
    """Yield both sides of every shared edge, once per edge.

    Pairs are yielded from the bottom and right joints of each piece, so the
    first joint is always the upper or left piece's side.
    """
    for _piece_id, joints in sorted(edge_grid.joints.items()):
        for joint in (joints.bottom, joints.right):
            if joint is None:
                continue
            neighbor = edge_grid.joints[joint.neighbor_piece_id].get_joint(joint.neighbor_edge)
            if neighbor is None:
                logger.warning("Joint %s has no matching joint on piece %d", joint.id, joint.neighbor_piece_id)
                continue
            yield joint, neighbor
