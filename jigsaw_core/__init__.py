"""Jigsaw core - puzzle generation, piece geometry and interaction state.

This package partitions an image into a grid of interlocking pieces,
builds each piece's outline from shared wavy cuts, and tracks piece
placement, snapping, selection and the pannable, zoomable view.
"""

from .config import Settings, get_settings, settings
from .controller import DragSession, PuzzleController
from .edge_grid import (
    EdgeGrid,
    GridLayout,
    calculate_grid_dimensions,
    generate_edge_grid,
    iter_shared_edges,
    plan_grid,
)
from .geometry import (
    PiecePath,
    Vertex,
    edge_profile,
    generate_piece_path,
    generate_piece_polygon,
    nib_profile,
    sample_edge,
)
from .joints import (
    EDGE_ORDER,
    MAX_NIB_SIZE,
    MIN_NIB_SIZE,
    EdgeName,
    Joint,
    PieceJoints,
    create_joint_pair,
    opposite_edge,
)
from .models import (
    MAX_AMPLITUDE,
    MAX_PERIOD,
    MIN_AMPLITUDE,
    MIN_PERIOD,
    ORIGIN,
    Cut,
    ImageInfo,
    Position,
    Wave,
)
from .piece import Piece
from .puzzle import Puzzle, create_puzzle
from .viewport import Viewport
from .views import PieceView, Point, PuzzleView, diff_views, snapshot

__all__ = [
    # Config
    "Settings",
    "get_settings",
    "settings",
    # Models
    "MIN_AMPLITUDE",
    "MAX_AMPLITUDE",
    "MIN_PERIOD",
    "MAX_PERIOD",
    "ORIGIN",
    "Position",
    "ImageInfo",
    "Wave",
    "Cut",
    # Joints
    "MIN_NIB_SIZE",
    "MAX_NIB_SIZE",
    "EDGE_ORDER",
    "EdgeName",
    "Joint",
    "PieceJoints",
    "create_joint_pair",
    "opposite_edge",
    # Edge grid
    "GridLayout",
    "EdgeGrid",
    "calculate_grid_dimensions",
    "plan_grid",
    "generate_edge_grid",
    "iter_shared_edges",
    # Geometry
    "PiecePath",
    "Vertex",
    "nib_profile",
    "edge_profile",
    "sample_edge",
    "generate_piece_polygon",
    "generate_piece_path",
    # Pieces and puzzle
    "Piece",
    "Puzzle",
    "create_puzzle",
    # Viewport and interaction
    "Viewport",
    "DragSession",
    "PuzzleController",
    # Views
    "Point",
    "PieceView",
    "PuzzleView",
    "snapshot",
    "diff_views",
]
