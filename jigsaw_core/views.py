"""Render-facing models for puzzle state.

Renderers consume these snapshots instead of reading piece objects
directly. Comparing two snapshots gives the minimal set of changes to
apply to the display.
"""

from typing import TYPE_CHECKING, Any, Dict, List

from pydantic import BaseModel, Field

if TYPE_CHECKING:
    from .puzzle import Puzzle


class Point(BaseModel):
    """Model representing a position in world coordinates."""

    x: float
    y: float


class PieceView(BaseModel):
    """Everything a renderer needs to draw one piece."""

    id: int
    width: float
    height: float
    placement: Point
    rotation: int = Field(..., ge=0, le=3, description="Clockwise quarter turns; multiply by 90 for degrees")
    path_data: str = Field(..., description="Closed outline in the piece's local frame")
    image_origin: Point = Field(..., description="Offset of the image region shown through the piece")
    is_selected: bool = False
    is_snapped: bool = False


class PuzzleView(BaseModel):
    """Grid and board information for background rendering and view centering."""

    rows: int
    cols: int
    piece_width: float
    piece_height: float
    board_minimum: Point
    board_maximum: Point
    pieces: List[PieceView] = Field(default_factory=list)


def snapshot(puzzle: "Puzzle") -> Dict[int, PieceView]:
    """Capture the current view of every piece, keyed by piece ID."""
    return {piece.id: piece.to_view() for piece in puzzle.all_pieces()}


def diff_views(
    before: Dict[int, PieceView],
    after: Dict[int, PieceView],
) -> Dict[int, Dict[str, Any]]:
    """Compute what changed between two snapshots.

    Args:
        before: Snapshot taken before a command.
        after: Snapshot taken after a command.

    Returns:
        Changed fields per piece ID, with their new values. Pieces that are
        new in `after` report every field; pieces missing from `after` are
        ignored.
    """
    changes: Dict[int, Dict[str, Any]] = {}
    for piece_id, view in after.items():
        current = view.model_dump()
        previous = before.get(piece_id)
        if previous is None:
            changes[piece_id] = current
            continue

        old = previous.model_dump()
        changed = {key: value for key, value in current.items() if old.get(key) != value}
        if changed:
            changes[piece_id] = changed
    return changes
