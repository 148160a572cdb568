"""Puzzle piece state: placement, rotation, snapping and selection."""

import logging
from typing import Optional, Sequence

from .geometry import PiecePath, generate_piece_polygon
from .joints import PieceJoints
from .models import Cut, Position
from .views import PieceView, Point

logger = logging.getLogger(__name__)


class Piece:
    """A single puzzle piece.

    The piece's topology (origination, size, joints and outline) is fixed at
    construction. Only placement, rotation and the snapped/selected flags
    change during interaction. Rotation is stored in clockwise quarter turns.
    """

    def __init__(
        self,
        piece_id: int,
        origination: Position,
        width: float,
        height: float,
        joints: PieceJoints,
        cuts: Sequence[Cut],
        placement: Optional[Position] = None,
        rotation: int = 0,
        samples_per_edge: int = 20,
    ):
        """Initialize the piece and build its outline.

        Args:
            piece_id: Unique identifier (the grid index).
            origination: Top-left corner of the piece's correct slot in world units.
            width: Width of the piece in world units.
            height: Height of the piece in world units.
            joints: The piece's four joints.
            cuts: The cut arena the joints index into.
            placement: Initial top-left position; defaults to the origination.
            rotation: Initial rotation in quarter turns.
            samples_per_edge: Samples per jointed edge of the outline.
        """
        self.id = piece_id
        self._origination = origination
        self.width = width
        self.height = height
        self.joints = joints

        self.placement = placement if placement is not None else origination
        self.rotation = rotation % 4
        self.is_snapped = False
        self.is_selected = False

        self._outline = generate_piece_polygon(width, height, joints, cuts, samples_per_edge)
        self._path_data = self._outline.to_svg()

    @property
    def origination(self) -> Position:
        """Top-left corner of the correct slot."""
        return self._origination

    @property
    def image_origin(self) -> Position:
        """Offset of the image region that shows through this piece."""
        return self._origination

    @property
    def outline(self) -> PiecePath:
        """Closed outline in the piece's local frame."""
        return self._outline

    @property
    def path_data(self) -> str:
        """SVG path data of the outline."""
        return self._path_data

    @property
    def size(self) -> Position:
        return Position(self.width, self.height)

    @property
    def center(self) -> Position:
        """Current centre of the piece in world units."""
        return self.placement.add(self.size.scale(0.5))

    @property
    def correct_center(self) -> Position:
        """Centre of the piece's correct slot."""
        return self._origination.add(self.size.scale(0.5))

    @property
    def rotation_degrees(self) -> int:
        return self.rotation * 90

    def place(self, position: Position) -> None:
        """Move the piece. Snapping is not evaluated."""
        self.placement = position

    def rotate(self, turns: int) -> int:
        """Rotate by quarter turns (positive is clockwise) and return the new rotation."""
        self.rotation = (self.rotation + turns) % 4
        return self.rotation

    def can_snap(self, threshold: float) -> bool:
        """Check if the piece is unrotated and its centre is within threshold of the correct centre."""
        if self.rotation != 0:
            return False
        return self.center.distance_to(self.correct_center) <= threshold

    def snap(self, threshold: float) -> bool:
        """Snap the piece into its slot if it is close enough.

        Returns:
            True if the piece snapped. Otherwise the piece is left where it
            is and marked as not snapped.
        """
        if not self.can_snap(threshold):
            self.is_snapped = False
            return False

        self.placement = self._origination
        self.rotation = 0
        if not self.is_snapped:
            logger.info("Piece %d snapped into place", self.id)
        self.is_snapped = True
        return True

    def test(self) -> bool:
        """Check if the piece sits exactly in its slot, ignoring any threshold."""
        return self.rotation == 0 and self.placement == self._origination

    def select(self) -> None:
        self.is_selected = True

    def deselect(self) -> None:
        self.is_selected = False

    def to_view(self) -> PieceView:
        """Build the render-facing view of this piece."""
        return PieceView(
            id=self.id,
            width=self.width,
            height=self.height,
            placement=Point(x=self.placement.x, y=self.placement.y),
            rotation=self.rotation,
            path_data=self._path_data,
            image_origin=Point(x=self._origination.x, y=self._origination.y),
            is_selected=self.is_selected,
            is_snapped=self.is_snapped,
        )

    def __repr__(self) -> str:
        return (
            f"Piece(id={self.id}, placement={self.placement}, rotation={self.rotation}, "
            f"snapped={self.is_snapped}, selected={self.is_selected})"
        )
