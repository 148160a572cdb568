"""Command handling for interactive puzzle play.

The controller receives abstract commands from an input layer (select,
move, release, rotate, pan, zoom, set view) and applies them to the puzzle
and viewport. Commands run one at a time to completion. Commands that refer
to unknown or non-selected pieces are ignored and logged.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from .config import Settings, settings
from .models import Position
from .piece import Piece
from .puzzle import Puzzle
from .viewport import Viewport

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DragSession:
    """An in-progress drag.

    Attributes:
        piece_id: The piece being dragged.
        grab_offset: World-space offset from the piece's placement to the pointer at grab time.
    """

    piece_id: int
    grab_offset: Position


class PuzzleController:
    """Applies input commands to a puzzle and its viewport."""

    def __init__(
        self,
        puzzle: Puzzle,
        viewport: Optional[Viewport] = None,
        config: Optional[Settings] = None,
    ):
        """Initialize the controller and centre the view on the board.

        Args:
            puzzle: The puzzle to control.
            viewport: Viewport to use; one is created from the settings if omitted.
            config: Settings; defaults to the module settings.
        """
        self.config = config or settings
        self.puzzle = puzzle
        self.viewport = viewport or Viewport(
            self.config.DEFAULT_HOST_WIDTH,
            self.config.DEFAULT_HOST_HEIGHT,
            min_zoom=self.config.MIN_ZOOM,
            max_zoom=self.config.MAX_ZOOM,
        )
        self.drag: Optional[DragSession] = None
        self._solved_reported = False

        self.reset_view()
        self._check_solved()

    @property
    def selected_piece_id(self) -> Optional[int]:
        return self.puzzle.selected_piece_id

    @property
    def solved(self) -> bool:
        return self.puzzle.is_solved()

    def default_snap_threshold(self, piece: Piece) -> float:
        """Snap threshold in world units used when a command gives none."""
        return piece.width * self.config.SNAP_THRESHOLD_RATIO

    def reset_view(self) -> None:
        """Centre the viewport on the board at zoom level 1, clamped to the viewport limits."""
        self.viewport.set_view(self.viewport.view_box_x, self.viewport.view_box_y, 1.0)
        self.viewport.center_on(self.puzzle.board_center)

    def select(self, piece_id: Optional[int], pointer_world_hint: Optional[Position] = None) -> bool:
        """Select a piece, or clear the selection with None.

        With a pointer hint (world coordinates), a drag session starts,
        remembering where on the piece it was grabbed.

        Returns:
            True if a piece is selected afterwards.
        """
        if piece_id is None:
            if self.puzzle.selected_piece_id is not None:
                logger.debug("Piece %d deselected", self.puzzle.selected_piece_id)
            self.puzzle.select(None)
            self.drag = None
            return False

        piece = self.puzzle.select(piece_id)
        if piece is None:
            self.drag = None
            return False

        if pointer_world_hint is not None:
            self.drag = DragSession(piece.id, pointer_world_hint.subtract(piece.placement))
            logger.debug("Piece %d grabbed at offset %s", piece.id, self.drag.grab_offset)
        elif self.drag is not None and self.drag.piece_id != piece.id:
            self.drag = None
        return True

    def _active_piece(self, piece_id: int, command: str) -> Optional[Piece]:
        if self.drag is None or self.drag.piece_id != piece_id:
            logger.debug("Ignoring %s for piece %s without an active drag", command, piece_id)
            return None
        piece = self.puzzle.get_piece(piece_id)
        if piece is None or self.puzzle.selected_piece_id != piece_id:
            logger.warning("Ignoring %s for unknown or non-selected piece %s", command, piece_id)
            self.drag = None
            return None
        return piece

    def move(self, piece_id: int, pointer_screen_x: float, pointer_screen_y: float) -> bool:
        """Drag the grabbed piece so the grab point follows the pointer.

        Returns:
            True if the piece moved.
        """
        piece = self._active_piece(piece_id, "move")
        if piece is None or self.drag is None:
            return False

        pointer = self.viewport.to_world_coordinates(pointer_screen_x, pointer_screen_y)
        placement = pointer.subtract(self.drag.grab_offset)
        if placement == piece.placement:
            return False
        piece.place(placement)
        return True

    def release_and_snap(self, piece_id: int, snap_threshold: Optional[float] = None) -> bool:
        """End the drag of a piece and snap it if it is close to its slot.

        A snapped piece is deselected.

        Args:
            piece_id: The piece being released.
            snap_threshold: Snap distance in world units; defaults to a fraction of the piece width.

        Returns:
            True if the piece snapped.
        """
        piece = self._active_piece(piece_id, "release")
        if piece is None:
            return False
        self.drag = None

        threshold = self.default_snap_threshold(piece) if snap_threshold is None else snap_threshold
        snapped = piece.snap(threshold)
        self._after_snap(piece, snapped)
        return snapped

    def rotate(self, piece_id: int, quarter_turns: int) -> bool:
        """Rotate the selected piece, then re-check whether it snaps.

        Returns:
            True if the piece was rotated.
        """
        piece = self.puzzle.get_piece(piece_id)
        if piece is None or self.puzzle.selected_piece_id != piece_id:
            logger.warning("Ignoring rotate for unknown or non-selected piece %s", piece_id)
            return False

        piece.rotate(quarter_turns)
        snapped = piece.snap(self.default_snap_threshold(piece))
        self._after_snap(piece, snapped)
        return True

    def _after_snap(self, piece: Piece, snapped: bool) -> None:
        if snapped and self.puzzle.selected_piece_id == piece.id:
            self.puzzle.select(None)
            if self.drag is not None and self.drag.piece_id == piece.id:
                self.drag = None
        self._check_solved()

    def _check_solved(self) -> None:
        solved = self.puzzle.is_solved()
        if solved and not self._solved_reported:
            logger.info("Puzzle solved: all %d pieces in place", len(self.puzzle.pieces))
        self._solved_reported = solved

    def pan(self, dx: float, dy: float) -> None:
        """Pan the view by a screen-space delta."""
        self.viewport.pan(dx, dy)

    def zoom(
        self,
        factor: float,
        pointer_screen_x: Optional[float] = None,
        pointer_screen_y: Optional[float] = None,
    ) -> bool:
        """Zoom the view around a screen point (host centre by default)."""
        return self.viewport.zoom(factor, pointer_screen_x, pointer_screen_y)

    def set_view(self, x: float, y: float, zoom_level: float) -> None:
        """Set the view box origin and zoom level directly."""
        self.viewport.set_view(x, y, zoom_level)
