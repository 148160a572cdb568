"""Puzzle aggregate: owns the grid, the cut arena and every piece."""

import logging
import random
from typing import Dict, List, Optional

from .config import Settings, settings
from .edge_grid import EdgeGrid, GridLayout, generate_edge_grid, plan_grid
from .models import Cut, ImageInfo, Position
from .piece import Piece
from .views import Point, PuzzleView

logger = logging.getLogger(__name__)


class Puzzle:
    """All pieces of one puzzle configuration plus its board bounds.

    The topology is fixed once built. A new image or piece count means a new
    Puzzle.
    """

    def __init__(
        self,
        image: ImageInfo,
        edge_grid: EdgeGrid,
        scatter_factor: float = 2.0,
        samples_per_edge: int = 20,
    ):
        """Initialize the puzzle from a generated edge grid.

        Pieces start in their correct slots; call `scatter` to shuffle them.

        Args:
            image: The source image.
            edge_grid: Generated layout, cut arena and joints.
            scatter_factor: Size of the scatter area relative to the image.
            samples_per_edge: Samples per jointed edge of each outline.
        """
        self.image = image
        self.layout: GridLayout = edge_grid.layout
        self.cuts: List[Cut] = edge_grid.cuts
        self.selected_piece_id: Optional[int] = None

        scatter_width = image.width * scatter_factor
        scatter_height = image.height * scatter_factor
        # Scatter area is centred on the assembled image
        self.board_minimum = Position((image.width - scatter_width) / 2, (image.height - scatter_height) / 2)
        self.board_maximum = self.board_minimum.add(Position(scatter_width, scatter_height))

        self.pieces: Dict[int, Piece] = {}
        for piece_id in range(self.layout.actual_piece_count):
            self.pieces[piece_id] = Piece(
                piece_id,
                origination=self.layout.origination(piece_id),
                width=self.layout.piece_width,
                height=self.layout.piece_height,
                joints=edge_grid.joints[piece_id],
                cuts=self.cuts,
                samples_per_edge=samples_per_edge,
            )

    @property
    def rows(self) -> int:
        return self.layout.rows

    @property
    def cols(self) -> int:
        return self.layout.cols

    @property
    def piece_width(self) -> float:
        return self.layout.piece_width

    @property
    def piece_height(self) -> float:
        return self.layout.piece_height

    @property
    def board_center(self) -> Position:
        """Centre of the scatter area."""
        return self.board_minimum.add(self.board_maximum).scale(0.5)

    def get_piece(self, piece_id: Optional[int]) -> Optional[Piece]:
        """Look up a piece by ID, returning None if it does not exist."""
        if piece_id is None:
            return None
        return self.pieces.get(piece_id)

    def all_pieces(self) -> List[Piece]:
        """All pieces in ID order."""
        return [self.pieces[piece_id] for piece_id in sorted(self.pieces)]

    @property
    def selected_piece(self) -> Optional[Piece]:
        return self.get_piece(self.selected_piece_id)

    def select(self, piece_id: Optional[int]) -> Optional[Piece]:
        """Select a piece, clearing any previous selection first.

        Args:
            piece_id: Piece to select, or None to clear the selection.

        Returns:
            The selected piece, or None if nothing is selected afterwards.
        """
        previous = self.selected_piece
        if previous is not None and previous.id != piece_id:
            previous.deselect()
        self.selected_piece_id = None

        piece = self.get_piece(piece_id)
        if piece is None:
            if piece_id is not None:
                logger.warning("Cannot select unknown piece %s", piece_id)
            return None

        piece.select()
        self.selected_piece_id = piece.id
        return piece

    @property
    def snapped_count(self) -> int:
        return sum(1 for piece in self.pieces.values() if piece.is_snapped)

    def is_solved(self) -> bool:
        """Check if every piece is snapped with no rotation. An empty puzzle is never solved."""
        if not self.pieces:
            return False
        return all(piece.is_snapped and piece.rotation == 0 for piece in self.pieces.values())

    def scatter(self, rng: Optional[random.Random] = None) -> None:
        """Place every piece at a random spot and quarter-turn inside the scatter area.

        Pieces are kept fully inside the scatter area and lose their snapped
        and selected state.
        """
        rng = rng or random.Random()
        span_x = self.board_maximum.x - self.board_minimum.x
        span_y = self.board_maximum.y - self.board_minimum.y

        self.select(None)
        for piece in self.all_pieces():
            x = self.board_minimum.x + rng.random() * max(0.0, span_x - piece.width)
            y = self.board_minimum.y + rng.random() * max(0.0, span_y - piece.height)
            piece.place(Position(x, y))
            piece.rotation = rng.randrange(4)
            piece.is_snapped = False

    def grid_dots(self) -> List[Position]:
        """Centres of every grid slot, for drawing the background guide."""
        return [piece.correct_center for piece in self.all_pieces()]

    def to_view(self) -> PuzzleView:
        """Build the render-facing view of the whole puzzle."""
        return PuzzleView(
            rows=self.rows,
            cols=self.cols,
            piece_width=self.piece_width,
            piece_height=self.piece_height,
            board_minimum=Point(x=self.board_minimum.x, y=self.board_minimum.y),
            board_maximum=Point(x=self.board_maximum.x, y=self.board_maximum.y),
            pieces=[piece.to_view() for piece in self.all_pieces()],
        )


def create_puzzle(
    image: ImageInfo,
    piece_count: Optional[int] = None,
    rng: Optional[random.Random] = None,
    seed: Optional[int] = None,
    config: Optional[Settings] = None,
) -> Puzzle:
    """Generate a complete, scattered puzzle for an image.

    All randomness comes from a single random source, so a fixed seed
    reproduces the same edges and the same initial scatter.

    Args:
        image: The source image.
        piece_count: Requested number of pieces; the default is used if missing or non-positive.
        rng: Random source. Takes precedence over seed.
        seed: Optional random seed when no rng is given.
        config: Settings; defaults to the module settings.

    Returns:
        The generated Puzzle.
    """
    config = config or settings
    rng = rng or random.Random(seed)

    layout = plan_grid(image, piece_count, config)
    edge_grid = generate_edge_grid(layout, rng=rng, waves_per_cut=config.WAVES_PER_CUT)
    puzzle = Puzzle(
        image,
        edge_grid,
        scatter_factor=config.SCATTER_FACTOR,
        samples_per_edge=config.EDGE_SAMPLES,
    )
    puzzle.scatter(rng)

    logger.info(
        "Puzzle initialized: %dx%d grid, piece %.2fx%.2f, %d pieces",
        layout.rows,
        layout.cols,
        layout.piece_width,
        layout.piece_height,
        layout.actual_piece_count,
    )
    return puzzle
