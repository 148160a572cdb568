"""Joints: each piece's view of a shared grid edge.

An edge between two pieces is generated once and shared. Each of the two
pieces holds its own Joint for that edge; both point at the same Cut (by
index into the puzzle's cut arena) but see opposite nib directions, so one
piece's protrusion is exactly the other's notch.
"""

import logging
import random
from dataclasses import dataclass
from typing import Iterator, Literal, Optional, Tuple

logger = logging.getLogger(__name__)

# Nib size as a ratio of the piece dimension along the edge
MIN_NIB_SIZE = 0.15
MAX_NIB_SIZE = 0.33

EdgeName = Literal["top", "right", "bottom", "left"]

# Path order: top (L->R), right (T->B), bottom (R->L), left (B->T)
EDGE_ORDER: Tuple[EdgeName, ...] = ("top", "right", "bottom", "left")

_OPPOSITE_EDGES = {"top": "bottom", "bottom": "top", "left": "right", "right": "left"}


def opposite_edge(edge: EdgeName) -> EdgeName:
    """Get the edge of the neighbouring piece that faces this edge."""
    return _OPPOSITE_EDGES[edge]  # type: ignore[return-value]


@dataclass(frozen=True)
class Joint:
    """One piece's side of a shared edge.

    Attributes:
        owner_piece_id: The piece this joint belongs to.
        neighbor_piece_id: The piece on the other side of the edge.
        owner_edge: The owner's edge this joint sits on.
        neighbor_edge: The neighbour's matching edge.
        outward: True if the owner's nib protrudes past the straight line.
        nib_size_ratio: Nib size relative to the piece dimension along the edge.
        cut_index: Index of the shared Cut in the puzzle's cut arena.
    """

    owner_piece_id: int
    neighbor_piece_id: int
    owner_edge: EdgeName
    neighbor_edge: EdgeName
    outward: bool
    nib_size_ratio: float
    cut_index: int

    def __post_init__(self) -> None:
        clamped = max(MIN_NIB_SIZE, min(self.nib_size_ratio, MAX_NIB_SIZE))
        object.__setattr__(self, "nib_size_ratio", clamped)

    @property
    def id(self) -> str:
        """Identifier built from the owner piece and its edge."""
        return f"{self.owner_piece_id}-{self.owner_edge}"

    @property
    def sign(self) -> int:
        """+1 when the nib protrudes outward, -1 when it is a notch."""
        return 1 if self.outward else -1

    def __str__(self) -> str:
        return (
            f"Joint(owner: {self.owner_piece_id}, edge: {self.owner_edge}, "
            f"outward: {self.outward}, size: {self.nib_size_ratio:.2f}, cut: {self.cut_index})"
        )


def create_joint_pair(
    piece_a: int,
    piece_b: int,
    edge_a: EdgeName,
    edge_b: EdgeName,
    cut_index: int,
    rng: random.Random,
) -> Tuple[Joint, Joint]:
    """Create both sides of a shared edge.

    Piece A's nib direction is chosen uniformly at random and piece B gets the
    opposite one. Both sides share the cut and the nib size.

    Args:
        piece_a: ID of the first piece.
        piece_b: ID of the second piece.
        edge_a: Edge of piece A that touches piece B.
        edge_b: Edge of piece B that touches piece A.
        cut_index: Index of the shared Cut in the cut arena.
        rng: Random source.

    Returns:
        Tuple of (piece A's joint, piece B's joint).
    """
    outward = rng.random() < 0.5
    size = rng.uniform(MIN_NIB_SIZE, MAX_NIB_SIZE)

    side_a = Joint(piece_a, piece_b, edge_a, edge_b, outward, size, cut_index)
    side_b = Joint(piece_b, piece_a, edge_b, edge_a, not outward, size, cut_index)
    return side_a, side_b


@dataclass
class PieceJoints:
    """The four joints of a piece. None marks a straight puzzle-boundary edge."""

    top: Optional[Joint] = None
    right: Optional[Joint] = None
    bottom: Optional[Joint] = None
    left: Optional[Joint] = None

    def get_joint(self, edge: str) -> Optional[Joint]:
        """Get the joint on an edge, or None for boundary edges and unknown names."""
        if edge not in EDGE_ORDER:
            logger.warning("Attempted to get joint for unknown edge: %s", edge)
            return None
        joint: Optional[Joint] = getattr(self, edge)
        return joint

    def set_joint(self, edge: EdgeName, joint: Optional[Joint]) -> None:
        """Attach a joint to an edge."""
        if edge not in EDGE_ORDER:
            raise ValueError(f"Unknown edge: {edge}")
        setattr(self, edge, joint)

    def __iter__(self) -> Iterator[Tuple[EdgeName, Optional[Joint]]]:
        for edge in EDGE_ORDER:
            yield edge, getattr(self, edge)

    @property
    def count(self) -> int:
        """Number of non-boundary edges."""
        return sum(1 for _edge, joint in self if joint is not None)

    def __str__(self) -> str:
        def neighbor(joint: Optional[Joint]) -> str:
            return str(joint.neighbor_piece_id) if joint else "null"

        return (
            f"PieceJoints(T: {neighbor(self.top)}, R: {neighbor(self.right)}, "
            f"B: {neighbor(self.bottom)}, L: {neighbor(self.left)})"
        )
