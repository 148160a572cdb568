"""Geometric logic for assembling puzzle piece outlines."""

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

import numpy as np

from .joints import EDGE_ORDER, EdgeName, Joint, PieceJoints
from .models import Cut

logger = logging.getLogger(__name__)

Vertex = Tuple[float, float]


def nib_profile(t: np.ndarray, nib_size_ratio: float) -> np.ndarray:
    """Raised-cosine bump centred on the edge, as tall and as wide as the nib size.

    Args:
        t: Positions along the edge (0 to 1).
        nib_size_ratio: Nib size relative to the edge length.

    Returns:
        Displacement of the nib at each position, in board units.
    """
    half_width = nib_size_ratio * 0.5
    offset = np.abs(t - 0.5)
    bump = 0.5 * (1.0 + np.cos(np.pi * np.minimum(offset / half_width, 1.0)))
    return np.where(offset < half_width, nib_size_ratio * bump, 0.0)


def edge_profile(t: np.ndarray, cut: Cut, nib_size_ratio: float) -> np.ndarray:
    """Unsigned displacement of a jointed edge, in board units.

    The cut's waviness is tapered by sin(pi * t) so that every edge meets
    the piece corners exactly.
    """
    return cut.sample(t) * np.sin(np.pi * t) + nib_profile(t, nib_size_ratio)


def _resolve_cut(joint: Joint, cuts: Sequence[Cut]) -> Optional[Cut]:
    if 0 <= joint.cut_index < len(cuts):
        return cuts[joint.cut_index]
    logger.warning("Joint %s refers to missing cut %d, using a straight edge", joint.id, joint.cut_index)
    return None


def sample_edge(
    length: float,
    joint: Optional[Joint],
    cuts: Sequence[Cut],
    num_samples: int = 20,
) -> np.ndarray:
    """Sample an edge as (along, displacement) pairs in world units.

    Positions run along the positive world axis (left to right, top to
    bottom) regardless of which piece is asking, so both sides of a shared
    edge sample the same points. Positive displacement points away from the
    owner piece.

    Args:
        length: Length of the edge in world units.
        joint: The owner's joint on this edge, or None for a straight edge.
        cuts: The cut arena.
        num_samples: Number of evenly spaced samples, endpoints included.

    Returns:
        Array of shape (num_samples, 2).
    """
    num_samples = max(2, num_samples)
    t = np.linspace(0.0, 1.0, num_samples)
    displacement = np.zeros(num_samples)

    cut = _resolve_cut(joint, cuts) if joint is not None else None
    if joint is not None and cut is not None:
        displacement = joint.sign * length * edge_profile(t, cut, joint.nib_size_ratio)
        displacement[0] = 0.0
        displacement[-1] = 0.0

    return np.column_stack([t * length, displacement])


def _edge_to_local(edge: EdgeName, samples: np.ndarray, width: float, height: float) -> np.ndarray:
    """Map (along, displacement) samples into the piece's local frame in traversal order."""
    along = samples[:, 0]
    displacement = samples[:, 1]

    if edge == "top":
        # Left to right, outward is -y
        points = np.column_stack([along, -displacement])
    elif edge == "right":
        # Top to bottom, outward is +x
        points = np.column_stack([width + displacement, along])
    elif edge == "bottom":
        # Right to left, outward is +y
        points = np.column_stack([along, height + displacement])[::-1]
    else:
        # Bottom to top, outward is -x
        points = np.column_stack([-displacement, along])[::-1]
    return points


@dataclass(frozen=True)
class PiecePath:
    """A closed piece outline in the piece's local frame.

    The origin is the piece's top-left corner and axes follow its width and
    height. The first and last points are both (0, 0).
    """

    points: Tuple[Vertex, ...]

    @property
    def start(self) -> Vertex:
        """First point of the outline."""
        return self.points[0]

    @property
    def end(self) -> Vertex:
        """Last point of the outline."""
        return self.points[-1]

    def as_array(self) -> np.ndarray:
        """Return the points as an (N, 2) array."""
        return np.array(self.points, dtype=float)

    def bounds(self) -> Tuple[float, float, float, float]:
        """Return (min_x, min_y, max_x, max_y) of the outline."""
        pts = self.as_array()
        return (
            float(pts[:, 0].min()),
            float(pts[:, 1].min()),
            float(pts[:, 0].max()),
            float(pts[:, 1].max()),
        )

    def to_svg(self) -> str:
        """Render the outline as SVG path data."""
        commands = [f"M {_fmt(self.points[0][0])},{_fmt(self.points[0][1])}"]
        for x, y in self.points[1:]:
            commands.append(f"L {_fmt(x)},{_fmt(y)}")
        commands.append("Z")
        return " ".join(commands)


def _fmt(value: float) -> str:
    # Avoid "-0" in path data
    return f"{round(value, 2) + 0.0:.2f}".rstrip("0").rstrip(".")


def generate_piece_polygon(
    width: float,
    height: float,
    joints: PieceJoints,
    cuts: Sequence[Cut],
    samples_per_edge: int = 20,
) -> PiecePath:
    """Assemble the closed outline of a piece from its four joints.

    Edges are walked top (left to right), right (top to bottom), bottom
    (right to left) and left (bottom to top), starting and ending at (0, 0).
    Straight edges contribute only their far corner.

    Args:
        width: Width of the piece in world units.
        height: Height of the piece in world units.
        joints: The piece's joints.
        cuts: The cut arena the joints index into.
        samples_per_edge: Samples per jointed edge.

    Returns:
        The piece outline.
    """
    corners = {
        "top": (width, 0.0),
        "right": (width, height),
        "bottom": (0.0, height),
        "left": (0.0, 0.0),
    }

    points: List[Vertex] = [(0.0, 0.0)]
    for edge in EDGE_ORDER:
        joint = joints.get_joint(edge)
        length = width if edge in ("top", "bottom") else height

        # A joint without a cut falls back to a straight edge
        if joint is None or _resolve_cut(joint, cuts) is None:
            points.append(corners[edge])
            continue

        samples = sample_edge(length, joint, cuts, samples_per_edge)
        local = _edge_to_local(edge, samples, width, height)
        # Endpoints are the corners, emitted exactly
        points.extend((float(x), float(y)) for x, y in local[1:-1])
        points.append(corners[edge])

    return PiecePath(points=tuple(points))


def generate_piece_path(
    width: float,
    height: float,
    joints: PieceJoints,
    cuts: Sequence[Cut],
    samples_per_edge: int = 20,
) -> str:
    """Generate the SVG path data for a piece outline.

    Args:
        width: Width of the piece in world units.
        height: Height of the piece in world units.
        joints: The piece's joints.
        cuts: The cut arena the joints index into.
        samples_per_edge: Samples per jointed edge.

    Returns:
        SVG path data, e.g. "M 0,0 L ... Z".
    """
    return generate_piece_polygon(width, height, joints, cuts, samples_per_edge).to_svg()
