"""Tests for joints and per-piece joint sets."""

import logging
import random

import pytest

from jigsaw_core.joints import (
    EDGE_ORDER,
    MAX_NIB_SIZE,
    MIN_NIB_SIZE,
    Joint,
    PieceJoints,
    create_joint_pair,
    opposite_edge,
)


class TestJoint:
    """Tests for a single joint."""

    @pytest.mark.parametrize("size,expected", [(0.01, MIN_NIB_SIZE), (0.9, MAX_NIB_SIZE), (0.2, 0.2)])
    def test_nib_size_is_clamped(self, size: float, expected: float) -> None:
        joint = Joint(0, 1, "right", "left", True, size, 0)
        assert joint.nib_size_ratio == expected

    def test_id_and_sign(self) -> None:
        outward = Joint(3, 4, "right", "left", True, 0.2, 0)
        inward = Joint(4, 3, "left", "right", False, 0.2, 0)
        assert outward.id == "3-right"
        assert outward.sign == 1
        assert inward.sign == -1

    @pytest.mark.parametrize(
        "edge,expected",
        [("top", "bottom"), ("bottom", "top"), ("left", "right"), ("right", "left")],
    )
    def test_opposite_edge(self, edge: str, expected: str) -> None:
        assert opposite_edge(edge) == expected  # type: ignore[arg-type]


class TestJointPair:
    """Tests for the two sides of a shared edge."""

    @pytest.mark.parametrize("seed", range(10))
    def test_pair_is_complementary(self, seed: int) -> None:
        side_a, side_b = create_joint_pair(0, 1, "right", "left", 7, random.Random(seed))

        assert side_a.cut_index == side_b.cut_index == 7
        assert side_a.outward != side_b.outward
        assert side_a.sign == -side_b.sign
        assert side_a.nib_size_ratio == side_b.nib_size_ratio
        assert MIN_NIB_SIZE <= side_a.nib_size_ratio <= MAX_NIB_SIZE

    def test_pair_refers_to_each_other(self) -> None:
        side_a, side_b = create_joint_pair(2, 6, "bottom", "top", 0, random.Random(0))
        assert (side_a.owner_piece_id, side_a.neighbor_piece_id) == (2, 6)
        assert (side_b.owner_piece_id, side_b.neighbor_piece_id) == (6, 2)
        assert side_a.owner_edge == side_b.neighbor_edge == "bottom"
        assert side_b.owner_edge == side_a.neighbor_edge == "top"


class TestPieceJoints:
    """Tests for the joint set of a piece."""

    def test_defaults_to_boundary_edges(self) -> None:
        joints = PieceJoints()
        assert joints.count == 0
        assert all(joint is None for _edge, joint in joints)

    def test_set_and_get(self) -> None:
        joints = PieceJoints()
        joint = Joint(0, 1, "right", "left", True, 0.2, 0)
        joints.set_joint("right", joint)
        assert joints.get_joint("right") is joint
        assert joints.right is joint
        assert joints.count == 1

    def test_iterates_in_path_order(self) -> None:
        assert [edge for edge, _joint in PieceJoints()] == list(EDGE_ORDER)
        assert EDGE_ORDER == ("top", "right", "bottom", "left")

    def test_unknown_edge_lookup_warns(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING):
            assert PieceJoints().get_joint("diagonal") is None
        assert "unknown edge" in caplog.text

    def test_unknown_edge_assignment_raises(self) -> None:
        with pytest.raises(ValueError, match="Unknown edge"):
            PieceJoints().set_joint("diagonal", None)  # type: ignore[arg-type]

    def test_str(self) -> None:
        joints = PieceJoints(right=Joint(0, 1, "right", "left", True, 0.2, 0))
        assert str(joints) == "PieceJoints(T: null, R: 1, B: null, L: null)"
