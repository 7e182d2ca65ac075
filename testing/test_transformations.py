from __future__ import annotations

import numpy as np
import pytest

from springfem.analysis.transformations import (
    check_orthonormal,
    direction_cosines,
    inverse_transformation,
    length_and_direction,
    transformation_matrix,
)
from springfem.errors import GeometryError, NumericalError

ENDPOINT_PAIRS = [
    ((0.0, 0.0, 0.0), (0.0, 5.0, 0.0)),  # vertical, up
    ((0.0, 5.0, 0.0), (0.0, 0.0, 0.0)),  # vertical, down
    ((0.0, 3.0, 0.0), (4.0, 3.0, 0.0)),  # horizontal along X
    ((1.0, 2.0, 0.0), (1.0, 2.0, -6.0)),  # horizontal along -Z
    ((0.0, 0.0, 0.0), (3.0, 4.0, 0.0)),  # skew, rising
    ((0.0, 4.0, 0.0), (3.0, 0.0, 0.0)),  # skew, falling
    ((-1.5, 2.0, 7.0), (2.5, -3.0, 1.0)),
    ((10.0, -4.0, 3.0), (9.0, 8.0, -2.0)),
    ((0.0, 3.0, 0.0), (0.05, 3.0 + 9e-11, 0.0)),  # short, horizontal within epsilon
    ((0.0, 0.0, 0.0), (5e-11, 0.01, 0.0)),  # short, vertical within epsilon
]


def _assert_right_handed(rot: np.ndarray) -> None:
    x, y, z = rot
    np.testing.assert_allclose(np.cross(x, y), z, atol=1e-12)
    assert np.isclose(np.linalg.det(rot), 1.0)


@pytest.mark.parametrize("p0, p1", ENDPOINT_PAIRS)
def test_transformation_is_orthonormal(p0, p1) -> None:
    t = transformation_matrix(p0, p1)
    assert t.shape == (12, 12)
    np.testing.assert_allclose(t @ t.T, np.eye(12), atol=1e-9)
    _assert_right_handed(direction_cosines(p0, p1))


def test_random_members_are_orthonormal() -> None:
    rng = np.random.default_rng(7)
    for _ in range(50):
        p0 = tuple(rng.uniform(-10.0, 10.0, size=3))
        p1 = tuple(rng.uniform(-10.0, 10.0, size=3))
        t = transformation_matrix(p0, p1)
        np.testing.assert_allclose(t @ t.T, np.eye(12), atol=1e-9)


def test_transformation_has_four_direction_cosine_blocks() -> None:
    p0, p1 = (-1.5, 2.0, 7.0), (2.5, -3.0, 1.0)
    rot = direction_cosines(p0, p1)
    t = transformation_matrix(p0, p1)
    for start in (0, 3, 6, 9):
        np.testing.assert_array_equal(t[start : start + 3, start : start + 3], rot)
    off_block = t.copy()
    for start in (0, 3, 6, 9):
        off_block[start : start + 3, start : start + 3] = 0.0
    assert not off_block.any()


def test_vertical_member_running_up() -> None:
    rot = direction_cosines((0.0, 0.0, 0.0), (0.0, 5.0, 0.0))
    np.testing.assert_allclose(rot[0], [0.0, 1.0, 0.0])
    np.testing.assert_allclose(rot[1], [-1.0, 0.0, 0.0])
    np.testing.assert_allclose(rot[2], [0.0, 0.0, 1.0])


def test_vertical_member_running_down_flips_local_y() -> None:
    rot = direction_cosines((0.0, 5.0, 0.0), (0.0, 0.0, 0.0))
    np.testing.assert_allclose(rot[0], [0.0, -1.0, 0.0])
    np.testing.assert_allclose(rot[1], [1.0, 0.0, 0.0])
    np.testing.assert_allclose(rot[2], [0.0, 0.0, 1.0])


def test_horizontal_member_uses_global_y() -> None:
    rot = direction_cosines((0.0, 3.0, 0.0), (4.0, 3.0, 0.0))
    np.testing.assert_allclose(rot, np.eye(3), atol=1e-15)

    rot = direction_cosines((0.0, 0.0, 0.0), (0.0, 0.0, 2.0))
    np.testing.assert_allclose(rot[0], [0.0, 0.0, 1.0])
    np.testing.assert_allclose(rot[1], [0.0, 1.0, 0.0])
    np.testing.assert_allclose(rot[2], [-1.0, 0.0, 0.0])


def test_skew_member_axes() -> None:
    rot = direction_cosines((0.0, 0.0, 0.0), (3.0, 4.0, 0.0))
    np.testing.assert_allclose(rot[0], [0.6, 0.8, 0.0])
    np.testing.assert_allclose(rot[1], [-0.8, 0.6, 0.0], atol=1e-15)
    np.testing.assert_allclose(rot[2], [0.0, 0.0, 1.0], atol=1e-15)
    assert np.isclose(rot[0] @ rot[1], 0.0)
    assert np.isclose(rot[1] @ rot[2], 0.0)
    assert np.isclose(rot[0] @ rot[2], 0.0)
    _assert_right_handed(rot)


def test_skew_member_falling() -> None:
    rot = direction_cosines((0.0, 4.0, 0.0), (3.0, 0.0, 0.0))
    np.testing.assert_allclose(rot[0], [0.6, -0.8, 0.0])
    np.testing.assert_allclose(rot[1], [0.8, 0.6, 0.0], atol=1e-15)
    np.testing.assert_allclose(rot[2], [0.0, 0.0, 1.0], atol=1e-15)


def test_round_trip_local_global() -> None:
    rng = np.random.default_rng(3)
    t = transformation_matrix((-1.5, 2.0, 7.0), (2.5, -3.0, 1.0))
    local = rng.normal(size=12)
    np.testing.assert_allclose(t.T @ (t @ local), local, atol=1e-12)
    np.testing.assert_array_equal(inverse_transformation(t), t.T)


def test_length_and_direction() -> None:
    length, direction = length_and_direction((0.0, 0.0, 0.0), (3.0, 4.0, 0.0))
    assert length == pytest.approx(5.0)
    np.testing.assert_allclose(direction, [0.6, 0.8, 0.0])


@pytest.mark.parametrize(
    "p0, p1",
    [
        ((1.0, 2.0, 3.0), (1.0, 2.0, 3.0)),
        ((1.0, 2.0, 3.0), (1.0, 2.0, 3.0 + 1e-12)),
    ],
)
def test_zero_length_raises_geometry_error(p0, p1) -> None:
    with pytest.raises(GeometryError, match="zero-length"):
        transformation_matrix(p0, p1)
    with pytest.raises(ValueError):
        direction_cosines(p0, p1)


def test_check_orthonormal_rejects_distorted_matrix() -> None:
    check_orthonormal(np.eye(3))
    with pytest.raises(NumericalError):
        check_orthonormal(1.001 * np.eye(3))
    skewed = np.eye(3)
    skewed[0, 1] = 1e-6
    with pytest.raises(NumericalError):
        check_orthonormal(skewed)


def test_nearly_aligned_short_members_keep_reference_axes() -> None:
    rot = direction_cosines((0.0, 3.0, 0.0), (0.05, 3.0 + 9e-11, 0.0))
    np.testing.assert_allclose(rot, np.eye(3), atol=1e-8)
    check_orthonormal(rot)

    rot = direction_cosines((0.0, 0.0, 0.0), (5e-11, 0.01, 0.0))
    np.testing.assert_allclose(rot[1], [-1.0, 0.0, 0.0], atol=1e-8)
    np.testing.assert_allclose(rot[2], [0.0, 0.0, 1.0], atol=1e-8)
    check_orthonormal(rot)
