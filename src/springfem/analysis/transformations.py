from __future__ import annotations

from typing import Tuple

import numpy as np

from springfem.errors import GeometryError, NumericalError

XYZ = Tuple[float, float, float]
Matrix3 = np.ndarray
Matrix12 = np.ndarray

EPSILON = 1e-10
ORTHO_TOL = 1e-9


def length_and_direction(p0: XYZ, p1: XYZ) -> Tuple[float, np.ndarray]:
    delta = np.asarray(p1, dtype=float) - np.asarray(p0, dtype=float)
    length = float(np.linalg.norm(delta))
    if length < EPSILON:
        raise GeometryError(f"zero-length element: endpoints {tuple(p0)} and {tuple(p1)} coincide")
    return length, delta / length


def direction_cosines(p0: XYZ, p1: XYZ) -> Matrix3:
    """
    3x3 direction cosine matrix with rows [x; y; z] of the local axes.

    Axial elements have no section orientation, so the local y/z axes are
    fixed by the member's geometry:

    - vertical (X and Z equal at both ends): reference y = -X when the
      member runs upwards, +X when it runs downwards; z = +Z.
    - horizontal (Y equal at both ends): reference y = +Y, z = x cross y.
    - skew: z is normal to the plane spanned by the member and its X-Z
      projection, oriented by whether the member rises or falls;
      y = z cross x.

    In the first two cases y is rebuilt as z cross x, so members that are
    aligned only within EPSILON still get an orthonormal triad.

    ``R @ v_global`` gives the local components of ``v_global``.
    """
    _, x = length_and_direction(p0, p1)
    x0, y0, z0 = (float(value) for value in p0)
    x1, y1, z1 = (float(value) for value in p1)

    if abs(x0 - x1) < EPSILON and abs(z0 - z1) < EPSILON:
        y_ref = np.array([-1.0, 0.0, 0.0]) if y1 > y0 else np.array([1.0, 0.0, 0.0])
        # x may lean off the global axis by up to EPSILON / length
        z = _normalize(np.cross(x, y_ref))
        y = np.cross(z, x)
    elif abs(y0 - y1) < EPSILON:
        y_ref = np.array([0.0, 1.0, 0.0])
        z = _normalize(np.cross(x, y_ref))
        y = np.cross(z, x)
    else:
        proj = np.array([x1 - x0, 0.0, z1 - z0])
        z = np.cross(proj, x) if y1 > y0 else np.cross(x, proj)
        z = _normalize(z)
        y = _normalize(np.cross(z, x))

    return np.vstack((x, y, z))


def transformation_matrix(p0: XYZ, p1: XYZ) -> Matrix12:
    """12x12 block-diagonal transformation: u_local = T @ u_global."""
    rot = direction_cosines(p0, p1)
    if __debug__:
        check_orthonormal(rot)
    t = np.zeros((12, 12), dtype=float)
    # node i
    t[0:3, 0:3] = rot
    t[3:6, 3:6] = rot
    # node j
    t[6:9, 6:9] = rot
    t[9:12, 9:12] = rot
    return t


def check_orthonormal(matrix: np.ndarray, tol: float = ORTHO_TOL) -> None:
    """Raise NumericalError unless ``matrix @ matrix.T`` is the identity within ``tol``."""
    product = matrix @ matrix.T
    error = float(np.max(np.abs(product - np.eye(matrix.shape[0]))))
    if error > tol:
        raise NumericalError(f"transformation matrix is not orthonormal (max |T T^T - I| = {error:.3e})")


def inverse_transformation(t: Matrix12) -> Matrix12:
    """T is orthonormal, so its inverse is its transpose."""
    return t.T


def transform_stiffness(local_k: np.ndarray, t: np.ndarray) -> np.ndarray:
    """k_global = T^T * k_local * T"""
    return inverse_transformation(t) @ local_k @ t


def to_local(global_vector: np.ndarray, t: np.ndarray) -> np.ndarray:
    """u_local = T @ u_global"""
    return t @ global_vector


def to_global(local_vector: np.ndarray, t: np.ndarray) -> np.ndarray:
    """f_global = T^T @ f_local"""
    return inverse_transformation(t) @ local_vector


def _normalize(v: np.ndarray) -> np.ndarray:
    length = float(np.linalg.norm(v))
    if length < EPSILON:
        raise NumericalError("cannot normalize a zero vector while building local axes")
    return v / length
