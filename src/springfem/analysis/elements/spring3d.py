from __future__ import annotations

from typing import TYPE_CHECKING, Optional

import numpy as np

from springfem.analysis.transformations import XYZ, to_global, to_local, transform_stiffness, transformation_matrix

if TYPE_CHECKING:
    from springfem.model.spring import SpringElement

AXIAL_I = 0
AXIAL_J = 6


def local_stiffness_12x12(ks: float) -> np.ndarray:
    """
    Local stiffness of an axial spring in the 6 dof/node set [DX DY DZ RX RY RZ].

    Only the local axial translations (i-end 0, j-end 6) are coupled.
    """
    k = np.zeros((12, 12), dtype=float)
    k[AXIAL_I, AXIAL_I] = ks
    k[AXIAL_I, AXIAL_J] = -ks
    k[AXIAL_J, AXIAL_I] = -ks
    k[AXIAL_J, AXIAL_J] = ks
    return k


def global_stiffness_12x12(p0: XYZ, p1: XYZ, ks: float) -> np.ndarray:
    t = transformation_matrix(p0, p1)
    return transform_stiffness(local_stiffness_12x12(ks), t)


def global_displacement_vector(spring: "SpringElement", combo_name: str, active: Optional[bool] = None) -> np.ndarray:
    """
    Gather the spring's 12 nodal displacements for ``combo_name``.

    The DX entries of both ends (0 and 6) are only filled when the spring is
    active, which decouples an inactive spring from axial force transfer. The
    other ten entries always come from the nodes. ``active`` overrides the
    recorded state, e.g. to evaluate a trial force for an inactive spring.

    Raises MissingCombinationData if either node has not been solved for
    ``combo_name``.
    """
    if active is None:
        active = spring.is_active(combo_name)
    d_i = spring.i_node.displacement(combo_name)
    d_j = spring.j_node.displacement(combo_name)

    d = np.zeros(12, dtype=float)
    d[1:6] = d_i[1:6]
    d[7:12] = d_j[1:6]
    if active:
        d[AXIAL_I] = d_i[0]
        d[AXIAL_J] = d_j[0]
    return d


def local_displacement_vector(spring: "SpringElement", combo_name: str, active: Optional[bool] = None) -> np.ndarray:
    """
    Local displacements ``T @ d_global``.

    For an inactive spring the result differs from
    ``T @ d_global``: the local axial entries (0 and 6) are zeroed as well,
    because the gated global DX entries only cover the axial direction of
    X-aligned springs. Pass ``active=True`` for the ungated ``T @ d``.
    """
    if active is None:
        active = spring.is_active(combo_name)
    t = spring.transformation_matrix()
    d_local = to_local(global_displacement_vector(spring, combo_name, active), t)
    if not active:
        d_local[AXIAL_I] = 0.0
        d_local[AXIAL_J] = 0.0
    return d_local


def local_end_force_vector(spring: "SpringElement", combo_name: str, active: Optional[bool] = None) -> np.ndarray:
    return local_stiffness_12x12(spring.ks) @ local_displacement_vector(spring, combo_name, active)


def global_end_force_vector(spring: "SpringElement", combo_name: str, active: Optional[bool] = None) -> np.ndarray:
    t = spring.transformation_matrix()
    return to_global(local_end_force_vector(spring, combo_name, active), t)


def axial_force(spring: "SpringElement", combo_name: str, active: Optional[bool] = None) -> float:
    """
    Axial force from the local end forces.

    Uses N>0 tension, N<0 compression. The i-end force (entry 0) pulls
    towards the j-end under tension, so N is its negation.
    """
    f_local = local_end_force_vector(spring, combo_name, active)
    return -float(f_local[AXIAL_I])
