from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional

import numpy as np

from springfem.model.node import Node


class ActiveState(Enum):
    """Participation of an element in one load combination."""

    UNSOLVED = "unsolved"
    ACTIVE = "active"
    INACTIVE = "inactive"


@dataclass(slots=True, eq=False)
class SpringElement:
    """
    Two-node axial spring (12 DOF: 6 per node).

    The element references its end nodes but does not own them. ``ks`` is the
    axial spring constant (force/displacement). ``tension_only`` and
    ``comp_only`` restrict the sign of axial force the element may carry; the
    per-combination state is driven by the activation controller through
    ``set_active`` and read everywhere else through ``is_active``/``state``.
    """

    name: str
    i_node: Node
    j_node: Node
    ks: float
    tension_only: bool = False
    comp_only: bool = False
    id: Optional[int] = None
    _states: Dict[str, ActiveState] = field(default_factory=dict, init=False, repr=False)

    def __post_init__(self) -> None:
        self.ks = float(self.ks)
        if self.ks < 0.0:
            raise ValueError("spring constant ks cannot be negative")
        if self.i_node is self.j_node:
            raise ValueError(f"spring {self.name} must connect two different nodes")

    @property
    def is_restricted(self) -> bool:
        return self.tension_only or self.comp_only

    def length(self) -> float:
        return self.i_node.distance(self.j_node)

    # -- activation state ----------------------------------------------------

    def state(self, combo_name: str) -> ActiveState:
        return self._states.get(combo_name, ActiveState.UNSOLVED)

    def is_active(self, combo_name: str) -> bool:
        return self._states.get(combo_name) is ActiveState.ACTIVE

    def set_active(self, combo_name: str, active: bool) -> None:
        """Record participation for ``combo_name``. Reserved for the activation controller."""
        self._states[combo_name] = ActiveState.ACTIVE if active else ActiveState.INACTIVE

    def reset_activation(self, combo_name: Optional[str] = None) -> None:
        if combo_name is None:
            self._states.clear()
        else:
            self._states.pop(combo_name, None)

    def active_states(self) -> Dict[str, ActiveState]:
        return dict(self._states)

    # -- matrices (recomputed from current coordinates on every call) ---------

    def transformation_matrix(self) -> np.ndarray:
        from springfem.analysis.transformations import transformation_matrix

        return transformation_matrix(self.i_node.xyz, self.j_node.xyz)

    def local_stiffness(self) -> np.ndarray:
        from springfem.analysis.elements.spring3d import local_stiffness_12x12

        return local_stiffness_12x12(self.ks)

    def global_stiffness(self) -> np.ndarray:
        from springfem.analysis.elements.spring3d import global_stiffness_12x12

        return global_stiffness_12x12(self.i_node.xyz, self.j_node.xyz, self.ks)

    # -- per-combination vectors ---------------------------------------------

    def global_displacements(self, combo_name: str, active: Optional[bool] = None) -> np.ndarray:
        from springfem.analysis.elements.spring3d import global_displacement_vector

        return global_displacement_vector(self, combo_name, active)

    def local_displacements(self, combo_name: str, active: Optional[bool] = None) -> np.ndarray:
        from springfem.analysis.elements.spring3d import local_displacement_vector

        return local_displacement_vector(self, combo_name, active)

    def local_end_forces(self, combo_name: str, active: Optional[bool] = None) -> np.ndarray:
        from springfem.analysis.elements.spring3d import local_end_force_vector

        return local_end_force_vector(self, combo_name, active)

    def global_end_forces(self, combo_name: str, active: Optional[bool] = None) -> np.ndarray:
        from springfem.analysis.elements.spring3d import global_end_force_vector

        return global_end_force_vector(self, combo_name, active)

    def axial_force(self, combo_name: str, active: Optional[bool] = None) -> float:
        """Axial force for ``combo_name``; positive is tension."""
        from springfem.analysis.elements.spring3d import axial_force

        return axial_force(self, combo_name, active)
