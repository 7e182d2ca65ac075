from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Literal, Optional, Tuple, Union, cast

from springfem.errors import MissingCombinationData
from springfem.model.dof import (
    DOF_ORDER,
    OptionalValues6,
    RestraintMask6,
    Values6,
    dof_index,
    make_restraint_mask,
    make_values6,
)

Number = Union[int, float]
XYZ = Tuple[float, float, float]
SpringDirection = Optional[Literal["+", "-"]]

DEFAULT_CASE = "Case 1"


@dataclass(slots=True)
class SupportSpring:
    """
    Elastic support acting on a single nodal DOF.

    ``direction`` makes the spring one-sided: "+" only resists positive
    displacement, "-" only negative. ``None`` acts in both directions.
    The active flag is tracked per load combination.
    """

    stiffness: float
    direction: SpringDirection = None
    active: Dict[str, bool] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.stiffness < 0.0:
            raise ValueError("support spring stiffness cannot be negative")
        if self.direction not in (None, "+", "-"):
            raise ValueError("support spring direction must be None, '+' or '-'")

    def is_active(self, combo_name: str) -> bool:
        # Never-iterated springs participate
        return self.active.get(combo_name, True)

    def resists(self, displacement: float) -> bool:
        if self.direction == "+":
            return displacement > 0.0
        if self.direction == "-":
            return displacement < 0.0
        return True


@dataclass(frozen=True, slots=True)
class NodeLoad:
    direction: str
    magnitude: float
    case: str = DEFAULT_CASE

    def __post_init__(self) -> None:
        dof_index(self.direction)
        object.__setattr__(self, "magnitude", float(self.magnitude))

    @property
    def dof(self) -> int:
        return dof_index(self.direction)


@dataclass(slots=True, eq=False)
class Node:
    """
    Node of a 3D spring model.

    Geometry is fixed at construction. Results are stored per load combination
    name; a missing key means "not solved for that combination", which is
    reported with ``MissingCombinationData`` rather than read as zero.
    """

    name: str
    xyz: XYZ
    id: Optional[int] = None
    support: RestraintMask6 = (False, False, False, False, False, False)
    enforced: OptionalValues6 = (None, None, None, None, None, None)
    springs: Tuple[Optional[SupportSpring], ...] = (None, None, None, None, None, None)
    loads: List[NodeLoad] = field(default_factory=list)
    displacements: Dict[str, Values6] = field(default_factory=dict)
    reactions: Dict[str, Values6] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "xyz", self._coerce_xyz(self.xyz))
        self.support = make_restraint_mask(self.support)
        if len(self.enforced) != 6 or len(self.springs) != 6:
            raise ValueError("enforced and springs must each have 6 entries")

    def __setattr__(self, name: str, value: object) -> None:
        if name == "xyz" and hasattr(self, "xyz"):
            raise AttributeError("node coordinates cannot change once placed")
        object.__setattr__(self, name, value)

    @property
    def x(self) -> float:
        return self.xyz[0]

    @property
    def y(self) -> float:
        return self.xyz[1]

    @property
    def z(self) -> float:
        return self.xyz[2]

    def distance(self, other: "Node") -> float:
        return math.dist(self.xyz, other.xyz)

    # -- boundary conditions -------------------------------------------------

    def set_support(self, **flags: bool) -> None:
        """Set support flags by label, e.g. ``set_support(DX=True, RZ=True)``."""
        mask = list(self.support)
        for label, value in flags.items():
            mask[dof_index(label)] = bool(value)
        self.support = make_restraint_mask(mask)

    def set_enforced(self, label: str, value: Optional[float]) -> None:
        values = list(self.enforced)
        values[dof_index(label)] = None if value is None else float(value)
        self.enforced = cast(OptionalValues6, tuple(values))

    def set_spring(self, label: str, spring: Optional[SupportSpring]) -> None:
        springs = list(self.springs)
        springs[dof_index(label)] = spring
        self.springs = tuple(springs)

    def is_restrained(self, dof: int) -> bool:
        return self.support[dof] or self.enforced[dof] is not None

    # -- per-combination results ---------------------------------------------

    def has_results(self, combo_name: str) -> bool:
        return combo_name in self.displacements

    def displacement(self, combo_name: str) -> Values6:
        if combo_name not in self.displacements:
            raise MissingCombinationData(self.name, combo_name)
        return self.displacements[combo_name]

    def displacement_component(self, combo_name: str, label: str) -> float:
        return self.displacement(combo_name)[dof_index(label)]

    def reaction(self, combo_name: str) -> Values6:
        if combo_name not in self.reactions:
            raise MissingCombinationData(self.name, combo_name, what="reaction")
        return self.reactions[combo_name]

    def set_displacement(self, combo_name: str, values: Iterable[Number]) -> None:
        self.displacements[combo_name] = make_values6(values)

    def set_reaction(self, combo_name: str, values: Iterable[Number]) -> None:
        self.reactions[combo_name] = make_values6(values)

    def clear_results(self, combo_name: Optional[str] = None) -> None:
        if combo_name is None:
            self.displacements.clear()
            self.reactions.clear()
            return
        self.displacements.pop(combo_name, None)
        self.reactions.pop(combo_name, None)

    def load_vector(self, factors: Dict[str, float]) -> Values6:
        """Factored sum of this node's loads for one combination."""
        total = [0.0] * len(DOF_ORDER)
        for load in self.loads:
            factor = factors.get(load.case)
            if factor is None:
                continue
            total[load.dof] += factor * load.magnitude
        return cast(Values6, tuple(total))

    @staticmethod
    def _coerce_xyz(xyz: Iterable[Number]) -> XYZ:
        coords = tuple(float(value) for value in xyz)
        if len(coords) != 3:
            raise ValueError("xyz must contain exactly 3 coordinates")
        if not all(math.isfinite(value) for value in coords):
            raise ValueError("xyz coordinates must be finite real numbers")
        return cast(XYZ, coords)
