from springfem.model.dof import DOF_ORDER, LOAD_ORDER, RestraintMask6, Values6, dof_index, make_restraint_mask
from springfem.model.node import Node, NodeLoad, SupportSpring
from springfem.model.spring import ActiveState, SpringElement
from springfem.model.structure import Structure

__all__ = [
    "Node",
    "NodeLoad",
    "SupportSpring",
    "SpringElement",
    "ActiveState",
    "Structure",
    "DOF_ORDER",
    "LOAD_ORDER",
    "RestraintMask6",
    "Values6",
    "dof_index",
    "make_restraint_mask",
]
