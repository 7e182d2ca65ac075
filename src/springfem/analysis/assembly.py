from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List

import numpy as np

from springfem.model.dof import DOF_ORDER, DOF_PER_NODE
from springfem.model.node import Node
from springfem.model.structure import Structure

logger = logging.getLogger(__name__)


@dataclass
class AssemblyResult:
    k_full: np.ndarray  # springs + support springs
    k_elements: np.ndarray  # springs only
    k_support: np.ndarray  # diagonal support spring stiffness per dof
    f_full: np.ndarray
    free_dofs: List[int]
    restrained_dofs: List[int]
    mask: List[bool]
    prescribed: Dict[int, float]


def node_dofs(node: Node) -> List[int]:
    if node.id is None:
        raise ValueError(f"node {node.name} has no id; call Structure.renumber() before assembly")
    base = node.id * DOF_PER_NODE
    return [base + local for local in range(DOF_PER_NODE)]


def assemble_global_system(structure: Structure, combo_name: str) -> AssemblyResult:
    """
    Assemble the global system for one load combination.

    Springs contribute only while active for ``combo_name``; directional
    support springs likewise. DOFs left without any stiffness (rotations of a
    spring-only model, nodes isolated by deactivated springs) are restrained
    at zero so the reduced system stays solvable.
    """
    combo = structure.load_combos[combo_name]
    total_dofs = len(structure.nodes) * DOF_PER_NODE
    mask = [False for _ in range(total_dofs)]
    prescribed: Dict[int, float] = {}

    k_elements = np.zeros((total_dofs, total_dofs), dtype=float)
    k_support = np.zeros(total_dofs, dtype=float)
    f_full = np.zeros(total_dofs, dtype=float)

    active_count = 0
    for spring in structure.springs.values():
        if not spring.is_active(combo_name):
            continue
        active_count += 1
        dof_indices = node_dofs(spring.i_node) + node_dofs(spring.j_node)
        k_elements[np.ix_(dof_indices, dof_indices)] += spring.global_stiffness()

    for node in structure.nodes.values():
        dofs = node_dofs(node)
        f_full[dofs] += node.load_vector(combo.factors)
        for local in range(DOF_PER_NODE):
            dof_idx = dofs[local]
            support_spring = node.springs[local]
            if support_spring is not None and support_spring.is_active(combo_name):
                k_support[dof_idx] += support_spring.stiffness
            if node.support[local]:
                mask[dof_idx] = True
            enforced = node.enforced[local]
            if enforced is not None:
                mask[dof_idx] = True
                prescribed[dof_idx] = float(enforced)

    k_full = k_elements + np.diag(k_support)

    for dof_idx in range(total_dofs):
        if mask[dof_idx] or k_full[dof_idx, dof_idx] != 0.0:
            continue
        mask[dof_idx] = True
        if f_full[dof_idx] != 0.0:
            node_name, label = _describe_dof(structure, dof_idx)
            logger.warning(
                "combination '%s': load %s on node %s acts on a dof with no stiffness and is carried by a fictitious support",
                combo_name,
                label,
                node_name,
            )

    free_dofs = [i for i, restrained in enumerate(mask) if not restrained]
    restrained_dofs = [i for i, restrained in enumerate(mask) if restrained]
    logger.debug(
        "combination '%s': assembled %d active spring(s), %d free / %d restrained dofs",
        combo_name,
        active_count,
        len(free_dofs),
        len(restrained_dofs),
    )

    return AssemblyResult(
        k_full=k_full,
        k_elements=k_elements,
        k_support=k_support,
        f_full=f_full,
        free_dofs=free_dofs,
        restrained_dofs=restrained_dofs,
        mask=mask,
        prescribed=prescribed,
    )


def _describe_dof(structure: Structure, dof_idx: int):
    node_id, local = divmod(dof_idx, DOF_PER_NODE)
    for node in structure.nodes.values():
        if node.id == node_id:
            return node.name, DOF_ORDER[local]
    return str(node_id), DOF_ORDER[local]
