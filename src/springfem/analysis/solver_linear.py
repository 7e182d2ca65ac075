from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List

import numpy as np

from springfem.analysis.assembly import AssemblyResult

logger = logging.getLogger(__name__)


@dataclass
class LinearSolution:
    displacements: np.ndarray  # full vector
    reactions: np.ndarray  # full vector: element forces - applied loads
    free_dofs: List[int]
    restrained_dofs: List[int]


def solve_linear_system(assembly: AssemblyResult) -> LinearSolution:
    k_full = assembly.k_full
    f_full = assembly.f_full
    free = assembly.free_dofs
    restrained = assembly.restrained_dofs

    # known displacements at restrained dofs (supports default 0, enforced override)
    u_full = np.zeros_like(f_full)
    for dof_idx, value in assembly.prescribed.items():
        u_full[int(dof_idx)] = float(value)

    if free:
        k_ff = k_full[np.ix_(free, free)]
        rhs = f_full[free]
        if restrained:
            k_fc = k_full[np.ix_(free, restrained)]
            rhs = rhs - k_fc @ u_full[restrained]

        try:
            u_f = np.linalg.solve(k_ff, rhs)
        except np.linalg.LinAlgError:
            logger.warning("global stiffness matrix is singular; falling back to a least-squares solution")
            u_f, _, _, _ = np.linalg.lstsq(k_ff, rhs, rcond=None)
        u_full[free] = u_f

    # Support springs are external supports: their force is part of the reaction,
    # so only the spring elements enter the residual.
    reactions = assembly.k_elements @ u_full - f_full

    return LinearSolution(
        displacements=u_full,
        reactions=reactions,
        free_dofs=free,
        restrained_dofs=restrained,
    )
