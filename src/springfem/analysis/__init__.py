from __future__ import annotations

import logging
from typing import List, Optional

import numpy as np

from springfem.analysis.activation import ActivationController
from springfem.analysis.assembly import AssemblyResult, assemble_global_system, node_dofs
from springfem.analysis.settings import AnalysisSettings
from springfem.analysis.solver_linear import LinearSolution, solve_linear_system
from springfem.errors import NonConvergenceError
from springfem.log import configure_logging
from springfem.model.node import DEFAULT_CASE
from springfem.model.structure import Structure
from springfem.results.combo_result import AnalysisReport, ComboResult, SpringResult

logger = logging.getLogger(__name__)

DEFAULT_COMBO = "Combo 1"


def run_analysis(structure: Structure, settings: Optional[AnalysisSettings] = None) -> AnalysisReport:
    """
    Solve every load combination (optionally filtered by tag).

    A combination that fails to converge is logged and recorded in
    ``report.failures``; the remaining combinations are still solved.
    """
    chosen = settings or AnalysisSettings()
    chosen.validate()
    if chosen.verbose:
        configure_logging(debug=True)

    structure.validate()
    if not structure.load_combos:
        structure.add_load_combo(DEFAULT_COMBO, factors={DEFAULT_CASE: 1.0})
    structure.renumber()
    if chosen.reset_activation:
        structure.reset_activation()

    report = AnalysisReport()
    for combo in structure.load_combos_for(chosen.combo_tags):
        for node in structure.nodes.values():
            node.clear_results(combo.name)
        try:
            report.results[combo.name] = solve_combination(structure, combo.name, chosen)
        except NonConvergenceError as exc:
            logger.warning("%s; continuing with the remaining combinations", exc)
            report.failures[combo.name] = exc
    return report


def solve_combination(structure: Structure, combo_name: str, settings: Optional[AnalysisSettings] = None) -> ComboResult:
    """
    Tension/compression-only analysis of a single combination.

    Node displacements and reactions for ``combo_name`` are stored on the
    nodes. Raises NonConvergenceError if the active flags do not settle
    within ``settings.max_iter`` solves; the displacements of the last solve
    are left on the nodes.
    """
    chosen = settings or AnalysisSettings()
    chosen.validate()
    if combo_name not in structure.load_combos:
        raise KeyError(f"load combination {combo_name} not found")
    # ids must be contiguous; nodes may have been removed since the last renumber
    structure.renumber()

    controller = ActivationController(
        structure.springs.values(),
        structure.nodes.values(),
        max_iter=chosen.max_iter,
        reactivate=chosen.reactivate,
    )
    last_assembly: Optional[AssemblyResult] = None
    last_solution: Optional[LinearSolution] = None

    def solve(name: str) -> None:
        nonlocal last_assembly, last_solution
        last_assembly = assemble_global_system(structure, name)
        last_solution = solve_linear_system(last_assembly)
        _store_displacements(structure, name, last_solution.displacements)

    iterations = controller.run(combo_name, solve)
    _store_reactions(structure, combo_name, last_assembly, last_solution.reactions)
    return _collect_result(structure, combo_name, iterations)


def _store_displacements(structure: Structure, combo_name: str, displacements: np.ndarray) -> None:
    for node in structure.nodes.values():
        node.set_displacement(combo_name, displacements[node_dofs(node)])


def _store_reactions(structure: Structure, combo_name: str, assembly: AssemblyResult, reactions: np.ndarray) -> None:
    for node in structure.nodes.values():
        values: List[float] = []
        for dof_idx in node_dofs(node):
            supported = assembly.mask[dof_idx] or assembly.k_support[dof_idx] != 0.0
            values.append(float(reactions[dof_idx]) if supported else 0.0)
        node.set_reaction(combo_name, values)


def _collect_result(structure: Structure, combo_name: str, iterations: int) -> ComboResult:
    result = ComboResult(combo_name=combo_name, iterations=iterations)
    for name, node in structure.nodes.items():
        result.node_displacements[name] = node.displacement(combo_name)
        result.reactions[name] = node.reaction(combo_name)
    for name, spring in structure.springs.items():
        result.spring_results[name] = SpringResult(
            spring_name=name,
            state=spring.state(combo_name),
            axial_force=spring.axial_force(combo_name),
        )
    return result


__all__ = [
    "AnalysisSettings",
    "ActivationController",
    "assemble_global_system",
    "solve_linear_system",
    "solve_combination",
    "run_analysis",
]
