"""
springfem - 3D axial spring analysis with tension/compression-only springs.

- Spring elements: local/global stiffness, transformation, end forces
- Per-load-combination node results and spring activation state
- Tension/compression-only active-set iteration
"""

import logging

from springfem.analysis import run_analysis, solve_combination
from springfem.analysis.activation import ActivationController
from springfem.analysis.settings import AnalysisSettings
from springfem.core.material import Material
from springfem.errors import GeometryError, MissingCombinationData, NonConvergenceError, NumericalError, SpringFemError
from springfem.loads.loadcombo import LoadCombination
from springfem.model.node import Node, NodeLoad, SupportSpring
from springfem.model.spring import ActiveState, SpringElement
from springfem.model.structure import Structure
from springfem.results.combo_result import AnalysisReport, ComboResult, SpringResult

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "Structure",
    "Node",
    "NodeLoad",
    "SupportSpring",
    "SpringElement",
    "ActiveState",
    "LoadCombination",
    "Material",
    "AnalysisSettings",
    "ActivationController",
    "AnalysisReport",
    "ComboResult",
    "SpringResult",
    "SpringFemError",
    "GeometryError",
    "NumericalError",
    "NonConvergenceError",
    "MissingCombinationData",
    "run_analysis",
    "solve_combination",
]
