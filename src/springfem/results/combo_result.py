from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict

from springfem.errors import NonConvergenceError
from springfem.model.dof import Values6
from springfem.model.spring import ActiveState


@dataclass
class SpringResult:
    spring_name: str
    state: ActiveState
    axial_force: float


@dataclass
class ComboResult:
    combo_name: str
    iterations: int
    node_displacements: Dict[str, Values6] = field(default_factory=dict)
    reactions: Dict[str, Values6] = field(default_factory=dict)
    spring_results: Dict[str, SpringResult] = field(default_factory=dict)

    def displacement_at(self, node_name: str) -> Values6:
        if node_name not in self.node_displacements:
            raise KeyError(f"displacement for node {node_name} not found")
        return self.node_displacements[node_name]

    def reaction_at(self, node_name: str) -> Values6:
        if node_name not in self.reactions:
            raise KeyError(f"reaction for node {node_name} not found")
        return self.reactions[node_name]

    def spring(self, spring_name: str) -> SpringResult:
        if spring_name not in self.spring_results:
            raise KeyError(f"spring result for {spring_name} not found")
        return self.spring_results[spring_name]


@dataclass
class AnalysisReport:
    results: Dict[str, ComboResult] = field(default_factory=dict)
    failures: Dict[str, NonConvergenceError] = field(default_factory=dict)

    @property
    def converged(self) -> bool:
        return not self.failures

    def __getitem__(self, combo_name: str) -> ComboResult:
        if combo_name in self.failures:
            raise self.failures[combo_name]
        if combo_name not in self.results:
            raise KeyError(f"no result for combination {combo_name}")
        return self.results[combo_name]
