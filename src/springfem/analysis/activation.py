from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List

from springfem.errors import NonConvergenceError
from springfem.model.dof import DOF_ORDER
from springfem.model.node import Node
from springfem.model.spring import ActiveState, SpringElement

logger = logging.getLogger(__name__)

SolveStep = Callable[[str], None]


@dataclass(frozen=True)
class ActivationChange:
    target: str  # spring name, or "node:DOF" for support springs
    combo_name: str
    active: bool
    value: float  # axial force (springs) or nodal displacement (support springs)


def spring_should_stay_active(spring: SpringElement, axial: float) -> bool:
    """Transition rule for an active spring given its axial force (N>0 tension)."""
    if spring.tension_only and axial < 0.0:
        return False
    if spring.comp_only and axial > 0.0:
        return False
    return True


def spring_should_reactivate(spring: SpringElement, trial_axial: float) -> bool:
    """Reactivation rule for an inactive spring given the force it would carry if active."""
    if spring.tension_only and trial_axial > 0.0:
        return True
    if spring.comp_only and trial_axial < 0.0:
        return True
    return False


class ActivationController:
    """
    Tension/compression-only activation for one structure.

    The controller is the only writer of spring and support-spring active
    flags. Each combination's flags are independent, so different
    combinations may be driven by separate controllers concurrently as long
    as each one only runs its own combination.

    Springs start ACTIVE for a combination unless an earlier run already
    recorded a state. After every solve, active tension-only springs in
    compression (and compression-only springs in tension) are deactivated.
    Inactive springs stay inactive unless ``reactivate`` is set, in which case
    they are switched back on when their trial force has the allowed sign.
    Directional support springs always follow the sign of their nodal
    displacement.
    """

    def __init__(
        self,
        springs: Iterable[SpringElement],
        nodes: Iterable[Node] = (),
        max_iter: int = 30,
        reactivate: bool = False,
    ) -> None:
        if max_iter <= 0:
            raise ValueError("max_iter must be positive")
        self.springs: List[SpringElement] = list(springs)
        self.nodes: List[Node] = list(nodes)
        self.max_iter = max_iter
        self.reactivate = reactivate

    def begin(self, combo_name: str) -> None:
        for spring in self.springs:
            if spring.state(combo_name) is ActiveState.UNSOLVED:
                spring.set_active(combo_name, True)
        for node in self.nodes:
            for support_spring in node.springs:
                if support_spring is not None and combo_name not in support_spring.active:
                    support_spring.active[combo_name] = True

    def update(self, combo_name: str) -> List[ActivationChange]:
        """Apply the transition rules once, using the displacements currently stored on the nodes."""
        changes: List[ActivationChange] = []

        for spring in self.springs:
            if not spring.is_restricted:
                continue
            if spring.is_active(combo_name):
                axial = spring.axial_force(combo_name)
                if not spring_should_stay_active(spring, axial):
                    spring.set_active(combo_name, False)
                    changes.append(ActivationChange(spring.name, combo_name, False, axial))
            elif self.reactivate:
                trial = spring.axial_force(combo_name, active=True)
                if spring_should_reactivate(spring, trial):
                    spring.set_active(combo_name, True)
                    changes.append(ActivationChange(spring.name, combo_name, True, trial))

        for node in self.nodes:
            for local, support_spring in enumerate(node.springs):
                if support_spring is None or support_spring.direction is None:
                    continue
                displacement = node.displacement(combo_name)[local]
                if displacement == 0.0:
                    continue
                resists = support_spring.resists(displacement)
                if support_spring.is_active(combo_name) != resists:
                    support_spring.active[combo_name] = resists
                    changes.append(
                        ActivationChange(f"{node.name}:{DOF_ORDER[local]}", combo_name, resists, displacement)
                    )

        for change in changes:
            logger.debug(
                "combination '%s': %s %s (value %.6g)",
                combo_name,
                change.target,
                "activated" if change.active else "deactivated",
                change.value,
            )
        return changes

    def run(self, combo_name: str, solve: SolveStep) -> int:
        """
        Iterate solve -> update until no flag changes for ``combo_name``.

        ``solve`` must assemble using the current active flags and store the
        resulting displacements on the nodes. Returns the number of solves.
        Raises NonConvergenceError when ``max_iter`` solves leave flags still
        changing; the flags keep their last values.
        """
        self.begin(combo_name)
        for iteration in range(1, self.max_iter + 1):
            solve(combo_name)
            changes = self.update(combo_name)
            if not changes:
                logger.debug("combination '%s': activation converged after %d iteration(s)", combo_name, iteration)
                return iteration
            logger.debug("combination '%s': iteration %d changed %d flag(s)", combo_name, iteration, len(changes))

        raise NonConvergenceError(combo_name, self.max_iter, self.states(combo_name))

    def states(self, combo_name: str) -> Dict[str, ActiveState]:
        return {spring.name: spring.state(combo_name) for spring in self.springs}

