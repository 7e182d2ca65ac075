from __future__ import annotations

from typing import TYPE_CHECKING, Dict, Optional

if TYPE_CHECKING:
    from springfem.model.spring import ActiveState


class SpringFemError(Exception):
    """Base class for analysis errors raised by springfem."""


class GeometryError(SpringFemError, ValueError):
    """Element geometry cannot define a local axis system (e.g. zero length)."""


class NumericalError(SpringFemError, ArithmeticError):
    """A matrix failed an invariant that valid geometry always satisfies."""


class NonConvergenceError(SpringFemError, RuntimeError):
    """
    Tension/compression-only iteration hit the iteration cap.

    The last computed active states are attached so callers can inspect the
    (possibly inconsistent) assignment instead of treating it as final.
    """

    def __init__(
        self,
        combo_name: str,
        iterations: int,
        active_states: Optional[Dict[str, "ActiveState"]] = None,
    ) -> None:
        self.combo_name = combo_name
        self.iterations = iterations
        self.active_states = dict(active_states or {})
        super().__init__(
            f"tension/compression-only analysis for combination '{combo_name}' "
            f"did not converge after {iterations} iteration(s)"
        )


class MissingCombinationData(SpringFemError, LookupError):
    """A node has no stored results for the requested load combination."""

    def __init__(self, node_name: str, combo_name: str, what: str = "displacement") -> None:
        self.node_name = node_name
        self.combo_name = combo_name
        super().__init__(f"node {node_name} has no {what} for combination '{combo_name}' (not solved yet)")
