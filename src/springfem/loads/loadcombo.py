from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional


@dataclass
class LoadCombination:
    """
    Named, factored set of load cases.

    Pure value: the analysis only uses ``name`` as a lookup key; ``factors``
    are read by the load assembly step. Equality and hashing are structural.
    """

    name: str
    tags: List[str] = field(default_factory=list)
    factors: Dict[str, float] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("load combination name cannot be empty")
        self.tags = list(self.tags)
        self.factors = {str(case): float(factor) for case, factor in self.factors.items()}

    def add_case(self, case_name: str, factor: float) -> None:
        self.factors[case_name] = float(factor)

    def delete_case(self, case_name: str) -> None:
        if case_name not in self.factors:
            raise KeyError(f"load case {case_name} not found in combination {self.name}")
        del self.factors[case_name]

    def has_any_tag(self, tags: Optional[Iterable[str]]) -> bool:
        if tags is None:
            return True
        return any(tag in self.tags for tag in tags)

    def __hash__(self) -> int:
        return hash((self.name, tuple(self.tags), frozenset(self.factors.items())))
