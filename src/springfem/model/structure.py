from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence

from springfem.core.material import Material
from springfem.loads.loadcombo import LoadCombination
from springfem.model.node import DEFAULT_CASE, Node, NodeLoad, SpringDirection, SupportSpring
from springfem.model.spring import SpringElement


@dataclass
class Structure:
    """
    User-facing spring model.

    Owns the node, spring, material and load combination registries. Nodes
    are shared by the springs that reference them; results live on the nodes
    and active states on the springs, both keyed by combination name.
    """

    nodes: Dict[str, Node] = field(default_factory=dict)
    springs: Dict[str, SpringElement] = field(default_factory=dict)
    materials: Dict[str, Material] = field(default_factory=dict)
    load_combos: Dict[str, LoadCombination] = field(default_factory=dict)

    def add_node(self, name: str, x: float, y: float, z: float) -> Node:
        if name in self.nodes:
            raise ValueError(f"node {name} already exists")
        node = Node(name, (x, y, z))
        self.nodes[name] = node
        return node

    def add_spring(
        self,
        name: str,
        i_node: str,
        j_node: str,
        ks: float,
        tension_only: bool = False,
        comp_only: bool = False,
    ) -> SpringElement:
        if name in self.springs:
            raise ValueError(f"spring {name} already exists")
        spring = SpringElement(
            name,
            self._require_node(i_node),
            self._require_node(j_node),
            ks,
            tension_only=tension_only,
            comp_only=comp_only,
        )
        self.springs[name] = spring
        return spring

    def add_material(self, material: Material) -> None:
        if material.name in self.materials:
            raise ValueError(f"material {material.name} already exists")
        self.materials[material.name] = material

    def add_load_combo(
        self,
        name: str,
        factors: Optional[Dict[str, float]] = None,
        tags: Optional[Sequence[str]] = None,
    ) -> LoadCombination:
        if name in self.load_combos:
            raise ValueError(f"load combination {name} already exists")
        combo = LoadCombination(name, list(tags or []), dict(factors or {}))
        self.load_combos[name] = combo
        return combo

    def remove_node(self, name: str) -> None:
        node = self._require_node(name)
        if any(spring.i_node is node or spring.j_node is node for spring in self.springs.values()):
            raise ValueError("cannot remove node while springs reference it")
        self.nodes.pop(name)

    def remove_spring(self, name: str) -> None:
        if name not in self.springs:
            raise KeyError(f"spring {name} not found")
        self.springs.pop(name)

    # -- boundary conditions and loads ---------------------------------------

    def def_support(
        self,
        node_name: str,
        support_DX: bool = False,
        support_DY: bool = False,
        support_DZ: bool = False,
        support_RX: bool = False,
        support_RY: bool = False,
        support_RZ: bool = False,
    ) -> None:
        self._require_node(node_name).set_support(
            DX=support_DX, DY=support_DY, DZ=support_DZ, RX=support_RX, RY=support_RY, RZ=support_RZ
        )

    def def_support_spring(
        self, node_name: str, dof: str, stiffness: float, direction: SpringDirection = None
    ) -> SupportSpring:
        spring = SupportSpring(float(stiffness), direction)
        self._require_node(node_name).set_spring(dof, spring)
        return spring

    def def_enforced(self, node_name: str, dof: str, value: Optional[float]) -> None:
        self._require_node(node_name).set_enforced(dof, value)

    def add_node_load(self, node_name: str, direction: str, magnitude: float, case: str = DEFAULT_CASE) -> None:
        self._require_node(node_name).loads.append(NodeLoad(direction, magnitude, case))

    # -- bookkeeping ---------------------------------------------------------

    def renumber(self) -> None:
        """Assign stable integer ids to nodes and springs in insertion order."""
        for index, node in enumerate(self.nodes.values()):
            node.id = index
        for index, spring in enumerate(self.springs.values()):
            spring.id = index

    def load_combos_for(self, tags: Optional[Iterable[str]] = None) -> List[LoadCombination]:
        if tags is None:
            return list(self.load_combos.values())
        wanted = list(tags)
        return [combo for combo in self.load_combos.values() if combo.has_any_tag(wanted)]

    def reset_results(self) -> None:
        for node in self.nodes.values():
            node.clear_results()

    def reset_activation(self) -> None:
        for spring in self.springs.values():
            spring.reset_activation()
        for node in self.nodes.values():
            for support_spring in node.springs:
                if support_spring is not None:
                    support_spring.active.clear()

    def validate(self) -> None:
        if not self.nodes:
            raise ValueError("structure must contain at least one node")
        for spring in self.springs.values():
            if self.nodes.get(spring.i_node.name) is not spring.i_node or self.nodes.get(spring.j_node.name) is not spring.j_node:
                raise ValueError(f"spring {spring.name} references nodes outside this structure")

    def _require_node(self, name: str) -> Node:
        if name not in self.nodes:
            raise KeyError(f"node {name} not found in structure")
        return self.nodes[name]
