"""
Construção do grafo de dependências sobre o *present set*.

Nós são os componentes presentes (em ordem de catálogo); arestas vão da
dependência para o dependente. Dependências ausentes não viram arestas:
são registradas como anotação `unsatisfied` contra o dependente, e a
decisão de excluí-lo fica com o selector.

Invariantes:
    - Nenhuma aresta referencia um nó ausente
    - Nenhuma auto-aresta (configuração inválida → InvalidSpecError)
    - Arestas e anotações seguem ordem determinística (catálogo, depois
      ordem declarada das dependências)

Limites explícitos:
    - Não ordena nós (ver `planner.sort_graph`)
    - Não aplica políticas core/opcional
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from atlas_buildplan.core.discovery.probe import PresentComponent
from atlas_buildplan.core.exceptions import InvalidSpecError
from atlas_buildplan.core.run_context import LEVEL_INFO, PlanContext

STAGE = "graph"


@dataclass(frozen=True)
class DependencyGraph:
    """
    Grafo dirigido imutável `dependência → dependente`.

    Campos:
        - nodes: nomes presentes, em ordem de catálogo
        - edges: pares (dependency, dependent)
        - unsatisfied: dependências ausentes por dependente
    """

    nodes: Tuple[str, ...]
    edges: Tuple[Tuple[str, str], ...] = ()
    unsatisfied: Mapping[str, Tuple[str, ...]] = field(default_factory=dict)
    _successors: Mapping[str, Tuple[str, ...]] = field(default_factory=dict, init=False, repr=False, compare=False)
    _predecessors: Mapping[str, Tuple[str, ...]] = field(default_factory=dict, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        node_set = set(self.nodes)
        if len(node_set) != len(self.nodes):
            raise InvalidSpecError("graph nodes must be unique")

        succ: Dict[str, List[str]] = {n: [] for n in self.nodes}
        pred: Dict[str, List[str]] = {n: [] for n in self.nodes}
        for dep, dependent in self.edges:
            if dep not in node_set or dependent not in node_set:
                raise ValueError(f"edge references unknown node: {dep} -> {dependent}")
            if dep == dependent:
                raise InvalidSpecError(
                    f"component '{dep}' depends on itself",
                    details={"component": dep},
                )
            if dependent not in succ[dep]:
                succ[dep].append(dependent)
                pred[dependent].append(dep)

        object.__setattr__(self, "unsatisfied", MappingProxyType(dict(self.unsatisfied)))
        object.__setattr__(self, "_successors", MappingProxyType({k: tuple(v) for k, v in succ.items()}))
        object.__setattr__(self, "_predecessors", MappingProxyType({k: tuple(v) for k, v in pred.items()}))

    def __contains__(self, name: object) -> bool:
        return name in self._successors

    def successors(self, name: str) -> Tuple[str, ...]:
        """Dependentes diretos de `name`."""
        return self._successors[name]

    def predecessors(self, name: str) -> Tuple[str, ...]:
        """Dependências diretas (presentes) de `name`."""
        return self._predecessors[name]

    def in_degree(self, name: str) -> int:
        return len(self._predecessors[name])


def build_graph(present: Iterable[PresentComponent], *, ctx: Optional[PlanContext] = None) -> DependencyGraph:
    """
    Constrói o grafo de dependências a partir dos componentes presentes.

    Para cada componente presente e cada uma de suas dependências:
        - dependência presente → aresta `dependency → dependent`
        - dependência ausente  → anotação `unsatisfied[dependent]`

    Args:
        present: componentes presentes, em ordem de catálogo.
        ctx: contexto opcional para registrar as anotações.

    Returns:
        DependencyGraph: grafo restrito ao *present set*.

    Raises:
        InvalidSpecError: nome duplicado ou componente dependendo de si mesmo.
    """
    components = list(present)
    names: List[str] = []
    for p in components:
        if p.name in names:
            raise InvalidSpecError(
                f"duplicate present component: {p.name}",
                details={"component": p.name},
            )
        names.append(p.name)
    present_names = set(names)

    edges: List[Tuple[str, str]] = []
    unsatisfied: Dict[str, Tuple[str, ...]] = {}
    for p in components:
        missing: List[str] = []
        for dep in p.dependencies:
            if dep == p.name:
                raise InvalidSpecError(
                    f"component '{p.name}' depends on itself",
                    details={"component": p.name},
                )
            if dep in present_names:
                edges.append((dep, p.name))
            else:
                missing.append(dep)

        if missing:
            unsatisfied[p.name] = tuple(missing)
            if ctx is not None:
                ctx.log(
                    stage=STAGE,
                    level=LEVEL_INFO,
                    message=f"absent dependencies: {', '.join(missing)}",
                    component=p.name,
                    annotation="unsatisfied_dependency",
                    missing=list(missing),
                )

    return DependencyGraph(nodes=tuple(names), edges=tuple(edges), unsatisfied=unsatisfied)
