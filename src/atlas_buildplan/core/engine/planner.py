"""
Ordenação topológica determinística do grafo de dependências.

Este módulo produz a ordem linear de build a partir do
`DependencyGraph`, garantindo que toda dependência apareça antes de
seus dependentes.

Decisões arquiteturais:
    - Utiliza o algoritmo de Kahn com heap de prontos
    - Empates são resolvidos pela ordem de declaração do catálogo
      (ordem dos nós do grafo), nunca pela ordem lexicográfica
    - Ciclos não levantam exceção: o sorter reporta `cyclic=True` e os
      membros do ciclo, e o chamador decide a política

Tratamento de ciclos:
    - Quando o Kahn para com nós não visitados, os nós que pertencem a
      uma componente fortemente conexa de tamanho > 1 são os membros do
      ciclo (Tarjan restrito aos nós restantes)
    - Os membros são removidos e o Kahn continua: nós a jusante do ciclo,
      que não pertencem a ele, ainda recebem posição em `order` e serão
      reportados pelo selector como dependência insatisfeita

Invariantes:
    - Para toda aresta (d → c) com ambos em `order`, index(d) < index(c)
    - Membros de ciclo nunca aparecem em `order`
    - A mesma entrada produz sempre a mesma saída, byte a byte

Limites explícitos:
    - Não filtra por presença ou tier (ver `selector`)
    - Não levanta CyclicDependencyError (ver `engine`)
"""

from __future__ import annotations

import heapq
from dataclasses import dataclass
from typing import Dict, List, Set, Tuple

from .graph import DependencyGraph


@dataclass(frozen=True)
class SortResult:
    """Saída do sorter: ordem, flag de ciclo e membros do ciclo (ordem de catálogo)."""

    order: Tuple[str, ...]
    cyclic: bool = False
    cycle_members: Tuple[str, ...] = ()


def _strongly_connected(graph: DependencyGraph, nodes: List[str]) -> List[List[str]]:
    """Tarjan restrito a `nodes`; retorna as SCCs encontradas."""
    allowed = set(nodes)
    index_of: Dict[str, int] = {}
    lowlink: Dict[str, int] = {}
    stack: List[str] = []
    on_stack: Set[str] = set()
    components: List[List[str]] = []
    counter = [0]

    def visit(v: str) -> None:
        index_of[v] = lowlink[v] = counter[0]
        counter[0] += 1
        stack.append(v)
        on_stack.add(v)

        for w in graph.successors(v):
            if w not in allowed:
                continue
            if w not in index_of:
                visit(w)
                lowlink[v] = min(lowlink[v], lowlink[w])
            elif w in on_stack:
                lowlink[v] = min(lowlink[v], index_of[w])

        if lowlink[v] == index_of[v]:
            scc: List[str] = []
            while True:
                w = stack.pop()
                on_stack.discard(w)
                scc.append(w)
                if w == v:
                    break
            components.append(scc)

    for v in nodes:
        if v not in index_of:
            visit(v)
    return components


def sort_graph(graph: DependencyGraph) -> SortResult:
    """
    Ordena os nós do grafo com Kahn determinístico.

    Sempre que múltiplos nós estiverem prontos, o de menor posição no
    catálogo é escolhido.

    Args:
        graph: grafo restrito ao *present set*.

    Returns:
        SortResult: `order` com todos os nós fora de ciclos; `cyclic` e
        `cycle_members` descrevendo ciclos, se houver.
    """
    position = {name: i for i, name in enumerate(graph.nodes)}
    incoming_count: Dict[str, int] = {name: graph.in_degree(name) for name in graph.nodes}

    ready: List[Tuple[int, str]] = [(position[n], n) for n, c in incoming_count.items() if c == 0]
    heapq.heapify(ready)
    order: List[str] = []
    visited: Set[str] = set()

    def drain() -> None:
        while ready:
            _, name = heapq.heappop(ready)
            order.append(name)
            visited.add(name)
            for child in graph.successors(name):
                incoming_count[child] -= 1
                if incoming_count[child] == 0:
                    heapq.heappush(ready, (position[child], child))

    drain()

    if len(order) == len(graph.nodes):
        return SortResult(order=tuple(order))

    remaining = [n for n in graph.nodes if n not in visited]
    members: Set[str] = set()
    for scc in _strongly_connected(graph, remaining):
        if len(scc) > 1:
            members.update(scc)

    # remove os membros do ciclo e libera os nós a jusante
    for m in sorted(members, key=position.__getitem__):
        for child in graph.successors(m):
            if child in members or child in visited:
                continue
            incoming_count[child] -= 1
            if incoming_count[child] == 0:
                heapq.heappush(ready, (position[child], child))
    drain()

    cycle_members = tuple(n for n in graph.nodes if n in members)
    return SortResult(order=tuple(order), cyclic=True, cycle_members=cycle_members)
