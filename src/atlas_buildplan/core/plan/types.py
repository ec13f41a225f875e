"""
Tipos canônicos do plano de build do Atlas BuildPlan.

Este módulo define as estruturas que formam a única saída externamente
visível do engine: o `BuildPlan`.

Componentes principais:
    - SkipReason       → motivo legível por máquina de um componente pulado
    - ComponentState   → estado terminal de cada componente catalogado
    - SkippedComponent → registro imutável de um componente pulado
    - BuildPlan        → ordem filtrada + skips + flag de degradação

Princípios fundamentais:
    - Tipos são estáveis e serializáveis (enums com valores textuais)
    - Um BuildPlan é imutável depois de retornado
    - O plano referencia componentes apenas por nome

Invariantes:
    - `selected` respeita a ordem topológica produzida pelo sorter
    - Todo componente catalogado aparece em exatamente um de
      `selected` / `skipped`
    - `degraded` é verdadeiro sse algum componente core foi pulado por
      dependência insatisfeita

Limites explícitos:
    - Não contém comandos de build
    - Não decide políticas de falha
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple

from atlas_buildplan.core.catalog.schema import Tier


class SkipReason(str, Enum):
    """
    Motivo pelo qual um componente não entrou em `selected`.

    Valores:
        - ABSENT_FROM_DISK: diretório ou arquivo descritor ausente
        - UNSATISFIED_DEPENDENCY: alguma dependência obrigatória não foi selecionada
        - CYCLIC_DEPENDENCY: o componente pertence a um ciclo de dependências
    """

    ABSENT_FROM_DISK = "absent_from_disk"
    UNSATISFIED_DEPENDENCY = "unsatisfied_dependency"
    CYCLIC_DEPENDENCY = "cyclic_dependency"


class ComponentState(str, Enum):
    """Estados terminais da máquina de estados de um componente."""

    SELECTED = "selected"
    SKIPPED_ABSENT = "skipped_absent"
    SKIPPED_UNSATISFIED = "skipped_unsatisfied"
    SKIPPED_CYCLIC = "skipped_cyclic"


STATE_BY_REASON: Mapping[SkipReason, ComponentState] = MappingProxyType({
    SkipReason.ABSENT_FROM_DISK: ComponentState.SKIPPED_ABSENT,
    SkipReason.UNSATISFIED_DEPENDENCY: ComponentState.SKIPPED_UNSATISFIED,
    SkipReason.CYCLIC_DEPENDENCY: ComponentState.SKIPPED_CYCLIC,
})


@dataclass(frozen=True)
class SkippedComponent:
    """
    Registro imutável de um componente pulado.

    Campos:
        - name: nome do componente
        - reason: SkipReason canônico
        - tier: tier do componente no catálogo
        - missing: dependências responsáveis pelo skip (quando aplicável)
        - silent: True quando o skip não gera warning (tier opcional)
    """

    name: str
    reason: SkipReason
    tier: Tier
    missing: Tuple[str, ...] = ()
    silent: bool = False

    @property
    def state(self) -> ComponentState:
        return STATE_BY_REASON[self.reason]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "reason": self.reason.value,
            "tier": self.tier.value,
            "missing": list(self.missing),
            "silent": self.silent,
        }


@dataclass(frozen=True)
class BuildPlan:
    """
    Plano de build final, imutável.

    Campos:
        - selected: nomes a construir, em ordem de build
        - skipped: componentes pulados, em ordem de catálogo
        - degraded: algum componente core foi pulado por dependência insatisfeita
        - cyclic: o sorter detectou ciclo no grafo
        - cycle_members: componentes que formam ciclos (ordem de catálogo)
        - warnings: mensagens não silenciosas, em ordem de emissão
    """

    selected: Tuple[str, ...] = ()
    skipped: Tuple[SkippedComponent, ...] = ()
    degraded: bool = False
    cyclic: bool = False
    cycle_members: Tuple[str, ...] = ()
    warnings: Tuple[str, ...] = ()
    _states: Mapping[str, ComponentState] = field(
        default_factory=dict, init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        states: Dict[str, ComponentState] = {name: ComponentState.SELECTED for name in self.selected}
        for s in self.skipped:
            states[s.name] = s.state
        object.__setattr__(self, "_states", MappingProxyType(states))

    @property
    def states(self) -> Mapping[str, ComponentState]:
        return self._states

    def state_of(self, name: str) -> ComponentState:
        return self._states[name]

    def skipped_by(self, reason: SkipReason) -> List[SkippedComponent]:
        return [s for s in self.skipped if s.reason is reason]

    def skip_for(self, name: str) -> Optional[SkippedComponent]:
        for s in self.skipped:
            if s.name == name:
                return s
        return None

    def index(self, name: str) -> int:
        return self.selected.index(name)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "selected": list(self.selected),
            "skipped": [s.to_dict() for s in self.skipped],
            "degraded": self.degraded,
            "cyclic": self.cyclic,
            "cycle_members": list(self.cycle_members),
            "warnings": list(self.warnings),
        }
