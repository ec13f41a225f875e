"""
Build actions (v1)

Objetivo:
- Transformar `BuildPlan.selected` em uma sequência linear de ações
  opacas (clone, configure, compile, install, test, package).
- NÃO gera texto de shell nem YAML de pipeline.
- NÃO altera o plano.

Ordem de emissão (mesma do workflow de CI de referência):
1. fase de build, componente a componente: clone → configure → compile → install
2. testes de todos os componentes, na ordem do plano
3. empacotamento de todos os componentes, na ordem do plano
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterable, List, Tuple

from atlas_buildplan.core.plan.types import BuildPlan


class BuildPhase(str, Enum):
    CLONE = "clone"
    CONFIGURE = "configure"
    COMPILE = "compile"
    INSTALL = "install"
    TEST = "test"
    PACKAGE = "package"


BUILD_PHASES: Tuple[BuildPhase, ...] = (
    BuildPhase.CLONE,
    BuildPhase.CONFIGURE,
    BuildPhase.COMPILE,
    BuildPhase.INSTALL,
)
DEFAULT_PHASES: Tuple[BuildPhase, ...] = BUILD_PHASES + (BuildPhase.TEST, BuildPhase.PACKAGE)


@dataclass(frozen=True)
class BuildAction:
    """Ação opaca de build para um componente (apenas apresentação)."""

    component: str
    phase: BuildPhase
    artifacts: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "component": self.component,
            "phase": self.phase.value,
            "artifacts": list(self.artifacts),
        }


def _artifacts_for(component: str, phase: BuildPhase) -> Tuple[str, ...]:
    if phase is BuildPhase.TEST:
        return (f"{component}/build/Testing/Temporary/LastTest.log",)
    if phase is BuildPhase.PACKAGE:
        return (f"{component}/build/",)
    return ()


def render_actions(plan: BuildPlan, *, phases: Iterable[BuildPhase] = DEFAULT_PHASES) -> Tuple[BuildAction, ...]:
    """
    Renderiza as ações de build do plano.

    Fases de build são agrupadas por componente; `test` e `package` são
    emitidas depois de todos os builds, cada uma percorrendo o plano.
    Fases não incluídas em `phases` são omitidas.
    """
    wanted = [BuildPhase(p) for p in phases]
    build = [p for p in BUILD_PHASES if p in wanted]
    actions: List[BuildAction] = []

    for name in plan.selected:
        for phase in build:
            actions.append(BuildAction(component=name, phase=phase, artifacts=_artifacts_for(name, phase)))

    for phase in (BuildPhase.TEST, BuildPhase.PACKAGE):
        if phase not in wanted:
            continue
        for name in plan.selected:
            actions.append(BuildAction(component=name, phase=phase, artifacts=_artifacts_for(name, phase)))

    return tuple(actions)


def log_paths(plan: BuildPlan) -> List[str]:
    """Caminhos de log de teste a publicar, na ordem do plano."""
    return [path for name in plan.selected for path in _artifacts_for(name, BuildPhase.TEST)]


def artifact_paths(plan: BuildPlan) -> List[str]:
    """Diretórios de artefatos de build, na ordem do plano."""
    return [path for name in plan.selected for path in _artifacts_for(name, BuildPhase.PACKAGE)]
