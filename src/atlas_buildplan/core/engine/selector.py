"""
Seleção da sequência final de build.

O selector percorre a ordem topológica da esquerda para a direita e
decide, para cada componente catalogado, seu estado terminal:

    SELECTED | SKIPPED_ABSENT | SKIPPED_UNSATISFIED | SKIPPED_CYCLIC

Regra de inclusão: um componente é selecionado sse (a) está presente e
(b) cada uma de suas dependências está ausente-e-opcional (a aresta
nunca foi obrigatória) ou presente-e-já-selecionada nesta caminhada.

Política de tiers:
    - core com (b) falhando → SKIPPED_UNSATISFIED, plano `degraded`, warning
    - opcional com (b) falhando → SKIPPED_UNSATISFIED silencioso
    - core ausente do disco → SKIPPED_ABSENT com warning
    - opcional ausente do disco → SKIPPED_ABSENT silencioso
    - membro de ciclo → SKIPPED_CYCLIC com warning (qualquer tier)

O selector nunca reordena: apenas filtra, preservando a garantia
topológica na saída.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Set

from atlas_buildplan.core.catalog.schema import Catalog
from atlas_buildplan.core.discovery.probe import PresentComponent
from atlas_buildplan.core.plan.types import BuildPlan, SkippedComponent, SkipReason
from atlas_buildplan.core.run_context import LEVEL_DEBUG, LEVEL_INFO, PlanContext

from .planner import SortResult

STAGE = "selector"


def _warning_for(skip: SkippedComponent) -> Optional[str]:
    if skip.silent:
        return None
    if skip.reason is SkipReason.ABSENT_FROM_DISK:
        return f"core component '{skip.name}' is absent from disk"
    if skip.reason is SkipReason.UNSATISFIED_DEPENDENCY:
        return f"core component '{skip.name}' skipped: unsatisfied dependencies {', '.join(skip.missing)}"
    return f"component '{skip.name}' skipped: part of a dependency cycle ({', '.join(skip.missing)})"


def select(
    sort_result: SortResult,
    present: Iterable[PresentComponent],
    catalog: Catalog,
    *,
    ctx: Optional[PlanContext] = None,
) -> BuildPlan:
    """
    Combina a ordem topológica com os tiers do catálogo em um BuildPlan.

    Args:
        sort_result: saída do sorter.
        present: componentes presentes (para dependências efetivas, com hints).
        catalog: catálogo validado (tiers e ordem de declaração).
        ctx: contexto opcional para eventos e warnings.

    Returns:
        BuildPlan: plano imutável com `selected` em ordem de build e
        `skipped` em ordem de catálogo.
    """
    present_by_name: Dict[str, PresentComponent] = {p.name: p for p in present}
    cycle = set(sort_result.cycle_members)

    selected: List[str] = []
    selected_set: Set[str] = set()
    skips: Dict[str, SkippedComponent] = {}

    def satisfied(dep: str) -> bool:
        if dep in present_by_name:
            return dep in selected_set
        return dep in catalog and not catalog.get(dep).is_core

    for name in sort_result.order:
        component = present_by_name.get(name)
        if component is None or name in cycle:
            # a ordem só deveria conter componentes presentes e acíclicos
            continue

        missing = tuple(d for d in component.dependencies if not satisfied(d))
        if not missing:
            selected.append(name)
            selected_set.add(name)
            if ctx is not None:
                ctx.log(stage=STAGE, level=LEVEL_DEBUG, message="selected", component=name)
            continue

        skips[name] = SkippedComponent(
            name=name,
            reason=SkipReason.UNSATISFIED_DEPENDENCY,
            tier=component.spec.tier,
            missing=missing,
            silent=not component.spec.is_core,
        )

    for name in sort_result.cycle_members:
        component = present_by_name[name]
        peers = tuple(m for m in sort_result.cycle_members if m != name and m in component.dependencies)
        skips[name] = SkippedComponent(
            name=name,
            reason=SkipReason.CYCLIC_DEPENDENCY,
            tier=component.spec.tier,
            missing=peers,
            silent=False,
        )

    for spec in catalog:
        if spec.name not in present_by_name:
            skips[spec.name] = SkippedComponent(
                name=spec.name,
                reason=SkipReason.ABSENT_FROM_DISK,
                tier=spec.tier,
                silent=not spec.is_core,
            )

    skipped = tuple(skips[spec.name] for spec in catalog if spec.name in skips)

    warnings: List[str] = []
    for skip in skipped:
        message = _warning_for(skip)
        if message is None:
            if ctx is not None:
                ctx.log(
                    stage=STAGE,
                    level=LEVEL_INFO,
                    message=f"skipped silently: {skip.reason.value}",
                    component=skip.name,
                    reason=skip.reason.value,
                )
            continue
        warnings.append(message)
        if ctx is not None:
            ctx.warn(stage=STAGE, message=message, component=skip.name, reason=skip.reason.value)

    degraded = any(
        s.reason is SkipReason.UNSATISFIED_DEPENDENCY and not s.silent for s in skipped
    )

    return BuildPlan(
        selected=tuple(selected),
        skipped=skipped,
        degraded=degraded,
        cyclic=sort_result.cyclic,
        cycle_members=tuple(sort_result.cycle_members),
        warnings=tuple(warnings),
    )
