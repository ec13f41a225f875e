"""
Engine de planejamento do Atlas BuildPlan.

Orquestra os estágios do core sobre um único run:

    Catalog → Discovery → Graph Builder → Topological Sorter → Selector

e aplica as políticas configuradas em `PlannerSettings`:
    - cycle_policy = fail      → CyclicDependencyError com os membros do ciclo
    - fail_on_degraded = true  → UnsatisfiedDependencyError com os componentes
      core pulados e suas dependências faltantes

Cada invocação é independente (sem estado compartilhado); runs
concorrentes sobre raízes diferentes são seguros.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional, Union

from atlas_buildplan.core.catalog.schema import Catalog, validate_catalog
from atlas_buildplan.core.config.settings import CyclePolicy, PlannerSettings
from atlas_buildplan.core.discovery.probe import discover
from atlas_buildplan.core.exceptions import CyclicDependencyError, UnsatisfiedDependencyError
from atlas_buildplan.core.plan.types import BuildPlan, SkipReason
from atlas_buildplan.core.run_context import LEVEL_INFO, PlanContext

from .graph import build_graph
from .planner import sort_graph
from .selector import select

STAGE = "engine"


class PlanEngine:
    """Engine canônico do Atlas BuildPlan (discovery + grafo + sorter + selector)."""

    def __init__(
        self,
        *,
        catalog: Union[Catalog, Any],
        settings: Optional[PlannerSettings] = None,
        ctx: Optional[PlanContext] = None,
    ):
        # dados crus são validados aqui, antes de qualquer acesso ao disco
        self.catalog: Catalog = catalog if isinstance(catalog, Catalog) else validate_catalog(catalog)
        self.settings: PlannerSettings = settings or PlannerSettings()
        self.ctx: PlanContext = ctx if ctx is not None else PlanContext()

    def run(self, root: Union[str, Path]) -> BuildPlan:
        ctx = self.ctx
        ctx.meta.setdefault("root", str(root))
        ctx.log(
            stage=STAGE,
            level=LEVEL_INFO,
            message="planning started",
            components=len(self.catalog),
            descriptor_file=self.settings.descriptor_file,
        )

        present = discover(
            root,
            self.catalog,
            descriptor_file=self.settings.descriptor_file,
            hints_file=self.settings.hints_file,
            ctx=ctx,
        )
        graph = build_graph(present, ctx=ctx)
        result = sort_graph(graph)

        if result.cyclic:
            ctx.log(
                stage=STAGE,
                level=LEVEL_INFO,
                message=f"dependency cycle among: {', '.join(result.cycle_members)}",
                cycle_members=list(result.cycle_members),
            )
            if self.settings.cycle_policy is CyclePolicy.FAIL:
                raise CyclicDependencyError(
                    f"dependency cycle detected among: {', '.join(result.cycle_members)}",
                    details={"cycle_members": list(result.cycle_members)},
                )

        plan = select(result, present, self.catalog, ctx=ctx)

        if plan.degraded and self.settings.fail_on_degraded:
            offending = {
                s.name: list(s.missing)
                for s in plan.skipped_by(SkipReason.UNSATISFIED_DEPENDENCY)
                if not s.silent
            }
            raise UnsatisfiedDependencyError(
                f"core components with unsatisfied dependencies: {', '.join(offending)}",
                details={"components": offending},
            )

        ctx.log(
            stage=STAGE,
            level=LEVEL_INFO,
            message="planning finished",
            selected=list(plan.selected),
            skipped=len(plan.skipped),
            degraded=plan.degraded,
        )
        return plan


def plan_build(
    root: Union[str, Path],
    catalog: Union[Catalog, Any],
    *,
    settings: Optional[PlannerSettings] = None,
    ctx: Optional[PlanContext] = None,
) -> BuildPlan:
    """
    Produz o BuildPlan de `root` para o catálogo informado.

    Args:
        root: diretório raiz com um subdiretório por componente.
        catalog: `Catalog` validado ou dados crus (mapping/lista) a validar.
        settings: settings do planner (padrão: `PlannerSettings()`).
        ctx: contexto opcional que recebe o log estruturado do run.

    Returns:
        BuildPlan: plano imutável.

    Raises:
        InvalidSpecError: catálogo ou hints inválidos (antes/durante discovery).
        RootNotReadableError: raiz ilegível.
        CyclicDependencyError: ciclo com `cycle_policy: fail`.
        UnsatisfiedDependencyError: plano degradado com `fail_on_degraded`.
    """
    return PlanEngine(catalog=catalog, settings=settings, ctx=ctx).run(root)
