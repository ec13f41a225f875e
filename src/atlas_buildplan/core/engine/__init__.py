"""
Engine do Atlas BuildPlan.

Este pacote contém os estágios algorítmicos do planner e sua
orquestração:
    - graph    → DependencyGraph sobre o *present set*
    - planner  → Kahn determinístico com detecção e relato de ciclos
    - selector → filtragem core/opcional e motivos de skip
    - engine   → PlanEngine / plan_build e políticas de fail-fast

Invariantes:
    - Nenhum componente é selecionado antes de suas dependências
    - A mesma entrada produz sempre o mesmo BuildPlan
"""

from .engine import PlanEngine, plan_build  # noqa: F401
from .graph import DependencyGraph, build_graph  # noqa: F401
from .planner import SortResult, sort_graph  # noqa: F401
from .selector import select  # noqa: F401
