"""
Atlas BuildPlan — planejamento determinístico de ordem de build.

Este pacote raiz define o namespace público do Atlas BuildPlan, uma
ferramenta que descobre quais componentes existem em uma árvore de
diretórios, deriva o grafo de dependências entre eles e produz uma
ordem de build linear, reprodutível e filtrada para pipelines de CI.

Princípios centrais:
    - O catálogo de componentes é dado estruturado, nunca código
    - A ordem de build é determinística para a mesma entrada
    - Componentes pulados sempre carregam um motivo legível por máquina
    - Erros estruturais (catálogo inválido, raiz ilegível) abortam o run

Arquitetura em alto nível:
    - core.catalog   → carregamento e validação do catálogo de componentes
    - core.discovery → detecção de componentes presentes em disco
    - core.engine    → grafo, ordenação topológica, seleção e orquestração
    - core.config    → carregamento, merge e hashing de configuração
    - render         → ações de build opacas por componente
    - report         → resumos determinísticos (JSON / Markdown) do plano

Limites explícitos:
    - Não executa comandos de build
    - Não gera o YAML textual do pipeline de CI
    - Não resolve versões de dependências
"""

from .core.catalog import Catalog, ComponentSpec, Tier, load_catalog, default_catalog
from .core.engine import PlanEngine, plan_build
from .core.plan.types import BuildPlan, ComponentState, SkipReason, SkippedComponent

__all__ = [
    "BuildPlan",
    "Catalog",
    "ComponentSpec",
    "ComponentState",
    "PlanEngine",
    "SkipReason",
    "SkippedComponent",
    "Tier",
    "default_catalog",
    "load_catalog",
    "plan_build",
]
