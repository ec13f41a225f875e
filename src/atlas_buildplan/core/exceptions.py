"""
Atlas BuildPlan — Exceções canônicas (v1)

Este módulo define a taxonomia de exceções tipadas do Atlas BuildPlan.

Objetivo:
- Distinguir erros estruturais (fatais) de políticas opcionais de fail-fast
- Carregar dados estruturados (`details`) para mapeamento em PlanErrorPayload
- Evitar ValueError/RuntimeError genéricos nas fronteiras do engine

Taxonomia:
- RootNotReadableError       → raiz ilegível (fatal, também é OSError)
- InvalidSpecError           → catálogo inválido (fatal, também é ValueError)
- CyclicDependencyError      → ciclo detectado com `cycle_policy: fail`
- UnsatisfiedDependencyError → componente core degradado com `fail_on_degraded`

Regras:
- Discovery, graph builder e sorter nunca levantam por componentes ausentes
  ou cíclicos; apenas anotam.
- `details` deve conter somente dados serializáveis.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class BuildPlanError(Exception):
    """Base para exceções internas do Atlas BuildPlan.

    Importante:
    - Sempre carregar dados estruturados em `details`
    - Mensagem deve ser curta e humana
    """

    def __init__(
        self,
        message: str,
        *,
        details: Optional[Dict[str, Any]] = None,
        hint: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.details: Dict[str, Any] = dict(details or {})
        self.hint = hint

    def __str__(self) -> str:
        return self.message


class InvalidSpecError(BuildPlanError, ValueError):
    """Catálogo ou hint de dependência estruturalmente inválido.

    Casos cobertos:
        - nome vazio ou duplicado
        - componente que depende de si mesmo
        - dependência que não existe no catálogo
        - tier desconhecido
    """


class RootNotReadableError(BuildPlanError, OSError):
    """Diretório raiz inexistente, não-diretório ou sem permissão de leitura."""


class CyclicDependencyError(BuildPlanError):
    """Ciclo no grafo de dependências quando a política exige falha imediata."""


class UnsatisfiedDependencyError(BuildPlanError):
    """Componente core pulado por dependência insatisfeita com `fail_on_degraded`."""
