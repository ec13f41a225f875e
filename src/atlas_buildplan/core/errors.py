"""
Atlas BuildPlan — Canonical Error Structures (v1)

Este módulo define o padrão canônico de payloads de erro do Atlas BuildPlan.
Erros são artefatos do contrato operacional da ferramenta e devem ser:

- explícitos
- serializáveis
- acionáveis

O core levanta exceções tipadas (`core.exceptions`, `core.config.errors`,
`core.catalog.errors`); a CLI converte cada uma delas em `PlanErrorPayload`
via `exception_to_error`, sem expor stack trace ao operador.
"""

from __future__ import annotations

from dataclasses import dataclass, asdict, replace
from typing import Any, Dict, List, Optional

from .catalog.errors import CatalogError
from .config.errors import ConfigError
from .exceptions import (
    BuildPlanError,
    CyclicDependencyError,
    InvalidSpecError,
    RootNotReadableError,
    UnsatisfiedDependencyError,
)


# ---------------------------------------------------------------------------
# Payload canônico
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class PlanErrorPayload:
    """
    Payload canônico de erro do Atlas BuildPlan.

    Campos:
    - type: código estável do erro (não é texto livre)
    - message: mensagem curta, humana e objetiva
    - details: dados estruturados relevantes para diagnóstico
    - hint: ação sugerida ao operador (onde corrigir)
    """

    type: str
    message: str
    details: Dict[str, Any]
    hint: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Retorna representação serializável do erro."""
        return asdict(self)


# ---------------------------------------------------------------------------
# Catálogo canônico de tipos de erro (v1)
# ---------------------------------------------------------------------------

# Catálogo
CATALOG_INVALID_SPEC = "CATALOG_INVALID_SPEC"
CATALOG_LOAD_ERROR = "CATALOG_LOAD_ERROR"

# Discovery
DISCOVERY_ROOT_UNREADABLE = "DISCOVERY_ROOT_UNREADABLE"

# Planejamento
PLAN_CYCLIC_DEPENDENCY = "PLAN_CYCLIC_DEPENDENCY"
PLAN_UNSATISFIED_DEPENDENCY = "PLAN_UNSATISFIED_DEPENDENCY"
PLAN_UNEXPECTED_ERROR = "PLAN_UNEXPECTED_ERROR"

# Configuração
CONFIG_INVALID = "CONFIG_INVALID"


# ---------------------------------------------------------------------------
# Helpers de fábrica
# ---------------------------------------------------------------------------

def invalid_spec(
    *,
    message: str,
    details: Optional[Dict[str, Any]] = None,
    hint: str = "Corrija o catálogo (nomes únicos, sem auto-dependência, dependências declaradas) e reexecute.",
) -> PlanErrorPayload:
    return PlanErrorPayload(
        type=CATALOG_INVALID_SPEC,
        message=message,
        details=details or {},
        hint=hint,
    )


def root_unreadable(
    *,
    root: str,
    reason: Optional[str] = None,
    hint: str = "Verifique se o diretório raiz existe e pode ser listado pelo usuário do runner.",
) -> PlanErrorPayload:
    return PlanErrorPayload(
        type=DISCOVERY_ROOT_UNREADABLE,
        message="Diretório raiz não pode ser lido",
        details={"root": root, "reason": reason},
        hint=hint,
    )


def cyclic_dependency(
    *,
    members: List[str],
    hint: str = "Remova a dependência mútua no catálogo ou use cycle_policy: exclude.",
) -> PlanErrorPayload:
    return PlanErrorPayload(
        type=PLAN_CYCLIC_DEPENDENCY,
        message="Ciclo detectado no grafo de dependências",
        details={"cycle_members": list(members)},
        hint=hint,
    )


def unsatisfied_dependency(
    *,
    components: Dict[str, List[str]],
    hint: str = "Disponibilize as dependências ausentes ou desative fail_on_degraded.",
) -> PlanErrorPayload:
    return PlanErrorPayload(
        type=PLAN_UNSATISFIED_DEPENDENCY,
        message="Componentes core com dependências insatisfeitas",
        details={"components": {k: list(v) for k, v in components.items()}},
        hint=hint,
    )


def exception_to_error(exc: BaseException) -> PlanErrorPayload:
    """Converte exceções em PlanErrorPayload (serializável, acionável).

    Regras:
    - Exceções conhecidas recebem código estável e `details` estruturados.
    - Outras exceções são encapsuladas como PLAN_UNEXPECTED_ERROR.
    """
    message = str(exc) or exc.__class__.__name__
    if isinstance(exc, BuildPlanError):
        details = dict(exc.details)
        payload: Optional[PlanErrorPayload] = None
        if isinstance(exc, InvalidSpecError):
            payload = invalid_spec(message=message, details=details)
        elif isinstance(exc, RootNotReadableError):
            payload = root_unreadable(root=str(details.get("root", "")), reason=details.get("reason"))
        elif isinstance(exc, CyclicDependencyError):
            payload = cyclic_dependency(members=details.get("cycle_members", []))
        elif isinstance(exc, UnsatisfiedDependencyError):
            payload = unsatisfied_dependency(components=details.get("components", {}))
        if payload is not None:
            # mensagem e hint da exceção têm precedência sobre os defaults da fábrica
            return replace(payload, message=message, hint=exc.hint or payload.hint)
    if isinstance(exc, CatalogError):
        return PlanErrorPayload(
            type=CATALOG_LOAD_ERROR,
            message=message,
            details={"exception_class": exc.__class__.__name__},
            hint="Verifique o caminho e o formato (YAML/JSON) do catálogo.",
        )
    if isinstance(exc, ConfigError):
        return PlanErrorPayload(
            type=CONFIG_INVALID,
            message=message,
            details={"exception_class": exc.__class__.__name__},
            hint="Revise os arquivos de configuração (defaults + local).",
        )
    return PlanErrorPayload(
        type=PLAN_UNEXPECTED_ERROR,
        message=message,
        details={"exception_class": exc.__class__.__name__},
        hint="Verifique a entrada do planner; nenhum fallback é aplicado automaticamente.",
    )
