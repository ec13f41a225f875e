"""
PlanContext — Contexto canônico de um run do planner.

Este módulo define o **PlanContext**, a estrutura passada (opcionalmente)
a cada estágio do engine durante um run de planejamento.

O PlanContext é o meio canônico de:
- registro de eventos estruturados (o log do planner)
- coleta de warnings não fatais agrupados por componente

Princípios fundamentais:
- Isolamento por execução (cada run possui seu próprio contexto)
- Eventos são dados, não linhas de texto: testes e ferramentas podem
  inspecioná-los de forma determinística
- Nenhum estágio depende do contexto para decidir o resultado; ele
  apenas observa
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

LEVEL_DEBUG = "DEBUG"
LEVEL_INFO = "INFO"
LEVEL_WARNING = "WARNING"


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass
class PlanContext:
    """
    Contexto de execução de um run do planner.

    Campos canônicos:
    - run_id: identificador único da execução
    - created_at: timestamp UTC de criação do contexto
    - meta: metadados livres (ex.: root, caminho do catálogo)
    - events: log estruturado de eventos, em ordem de emissão
    - warnings: warnings por componente (chave "" para warnings globais)
    """

    run_id: str = field(default_factory=lambda: uuid.uuid4().hex)
    created_at: str = field(default_factory=_utc_now_iso)
    meta: Dict[str, Any] = field(default_factory=dict)
    events: List[Dict[str, Any]] = field(default_factory=list)
    warnings: Dict[str, List[str]] = field(default_factory=dict)

    # -----------------------------
    # Logging & warnings
    # -----------------------------
    def log(
        self,
        *,
        stage: str,
        level: str,
        message: str,
        component: Optional[str] = None,
        **extra: Any,
    ) -> None:
        event = {
            "run_id": self.run_id,
            "stage": stage,
            "component": component,
            "level": level,
            "message": message,
            "timestamp": _utc_now_iso(),
        }
        event.update(extra)
        self.events.append(event)

    def add_warning(self, *, message: str, component: Optional[str] = None) -> None:
        key = component or ""
        if key not in self.warnings:
            self.warnings[key] = []
        self.warnings[key].append(message)

    def warn(self, *, stage: str, message: str, component: Optional[str] = None, **extra: Any) -> None:
        """Registra evento WARNING e o warning correspondente de uma só vez."""
        self.log(stage=stage, level=LEVEL_WARNING, message=message, component=component, **extra)
        self.add_warning(message=message, component=component)

    # -----------------------------
    # Consultas
    # -----------------------------
    def events_for(self, *, stage: Optional[str] = None, component: Optional[str] = None) -> List[Dict[str, Any]]:
        out = []
        for e in self.events:
            if stage is not None and e.get("stage") != stage:
                continue
            if component is not None and e.get("component") != component:
                continue
            out.append(e)
        return out
