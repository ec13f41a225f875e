"""
src/atlas_buildplan/report/plan_report.py

Relatório canônico do plano de build (v1).

Regras:
- O relatório é derivado EXCLUSIVAMENTE do BuildPlan (e dos hashes
  informados pelo chamador); não acessa o filesystem.
- Mesmo plano => mesmo relatório (ordem estável, JSON com sort_keys).
- Skips silenciosos aparecem no relatório, mas não em Warnings.

Estrutura mínima obrigatória do Markdown:
# Build Plan

## Selected
## Skipped
## Warnings
## Traceability
"""

from __future__ import annotations

import json
from typing import Any, Dict, List, Optional

from atlas_buildplan.core.plan.types import BuildPlan


REPORT_VERSION = "1"

REQUIRED_SECTIONS: List[str] = [
    "# Build Plan",
    "## Selected",
    "## Skipped",
    "## Warnings",
    "## Traceability",
]


def plan_to_dict(
    plan: BuildPlan,
    *,
    catalog_hash: Optional[str] = None,
    config_hash: Optional[str] = None,
    run_id: Optional[str] = None,
) -> Dict[str, Any]:
    """Serializa o plano com metadados de rastreabilidade."""
    out = plan.to_dict()
    out["report_version"] = REPORT_VERSION
    out["traceability"] = {
        "catalog_hash": catalog_hash,
        "config_hash": config_hash,
        "run_id": run_id,
    }
    return out


def _as_pretty_json(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False, sort_keys=True, indent=2)


def _require_plan_dict(plan: Dict[str, Any]) -> Dict[str, Any]:
    if not isinstance(plan, dict) or "selected" not in plan or "skipped" not in plan:
        raise ValueError("A serialized BuildPlan (plan_to_dict) is required to render the report")
    return plan


def render_plan_markdown(plan: Dict[str, Any]) -> str:
    """Gera o Markdown do relatório a partir de `plan_to_dict(...)`."""
    plan = _require_plan_dict(plan)

    selected = plan.get("selected") or []
    skipped = plan.get("skipped") or []
    warnings = plan.get("warnings") or []
    trace = plan.get("traceability") if isinstance(plan.get("traceability"), dict) else {}

    lines: List[str] = []

    lines.append("# Build Plan\n")
    status = "degraded" if plan.get("degraded") else "ok"
    lines.append(f"- **Status**: `{status}`")
    lines.append(f"- **Selected**: `{len(selected)}`")
    lines.append(f"- **Skipped**: `{len(skipped)}`")
    if plan.get("cyclic"):
        members = ", ".join(plan.get("cycle_members") or [])
        lines.append(f"- **Cycle**: `{members}`")
    lines.append("")

    lines.append("## Selected")
    if selected:
        for i, name in enumerate(selected, start=1):
            lines.append(f"{i}. `{name}`")
    else:
        lines.append("No component selected.")
    lines.append("")

    lines.append("## Skipped")
    if skipped:
        lines.append("| component | tier | reason | missing | silent |")
        lines.append("|---|---|---|---|---|")
        for s in skipped:
            missing = ", ".join(s.get("missing") or []) or "-"
            silent = "yes" if s.get("silent") else "no"
            lines.append(f"| `{s.get('name')}` | {s.get('tier')} | {s.get('reason')} | {missing} | {silent} |")
    else:
        lines.append("No component skipped.")
    lines.append("")

    lines.append("## Warnings")
    if warnings:
        for w in warnings:
            lines.append(f"- {w}")
    else:
        lines.append("No warnings.")
    lines.append("")

    lines.append("## Traceability")
    lines.append("```json")
    lines.append(_as_pretty_json(trace))
    lines.append("```")

    content = "\n".join(lines) + "\n"

    for sec in REQUIRED_SECTIONS:
        if sec not in content:
            raise RuntimeError(f"Report generation failed: missing required section: {sec}")

    return content
