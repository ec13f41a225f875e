"""
Interface de linha de comando do Atlas BuildPlan.

Este módulo fornece o comando `atlas-buildplan`, que planeja a ordem de
build de um workspace e imprime (ou grava) o plano em texto, JSON, YAML
ou Markdown, opcionalmente com as ações de build por componente.

Códigos de saída:
    0 → plano produzido
    1 → erro estrutural (catálogo, configuração, raiz ilegível)
    2 → plano rejeitado por política (ciclo/degradação com fail-fast ou --strict)
"""

from __future__ import annotations

import argparse
import json
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from atlas_buildplan.core.catalog import CatalogError, compute_catalog_hash, default_catalog, load_catalog
from atlas_buildplan.core.config import ConfigError, PlannerSettings, compute_config_hash, load_config
from atlas_buildplan.core.engine import plan_build
from atlas_buildplan.core.errors import exception_to_error
from atlas_buildplan.core.exceptions import (
    CyclicDependencyError,
    InvalidSpecError,
    RootNotReadableError,
    UnsatisfiedDependencyError,
)
from atlas_buildplan.core.plan.types import BuildPlan
from atlas_buildplan.core.run_context import PlanContext
from atlas_buildplan.render import render_actions
from atlas_buildplan.report import plan_to_dict, render_plan_markdown

EXIT_OK = 0
EXIT_STRUCTURAL = 1
EXIT_POLICY = 2

FORMATS = ("text", "json", "yaml", "markdown")


@dataclass
class PlanArgs:
    """Argumentos do comando de planejamento."""

    root: Path
    catalog: Optional[Path] = None
    config: Optional[Path] = None
    config_local: Optional[Path] = None
    output_format: str = "text"
    actions: bool = False
    output: Optional[Path] = None
    strict: bool = False


def _render_text(doc: Dict[str, Any]) -> str:
    lines: List[str] = []
    selected = doc.get("selected") or []
    lines.append(f"Found {len(selected)} valid components: {', '.join(selected)}")
    for i, name in enumerate(selected, start=1):
        lines.append(f"  {i}. {name}")
    for s in doc.get("skipped") or []:
        suffix = f" ({', '.join(s['missing'])})" if s.get("missing") else ""
        lines.append(f"  - skipped {s['name']}: {s['reason']}{suffix}")
    for a in doc.get("actions") or []:
        lines.append(f"  > {a['phase']} {a['component']}")
    return "\n".join(lines) + "\n"


def _render(doc: Dict[str, Any], output_format: str) -> str:
    if output_format == "json":
        return json.dumps(doc, ensure_ascii=False, indent=2, sort_keys=True) + "\n"
    if output_format == "yaml":
        return yaml.safe_dump(doc, sort_keys=False, allow_unicode=True)
    if output_format == "markdown":
        return render_plan_markdown(doc)
    return _render_text(doc)


def _print_error(exc: BaseException) -> None:
    payload = exception_to_error(exc)
    print(f"Error: {payload.message}", file=sys.stderr)
    if payload.hint:
        print(f"Hint: {payload.hint}", file=sys.stderr)
    print(json.dumps(payload.to_dict(), ensure_ascii=False, sort_keys=True), file=sys.stderr)


def plan_command(args: PlanArgs) -> int:
    """Planeja a ordem de build de um workspace.

    Exemplos:
        atlas-buildplan .                          # catálogo empacotado
        atlas-buildplan . --catalog catalog.yaml   # catálogo próprio
        atlas-buildplan . --format json --actions  # plano + ações em JSON
        atlas-buildplan . --strict                 # sai com 2 se degradado/cíclico

    Returns:
        int: código de saída (`EXIT_OK`, `EXIT_STRUCTURAL` ou `EXIT_POLICY`).
    """
    try:
        config = load_config(
            defaults_path=str(args.config) if args.config else None,
            local_path=str(args.config_local) if args.config_local else None,
        )
        settings = PlannerSettings.from_config(config)
        catalog = load_catalog(args.catalog) if args.catalog else default_catalog()

        ctx = PlanContext(meta={"root": str(args.root)})
        plan: BuildPlan = plan_build(args.root, catalog, settings=settings, ctx=ctx)
    except (CyclicDependencyError, UnsatisfiedDependencyError) as e:
        _print_error(e)
        return EXIT_POLICY
    except (ConfigError, CatalogError, InvalidSpecError, RootNotReadableError) as e:
        _print_error(e)
        return EXIT_STRUCTURAL

    for message in plan.warnings:
        print(f"Warning: {message}", file=sys.stderr)

    doc = plan_to_dict(
        plan,
        catalog_hash=compute_catalog_hash(catalog),
        config_hash=compute_config_hash(settings.to_dict()),
        run_id=ctx.run_id,
    )
    if args.actions:
        doc["actions"] = [a.to_dict() for a in render_actions(plan)]

    content = _render(doc, args.output_format)
    if args.output is not None:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        args.output.write_text(content, encoding="utf-8")
        print(f"Build plan saved to: {args.output}", file=sys.stderr)
    else:
        sys.stdout.write(content)

    if args.strict and (plan.degraded or plan.cyclic):
        return EXIT_POLICY
    return EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="atlas-buildplan",
        description="Calcula uma ordem de build determinística para os componentes encontrados em ROOT.",
    )
    parser.add_argument("root", type=Path, help="Raiz do workspace, com um diretório por componente")
    parser.add_argument("--catalog", type=Path, default=None, help="Catálogo de componentes (YAML/JSON); padrão: catálogo OpenCog empacotado")
    parser.add_argument("--config", type=Path, default=None, help="Defaults de configuração do planner (YAML/JSON)")
    parser.add_argument("--config-local", type=Path, default=None, help="Overrides locais de configuração (ignorado se ausente)")
    parser.add_argument("--format", dest="output_format", choices=FORMATS, default="text", help="Formato de saída (padrão: text)")
    parser.add_argument("--actions", action="store_true", help="Inclui as ações de build por componente")
    parser.add_argument("-o", "--output", type=Path, default=None, help="Grava o plano neste arquivo em vez de stdout")
    parser.add_argument("--strict", action="store_true", help="Sai com código 2 se o plano for degradado ou cíclico")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    ns = build_parser().parse_args(argv)
    args = PlanArgs(
        root=ns.root,
        catalog=ns.catalog,
        config=ns.config,
        config_local=ns.config_local,
        output_format=ns.output_format,
        actions=ns.actions,
        output=ns.output,
        strict=ns.strict,
    )
    return plan_command(args)


if __name__ == "__main__":
    sys.exit(main())
