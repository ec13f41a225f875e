# tests/conftest.py
"""
Fixtures compartilhados para testes do Atlas BuildPlan.

Este módulo define fixtures reutilizáveis que fornecem:
- catálogos sintéticos e determinísticos
- um construtor de workspace em `tmp_path` (um diretório por componente)
- contexto de execução controlado (PlanContext)

O objetivo destas fixtures é permitir testes do core
(catalog, discovery, engine e report) sem depender do catálogo
OpenCog empacotado nem de uma árvore real de repositórios.

Decisões arquiteturais:
    - Catálogos são construídos em memória (sem YAML)
    - O workspace é criado sob `tmp_path`, isolado por teste
    - Imports do core são realizados de forma lazy para
      melhorar a clareza de erros durante falhas

Invariantes:
    - Nenhuma fixture escreve fora de `tmp_path`
    - Nenhuma fixture executa o engine
    - Todas as fixtures são seguras para execução em paralelo

Limites explícitos:
    - Não substituir testes de integração da CLI
    - Não conter lógica condicional complexa
"""

from pathlib import Path

import pytest


# =====================================================
# Catálogos sintéticos
# =====================================================

@pytest.fixture
def make_catalog():
    """
    Fixture factory que constrói um `Catalog` a partir de tuplas.

    Cada entrada é `(name, dependencies)` ou `(name, dependencies, tier)`;
    a ordem das entradas é a ordem de declaração do catálogo.

    Returns:
        Callable[..., Catalog]: construtor de catálogos sintéticos.
    """
    from atlas_buildplan.core.catalog import Catalog, ComponentSpec

    def _make(*entries):
        specs = []
        for entry in entries:
            name, deps = entry[0], entry[1]
            tier = entry[2] if len(entry) > 2 else "core"
            specs.append(ComponentSpec(name=name, dependencies=tuple(deps), tier=tier))
        return Catalog(tuple(specs))

    return _make


@pytest.fixture
def scenario_catalog(make_catalog):
    """
    Catálogo de referência com quatro componentes core:

        cogutil
        atomspace → cogutil
        ure       → atomspace, unify
        unify     → atomspace

    `ure` é declarado antes de `unify`, então a ordem correta só sai se
    a aresta `unify → ure` prevalecer sobre o desempate por catálogo.
    """
    return make_catalog(
        ("cogutil", []),
        ("atomspace", ["cogutil"]),
        ("ure", ["atomspace", "unify"]),
        ("unify", ["atomspace"]),
    )


# =====================================================
# Workspace em disco
# =====================================================

@pytest.fixture
def make_workspace(tmp_path):
    """
    Fixture factory que cria um workspace com os componentes informados.

    Para cada nome, cria `<root>/<name>/<descriptor>` (por padrão
    `CMakeLists.txt`). Chamadas sucessivas reutilizam a mesma raiz.

    Returns:
        Callable[..., Path]: função que recebe nomes e retorna a raiz.
    """
    root = tmp_path / "workspace"
    root.mkdir()

    def _make(*names: str, descriptor: str = "CMakeLists.txt") -> Path:
        for name in names:
            d = root / name
            d.mkdir(exist_ok=True)
            (d / descriptor).write_text("cmake_minimum_required(VERSION 3.10)\n", encoding="utf-8")
        return root

    return _make


# =====================================================
# PlanContext
# =====================================================

@pytest.fixture
def dummy_ctx():
    """
    PlanContext determinístico para testes.

    `run_id` e `created_at` são fixos; eventos e warnings começam vazios.
    """
    from atlas_buildplan.core.run_context import PlanContext

    return PlanContext(
        run_id="run-test-001",
        created_at="2026-01-16T00:00:00+00:00",
        meta={"source": "pytest"},
    )
