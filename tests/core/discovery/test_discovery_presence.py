# tests/core/discovery/test_discovery_presence.py
"""
Testes do probe de presença (discovery).

Este módulo valida como o planner decide, a partir do filesystem,
quais componentes catalogados estão presentes e são buildáveis.

Os testes asseguram que:
- um componente está presente sse `<root>/<name>/<descriptor>` é arquivo
- o present set segue a ordem do catálogo, não a do filesystem
- componentes ausentes não geram erro, apenas diagnóstico
- somente a raiz ilegível é fatal (`RootNotReadableError`)
- o nome do arquivo descritor é configuração

Limites explícitos:
    - Não valida hints de dependência (ver test_discovery_hints)
    - Não valida grafo ou ordenação
"""

import os
import sys
from pathlib import Path

import pytest

try:
    from atlas_buildplan.core.discovery import component_exists, discover
    from atlas_buildplan.core.exceptions import RootNotReadableError
except Exception as e:  # noqa: BLE001
    discover = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    """
    Garante que o módulo de discovery esteja disponível para os testes.
    """
    if _IMPORT_ERR is not None:
        pytest.fail(
            "Missing discovery module. Implement:\n"
            "- src/atlas_buildplan/core/discovery/probe.py (discover, component_exists)\n"
            f"Import error: {_IMPORT_ERR}"
        )


def test_present_set_follows_catalog_order(scenario_catalog, make_workspace):
    """
    Verifica que o present set é ordenado pelo catálogo.

    Os diretórios são criados em ordem inversa à do catálogo para
    garantir que a ordem do filesystem não vaze para o resultado.
    """
    _require_imports()
    root = make_workspace("unify", "ure", "atomspace", "cogutil")

    present = discover(root, scenario_catalog)
    assert [p.name for p in present] == ["cogutil", "atomspace", "ure", "unify"]
    assert present[0].path == root / "cogutil"
    assert present[2].dependencies == ("atomspace", "unify")


def test_absent_components_are_excluded_without_error(scenario_catalog, make_workspace):
    _require_imports()
    root = make_workspace("cogutil", "atomspace")

    present = discover(root, scenario_catalog)
    assert [p.name for p in present] == ["cogutil", "atomspace"]


def test_directory_without_descriptor_is_absent(scenario_catalog, make_workspace):
    """
    Um diretório existente, mas sem arquivo descritor, não é buildável.
    """
    _require_imports()
    root = make_workspace("cogutil")
    (root / "atomspace").mkdir()
    (root / "atomspace" / "README.md").write_text("docs only\n", encoding="utf-8")
    # descritor como diretório também não conta
    (root / "ure" / "CMakeLists.txt").mkdir(parents=True)

    assert [p.name for p in discover(root, scenario_catalog)] == ["cogutil"]
    assert component_exists(root, "cogutil") is True
    assert component_exists(root, "atomspace") is False
    assert component_exists(root, "ure") is False


def test_descriptor_file_is_configurable(scenario_catalog, make_workspace):
    _require_imports()
    root = make_workspace("cogutil", descriptor="meson.build")
    make_workspace("atomspace")

    present = discover(root, scenario_catalog, descriptor_file="meson.build")
    assert [p.name for p in present] == ["cogutil"]


def test_empty_root_yields_empty_present_set(scenario_catalog, make_workspace):
    _require_imports()
    root = make_workspace()
    assert discover(root, scenario_catalog) == ()


def test_missing_root_raises(scenario_catalog, tmp_path: Path):
    """
    Verifica que uma raiz inexistente é erro fatal.

    Invariantes:
        - A exceção é `RootNotReadableError` (também `OSError`)
        - `details.reason` é `missing`
    """
    _require_imports()
    missing = tmp_path / "does-not-exist"
    with pytest.raises(RootNotReadableError) as exc:
        discover(missing, scenario_catalog)
    assert isinstance(exc.value, OSError)
    assert exc.value.details == {"root": str(missing), "reason": "missing"}


def test_root_that_is_a_file_raises(scenario_catalog, tmp_path: Path):
    _require_imports()
    f = tmp_path / "root.txt"
    f.write_text("x", encoding="utf-8")
    with pytest.raises(RootNotReadableError) as exc:
        discover(f, scenario_catalog)
    assert exc.value.details["reason"] == "not_a_directory"


@pytest.mark.skipif(sys.platform.startswith("win"), reason="POSIX permissions")
def test_unreadable_root_raises(scenario_catalog, make_workspace):
    _require_imports()
    if hasattr(os, "geteuid") and os.geteuid() == 0:
        pytest.skip("root ignores directory permissions")
    root = make_workspace("cogutil")
    root.chmod(0o000)
    try:
        with pytest.raises(RootNotReadableError) as exc:
            discover(root, scenario_catalog)
        assert exc.value.details["reason"] == "unreadable"
    finally:
        root.chmod(0o755)


def test_discovery_logs_one_event_per_component(scenario_catalog, make_workspace, dummy_ctx):
    _require_imports()
    root = make_workspace("cogutil", "ure")

    discover(root, scenario_catalog, ctx=dummy_ctx)
    events = dummy_ctx.events_for(stage="discovery")

    assert [e["component"] for e in events] == ["cogutil", "atomspace", "ure", "unify"]
    assert [e["present"] for e in events] == [True, False, True, False]
    assert events[1]["level"] == "INFO"
    assert "CMakeLists.txt" in events[1]["message"]
    assert dummy_ctx.warnings == {}
