# tests/core/catalog/test_catalog_schema.py
"""
Testes do schema canônico do catálogo de componentes.

Este módulo valida `ComponentSpec`, `Catalog` e `validate_catalog`,
que juntos garantem que todo catálogo que chega ao engine é
estruturalmente válido.

Os testes asseguram que:
- nomes duplicados, vazios ou com separador de caminho são rejeitados
- auto-dependência e dependência não catalogada são rejeitadas
- dependências repetidas são colapsadas preservando a ordem
- o tier padrão é core e tiers desconhecidos são rejeitados
- a ordem de declaração é preservada (desempate do sorter)

Decisões arquiteturais:
    - Todas as falhas estruturais levantam `InvalidSpecError`
    - `InvalidSpecError` também é `ValueError`

Limites explícitos:
    - Não valida leitura de arquivos (ver test_catalog_loader)
    - Não valida ciclos (responsabilidade do sorter)
"""

import pytest

try:
    from atlas_buildplan.core.catalog import Catalog, ComponentSpec, Tier, validate_catalog
    from atlas_buildplan.core.exceptions import InvalidSpecError
except Exception as e:  # noqa: BLE001
    Catalog = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    """
    Garante que o schema do catálogo esteja disponível para os testes.
    """
    if _IMPORT_ERR is not None:
        pytest.fail(
            "Missing catalog schema. Implement:\n"
            "- src/atlas_buildplan/core/catalog/schema.py (ComponentSpec, Catalog, validate_catalog)\n"
            f"Import error: {_IMPORT_ERR}"
        )


def test_component_spec_defaults_to_core():
    _require_imports()
    spec = ComponentSpec(name="cogutil")
    assert spec.tier is Tier.CORE
    assert spec.is_core is True
    assert spec.dependencies == ()
    assert spec.required_dependencies == frozenset()


def test_component_spec_coerces_tier_and_dedups_dependencies():
    _require_imports()
    spec = ComponentSpec(name="ure", dependencies=("atomspace", "unify", "atomspace"), tier="optional")
    assert spec.tier is Tier.OPTIONAL
    assert spec.dependencies == ("atomspace", "unify")
    assert spec.required_dependencies == frozenset({"atomspace", "unify"})


def test_self_dependency_is_invalid():
    """
    Verifica que um componente não pode depender de si mesmo.

    Invariantes:
        - A falha ocorre na construção do ComponentSpec
        - `details` identifica o componente
    """
    _require_imports()
    with pytest.raises(InvalidSpecError) as exc:
        ComponentSpec(name="atomspace", dependencies=("atomspace",))
    assert exc.value.details["component"] == "atomspace"
    assert isinstance(exc.value, ValueError)


@pytest.mark.parametrize("name", ["", "   ", None, ".", "..", "a/b", "a\\b"])
def test_invalid_names_are_rejected(name):
    _require_imports()
    with pytest.raises(InvalidSpecError):
        ComponentSpec(name=name)


def test_dependencies_as_plain_string_are_rejected():
    _require_imports()
    with pytest.raises(InvalidSpecError):
        ComponentSpec(name="ure", dependencies="atomspace")  # type: ignore[arg-type]


def test_unknown_tier_is_rejected():
    _require_imports()
    with pytest.raises(InvalidSpecError):
        ComponentSpec(name="ure", tier="experimental")


def test_duplicate_names_are_rejected():
    _require_imports()
    with pytest.raises(InvalidSpecError) as exc:
        Catalog((ComponentSpec(name="cogutil"), ComponentSpec(name="cogutil")))
    assert "duplicate" in str(exc.value)


def test_dependency_on_uncataloged_component_is_rejected():
    _require_imports()
    with pytest.raises(InvalidSpecError) as exc:
        Catalog((ComponentSpec(name="atomspace", dependencies=("cogutil",)),))
    assert exc.value.details == {"component": "atomspace", "dependency": "cogutil"}


def test_catalog_preserves_declaration_order(scenario_catalog):
    _require_imports()
    assert scenario_catalog.names() == ["cogutil", "atomspace", "ure", "unify"]
    assert scenario_catalog.index("unify") == 3
    assert "ure" in scenario_catalog
    assert "moses" not in scenario_catalog
    assert len(scenario_catalog) == 4
    assert scenario_catalog.get("ure").dependencies == ("atomspace", "unify")


def test_catalog_lookup_of_unknown_name_raises_key_error(scenario_catalog):
    _require_imports()
    with pytest.raises(KeyError):
        scenario_catalog.get("moses")
    with pytest.raises(KeyError):
        scenario_catalog.index("moses")


def test_validate_catalog_accepts_mapping_and_short_form():
    """
    Verifica os formatos de entrada aceitos por `validate_catalog`:
    mapping com `components`, entradas curtas (apenas nome) e o
    sinônimo `depends_on`.
    """
    _require_imports()
    catalog = validate_catalog({
        "components": [
            "cogutil",
            {"name": "atomspace", "depends_on": ["cogutil"]},
            {"name": "attention", "dependencies": ["atomspace"], "tier": "optional"},
        ]
    })
    assert catalog.names() == ["cogutil", "atomspace", "attention"]
    assert catalog.get("atomspace").dependencies == ("cogutil",)
    assert catalog.get("attention").tier is Tier.OPTIONAL


def test_validate_catalog_accepts_bare_list():
    _require_imports()
    catalog = validate_catalog([{"name": "cogutil"}, {"name": "atomspace", "dependencies": ["cogutil"]}])
    assert catalog.names() == ["cogutil", "atomspace"]


@pytest.mark.parametrize(
    "data",
    [
        {"items": []},
        {"components": "cogutil"},
        [42],
        [{"name": "a", "dependencies": "b"}],
        [{"name": "a", "dependencies": False}],
        [{"name": "a", "dependencies": ""}],
        [{"name": "a", "depends_on": 0}],
        [{"name": "a", "dependencies": [], "depends_on": []}],
        [{"dependencies": []}],
    ],
)
def test_validate_catalog_rejects_malformed_data(data):
    _require_imports()
    with pytest.raises(InvalidSpecError):
        validate_catalog(data)


def test_catalog_to_dict_is_serializable(scenario_catalog):
    _require_imports()
    d = scenario_catalog.to_dict()
    assert d["components"][2] == {"name": "ure", "dependencies": ["atomspace", "unify"], "tier": "core"}
    assert validate_catalog(d) == scenario_catalog
