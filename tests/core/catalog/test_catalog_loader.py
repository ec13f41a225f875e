# tests/core/catalog/test_catalog_loader.py
"""
Testes do loader de catálogo (YAML/JSON) e do catálogo empacotado.

Invariantes:
    - Erros de I/O e parsing são `CatalogError`
    - Erros estruturais são `InvalidSpecError`, independentemente do formato
"""

import json
from pathlib import Path

import pytest

from atlas_buildplan.core.catalog import (
    CatalogError,
    CatalogFileNotFoundError,
    CatalogParseError,
    Tier,
    UnsupportedCatalogFormatError,
    default_catalog,
    load_catalog,
)
from atlas_buildplan.core.exceptions import InvalidSpecError


CATALOG_YAML = """\
components:
  - name: cogutil
  - name: atomspace
    dependencies: [cogutil]
  - name: attention
    dependencies: [atomspace]
    tier: optional
"""


def test_load_yaml_catalog(tmp_path: Path):
    p = tmp_path / "catalog.yaml"
    p.write_text(CATALOG_YAML, encoding="utf-8")

    catalog = load_catalog(p)
    assert catalog.names() == ["cogutil", "atomspace", "attention"]
    assert catalog.get("attention").tier is Tier.OPTIONAL


def test_load_json_catalog(tmp_path: Path):
    p = tmp_path / "catalog.json"
    p.write_text(json.dumps({"components": [{"name": "cogutil"}, {"name": "atomspace", "dependencies": ["cogutil"]}]}), encoding="utf-8")

    assert load_catalog(str(p)).names() == ["cogutil", "atomspace"]


def test_missing_file_raises(tmp_path: Path):
    with pytest.raises(CatalogFileNotFoundError):
        load_catalog(tmp_path / "nope.yaml")


def test_unsupported_format_raises(tmp_path: Path):
    p = tmp_path / "catalog.toml"
    p.write_text("components = []\n", encoding="utf-8")
    with pytest.raises(UnsupportedCatalogFormatError):
        load_catalog(p)


def test_parse_error_raises(tmp_path: Path):
    p = tmp_path / "catalog.json"
    p.write_text("{not json", encoding="utf-8")
    with pytest.raises(CatalogParseError):
        load_catalog(p)


def test_non_utf8_catalog_raises_parse_error(tmp_path: Path):
    p = tmp_path / "catalog.yaml"
    p.write_bytes(b"components:\n  - name: \xff\xfe\n")
    with pytest.raises(CatalogParseError):
        load_catalog(p)


def test_empty_file_raises(tmp_path: Path):
    p = tmp_path / "catalog.yaml"
    p.write_text("", encoding="utf-8")
    with pytest.raises(CatalogError):
        load_catalog(p)


def test_structural_errors_surface_as_invalid_spec(tmp_path: Path):
    p = tmp_path / "catalog.yaml"
    p.write_text("components:\n  - name: a\n    dependencies: [a]\n", encoding="utf-8")
    with pytest.raises(InvalidSpecError):
        load_catalog(p)


def test_default_catalog_is_the_opencog_set():
    """
    O catálogo empacotado declara a pilha OpenCog em ordem estável.
    """
    catalog = default_catalog()
    assert catalog.names() == [
        "cogutil",
        "atomspace",
        "cogserver",
        "opencog",
        "asmoses",
        "ure",
        "unify",
        "attention",
        "miner",
        "pln",
    ]
    core = [c.name for c in catalog if c.is_core]
    assert core == ["cogutil", "atomspace", "cogserver", "ure", "unify"]
    assert catalog.get("ure").dependencies == ("atomspace", "unify")
