"""Loader canônico de catálogo (YAML/JSON).

Notas:
- YAML é preferencial, JSON é alternativo.
- O formato é inferido pela extensão do arquivo.
- Problemas estruturais (nomes, dependências, tiers) são reportados por
  `validate_catalog` como `InvalidSpecError`, antes de qualquer discovery.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Union

import yaml

from .errors import (
    CatalogFileNotFoundError,
    CatalogParseError,
    UnsupportedCatalogFormatError,
)
from .schema import Catalog, validate_catalog

DEFAULT_CATALOG_PATH = Path(__file__).resolve().parent.parent.parent / "catalogs" / "opencog.yaml"


def load_catalog(path: Union[str, Path]) -> Catalog:
    """Carrega e valida um catálogo a partir de YAML/JSON.

    Args:
        path: caminho para o arquivo do catálogo.

    Raises:
        CatalogFileNotFoundError: se arquivo não existir.
        UnsupportedCatalogFormatError: se extensão não suportada.
        CatalogParseError: se parsing falhar, o arquivo não for UTF-8 ou
            estiver vazio.
        InvalidSpecError: se o catálogo for estruturalmente inválido.
    """
    p = Path(path)
    if not p.is_file():
        raise CatalogFileNotFoundError(f"catalog file not found: {p}")

    suffix = p.suffix.lower()
    if suffix not in {".yml", ".yaml", ".json"}:
        raise UnsupportedCatalogFormatError(f"unsupported catalog format: {suffix}")

    try:
        raw = p.read_text(encoding="utf-8")
        if suffix == ".json":
            data = json.loads(raw)
        else:
            data = yaml.safe_load(raw)
    except (yaml.YAMLError, json.JSONDecodeError, UnicodeDecodeError) as e:
        raise CatalogParseError(str(e) or "failed to parse catalog") from e

    if data is None:
        raise CatalogParseError("catalog file is empty")

    return validate_catalog(data)


def default_catalog() -> Catalog:
    """Catálogo OpenCog empacotado com a ferramenta."""
    return load_catalog(DEFAULT_CATALOG_PATH)
