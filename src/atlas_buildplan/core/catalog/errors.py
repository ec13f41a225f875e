"""Erros de carregamento do catálogo de componentes.

Falhas de I/O e de parsing do arquivo de catálogo são distintas de
catálogos estruturalmente inválidos: estes últimos levantam
`InvalidSpecError` (ver `core.exceptions`), independentemente da origem
dos dados.
"""


class CatalogError(Exception):
    """Erro base de carregamento de catálogo."""


class CatalogFileNotFoundError(CatalogError):
    """Arquivo de catálogo não existe no caminho informado."""


class UnsupportedCatalogFormatError(CatalogError):
    """Formato de catálogo não suportado (v1: YAML/JSON)."""


class CatalogParseError(CatalogError):
    """Falha ao parsear YAML/JSON do catálogo."""
