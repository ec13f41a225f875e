"""Atlas BuildPlan — Catálogo de componentes (core).

Componentes canônicos:
 - schema (ComponentSpec, Tier, Catalog validado)
 - parsing (YAML/JSON)
 - hashing canônico (rastreabilidade)
"""

from .errors import (  # noqa: F401
    CatalogError,
    CatalogFileNotFoundError,
    CatalogParseError,
    UnsupportedCatalogFormatError,
)
from .hashing import compute_catalog_hash  # noqa: F401
from .loader import DEFAULT_CATALOG_PATH, default_catalog, load_catalog  # noqa: F401
from .schema import Catalog, ComponentSpec, Tier, validate_catalog  # noqa: F401
