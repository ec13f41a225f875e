"""Hashing canônico do catálogo de componentes.

O hash do catálogo serve para:
- rastreabilidade no relatório do plano
- detecção de divergência de catálogo entre execuções

A ordem dos componentes faz parte da identidade, pois define o desempate.
"""

from __future__ import annotations

from atlas_buildplan.core.config.hashing import canonical_digest

from .schema import Catalog


def compute_catalog_hash(catalog: Catalog) -> str:
    """Computa SHA-256 do catálogo em formato canônico."""
    return canonical_digest(catalog.to_dict())
