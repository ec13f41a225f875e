"""
Camada de configuração do Atlas BuildPlan.

Este pacote carrega, mescla, valida e identifica a configuração do
planner: nome do arquivo descritor de build, arquivo opcional de hints
de dependência e políticas de falha (ciclos e degradação).

A configuração é:
    - declarativa (YAML ou JSON)
    - determinística (defaults + override local via deep-merge)
    - identificável por hash canônico

Limites explícitos:
    - Não contém o catálogo de componentes (ver `core.catalog`)
    - Não interage com o filesystem dos componentes
"""

from .errors import (  # noqa: F401
    ConfigError,
    ConfigParseError,
    ConfigTypeConflictError,
    DefaultsNotFoundError,
    InvalidConfigRootTypeError,
    InvalidConfigValueError,
    UnsupportedConfigFormatError,
)
from .hashing import compute_config_hash  # noqa: F401
from .loader import load_config  # noqa: F401
from .merge import deep_merge  # noqa: F401
from .settings import DEFAULT_CONFIG, CyclePolicy, PlannerSettings  # noqa: F401
