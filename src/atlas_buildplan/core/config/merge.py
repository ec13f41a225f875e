"""
Deep-merge de camadas de configuração do planner.

Política (v1):
    - mapping sobre mapping → merge recursivo por chave
    - lista → substitui a lista inteira
    - `null` em qualquer lado → o override vence (chaves opcionais como
      `discovery.hints_file` podem ser preenchidas e anuladas)
    - escalares do mesmo tipo → o override vence
    - tipos diferentes → `ConfigTypeConflictError` com o caminho da chave

Nenhuma camada é mutada; o resultado é sempre uma estrutura nova.
"""

from copy import deepcopy
from typing import Any, Dict, Tuple

from .errors import ConfigTypeConflictError


def _merge_value(path: Tuple[str, ...], current: Any, incoming: Any) -> Any:
    if isinstance(current, dict) and isinstance(incoming, dict):
        return _merge_mappings(path, current, incoming)
    if current is None or incoming is None or isinstance(incoming, list):
        return deepcopy(incoming)
    if type(current) is not type(incoming):
        raise ConfigTypeConflictError(
            f"Conflito de tipo em '{'.'.join(path)}': "
            f"{type(current).__name__} vs {type(incoming).__name__}"
        )
    return deepcopy(incoming)


def _merge_mappings(path: Tuple[str, ...], base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged = {key: deepcopy(value) for key, value in base.items()}
    for key, incoming in override.items():
        if key in merged:
            merged[key] = _merge_value(path + (str(key),), merged[key], incoming)
        else:
            merged[key] = deepcopy(incoming)
    return merged


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """
    Aplica `override` sobre `base` e retorna uma nova configuração.

    Args:
        base (Dict[str, Any]): Camada de menor precedência.
        override (Dict[str, Any]): Camada de maior precedência.

    Returns:
        Dict[str, Any]: Configuração combinada (novo objeto).

    Raises:
        ConfigTypeConflictError: Se alguma das camadas não for dict, ou se
            uma chave mudar de tipo entre as camadas.
    """
    if not isinstance(base, dict) or not isinstance(override, dict):
        raise ConfigTypeConflictError(
            "Camadas de configuração devem ser dicts, recebido: "
            f"{type(base).__name__} vs {type(override).__name__}"
        )
    return _merge_mappings((), base, override)
