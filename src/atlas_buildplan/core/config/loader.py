"""
Resolução da configuração efetiva do Atlas BuildPlan.

Camadas, da menor para a maior precedência:

    1. `DEFAULT_CONFIG` embutido (sempre aplicado)
    2. arquivo de defaults do projeto (`--config`); se informado, deve existir
    3. arquivo local de overrides (`--config-local`); ignorado se ausente

Cada arquivo é YAML (`.yaml`/`.yml`) ou JSON (`.json`), com um mapping
na raiz. Um arquivo vazio é uma camada vazia.

Limites explícitos:
    - Não valida o domínio dos valores (ver `PlannerSettings.from_config`)
    - Não calcula nem persiste o hash (ver `hashing`)
"""

import json
from pathlib import Path
from typing import IO, Any, Callable, Dict, Optional

import yaml  # PyYAML

from .errors import (
    ConfigParseError,
    DefaultsNotFoundError,
    InvalidConfigRootTypeError,
    UnsupportedConfigFormatError,
)
from .merge import deep_merge
from .settings import DEFAULT_CONFIG


_PARSERS: Dict[str, Callable[[IO[str]], Any]] = {
    ".yaml": yaml.safe_load,
    ".yml": yaml.safe_load,
    ".json": json.load,
}


def _load_file(path: Path) -> Dict[str, Any]:
    """
    Lê uma camada de configuração do disco.

    Raises:
        DefaultsNotFoundError: Se o arquivo não existir.
        UnsupportedConfigFormatError: Se a extensão não for YAML/JSON.
        ConfigParseError: Se o conteúdo não puder ser lido ou parseado.
        InvalidConfigRootTypeError: Se a raiz não for um mapping.
    """
    if not path.is_file():
        raise DefaultsNotFoundError(f"Arquivo de configuração não encontrado: {path}")

    parser = _PARSERS.get(path.suffix.lower())
    if parser is None:
        raise UnsupportedConfigFormatError(f"Formato não suportado: {path.suffix or path.name}")

    try:
        with path.open("r", encoding="utf-8") as f:
            data = parser(f)
    except (yaml.YAMLError, json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ConfigParseError(f"Falha ao ler {path.name}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise InvalidConfigRootTypeError(
            f"Raiz de {path.name} deve ser um mapping, recebido: {type(data).__name__}"
        )
    return data


def load_config(
    *,
    defaults_path: Optional[str] = None,
    local_path: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Resolve a configuração efetiva do planner.

    Args:
        defaults_path (Optional[str]): Arquivo de defaults do projeto.
        local_path (Optional[str]): Arquivo local de overrides.

    Returns:
        Dict[str, Any]: Configuração combinada; sem arquivos, uma cópia
        de `DEFAULT_CONFIG`.

    Raises:
        DefaultsNotFoundError: Se `defaults_path` for informado e não existir.
        UnsupportedConfigFormatError: Se algum arquivo tiver formato não suportado.
        ConfigParseError: Se algum arquivo estiver malformado.
        InvalidConfigRootTypeError: Se algum arquivo não tiver mapping na raiz.
        ConfigTypeConflictError: Se uma camada mudar o tipo de uma chave.
    """
    layers = []
    if defaults_path is not None:
        layers.append(_load_file(Path(defaults_path)))
    if local_path is not None and Path(local_path).exists():
        layers.append(_load_file(Path(local_path)))

    effective = deep_merge(DEFAULT_CONFIG, {})
    for layer in layers:
        effective = deep_merge(effective, layer)
    return effective
