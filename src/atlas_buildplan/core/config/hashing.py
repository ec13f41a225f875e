"""
Identidade canônica de configuração.

O hash da configuração efetiva vai para o relatório do plano, permitindo
comparar dois runs: mesmo hash, mesmas políticas de discovery e planner.

Política (v1): SHA-256 sobre JSON canônico (chaves ordenadas, sem
espaços, UTF-8). A mesma função serve ao hash do catálogo.
"""

import hashlib
import json
from typing import Any, Dict


def canonical_digest(payload: Any) -> str:
    """SHA-256 hexadecimal do JSON canônico de `payload`."""
    text = json.dumps(payload, sort_keys=True, separators=(",", ":"), ensure_ascii=False)
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


def compute_config_hash(config: Dict[str, Any]) -> str:
    """
    Hash da configuração efetiva (ou de `PlannerSettings.to_dict()`).

    A ordem original das chaves não influencia o resultado.

    Raises:
        TypeError: Se `config` não for um dict.
    """
    if not isinstance(config, dict):
        raise TypeError(f"Hash de configuração requer dict, recebido: {type(config).__name__}")
    return canonical_digest(config)
