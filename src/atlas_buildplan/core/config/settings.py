"""
Settings tipados do planner.

`PlannerSettings` é a visão validada e imutável da configuração efetiva
consumida pelo engine. O dicionário de configuração continua sendo a
fonte (e a base do hash); os settings apenas materializam as chaves que
o core entende.

Chaves reconhecidas (v1):

    discovery:
      descriptor_file: CMakeLists.txt   # arquivo que torna um diretório "buildável"
      hints_file: null                  # manifest opcional com `depends_on`
    planner:
      cycle_policy: exclude             # exclude | fail
      fail_on_degraded: false
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from .errors import InvalidConfigValueError


DEFAULT_CONFIG: Dict[str, Any] = {
    "discovery": {
        "descriptor_file": "CMakeLists.txt",
        "hints_file": None,
    },
    "planner": {
        "cycle_policy": "exclude",
        "fail_on_degraded": False,
    },
}


class CyclePolicy(str, Enum):
    """Política aplicada quando o sorter reporta um ciclo."""

    EXCLUDE = "exclude"
    FAIL = "fail"


def _filename(value: Any, key: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise InvalidConfigValueError(f"{key} deve ser um nome de arquivo não vazio")
    if "/" in value or "\\" in value:
        raise InvalidConfigValueError(f"{key} deve ser um nome de arquivo, não um caminho: {value}")
    return value


@dataclass(frozen=True)
class PlannerSettings:
    """Configuração validada do planner (imutável)."""

    descriptor_file: str = "CMakeLists.txt"
    hints_file: Optional[str] = None
    cycle_policy: CyclePolicy = CyclePolicy.EXCLUDE
    fail_on_degraded: bool = False

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> "PlannerSettings":
        """Materializa settings a partir da configuração efetiva.

        Seções ausentes assumem os valores de `DEFAULT_CONFIG`.

        Raises:
            InvalidConfigValueError: Se algum valor estiver fora do domínio.
        """
        if not isinstance(config, dict):
            raise InvalidConfigValueError(
                f"config deve ser dict, recebido: {type(config).__name__}"
            )

        discovery = config.get("discovery") or {}
        planner = config.get("planner") or {}
        if not isinstance(discovery, dict):
            raise InvalidConfigValueError("discovery deve ser um mapeamento")
        if not isinstance(planner, dict):
            raise InvalidConfigValueError("planner deve ser um mapeamento")

        defaults_discovery = DEFAULT_CONFIG["discovery"]
        defaults_planner = DEFAULT_CONFIG["planner"]

        descriptor = _filename(
            discovery.get("descriptor_file", defaults_discovery["descriptor_file"]),
            "discovery.descriptor_file",
        )

        hints = discovery.get("hints_file", defaults_discovery["hints_file"])
        if hints is not None:
            hints = _filename(hints, "discovery.hints_file")

        raw_policy = planner.get("cycle_policy", defaults_planner["cycle_policy"])
        try:
            policy = CyclePolicy(raw_policy)
        except ValueError:
            allowed = sorted(p.value for p in CyclePolicy)
            raise InvalidConfigValueError(
                f"planner.cycle_policy deve ser um de {allowed}, recebido: {raw_policy!r}"
            ) from None

        fail_on_degraded = planner.get("fail_on_degraded", defaults_planner["fail_on_degraded"])
        if not isinstance(fail_on_degraded, bool):
            raise InvalidConfigValueError("planner.fail_on_degraded deve ser boolean")

        return cls(
            descriptor_file=descriptor,
            hints_file=hints,
            cycle_policy=policy,
            fail_on_degraded=fail_on_degraded,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "discovery": {
                "descriptor_file": self.descriptor_file,
                "hints_file": self.hints_file,
            },
            "planner": {
                "cycle_policy": self.cycle_policy.value,
                "fail_on_degraded": self.fail_on_degraded,
            },
        }
