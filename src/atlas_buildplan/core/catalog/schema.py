"""
Schema canônico do catálogo de componentes.

O catálogo é o conhecimento estático do planner: quais componentes
existem, de quais outros cada um depende diretamente e se ele é
obrigatório (core) ou opcional. Ele substitui a lista global mantida à
mão por dados estruturados, carregados uma vez e passados
explicitamente ao engine.

Formato aceito por `validate_catalog` (YAML/JSON já parseado):

    components:
      - name: cogutil
      - name: atomspace
        dependencies: [cogutil]
      - name: attention
        dependencies: [atomspace]
        tier: optional

Uma lista de entradas sem a chave `components` também é aceita.
`depends_on` é aceito como sinônimo de `dependencies`.

Invariantes:
    - Nomes são strings não vazias e únicos no catálogo
    - Nenhum componente depende de si mesmo
    - Toda dependência referencia um componente catalogado
    - A ordem de declaração é preservada e serve de desempate estável

Limites explícitos:
    - Não verifica presença em disco (ver `core.discovery`)
    - Não detecta ciclos (ver `core.engine.planner`)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, FrozenSet, Iterator, List, Tuple

from atlas_buildplan.core.exceptions import InvalidSpecError


class Tier(str, Enum):
    """
    Classificação de obrigatoriedade de um componente.

    - CORE: ausência ou dependência insatisfeita degrada o plano com warning
    - OPTIONAL: pulado sem warning quando indisponível ou insatisfeito
    """

    CORE = "core"
    OPTIONAL = "optional"


def _is_non_empty_str(x: Any) -> bool:
    return isinstance(x, str) and bool(x.strip())


@dataclass(frozen=True)
class ComponentSpec:
    """
    Especificação imutável de um componente catalogado.

    Campos:
        - name: identificador único do componente (nome do diretório)
        - dependencies: dependências diretas, na ordem declarada, sem repetição
        - tier: Tier.CORE (padrão) ou Tier.OPTIONAL

    Raises:
        InvalidSpecError: nome inválido, auto-dependência ou tier desconhecido.
    """

    name: str
    dependencies: Tuple[str, ...] = ()
    tier: Tier = Tier.CORE

    def __post_init__(self) -> None:
        if not _is_non_empty_str(self.name):
            raise InvalidSpecError(
                "component name must be a non-empty string",
                details={"name": self.name},
            )
        if self.name in {".", ".."} or "/" in self.name or "\\" in self.name:
            raise InvalidSpecError(
                f"component name must be a plain directory name: {self.name!r}",
                details={"name": self.name},
            )

        if isinstance(self.dependencies, str):
            raise InvalidSpecError(
                f"dependencies of '{self.name}' must be a list of names",
                details={"component": self.name},
            )
        deps: List[str] = []
        for dep in self.dependencies:
            if not _is_non_empty_str(dep):
                raise InvalidSpecError(
                    f"component '{self.name}' declares an invalid dependency name: {dep!r}",
                    details={"component": self.name, "dependency": dep},
                )
            if dep == self.name:
                raise InvalidSpecError(
                    f"component '{self.name}' depends on itself",
                    details={"component": self.name},
                )
            if dep not in deps:
                deps.append(dep)
        object.__setattr__(self, "dependencies", tuple(deps))

        try:
            tier = Tier(self.tier)
        except ValueError:
            raise InvalidSpecError(
                f"component '{self.name}' has unknown tier: {self.tier!r}",
                details={"component": self.name, "tier": str(self.tier)},
            ) from None
        object.__setattr__(self, "tier", tier)

    @property
    def required_dependencies(self) -> FrozenSet[str]:
        return frozenset(self.dependencies)

    @property
    def is_core(self) -> bool:
        return self.tier is Tier.CORE

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "dependencies": list(self.dependencies),
            "tier": self.tier.value,
        }


@dataclass(frozen=True)
class Catalog:
    """
    Coleção ordenada e validada de `ComponentSpec`.

    A validação acontece na construção: um `Catalog` existente é sempre
    estruturalmente válido. Testes podem instanciar catálogos sintéticos
    diretamente, sem tocar o filesystem.

    Raises:
        InvalidSpecError: nome duplicado ou dependência não catalogada.
    """

    components: Tuple[ComponentSpec, ...] = ()
    _index: Dict[str, int] = field(default_factory=dict, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        specs = tuple(self.components)
        index: Dict[str, int] = {}
        for i, spec in enumerate(specs):
            if not isinstance(spec, ComponentSpec):
                raise InvalidSpecError(
                    f"catalog entry #{i} is not a ComponentSpec",
                    details={"position": i},
                )
            if spec.name in index:
                raise InvalidSpecError(
                    f"duplicate component name: {spec.name}",
                    details={"component": spec.name},
                )
            index[spec.name] = i

        for spec in specs:
            for dep in spec.dependencies:
                if dep not in index:
                    raise InvalidSpecError(
                        f"component '{spec.name}' depends on unknown component '{dep}'",
                        details={"component": spec.name, "dependency": dep},
                    )

        object.__setattr__(self, "components", specs)
        object.__setattr__(self, "_index", index)

    def __iter__(self) -> Iterator[ComponentSpec]:
        return iter(self.components)

    def __len__(self) -> int:
        return len(self.components)

    def __contains__(self, name: object) -> bool:
        return name in self._index

    def get(self, name: str) -> ComponentSpec:
        if name not in self._index:
            raise KeyError(name)
        return self.components[self._index[name]]

    def index(self, name: str) -> int:
        """Posição de declaração (desempate estável do sorter)."""
        if name not in self._index:
            raise KeyError(name)
        return self._index[name]

    def names(self) -> List[str]:
        return [c.name for c in self.components]

    def to_dict(self) -> Dict[str, Any]:
        return {"components": [c.to_dict() for c in self.components]}


def _entries(data: Any) -> List[Any]:
    if isinstance(data, dict):
        if "components" not in data:
            raise InvalidSpecError("catalog mapping must define 'components'")
        data = data["components"]
    if not isinstance(data, list):
        raise InvalidSpecError("catalog components must be a list")
    return data


def _spec_from_entry(i: int, entry: Any) -> ComponentSpec:
    # forma curta: apenas o nome
    if isinstance(entry, str):
        return ComponentSpec(name=entry)

    if not isinstance(entry, dict):
        raise InvalidSpecError(
            f"components[{i}] must be a mapping or a name",
            details={"position": i},
        )

    if "dependencies" in entry and "depends_on" in entry:
        raise InvalidSpecError(
            f"components[{i}] declares both 'dependencies' and 'depends_on'",
            details={"position": i},
        )
    deps = entry.get("dependencies", entry.get("depends_on"))
    if deps is None:
        deps = []
    if not isinstance(deps, list):
        raise InvalidSpecError(
            f"components[{i}].dependencies must be a list",
            details={"position": i},
        )

    return ComponentSpec(
        name=entry.get("name"),
        dependencies=tuple(deps),
        tier=entry.get("tier", Tier.CORE.value),
    )


def validate_catalog(data: Any) -> Catalog:
    """Valida e materializa um catálogo a partir de dados já parseados."""
    return Catalog(tuple(_spec_from_entry(i, e) for i, e in enumerate(_entries(data))))
