"""
Probe de presença e descoberta de componentes.

Este módulo inspeciona a árvore de diretórios do workspace para decidir
quais componentes catalogados estão presentes e são buildáveis.

Um componente está presente quando `<root>/<name>/` existe e contém
diretamente o arquivo descritor de build configurado (por padrão
`CMakeLists.txt`). O nome do arquivo é configuração, não lógica.

Opcionalmente, cada componente pode trazer um manifest de hints
(`discovery.hints_file`, ex.: `buildplan.yaml`) declarando dependências
adicionais:

    depends_on: [atomspace, unify]

Decisões arquiteturais:
    - A ordem de retorno é a ordem de declaração do catálogo
    - Componentes ausentes não geram erro: são excluídos e registrados
      como diagnóstico no PlanContext
    - Somente a raiz ilegível é fatal (RootNotReadableError)
    - Hints complementam, nunca removem, as dependências declaradas

Invariantes:
    - Nenhuma escrita no filesystem
    - Todo PresentComponent referencia um ComponentSpec do catálogo
    - Hints sempre nomeiam componentes catalogados distintos do próprio

Limites explícitos:
    - Não interpreta o conteúdo do arquivo descritor
    - Não constrói grafo nem detecta ciclos
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple, Union

import yaml

from atlas_buildplan.core.catalog.schema import Catalog, ComponentSpec
from atlas_buildplan.core.exceptions import InvalidSpecError, RootNotReadableError
from atlas_buildplan.core.run_context import LEVEL_DEBUG, LEVEL_INFO, PlanContext

STAGE = "discovery"

DEFAULT_DESCRIPTOR_FILE = "CMakeLists.txt"


@dataclass(frozen=True)
class PresentComponent:
    """
    Componente catalogado confirmado em disco.

    Campos:
        - spec: ComponentSpec de origem (imutável)
        - path: diretório do componente
        - hinted_dependencies: dependências extras lidas do manifest de hints

    Invariantes:
        - `dependencies` preserva a ordem: declaradas primeiro, hints depois
        - Nenhuma dependência se repete
    """

    spec: ComponentSpec
    path: Path
    hinted_dependencies: Tuple[str, ...] = ()

    @property
    def name(self) -> str:
        return self.spec.name

    @property
    def dependencies(self) -> Tuple[str, ...]:
        deps = list(self.spec.dependencies)
        for d in self.hinted_dependencies:
            if d not in deps:
                deps.append(d)
        return tuple(deps)


def component_exists(root: Union[str, Path], name: str, descriptor_file: str = DEFAULT_DESCRIPTOR_FILE) -> bool:
    """Retorna True se `root/name/descriptor_file` existir como arquivo regular."""
    return (Path(root) / name / descriptor_file).is_file()


def _check_root(root: Path) -> None:
    if not root.exists():
        raise RootNotReadableError(
            f"root path does not exist: {root}",
            details={"root": str(root), "reason": "missing"},
        )
    if not root.is_dir():
        raise RootNotReadableError(
            f"root path is not a directory: {root}",
            details={"root": str(root), "reason": "not_a_directory"},
        )
    try:
        # listar prova permissão de leitura (stat sozinho não prova)
        with os.scandir(root) as it:
            next(it, None)
    except OSError as e:
        raise RootNotReadableError(
            f"root path cannot be read: {root} ({e.strerror or e})",
            details={"root": str(root), "reason": "unreadable"},
        ) from e


def read_dependency_hints(component_dir: Path, hints_file: str, *, spec: ComponentSpec, catalog: Catalog) -> Tuple[str, ...]:
    """
    Lê o manifest de hints de um componente, se existir.

    O manifest aceita YAML ou JSON (inferido pela extensão; sem extensão
    conhecida, YAML) com a chave `depends_on` (lista de nomes).

    Returns:
        Tuple[str, ...]: hints em ordem de arquivo, sem repetição; vazio se
        o arquivo não existir.

    Raises:
        InvalidSpecError: manifest malformado, auto-dependência ou nome
            não catalogado.
    """
    path = component_dir / hints_file
    if not path.is_file():
        return ()

    try:
        raw = path.read_text(encoding="utf-8")
        data = json.loads(raw) if path.suffix.lower() == ".json" else yaml.safe_load(raw)
    except (yaml.YAMLError, json.JSONDecodeError, UnicodeDecodeError) as e:
        raise InvalidSpecError(
            f"cannot parse dependency hints of '{spec.name}': {e}",
            details={"component": spec.name, "path": str(path)},
        ) from e

    if data is None:
        return ()
    if not isinstance(data, dict):
        raise InvalidSpecError(
            f"dependency hints of '{spec.name}' must be a mapping",
            details={"component": spec.name, "path": str(path)},
        )

    depends_on = data.get("depends_on")
    if depends_on is None:
        return ()
    if not isinstance(depends_on, list):
        raise InvalidSpecError(
            f"depends_on of '{spec.name}' must be a list",
            details={"component": spec.name, "path": str(path)},
        )

    hints: List[str] = []
    for dep in depends_on:
        if dep == spec.name:
            raise InvalidSpecError(
                f"component '{spec.name}' depends on itself (hints)",
                details={"component": spec.name, "path": str(path)},
            )
        if not isinstance(dep, str) or dep not in catalog:
            raise InvalidSpecError(
                f"component '{spec.name}' hints unknown component {dep!r}",
                details={"component": spec.name, "dependency": str(dep), "path": str(path)},
            )
        if dep not in hints:
            hints.append(dep)
    return tuple(hints)


def discover(
    root: Union[str, Path],
    catalog: Catalog,
    *,
    descriptor_file: str = DEFAULT_DESCRIPTOR_FILE,
    hints_file: Optional[str] = None,
    ctx: Optional[PlanContext] = None,
) -> Tuple[PresentComponent, ...]:
    """
    Determina o *present set* para o catálogo informado.

    Args:
        root: diretório raiz do workspace.
        catalog: catálogo validado.
        descriptor_file: arquivo que torna um diretório buildável.
        hints_file: nome do manifest opcional de hints de dependência.
        ctx: contexto opcional para diagnósticos por componente.

    Returns:
        Tuple[PresentComponent, ...]: componentes presentes, em ordem de catálogo.

    Raises:
        RootNotReadableError: se a raiz não existir ou não puder ser listada.
        InvalidSpecError: se um manifest de hints for inválido.
    """
    root_path = Path(root)
    _check_root(root_path)

    present: List[PresentComponent] = []
    for spec in catalog:
        exists = component_exists(root_path, spec.name, descriptor_file)
        if ctx is not None:
            ctx.log(
                stage=STAGE,
                level=LEVEL_DEBUG if exists else LEVEL_INFO,
                message="present" if exists else f"absent: {descriptor_file} not found",
                component=spec.name,
                present=exists,
            )
        if not exists:
            continue

        component_dir = root_path / spec.name
        hints: Tuple[str, ...] = ()
        if hints_file:
            hints = read_dependency_hints(component_dir, hints_file, spec=spec, catalog=catalog)
            if hints and ctx is not None:
                ctx.log(
                    stage=STAGE,
                    level=LEVEL_DEBUG,
                    message=f"dependency hints: {', '.join(hints)}",
                    component=spec.name,
                    hints=list(hints),
                )
        present.append(PresentComponent(spec=spec, path=component_dir, hinted_dependencies=hints))

    return tuple(present)
