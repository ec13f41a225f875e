"""
Discovery do Atlas BuildPlan.

Determina, para cada componente catalogado, se existe uma instância
buildável em disco (`<root>/<name>/<descriptor_file>`), produzindo o
*present set* em ordem de catálogo.

Componentes principais:
    - component_exists → probe de presença (somente leitura)
    - read_dependency_hints → leitura do manifest opcional de hints
    - discover → PresentComponent[] em ordem de declaração
"""

from .probe import PresentComponent, component_exists, discover, read_dependency_hints  # noqa: F401
