"""
Core do Atlas BuildPlan.

Este pacote contém o motor de descoberta de dependências e ordenação
topológica, independente de CLI, renderização ou formato de pipeline.

O core é projetado para ser:
    - determinístico
    - testável de forma isolada (catálogos sintéticos, árvores em tmp)
    - livre de estado global
    - orientado a dados estruturados

Componentes principais:
    - catalog    → ComponentSpec, Tier e Catalog validado
    - discovery  → probe de presença e PresentComponent
    - engine     → grafo, sorter (Kahn), selector e orquestração
    - plan       → tipos do BuildPlan (SkipReason, ComponentState)
    - config     → configuração do planner (defaults + overrides)

Limites explícitos:
    - Não executa comandos de build
    - Não persiste estado entre runs
    - Não depende de CLI ou de serviços externos
"""
