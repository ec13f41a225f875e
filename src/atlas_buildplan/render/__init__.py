"""Renderização do BuildPlan em ações de build opacas por componente."""

from .steps import BuildAction, BuildPhase, artifact_paths, log_paths, render_actions  # noqa: F401
