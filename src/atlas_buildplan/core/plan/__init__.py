"""Tipos canônicos do plano de build (BuildPlan, SkipReason, ComponentState)."""

from .types import BuildPlan, ComponentState, SkipReason, SkippedComponent  # noqa: F401
