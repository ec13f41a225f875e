"""Relatórios determinísticos do BuildPlan (JSON e Markdown)."""

from .plan_report import REQUIRED_SECTIONS, plan_to_dict, render_plan_markdown  # noqa: F401
