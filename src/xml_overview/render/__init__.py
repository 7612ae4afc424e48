"""Rendering layer: turns a (minimized) graph into overview text."""

from .renderer import OverviewRenderer, render

__all__ = [
    "OverviewRenderer",
    "render",
]
