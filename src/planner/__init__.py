"""Planner - schedule analysis, checklists and habits."""

__version__ = "0.1.0"
