"""
Report rendering: markdown text or boxed terminal tables.
"""

from .formatter import render_markdown, render_table, write_report

__all__ = ["render_markdown", "render_table", "write_report"]
