"""Changelog renderers: Markdown document and JSON report."""

from apichangelog.render.describe import describe_change, format_value
from apichangelog.render.json_report import build_report, render_json
from apichangelog.render.markdown import (
    format_change,
    render_changelog,
    render_for_file,
    render_release,
)

__all__ = [
    "build_report",
    "describe_change",
    "format_change",
    "format_value",
    "render_changelog",
    "render_for_file",
    "render_json",
    "render_release",
]
