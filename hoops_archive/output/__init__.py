"""Presentation layer: display formatting, reports and the static site.

Submodules (reports and site are imported directly, they depend on the
stats layer):
    formatting: Dash-aware number, percentage, season and date formatting
    reports: JSON-ready records reports and CSV frames
    site: Jinja2 static records site builder
"""

from __future__ import annotations

from hoops_archive.output.formatting import (
    DASH,
    fmt_count,
    fmt_number,
    fmt_percent,
    fmt_ratio,
    fmt_stat,
    format_game_date,
    format_season_label,
)

__all__ = [
    "DASH",
    "fmt_count",
    "fmt_number",
    "fmt_percent",
    "fmt_ratio",
    "fmt_stat",
    "format_game_date",
    "format_season_label",
]
