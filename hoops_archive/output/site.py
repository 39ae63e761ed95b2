"""Static records site builder.

Renders the records pages from Jinja2 templates and writes the same report
data as JSON for client-side use.

Site Structure:
    docs/
    ├── index.html                # Program home: overall record, seasons
    ├── season_records.html       # Single-season leaderboards
    ├── single_game_records.html  # Single-game highs (tied-for-first)
    ├── career_stats.html         # Full career table
    ├── opponents.html            # Records vs opponents
    ├── seasons/{YYYY}.html       # Season schedule and stats
    ├── games/{GameID}.html       # Game header, recap and box score
    └── api/
        ├── season_records.json
        ├── single_game_records.json
        ├── career_stats.json
        ├── opponents.json
        ├── team_records.json
        ├── seasons/{YYYY}.json
        └── games/{GameID}.json

Example:
    >>> from hoops_archive.output.site import SiteBuilder
    >>> builder = SiteBuilder(archive, output_dir="docs")
    >>> builder.build()
    12
"""

from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, TemplateNotFound

from hoops_archive.data.loader import ArchiveData
from hoops_archive.logging import get_logger
from hoops_archive.output.reports import ReportGenerator

logger = get_logger(__name__)

# =============================================================================
# Constants
# =============================================================================

DEFAULT_OUTPUT_DIR: str = "docs"
DEFAULT_TEMPLATE_DIR: Path = Path(__file__).parent / "templates"

PAGES: tuple[str, ...] = (
    "index.html",
    "season_records.html",
    "single_game_records.html",
    "career_stats.html",
    "opponents.html",
)


# =============================================================================
# Exceptions
# =============================================================================


class SiteBuildError(Exception):
    """Base exception for site building errors."""


class TemplateLoadError(SiteBuildError):
    """Failed to load template file."""


class OutputWriteError(SiteBuildError):
    """Failed to write output file."""


# =============================================================================
# Site Builder
# =============================================================================


class SiteBuilder:
    """Build the static records site for one program.

    Attributes:
        archive: Loaded program data.
        output_dir: Directory for generated files (default: 'docs').
        template_dir: Directory containing Jinja2 templates (defaults to the
            templates shipped with the package).
    """

    def __init__(
        self,
        archive: ArchiveData,
        output_dir: str | Path = DEFAULT_OUTPUT_DIR,
        template_dir: str | Path | None = None,
        reports: ReportGenerator | None = None,
    ) -> None:
        self.archive = archive
        self.output_dir = Path(output_dir)
        self.template_dir = Path(template_dir) if template_dir else DEFAULT_TEMPLATE_DIR
        self.reports = reports or ReportGenerator(archive)
        self._jinja_env: Environment | None = None

    @property
    def jinja_env(self) -> Environment:
        """Get Jinja2 environment, creating if necessary.

        Raises:
            TemplateLoadError: If template directory not found.
        """
        if self._jinja_env is None:
            if not self.template_dir.is_dir():
                raise TemplateLoadError(f"Template directory {self.template_dir} not found")
            self._jinja_env = Environment(
                loader=FileSystemLoader(str(self.template_dir)),
                autoescape=True,
            )
        return self._jinja_env

    def build(self) -> int:
        """Generate every page and JSON file.

        Returns:
            Number of files written.

        Raises:
            SiteBuildError: If a template is missing or a file cannot be written.
        """
        logger.info("Building {} records site to {}", self.archive.program, self.output_dir)
        written = 0

        season_records = self.reports.season_records()
        single_game = self.reports.single_game_records()
        career = self.reports.career_stats()
        opponents = self.reports.opponents()
        team = self.reports.team_records()

        api_dir = self.output_dir / "api"
        for name, payload in (
            ("season_records", season_records),
            ("single_game_records", single_game),
            ("career_stats", {"players": career}),
            ("opponents", {"opponents": opponents}),
            ("team_records", team),
        ):
            self._write_json(api_dir / f"{name}.json", payload)
            written += 1

        common = {"program": self.archive.program, "team": team}
        rendered_games: set[str] = set()
        self._render_page("index.html", **common)
        self._render_page("season_records.html", report=season_records, **common)
        self._render_page("single_game_records.html", report=single_game, **common)
        self._render_page("career_stats.html", players=career, **common)
        self._render_page("opponents.html", opponents=opponents, **common)
        written += len(PAGES)

        for season in self.archive.seasons_present():
            summary = self.reports.season_summary(season)
            self._write_json(api_dir / "seasons" / f"{season}.json", summary)
            self._render_page(
                "season.html", f"seasons/{season}.html", summary=summary, root="../", **common
            )
            written += 2

        for game in self.archive.games:
            if not game.game_id or game.game_id in rendered_games:
                continue
            rendered_games.add(game.game_id)
            detail = self.reports.game_detail(game.game_id)
            self._write_json(api_dir / "games" / f"{game.game_id}.json", detail)
            self._render_page(
                "game.html", f"games/{game.game_id}.html", game=detail, root="../", **common
            )
            written += 2

        logger.info("Site build complete: {} files written", written)
        return written

    def _render_page(
        self, template_name: str, output_name: str | None = None, **context: Any
    ) -> Path:
        """Render a single page template.

        Raises:
            TemplateLoadError: If the template does not exist.
            OutputWriteError: If the page cannot be written.
        """
        try:
            template = self.jinja_env.get_template(template_name)
        except TemplateNotFound as e:
            raise TemplateLoadError(f"Template {template_name} not found") from e

        context.setdefault("generated_at", datetime.now().isoformat(timespec="seconds"))
        context.setdefault("page_name", template_name.replace(".html", ""))
        context.setdefault("root", "")
        html = template.render(**context)

        output_path = self.output_dir / (output_name or template_name)
        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            output_path.write_text(html, encoding="utf-8")
        except OSError as e:
            raise OutputWriteError(f"Failed to write {output_path}: {e}") from e
        logger.debug("Rendered {} to {}", template_name, output_path)
        return output_path

    def _write_json(self, path: Path, data: dict[str, Any]) -> None:
        """Write data to JSON file.

        Raises:
            OutputWriteError: If write fails.
        """
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(
                json.dumps(data, indent=2, default=str, ensure_ascii=False),
                encoding="utf-8",
            )
            logger.debug("Wrote JSON to {}", path)
        except OSError as e:
            raise OutputWriteError(f"Failed to write {path}: {e}") from e


def build_site(
    archive: ArchiveData,
    output_dir: str | Path = DEFAULT_OUTPUT_DIR,
    template_dir: str | Path | None = None,
) -> int:
    """Convenience function to build the full site."""
    return SiteBuilder(archive, output_dir, template_dir).build()
