"""Unit tests for SiteBuilder class."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from hoops_archive.data.loader import ArchiveData
from hoops_archive.data.models import Player
from hoops_archive.output.reports import ReportGenerator
from hoops_archive.output.site import (
    DEFAULT_TEMPLATE_DIR,
    PAGES,
    OutputWriteError,
    SiteBuilder,
    TemplateLoadError,
    build_site,
)


@pytest.fixture
def builder(archive: ArchiveData, tmp_path: Path) -> SiteBuilder:
    """Site builder writing to a temporary directory."""
    return SiteBuilder(
        archive,
        output_dir=tmp_path / "docs",
        reports=ReportGenerator(archive, leaderboard_size=5, min_games=2),
    )


class TestSiteBuilderInit:
    """Tests for SiteBuilder construction."""

    def test_default_template_dir(self, archive: ArchiveData) -> None:
        builder = SiteBuilder(archive)

        assert builder.template_dir == DEFAULT_TEMPLATE_DIR
        assert builder.output_dir == Path("docs")

    def test_missing_template_dir(self, archive: ArchiveData, tmp_path: Path) -> None:
        builder = SiteBuilder(archive, tmp_path / "docs", template_dir=tmp_path / "nope")

        with pytest.raises(TemplateLoadError, match="not found"):
            builder.jinja_env  # noqa: B018

    def test_autoescape_enabled(self, builder: SiteBuilder) -> None:
        assert builder.jinja_env.autoescape is True


class TestBuild:
    """Tests for build."""

    def test_writes_pages_and_json(self, builder: SiteBuilder) -> None:
        count = builder.build()

        out = builder.output_dir
        for page in PAGES:
            assert (out / page).is_file()
        for name in ("season_records", "single_game_records", "career_stats",
                     "opponents", "team_records"):
            assert (out / "api" / f"{name}.json").is_file()
        assert (out / "seasons" / "2024.html").is_file()
        assert (out / "api" / "seasons" / "2023.json").is_file()
        assert (out / "games" / "20250110.html").is_file()
        assert (out / "api" / "games" / "20250214.json").is_file()
        # 5 JSON + 5 pages + 2 files per season + 2 files per game
        assert count == 5 + len(PAGES) + 2 * 2 + 2 * 6

    def test_page_content(self, builder: SiteBuilder) -> None:
        builder.build()

        index = (builder.output_dir / "index.html").read_text()
        records = (builder.output_dir / "season_records.html").read_text()
        season = (builder.output_dir / "seasons" / "2024.html").read_text()

        assert "Boys Basketball" in index
        assert "3-2" in index
        assert "Jordan Miles" in records
        assert 'class="placeholder"' in records
        assert 'href="../index.html"' in season
        assert "Pat Hale" in season

    def test_json_content(self, builder: SiteBuilder) -> None:
        builder.build()

        career = json.loads((builder.output_dir / "api" / "career_stats.json").read_text())
        season = json.loads((builder.output_dir / "api" / "seasons" / "2024.json").read_text())

        assert career["players"][0]["name"] == "Jordan Miles"
        assert season["record"] == "2-1"

    def test_game_pages(self, builder: SiteBuilder) -> None:
        """Each game gets a box-score page linked from its season schedule."""
        builder.build()

        page = (builder.output_dir / "games" / "20250110.html").read_text()
        season = (builder.output_dir / "seasons" / "2024.html").read_text()
        detail = json.loads(
            (builder.output_dir / "api" / "games" / "20250110.json").read_text()
        )

        assert "Team Totals" in page
        assert "Avery Stone" in page
        assert 'href="../seasons/2024.html"' in page
        assert 'href="../games/20250110.html"' in season
        assert detail["team"]["points"] == 48
        assert detail["box_score"][0]["name"] == "Jordan Miles"

    def test_game_without_stats_page(self, builder: SiteBuilder) -> None:
        builder.build()

        page = (builder.output_dir / "games" / "20250214.html").read_text()

        assert "No player statistics available" in page
        assert "No recap yet." in page

    def test_names_are_escaped(self, archive: ArchiveData, tmp_path: Path) -> None:
        escaped = ArchiveData(
            program=archive.program,
            games=archive.games,
            rows=archive.rows,
            players=[Player(player_id="101", full_name="<b>Jordan</b>"), *archive.players[1:]],
            seasons=archive.seasons,
        )

        SiteBuilder(escaped, tmp_path / "docs").build()

        html = (tmp_path / "docs" / "season_records.html").read_text()
        assert "&lt;b&gt;Jordan&lt;/b&gt;" in html
        assert "<b>Jordan</b>" not in html


class TestRenderErrors:
    """Tests for render and write failures."""

    def test_missing_template(self, builder: SiteBuilder) -> None:
        with pytest.raises(TemplateLoadError, match="missing.html"):
            builder._render_page("missing.html")

    def test_unwritable_output(self, archive: ArchiveData, tmp_path: Path) -> None:
        blocker = tmp_path / "docs"
        blocker.write_text("not a directory")

        with pytest.raises(OutputWriteError):
            SiteBuilder(archive, blocker).build()


class TestBuildSite:
    """Tests for build_site convenience function."""

    def test_build_site(self, archive: ArchiveData, tmp_path: Path) -> None:
        count = build_site(archive, tmp_path / "site")

        assert count > 0
        assert (tmp_path / "site" / "index.html").is_file()
