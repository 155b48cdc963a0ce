"""Unit tests for the explain command."""

from __future__ import annotations

from pathlib import Path

from click.testing import CliRunner, Result

from note_indexer.cli import cli


def _explain(config: Path, *args: str) -> Result:
    runner = CliRunner()
    return runner.invoke(cli, ["--config", str(config), "--quiet", "explain", *args])


class TestExplain:
    def test_prints_expression_and_index_query(self, sample_config: Path) -> None:
        result = _explain(sample_config, "tags:work,urgent")
        assert result.exit_code == 0, result.output
        assert "Expression: (tags:work AND tags:urgent)" in result.output
        assert "Index query: (+tags:work +tags:urgent)" in result.output

    def test_negated_range(self, sample_config: Path) -> None:
        result = _explain(sample_config, "--", "-date:<2024-01-01")
        assert result.exit_code == 0, result.output
        assert "Expression: -date:<2024-01-01" in result.output
        assert "Index query: (+*:* -date:[* TO 1704067200})" in result.output

    def test_uses_configured_default_fields(self, temp_dir: Path) -> None:
        config_path = temp_dir / "config.toml"
        config_path.write_text('[search]\ndefault_fields = ["title"]\n')
        result = _explain(config_path, "roadmap")
        assert result.exit_code == 0, result.output
        assert "Index query: title:roadmap" in result.output

    def test_works_without_index(self, temp_dir: Path) -> None:
        result = _explain(temp_dir / "missing.toml", "roadmap")
        assert result.exit_code == 0, result.output
        assert "Index query: (title:roadmap body:roadmap)" in result.output

    def test_syntax_error(self, sample_config: Path) -> None:
        result = _explain(sample_config, "tags:")
        assert result.exit_code == 1
        assert "expected a value after 'tags:'" in result.output

    def test_unknown_field(self, sample_config: Path) -> None:
        result = _explain(sample_config, "price:<=100")
        assert result.exit_code == 1
        assert "Unknown field: price" in result.output
