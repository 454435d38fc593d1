"""Tests for relguard tree command."""

import json
from pathlib import Path

from click.testing import CliRunner

from relguard.cli.main import cli

runner = CliRunner()


class TestTreeCommand:
    """relguard tree command tests."""

    def test_given_record_when_tree_then_renders_header_and_relations(self, db_url: str) -> None:
        # When
        result = runner.invoke(cli, ["tree", "tests.models:Author", "1", "--database-url", db_url])

        # Then
        assert result.exit_code == 0, result.output
        assert "Relation Tree for Author (ID: 1) | Depth: 1" in result.output
        assert "posts (Post): [10, 11]" in result.output
        assert "profile (Profile): [5]" in result.output
        assert "comments" not in result.output

    def test_given_depth_when_tree_then_nested_levels_shown(self, db_url: str) -> None:
        result = runner.invoke(
            cli, ["tree", "tests.models:Author", "1", "-1", "--database-url", db_url]
        )

        assert result.exit_code == 0, result.output
        assert "Depth: -1" in result.output
        assert "comments (Comment): [100, 101, 102]" in result.output
        assert "replies (Reply): [1000, 1001]" in result.output

    def test_given_empty_relations_when_tree_then_empty_id_lists(self, db_url: str) -> None:
        result = runner.invoke(cli, ["tree", "tests.models:Author", "2", "--database-url", db_url])

        assert result.exit_code == 0, result.output
        assert "posts (Post): []" in result.output

    def test_given_json_flag_when_tree_then_nested_dict(self, db_url: str) -> None:
        result = runner.invoke(
            cli, ["tree", "tests.models:Author", "1", "2", "--json", "--database-url", db_url]
        )

        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["posts"]["ids"] == [10, 11]
        assert data["posts"]["model"] == "Post"
        assert data["posts"]["nested"]["comments"]["ids"] == [100, 101, 102]

    def test_given_missing_arguments_when_tree_then_prompts(self, db_url: str) -> None:
        result = runner.invoke(
            cli,
            ["tree", "--database-url", db_url, "--models-module", "tests.models"],
            input="Author\n1\n",
        )

        assert result.exit_code == 0, result.output
        assert "Enter the model class" in result.output
        assert "posts (Post): [10, 11]" in result.output

    def test_given_configured_default_depth_when_tree_then_used(
        self, db_url: str, tmp_path: Path
    ) -> None:
        (tmp_path / ".relguard.yaml").write_text(
            f"guard:\n  default_depth: 2\ndatabase:\n  url: {db_url}\ncli:\n  models_module: tests.models\n"
        )

        result = runner.invoke(cli, ["tree", "Author", "1"])

        assert result.exit_code == 0, result.output
        assert "Depth: 2" in result.output
        assert "comments (Comment): [100, 101, 102]" in result.output

    def test_given_unknown_model_when_tree_then_error(self, db_url: str) -> None:
        result = runner.invoke(cli, ["tree", "tests.models:Ghost", "1", "--database-url", db_url])

        assert result.exit_code == 1
        assert "Class [tests.models.Ghost] is not a valid model" in result.output

    def test_given_missing_record_when_tree_then_error(self, db_url: str) -> None:
        result = runner.invoke(cli, ["tree", "tests.models:Author", "404", "--database-url", db_url])

        assert result.exit_code == 1
        assert "No record found for [Author] with ID [404]." in result.output

    def test_given_model_without_mixin_when_tree_then_error(self, db_url: str) -> None:
        result = runner.invoke(cli, ["tree", "tests.models:Comment", "100", "--database-url", db_url])

        assert result.exit_code == 1
        assert "The model [Comment] does not provide" in result.output

    def test_given_no_database_url_when_tree_then_error(self) -> None:
        result = runner.invoke(cli, ["tree", "tests.models:Author", "1"])

        assert result.exit_code == 1
        assert "No database URL configured" in result.output
