"""
Tests for the pop command line, driven through click's CliRunner.
"""

import pytest
from click.testing import CliRunner

from popindex_app.cli import cli


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def tree(tmp_path, write_file):
    root = tmp_path / "data"
    write_file(root / "report.pdf", 4096, "2024-02-02")
    write_file(root / "notes.txt", 12, "2022-05-05")
    write_file(root / "sub" / "image_0001.jpg", 2048, "2024-03-03")
    return root


@pytest.fixture
def db_arg(tmp_path):
    return ["--db", str(tmp_path / "cli" / "index.db")]


def _index(runner, tree, db_arg, *extra):
    result = runner.invoke(cli, ["--index", str(tree), *extra, *db_arg])
    assert result.exit_code == 0, result.output
    return result


class TestIndexing:

    def test_index_reports_success(self, runner, tree, db_arg):
        result = _index(runner, tree, db_arg)
        assert "Indexing" in result.output
        # root, sub, three files
        assert "Indexed 5 entries" in result.output

    def test_reindex_requires_index(self, runner, db_arg):
        result = runner.invoke(cli, ["--reindex", *db_arg])
        assert result.exit_code == 2
        assert "--reindex requires --index" in result.output

    def test_reindex(self, runner, tree, db_arg):
        _index(runner, tree, db_arg)
        (tree / "notes.txt").unlink()
        _index(runner, tree, db_arg, "--reindex")

        result = runner.invoke(cli, ["--name", "notes", *db_arg])
        assert result.exit_code == 0
        assert "Found 0 results" in result.output


class TestSearching:

    def test_search_by_extension(self, runner, tree, db_arg):
        _index(runner, tree, db_arg)
        result = runner.invoke(cli, ["--ext", "pdf", *db_arg])

        assert result.exit_code == 0, result.output
        assert "report.pdf" in result.output
        assert "notes.txt" not in result.output
        assert "Found 1 results" in result.output

    def test_search_regex_and_type(self, runner, tree, db_arg):
        _index(runner, tree, db_arg)
        result = runner.invoke(cli, ["--regex", r"^image_\d{4}\.jpg$", "--type", "file", *db_arg])

        assert result.exit_code == 0, result.output
        assert "image_0001.jpg" in result.output
        assert "Files: 1" in result.output

    def test_sort_and_limit(self, runner, tree, db_arg):
        _index(runner, tree, db_arg)
        result = runner.invoke(
            cli, ["--type", "file", "--sort", "size", "--reverse", "--limit", "1", *db_arg]
        )

        assert result.exit_code == 0, result.output
        assert "report.pdf" in result.output
        assert "Found 1 results" in result.output

    def test_invalid_regex_is_an_error(self, runner, tree, db_arg):
        _index(runner, tree, db_arg)
        result = runner.invoke(cli, ["--regex", "(unclosed", *db_arg])

        assert result.exit_code == 1
        assert "Error" in result.output

    def test_undecodable_argument_searches_normally(self, runner, tree, db_arg):
        _index(runner, tree, db_arg)
        result = runner.invoke(cli, ["--path", str(tree) + "/\udcff", *db_arg])

        assert result.exit_code == 0, result.output
        assert "Found 0 results" in result.output

    def test_bad_sort_key_rejected(self, runner, db_arg):
        result = runner.invoke(cli, ["--sort", "color", *db_arg])
        assert result.exit_code == 2


class TestMaintenance:

    def test_clear(self, runner, tree, db_arg):
        _index(runner, tree, db_arg)
        result = runner.invoke(cli, ["--clear", *db_arg])
        assert result.exit_code == 0
        assert "Index cleared" in result.output

        result = runner.invoke(cli, [*db_arg])
        assert "Found 0 results" in result.output

    def test_vacuum(self, runner, tree, db_arg):
        _index(runner, tree, db_arg)
        result = runner.invoke(cli, ["--vacuum", *db_arg])
        assert result.exit_code == 0
        assert "Index compacted" in result.output

    def test_unopenable_index(self, runner, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("x")
        result = runner.invoke(cli, ["--db", str(blocker / "index.db")])
        assert result.exit_code == 1
        assert "Error" in result.output
