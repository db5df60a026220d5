"""CLI command tests using Click CliRunner.

Strategy: patch get_components at each command module's import point so
commands run against a temp database instead of the configured one.
"""

import json
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from cli.config_models import MoodlogConfig
from cli.main import cli
from journal.search import JournalSearch


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def components(tmp_path):
    from journal.storage import JournalStorage

    storage = JournalStorage(tmp_path / "cli.db")
    return {
        "config": MoodlogConfig(),
        "owner": "local",
        "storage": storage,
        "search": JournalSearch(storage),
    }


@pytest.fixture(autouse=True)
def _patched(components):
    patches = [
        patch("cli.main.load_config_model", return_value=MoodlogConfig()),
        patch("cli.commands.journal.get_components", return_value=components),
        patch("cli.commands.analytics.get_components", return_value=components),
        patch("cli.commands.export.get_components", return_value=components),
    ]
    for p in patches:
        p.start()
    yield
    for p in reversed(patches):
        p.stop()


def _add(runner, *args):
    return runner.invoke(cli, ["journal", "add", *args])


class TestJournalCommands:
    def test_add(self, runner, components):
        result = _add(runner, "-m", "7", "-p", "6", "--tags", "work, gym", "--sleep", "8",
                      "I feel happy and grateful today")
        assert result.exit_code == 0, result.output
        assert "Created" in result.output
        assert "positive" in result.output

        entries = components["storage"].find_by_owner_since("local", None)
        assert len(entries) == 1
        assert entries[0].tags == ["work", "gym"]
        assert entries[0].mood_factors == {"sleep": 8}

    def test_add_sentiment_override(self, runner, components):
        _add(runner, "-m", "7", "-p", "6", "-s", "neutral", "I feel happy and grateful today")
        entry = components["storage"].find_by_owner_since("local", None)[0]
        assert entry.sentiment == "neutral"

    def test_add_rating_out_of_range(self, runner):
        result = _add(runner, "-m", "11", "-p", "6", "Too much")
        assert result.exit_code != 0

    def test_add_tag_too_long(self, runner):
        result = _add(runner, "-m", "5", "-p", "6", "--tags", "x" * 51, "Long tag day")
        assert result.exit_code != 0
        assert "between 1 and 50" in result.output

    def test_list_empty(self, runner):
        result = runner.invoke(cli, ["journal", "list"])
        assert result.exit_code == 0
        assert "No entries found" in result.output

    def test_list_limit_capped_by_config(self, runner, components):
        components["config"].pagination.max_limit = 5
        result = runner.invoke(cli, ["journal", "list", "-n", "6"])
        assert result.exit_code != 0
        assert "must be at most 5" in result.output

        result = runner.invoke(cli, ["journal", "search", "work", "-n", "6"])
        assert result.exit_code != 0

    def test_list(self, runner):
        _add(runner, "-m", "5", "-p", "5", "Morning pages")
        _add(runner, "-m", "6", "-p", "6", "Evening review")
        result = runner.invoke(cli, ["journal", "list", "-n", "1"])
        assert result.exit_code == 0
        assert "Evening review" in result.output
        assert "Page 1/2" in result.output

    def test_search(self, runner):
        _add(runner, "-m", "5", "-p", "5", "--tags", "gratitude", "Thankful for friends")
        _add(runner, "-m", "5", "-p", "5", "Unrelated entry")
        result = runner.invoke(cli, ["journal", "search", "GRATITUDE"])
        assert result.exit_code == 0
        assert "Thankful" in result.output
        assert "Unrelated" not in result.output

    def test_search_blank_query(self, runner):
        result = runner.invoke(cli, ["journal", "search", "  "])
        assert result.exit_code != 0
        assert "Search query is required" in result.output

    def test_view_by_prefix(self, runner, components):
        _add(runner, "-m", "4", "-p", "3", "--gratitude", "tea", "Slow day")
        entry = components["storage"].find_by_owner_since("local", None)[0]
        result = runner.invoke(cli, ["journal", "view", entry.id[:8]])
        assert result.exit_code == 0
        assert "Slow day" in result.output
        assert "tea" in result.output

    def test_view_missing(self, runner):
        result = runner.invoke(cli, ["journal", "view", "nope"])
        assert "Not found" in result.output

    def test_edit(self, runner, components):
        _add(runner, "-m", "4", "-p", "3", "Slow day")
        entry = components["storage"].find_by_owner_since("local", None)[0]
        result = runner.invoke(cli, ["journal", "edit", entry.id, "-m", "9", "--tags", "a,b"])
        assert result.exit_code == 0
        updated = components["storage"].get_by_id("local", entry.id)
        assert updated.mood == 9
        assert updated.tags == ["a", "b"]

    def test_edit_nothing(self, runner):
        result = runner.invoke(cli, ["journal", "edit", "abc"])
        assert "Nothing to update" in result.output

    def test_delete(self, runner, components):
        _add(runner, "-m", "4", "-p", "3", "Slow day")
        entry = components["storage"].find_by_owner_since("local", None)[0]
        result = runner.invoke(cli, ["journal", "delete", entry.id, "-y"])
        assert result.exit_code == 0
        assert "Deleted" in result.output
        assert components["storage"].count_by_owner("local") == 0

    def test_delete_missing(self, runner):
        result = runner.invoke(cli, ["journal", "delete", "nope", "-y"])
        assert "Not found" in result.output


class TestExportCommand:
    def test_export_json(self, runner, tmp_path):
        _add(runner, "-m", "7", "-p", "6", "--tags", "gym", "I feel happy and grateful today")
        _add(runner, "-m", "4", "-p", "5", "Long and tiring day")
        out = tmp_path / "out.json"

        result = runner.invoke(cli, ["export", "-o", str(out)])
        assert result.exit_code == 0, result.output
        assert "Exported 2 entries" in result.output

        data = json.loads(out.read_text())
        assert data["owner"] == "local"
        assert [e["content"] for e in data["entries"]] == [
            "I feel happy and grateful today",
            "Long and tiring day",
        ]

    def test_export_markdown(self, runner, tmp_path):
        _add(runner, "-m", "7", "-p", "6", "Morning pages")
        out = tmp_path / "out.md"
        result = runner.invoke(cli, ["export", "-o", str(out), "-f", "markdown"])
        assert result.exit_code == 0
        assert "Morning pages" in out.read_text()


class TestAnalyticsCommands:
    def test_analytics_empty(self, runner):
        result = runner.invoke(cli, ["analytics"])
        assert result.exit_code == 0
        assert "No entries in the last week" in result.output

    def test_analytics(self, runner):
        _add(runner, "-m", "7", "-p", "6", "I feel happy and grateful today")
        _add(runner, "-m", "5", "-p", "4", "Worried and anxious")
        _add(runner, "-m", "8", "-p", "9", "Shipped it")
        result = runner.invoke(cli, ["analytics", "--range", "year"])
        assert result.exit_code == 0
        assert "last week" in result.output
        assert "6.7" in result.output
        assert "positive 1" in result.output
        assert "negative 1" in result.output

    def test_classify(self, runner):
        result = runner.invoke(cli, ["classify", "I feel happy and grateful today"])
        assert result.exit_code == 0
        assert "positive" in result.output
        assert "happy" in result.output

    def test_classify_short(self, runner):
        result = runner.invoke(cli, ["classify", "meh"])
        assert "too short" in result.output


class TestLoggingSetup:
    def test_log_file_from_config(self, runner, tmp_path):
        log_file = tmp_path / "logs" / "moodlog.log"
        config = MoodlogConfig.from_dict({"paths": {"log_file": str(log_file)}})
        with patch("cli.main.load_config_model", return_value=config):
            result = runner.invoke(cli, ["classify", "I feel happy and grateful today"])
        assert result.exit_code == 0
        assert log_file.exists()
