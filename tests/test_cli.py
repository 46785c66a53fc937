"""Tests for the CLI commands using Click's CliRunner."""

import json
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from click.testing import CliRunner

from doc_pilot.cli.commands import cli
from doc_pilot.generators.llm_client import GenerationResult, LLMError, TokenUsage
from doc_pilot.utils.config import AppConfig
from doc_pilot.utils.config_store import API_KEY_FIELD, ConfigStore


@pytest.fixture
def runner() -> CliRunner:
    """Create a Click CliRunner."""
    return CliRunner()


@pytest.fixture
def store(tmp_path: Path) -> ConfigStore:
    """Create a config store rooted in a temporary directory."""
    return ConfigStore(tmp_path / ".doc-pilot")


@pytest.fixture
def project_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run commands from an empty project directory."""
    project = tmp_path / "project"
    project.mkdir()
    monkeypatch.chdir(project)
    return project


@pytest.fixture
def mock_llm():
    """Patch the LLM client used by the CLI."""
    with patch("doc_pilot.cli.commands.LLMClient") as mock_llm_cls:
        mock_client = MagicMock()
        mock_client.generate.return_value = GenerationResult(
            content="const [count, setCount] = useState(0);",
            usage=TokenUsage(input_tokens=30, output_tokens=60),
            model="gemini-2.5-flash",
        )
        mock_llm_cls.return_value = mock_client
        yield mock_llm_cls


def _invoke(runner: CliRunner, store: ConfigStore, args: list[str], **kwargs):
    """Invoke the CLI with an injected store and default settings."""
    obj = {"store": store, "settings": AppConfig()}
    return runner.invoke(cli, args, obj=obj, **kwargs)


class TestCliGroup:
    """Tests for the main command group."""

    def test_help(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "documentation fetcher" in result.output
        assert "find" in result.output
        assert "config" in result.output

    def test_version(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "1.0.0" in result.output


class TestFindCommand:
    """Tests for the 'find' command."""

    def test_find_help(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["find", "--help"])
        assert result.exit_code == 0
        assert "Fetch documentation" in result.output

    def test_find_with_stored_key(
        self,
        runner: CliRunner,
        store: ConfigStore,
        project_dir: Path,
        mock_llm: MagicMock,
    ) -> None:
        store.set_api_key("SECRET1")
        result = _invoke(runner, store, ["find", "react", "useState"])

        assert result.exit_code == 0
        assert "Fetching docs for react > useState" in result.output
        assert "const [count, setCount] = useState(0);" in result.output
        assert "Documentation fetched successfully" in result.output
        assert mock_llm.call_args[0][0] == "SECRET1"
        mock_llm.return_value.generate.assert_called_once()

    def test_empty_key_exits_without_call(
        self,
        runner: CliRunner,
        store: ConfigStore,
        project_dir: Path,
        mock_llm: MagicMock,
    ) -> None:
        result = _invoke(runner, store, ["find", "react", "useState"], input="\n")

        assert result.exit_code == 1
        assert "No API key provided" in result.output
        assert not store.path.exists()
        mock_llm.assert_not_called()

    def test_prompted_key_saved_before_call(
        self,
        runner: CliRunner,
        store: ConfigStore,
        project_dir: Path,
        mock_llm: MagicMock,
    ) -> None:
        stored_at_call_time = []

        def _generate(prompt: str) -> GenerationResult:
            stored_at_call_time.append(store.load())
            return GenerationResult(
                content="docs", usage=TokenUsage(), model="gemini-2.5-flash"
            )

        mock_llm.return_value.generate.side_effect = _generate
        result = _invoke(
            runner, store, ["find", "react", "useState"], input="  SECRET1  \n"
        )

        assert result.exit_code == 0
        assert "No Gemini API key found" in result.output
        assert "API key saved successfully" in result.output
        assert stored_at_call_time == [{API_KEY_FIELD: "SECRET1"}]
        assert mock_llm.call_args[0][0] == "SECRET1"

    def test_invalid_key_is_cleared(
        self,
        runner: CliRunner,
        store: ConfigStore,
        project_dir: Path,
        mock_llm: MagicMock,
    ) -> None:
        store.set_api_key("BADKEY")
        mock_llm.return_value.generate.side_effect = LLMError(
            "400 API key not valid. Please pass a valid API key."
        )
        result = _invoke(runner, store, ["find", "react", "useState"])

        assert result.exit_code == 0
        assert "Invalid API key" in result.output
        assert "Run the command again" in result.output
        assert store.load() == {}

    def test_other_error_keeps_key(
        self,
        runner: CliRunner,
        store: ConfigStore,
        project_dir: Path,
        mock_llm: MagicMock,
    ) -> None:
        store.set_api_key("SECRET1")
        mock_llm.return_value.generate.side_effect = LLMError("503 model overloaded")
        result = _invoke(runner, store, ["find", "react", "useState"])

        assert result.exit_code == 0
        assert "Error fetching from Gemini: 503 model overloaded" in result.output
        assert store.get_api_key() == "SECRET1"
        assert mock_llm.return_value.generate.call_count == 1

    def test_version_from_package_json(
        self,
        runner: CliRunner,
        store: ConfigStore,
        project_dir: Path,
        mock_llm: MagicMock,
    ) -> None:
        (project_dir / "package.json").write_text(
            json.dumps({"dependencies": {"react": "^18.2.0"}})
        )
        store.set_api_key("SECRET1")
        result = _invoke(runner, store, ["find", "react", "useState"])

        assert result.exit_code == 0
        prompt = mock_llm.return_value.generate.call_args[0][0]
        assert "version ^18.2.0" in prompt
        assert "useState" in prompt

    def test_lib_version_overrides_manifest(
        self,
        runner: CliRunner,
        store: ConfigStore,
        project_dir: Path,
        mock_llm: MagicMock,
    ) -> None:
        (project_dir / "package.json").write_text(
            json.dumps({"dependencies": {"react": "^18.2.0"}})
        )
        store.set_api_key("SECRET1")
        result = _invoke(
            runner, store, ["find", "react", "useState", "--lib-version", "19.0.0"]
        )

        assert result.exit_code == 0
        prompt = mock_llm.return_value.generate.call_args[0][0]
        assert "version 19.0.0" in prompt
        assert "18.2.0" not in prompt

    def test_no_manifest_no_version(
        self,
        runner: CliRunner,
        store: ConfigStore,
        project_dir: Path,
        mock_llm: MagicMock,
    ) -> None:
        store.set_api_key("SECRET1")
        _invoke(runner, store, ["find", "react", "useState"])

        prompt = mock_llm.return_value.generate.call_args[0][0]
        assert "version" not in prompt

    def test_model_override(
        self,
        runner: CliRunner,
        store: ConfigStore,
        project_dir: Path,
        mock_llm: MagicMock,
    ) -> None:
        store.set_api_key("SECRET1")
        result = _invoke(
            runner, store, ["find", "react", "useState", "--model", "gemini-2.5-pro"]
        )

        assert result.exit_code == 0
        assert mock_llm.call_args[1]["config"].model == "gemini-2.5-pro"

    def test_injected_read_line(
        self,
        runner: CliRunner,
        store: ConfigStore,
        project_dir: Path,
        mock_llm: MagicMock,
    ) -> None:
        read_line = MagicMock(return_value="SCRIPTED")
        obj = {"store": store, "settings": AppConfig(), "read_line": read_line}
        result = runner.invoke(cli, ["find", "react", "useState"], obj=obj)

        assert result.exit_code == 0
        read_line.assert_called_once_with("API Key")
        assert store.get_api_key() == "SCRIPTED"


class TestConfigCommand:
    """Tests for the 'config' command."""

    def test_config_help(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["config", "--help"])
        assert result.exit_code == 0
        assert "--set-api-key" in result.output
        assert "--show-config" in result.output
        assert "--reset" in result.output

    def test_no_option_prints_hint(self, runner: CliRunner, store: ConfigStore) -> None:
        result = _invoke(runner, store, ["config"])
        assert result.exit_code == 0
        assert "Please specify an option" in result.output

    def test_set_api_key(self, runner: CliRunner, store: ConfigStore) -> None:
        result = _invoke(runner, store, ["config", "--set-api-key"], input="NEWKEY\n")
        assert result.exit_code == 0
        assert "API key saved successfully" in result.output
        assert store.get_api_key() == "NEWKEY"

    def test_set_empty_api_key(self, runner: CliRunner, store: ConfigStore) -> None:
        result = _invoke(runner, store, ["config", "--set-api-key"], input="\n")
        assert result.exit_code == 0
        assert "No API key provided" in result.output
        assert not store.path.exists()

    def test_show_config_hides_key(
        self, runner: CliRunner, store: ConfigStore
    ) -> None:
        store.set_api_key("SECRET1")
        result = _invoke(runner, store, ["config", "--show-config"])

        assert result.exit_code == 0
        assert str(store.path) in result.output
        assert "Gemini API Key: configured" in result.output
        assert "SECRET1" not in result.output

    def test_show_config_without_key(
        self, runner: CliRunner, store: ConfigStore
    ) -> None:
        result = _invoke(runner, store, ["config", "--show-config"])
        assert result.exit_code == 0
        assert "Gemini API Key: not configured" in result.output

    def test_reset(self, runner: CliRunner, store: ConfigStore) -> None:
        store.set_api_key("SECRET1")
        result = _invoke(runner, store, ["config", "--reset"])

        assert result.exit_code == 0
        assert "Configuration reset successfully" in result.output
        assert store.load() == {}

    def test_reset_nothing(self, runner: CliRunner, store: ConfigStore) -> None:
        result = _invoke(runner, store, ["config", "--reset"])
        assert result.exit_code == 0
        assert "No configuration found" in result.output

    def test_set_api_key_wins_over_others(
        self, runner: CliRunner, store: ConfigStore
    ) -> None:
        store.set_api_key("OLD")
        result = _invoke(
            runner,
            store,
            ["config", "--reset", "--show-config", "--set-api-key"],
            input="NEW\n",
        )

        assert result.exit_code == 0
        assert store.get_api_key() == "NEW"
        assert "Current configuration" not in result.output

    def test_show_config_wins_over_reset(
        self, runner: CliRunner, store: ConfigStore
    ) -> None:
        store.set_api_key("SECRET1")
        result = _invoke(runner, store, ["config", "--reset", "--show-config"])

        assert result.exit_code == 0
        assert "Current configuration" in result.output
        assert store.get_api_key() == "SECRET1"
