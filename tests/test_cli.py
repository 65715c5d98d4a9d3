"""Tests for CLI functionality."""

from unittest.mock import Mock, patch

import pytest

from commiter.cli import (
    create_argument_parser, create_ai_client, display_config, load_settings_or_exit,
    main, read_key, resolve_store, run_init, run_session
)
from commiter.ai.mock import MockCompletionClient
from commiter.ai.openrouter import OpenRouterClient
from commiter.core.config import DEFAULT_MODEL, DEFAULT_SIMPLE_PROMPT, Settings, SettingsStore
from commiter.core.types import ActionKind, ConfigError, ServiceError
from commiter.session import Session


class TestArgumentParser:
    """Test CLI argument parsing."""

    def test_default_arguments(self):
        """Test default argument values."""
        args = create_argument_parser().parse_args([])

        assert args.command is None
        assert args.model is None
        assert args.test_mode is False
        assert args.no_clipboard is False
        assert args.verbose is False

    @pytest.mark.parametrize("command", ["init", "config", "simple-commit", "detailed-commit", "stash"])
    def test_subcommands(self, command):
        """Test every subcommand parses."""
        args = create_argument_parser().parse_args([command])
        assert args.command == command

    def test_global_flags(self):
        """Test flags before the subcommand."""
        args = create_argument_parser().parse_args(["-v", "--model", "x/y", "--test-mode", "stash"])

        assert args.verbose is True
        assert args.model == "x/y"
        assert args.test_mode is True
        assert args.command == "stash"

    def test_unknown_command(self):
        """Test unknown subcommands are rejected."""
        with pytest.raises(SystemExit):
            create_argument_parser().parse_args(["push"])


class TestStartup:
    """Test fatal startup conditions."""

    def test_missing_key_exits(self, tmp_path, capsys):
        """Test a missing key prints the setup instruction and exits non-zero."""
        with pytest.raises(SystemExit) as exc_info:
            load_settings_or_exit(SettingsStore(tmp_path))

        assert exc_info.value.code == 1
        assert "commiter init" in capsys.readouterr().err

    def test_missing_key_allowed_in_test_mode(self, tmp_path):
        """Test mode runs without a stored key."""
        settings = load_settings_or_exit(SettingsStore(tmp_path), test_mode=True)
        assert settings.model_id == DEFAULT_MODEL

    @patch('commiter.cli.get_config_dir', side_effect=ConfigError("$HOME is not defined"))
    def test_unresolvable_config_dir_exits(self, mock_dir, capsys):
        """Test an unresolvable settings directory is fatal."""
        with pytest.raises(SystemExit) as exc_info:
            resolve_store()

        assert exc_info.value.code == 1
        assert "$HOME is not defined" in capsys.readouterr().err


class TestAIClientCreation:
    """Test completion client creation."""

    def test_create_mock_client(self):
        """Test creating mock client."""
        args = Mock()
        args.test_mode = True

        client = create_ai_client(args, Settings(api_key="", model_id="m"))

        assert isinstance(client, MockCompletionClient)

    def test_create_openrouter_client(self):
        """Test creating the OpenRouter client from settings."""
        args = Mock()
        args.test_mode = False

        client = create_ai_client(args, Settings(api_key="k", model_id="m"))

        assert isinstance(client, OpenRouterClient)
        assert client.api_key == "k"
        assert client.model_id == "m"


class TestInit:
    """Test the setup command."""

    def test_saves_key_defaults_and_model(self, tmp_path, capsys):
        """Test init writes the key, default templates and chosen model."""
        store = SettingsStore(tmp_path)

        code = run_init(store, read_secret=lambda prompt: "sk-test\n", read_line=lambda prompt: "openai/gpt-4o-mini")

        assert code == 0
        settings = store.load()
        assert settings.api_key == "sk-test"
        assert settings.model_id == "openai/gpt-4o-mini"
        assert settings.simple_prompt_template == DEFAULT_SIMPLE_PROMPT
        assert "API key saved successfully." in capsys.readouterr().out

    def test_default_model(self, tmp_path):
        """Test an empty model answer keeps the default."""
        store = SettingsStore(tmp_path)

        run_init(store, read_secret=lambda prompt: "k", read_line=lambda prompt: "")

        assert store.load().model_id == DEFAULT_MODEL

    def test_empty_key_rejected(self, tmp_path, capsys):
        """Test an empty key writes nothing."""
        store = SettingsStore(tmp_path)

        code = run_init(store, read_secret=lambda prompt: "  ", read_line=lambda prompt: "")

        assert code == 1
        assert not store.has_api_key()
        assert "API key cannot be empty." in capsys.readouterr().err


class TestDisplayConfig:
    """Test the config command."""

    def test_without_key(self, tmp_path, capsys):
        """Test output when no key is stored."""
        display_config(SettingsStore(tmp_path))

        out = capsys.readouterr().out
        assert str(tmp_path) in out
        assert "not set" in out

    def test_with_key(self, tmp_path, capsys):
        """Test the key is masked."""
        store = SettingsStore(tmp_path)
        store.save(Settings(api_key="sk-or-v1-0123456789", model_id="m"))

        display_config(store)

        out = capsys.readouterr().out
        assert "sk-or-v1-0123456789" not in out
        assert "Model: m" in out


class TestReadKey:
    """Test key reading."""

    @patch('builtins.input', return_value='  Confirm  ')
    def test_first_character(self, mock_input):
        """Test only the first character counts, lower-cased."""
        assert read_key() == "c"

    @patch('builtins.input', side_effect=EOFError)
    def test_eof_quits(self, mock_input):
        """Test end of input maps to quit."""
        assert read_key() == "q"

    @patch('builtins.input', side_effect=KeyboardInterrupt)
    def test_interrupt(self, mock_input):
        """Test Ctrl+C is reported as a key."""
        assert read_key() == "ctrl+c"

    @patch('builtins.input', return_value='')
    def test_empty_line(self, mock_input):
        assert read_key() == ""


class TestRunSession:
    """Test the terminal loop."""

    def test_select_confirm_exit(self, capsys):
        """Test a full select, confirm, exit run."""
        tool = Mock()
        tool.generate.return_value = "feat: add foo"
        tool.perform.return_value = "Committed successfully."
        keys = iter(["s", "c", ""])

        code = run_session(Session(tool), read=lambda: next(keys))

        assert code == 0
        tool.perform.assert_called_once_with(ActionKind.SHORT_COMMIT, "feat: add foo")
        out = capsys.readouterr().out
        assert "Commiter - Choose an action:" in out
        assert "feat: add foo" in out
        assert "Committed successfully." in out

    def test_quit_immediately(self):
        """Test quitting from the menu does nothing."""
        tool = Mock()

        run_session(Session(tool), read=lambda: "q")

        tool.capture.assert_not_called()
        tool.perform.assert_not_called()


class TestMainFunction:
    """Test main CLI function."""

    def setup_method(self):
        self.tool = Mock()

    @pytest.fixture(autouse=True)
    def config_dir(self, tmp_path, monkeypatch):
        monkeypatch.setenv("COMMITER_CONFIG_DIR", str(tmp_path))
        monkeypatch.delenv("COMMITER_VERBOSE", raising=False)
        SettingsStore(tmp_path).save(Settings(api_key="k", model_id="stored/model"))
        return tmp_path

    @pytest.mark.parametrize("command,action", [
        ("simple-commit", ActionKind.SHORT_COMMIT),
        ("detailed-commit", ActionKind.BIG_COMMIT),
        ("stash", ActionKind.STASH),
    ])
    def test_shortcuts(self, command, action, capsys):
        """Test each shortcut runs one cycle of the right action."""
        self.tool.run_once.return_value = ("msg", "done")

        with patch('commiter.cli.build_tool', return_value=self.tool):
            code = main([command])

        assert code == 0
        self.tool.run_once.assert_called_once_with(action)
        assert "done" in capsys.readouterr().out

    def test_shortcut_error(self, capsys):
        """Test errors are printed and give exit status 1."""
        self.tool.run_once.side_effect = ServiceError("rate limited", 500)

        with patch('commiter.cli.build_tool', return_value=self.tool):
            code = main(["simple-commit"])

        assert code == 1
        assert "Error: API error: rate limited" in capsys.readouterr().err

    def test_model_override(self):
        """Test --model replaces the stored model for this run."""
        self.tool.run_once.return_value = ("m", "r")

        with patch('commiter.cli.build_tool', return_value=self.tool) as mock_build:
            main(["--model", "other/model", "stash"])

        settings = mock_build.call_args[0][1]
        assert settings.model_id == "other/model"
        assert settings.api_key == "k"

    def test_interactive_default(self):
        """Test no subcommand starts the session."""
        with patch('commiter.cli.build_tool', return_value=self.tool), \
                patch('commiter.cli.run_session', return_value=0) as mock_run:
            code = main([])

        assert code == 0
        assert isinstance(mock_run.call_args[0][0], Session)

    def test_missing_key(self, config_dir, capsys):
        """Test the process exits when no key is stored."""
        (config_dir / "api_key").unlink()

        with pytest.raises(SystemExit) as exc_info:
            main(["simple-commit"])

        assert exc_info.value.code == 1

    def test_keyboard_interrupt(self, capsys):
        """Test interrupts exit cleanly."""
        self.tool.run_once.side_effect = KeyboardInterrupt

        with patch('commiter.cli.build_tool', return_value=self.tool):
            code = main(["stash"])

        assert code == 1
        assert "Interrupted by user." in capsys.readouterr().err

    def test_config_command(self, config_dir, capsys):
        """Test the config command prints the stored model."""
        assert main(["config"]) == 0
        assert "Model: stored/model" in capsys.readouterr().out
