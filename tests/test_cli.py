"""Unit tests for highlight_ai.cli."""

import json
import sys
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from highlight_ai.cli import entrypoint, main
from highlight_ai.client import CheckResult, LMClient
from highlight_ai.errors import ConfigIOError, TransportError
from highlight_ai.models import AppConfig


def _ask_patches(selection: str = "selected text", reply: str = "the answer", **overrides):
    """Return a patch.multiple context for the ask command with standard defaults."""
    client = MagicMock()
    client.model_name = "test/model"
    client.send_chat = AsyncMock(return_value=reply)
    defaults = dict(
        load_config=MagicMock(return_value=AppConfig()),
        LMClient=MagicMock(return_value=client),
        _read_selection=AsyncMock(return_value=selection),
    )
    defaults.update(overrides)
    return patch.multiple("highlight_ai.cli.ask", **defaults), client


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    config_file = tmp_path / "config.json"
    monkeypatch.setattr("highlight_ai.config.CONFIG_FILE", config_file)
    monkeypatch.setattr("highlight_ai.cli.configure.CONFIG_FILE", config_file)
    return config_file


# ---------------------------------------------------------------------------
# ask
# ---------------------------------------------------------------------------


class TestAsk:
    def test_prints_reply(self, capsys):
        patches, _ = _ask_patches(reply="the answer")
        with patches:
            assert main([]) == 0
        assert "the answer" in capsys.readouterr().out

    def test_explicit_subcommand(self, capsys):
        patches, _ = _ask_patches()
        with patches:
            assert main(["ask", "-a", "summarize"]) == 0

    def test_action_shapes_prompt(self):
        patches, client = _ask_patches(selection="long article")
        with patches:
            main(["-a", "summarize"])
        prompt = client.send_chat.await_args.args[0]
        assert prompt.startswith("Summarize")
        assert "long article" in prompt

    def test_instruction_words_become_custom_instruction(self):
        patches, client = _ask_patches(selection="bonjour")
        with patches:
            main(["translate", "to", "German"])
        assert client.send_chat.await_args.args[0].startswith("translate to German")

    def test_text_option_skips_capture(self):
        read_selection = AsyncMock(return_value="ignored")
        patches, client = _ask_patches(_read_selection=read_selection)
        with patches:
            assert main(["--text", "given text"]) == 0
        read_selection.assert_not_awaited()
        assert "given text" in client.send_chat.await_args.args[0]

    def test_no_selection_returns_one(self, capsys):
        patches, client = _ask_patches(selection="")
        with patches:
            assert main([]) == 1
        assert "No text selected" in capsys.readouterr().err
        client.send_chat.assert_not_awaited()

    def test_completion_error_printed_to_stderr(self, capsys):
        patches, client = _ask_patches()
        client.send_chat.side_effect = TransportError("http://localhost:1234/v1", "refused")
        with patches:
            assert main([]) == 1
        err = capsys.readouterr().err
        assert err.startswith("Error: Could not connect")
        assert "http://localhost:1234/v1" in err

    def test_out_of_range_port_prints_error_instead_of_traceback(self, capsys):
        config = AppConfig(base_url="http://localhost:99999/v1")
        patches, _ = _ask_patches(
            load_config=MagicMock(return_value=config), LMClient=LMClient
        )
        with patches:
            assert main(["--text", "hello"]) == 1
        err = capsys.readouterr().err
        assert "Error: Could not connect" in err
        assert "http://localhost:99999/v1" in err

    def test_invalid_action_rejected_by_argparse(self):
        with pytest.raises(SystemExit) as exc_info:
            main(["-a", "dance"])
        assert exc_info.value.code != 0

    def test_version_flag(self, capsys):
        with pytest.raises(SystemExit):
            main(["--version"])
        assert "0.1.0" in capsys.readouterr().out


# ---------------------------------------------------------------------------
# capture / actions
# ---------------------------------------------------------------------------


class TestCapture:
    def test_prints_selection(self, capsys):
        with patch("highlight_ai.cli.ask._read_selection", new=AsyncMock(return_value="picked")):
            assert main(["capture"]) == 0
        assert capsys.readouterr().out == "picked\n"

    def test_empty_selection(self, capsys):
        with patch("highlight_ai.cli.ask._read_selection", new=AsyncMock(return_value="")):
            assert main(["capture"]) == 1


class TestActions:
    def test_lists_actions(self, capsys):
        assert main(["actions"]) == 0
        out = capsys.readouterr().out
        assert "summarize" in out
        assert "fix-grammar" in out


# ---------------------------------------------------------------------------
# configure
# ---------------------------------------------------------------------------


class TestConfigure:
    def test_saves_values(self, isolated_config, capsys):
        assert main(["configure", "--base-url", "http://gpu:9000/v1", "--model-name", "phi"]) == 0

        assert json.loads(isolated_config.read_text()) == {
            "baseURL": "http://gpu:9000/v1",
            "modelName": "phi",
        }
        assert "Configuration saved" in capsys.readouterr().out

    def test_partial_update_keeps_other_field(self, isolated_config):
        main(["configure", "--base-url", "http://gpu:9000/v1", "--model-name", "phi"])
        main(["configure", "--model-name", "llama3"])

        assert json.loads(isolated_config.read_text()) == {
            "baseURL": "http://gpu:9000/v1",
            "modelName": "llama3",
        }

    def test_blank_value_resets_to_default(self, isolated_config):
        main(["configure", "--model-name", "phi"])
        main(["configure", "--model-name", ""])
        assert json.loads(isolated_config.read_text())["modelName"] == "qwen/qwen3-4b-2507"

    def test_show(self, capsys):
        assert main(["configure", "--show"]) == 0
        out = capsys.readouterr().out
        assert "baseURL: http://localhost:1234/v1" in out
        assert "modelName: qwen/qwen3-4b-2507" in out

    def test_save_failure_returns_one(self, capsys):
        with patch(
            "highlight_ai.cli.configure.save_config",
            side_effect=ConfigIOError("Could not save configuration: denied"),
        ):
            assert main(["configure", "--model-name", "phi"]) == 1
        assert "denied" in capsys.readouterr().err


# ---------------------------------------------------------------------------
# check
# ---------------------------------------------------------------------------


class TestCheck:
    def test_all_ok(self, capsys):
        results = [CheckResult("server", True, "up"), CheckResult("model", True, "working")]
        with patch("highlight_ai.cli.check.check_setup", new=AsyncMock(return_value=results)):
            assert main(["check"]) == 0
        assert "All checks passed" in capsys.readouterr().out

    def test_failure_returns_one(self, capsys):
        results = [CheckResult("server", False, "Could not connect")]
        with patch("highlight_ai.cli.check.check_setup", new=AsyncMock(return_value=results)):
            assert main(["check"]) == 1
        assert "Could not connect" in capsys.readouterr().out


# ---------------------------------------------------------------------------
# entrypoint()
# ---------------------------------------------------------------------------


class TestEntrypoint:
    def test_entrypoint_raises_system_exit(self):
        patches, _ = _ask_patches()
        with patches:
            with pytest.raises(SystemExit) as exc_info:
                with patch.object(sys, "argv", ["highlight-ai", "--text", "hello"]):
                    entrypoint()

        assert exc_info.value.code == 0

    def test_entrypoint_exits_with_one_on_error(self):
        patches, client = _ask_patches()
        client.send_chat.side_effect = TransportError("http://x/v1")
        with patches:
            with pytest.raises(SystemExit) as exc_info:
                with patch.object(sys, "argv", ["highlight-ai", "--text", "hello"]):
                    entrypoint()

        assert exc_info.value.code == 1
