"""Tests for commitmend.interaction module."""

import pytest

from commitmend.interaction import Choice, CliInterface, UserCancelledError


@pytest.fixture
def mock_questionary(mocker):
    """Patch questionary as used by CliInterface."""
    return mocker.patch("commitmend.interaction.questionary")


class TestCliInterfacePrompts:
    """Tests for CliInterface prompts."""

    def test_select_returns_value(self, mock_questionary):
        """Test select maps labels to questionary choices."""
        mock_questionary.select.return_value.ask.return_value = "feat"

        answer = CliInterface().select("Type?", [Choice("feat: A new feature", "feat")], default="feat")

        assert answer == "feat"
        mock_questionary.Choice.assert_called_once_with(title="feat: A new feature", value="feat")
        assert mock_questionary.select.call_args.kwargs["default"] == "feat"

    def test_cancelled_prompt_raises(self, mock_questionary):
        """Test a None answer (Ctrl-C) raises UserCancelledError."""
        mock_questionary.confirm.return_value.ask.return_value = None

        with pytest.raises(UserCancelledError):
            CliInterface().confirm("Proceed?")

    def test_false_confirm_is_an_answer(self, mock_questionary):
        """Test False is returned, not treated as cancellation."""
        mock_questionary.confirm.return_value.ask.return_value = False
        assert CliInterface().confirm("Proceed?") is False

    def test_empty_text_is_an_answer(self, mock_questionary):
        """Test an empty string is a valid answer."""
        mock_questionary.text.return_value.ask.return_value = ""
        assert CliInterface().text("Scope?") == ""

    def test_text_validator_adapts_to_questionary(self, mock_questionary):
        """Test error strings are passed through and None becomes True."""
        mock_questionary.text.return_value.ask.return_value = "add parser"

        CliInterface().text("Subject?", hint="imperative", validate=lambda v: None if v else "Required")

        kwargs = mock_questionary.text.call_args.kwargs
        assert kwargs["instruction"] == "imperative"
        check = kwargs["validate"]
        assert check("x") is True
        assert check("") == "Required"

    def test_password(self, mock_questionary):
        """Test password prompts pass the hint."""
        mock_questionary.password.return_value.ask.return_value = "sk-123"

        assert CliInterface().password("Key?", hint="sk-...") == "sk-123"
        assert mock_questionary.password.call_args.kwargs["instruction"] == "sk-..."


class TestCliInterfaceOutput:
    """Tests for CliInterface output helpers."""

    def test_messages_go_to_stderr(self, capsys):
        """Test status output does not touch stdout."""
        cli = CliInterface()
        cli.info("info line")
        cli.success("done")
        cli.warn("careful")
        cli.error("broken")

        captured = capsys.readouterr()
        assert captured.out == ""
        for text in ("info line", "done", "careful", "broken"):
            assert text in captured.err

    def test_note(self, capsys):
        """Test notes are framed by rules."""
        CliInterface().note("Your commit message:", "feat: add parser")

        err = capsys.readouterr().err
        assert "Your commit message:" in err
        assert "feat: add parser" in err
        assert err.count("-" * 50) == 2
