"""Tests for the chooser registry and the fzf / prompt choosers."""

import io
import sys
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from recordscreen import choosers
from recordscreen.choosers.fzf import FzfChooser
from recordscreen.choosers.prompt import PromptChooser


class TestRegistry:
    """Tests for chooser registry functions."""

    def test_builtin_choosers_registered(self):
        """Built-in choosers are in the registry."""
        assert {"fzf", "prompt"} <= set(choosers.base.get_registry())

    def test_get_unknown(self):
        """Unknown chooser names raise KeyError."""
        with pytest.raises(KeyError, match="Unknown chooser"):
            choosers.get_chooser("rofi")

    def test_prefers_fzf(self):
        """fzf is preferred when installed."""
        with patch("shutil.which", return_value="/usr/bin/fzf"):
            assert choosers.available_choosers()[:2] == ["fzf", "prompt"]
            assert isinstance(choosers.default_chooser(), FzfChooser)

    def test_falls_back_to_prompt(self):
        """Numbered menu is used without fzf."""
        with patch("shutil.which", return_value=None):
            assert "fzf" not in choosers.available_choosers()
            assert isinstance(choosers.default_chooser(), PromptChooser)

    def test_preferred_unavailable(self):
        """Requesting a missing chooser is an error."""
        with patch("shutil.which", return_value=None):
            with pytest.raises(RuntimeError, match="not available"):
                choosers.default_chooser("fzf")

    def test_preferred_prompt(self):
        """Configured prompt chooser is honored."""
        assert isinstance(choosers.default_chooser("prompt"), PromptChooser)


class TestFzfChooser:
    """Tests for FzfChooser."""

    def test_returns_selected_index(self):
        """Index is read back from the selected line."""
        mock_result = MagicMock(returncode=0, stdout="1\tDP-2  2560x1440 at +1920,+0\n")
        with patch("subprocess.run", return_value=mock_result) as mock_run:
            index = FzfChooser().choose(["HDMI-1", "DP-2  2560x1440 at +1920,+0"], "Screen> ")
        assert index == 1
        sent = mock_run.call_args.kwargs["input"]
        assert sent == "0\tHDMI-1\n1\tDP-2  2560x1440 at +1920,+0\n"
        assert "--prompt=Screen> " in mock_run.call_args.args[0]

    @pytest.mark.parametrize("code", [1, 2, 130])
    def test_nonzero_exit_is_declined(self, code):
        """Non-zero fzf exit counts as declined."""
        with patch("subprocess.run", return_value=MagicMock(returncode=code, stdout="")):
            assert FzfChooser().choose(["a", "b"], "> ") is None

    def test_missing_fzf_is_declined(self):
        """Missing fzf binary counts as declined."""
        with patch("subprocess.run", side_effect=FileNotFoundError):
            assert FzfChooser().choose(["a", "b"], "> ") is None

    def test_garbage_output_is_declined(self):
        """Unparseable fzf output counts as declined."""
        with patch("subprocess.run", return_value=MagicMock(returncode=0, stdout="oops\n")):
            assert FzfChooser().choose(["a", "b"], "> ") is None

    def test_build_args(self):
        """Only the label column is displayed."""
        args = FzfChooser(height=None).build_args("Audio> ")
        assert args[0] == "fzf"
        assert "--with-nth=2.." in args
        assert not any(a.startswith("--height") for a in args)


class TestPromptChooser:
    """Tests for PromptChooser."""

    def test_numbered_answer(self):
        """Numbered answer maps to a zero-based index."""
        out = io.StringIO()
        chooser = PromptChooser(read=lambda prompt: "2", out=out)
        assert chooser.choose(["High", "Medium", "Low"], "Quality> ") == 1
        assert "  1) High" in out.getvalue()

    @pytest.mark.parametrize("answer", ["", "0", "4", "medium"])
    def test_invalid_answer_is_declined(self, answer):
        """Empty or out-of-range answers count as declined."""
        chooser = PromptChooser(read=lambda prompt: answer, out=io.StringIO())
        assert chooser.choose(["High", "Medium", "Low"], "Quality> ") is None

    def test_prompt_written_to_menu_stream(self, capsys):
        """Prompt text goes to the menu stream, never to stdout."""
        prompts = []
        out = io.StringIO()

        def read(prompt):
            prompts.append(prompt)
            return "1"

        chooser = PromptChooser(read=read, out=out)
        assert chooser.choose(["High", "Medium"], "Quality> ") == 0
        assert prompts == [""]
        assert out.getvalue().endswith("Quality> ")
        assert capsys.readouterr().out == ""

    def test_eof_is_declined(self):
        """EOF on stdin counts as declined."""
        def read(prompt):
            raise EOFError

        chooser = PromptChooser(read=read, out=io.StringIO())
        assert chooser.choose(["a", "b"], "> ") is None
