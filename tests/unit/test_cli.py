"""
Unit tests for the terminal entry points.
"""
import argparse

import pytest

import demo
import main


def play_args(**overrides) -> argparse.Namespace:
    values = {"rows": 5, "cols": 5, "mines": 3, "seed": 0}
    values.update(overrides)
    return argparse.Namespace(**values)


def feed_input(monkeypatch: pytest.MonkeyPatch, lines) -> None:
    """Answer input() from a list, then signal end of input."""
    pending = iter(lines)

    def fake_input(prompt: str = "") -> str:
        try:
            return next(pending)
        except StopIteration:
            raise EOFError

    monkeypatch.setattr("builtins.input", fake_input)


# ============================================================================
# Command Parsing Tests
# ============================================================================

class TestParseCommand:
    """Test in-game command parsing."""

    @pytest.mark.parametrize(
        "line, expected",
        [
            ("r 1 2", ("r", 1, 2)),
            ("F 0 4", ("f", 0, 4)),
            ("n", ("n",)),
            ("q", ("q",)),
        ],
    )
    def test_valid_commands(self, line: str, expected: tuple) -> None:
        """Known verbs with the right arguments are accepted."""
        assert main.parse_command(line) == expected

    @pytest.mark.parametrize("line", ["", "r 1", "r a b", "x 1 2", "q now"])
    def test_invalid_commands(self, line: str) -> None:
        """Anything else is rejected."""
        assert main.parse_command(line) is None


# ============================================================================
# Play Tests
# ============================================================================

class TestPlay:
    """Test the interactive game loop."""

    def test_invalid_config_is_reported(
        self, capsys: pytest.CaptureFixture
    ) -> None:
        """A zero mine count prints an error instead of raising."""
        main.play(play_args(mines=0))
        assert "Invalid configuration" in capsys.readouterr().out

    def test_too_many_mines_is_reported(
        self, capsys: pytest.CaptureFixture
    ) -> None:
        """A mine count filling the board prints an error."""
        main.play(play_args(rows=2, cols=2, mines=4))
        assert "Too many mines" in capsys.readouterr().out

    def test_quit_ends_the_loop(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture
    ) -> None:
        """Flag, then quit: the board is drawn with the flag."""
        feed_input(monkeypatch, ["f 0 0", "q"])
        main.play(play_args())
        out = capsys.readouterr().out
        assert "Flags: 2" in out
        assert " 0 F" in out

    def test_bad_line_prints_help(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture
    ) -> None:
        """Unparseable input shows the command list again."""
        feed_input(monkeypatch, ["hello"])
        main.play(play_args())
        assert capsys.readouterr().out.count(main.HELP) == 2


# ============================================================================
# Demo Tests
# ============================================================================

class TestDemo:
    """Test the random-player demo."""

    def test_invalid_config_is_reported(
        self, capsys: pytest.CaptureFixture
    ) -> None:
        """A bad config prints an error and plays nothing."""
        wins = demo.demo(delay=0, games=1, mines=0, clear=False)
        assert wins == 0
        assert "Invalid configuration" in capsys.readouterr().out

    def test_games_run_to_completion(
        self, capsys: pytest.CaptureFixture
    ) -> None:
        """Every game ends in a win or a loss and the total is printed."""
        wins = demo.demo(
            delay=0, games=2, rows=4, cols=4, mines=2, seed=0, clear=False
        )
        out = capsys.readouterr().out
        assert 0 <= wins <= 2
        assert out.count("Cleared the board!") + out.count("Hit a mine.") == 2
        assert f"Final: {wins}/2 wins" in out
