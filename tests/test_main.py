"""Test the terminal front end and configuration loading."""

import json
import sys
from pathlib import Path

import pytest

from wordpiles import main as cli
from wordpiles.engine import GameConfig, WordPiles
from wordpiles.lexicon import Dictionary, LevelConfig
from wordpiles.visualizer import render_board, render_view


def make_game(**config) -> WordPiles:
    level = LevelConfig.model_validate({
        "id": 1, "cols": 2, "rows": 3, "words": ["кот", "пес"],
        "difficulty": {"order": "linear", "letters": "direct"},
    })
    return WordPiles.create(
        [level],
        dictionary=Dictionary.from_words(["ок"]),
        config=GameConfig(seed=0, **config),
    )


class FakeClock:
    def __init__(self):
        self.waits = []

    def __call__(self, seconds):
        self.waits.append(seconds)


class TestLoadConfig:
    """YAML configuration."""

    def test_load(self, tmp_path: Path):
        path = tmp_path / "config.yaml"
        path.write_text("levels_path: levels.json\nseed: 5\nfound_delay_ms: 100\n", encoding="utf-8")

        config = cli.load_config(str(path))
        assert config.levels_path == "levels.json"
        assert config.seed == 5
        assert config.found_delay_ms == 100
        assert config.hidden_delay_ms == 1200

    def test_empty_file_gives_defaults(self, tmp_path: Path):
        path = tmp_path / "config.yaml"
        path.write_text("", encoding="utf-8")
        assert cli.load_config(str(path)) == GameConfig()

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            cli.load_config(str(tmp_path / "nope.yaml"))


class TestHandleCommand:
    """One line of input at a time."""

    def test_take_letters_and_confirm(self):
        game = make_game()
        clock = FakeClock()

        for command in ("0", "1", "0"):
            assert cli.handle_command(game, command, output=lambda s: None, sleep=clock)
        assert game.session.current_word == "КОТ"

        cli.handle_command(game, "c", output=lambda s: None, sleep=clock)
        assert game.session.found_words == ["КОТ"]
        assert game.session.is_processing is False
        assert clock.waits == [0.8]

    def test_blank_line_confirms(self):
        game = make_game()
        for command in ("1", "0"):
            cli.handle_command(game, command, output=lambda s: None, sleep=FakeClock())

        messages = []
        cli.handle_command(game, "", output=messages.append, sleep=FakeClock())
        assert messages == ["Bonus word: ОК"]
        assert game.session.hidden_words == ["ОК"]

    def test_put_back(self):
        game = make_game()
        cli.handle_command(game, "s 0", output=lambda s: None)
        cli.handle_command(game, "s 0", output=lambda s: None)
        assert game.session.current_word == "КТ"

        cli.handle_command(game, "u 0", output=lambda s: None)
        assert game.session.current_word == "К"

    def test_bad_column(self):
        game = make_game()
        messages = []
        cli.handle_command(game, "7", output=messages.append)
        cli.handle_command(game, "u 0", output=messages.append)
        cli.handle_command(game, "u x", output=messages.append)
        assert messages == ["Nothing to take there.", "Nothing to put back there.", "Nothing to put back there."]

    def test_hint_and_bonus(self):
        game = make_game()
        messages = []
        for command in ("h", "h", "h", "b"):
            cli.handle_command(game, command, output=messages.append)
        assert messages == ["Hint: КОТ", "Hint: ПЕС", "No hints left.", "Colors are already on."]

    def test_last_word_runs_win(self):
        game = make_game(found_delay_ms=10, win_delay_ms=20)
        clock = FakeClock()
        for command in ("0", "1", "0", "c", "1", "0", "1", "c"):
            cli.handle_command(game, command, output=lambda s: None, sleep=clock)

        assert game.session.is_won is True
        assert clock.waits == [0.01, 0.01, 0.02]

    def test_restart_and_next(self):
        game = make_game()
        cli.handle_command(game, "r", output=lambda s: None)
        assert game.session.generation == 2
        cli.handle_command(game, "n", output=lambda s: None)
        assert game.view().notice is not None

    def test_quit_and_unknown(self):
        game = make_game()
        messages = []
        assert cli.handle_command(game, "q") is False
        assert cli.handle_command(game, "xyz", output=messages.append) is True
        assert messages == ["Unknown command: xyz"]


class TestPlay:
    """The interactive loop."""

    def test_scripted_session(self):
        game = make_game()
        commands = iter(["0", "1", "0", "c", "q"])
        frames = []

        cli.play(game, read=lambda prompt: next(commands), output=frames.append, sleep=FakeClock())

        assert game.session.found_words == ["КОТ"]
        assert any("Level 1" in frame for frame in frames)

    def test_stops_on_eof(self):
        game = make_game()

        def read(prompt):
            raise EOFError

        cli.play(game, read=read, output=lambda s: None)


class TestRender:
    """Text rendering of the view."""

    def test_board(self):
        game = make_game()
        game.select("g1-0")
        assert render_board(game.view()) == (
            " е   с\n"
            " Т   п\n"
            "[К]  О\n"
            " 0   1"
        )

    def test_view(self):
        game = make_game()
        game.hint()
        text = render_view(game.view())
        assert "=== Level 1 ===" in text
        assert "Words (0/2): ?КОТ  ***" in text
        assert text.endswith("Word: ")


class TestMain:
    """Argument handling and fatal load errors."""

    def test_show(self, tmp_path: Path, monkeypatch, capsys):
        levels = tmp_path / "levels.json"
        levels.write_text(json.dumps([
            {"id": 1, "cols": 2, "rows": 3, "words": ["кот", "пес"], "difficulty": {"order": "linear"}},
        ]), encoding="utf-8")
        monkeypatch.setattr(sys, "argv", ["wordpiles", "--levels", str(levels), "--show", "--seed", "1"])

        assert cli.main() == 0
        assert "=== Level 1 ===" in capsys.readouterr().out

    def test_missing_levels_file_exits(self, tmp_path: Path, monkeypatch, capsys):
        monkeypatch.setattr(sys, "argv", ["wordpiles", "--levels", str(tmp_path / "none.json")])

        with pytest.raises(SystemExit) as exc:
            cli.main()
        assert exc.value.code == 1
        assert "Error loading game data" in capsys.readouterr().err

    def test_levels_required(self, monkeypatch, capsys):
        monkeypatch.setattr(sys, "argv", ["wordpiles"])

        with pytest.raises(SystemExit) as exc:
            cli.main()
        assert exc.value.code == 1
        assert "levels file is required" in capsys.readouterr().err
