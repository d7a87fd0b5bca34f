"""
Tests for the command-line interface.
"""

import pytest

from ..cli import main, format_board
from ..engine_core.state import Side
from ..games.queens.deck_loader import parse_deck


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("ROWS", "COLS", "HAND_SIZE", "FIRST_PLAYER", "SECOND_PLAYER",
                 "FIRST_DECK", "SECOND_DECK", "SEED", "LOG_LEVEL"):
        monkeypatch.delenv(f"PAWNSBOARD_{name}", raising=False)


class TestFormatBoard:
    """Tests for the text board dump."""

    def test_fresh_board(self, board):
        assert format_board(board) == "0 1___1 0\n0 1___1 0\n0 1___1 0"

    def test_after_placements(self, board):
        board.place_card_in_position(0, 0, 0)
        board.place_card_in_position(0, 0, 4)
        assert format_board(board).splitlines()[0] == "1 R___B 1"


class TestCommands:
    """Tests for the subcommands."""

    def test_no_command(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main([])
        assert exc_info.value.code == 1

    def test_bot_game(self, capsys):
        assert main(["play", "--first", "fillfirst", "--second", "maxrow"]) == 0
        out = capsys.readouterr().out
        assert "Final score: FIRST" in out
        assert "FIRST plays card 0 at (0, 0)" in out

    def test_max_turns(self, capsys):
        main(["play", "--first", "fillfirst", "--second", "fillfirst", "--max-turns", "3"])
        assert "Stopped after 3 turns" in capsys.readouterr().out

    def test_human_reads_stdin(self, capsys, monkeypatch):
        monkeypatch.setattr("builtins.input", lambda prompt: "pass")
        main(["play", "--first", "human", "--second", "fillfirst", "--max-turns", "4"])
        out = capsys.readouterr().out
        assert "FIRST hand:" in out
        assert "FIRST passes" in out

    def test_bad_settings(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["play", "--cols", "4"])
        assert exc_info.value.code == 1

    def test_validate_deck(self, capsys, tmp_path, deck_text):
        path = tmp_path / "deck.txt"
        path.write_text(deck_text)

        assert main(["validate-deck", str(path), "--side", "second"]) == 0
        out = capsys.readouterr().out
        assert "2 card(s)" in out
        assert "IICXX" in out

    def test_validate_broken_deck(self, capsys, tmp_path):
        path = tmp_path / "deck.txt"
        path.write_text("Guard 1\n")
        with pytest.raises(SystemExit) as exc_info:
            main(["validate-deck", str(path)])
        assert exc_info.value.code == 1
        assert "Invalid deck" in capsys.readouterr().out

    def test_export_deck(self, capsys):
        assert main(["export-deck"]) == 0
        cards = parse_deck(capsys.readouterr().out, Side.FIRST)
        assert len(cards) == 15
