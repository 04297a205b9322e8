"""
Tests for the command-line interface.

main() is the console-script entry point, so it must return None on
success; anything else would be handed to sys.exit as the exit status.
"""

import json

import pytest

from ..cli import main
from ..rulesets import create_skirmish_table


@pytest.fixture
def table_file(tmp_path):
    path = tmp_path / "skirmish.json"
    path.write_text(json.dumps(create_skirmish_table().model_dump(mode="json")))
    return path


class TestValidate:
    """Tests for `tokenduel validate`."""

    def test_valid_table(self, table_file, capsys):
        assert main(["validate", str(table_file)]) is None
        out = capsys.readouterr().out

        assert "Actions: 8" in out
        assert "Actors: 2" in out

    def test_invalid_table(self, tmp_path, capsys):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"actions": [{"name": "A"}, {"name": "A"}]}))

        with pytest.raises(SystemExit) as exc_info:
            main(["validate", str(path)])
        assert exc_info.value.code == 1
        assert "Duplicate action name 'A'" in capsys.readouterr().out

    def test_non_utf8_table(self, tmp_path, capsys):
        """Undecodable bytes are reported as a table error, not a traceback."""
        path = tmp_path / "bad.json"
        path.write_bytes(b'{"name": "\xff\xfe"}')

        with pytest.raises(SystemExit) as exc_info:
            main(["validate", str(path)])
        assert exc_info.value.code == 1
        assert "not valid UTF-8" in capsys.readouterr().out

    def test_missing_file(self, tmp_path, capsys):
        with pytest.raises(SystemExit):
            main(["validate", str(tmp_path / "absent.json")])
        assert "File not found" in capsys.readouterr().out


class TestSimulate:
    """Tests for `tokenduel simulate`."""

    def test_default_skirmish(self, capsys):
        assert main(["simulate", "--seed", "3"]) is None
        out = capsys.readouterr().out

        assert "Table: skirmish (seed 3)" in out
        assert "Result: finished after" in out
        assert "Winner: " in out

    def test_table_file(self, table_file, capsys):
        assert main(["simulate", "--table", str(table_file), "--seed", "9", "--policy", "first"]) is None
        out = capsys.readouterr().out
        assert "Hero vs Orc" in out
        assert "Result: finished after" in out

    def test_ruleset_choice(self, capsys):
        main(["simulate", "--ruleset", "skirmish", "--seed", "4", "--policy", "first"])
        out = capsys.readouterr().out
        assert "Hero [" in out
        assert "Orc [" in out

    def test_unknown_ruleset(self, capsys):
        with pytest.raises(SystemExit):
            main(["simulate", "--ruleset", "arena"])

    def test_tick_limit(self, capsys):
        assert main(["simulate", "--seed", "3", "--max-ticks", "2"]) is None
        assert "Result: tick_limit after 2 ticks" in capsys.readouterr().out

    def test_no_command(self, capsys):
        with pytest.raises(SystemExit):
            main([])

    def test_malformed_env_setting(self, monkeypatch, capsys):
        monkeypatch.setenv("TOKENDUEL_ACTIONS_PER_ROUND", "lots")
        with pytest.raises(SystemExit) as exc_info:
            main(["simulate", "--seed", "3"])
        assert exc_info.value.code == 1
        assert "TOKENDUEL_ACTIONS_PER_ROUND must be an integer" in capsys.readouterr().out
