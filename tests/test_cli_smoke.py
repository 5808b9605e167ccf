"""
Smoke tests for the lift-rotation CLI.

Tests basic functionality:
- App runs and shows help
- Sessions can be logged (kg and lbs)
- Ranked list reflects logged sessions
- History and catalog display
- Errors exit with code 1
"""

import json

import pytest
from typer.testing import CliRunner

from lift_rotation.cli.main import app

runner = CliRunner()


@pytest.fixture
def data_dir(tmp_path, monkeypatch):
    """Temporary data directory with an isolated HOME and environment."""
    monkeypatch.setenv("HOME", str(tmp_path))
    for var in ("LIFT_ROTATION_DATA_DIR", "DATA_DIR", "LIFT_ROTATION_USER", "LIFT_ROTATION_UNIT"):
        monkeypatch.delenv(var, raising=False)
    return tmp_path / "data"


def _invoke(*args: str):
    return runner.invoke(app, list(args))


def _log(data_dir, exercise_id: str, *extra: str):
    return _invoke("log", exercise_id, "--data-dir", str(data_dir), *extra)


class TestCLISmoke:
    """Basic smoke tests for CLI commands."""

    def test_app_help(self):
        result = _invoke("--help")
        assert result.exit_code == 0
        for command in ("list", "log", "history", "catalog", "health"):
            assert command in result.output

    def test_catalog(self, data_dir):
        result = _invoke("catalog")
        assert result.exit_code == 0
        assert "dips" in result.output
        assert "calf-raises" in result.output

    def test_health(self, data_dir):
        result = _invoke("health", "--data-dir", str(data_dir))
        assert result.exit_code == 0
        assert "ok" in result.output
        assert data_dir.is_dir()

    def test_list_for_new_user(self, data_dir):
        result = _invoke("list", "--data-dir", str(data_dir))
        assert result.exit_code == 0
        assert "Dips" in result.output
        assert "Next up" in result.output

    def test_log_session_adds_to_history(self, data_dir):
        result = _log(data_dir, "dips", "--weight", "20", "--reps", "10")

        assert result.exit_code == 0
        assert "Logged Dips" in result.output
        assert "(20 kg x 10)" in result.output
        assert (data_dir / "local.json").exists()

    def test_log_status_line_uses_display_unit(self, data_dir):
        result = _log(data_dir, "rodd", "-w", "100", "-r", "5", "--unit", "lbs")
        assert result.exit_code == 0
        assert "(100.1 lbs x 5)" in result.output

    def test_logged_exercise_becomes_ineligible_and_sinks(self, data_dir):
        _log(data_dir, "dips", "--weight", "20", "--reps", "10")

        result = _invoke("list", "--data-dir", str(data_dir), "--json")
        assert result.exit_code == 0
        ranked = json.loads(result.stdout)

        assert len(ranked) == 15
        push = [e["id"] for e in ranked if e["category"] == "push"]
        assert push[-1] == "dips"
        dips = next(e for e in ranked if e["id"] == "dips")
        assert dips["eligible"] is False
        assert dips["frequency_14d"] == 1
        assert [e["category"] for e in ranked][:5] == ["push"] * 5

    def test_log_in_pounds_stores_kilograms(self, data_dir):
        result = _log(data_dir, "ben-press", "--weight", "220", "--reps", "8", "--unit", "lbs")
        assert result.exit_code == 0

        result = _invoke("history", "--data-dir", str(data_dir), "--json")
        (entry,) = json.loads(result.stdout)
        assert entry["id"] == "ben-press"
        assert entry["history"][0]["weight_kg"] == 99.8

    def test_log_json_output(self, data_dir):
        result = _log(data_dir, "rodd", "-w", "30", "-r", "12", "--json")
        assert result.exit_code == 0
        status = json.loads(result.stdout)
        assert status["id"] == "rodd"
        assert status["recent_sessions"][0]["reps"] == 12

    def test_log_with_explicit_date(self, data_dir):
        result = _log(data_dir, "latsdrag", "-w", "35", "-r", "10", "--date", "2024-01-15T10:00:00Z")
        assert result.exit_code == 0

        result = _invoke("history", "--data-dir", str(data_dir), "--json")
        (entry,) = json.loads(result.stdout)
        assert entry["history"][0]["date"] == "2024-01-15T10:00:00+00:00"

    def test_users_have_separate_files(self, data_dir):
        _log(data_dir, "dips", "-w", "0", "-r", "5", "--user", "alice@example.com")
        assert (data_dir / "alice_example_com.json").exists()
        assert not (data_dir / "local.json").exists()

    def test_log_unknown_exercise_fails(self, data_dir):
        result = _log(data_dir, "squat", "--weight", "50", "--reps", "5")
        assert result.exit_code == 1
        assert "not found" in result.output
        assert not (data_dir / "local.json").exists()

    def test_log_negative_weight_fails(self, data_dir):
        result = _log(data_dir, "dips", "--weight=-5", "--reps", "5")
        assert result.exit_code == 1
        assert not (data_dir / "local.json").exists()

    def test_log_zero_reps_fails(self, data_dir):
        result = _log(data_dir, "dips", "--weight", "5", "--reps", "0")
        assert result.exit_code == 1

    def test_log_bad_date_fails(self, data_dir):
        result = _log(data_dir, "dips", "-w", "5", "-r", "5", "--date", "last tuesday")
        assert result.exit_code == 1

    def test_log_bad_unit_fails(self, data_dir):
        result = _log(data_dir, "dips", "-w", "5", "-r", "5", "--unit", "stone")
        assert result.exit_code == 1

    def test_log_prompts_for_missing_values(self, data_dir):
        result = runner.invoke(
            app,
            ["log", "sidolyft", "--data-dir", str(data_dir)],
            input="abc\n7,5\n0\n12\n",
        )
        assert result.exit_code == 0
        history = json.loads(_invoke("history", "--data-dir", str(data_dir), "--json").stdout)
        assert history[0]["history"][0]["weight_kg"] == 7.5
        assert history[0]["history"][0]["reps"] == 12

    def test_history_empty(self, data_dir):
        result = _invoke("history", "--data-dir", str(data_dir))
        assert result.exit_code == 0
        assert "No sessions" in result.output

    def test_history_displays_sessions(self, data_dir):
        _log(data_dir, "leg-curls", "-w", "25", "-r", "12", "--date", "2024-01-15T12:00:00+00:00")
        result = _invoke("history", "--data-dir", str(data_dir))
        assert result.exit_code == 0
        assert "Leg Curls" in result.output

    def test_history_limit_shows_newest(self, data_dir):
        for day in ("01", "02", "03"):
            _log(data_dir, "dips", "-w", "10", "-r", "8", "--date", f"2024-01-{day}T12:00:00+00:00")
        result = _invoke("history", "--data-dir", str(data_dir), "--limit", "2")
        assert result.exit_code == 0
        assert "03/01" in result.output
        assert "02/01" in result.output
        assert "01/01" not in result.output

    @pytest.mark.parametrize("limit", ["0", "-1"])
    def test_history_limit_below_one_fails(self, data_dir, limit):
        _log(data_dir, "dips", "-w", "10", "-r", "8")
        result = _invoke("history", "--data-dir", str(data_dir), "--limit", limit)
        assert result.exit_code == 1
        assert "--limit" in result.output

    def test_history_filter_unknown_exercise(self, data_dir):
        result = _invoke("history", "--data-dir", str(data_dir), "--exercise", "squat")
        assert result.exit_code == 1

    def test_corrupt_user_file_fails(self, data_dir):
        data_dir.mkdir(parents=True)
        (data_dir / "local.json").write_text("{oops", encoding="utf-8")
        result = _invoke("list", "--data-dir", str(data_dir))
        assert result.exit_code == 1
        assert "Corrupt" in result.output

    def test_non_utf8_user_file_fails(self, data_dir):
        data_dir.mkdir(parents=True)
        (data_dir / "local.json").write_bytes(b'{"identity": "\xff\xfe"}')
        for command in ("list", "history"):
            result = _invoke(command, "--data-dir", str(data_dir))
            assert result.exit_code == 1
            assert "Corrupt" in result.output
