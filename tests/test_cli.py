"""
Tests for the Typer command-line interface.
"""

import pytest
from typer.testing import CliRunner

from meetingfinder import __version__
from meetingfinder.cli import app as cli_app

runner = CliRunner()

CONFIG = """
defaults:
  duration_minutes: 30
agenda_file: agenda.yaml
colleagues:
  - name: alice
    email: alice@example.com
  - name: bob
    email: bob@example.com
  - name: carol
    email: carol@example.com
"""

AGENDA = """
events:
  - name: Standup
    start: "08:00"
    duration: 30
    attendees: [alice]
  - name: Review
    start: "09:00"
    duration: 30
    attendees: [bob]
  - name: Offsite
    start: "00:00"
    end: "23:59"
    end_inclusive: true
    attendees: [carol]
"""


@pytest.fixture
def config_path(tmp_path):
    (tmp_path / "agenda.yaml").write_text(AGENDA, encoding="utf-8")
    path = tmp_path / "config.yaml"
    path.write_text(CONFIG, encoding="utf-8")
    return path


@pytest.fixture
def no_default_config(tmp_path, monkeypatch):
    monkeypatch.setattr(cli_app, "get_default_config_path", lambda: tmp_path / "absent.yaml")


class TestFindCommand:
    """Tests for the find command."""

    def test_find_slots(self, config_path):
        """Test that free slots around both attendees' events are listed."""
        result = runner.invoke(cli_app.app, ["find", "alice", "bob", "--config", str(config_path)])

        assert result.exit_code == 0, result.output
        assert "3 free slot(s) found" in result.output
        assert "00:00 - 08:00 (480 min)" in result.output
        assert "08:30 - 09:00 (30 min)" in result.output
        assert "09:30 - 24:00 (870 min)" in result.output

    def test_find_falls_back_without_optional_attendee(self, config_path):
        """Test that an unavailable optional attendee is reported and dropped."""
        result = runner.invoke(
            cli_app.app, ["find", "alice", "bob", "-o", "carol", "--config", str(config_path)]
        )

        assert result.exit_code == 0, result.output
        assert "No slot fits the optional attendees" in result.output
        assert "3 free slot(s) found" in result.output
        assert "Attendees: alice@example.com, bob@example.com\n" in result.output

    def test_find_lists_honoured_optional_attendee(self, config_path):
        """Test that an optional attendee who fits is listed with the slots."""
        result = runner.invoke(
            cli_app.app, ["find", "alice", "-o", "bob", "--config", str(config_path)]
        )

        assert result.exit_code == 0, result.output
        assert "No slot fits the optional attendees" not in result.output
        assert "Attendees: alice@example.com, bob@example.com" in result.output
        assert "3 free slot(s) found" in result.output

    def test_find_with_duration(self, config_path):
        """Test that a long meeting only fits the long gaps."""
        result = runner.invoke(
            cli_app.app, ["find", "alice", "bob", "-d", "60", "--config", str(config_path)]
        )

        assert result.exit_code == 0, result.output
        assert "2 free slot(s) found" in result.output
        assert "08:30 - 09:00" not in result.output

    def test_find_no_slots(self, config_path):
        """Test the message when nothing fits."""
        result = runner.invoke(cli_app.app, ["find", "carol", "--config", str(config_path)])

        assert result.exit_code == 0, result.output
        assert "No free slots found" in result.output

    def test_find_with_agenda_and_no_config(self, tmp_path, no_default_config):
        """Test that identifiers are used as given without a config."""
        agenda = tmp_path / "agenda.yaml"
        agenda.write_text(AGENDA, encoding="utf-8")

        result = runner.invoke(cli_app.app, ["find", "alice", "--agenda", str(agenda)])

        assert result.exit_code == 0, result.output
        assert "00:00 - 08:00 (480 min)" in result.output
        assert "08:30 - 24:00 (930 min)" in result.output

    def test_find_without_agenda(self, no_default_config):
        """Test that a missing agenda is an error."""
        result = runner.invoke(cli_app.app, ["find", "alice"])

        assert result.exit_code == 1
        assert "No agenda file given" in result.output

    def test_find_unknown_participant(self, config_path):
        """Test that unknown aliases are reported."""
        result = runner.invoke(cli_app.app, ["find", "zoe", "--config", str(config_path)])

        assert result.exit_code == 1
        assert "zoe" in result.output

    def test_find_conflicting_attendee(self, config_path):
        """Test that someone cannot be both required and optional."""
        result = runner.invoke(
            cli_app.app, ["find", "alice", "-o", "alice", "--config", str(config_path)]
        )

        assert result.exit_code == 1
        assert "both required and optional" in result.output

    def test_find_missing_agenda_file(self, tmp_path, no_default_config):
        """Test that an agenda path that does not exist is an error."""
        result = runner.invoke(
            cli_app.app, ["find", "alice", "--agenda", str(tmp_path / "missing.yaml")]
        )

        assert result.exit_code == 1
        assert "Agenda file not found" in result.output


class TestOtherCommands:
    """Tests for list-colleagues and version."""

    def test_list_colleagues(self, config_path):
        """Test that configured colleagues are shown."""
        result = runner.invoke(cli_app.app, ["list-colleagues", "--config", str(config_path)])

        assert result.exit_code == 0, result.output
        assert "alice@example.com" in result.output
        assert "carol" in result.output

    def test_list_colleagues_missing_config(self, tmp_path):
        """Test that a missing config file is an error."""
        result = runner.invoke(
            cli_app.app, ["list-colleagues", "--config", str(tmp_path / "missing.yaml")]
        )

        assert result.exit_code == 1

    def test_version(self):
        """Test the version output."""
        result = runner.invoke(cli_app.app, ["version"])

        assert result.exit_code == 0
        assert __version__ in result.output
