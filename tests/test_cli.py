"""
Tests for the command line interface.
"""

import pytest
from typer.testing import CliRunner

from calendarcore.cli.app import app

runner = CliRunner()

DATA = """\
holidays:
  - id: new-year
    name: New Year
    date: 2024-01-01
    is_recurring: true
  - id: tet-2025
    name: Lunar New Year
    date: 2025-01-29
user_groups:
  - id: office
    name: Office
    permissions:
      rooms: EDIT
      holidays: VIEW
users:
  - id: u1
    username: lan
    user_group_id: office
"""


@pytest.fixture
def config_path(tmp_path):
    (tmp_path / "calendar_data.yaml").write_text(DATA, encoding="utf-8")
    path = tmp_path / "config.yaml"
    path.write_text("timezone: Asia/Ho_Chi_Minh\n", encoding="utf-8")
    return path


def test_holidays_lists_virtual_instances(config_path):
    """Recurring holidays show up with their virtual id."""
    result = runner.invoke(app, ["holidays", "2026", "--config", str(config_path)])

    assert result.exit_code == 0
    assert "new-year-2026" in result.output
    assert "tet-2025" not in result.output


def test_check_reports_holiday(config_path):
    """A recurring holiday is reported as a holiday and not a working day."""
    result = runner.invoke(app, ["check", "2027-01-01", "-c", str(config_path)])

    assert result.exit_code == 0
    assert "Holiday: yes" in result.output
    assert "Working day: no" in result.output


def test_range_lists_dates(config_path):
    """Range output counts holidays across years."""
    result = runner.invoke(app, ["range", "2024-12-01", "2025-02-01", "-c", str(config_path)])

    assert result.exit_code == 0
    assert "2 holiday(s)" in result.output


def test_permissions_table(config_path):
    """Permissions output lists the visible menu sections."""
    result = runner.invoke(app, ["permissions", "u1", "-c", str(config_path)])

    assert result.exit_code == 0
    assert "room-management" in result.output
    assert "holiday-management" in result.output
    assert "staff-management" not in result.output


def test_invalid_date_exits_with_error(config_path):
    """Malformed dates exit with code 1."""
    result = runner.invoke(app, ["check", "01.01.2027", "-c", str(config_path)])

    assert result.exit_code == 1


def test_missing_config_exits_with_error(tmp_path):
    """A missing config file exits with code 1."""
    result = runner.invoke(app, ["holidays", "2025", "-c", str(tmp_path / "nope.yaml")])

    assert result.exit_code == 1
    assert "Error" in result.output
