"""
Unit tests for the console front-end.
"""

import json
import logging
import pytest
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent / "src"))

from class_manager.cli import main, parse_arguments
from class_manager.utils.config import config


@pytest.fixture(autouse=True)
def reset_logger():
    """Drop handlers installed by main() so each test captures its own output."""
    yield
    logger = logging.getLogger("class_manager")
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)


@pytest.fixture
def data_dir(tmp_path):
    return tmp_path / "data"


def run_cli(data_dir, *args):
    return main(["--data-dir", str(data_dir), "--log-level", "ERROR", *args])


def stored(data_dir, key):
    return json.loads((data_dir / f"{key}.json").read_text(encoding="utf-8"))


class TestParseArguments:
    """Test cases for argument parsing."""

    def test_fee_filters_default(self):
        """Test fee listing defaults."""
        args = parse_arguments(["fees"])

        assert args.method == "all"
        assert args.search == ""
        assert args.month is None

    def test_rejects_unknown_method_filter(self):
        """Test method filter choices."""
        with pytest.raises(SystemExit):
            parse_arguments(["fees", "--method", "Card"])

    def test_command_required(self):
        """Test a subcommand must be given."""
        with pytest.raises(SystemExit):
            parse_arguments([])


class TestCommands:
    """Test cases for CLI commands against a temp data directory."""

    def test_add_student_persists(self, data_dir, capsys):
        """Test add-student writes all collections."""
        status = run_cli(data_dir, "add-student", "--name", "Ana", "--phone", "555-0101", "--course", "1")

        assert status == 0
        assert "Student saved" in capsys.readouterr().out
        assert stored(data_dir, "students")[0]["name"] == "Ana"
        assert [c["name"] for c in stored(data_dir, "courses")] == ["Mathematics", "Science"]
        assert stored(data_dir, "fees") == []

    def test_add_student_invalid(self, data_dir, capsys):
        """Test validation errors give exit status 1."""
        status = run_cli(data_dir, "add-student", "--name", " ", "--phone", "555-0101")

        assert status == 1
        assert "name must not be empty" in capsys.readouterr().out
        assert not (data_dir / "students.json").exists()

    def test_add_fee_and_list(self, data_dir, capsys):
        """Test recording a fee and listing it with filters."""
        run_cli(data_dir, "add-student", "--name", "Ana", "--phone", "555-0101", "--course", "1")
        student_id = stored(data_dir, "students")[0]["id"]

        status = run_cli(
            data_dir, "add-fee", "--student", str(student_id),
            "--amount", "500", "--month", "2023-10", "--method", "online"
        )
        assert status == 0
        assert stored(data_dir, "fees")[0]["method"] == "Online"

        capsys.readouterr()
        run_cli(data_dir, "fees", "--method", "Online", "--search", "an")
        out = capsys.readouterr().out
        assert "Ana" in out
        assert "2023-10" in out

        run_cli(data_dir, "fees", "--method", "Cash")
        assert "No matching fees." in capsys.readouterr().out

    def test_add_fee_invalid_amount(self, data_dir, capsys):
        """Test non-numeric amount is rejected."""
        status = run_cli(data_dir, "add-fee", "--student", "1", "--amount", "abc", "--month", "2023-10")

        assert status == 1
        assert "amount must be a number" in capsys.readouterr().out

    def test_dashboard(self, data_dir, capsys):
        """Test dashboard totals."""
        run_cli(data_dir, "add-student", "--name", "Ana", "--phone", "555-0101", "--course", "1")
        student_id = stored(data_dir, "students")[0]["id"]
        run_cli(data_dir, "add-fee", "--student", str(student_id), "--amount", "500", "--month", "2023-10")
        run_cli(data_dir, "add-fee", "--student", str(student_id), "--amount", "450", "--month", "2023-11")
        capsys.readouterr()

        assert run_cli(data_dir, "dashboard") == 0

        out = capsys.readouterr().out
        assert "Total students:           1" in out
        assert "950.00" in out

    def test_empty_views(self, data_dir, capsys):
        """Test views render on a fresh data directory."""
        for command in ("dashboard", "students", "courses", "fees"):
            assert run_cli(data_dir, command) == 0

        out = capsys.readouterr().out
        assert "No fees recorded yet." in out
        assert "No students yet." in out
        assert "Mathematics" in out

    def test_export_fees(self, data_dir, tmp_path, capsys):
        """Test CSV export."""
        run_cli(data_dir, "add-student", "--name", "Ana", "--phone", "555-0101", "--course", "1")
        student_id = stored(data_dir, "students")[0]["id"]
        run_cli(data_dir, "add-fee", "--student", str(student_id), "--amount", "500", "--month", "2023-10")
        output = tmp_path / "fees.csv"

        assert run_cli(data_dir, "export-fees", "--output", str(output)) == 0

        lines = output.read_text(encoding="utf-8").splitlines()
        assert lines[0] == "Student,Month,Amount,Method,Date"
        assert lines[1].startswith("Ana,2023-10,500.0,Cash,")

    def test_ephemeral_writes_nothing(self, data_dir, capsys):
        """Test --ephemeral keeps data in memory only."""
        status = run_cli(
            data_dir, "--ephemeral", "add-student", "--name", "Ana", "--phone", "555-0101"
        )

        assert status == 0
        assert "Student saved" in capsys.readouterr().out
        assert not data_dir.exists()

    def test_data_dir_option_overrides_bad_configured_dir(self, data_dir, tmp_path, monkeypatch):
        """Test --data-dir skips the check on the configured data dir."""
        not_a_dir = tmp_path / "configured.txt"
        not_a_dir.write_text("x", encoding="utf-8")
        monkeypatch.setattr(config, "_data_dir", not_a_dir)

        status = run_cli(data_dir, "add-student", "--name", "Ana", "--phone", "555-0101")

        assert status == 0
        assert stored(data_dir, "students")[0]["name"] == "Ana"

    def test_bad_configured_dir_is_reported(self, tmp_path, monkeypatch, capsys):
        """Test the configured data dir is still checked without --data-dir."""
        not_a_dir = tmp_path / "configured.txt"
        not_a_dir.write_text("x", encoding="utf-8")
        monkeypatch.setattr(config, "_data_dir", not_a_dir)

        status = main(["--log-level", "ERROR", "students"])

        assert status == 1
        assert "not a directory" in capsys.readouterr().out


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
