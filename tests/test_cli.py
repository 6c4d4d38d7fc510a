"""Tests for CLI functionality."""

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from click.testing import CliRunner

from csvtasks.cli.commands import OperationHandler
from csvtasks.cli.main import cli
from csvtasks.core.exceptions import APIError, FileOperationError
from csvtasks.models.task import (
    DeleteResult,
    ImportResult,
    RowDeleteResult,
    RowFailure,
    TaskOperationResult,
    TaskRecord,
)
from csvtasks.utils.rich_utils import format_row, get_console


@pytest.fixture
def csv_file(tmp_path):
    path = tmp_path / "tasks.csv"
    path.write_text("title,notes,due\nBuy milk,,2024-01-01\n", encoding="utf-8")
    return path


class TestCLIMain:
    """Test main CLI functionality."""

    def test_cli_help(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["--help"])

        assert result.exit_code == 0
        assert "bulk create and delete tasks from CSV files" in result.output
        for command in ("doctor", "lists", "import", "delete"):
            assert command in result.output

    def test_cli_no_command(self):
        """Test CLI with no command shows help."""
        runner = CliRunner()
        result = runner.invoke(cli, [])

        assert result.exit_code == 0
        assert "bulk create and delete tasks from CSV files" in result.output

    @patch("csvtasks.cli.main.OperationHandler")
    def test_doctor_command(self, mock_handler_class):
        mock_handler = MagicMock()
        mock_handler.handle_doctor.return_value = True
        mock_handler_class.return_value = mock_handler

        runner = CliRunner()
        result = runner.invoke(cli, ["doctor", "--test-api"])

        assert result.exit_code == 0
        mock_handler.handle_doctor.assert_called_once_with(True)

    @patch("csvtasks.cli.main.OperationHandler")
    def test_doctor_failure_exit_code(self, mock_handler_class):
        mock_handler = MagicMock()
        mock_handler.handle_doctor.return_value = False
        mock_handler_class.return_value = mock_handler

        result = CliRunner().invoke(cli, ["doctor"])

        assert result.exit_code == 1
        mock_handler.handle_doctor.assert_called_once_with(False)

    @patch("csvtasks.cli.main.OperationHandler")
    def test_lists_api_error(self, mock_handler_class):
        mock_handler = MagicMock()
        mock_handler.handle_list_tasklists.side_effect = APIError(
            "GET request returned an error", status_code=401
        )
        mock_handler_class.return_value = mock_handler

        result = CliRunner().invoke(cli, ["lists"])

        assert result.exit_code == 1
        assert "Error: GET request returned an error | Status: 401" in result.output


class TestImportCommand:
    """Test import command."""

    @patch("csvtasks.cli.main.OperationHandler")
    def test_import(self, mock_handler_class, csv_file):
        mock_handler = MagicMock()
        mock_handler.handle_import.return_value = ImportResult(
            tasklist_id="list-1", created=1, ids=["t1"]
        )
        mock_handler_class.return_value = mock_handler

        result = CliRunner().invoke(cli, ["import", str(csv_file), "--list", "list-1"])

        assert result.exit_code == 0
        mock_handler.handle_import.assert_called_once_with(Path(csv_file), "list-1")

    @patch("csvtasks.cli.main.OperationHandler")
    def test_import_with_failures_exits_nonzero(self, mock_handler_class, csv_file):
        mock_handler = MagicMock()
        mock_handler.handle_import.return_value = ImportResult(
            tasklist_id="@default",
            failures=[RowFailure(row=["Buy milk"], error="boom")],
        )
        mock_handler_class.return_value = mock_handler

        result = CliRunner().invoke(cli, ["import", str(csv_file)])

        assert result.exit_code == 1
        mock_handler.handle_import.assert_called_once_with(Path(csv_file), None)

    def test_import_missing_file(self, tmp_path):
        result = CliRunner().invoke(cli, ["import", str(tmp_path / "missing.csv")])

        assert result.exit_code == 2


class TestDeleteCommand:
    """Test delete command."""

    @patch("csvtasks.cli.main.OperationHandler")
    def test_delete_requires_confirmation(self, mock_handler_class, csv_file):
        mock_handler = MagicMock()
        mock_handler_class.return_value = mock_handler

        result = CliRunner().invoke(cli, ["delete", str(csv_file)], input="n\n")

        assert result.exit_code == 1
        mock_handler.handle_delete.assert_not_called()

    @patch("csvtasks.cli.main.OperationHandler")
    def test_delete_confirmed(self, mock_handler_class, csv_file):
        mock_handler = MagicMock()
        mock_handler.handle_delete.return_value = DeleteResult(tasklist_id="@default")
        mock_handler_class.return_value = mock_handler

        result = CliRunner().invoke(cli, ["delete", str(csv_file)], input="y\n")

        assert result.exit_code == 0
        mock_handler.handle_delete.assert_called_once_with(Path(csv_file), None)

    @patch("csvtasks.cli.main.OperationHandler")
    def test_delete_yes_skips_prompt(self, mock_handler_class, csv_file):
        mock_handler = MagicMock()
        mock_handler.handle_delete.return_value = DeleteResult(tasklist_id="list-1")
        mock_handler_class.return_value = mock_handler

        result = CliRunner().invoke(
            cli, ["delete", str(csv_file), "--list", "list-1", "--yes"]
        )

        assert result.exit_code == 0
        assert "Continue?" not in result.output
        mock_handler.handle_delete.assert_called_once_with(Path(csv_file), "list-1")

    @patch("csvtasks.cli.main.OperationHandler")
    def test_delete_failures_exit_nonzero(self, mock_handler_class, csv_file):
        row_result = RowDeleteResult(row=["Buy milk"])
        row_result.add_result(
            TaskOperationResult(
                task_id="t1", operation="delete", success=False, error_message="500"
            )
        )
        delete_result = DeleteResult(tasklist_id="@default")
        delete_result.add_row(row_result)
        mock_handler = MagicMock()
        mock_handler.handle_delete.return_value = delete_result
        mock_handler_class.return_value = mock_handler

        result = CliRunner().invoke(cli, ["delete", str(csv_file), "--yes"])

        assert result.exit_code == 1

    @patch("csvtasks.cli.main.OperationHandler")
    def test_dry_run_never_deletes(self, mock_handler_class, csv_file):
        mock_handler = MagicMock()
        mock_handler_class.return_value = mock_handler

        result = CliRunner().invoke(cli, ["delete", str(csv_file), "--dry-run"])

        assert result.exit_code == 0
        mock_handler.handle_preview_delete.assert_called_once_with(
            Path(csv_file), None
        )
        mock_handler.handle_delete.assert_not_called()

    @patch("csvtasks.cli.main.OperationHandler")
    def test_delete_read_error(self, mock_handler_class, csv_file):
        mock_handler = MagicMock()
        mock_handler.handle_delete.side_effect = FileOperationError(
            "Permission denied", file_path=str(csv_file), operation="read"
        )
        mock_handler_class.return_value = mock_handler

        result = CliRunner().invoke(cli, ["delete", str(csv_file), "--yes"])

        assert result.exit_code == 1
        assert "Permission denied" in result.output


class TestOperationHandler:
    """Test OperationHandler against an in-memory service."""

    def test_import_and_delete_round_trip(self, fake_service, csv_file):
        handler = OperationHandler(client=fake_service)

        imported = handler.handle_import(csv_file, "@default")
        preview = handler.handle_preview_delete(csv_file, "@default")
        deleted = handler.handle_delete(csv_file, "@default")

        assert imported.created == 1
        assert preview.match_count == 1
        assert deleted.deleted == 1
        assert fake_service.tasks == []

    def test_tasklist_from_config(self, fake_service, csv_file, tasks_env, monkeypatch):
        monkeypatch.setenv("CSVTASKS_DEFAULT_TASKLIST", "configured")
        handler = OperationHandler(client=fake_service)

        result = handler.handle_import(csv_file, None)

        assert result.tasklist_id == "configured"

    def test_list_tasklists(self, fake_service):
        fake_service.task_lists.append({"id": "l2", "title": "Work"})
        handler = OperationHandler(client=fake_service)

        handler.handle_list_tasklists()

    def test_preview_shows_dry_run_banner(self, make_service, csv_file):
        service = make_service(
            [TaskRecord(id="t1", title="Buy milk", due="2024-01-01T00:00:00.000Z")]
        )
        handler = OperationHandler(client=service)

        with handler.console.capture() as capture:
            handler.handle_preview_delete(csv_file, "@default")

        output = capture.get()
        assert "DRY RUN" in output
        assert "t1" in output
        assert service.deleted == []

    @patch("csvtasks.cli.commands.doctor")
    def test_handle_doctor(self, mock_doctor):
        mock_doctor.return_value = {
            "success": False,
            "token_found": False,
            "api_tested": False,
            "error": "Missing GOOGLE_TASKS_ACCESS_TOKEN environment variable",
            "details": "Configuration is invalid",
        }
        handler = OperationHandler(client=MagicMock())

        assert handler.handle_doctor(False) is False
        mock_doctor.assert_called_once_with(test_api=False)


class TestMarkupInTaskText:
    """Test titles that look like console markup are shown literally."""

    CSV_TEXT = "title,notes,due\nFix [/b] parser,,\n[WIP] Ship it,,\n"

    @pytest.fixture
    def bracket_csv(self, tmp_path):
        path = tmp_path / "brackets.csv"
        path.write_text(self.CSV_TEXT, encoding="utf-8")
        return path

    @pytest.fixture
    def service(self, make_service):
        service = make_service(
            [
                TaskRecord(id="1", title="Fix [/b] parser"),
                TaskRecord(id="2", title="[WIP] Ship it"),
            ]
        )
        with patch("csvtasks.cli.commands.get_tasks_client", return_value=service):
            yield service

    def test_delete(self, service, bracket_csv):
        result = CliRunner().invoke(
            cli, ["delete", str(bracket_csv), "--list", "@default", "--yes"]
        )

        assert result.exit_code == 0, result.output
        assert service.deleted == ["1", "2"]
        assert "Fix [/b] parser" in result.output
        assert "[WIP] Ship it" in result.output

    def test_delete_with_failure_reports_exit_code(self, service, bracket_csv):
        service.fail_delete_ids = {"2"}

        result = CliRunner().invoke(
            cli, ["delete", str(bracket_csv), "--list", "@default", "--yes"]
        )

        assert result.exit_code == 1
        assert isinstance(result.exception, SystemExit)
        assert service.deleted == ["1"]
        assert "1 deletions failed" in result.output

    def test_dry_run(self, service, bracket_csv):
        result = CliRunner().invoke(
            cli, ["delete", str(bracket_csv), "--list", "@default", "--dry-run"]
        )

        assert result.exit_code == 0, result.output
        assert service.deleted == []
        assert "[WIP] Ship it" in result.output

    def test_import_with_failure(self, service, bracket_csv):
        service.fail_create_titles = {"Fix [/b] parser"}

        result = CliRunner().invoke(
            cli, ["import", str(bracket_csv), "--list", "[work]"]
        )

        assert result.exit_code == 1
        assert isinstance(result.exception, SystemExit)
        assert "Fix [/b] parser" in result.output
        assert "in [work]" in result.output
        assert service.created == [{"title": "[WIP] Ship it"}]


def test_format_row_escapes_markup():
    console = get_console()
    with console.capture() as capture:
        console.print(format_row(["Fix [/b] parser", "[bold]notes"]))

    assert capture.get().strip() == "Fix [/b] parser, [bold]notes"
