"""Tests for console UI wrapper."""

from unittest.mock import patch

from rich.console import Console
from rich.table import Table

from autoorganize.models import FileSortingStatus, OrganizationResult
from autoorganize.ui.console import ConsoleUI


class TestConsoleUI:
    """Tests for ConsoleUI class."""

    def test_initialization(self):
        """ConsoleUI initializes with Rich Console."""
        ui = ConsoleUI()
        assert ui.console is not None

    def test_print_delegates_to_console(self):
        """print() delegates to Rich Console."""
        ui = ConsoleUI()
        with patch.object(ui.console, 'print') as mock_print:
            ui.print("test message")
            mock_print.assert_called_once_with("test message")

    def test_rule_delegates_to_console(self):
        ui = ConsoleUI()
        with patch.object(ui.console, 'rule') as mock_rule:
            ui.rule("Summary")
            mock_rule.assert_called_once_with("Summary")

    def test_styled_messages(self):
        """Styled helpers print the message once each."""
        ui = ConsoleUI()
        with patch.object(ui.console, 'print') as mock_print:
            ui.print_info("info")
            ui.print_warning("warning")
            ui.print_error("error")

        printed = [call.args[0] for call in mock_print.call_args_list]
        assert len(printed) == 3
        assert "[blue]" in printed[0] and "info" in printed[0]
        assert "[yellow]" in printed[1] and "warning" in printed[1]
        assert "[red]" in printed[2] and "error" in printed[2]

    def test_create_table(self):
        ui = ConsoleUI()
        table = ui.create_table("Results", ["File", "Status"])
        assert isinstance(table, Table)
        assert table.title == "Results"
        assert [c.header for c in table.columns] == ["File", "Status"]

    def test_create_table_without_columns(self):
        assert ConsoleUI().create_table("Empty").columns == []


class TestPrintOutcome:
    """Tests for ConsoleUI.print_outcome."""

    @staticmethod
    def recorded(result):
        ui = ConsoleUI(Console(record=True, width=200, color_system=None))
        ui.print_outcome(result)
        return ui.console.export_text()

    def test_success_shows_target(self):
        result = OrganizationResult(original_path="/in/a.mkv", original_file_name="a.mkv")
        result.target_path = "/lib/Show [tmdbid-1]/a.mkv"
        result.mark(FileSortingStatus.SUCCESS)

        text = self.recorded(result)

        assert "✓ a.mkv" in text
        assert "/lib/Show [tmdbid-1]/a.mkv" in text

    def test_failure_shows_message(self):
        result = OrganizationResult(original_path="/in/a.mkv", original_file_name="a.mkv")
        result.mark(FileSortingStatus.FAILURE, "Unable to find series")

        assert "Unable to find series" in self.recorded(result)

    def test_pending(self):
        result = OrganizationResult(original_path="/in/a.mkv", original_file_name="a.mkv")
        assert "pending" in self.recorded(result)
